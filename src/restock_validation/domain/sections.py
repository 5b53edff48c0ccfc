"""Domain models for validation sections and their lots."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum


class SectionKey(StrEnum):
    """Physical location categories as addressed by the UI views."""

    CAMARA_FRIA = "camaraFria"
    REFRIGERADOR_CONV = "refrigeradorConv"
    GONDOLA = "gondola"


class SectionSlot(StrEnum):
    """Session storage slots for the accumulated section records."""

    VALIDATION_1 = "validation1"
    VALIDATION_2 = "validation2"
    VALIDATION_3 = "validation3"


SECTION_SLOTS: dict[SectionKey, SectionSlot] = {
    SectionKey.CAMARA_FRIA: SectionSlot.VALIDATION_1,
    SectionKey.REFRIGERADOR_CONV: SectionSlot.VALIDATION_2,
    SectionKey.GONDOLA: SectionSlot.VALIDATION_3,
}

SLOT_KEYS: dict[SectionSlot, SectionKey] = {
    slot: key for key, slot in SECTION_SLOTS.items()
}

LOT_FIELDS = ("photo", "quantity", "expiry_date", "lot_code", "edited_manually")

_FIELD_ALIASES = {
    "expiryDate": "expiry_date",
    "lotCode": "lot_code",
    "editedManually": "edited_manually",
}


def normalize_lot_fields(raw: Mapping[str, object]) -> dict[str, object]:
    """Return known lot fields from a payload, resolving camelCase aliases."""
    fields: dict[str, object] = {}
    for key, value in raw.items():
        name = _FIELD_ALIASES.get(key, key)
        if name in LOT_FIELDS:
            fields[name] = value
    return fields


@dataclass(frozen=True)
class Lot:
    """One inspected product lot; any field may still be missing."""

    id: str
    photo: str | None = None
    quantity: str | None = None
    expiry_date: str | None = None
    lot_code: str | None = None
    edited_manually: bool = False

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "photo": self.photo,
            "quantity": self.quantity,
            "expiry_date": self.expiry_date,
            "lot_code": self.lot_code,
            "edited_manually": self.edited_manually,
        }


@dataclass(frozen=True)
class SectionRecord:
    """Accumulated data for one physical location."""

    section_key: SectionKey | None = None
    lots: tuple[Lot, ...] = field(default_factory=tuple)
    final_photo: str | None = None
    observation: str | None = None
    skipped: bool = False

    @property
    def lot_ids(self) -> list[str]:
        return [lot.id for lot in self.lots]

    def get_lot(self, lot_id: str) -> Lot | None:
        """Return the lot with the given id, if present."""
        for lot in self.lots:
            if lot.id == lot_id:
                return lot
        return None

    @property
    def is_complete(self) -> bool:
        """Skipped sections count as complete whatever their lots hold."""
        return self.skipped or bool(self.lots)

    def to_dict(self) -> dict[str, object]:
        return {
            "section_key": self.section_key.value if self.section_key else None,
            "lots": [lot.to_dict() for lot in self.lots],
            "final_photo": self.final_photo,
            "observation": self.observation,
            "skipped": self.skipped,
        }
