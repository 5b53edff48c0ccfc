"""Merge engine for validation section records.

Every function here is pure: it takes a snapshot and returns a new one, or the
same snapshot when the request addresses nothing. Nothing in this module
raises for an unknown section key or a missing lot.
"""

from collections.abc import Iterable, Mapping
from dataclasses import replace

from restock_validation.domain.sections import (
    SECTION_SLOTS,
    Lot,
    SectionKey,
    SectionRecord,
    SectionSlot,
    normalize_lot_fields,
)
from restock_validation.domain.session import SessionState


def map_section_key(key: str | SectionKey) -> SectionSlot | None:
    """Return the slot for a UI section key, or None for unknown keys."""
    try:
        section_key = SectionKey(key)
    except ValueError:
        return None
    return SECTION_SLOTS[section_key]


def merge_lots(
    previous: Iterable[Lot], incoming: Iterable[Mapping[str, object]]
) -> tuple[Lot, ...]:
    """Upsert incoming partial lots onto previous ones by id.

    Known lots keep their positions; lots seen for the first time are appended
    in incoming order. An incoming entry with nothing but its id is dropped.
    """
    merged: dict[str, Lot] = {lot.id: lot for lot in previous}
    for raw in incoming:
        lot_id = raw.get("id")
        if lot_id is None or lot_id == "":
            continue
        updates = {
            name: value
            for name, value in normalize_lot_fields(raw).items()
            if _has_value(value)
        }
        if not updates:
            continue
        lot_id = str(lot_id)
        current = merged.get(lot_id) or Lot(id=lot_id)
        merged[lot_id] = replace(current, **updates)
    return tuple(merged.values())


def merge_section(
    session: SessionState, slot: SectionSlot, incoming: Mapping[str, object]
) -> SessionState:
    """Merge a full section submission into a slot.

    Only keys present in ``incoming`` are applied; ``final_photo`` and
    ``observation`` keep whatever the last setter stored unless supplied here.
    """
    record = session.section(slot) or SectionRecord()
    changes: dict[str, object] = {}

    lots = incoming.get("lots")
    if isinstance(lots, list | tuple):
        changes["lots"] = merge_lots(record.lots, lots)

    skipped = incoming.get("skipped")
    if skipped is not None:
        changes["skipped"] = bool(skipped)

    if "final_photo" in incoming:
        changes["final_photo"] = incoming["final_photo"]
    if "observation" in incoming:
        changes["observation"] = incoming["observation"]

    raw_key = incoming.get("section_key")
    if isinstance(raw_key, str) and map_section_key(raw_key) is not None:
        changes["section_key"] = SectionKey(raw_key)

    return session.with_section(slot, replace(record, **changes))


def upsert_lot(
    session: SessionState,
    key: str | SectionKey,
    lot_id: str,
    fields: Mapping[str, object],
) -> SessionState:
    """Shallow-merge fields onto one lot, appending it when new.

    Unlike :func:`merge_lots`, explicit ``None`` values overwrite.
    """
    slot = map_section_key(key)
    if slot is None:
        return session
    record = _record_for(session, slot, key)
    updates = normalize_lot_fields(fields)
    existing = record.get_lot(lot_id)
    if existing is not None:
        lots = tuple(
            replace(lot, **updates) if lot.id == lot_id else lot for lot in record.lots
        )
    else:
        seeded = {"photo": None, "quantity": "", **updates}
        lots = (*record.lots, Lot(id=lot_id, **seeded))  # type: ignore[arg-type]
    return session.with_section(slot, replace(record, lots=lots))


def remove_lot(
    session: SessionState, key: str | SectionKey, lot_id: str
) -> SessionState:
    """Drop a lot from a section when present."""
    slot = map_section_key(key)
    if slot is None:
        return session
    record = session.section(slot)
    if record is None or record.get_lot(lot_id) is None:
        return session
    lots = tuple(lot for lot in record.lots if lot.id != lot_id)
    return session.with_section(slot, replace(record, lots=lots))


def set_observation(
    session: SessionState, key: str | SectionKey, observation: str | None
) -> SessionState:
    """Store the free-text observation for a section."""
    return _set_field(session, key, observation=observation)


def set_final_photo(
    session: SessionState, key: str | SectionKey, photo: str | None
) -> SessionState:
    """Store or clear the final photo for a section."""
    return _set_field(session, key, final_photo=photo)


def set_skipped(
    session: SessionState, key: str | SectionKey, skipped: bool
) -> SessionState:
    """Mark a section as skipped or not."""
    return _set_field(session, key, skipped=skipped)


def _set_field(
    session: SessionState, key: str | SectionKey, **changes: object
) -> SessionState:
    slot = map_section_key(key)
    if slot is None:
        return session
    record = _record_for(session, slot, key)
    return session.with_section(slot, replace(record, **changes))


def _record_for(
    session: SessionState, slot: SectionSlot, key: str | SectionKey
) -> SectionRecord:
    """Return the slot's record, creating a default one on first write."""
    record = session.section(slot)
    if record is None:
        return SectionRecord(section_key=SectionKey(key))
    if record.section_key is None:
        return replace(record, section_key=SectionKey(key))
    return record


def _has_value(value: object) -> bool:
    return value is not None and value != "" and value is not False
