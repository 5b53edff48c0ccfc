"""Session snapshot for an inspection run."""

from dataclasses import dataclass, replace

from restock_validation.domain.sections import SectionRecord, SectionSlot
from restock_validation.domain.steps import Step


@dataclass(frozen=True)
class UserMetadata:
    """Display metadata captured at login for the store picker."""

    name: str | None = None
    region: str | None = None
    stores: str | None = None

    def to_dict(self) -> dict[str, object]:
        return {"name": self.name, "region": self.region, "stores": self.stores}


@dataclass(frozen=True)
class SessionState:
    """Immutable snapshot of one worker's session.

    Every mutation produces a new snapshot, so a reader holding an older one
    keeps a consistent view.
    """

    current_step: Step = Step.LOGIN
    user_id: str | None = None
    submission_id: str | None = None
    username: str = ""
    city: str = ""
    store: str = ""
    user_metadata: UserMetadata | None = None
    validation1: SectionRecord | None = None
    validation2: SectionRecord | None = None
    validation3: SectionRecord | None = None

    @classmethod
    def initial(cls) -> "SessionState":
        """Return the empty session a new worker starts from."""
        return cls()

    def section(self, slot: SectionSlot) -> SectionRecord | None:
        """Return the record stored in a slot, if any."""
        return getattr(self, slot.value)

    def with_section(self, slot: SectionSlot, record: SectionRecord) -> "SessionState":
        """Return a copy with one slot replaced."""
        return replace(self, **{slot.value: record})

    def with_step(self, step: Step) -> "SessionState":
        return replace(self, current_step=step)

    def to_dict(self) -> dict[str, object]:
        """Serialize the snapshot for the API and the submission collaborator."""
        sections: dict[str, object] = {}
        for slot in SectionSlot:
            record = self.section(slot)
            sections[slot.value] = record.to_dict() if record else None
        return {
            "current_step": self.current_step.value,
            "user_id": self.user_id,
            "submission_id": self.submission_id,
            "username": self.username,
            "city": self.city,
            "store": self.store,
            "user_metadata": (
                self.user_metadata.to_dict() if self.user_metadata else None
            ),
            **sections,
        }
