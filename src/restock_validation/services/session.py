"""Session orchestration: ties navigation, merging and collaborators together."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Protocol

from restock_validation.domain.identity import Promoter
from restock_validation.domain.sections import SLOT_KEYS, Lot, SectionKey
from restock_validation.domain.session import SessionState, UserMetadata
from restock_validation.domain.steps import Step
from restock_validation.services import sections, steps
from restock_validation.services.ocr import LabelReader
from restock_validation.services.scheduler import ScheduledTask, Scheduler

logger = logging.getLogger(__name__)

DEFAULT_RESET_DELAY_SECONDS = 3.0


class IdentityRepository(Protocol):
    """Lookup interface for the promoter directory."""

    def get_promoter(self, token: str) -> Promoter | None:
        """Return the promoter for a login token, if present."""


class ValidationRepository(Protocol):
    """Persistence interface for validation records."""

    def create_validation(self, user_id: str) -> str | None:
        """Allocate a validation record and return its id."""


class SubmissionRepository(Protocol):
    """Persistence interface for the final aggregated record."""

    def submit(self, user_id: str, submission_id: str, session: SessionState) -> None:
        """Persist the session's collected data; raises on failure."""


@dataclass(frozen=True)
class Notification:
    """User-facing message for a recoverable failure."""

    title: str
    description: str
    variant: str = "destructive"

    def to_dict(self) -> dict[str, str]:
        return {
            "title": self.title,
            "description": self.description,
            "variant": self.variant,
        }


@dataclass
class InspectionSessionService:
    """Owns the current session snapshot for a single worker."""

    identity_repository: IdentityRepository
    validation_repository: ValidationRepository
    submission_repository: SubmissionRepository
    scheduler: Scheduler
    label_reader: LabelReader | None = None
    reset_delay_seconds: float = DEFAULT_RESET_DELAY_SECONDS
    debug_errors: bool = False
    _session: SessionState = field(default_factory=SessionState.initial, init=False)
    _pending_reset: ScheduledTask | None = field(default=None, init=False)

    @property
    def session(self) -> SessionState:
        """Return the current snapshot."""
        return self._session

    def login(
        self, token: str, user_metadata: UserMetadata | None = None
    ) -> Notification | None:
        """Confirm a login token against the directory and move to store selection."""
        if self._session.current_step != Step.LOGIN:
            return Notification("Login error", "A session is already in progress.")
        token = token.strip()
        if not token:
            return Notification("Login error", "Enter your promoter ID.")
        try:
            promoter = self.identity_repository.get_promoter(token)
        except Exception as exc:
            logger.exception("Identity lookup failed", extra={"token": token})
            return self._failure("Login error", "Unexpected error while logging in.", exc)
        if promoter is None:
            return Notification(
                "Login error", "User not found in the promoter directory."
            )

        logged_in = replace(
            self._session,
            user_id=promoter.id,
            username=token,
            user_metadata=user_metadata,
        )
        self._session = steps.advance(logged_in, Step.LOGIN)
        logger.info("Promoter logged in", extra={"user_id": promoter.id})
        return None

    def select_store(self, city: str, store: str) -> Notification | None:
        """Create the validation record and start the first section."""
        if self._session.current_step != Step.STORE_SELECTION:
            return Notification("Error", "Store selection is not available now.")
        user_id = self._session.user_id
        if not user_id:
            return Notification("Error", "User ID not found.")
        try:
            submission_id = self.validation_repository.create_validation(user_id)
        except Exception as exc:
            logger.exception(
                "Validation record creation failed", extra={"user_id": user_id}
            )
            return self._failure("Error", "Failed to create validation record.", exc)
        if not submission_id:
            return Notification("Error", "Failed to create validation record.")

        selected = replace(
            self._session, city=city, store=store, submission_id=submission_id
        )
        self._session = steps.advance(selected, Step.STORE_SELECTION)
        logger.info(
            "Validation record created",
            extra={"user_id": user_id, "submission_id": submission_id},
        )
        return None

    def complete_validation(self, incoming: Mapping[str, object]) -> None:
        """Merge the current section's submission and move to the next step."""
        slot = steps.addressable_slot(self._session)
        if slot is None:
            return
        submission = {"section_key": SLOT_KEYS[slot].value, **incoming}
        merged = sections.merge_section(self._session, slot, submission)
        self._session = steps.advance(merged, merged.current_step)

    def go_back(self) -> None:
        self._session = steps.go_back(self._session)

    def change_lot(
        self, key: str | SectionKey, lot_id: str, fields: Mapping[str, object]
    ) -> None:
        self._session = sections.upsert_lot(self._session, key, lot_id, fields)

    def remove_lot(self, key: str | SectionKey, lot_id: str) -> None:
        self._session = sections.remove_lot(self._session, key, lot_id)

    def change_observation(self, key: str | SectionKey, observation: str) -> None:
        self._session = sections.set_observation(self._session, key, observation)

    def change_final_photo(self, key: str | SectionKey, photo: str | None) -> None:
        self._session = sections.set_final_photo(self._session, key, photo)

    def change_skipped(self, key: str | SectionKey, skipped: bool) -> None:
        self._session = sections.set_skipped(self._session, key, skipped)

    async def read_lot_label(
        self, key: str | SectionKey, lot_id: str
    ) -> Notification | None:
        """Fill a lot's expiry date and lot code from its photo."""
        before = self._session
        lot = _find_lot(before, key, lot_id)
        if lot is None or not lot.photo:
            return Notification("Label reading", "Take a photo of the lot first.")
        if self.label_reader is None:
            return Notification("Label reading", "Label reading is not configured.")
        try:
            extract = await self.label_reader.read(lot.photo)
        except Exception as exc:
            logger.exception(
                "Label reading failed", extra={"section": key, "lot_id": lot_id}
            )
            return self._failure(
                "Label reading", "Couldn't read the label. Fill it in manually.", exc
            )
        fields = {
            name: value
            for name, value in extract.model_dump().items()
            if value is not None
        }
        if not fields:
            return Notification(
                "Label reading", "No date or lot code found. Fill it in manually."
            )

        # The session may have moved on while the label was being read.
        current = _find_lot(self._session, key, lot_id)
        if (
            current is None
            or current.photo != lot.photo
            or self._session.user_id != before.user_id
            or self._session.submission_id != before.submission_id
        ):
            logger.info(
                "Discarding stale label reading",
                extra={"section": key, "lot_id": lot_id},
            )
            return Notification(
                "Label reading", "The lot changed while reading its label."
            )
        self._session = sections.upsert_lot(self._session, key, lot_id, fields)
        return None

    def finish(self) -> Notification | None:
        """Submit the collected data, complete the run and schedule the reset."""
        current = self._session
        if current.current_step != Step.CHECKOUT:
            return Notification("Error", "Checkout is not available now.")
        if not current.user_id or not current.submission_id:
            return Notification("Error", "Validation record not found.")
        try:
            self.submission_repository.submit(
                current.user_id, current.submission_id, current
            )
        except Exception as exc:
            logger.exception(
                "Submission failed",
                extra={"submission_id": current.submission_id},
            )
            return self._failure("Error", "Failed to submit the validation.", exc)

        self._session = steps.advance(current, Step.CHECKOUT)
        self._cancel_pending_reset()
        self._pending_reset = self.scheduler.call_later(
            self.reset_delay_seconds, self._reset_if_completed
        )
        logger.info(
            "Validation submitted", extra={"submission_id": current.submission_id}
        )
        return None

    def reset(self) -> None:
        """Drop the session now, cancelling a scheduled reset if one is pending."""
        self._cancel_pending_reset()
        self._session = steps.reset(self._session)

    def _reset_if_completed(self) -> None:
        self._pending_reset = None
        if self._session.current_step != Step.COMPLETED:
            return
        self._session = steps.reset(self._session)

    def _cancel_pending_reset(self) -> None:
        if self._pending_reset is not None:
            self._pending_reset.cancel()
            self._pending_reset = None

    def _failure(self, title: str, description: str, exc: Exception) -> Notification:
        """Build a failure notification, with debug detail when enabled."""
        if self.debug_errors:
            detail = f"{type(exc).__name__}: {exc}".strip()
            if detail:
                description = f"{description} (debug: {detail})"
        return Notification(title, description)


def _find_lot(session: SessionState, key: str | SectionKey, lot_id: str) -> Lot | None:
    slot = sections.map_section_key(key)
    record = session.section(slot) if slot else None
    return record.get_lot(lot_id) if record else None
