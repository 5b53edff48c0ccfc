"""Step controller for the inspection workflow."""

import logging

from restock_validation.domain.sections import SectionSlot
from restock_validation.domain.session import SessionState
from restock_validation.domain.steps import (
    NEXT_STEP,
    PREVIOUS_STEP,
    VALIDATION_STEPS,
    Step,
)

logger = logging.getLogger(__name__)


def advance(session: SessionState, from_step: Step) -> SessionState:
    """Move to the successor of ``from_step`` if it is the current step."""
    if from_step != session.current_step:
        logger.debug(
            "Ignoring advance from stale step",
            extra={"from_step": from_step, "current_step": session.current_step},
        )
        return session
    next_step = NEXT_STEP.get(from_step)
    if next_step is None:
        return session
    logger.debug("Advancing step", extra={"from_step": from_step, "to": next_step})
    return session.with_step(next_step)


def go_back(session: SessionState) -> SessionState:
    """Move one step backward; a no-op where no predecessor exists."""
    previous = PREVIOUS_STEP.get(session.current_step)
    if previous is None:
        return session
    logger.debug(
        "Going back", extra={"from_step": session.current_step, "to": previous}
    )
    return session.with_step(previous)


def reset(session: SessionState) -> SessionState:
    """Return the initial session, dropping every collected field."""
    logger.debug("Resetting session", extra={"from_step": session.current_step})
    return SessionState.initial()


def addressable_slot(session: SessionState) -> SectionSlot | None:
    """Return the section slot the current step is collecting, if any."""
    return VALIDATION_STEPS.get(session.current_step)
