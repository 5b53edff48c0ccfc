"""Workflow steps for an inspection session."""

from enum import StrEnum

from restock_validation.domain.sections import SectionSlot


class Step(StrEnum):
    """Ordered steps a promoter moves through."""

    LOGIN = "login"
    STORE_SELECTION = "store-selection"
    VALIDATION_1 = "validation-1"
    VALIDATION_2 = "validation-2"
    VALIDATION_3 = "validation-3"
    CHECKOUT = "checkout"
    COMPLETED = "completed"


NEXT_STEP: dict[Step, Step] = {
    Step.LOGIN: Step.STORE_SELECTION,
    Step.STORE_SELECTION: Step.VALIDATION_1,
    Step.VALIDATION_1: Step.VALIDATION_2,
    Step.VALIDATION_2: Step.VALIDATION_3,
    Step.VALIDATION_3: Step.CHECKOUT,
    Step.CHECKOUT: Step.COMPLETED,
}

# Only validation steps and checkout can go back; the chain mirrors NEXT_STEP.
PREVIOUS_STEP: dict[Step, Step] = {
    Step.VALIDATION_1: Step.STORE_SELECTION,
    Step.VALIDATION_2: Step.VALIDATION_1,
    Step.VALIDATION_3: Step.VALIDATION_2,
    Step.CHECKOUT: Step.VALIDATION_3,
}

VALIDATION_STEPS: dict[Step, SectionSlot] = {
    Step.VALIDATION_1: SectionSlot.VALIDATION_1,
    Step.VALIDATION_2: SectionSlot.VALIDATION_2,
    Step.VALIDATION_3: SectionSlot.VALIDATION_3,
}
