"""Pydantic models for session API payloads."""

from pydantic import BaseModel


class UserMetadataPayload(BaseModel):
    """Display metadata sent with a login."""

    name: str | None = None
    region: str | None = None
    stores: str | None = None


class LoginRequest(BaseModel):
    """Login payload."""

    token: str
    metadata: UserMetadataPayload | None = None


class StoreSelectionRequest(BaseModel):
    """Store selection payload."""

    city: str
    store: str


class LotFields(BaseModel):
    """Partial lot fields; only fields actually sent are applied."""

    photo: str | None = None
    quantity: str | None = None
    expiry_date: str | None = None
    lot_code: str | None = None
    edited_manually: bool | None = None


class LotPayload(LotFields):
    """Lot entry inside a section submission."""

    id: str


class ValidationSubmission(BaseModel):
    """Full submission for the current validation section."""

    lots: list[LotPayload] | None = None
    skipped: bool | None = None
    final_photo: str | None = None
    observation: str | None = None


class ObservationRequest(BaseModel):
    observation: str


class FinalPhotoRequest(BaseModel):
    photo: str | None = None


class SkipRequest(BaseModel):
    skipped: bool
