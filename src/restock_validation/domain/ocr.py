"""Models for label reading results."""

from pydantic import BaseModel


class LabelExtract(BaseModel):
    """Structured output read from a product lot label."""

    expiry_date: str | None = None
    lot_code: str | None = None
