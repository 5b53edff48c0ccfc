"""Domain models for promoter identity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Promoter:
    """Represents a promoter found in the user directory."""

    id: str
    name: str | None = None
