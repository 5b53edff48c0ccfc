"""Label reading for lot photos."""

import base64
from dataclasses import dataclass
from typing import Protocol

from restock_validation.domain.ocr import LabelExtract


class LabelClient(Protocol):
    """Interface for reading a label from an image."""

    async def read_label(self, image_data_url: str) -> LabelExtract:
        """Return the expiry date and lot code found in the image."""


class PhotoClient(Protocol):
    """Interface for fetching photos stored behind a URL."""

    async def download_photo_bytes(self, url: str) -> bytes:
        """Download a photo and return its bytes."""


@dataclass
class LabelReader:
    """Resolves a lot photo reference and hands it to the label client."""

    client: LabelClient
    photo_client: PhotoClient

    async def read(self, photo: str) -> LabelExtract:
        """Read a photo given as a data URL or an http(s) URL."""
        if photo.startswith("data:"):
            return await self.client.read_label(photo)
        image_bytes = await self.photo_client.download_photo_bytes(photo)
        return await self.client.read_label(_to_data_url(image_bytes))


def _to_data_url(image_bytes: bytes) -> str:
    """Convert bytes to a base64 data URL for image input."""
    mime_type = _detect_mime_type(image_bytes)
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"


def _detect_mime_type(image_bytes: bytes) -> str:
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    return "image/jpeg"
