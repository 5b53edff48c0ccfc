"""Photo download client for lot photos stored behind a URL."""

from dataclasses import dataclass

import httpx

from restock_validation.services.ocr import PhotoClient


@dataclass
class HttpxPhotoClient(PhotoClient):
    """Photo client using httpx."""

    http_client: httpx.AsyncClient

    @classmethod
    def create(cls) -> "HttpxPhotoClient":
        """Create a photo client with a managed httpx session."""
        return cls(http_client=httpx.AsyncClient())

    async def download_photo_bytes(self, url: str) -> bytes:
        """Download the photo at ``url``."""
        response = await self.http_client.get(url, timeout=20, follow_redirects=True)
        response.raise_for_status()
        return response.content

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
