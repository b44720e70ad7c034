"""Media store port (DIP). Implementations: CloudinaryMediaStore, LocalMediaStore."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.application.dtos.media import UploadResult


class IMediaStore(Protocol):
    """Protocol for the remote blob store holding record photos.

    Each call is a single outbound request with no implicit retry.
    """

    async def upload(
        self,
        data: bytes,
        content_type: str,
        filename: str | None = None,
    ) -> UploadResult:
        """Upload an encoded image and return its public locator and store identifier.

        Raises StoreUploadError on transport failure, non-success response, or a
        success response without a locator.
        """
        ...

    async def delete(self, identifier: str) -> None:
        """Delete an image by store identifier. Not-found counts as success.

        Raises StoreDeleteError on transport failure or store-reported failure.
        """
        ...
