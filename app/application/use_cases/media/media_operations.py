"""Standalone media operations: transform-and-upload one file, delete by identifier."""

from __future__ import annotations

import asyncio
import logging

from app.application.dtos.media import IncomingFile, UploadResult
from app.application.interfaces.storage import IMediaStore
from app.application.services.image_transformer import ImageTransformer
from app.domain.exceptions import ValidationException

logger = logging.getLogger(__name__)


class MediaService:
    """Direct access to the media store, outside of any record.

    Unlike record operations, failures here are not swallowed: TransformError
    and store errors reach the caller.
    """

    def __init__(self, transformer: ImageTransformer, store: IMediaStore) -> None:
        self.transformer = transformer
        self.store = store

    async def upload(self, file: IncomingFile) -> UploadResult:
        """Transform the file and upload it. Returns locator and identifier."""
        result = await asyncio.to_thread(
            self.transformer.transform, file.data, file.filename
        )
        uploaded = await self.store.upload(result.data, result.mime_type, file.filename)
        logger.info(
            "Uploaded %s as %s (%dx%d)",
            file.filename,
            uploaded.identifier,
            result.width,
            result.height,
        )
        return uploaded

    async def delete(self, identifier: str | None) -> None:
        """Delete one asset by store identifier. Blank identifiers never reach the store."""
        if identifier is None or not identifier.strip():
            raise ValidationException("identifier is required", field="identifier")
        await self.store.delete(identifier.strip())
        logger.info("Deleted media %s", identifier)
