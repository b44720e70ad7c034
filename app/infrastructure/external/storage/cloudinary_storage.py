"""Cloudinary media store (image resource type) over the cloudinary SDK.

The SDK is synchronous; calls run via asyncio.to_thread. Credentials are
passed per call so several stores (and tests) never share global config.
"""

from __future__ import annotations

import asyncio
import logging
from io import BytesIO
from typing import Any

import cloudinary.uploader

from app.application.dtos.media import UploadResult
from app.application.services.identifier_extractor import extract_identifier
from app.domain.exceptions import StoreDeleteError, StoreUploadError
from app.shared.telemetry.tracing import traced

logger = logging.getLogger(__name__)

# Destroy results treated as success; "not found" makes deletes idempotent.
_DELETE_OK_RESULTS = frozenset({"ok", "not found"})


class CloudinaryMediaStore:
    """IMediaStore backed by Cloudinary."""

    def __init__(
        self,
        cloud_name: str,
        api_key: str,
        api_secret: str,
        folder: str | None = None,
        timeout: float = 30.0,
    ) -> None:
        self.cloud_name = cloud_name
        self.api_key = api_key
        self._api_secret = api_secret
        self.folder = folder.strip("/") if folder else None
        self.timeout = timeout

    def _options(self, **extra: Any) -> dict[str, Any]:
        options: dict[str, Any] = {
            "cloud_name": self.cloud_name,
            "api_key": self.api_key,
            "api_secret": self._api_secret,
            "resource_type": "image",
            "timeout": self.timeout,
        }
        options.update({k: v for k, v in extra.items() if v is not None})
        return options

    @traced("media_store.upload")
    async def upload(
        self,
        data: bytes,
        content_type: str,
        filename: str | None = None,
    ) -> UploadResult:
        """Upload encoded image bytes. Returns secure_url and public_id.

        Raises StoreUploadError on SDK/transport failure or a response
        without a locator.
        """
        options = self._options(folder=self.folder)

        def _upload() -> Any:
            return cloudinary.uploader.upload(BytesIO(data), **options)

        try:
            body = await asyncio.to_thread(_upload)
        except Exception as e:
            raise StoreUploadError(str(e) or type(e).__name__) from e
        locator = body.get("secure_url") if isinstance(body, dict) else None
        if not locator:
            raise StoreUploadError("response carried no secure_url")
        identifier = body.get("public_id") or extract_identifier(locator)
        if not identifier:
            raise StoreUploadError(f"no identifier for {locator}")
        logger.debug("Uploaded %s (%s) to Cloudinary as %s", filename, content_type, identifier)
        return UploadResult(locator=locator, identifier=identifier)

    @traced("media_store.delete")
    async def delete(self, identifier: str) -> None:
        """Destroy one asset. "ok" and "not found" both count as success."""
        options = self._options(invalidate=True)

        def _destroy() -> Any:
            return cloudinary.uploader.destroy(identifier, **options)

        try:
            body = await asyncio.to_thread(_destroy)
        except Exception as e:
            raise StoreDeleteError(identifier, str(e) or type(e).__name__) from e
        result = body.get("result") if isinstance(body, dict) else None
        if result not in _DELETE_OK_RESULTS:
            raise StoreDeleteError(identifier, f"result={result}")
        logger.debug("Deleted %s from Cloudinary (%s)", identifier, result)
