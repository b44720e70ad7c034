"""Local filesystem media store with path validation and atomic writes.

Development backend. Locators mimic the remote store's shape
(<base_url>/upload/v<version>/<identifier>.<ext>) so the identifier
extractor works unchanged against either backend.
"""

from __future__ import annotations

import glob
import os
import tempfile
import time
from pathlib import Path

import aiofiles
import aiofiles.os

from app.application.dtos.media import UploadResult
from app.domain.exceptions import StoreDeleteError, StoreUploadError
from app.infrastructure.exceptions import MediaStorePermissionError
from app.shared.utils.generators import generate_cuid

_EXTENSIONS = {
    "image/webp": "webp",
    "image/png": "png",
    "image/jpeg": "jpg",
}


class LocalMediaStore:
    """Media files under media_root with atomic writes and path traversal protection.

    Paths are validated against media_root. Writes use temp file + rename.
    """

    def __init__(
        self,
        media_root: str,
        base_url: str,
        folder: str | None = None,
    ) -> None:
        """Initialize local store.

        Args:
            media_root: Base directory for all files.
            base_url: Public URL prefix the files are served under.
            folder: Optional sub-folder prepended to new identifiers.
        """
        self.media_root = Path(media_root).resolve()
        self.base_url = base_url.rstrip("/")
        self.folder = folder.strip("/") if folder else None
        self.media_root.mkdir(parents=True, exist_ok=True, mode=0o750)

    def _get_full_path(self, identifier: str, operation: str) -> Path:
        """Resolve and validate path under media_root.

        Raises MediaStorePermissionError on traversal or an identifier the
        filesystem cannot represent (e.g. an embedded NUL byte).
        """
        try:
            full_path = (self.media_root / identifier).resolve()
            full_path.relative_to(self.media_root)
        except ValueError as e:
            raise MediaStorePermissionError(identifier, operation) from e
        if full_path == self.media_root:
            raise MediaStorePermissionError(identifier, operation)
        return full_path

    def _new_identifier(self) -> str:
        name = generate_cuid()
        return f"{self.folder}/{name}" if self.folder else name

    async def upload(
        self,
        data: bytes,
        content_type: str,
        filename: str | None = None,
    ) -> UploadResult:
        """Write bytes atomically under a fresh identifier."""
        identifier = self._new_identifier()
        ext = _EXTENSIONS.get(content_type, "bin")
        base = self._get_full_path(identifier, "upload")
        target_path = base.with_name(f"{base.name}.{ext}")
        try:
            target_path.parent.mkdir(parents=True, exist_ok=True, mode=0o750)
            fd, temp_path = tempfile.mkstemp(
                dir=target_path.parent, prefix=".tmp_", suffix=f".{ext}"
            )
            os.close(fd)
            try:
                async with aiofiles.open(temp_path, "wb") as f:
                    await f.write(data)
                os.chmod(temp_path, 0o640)
                os.replace(temp_path, target_path)
            finally:
                if Path(temp_path).exists():
                    os.unlink(temp_path)
        except OSError as e:
            raise StoreUploadError(str(e)) from e
        version = int(time.time())
        locator = f"{self.base_url}/upload/v{version}/{identifier}.{ext}"
        return UploadResult(locator=locator, identifier=identifier)

    async def delete(self, identifier: str) -> None:
        """Delete every file stored under identifier (any extension). Missing is success."""
        base = self._get_full_path(identifier, "delete")
        try:
            for path in base.parent.glob(f"{glob.escape(base.name)}.*"):
                await aiofiles.os.remove(path)
            parent = base.parent
            while parent != self.media_root and parent.exists():
                if any(parent.iterdir()):
                    break
                parent.rmdir()
                parent = parent.parent
        except OSError as e:
            raise StoreDeleteError(identifier, str(e)) from e

    def path_for(self, identifier: str) -> Path | None:
        """Return the stored file for identifier, or None."""
        base = self._get_full_path(identifier, "read")
        return next(iter(sorted(base.parent.glob(f"{glob.escape(base.name)}.*"))), None)
