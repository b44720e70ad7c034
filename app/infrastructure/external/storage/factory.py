"""Media store factory: creates the Cloudinary or local backend from settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.application.interfaces.storage import IMediaStore

if TYPE_CHECKING:
    from app.core.config import Settings


class StorageFactory:
    """Factory for media store instances based on configuration."""

    @staticmethod
    def create_media_store(settings: "Settings | None" = None) -> IMediaStore:
        """Create media store from settings.

        Args:
            settings: Application settings; if None, uses get_settings().

        Returns:
            CloudinaryMediaStore or LocalMediaStore.

        Raises:
            ValueError: Unknown backend or missing required config.
        """
        from app.core.config import get_settings

        s = settings or get_settings()
        backend = s.media_backend.lower()

        if backend == "local":
            from app.infrastructure.external.storage.local_storage import (
                LocalMediaStore,
            )

            if not s.media_root:
                raise ValueError("MEDIA_ROOT required for local backend")
            return LocalMediaStore(
                media_root=s.media_root,
                base_url=s.media_base_url,
                folder=s.cloudinary_folder,
            )
        if backend == "cloudinary":
            from app.infrastructure.external.storage.cloudinary_storage import (
                CloudinaryMediaStore,
            )

            if not (
                s.cloudinary_cloud_name
                and s.cloudinary_api_key
                and s.cloudinary_api_secret
            ):
                raise ValueError(
                    "CLOUDINARY_CLOUD_NAME, CLOUDINARY_API_KEY and "
                    "CLOUDINARY_API_SECRET required for cloudinary backend"
                )
            return CloudinaryMediaStore(
                cloud_name=s.cloudinary_cloud_name,
                api_key=s.cloudinary_api_key,
                api_secret=s.cloudinary_api_secret.get_secret_value(),
                folder=s.cloudinary_folder,
                timeout=s.media_timeout_seconds,
            )
        raise ValueError(
            f"Unknown media backend: {backend}. Supported: 'cloudinary', 'local'"
        )
