"""Media store backends: Cloudinary (remote) and local filesystem (development).

Factory creates the backend from app.core.config. Implementations are loaded
lazily inside StorageFactory.create_media_store() and implement IMediaStore
(upload, delete).
"""

from app.infrastructure.external.storage.factory import StorageFactory

__all__ = [
    "StorageFactory",
]
