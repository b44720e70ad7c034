"""Domain layer: value objects, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from app.domain.enums import AnimalGenre, FailureStage, LifecycleState, WatermarkCorner
from app.domain.exceptions import (
    MediaStoreException,
    MetadataWriteError,
    ResourceNotFoundException,
    ShelterException,
    StoreDeleteError,
    StoreUploadError,
    TransformError,
    ValidationException,
)
from app.domain.value_objects import AssetReference, AttachmentSet

__all__ = [
    # Enums
    "AnimalGenre",
    "FailureStage",
    "LifecycleState",
    "WatermarkCorner",
    # Exceptions
    "MediaStoreException",
    "MetadataWriteError",
    "ResourceNotFoundException",
    "ShelterException",
    "StoreDeleteError",
    "StoreUploadError",
    "TransformError",
    "ValidationException",
    # Value objects
    "AssetReference",
    "AttachmentSet",
]
