"""Domain value objects and shared value types."""

from app.domain.value_objects.media import AssetReference, AttachmentSet

__all__ = [
    "AssetReference",
    "AttachmentSet",
]
