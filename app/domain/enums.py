"""Domain enumerations for the Shelter application.

Enums represent fixed sets of domain values (e.g. animal genre, lifecycle state).
"""

from enum import Enum


class AnimalGenre(str, Enum):
    """Allowed values for an animal's genre field."""

    MALE = "male"
    FEMALE = "female"
    UNKNOWN = "unknown"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid genre values as strings.

        Returns:
            List of enum value strings (e.g. for validation or error messages).
        """
        return [genre.value for genre in cls]


class WatermarkCorner(str, Enum):
    """Corner of the canvas the watermark is anchored to."""

    NORTHWEST = "northwest"
    NORTHEAST = "northeast"
    SOUTHWEST = "southwest"
    SOUTHEAST = "southeast"

    @classmethod
    def values(cls) -> list[str]:
        return [corner.value for corner in cls]


class LifecycleState(str, Enum):
    """Terminal state of one record operation run by the lifecycle reconciler.

    FAILED is never returned; it is represented by the propagated
    MetadataWriteError.
    """

    PERSISTED = "persisted"
    REMOVED = "removed"
    FAILED = "failed"


class FailureStage(str, Enum):
    """Pipeline stage at which one submitted file was dropped."""

    TRANSFORM = "transform"
    UPLOAD = "upload"
