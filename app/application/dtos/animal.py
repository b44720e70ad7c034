"""DTOs for animal use cases (no dependency on ORM)."""

from dataclasses import dataclass, fields
from datetime import datetime
from typing import Any

from app.domain.value_objects.media import AttachmentSet


@dataclass(frozen=True)
class AnimalCreate:
    """Input for creating an animal record (write-model). Photos are added by the reconciler."""

    name: str
    description: str
    type: str
    size: str
    age: str
    genre: str


@dataclass(frozen=True)
class AnimalChanges:
    """Partial update of an animal record. None means "leave unchanged"."""

    name: str | None = None
    description: str | None = None
    type: str | None = None
    size: str | None = None
    age: str | None = None
    genre: str | None = None
    adopted: bool | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return only the fields that were supplied."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }

    @property
    def is_empty(self) -> bool:
        return not self.as_dict()


@dataclass(frozen=True)
class AnimalResult:
    """Animal read-model (result of get_by_id, create, update)."""

    id: str
    name: str
    description: str
    type: str
    size: str
    age: str
    genre: str
    adopted: bool
    photos: AttachmentSet
    register_date: datetime | None = None
