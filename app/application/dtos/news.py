"""DTOs for news use cases (no dependency on ORM)."""

from dataclasses import dataclass, fields
from datetime import datetime
from typing import Any

from app.domain.value_objects.media import AttachmentSet


@dataclass(frozen=True)
class NewsCreate:
    """Input for creating a news item (write-model). The image is added by the reconciler."""

    title: str
    content: str
    type: str | None = None


@dataclass(frozen=True)
class NewsChanges:
    """Partial update of a news item. None means "leave unchanged"."""

    title: str | None = None
    content: str | None = None
    type: str | None = None

    def as_dict(self) -> dict[str, Any]:
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }

    @property
    def is_empty(self) -> bool:
        return not self.as_dict()


@dataclass(frozen=True)
class NewsResult:
    """News read-model. image holds zero or one reference."""

    id: str
    title: str
    content: str
    type: str | None
    image: AttachmentSet
    date: datetime | None = None
