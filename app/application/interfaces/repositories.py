"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs or domain value objects only; no
infrastructure imports. Write methods raise MetadataWriteError when the
metadata store rejects the operation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.application.dtos.animal import AnimalChanges, AnimalCreate, AnimalResult
    from app.application.dtos.news import NewsChanges, NewsCreate, NewsResult
    from app.domain.value_objects.media import AttachmentSet


class IAnimalRepository(Protocol):
    """Protocol for animal repository (DIP)."""

    async def get_by_id(self, animal_id: str) -> AnimalResult | None:
        """Return the animal or None."""

    async def list_animals(self) -> list[AnimalResult]:
        """Return all animals, newest register_date first."""

    async def create_animal(
        self, data: AnimalCreate, photos: AttachmentSet
    ) -> AnimalResult:
        """Insert a new animal with its encoded photo set."""

    async def update_animal(
        self,
        animal_id: str,
        changes: AnimalChanges,
        photos: AttachmentSet | None,
    ) -> AnimalResult | None:
        """Apply changes; photos None leaves the stored set untouched. None if not found."""

    async def delete_animal(self, animal_id: str) -> bool:
        """Delete the row. Returns False if it did not exist."""


class INewsRepository(Protocol):
    """Protocol for news repository (DIP)."""

    async def get_by_id(self, news_id: str) -> NewsResult | None:
        """Return the news item or None."""

    async def list_news(self) -> list[NewsResult]:
        """Return all news items, newest date first."""

    async def create_news(self, data: NewsCreate, image: AttachmentSet) -> NewsResult:
        """Insert a news item; image holds zero or one reference."""

    async def update_news(
        self,
        news_id: str,
        changes: NewsChanges,
        image: AttachmentSet | None,
    ) -> NewsResult | None:
        """Apply changes; image None leaves the stored image untouched. None if not found."""

    async def delete_news(self, news_id: str) -> bool:
        """Delete the row. Returns False if it did not exist."""
