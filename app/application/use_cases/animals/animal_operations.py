"""Animal record operations: create, update, delete and read, with photo lifecycle."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import replace

from app.application.dtos.animal import AnimalChanges, AnimalCreate, AnimalResult
from app.application.dtos.media import IncomingFile, ReconcileOutcome
from app.application.interfaces.repositories import IAnimalRepository
from app.application.services.lifecycle_reconciler import LifecycleReconciler
from app.domain.enums import AnimalGenre
from app.domain.exceptions import ResourceNotFoundException, ValidationException
from app.domain.value_objects.media import AttachmentSet

logger = logging.getLogger(__name__)

_REQUIRED_FIELDS = ("name", "description", "type", "size", "age", "genre")


def _normalize_genre(genre: str) -> str:
    value = genre.strip().lower()
    if value not in AnimalGenre.values():
        raise ValidationException(
            f"genre must be one of: {', '.join(AnimalGenre.values())}",
            field="genre",
        )
    return value


class AnimalService:
    """Animal records and their photo sets. Photo sequencing is delegated to the reconciler."""

    def __init__(
        self,
        animal_repo: IAnimalRepository,
        reconciler: LifecycleReconciler,
    ) -> None:
        self.animal_repo = animal_repo
        self.reconciler = reconciler

    async def get_animal(self, animal_id: str) -> AnimalResult:
        """Return the animal; raise ResourceNotFoundException if missing."""
        animal = await self.animal_repo.get_by_id(animal_id)
        if animal is None:
            raise ResourceNotFoundException("animal", animal_id)
        return animal

    async def list_animals(self) -> list[AnimalResult]:
        return await self.animal_repo.list_animals()

    async def create_animal(
        self,
        data: AnimalCreate,
        files: Sequence[IncomingFile] = (),
    ) -> ReconcileOutcome[AnimalResult]:
        """Upload photos and insert the animal with the photos that survived."""
        for name in _REQUIRED_FIELDS:
            value = getattr(data, name)
            if not isinstance(value, str) or not value.strip():
                raise ValidationException(f"{name} is required", field=name)
        data = replace(data, genre=_normalize_genre(data.genre))

        async def persist(photos: AttachmentSet) -> AnimalResult:
            return await self.animal_repo.create_animal(data, photos)

        outcome = await self.reconciler.create(files, persist)
        logger.info(
            "Created animal %s with %d photos",
            outcome.record.id if outcome.record else None,
            len(outcome.attachments),
        )
        return outcome

    async def update_animal(
        self,
        animal_id: str,
        changes: AnimalChanges,
        files: Sequence[IncomingFile] | None = None,
    ) -> ReconcileOutcome[AnimalResult]:
        """Apply field changes; when files are given, replace the photo set.

        Replaced photos are deleted from the store after the record is written.
        """
        if changes.genre is not None:
            changes = replace(changes, genre=_normalize_genre(changes.genre))
        if changes.is_empty and not files:
            raise ValidationException("No fields to update")
        current = await self.get_animal(animal_id)

        async def persist(photos: AttachmentSet | None) -> AnimalResult:
            updated = await self.animal_repo.update_animal(animal_id, changes, photos)
            if updated is None:
                raise ResourceNotFoundException("animal", animal_id)
            return updated

        return await self.reconciler.update(current.photos, files, persist)

    async def delete_animal(self, animal_id: str) -> ReconcileOutcome[AnimalResult]:
        """Delete every photo (best effort), then the record."""
        current = await self.get_animal(animal_id)

        async def remove() -> AnimalResult:
            if not await self.animal_repo.delete_animal(animal_id):
                raise ResourceNotFoundException("animal", animal_id)
            return current

        outcome = await self.reconciler.delete(current.photos, remove)
        logger.info(
            "Deleted animal %s (%d photos removed, %d left in store)",
            animal_id,
            len(outcome.cleanup.deleted),
            len(outcome.cleanup.failures),
        )
        return outcome
