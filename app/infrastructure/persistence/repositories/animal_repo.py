"""Animal repository. Maps rows to AnimalResult with a leniently decoded photo set."""

from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.animal import AnimalChanges, AnimalCreate, AnimalResult
from app.application.services.attachment_codec import (
    decode_attachments,
    encode_attachments,
)
from app.domain.value_objects.media import AttachmentSet
from app.infrastructure.persistence.models.animal import Animal
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.shared.utils.datetime import ensure_utc


def _to_result(row: Animal) -> AnimalResult:
    return AnimalResult(
        id=row.id,
        name=row.name,
        description=row.description,
        type=row.type,
        size=row.size,
        age=row.age,
        genre=row.genre,
        adopted=bool(row.adopted),
        photos=decode_attachments(row.photos),
        register_date=ensure_utc(row.register_date),
    )


class AnimalRepository(BaseRepository[Animal]):
    """Animal repository (IAnimalRepository)."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Animal)

    async def get_by_id(self, animal_id: str) -> AnimalResult | None:
        row = await self.get_model(animal_id)
        return _to_result(row) if row else None

    async def list_animals(self) -> list[AnimalResult]:
        rows = await self.list_models(Animal.register_date.desc())
        return [_to_result(r) for r in rows]

    async def create_animal(
        self, data: AnimalCreate, photos: AttachmentSet
    ) -> AnimalResult:
        row = Animal(
            name=data.name,
            description=data.description,
            type=data.type,
            size=data.size,
            age=data.age,
            genre=data.genre,
            adopted=False,
            photos=encode_attachments(photos),
        )
        await self.create(row)
        return _to_result(row)

    async def update_animal(
        self,
        animal_id: str,
        changes: AnimalChanges,
        photos: AttachmentSet | None,
    ) -> AnimalResult | None:
        row = await self.get_model(animal_id)
        if row is None:
            return None
        for key, value in changes.as_dict().items():
            setattr(row, key, value)
        if photos is not None:
            row.photos = encode_attachments(photos)
        await self.save(row)
        return _to_result(row)

    async def delete_animal(self, animal_id: str) -> bool:
        row = await self.get_model(animal_id)
        if row is None:
            return False
        await self.remove(row)
        return True
