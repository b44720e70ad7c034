"""Animal API schemas."""

from datetime import datetime

from pydantic import BaseModel, Field

from app.application.dtos.animal import AnimalResult
from app.schemas.media import CleanupSummary, FileFailureItem


class AnimalResponse(BaseModel):
    """Animal record with its photo locators in display order."""

    id: str
    name: str
    description: str
    type: str
    size: str
    age: str
    genre: str
    adopted: bool
    photos: list[str] = Field(default_factory=list)
    register_date: datetime | None = None

    @classmethod
    def from_result(cls, result: AnimalResult) -> "AnimalResponse":
        return cls(
            id=result.id,
            name=result.name,
            description=result.description,
            type=result.type,
            size=result.size,
            age=result.age,
            genre=result.genre,
            adopted=result.adopted,
            photos=result.photos.locators,
            register_date=result.register_date,
        )


class AnimalWriteResponse(BaseModel):
    """Response for POST/PATCH/DELETE /animals.

    failed_files lists photos dropped during this request; cleanup lists
    replaced or removed photos and whether the store deleted them.
    """

    message: str
    animal: AnimalResponse
    failed_files: list[FileFailureItem] = Field(default_factory=list)
    cleanup: CleanupSummary = Field(default_factory=CleanupSummary)
