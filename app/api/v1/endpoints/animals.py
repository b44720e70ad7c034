"""Animal API: thin routes delegating to AnimalService.

Photos arrive as multipart files; the service transforms and uploads them,
and only the photos that made it are stored on the record.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile

from app.api.v1.dependencies import get_animal_service, read_uploads
from app.application.dtos.animal import AnimalChanges, AnimalCreate
from app.application.use_cases.animals import AnimalService
from app.core.limiter import limit_writes
from app.schemas.animal import AnimalResponse, AnimalWriteResponse
from app.schemas.media import CleanupSummary, failed_file_items

router = APIRouter()


@router.post("", response_model=AnimalWriteResponse, status_code=201)
@limit_writes
async def create_animal(
    request: Request,
    name: Annotated[str, Form()],
    description: Annotated[str, Form()],
    animal_type: Annotated[str, Form(alias="type")],
    size: Annotated[str, Form()],
    age: Annotated[str, Form()],
    genre: Annotated[str, Form()],
    animal_svc: Annotated[AnimalService, Depends(get_animal_service)],
    photos: Annotated[list[UploadFile] | None, File()] = None,
):
    """Create an animal with its photos. Photos that fail are listed in failed_files."""
    outcome = await animal_svc.create_animal(
        AnimalCreate(
            name=name,
            description=description,
            type=animal_type,
            size=size,
            age=age,
            genre=genre,
        ),
        await read_uploads(photos),
    )
    return AnimalWriteResponse(
        message="Animal created",
        animal=AnimalResponse.from_result(outcome.record),
        failed_files=failed_file_items(outcome.failed_files),
    )


@router.get("", response_model=list[AnimalResponse])
async def list_animals(
    animal_svc: Annotated[AnimalService, Depends(get_animal_service)],
):
    """List animals, most recently registered first."""
    animals = await animal_svc.list_animals()
    return [AnimalResponse.from_result(a) for a in animals]


@router.get("/{animal_id}", response_model=AnimalResponse)
async def get_animal(
    animal_id: str,
    animal_svc: Annotated[AnimalService, Depends(get_animal_service)],
):
    return AnimalResponse.from_result(await animal_svc.get_animal(animal_id))


@router.patch("/{animal_id}", response_model=AnimalWriteResponse)
@limit_writes
async def update_animal(
    request: Request,
    animal_id: str,
    animal_svc: Annotated[AnimalService, Depends(get_animal_service)],
    name: Annotated[str | None, Form()] = None,
    description: Annotated[str | None, Form()] = None,
    animal_type: Annotated[str | None, Form(alias="type")] = None,
    size: Annotated[str | None, Form()] = None,
    age: Annotated[str | None, Form()] = None,
    genre: Annotated[str | None, Form()] = None,
    adopted: Annotated[bool | None, Form()] = None,
    photos: Annotated[list[UploadFile] | None, File()] = None,
):
    """Update fields; new photos replace the whole set and the old ones are deleted."""
    outcome = await animal_svc.update_animal(
        animal_id,
        AnimalChanges(
            name=name,
            description=description,
            type=animal_type,
            size=size,
            age=age,
            genre=genre,
            adopted=adopted,
        ),
        await read_uploads(photos) or None,
    )
    return AnimalWriteResponse(
        message="Animal updated",
        animal=AnimalResponse.from_result(outcome.record),
        failed_files=failed_file_items(outcome.failed_files),
        cleanup=CleanupSummary.from_report(outcome.cleanup),
    )


@router.delete("/{animal_id}", response_model=AnimalWriteResponse)
@limit_writes
async def delete_animal(
    request: Request,
    animal_id: str,
    animal_svc: Annotated[AnimalService, Depends(get_animal_service)],
):
    """Delete the animal and its photos. Photos the store refuses are reported, not fatal."""
    outcome = await animal_svc.delete_animal(animal_id)
    return AnimalWriteResponse(
        message="Animal deleted",
        animal=AnimalResponse.from_result(outcome.record),
        cleanup=CleanupSummary.from_report(outcome.cleanup),
    )
