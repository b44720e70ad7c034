"""Media API: standalone transform-and-upload and delete-by-identifier.

files_router serves stored files when the local backend is active.
"""

from typing import Annotated

from fastapi import APIRouter, Body, Depends, File, Request, UploadFile
from fastapi.responses import FileResponse

from app.api.v1.dependencies import get_media_service, get_media_store, read_upload
from app.application.interfaces.storage import IMediaStore
from app.application.services.identifier_extractor import extract_identifier
from app.application.use_cases.media import MediaService
from app.core.limiter import limit_upload, limit_writes
from app.domain.exceptions import ResourceNotFoundException, ValidationException
from app.schemas.media import (
    MediaDeleteRequest,
    MediaDeleteResponse,
    MediaUploadResponse,
)

router = APIRouter()
files_router = APIRouter()


@router.post("", response_model=MediaUploadResponse, status_code=201)
@limit_upload
async def upload_media(
    request: Request,
    file: Annotated[UploadFile, File()],
    media_svc: Annotated[MediaService, Depends(get_media_service)],
):
    """Resize, watermark and upload one image. 422 if it cannot be processed, 502 if the store fails."""
    if not file.filename:
        raise ValidationException("A valid image file is required", field="file")
    result = await media_svc.upload(await read_upload(file))
    return MediaUploadResponse(url=result.locator, identifier=result.identifier)


@router.delete("", response_model=MediaDeleteResponse)
@limit_writes
async def delete_media(
    request: Request,
    media_svc: Annotated[MediaService, Depends(get_media_service)],
    body: Annotated[MediaDeleteRequest | None, Body()] = None,
):
    """Delete one image by store identifier. 400 without contacting the store if missing."""
    identifier = body.identifier if body else None
    await media_svc.delete(identifier)
    return MediaDeleteResponse(identifier=identifier.strip())


@files_router.get("/upload/v{version}/{path:path}", include_in_schema=False)
async def serve_local_media(
    request: Request,
    version: str,
    path: str,
    store: Annotated[IMediaStore, Depends(get_media_store)],
):
    """Serve a file written by the local backend."""
    identifier = extract_identifier(request.url.path)
    stored = store.path_for(identifier) if identifier else None
    if stored is None:
        raise ResourceNotFoundException("media", path)
    return FileResponse(stored)
