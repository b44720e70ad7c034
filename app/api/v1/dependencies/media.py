"""Media dependencies: long-lived components built in the lifespan, read from app.state."""

from __future__ import annotations

from fastapi import Request, UploadFile

from app.application.dtos.media import IncomingFile
from app.application.interfaces.storage import IMediaStore
from app.application.services.lifecycle_reconciler import LifecycleReconciler
from app.application.use_cases.media import MediaService


def get_media_store(request: Request) -> IMediaStore:
    """Media store created at startup (Cloudinary or local)."""
    return request.app.state.media_store


def get_reconciler(request: Request) -> LifecycleReconciler:
    """Lifecycle reconciler shared by all record endpoints."""
    return request.app.state.reconciler


def get_media_service(request: Request) -> MediaService:
    """MediaService for the standalone /media endpoints."""
    return request.app.state.media_service


async def read_upload(file: UploadFile) -> IncomingFile:
    """Read one multipart file into memory."""
    data = await file.read()
    return IncomingFile(
        filename=file.filename or "upload",
        content_type=file.content_type,
        data=data,
    )


async def read_uploads(files: list[UploadFile] | None) -> list[IncomingFile]:
    """Read multipart files in submission order, skipping empty file inputs."""
    incoming: list[IncomingFile] = []
    for file in files or []:
        if not file.filename:
            continue
        incoming.append(await read_upload(file))
    return incoming
