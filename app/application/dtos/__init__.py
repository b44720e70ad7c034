"""Application DTOs (no ORM dependency)."""

from app.application.dtos.animal import AnimalChanges, AnimalCreate, AnimalResult
from app.application.dtos.media import (
    CleanupFailure,
    CleanupReport,
    FileFailure,
    IncomingFile,
    IngestReport,
    ReconcileOutcome,
    TransformResult,
    UploadResult,
)
from app.application.dtos.news import NewsChanges, NewsCreate, NewsResult

__all__ = [
    "AnimalChanges",
    "AnimalCreate",
    "AnimalResult",
    "CleanupFailure",
    "CleanupReport",
    "FileFailure",
    "IncomingFile",
    "IngestReport",
    "NewsChanges",
    "NewsCreate",
    "NewsResult",
    "ReconcileOutcome",
    "TransformResult",
    "UploadResult",
]
