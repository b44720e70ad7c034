"""Pydantic request/response schemas for the API."""

from app.schemas.animal import AnimalResponse, AnimalWriteResponse
from app.schemas.health import HealthResponse
from app.schemas.media import (
    CleanupSummary,
    FileFailureItem,
    MediaDeleteRequest,
    MediaDeleteResponse,
    MediaUploadResponse,
)
from app.schemas.news import NewsResponse, NewsWriteResponse

__all__ = [
    "AnimalResponse",
    "AnimalWriteResponse",
    "CleanupSummary",
    "FileFailureItem",
    "HealthResponse",
    "MediaDeleteRequest",
    "MediaDeleteResponse",
    "MediaUploadResponse",
    "NewsResponse",
    "NewsWriteResponse",
]
