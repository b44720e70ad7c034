"""Application use cases: one entry point per workflow."""

from app.application.use_cases.animals import AnimalService
from app.application.use_cases.media import MediaService
from app.application.use_cases.news import NewsService

__all__ = [
    "AnimalService",
    "MediaService",
    "NewsService",
]
