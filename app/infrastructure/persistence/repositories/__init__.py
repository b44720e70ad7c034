"""Repositories: SQLAlchemy implementations of the application ports."""

from app.infrastructure.persistence.repositories.animal_repo import AnimalRepository
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.infrastructure.persistence.repositories.news_repo import NewsRepository

__all__ = [
    "AnimalRepository",
    "BaseRepository",
    "NewsRepository",
]
