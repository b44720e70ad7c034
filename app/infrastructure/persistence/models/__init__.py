"""Persistence models: ORM entities and mixins."""

from app.infrastructure.persistence.models.animal import Animal
from app.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin
from app.infrastructure.persistence.models.news import News

__all__ = [
    "Animal",
    "CuidMixin",
    "News",
    "TimestampMixin",
]
