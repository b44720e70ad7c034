"""Presentation-layer dependency injection (composition root).

Routes depend only on these providers, never on infrastructure directly.
Long-lived media components come from app.state (built in the lifespan);
repositories are built per request on the get_db session.
"""

from .animal import get_animal_repo, get_animal_service
from .media import (
    get_media_service,
    get_media_store,
    get_reconciler,
    read_upload,
    read_uploads,
)
from .news import get_news_service

__all__ = [
    "get_animal_repo",
    "get_animal_service",
    "get_media_service",
    "get_media_store",
    "get_news_service",
    "get_reconciler",
    "read_upload",
    "read_uploads",
]
