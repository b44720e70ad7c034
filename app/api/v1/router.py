"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from app.api.v1.dependencies (no manual repo/service construction).
"""

from fastapi import APIRouter

from app.api.v1.endpoints import animals, health, media, news

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(media.router, prefix="/media", tags=["media"])
api_router.include_router(animals.router, prefix="/animals", tags=["animals"])
api_router.include_router(news.router, prefix="/news", tags=["news"])
