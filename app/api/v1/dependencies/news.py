"""News dependencies (composition root)."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.services.lifecycle_reconciler import LifecycleReconciler
from app.application.use_cases.news import NewsService
from app.infrastructure.persistence.database import get_db
from app.infrastructure.persistence.repositories import NewsRepository

from .media import get_reconciler


async def get_news_service(
    db: Annotated[AsyncSession, Depends(get_db)],
    reconciler: Annotated[LifecycleReconciler, Depends(get_reconciler)],
) -> NewsService:
    """Build NewsService (repository on the request session + shared reconciler)."""
    return NewsService(news_repo=NewsRepository(db), reconciler=reconciler)
