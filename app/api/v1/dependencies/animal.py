"""Animal dependencies (composition root)."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.services.lifecycle_reconciler import LifecycleReconciler
from app.application.use_cases.animals import AnimalService
from app.infrastructure.persistence.database import get_db
from app.infrastructure.persistence.repositories import AnimalRepository

from .media import get_reconciler


async def get_animal_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> AnimalRepository:
    """Animal repository on the request session."""
    return AnimalRepository(db)


async def get_animal_service(
    animal_repo: Annotated[AnimalRepository, Depends(get_animal_repo)],
    reconciler: Annotated[LifecycleReconciler, Depends(get_reconciler)],
) -> AnimalService:
    """Build AnimalService (repository + shared reconciler)."""
    return AnimalService(animal_repo=animal_repo, reconciler=reconciler)
