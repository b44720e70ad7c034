"""News operations: create, update, delete and read, with a single optional image."""

from __future__ import annotations

from app.application.dtos.media import IncomingFile, ReconcileOutcome
from app.application.dtos.news import NewsChanges, NewsCreate, NewsResult
from app.application.interfaces.repositories import INewsRepository
from app.application.services.lifecycle_reconciler import LifecycleReconciler
from app.domain.exceptions import ResourceNotFoundException, ValidationException
from app.domain.value_objects.media import AttachmentSet


def _as_batch(image: IncomingFile | None) -> list[IncomingFile]:
    return [image] if image is not None else []


class NewsService:
    """News items. The image is handled as an attachment set of zero or one."""

    def __init__(
        self,
        news_repo: INewsRepository,
        reconciler: LifecycleReconciler,
    ) -> None:
        self.news_repo = news_repo
        self.reconciler = reconciler

    async def get_news(self, news_id: str) -> NewsResult:
        news = await self.news_repo.get_by_id(news_id)
        if news is None:
            raise ResourceNotFoundException("news", news_id)
        return news

    async def list_news(self) -> list[NewsResult]:
        return await self.news_repo.list_news()

    async def create_news(
        self,
        data: NewsCreate,
        image: IncomingFile | None = None,
    ) -> ReconcileOutcome[NewsResult]:
        """Upload the image (if any) and insert the news item.

        An image that fails to transform or upload is dropped; the item is
        still created without one.
        """
        if not data.title or not data.title.strip():
            raise ValidationException("title is required", field="title")
        if not data.content or not data.content.strip():
            raise ValidationException("content is required", field="content")

        async def persist(attachments: AttachmentSet) -> NewsResult:
            return await self.news_repo.create_news(data, attachments)

        return await self.reconciler.create(_as_batch(image), persist)

    async def update_news(
        self,
        news_id: str,
        changes: NewsChanges,
        image: IncomingFile | None = None,
    ) -> ReconcileOutcome[NewsResult]:
        """Apply changes; a new image replaces the old one, which is then deleted."""
        if changes.is_empty and image is None:
            raise ValidationException("No fields to update")
        current = await self.get_news(news_id)

        async def persist(attachments: AttachmentSet | None) -> NewsResult:
            updated = await self.news_repo.update_news(news_id, changes, attachments)
            if updated is None:
                raise ResourceNotFoundException("news", news_id)
            return updated

        return await self.reconciler.update(current.image, _as_batch(image), persist)

    async def delete_news(self, news_id: str) -> ReconcileOutcome[NewsResult]:
        current = await self.get_news(news_id)

        async def remove() -> NewsResult:
            if not await self.news_repo.delete_news(news_id):
                raise ResourceNotFoundException("news", news_id)
            return current

        return await self.reconciler.delete(current.image, remove)
