"""News repository. The image column holds a single locator or NULL."""

from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.news import NewsChanges, NewsCreate, NewsResult
from app.domain.value_objects.media import AttachmentSet
from app.infrastructure.persistence.models.news import News
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.shared.utils.datetime import ensure_utc, utc_now


def _decode_image(value: str | None) -> AttachmentSet:
    if isinstance(value, str) and value.strip():
        return AttachmentSet.from_locators([value.strip()])
    return AttachmentSet.empty()


def _encode_image(image: AttachmentSet) -> str | None:
    locators = image.locators
    return locators[0] if locators else None


def _to_result(row: News) -> NewsResult:
    return NewsResult(
        id=row.id,
        title=row.title,
        content=row.content,
        type=row.type,
        image=_decode_image(row.image),
        date=ensure_utc(row.date),
    )


class NewsRepository(BaseRepository[News]):
    """News repository (INewsRepository)."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, News)

    async def get_by_id(self, news_id: str) -> NewsResult | None:
        row = await self.get_model(news_id)
        return _to_result(row) if row else None

    async def list_news(self) -> list[NewsResult]:
        rows = await self.list_models(News.date.desc())
        return [_to_result(r) for r in rows]

    async def create_news(self, data: NewsCreate, image: AttachmentSet) -> NewsResult:
        row = News(
            title=data.title,
            content=data.content,
            type=data.type,
            image=_encode_image(image),
            date=utc_now(),
        )
        await self.create(row)
        return _to_result(row)

    async def update_news(
        self,
        news_id: str,
        changes: NewsChanges,
        image: AttachmentSet | None,
    ) -> NewsResult | None:
        row = await self.get_model(news_id)
        if row is None:
            return None
        for key, value in changes.as_dict().items():
            setattr(row, key, value)
        if image is not None:
            row.image = _encode_image(image)
        await self.save(row)
        return _to_result(row)

    async def delete_news(self, news_id: str) -> bool:
        row = await self.get_model(news_id)
        if row is None:
            return False
        await self.remove(row)
        return True
