"""Unit tests for NewsService (single optional image)."""

from collections.abc import Callable
from unittest.mock import AsyncMock

import pytest

from app.application.dtos.media import IncomingFile
from app.application.dtos.news import NewsChanges, NewsCreate, NewsResult
from app.application.services.image_transformer import ImageTransformer
from app.application.services.lifecycle_reconciler import LifecycleReconciler
from app.application.use_cases.news import NewsService
from app.domain.exceptions import ResourceNotFoundException, ValidationException
from app.domain.value_objects.media import AttachmentSet

OLD = "https://res.example.com/demo/image/upload/v1/oldnews.webp"


def _news(image: AttachmentSet | None = None, **overrides) -> NewsResult:
    values = {
        "id": "n1",
        "title": "Open day",
        "content": "Come visit",
        "type": "event",
        "image": image or AttachmentSet.empty(),
    }
    values.update(overrides)
    return NewsResult(**values)


@pytest.fixture
def mock_news_repo() -> AsyncMock:
    repo = AsyncMock()
    repo.get_by_id.return_value = _news(AttachmentSet.from_locators([OLD]))
    return repo


@pytest.fixture
def news_service(mock_news_repo, transformer: ImageTransformer, fake_store) -> NewsService:
    return NewsService(mock_news_repo, LifecycleReconciler(transformer, fake_store))


@pytest.fixture
def image(make_image: Callable[..., bytes]) -> IncomingFile:
    return IncomingFile("banner.png", "image/png", make_image())


async def test_create_with_image(news_service, mock_news_repo, fake_store, image) -> None:
    mock_news_repo.create_news.side_effect = lambda data, img: _news(img)
    outcome = await news_service.create_news(NewsCreate("Open day", "Come visit"), image)
    assert outcome.record.image.locators == [fake_store.by_filename["banner.png"].locator]


async def test_create_without_image(news_service, mock_news_repo, fake_store) -> None:
    mock_news_repo.create_news.side_effect = lambda data, img: _news(img)
    outcome = await news_service.create_news(NewsCreate("Open day", "Come visit"))
    assert outcome.record.image.is_empty
    assert fake_store.uploads == []


async def test_create_with_broken_image_still_creates(news_service, mock_news_repo) -> None:
    """A failed image is dropped; the item is created without one."""
    mock_news_repo.create_news.side_effect = lambda data, img: _news(img)
    outcome = await news_service.create_news(
        NewsCreate("Open day", "Come visit"), IncomingFile("b.png", None, b"??")
    )
    assert outcome.record.image.is_empty
    assert len(outcome.failed_files) == 1


@pytest.mark.parametrize(
    ("data", "field"),
    [(NewsCreate("", "body"), "title"), (NewsCreate("title", " "), "content")],
)
async def test_create_requires_title_and_content(news_service, data, field) -> None:
    with pytest.raises(ValidationException) as exc_info:
        await news_service.create_news(data)
    assert exc_info.value.details == {"field": field}


async def test_update_replaces_image_and_deletes_old(
    news_service, mock_news_repo, fake_store, image
) -> None:
    mock_news_repo.update_news.side_effect = lambda i, c, img: _news(img)
    outcome = await news_service.update_news("n1", NewsChanges(), image)
    assert outcome.record.image.locators == [fake_store.by_filename["banner.png"].locator]
    assert fake_store.deleted == ["oldnews"]


async def test_update_text_only_keeps_image(news_service, mock_news_repo, fake_store) -> None:
    mock_news_repo.update_news.return_value = _news(
        AttachmentSet.from_locators([OLD]), title="New"
    )
    await news_service.update_news("n1", NewsChanges(title="New"))
    mock_news_repo.update_news.assert_awaited_once_with("n1", NewsChanges(title="New"), None)
    assert fake_store.deleted == []


async def test_empty_update_rejected(news_service) -> None:
    with pytest.raises(ValidationException):
        await news_service.update_news("n1", NewsChanges())


async def test_delete_purges_image(news_service, mock_news_repo, fake_store) -> None:
    mock_news_repo.delete_news.return_value = True
    outcome = await news_service.delete_news("n1")
    assert fake_store.deleted == ["oldnews"]
    assert outcome.record.id == "n1"


async def test_get_missing_news(news_service, mock_news_repo) -> None:
    mock_news_repo.get_by_id.return_value = None
    with pytest.raises(ResourceNotFoundException):
        await news_service.get_news("missing")
