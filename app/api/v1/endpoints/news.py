"""News API: thin routes delegating to NewsService. One optional image per item."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile

from app.api.v1.dependencies import get_news_service, read_upload
from app.application.dtos.news import NewsChanges, NewsCreate
from app.application.use_cases.news import NewsService
from app.core.limiter import limit_writes
from app.schemas.media import CleanupSummary, failed_file_items
from app.schemas.news import NewsResponse, NewsWriteResponse

router = APIRouter()


async def _optional_image(image: UploadFile | None):
    if image is None or not image.filename:
        return None
    return await read_upload(image)


@router.post("", response_model=NewsWriteResponse, status_code=201)
@limit_writes
async def create_news(
    request: Request,
    title: Annotated[str, Form()],
    content: Annotated[str, Form()],
    news_svc: Annotated[NewsService, Depends(get_news_service)],
    news_type: Annotated[str | None, Form(alias="type")] = None,
    image: Annotated[UploadFile | None, File()] = None,
):
    """Create a news item with an optional image."""
    outcome = await news_svc.create_news(
        NewsCreate(title=title, content=content, type=news_type),
        await _optional_image(image),
    )
    return NewsWriteResponse(
        message="News created",
        news=NewsResponse.from_result(outcome.record),
        failed_files=failed_file_items(outcome.failed_files),
    )


@router.get("", response_model=list[NewsResponse])
async def list_news(
    news_svc: Annotated[NewsService, Depends(get_news_service)],
):
    """List news, newest first."""
    return [NewsResponse.from_result(n) for n in await news_svc.list_news()]


@router.get("/{news_id}", response_model=NewsResponse)
async def get_news(
    news_id: str,
    news_svc: Annotated[NewsService, Depends(get_news_service)],
):
    return NewsResponse.from_result(await news_svc.get_news(news_id))


@router.patch("/{news_id}", response_model=NewsWriteResponse)
@limit_writes
async def update_news(
    request: Request,
    news_id: str,
    news_svc: Annotated[NewsService, Depends(get_news_service)],
    title: Annotated[str | None, Form()] = None,
    content: Annotated[str | None, Form()] = None,
    news_type: Annotated[str | None, Form(alias="type")] = None,
    image: Annotated[UploadFile | None, File()] = None,
):
    """Update fields; a new image replaces the old one, which is then deleted."""
    outcome = await news_svc.update_news(
        news_id,
        NewsChanges(title=title, content=content, type=news_type),
        await _optional_image(image),
    )
    return NewsWriteResponse(
        message="News updated",
        news=NewsResponse.from_result(outcome.record),
        failed_files=failed_file_items(outcome.failed_files),
        cleanup=CleanupSummary.from_report(outcome.cleanup),
    )


@router.delete("/{news_id}", response_model=NewsWriteResponse)
@limit_writes
async def delete_news(
    request: Request,
    news_id: str,
    news_svc: Annotated[NewsService, Depends(get_news_service)],
):
    outcome = await news_svc.delete_news(news_id)
    return NewsWriteResponse(
        message="News deleted",
        news=NewsResponse.from_result(outcome.record),
        cleanup=CleanupSummary.from_report(outcome.cleanup),
    )
