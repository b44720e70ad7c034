"""News API schemas."""

from datetime import datetime

from pydantic import BaseModel, Field

from app.application.dtos.news import NewsResult
from app.schemas.media import CleanupSummary, FileFailureItem


class NewsResponse(BaseModel):
    id: str
    title: str
    content: str
    type: str | None = None
    image: str | None = None
    date: datetime | None = None

    @classmethod
    def from_result(cls, result: NewsResult) -> "NewsResponse":
        locators = result.image.locators
        return cls(
            id=result.id,
            title=result.title,
            content=result.content,
            type=result.type,
            image=locators[0] if locators else None,
            date=result.date,
        )


class NewsWriteResponse(BaseModel):
    """Response for POST/PATCH/DELETE /news."""

    message: str
    news: NewsResponse
    failed_files: list[FileFailureItem] = Field(default_factory=list)
    cleanup: CleanupSummary = Field(default_factory=CleanupSummary)
