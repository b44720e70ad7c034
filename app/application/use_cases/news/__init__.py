"""News use cases."""

from app.application.use_cases.news.news_operations import NewsService

__all__ = ["NewsService"]
