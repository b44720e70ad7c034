"""Media use cases."""

from app.application.use_cases.media.media_operations import MediaService

__all__ = ["MediaService"]
