"""Infrastructure exceptions for media store backends.

Store errors extend the domain MediaStoreException so the reconciler's
per-file recovery and the HTTP exception handlers treat them uniformly.
"""

from app.domain.exceptions import MediaStoreException


class MediaStorePermissionError(MediaStoreException):
    """Identifier resolves outside the local media root (path traversal)."""

    def __init__(self, identifier: str, operation: str) -> None:
        super().__init__(
            f"Permission denied for {operation} on {identifier}",
            "STORE_PERMISSION_ERROR",
            {"identifier": identifier, "operation": operation, "cause": "path_validation"},
        )
