"""Domain exceptions for the Shelter application.

Defines domain-level exceptions that represent business rule violations and
the media lifecycle failure taxonomy. These exceptions are independent of
infrastructure concerns. Presentation layer maps them to HTTP responses in
exception handlers.
"""

from typing import Any


class ShelterException(Exception):
    """Base exception for all Shelter application errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON body used by the HTTP exception handler."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(ShelterException):
    """Raised when input validation fails (e.g. invalid format or range)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class ResourceNotFoundException(ShelterException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'animal', 'news').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class TransformError(ShelterException):
    """Raised when one file cannot be decoded, resized, watermarked or encoded.

    Per-file and local: callers drop the file and keep processing its siblings.
    """

    def __init__(self, reason: str, filename: str | None = None) -> None:
        details: dict[str, Any] = {"reason": reason}
        if filename:
            details["filename"] = filename
        super().__init__(
            f"Image could not be processed: {reason}",
            "TRANSFORM_ERROR",
            details,
        )
        self.reason = reason
        self.filename = filename


class MediaStoreException(ShelterException):
    """Base exception for remote media store calls."""


class StoreUploadError(MediaStoreException):
    """Upload failed: transport error, non-success response, or no locator returned."""

    def __init__(self, cause: str) -> None:
        super().__init__(
            "Failed to upload image to media store",
            "STORE_UPLOAD_ERROR",
            {"cause": cause},
        )
        self.cause = cause


class StoreDeleteError(MediaStoreException):
    """Delete failed: transport error or store-reported non-success result."""

    def __init__(self, identifier: str, cause: str) -> None:
        super().__init__(
            f"Failed to delete image: {identifier}",
            "STORE_DELETE_ERROR",
            {"identifier": identifier, "cause": cause},
        )
        self.identifier = identifier
        self.cause = cause


class MetadataWriteError(ShelterException):
    """Raised when the metadata store rejects a record write or delete.

    Fatal to the operation. Remote uploads already issued for the attempt are
    not rolled back.
    """

    def __init__(self, operation: str, cause: str) -> None:
        super().__init__(
            f"Record {operation} failed",
            "METADATA_WRITE_ERROR",
            {"operation": operation, "cause": cause},
        )
        self.operation = operation
        self.cause = cause


class SqlNotConfiguredException(ShelterException):
    """Raised when an operation requires the SQL database but it is not configured."""

    def __init__(self) -> None:
        super().__init__(
            message="This operation requires a SQL database that is not configured.",
            error_code="SERVICE_UNAVAILABLE",
        )
