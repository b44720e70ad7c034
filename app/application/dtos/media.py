"""DTOs for the media pipeline: submitted files, transform/upload results, reports."""

from dataclasses import dataclass, field
from typing import Generic, TypeVar

from app.domain.enums import FailureStage, LifecycleState
from app.domain.value_objects.media import AttachmentSet

T = TypeVar("T")


@dataclass(frozen=True)
class IncomingFile:
    """One file submitted with a record operation. Batch position is submission order."""

    filename: str
    content_type: str | None
    data: bytes


@dataclass(frozen=True)
class TransformResult:
    """Display-ready encoded image. Owned by the upload call that produced it."""

    data: bytes
    width: int
    height: int
    mime_type: str


@dataclass(frozen=True)
class UploadResult:
    """What the remote store returns for one upload."""

    locator: str
    identifier: str


@dataclass(frozen=True)
class FileFailure:
    """A submitted file dropped from the attachment set, and why."""

    index: int
    filename: str
    stage: FailureStage
    reason: str


@dataclass(frozen=True)
class CleanupFailure:
    """A remote delete that failed or could not be attempted (unresolvable identifier)."""

    locator: str
    identifier: str | None
    reason: str


@dataclass(frozen=True)
class IngestReport:
    """Result of transforming and uploading one batch, in submission order."""

    attachments: AttachmentSet
    uploads: list[UploadResult] = field(default_factory=list)
    failures: list[FileFailure] = field(default_factory=list)


@dataclass(frozen=True)
class CleanupReport:
    """Result of best-effort remote deletes for a set of references."""

    deleted: list[str] = field(default_factory=list)
    failures: list[CleanupFailure] = field(default_factory=list)


@dataclass(frozen=True)
class ReconcileOutcome(Generic[T]):
    """Terminal outcome of one create/update/delete run by the lifecycle reconciler."""

    state: LifecycleState
    record: T | None
    attachments: AttachmentSet
    failed_files: list[FileFailure] = field(default_factory=list)
    cleanup: CleanupReport = field(default_factory=CleanupReport)
