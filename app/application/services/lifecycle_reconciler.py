"""Lifecycle reconciler: keeps record photo sets and the remote media store consistent.

Sequences transform -> upload -> attachment set -> metadata write for one
record operation, and issues best-effort deletes for assets the record no
longer references. There is no transaction across the metadata store and the
media store:

- create: files whose transform or upload fails are dropped; the record is
  still written with the surviving subset.
- update with files: the replacement set is persisted first; orphans are
  deleted only after the write succeeds.
- delete: every reference is deleted (failures swallowed), then the record.
- a MetadataWriteError (or the record vanishing) always propagates; uploads
  already issued for the attempt stay in the store as orphans.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import TypeVar

from app.application.dtos.media import (
    CleanupFailure,
    CleanupReport,
    FileFailure,
    IncomingFile,
    IngestReport,
    ReconcileOutcome,
    UploadResult,
)
from app.application.interfaces.storage import IMediaStore
from app.application.services.identifier_extractor import extract_identifier
from app.application.services.image_transformer import ImageTransformer
from app.domain.enums import FailureStage, LifecycleState
from app.domain.exceptions import (
    MediaStoreException,
    MetadataWriteError,
    ResourceNotFoundException,
    TransformError,
)
from app.domain.value_objects.media import AssetReference, AttachmentSet
from app.shared.telemetry.tracing import TracedOperation, add_span_attributes

logger = logging.getLogger(__name__)

T = TypeVar("T")

UNRESOLVABLE = "unresolvable identifier"


class LifecycleReconciler:
    """Runs the media side of create/update/delete for any record type.

    The record-specific write is passed in as a callable so the sequencing
    rules live in one place for animals, news and anything else with photos.
    """

    def __init__(
        self,
        transformer: ImageTransformer,
        store: IMediaStore,
        max_concurrency: int = 4,
    ) -> None:
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")
        self.transformer = transformer
        self.store = store
        self.max_concurrency = max_concurrency

    async def _process_one(
        self,
        index: int,
        file: IncomingFile,
        semaphore: asyncio.Semaphore,
    ) -> UploadResult | FileFailure:
        async with semaphore:
            try:
                result = await asyncio.to_thread(
                    self.transformer.transform, file.data, file.filename
                )
            except TransformError as e:
                logger.warning(
                    "Dropping file %d (%s): transform failed: %s",
                    index,
                    file.filename,
                    e.reason,
                )
                return FileFailure(index, file.filename, FailureStage.TRANSFORM, e.reason)
            except Exception as e:
                logger.exception(
                    "Dropping file %d (%s): unexpected transform error", index, file.filename
                )
                return FileFailure(
                    index, file.filename, FailureStage.TRANSFORM, str(e) or type(e).__name__
                )
            try:
                return await self.store.upload(
                    result.data, result.mime_type, file.filename
                )
            except MediaStoreException as e:
                reason = str(e.details.get("cause", e.message))
                logger.warning(
                    "Dropping file %d (%s): upload failed: %s",
                    index,
                    file.filename,
                    reason,
                )
                return FileFailure(index, file.filename, FailureStage.UPLOAD, reason)
            except Exception as e:
                logger.exception(
                    "Dropping file %d (%s): unexpected upload error", index, file.filename
                )
                return FileFailure(
                    index, file.filename, FailureStage.UPLOAD, str(e) or type(e).__name__
                )

    async def ingest(self, files: Sequence[IncomingFile]) -> IngestReport:
        """Transform and upload files concurrently; keep survivors in submission order."""
        if not files:
            return IngestReport(attachments=AttachmentSet.empty())
        semaphore = asyncio.Semaphore(self.max_concurrency)
        async with TracedOperation("media.ingest", {"count": len(files)}):
            # gather() returns results in argument order, not completion order.
            results = await asyncio.gather(
                *(self._process_one(i, f, semaphore) for i, f in enumerate(files))
            )
            uploads = [r for r in results if isinstance(r, UploadResult)]
            failures = [r for r in results if isinstance(r, FileFailure)]
            add_span_attributes(uploaded=len(uploads), dropped=len(failures))
        logger.info(
            "Ingested %d of %d files (%d dropped)",
            len(uploads),
            len(files),
            len(failures),
        )
        return IngestReport(
            attachments=AttachmentSet.from_locators(u.locator for u in uploads),
            uploads=uploads,
            failures=failures,
        )

    async def purge(self, references: Sequence[AssetReference]) -> CleanupReport:
        """Best-effort delete of each reference. Never raises."""
        deleted: list[str] = []
        failures: list[CleanupFailure] = []
        async with TracedOperation("media.purge", {"count": len(references)}):
            for ref in references:
                identifier = extract_identifier(ref.locator)
                if identifier is None:
                    logger.warning("Skipping cleanup of %s: %s", ref.locator, UNRESOLVABLE)
                    failures.append(CleanupFailure(ref.locator, None, UNRESOLVABLE))
                    continue
                try:
                    await self.store.delete(identifier)
                except MediaStoreException as e:
                    reason = str(e.details.get("cause", e.message))
                    logger.warning(
                        "Cleanup of %s failed (left as orphan): %s", identifier, reason
                    )
                    failures.append(CleanupFailure(ref.locator, identifier, reason))
                    continue
                except Exception as e:
                    logger.exception("Cleanup of %s failed unexpectedly (left as orphan)", identifier)
                    failures.append(
                        CleanupFailure(ref.locator, identifier, str(e) or type(e).__name__)
                    )
                    continue
                deleted.append(identifier)
        return CleanupReport(deleted=deleted, failures=failures)

    def _log_leaked_uploads(self, report: IngestReport, operation: str) -> None:
        if report.uploads:
            logger.error(
                "Record %s failed after %d uploads; leaving orphans: %s",
                operation,
                len(report.uploads),
                [u.identifier for u in report.uploads],
            )

    async def create(
        self,
        files: Sequence[IncomingFile],
        persist: Callable[[AttachmentSet], Awaitable[T]],
    ) -> ReconcileOutcome[T]:
        """Upload files, then write the record with the surviving attachment set."""
        report = await self.ingest(files)
        try:
            record = await persist(report.attachments)
        except (MetadataWriteError, ResourceNotFoundException):
            self._log_leaked_uploads(report, "create")
            raise
        return ReconcileOutcome(
            state=LifecycleState.PERSISTED,
            record=record,
            attachments=report.attachments,
            failed_files=report.failures,
        )

    async def update(
        self,
        previous: AttachmentSet,
        files: Sequence[IncomingFile] | None,
        persist: Callable[[AttachmentSet | None], Awaitable[T]],
    ) -> ReconcileOutcome[T]:
        """Write the record; when files are supplied, replace the set and clean up orphans.

        Without files, persist receives None and no store call is made.
        """
        if not files:
            record = await persist(None)
            return ReconcileOutcome(
                state=LifecycleState.PERSISTED,
                record=record,
                attachments=previous,
            )
        report = await self.ingest(files)
        try:
            record = await persist(report.attachments)
        except (MetadataWriteError, ResourceNotFoundException):
            self._log_leaked_uploads(report, "update")
            raise
        orphans = previous.orphans(report.attachments)
        cleanup = await self.purge(orphans)
        return ReconcileOutcome(
            state=LifecycleState.PERSISTED,
            record=record,
            attachments=report.attachments,
            failed_files=report.failures,
            cleanup=cleanup,
        )

    async def delete(
        self,
        current: AttachmentSet,
        remove: Callable[[], Awaitable[T]],
    ) -> ReconcileOutcome[T]:
        """Delete every referenced asset (best effort), then remove the record."""
        # orphans against an empty set: every distinct locator, once.
        cleanup = await self.purge(current.orphans(AttachmentSet.empty()))
        record = await remove()
        return ReconcileOutcome(
            state=LifecycleState.REMOVED,
            record=record,
            attachments=AttachmentSet.empty(),
            cleanup=cleanup,
        )
