"""Unit tests for the lifecycle reconciler (transform -> upload -> persist -> cleanup)."""

import asyncio
import logging
from collections.abc import Callable
from unittest.mock import AsyncMock

import pytest

from app.application.dtos.media import IncomingFile, UploadResult
from app.application.services.image_transformer import ImageTransformer
from app.application.services.lifecycle_reconciler import UNRESOLVABLE, LifecycleReconciler
from app.domain.enums import FailureStage, LifecycleState
from app.domain.exceptions import MetadataWriteError, ResourceNotFoundException
from app.domain.value_objects.media import AttachmentSet
from app.infrastructure.external.storage.local_storage import LocalMediaStore

RECONCILER_LOGGER = "app.application.services.lifecycle_reconciler"

OLD = [
    "https://res.example.com/demo/image/upload/v1/old1.webp",
    "https://res.example.com/demo/image/upload/v1/old2.webp",
]


@pytest.fixture
def reconciler(transformer: ImageTransformer, fake_store) -> LifecycleReconciler:
    return LifecycleReconciler(transformer, fake_store, max_concurrency=3)


@pytest.fixture
def files(make_image: Callable[..., bytes]) -> list[IncomingFile]:
    return [
        IncomingFile(f"photo{i}.png", "image/png", make_image(200 + i * 10, 100))
        for i in range(4)
    ]


def test_max_concurrency_must_be_positive(transformer: ImageTransformer, fake_store) -> None:
    with pytest.raises(ValueError):
        LifecycleReconciler(transformer, fake_store, max_concurrency=0)


class TestIngest:
    """Concurrent transform and upload of one batch."""

    async def test_empty_batch_makes_no_store_calls(self, reconciler, fake_store) -> None:
        report = await reconciler.ingest([])
        assert report.attachments.is_empty
        assert fake_store.uploads == []

    async def test_attachments_follow_submission_order(self, reconciler, fake_store, files) -> None:
        report = await reconciler.ingest(files)
        expected = [fake_store.by_filename[f.filename].locator for f in files]
        assert report.attachments.locators == expected
        assert report.failures == []

    async def test_bad_file_is_dropped_and_siblings_survive(
        self, reconciler, fake_store, files
    ) -> None:
        batch = [files[0], IncomingFile("broken.png", "image/png", b"nope"), files[1]]
        report = await reconciler.ingest(batch)
        assert report.attachments.locators == [
            fake_store.by_filename["photo0.png"].locator,
            fake_store.by_filename["photo1.png"].locator,
        ]
        assert len(report.failures) == 1
        failure = report.failures[0]
        assert (failure.index, failure.filename, failure.stage) == (
            1,
            "broken.png",
            FailureStage.TRANSFORM,
        )

    async def test_upload_failure_is_dropped(self, reconciler, fake_store, files) -> None:
        fake_store.fail_uploads.add("photo2.png")
        report = await reconciler.ingest(files)
        assert len(report.attachments) == 3
        assert report.failures[0].stage == FailureStage.UPLOAD
        assert report.failures[0].index == 2
        assert "upload rejected" in report.failures[0].reason

    async def test_unexpected_upload_error_is_dropped(self, reconciler, fake_store, files) -> None:
        """A non-store exception from one upload does not fail the batch."""
        original_upload = fake_store.upload

        async def upload(data: bytes, content_type: str, filename: str | None = None):
            if filename == "photo1.png":
                raise RuntimeError("socket closed")
            return await original_upload(data, content_type, filename)

        fake_store.upload = upload
        report = await reconciler.ingest(files)
        assert len(report.attachments) == 3
        assert [(f.index, f.stage, f.reason) for f in report.failures] == [
            (1, FailureStage.UPLOAD, "socket closed")
        ]

    async def test_concurrency_is_bounded(self, transformer: ImageTransformer, files) -> None:
        in_flight = 0
        peak = 0

        async def upload(data: bytes, content_type: str, filename: str | None = None):
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            await asyncio.sleep(0.01)
            in_flight -= 1
            return UploadResult(f"https://x/upload/v1/{filename}", filename or "")

        store = AsyncMock()
        store.upload.side_effect = upload
        reconciler = LifecycleReconciler(transformer, store, max_concurrency=2)
        report = await reconciler.ingest(files)
        assert len(report.attachments) == 4
        assert peak <= 2


class TestCreate:
    """Create: upload, then persist the surviving set."""

    async def test_persists_surviving_attachments(self, reconciler, fake_store, files) -> None:
        persist = AsyncMock(return_value="record")
        batch = [files[0], IncomingFile("bad.png", None, b"")]
        outcome = await reconciler.create(batch, persist)
        persisted = persist.await_args.args[0]
        assert persisted.locators == [fake_store.by_filename["photo0.png"].locator]
        assert outcome.state == LifecycleState.PERSISTED
        assert outcome.record == "record"
        assert outcome.attachments == persisted
        assert [f.filename for f in outcome.failed_files] == ["bad.png"]

    async def test_no_files_persists_empty_set(self, reconciler, fake_store) -> None:
        persist = AsyncMock(return_value="record")
        outcome = await reconciler.create([], persist)
        assert persist.await_args.args[0].is_empty
        assert outcome.attachments.is_empty
        assert fake_store.uploads == []

    async def test_metadata_failure_propagates_and_leaves_uploads(
        self, reconciler, fake_store, files
    ) -> None:
        """Uploads issued before a failed write are not rolled back."""
        persist = AsyncMock(side_effect=MetadataWriteError("create", "disk full"))
        with pytest.raises(MetadataWriteError):
            await reconciler.create(files[:2], persist)
        assert len(fake_store.uploads) == 2
        assert fake_store.deleted == []


class TestUpdate:
    """Update: persist first, delete orphans only after success."""

    async def test_without_files_leaves_photos_untouched(self, reconciler, fake_store) -> None:
        previous = AttachmentSet.from_locators(OLD)
        persist = AsyncMock(return_value="record")
        outcome = await reconciler.update(previous, None, persist)
        persist.assert_awaited_once_with(None)
        assert outcome.attachments == previous
        assert fake_store.uploads == []
        assert fake_store.deleted == []

    async def test_replaces_set_then_deletes_orphans(self, reconciler, fake_store, files) -> None:
        events: list[str] = []

        async def persist(photos):
            events.append(f"persist:{len(photos)}")
            return "record"

        original_delete = fake_store.delete

        async def delete(identifier: str) -> None:
            events.append(f"delete:{identifier}")
            await original_delete(identifier)

        fake_store.delete = delete
        outcome = await reconciler.update(AttachmentSet.from_locators(OLD), files[:1], persist)
        assert events == ["persist:1", "delete:old1", "delete:old2"]
        assert outcome.cleanup.deleted == ["old1", "old2"]
        assert outcome.attachments.locators == [fake_store.by_filename["photo0.png"].locator]

    async def test_cleanup_failures_are_reported_not_raised(
        self, reconciler, fake_store, files
    ) -> None:
        fake_store.fail_deletes.add("old1")
        previous = AttachmentSet.from_locators([*OLD, "garbage-without-slash"])
        outcome = await reconciler.update(previous, files[:1], AsyncMock(return_value="r"))
        assert outcome.cleanup.deleted == ["old2"]
        reasons = {f.locator: f for f in outcome.cleanup.failures}
        assert reasons[OLD[0]].identifier == "old1"
        assert reasons["garbage-without-slash"].identifier is None
        assert reasons["garbage-without-slash"].reason == UNRESOLVABLE

    async def test_failed_write_deletes_nothing(self, reconciler, fake_store, files) -> None:
        persist = AsyncMock(side_effect=MetadataWriteError("update", "locked"))
        with pytest.raises(MetadataWriteError):
            await reconciler.update(AttachmentSet.from_locators(OLD), files[:1], persist)
        assert fake_store.deleted == []

    async def test_not_found_during_persist_deletes_nothing(
        self, reconciler, fake_store, files, caplog
    ) -> None:
        """The record vanished mid-update: nothing deleted, new uploads logged as orphans."""
        caplog.set_level(logging.ERROR, logger=RECONCILER_LOGGER)
        persist = AsyncMock(side_effect=ResourceNotFoundException("animal", "a1"))
        with pytest.raises(ResourceNotFoundException):
            await reconciler.update(AttachmentSet.from_locators(OLD), files[:1], persist)
        assert fake_store.deleted == []
        leaked = [r for r in caplog.records if "leaving orphans" in r.getMessage()]
        assert len(leaked) == 1
        assert "img1" in leaked[0].getMessage()

    async def test_all_files_failing_replaces_with_empty_set(self, reconciler, fake_store) -> None:
        persist = AsyncMock(return_value="record")
        bad = [IncomingFile("x.png", None, b"bad")]
        outcome = await reconciler.update(AttachmentSet.from_locators(OLD), bad, persist)
        assert persist.await_args.args[0].is_empty
        assert outcome.cleanup.deleted == ["old1", "old2"]
        assert len(outcome.failed_files) == 1

    async def test_kept_locators_are_not_deleted(
        self, transformer: ImageTransformer, make_image: Callable[..., bytes]
    ) -> None:
        """A locator present in both sets survives the update."""
        store = AsyncMock()
        store.upload.return_value = UploadResult(OLD[0], "old1")
        reconciler = LifecycleReconciler(transformer, store)
        image = IncomingFile("same.png", "image/png", make_image())
        outcome = await reconciler.update(
            AttachmentSet.from_locators(OLD), [image], AsyncMock(return_value="r")
        )
        assert outcome.attachments.locators == [OLD[0]]
        store.delete.assert_awaited_once_with("old2")


class TestDelete:
    """Delete: best-effort purge of every reference, then the record."""

    async def test_purges_then_removes(self, reconciler, fake_store) -> None:
        events: list[str] = []
        original_delete = fake_store.delete

        async def delete(identifier: str) -> None:
            events.append(f"delete:{identifier}")
            await original_delete(identifier)

        async def remove():
            events.append("remove")
            return "record"

        fake_store.delete = delete
        outcome = await reconciler.delete(AttachmentSet.from_locators(OLD), remove)
        assert events == ["delete:old1", "delete:old2", "remove"]
        assert outcome.state == LifecycleState.REMOVED
        assert outcome.record == "record"
        assert outcome.attachments.is_empty

    async def test_store_failures_do_not_block_removal(self, reconciler, fake_store) -> None:
        fake_store.fail_deletes.update({"old1", "old2"})
        remove = AsyncMock(return_value="record")
        outcome = await reconciler.delete(AttachmentSet.from_locators(OLD), remove)
        remove.assert_awaited_once()
        assert outcome.cleanup.deleted == []
        assert len(outcome.cleanup.failures) == 2

    async def test_duplicate_locators_are_deleted_once(self, reconciler, fake_store) -> None:
        photos = AttachmentSet.from_locators([OLD[0], OLD[1], OLD[0]])
        await reconciler.delete(photos, AsyncMock(return_value=None))
        assert fake_store.deleted == ["old1", "old2"]

    async def test_record_without_photos_makes_no_store_calls(self, reconciler, fake_store) -> None:
        outcome = await reconciler.delete(AttachmentSet.empty(), AsyncMock(return_value="r"))
        assert fake_store.deleted == []
        assert outcome.cleanup.failures == []

    async def test_unusable_local_identifier_does_not_block_removal(
        self, transformer: ImageTransformer, tmp_path
    ) -> None:
        store = LocalMediaStore(str(tmp_path), "http://t/media")
        kept = await store.upload(b"x", "image/webp")
        photos = AttachmentSet.from_locators(["http://t/media/upload/v1/a\x00b.webp", kept.locator])
        remove = AsyncMock(return_value="record")
        outcome = await LifecycleReconciler(transformer, store).delete(photos, remove)
        remove.assert_awaited_once()
        assert outcome.cleanup.deleted == [kept.identifier]
        assert [f.identifier for f in outcome.cleanup.failures] == ["a\x00b"]
        assert store.path_for(kept.identifier) is None
