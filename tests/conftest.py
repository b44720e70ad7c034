"""Pytest configuration and fixtures for the shelter API.

Environment is set before any app import: embedded SQLite, local media
backend under a temp dir. HTTP tests get a fresh app whose media store is an
in-memory fake and whose get_db yields sessions on an in-memory database.
"""

import os
import tempfile
from collections.abc import AsyncIterator, Callable
from io import BytesIO

_MEDIA_ROOT = tempfile.mkdtemp(prefix="shelter-media-")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("MEDIA_BACKEND", "local")
os.environ.setdefault("MEDIA_ROOT", _MEDIA_ROOT)
os.environ.setdefault("MEDIA_BASE_URL", "http://test/media")

import pytest
from httpx import ASGITransport, AsyncClient
from PIL import Image
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

import app.infrastructure.persistence.models  # noqa: F401  (register tables)
from app.application.dtos.media import UploadResult
from app.application.services.image_transformer import ImageTransformer, TransformOptions
from app.application.services.lifecycle_reconciler import LifecycleReconciler
from app.application.use_cases.media import MediaService
from app.core.config import get_settings
from app.core.limiter import limiter
from app.domain.exceptions import StoreDeleteError, StoreUploadError
from app.infrastructure.persistence.database import Base, get_db

limiter.enabled = False


class FakeMediaStore:
    """In-memory IMediaStore. Locators follow the remote store's URL shape.

    fail_uploads / fail_deletes hold filenames / identifiers that should fail.
    """

    def __init__(self) -> None:
        self.uploads: list[UploadResult] = []
        self.by_filename: dict[str | None, UploadResult] = {}
        self.deleted: list[str] = []
        self.fail_uploads: set[str] = set()
        self.fail_deletes: set[str] = set()
        self._counter = 0

    async def upload(
        self, data: bytes, content_type: str, filename: str | None = None
    ) -> UploadResult:
        if filename in self.fail_uploads:
            raise StoreUploadError(f"upload rejected for {filename}")
        self._counter += 1
        identifier = f"img{self._counter}"
        result = UploadResult(
            locator=f"https://res.example.com/demo/image/upload/v1/{identifier}.webp",
            identifier=identifier,
        )
        self.uploads.append(result)
        self.by_filename[filename] = result
        return result

    async def delete(self, identifier: str) -> None:
        if identifier in self.fail_deletes:
            raise StoreDeleteError(identifier, "result=error")
        self.deleted.append(identifier)


def encode_image(
    width: int = 120,
    height: int = 80,
    mode: str = "RGB",
    color: tuple = (200, 30, 30),
    fmt: str = "PNG",
) -> bytes:
    """Encode a solid-color image with Pillow."""
    buf = BytesIO()
    Image.new(mode, (width, height), color).save(buf, format=fmt)
    return buf.getvalue()


@pytest.fixture
def make_image() -> Callable[..., bytes]:
    """Factory for encoded test images (see encode_image)."""
    return encode_image


@pytest.fixture
def fake_store() -> FakeMediaStore:
    return FakeMediaStore()


@pytest.fixture
def transformer() -> ImageTransformer:
    """900x600 pipeline without watermark, PNG output (lossless for pixel checks)."""
    return ImageTransformer(
        TransformOptions(max_width=900, max_height=600, output_format="PNG")
    )


@pytest.fixture
async def db_session() -> AsyncIterator[AsyncSession]:
    """Session on a fresh in-memory SQLite database with all tables created."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    session_factory = async_sessionmaker(engine, expire_on_commit=False)
    async with session_factory() as session:
        yield session
    await engine.dispose()


@pytest.fixture
async def app_client(
    fake_store: FakeMediaStore, transformer: ImageTransformer
) -> AsyncIterator[AsyncClient]:
    """HTTP client on a fresh app: fake media store, in-memory database.

    ASGITransport does not run the lifespan, so app.state is wired here.
    """
    from app.main import create_app

    get_settings.cache_clear()
    app = create_app()
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    session_factory = async_sessionmaker(engine, expire_on_commit=False)

    async def _get_db() -> AsyncIterator[AsyncSession]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _get_db
    app.state.media_store = fake_store
    app.state.image_transformer = transformer
    app.state.reconciler = LifecycleReconciler(transformer, fake_store, max_concurrency=2)
    app.state.media_service = MediaService(transformer, fake_store)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    await engine.dispose()
