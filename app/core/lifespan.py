"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic. No business logic here, only
wiring of infrastructure: the media store, the image transformer (watermark
loaded once), the lifecycle reconciler, telemetry and the DB engine.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from app.application.services.image_transformer import (
    ImageTransformer,
    TransformOptions,
    WatermarkOptions,
    load_watermark,
)
from app.application.services.lifecycle_reconciler import LifecycleReconciler
from app.application.use_cases.media import MediaService
from app.core.config import Settings, get_settings
from app.domain.enums import WatermarkCorner
from app.infrastructure.external.storage.factory import StorageFactory

logger = logging.getLogger(__name__)


def build_transformer(settings: Settings) -> ImageTransformer:
    """Image pipeline from settings. Raises ValueError if the watermark cannot be loaded."""
    watermark = None
    if settings.watermark_path:
        watermark = WatermarkOptions(
            image=load_watermark(settings.watermark_path),
            opacity=settings.watermark_opacity,
            corner=WatermarkCorner(settings.watermark_corner.lower()),
            margin_x=settings.watermark_margin_x,
            margin_y=settings.watermark_margin_y,
        )
        logger.info("Watermark loaded from %s", settings.watermark_path)
    return ImageTransformer(
        TransformOptions(
            max_width=settings.image_max_width,
            max_height=settings.image_max_height,
            watermark=watermark,
            output_format=settings.image_output_format.upper(),
            quality=settings.image_quality,
        )
    )


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: media store, transformer, reconciler, optional table
    creation, telemetry. Shutdown order: telemetry shutdown, SQL engine dispose.
    """
    settings = get_settings()

    # ---- Startup ----
    app.state.media_store = StorageFactory.create_media_store(settings)
    app.state.image_transformer = build_transformer(settings)
    app.state.reconciler = LifecycleReconciler(
        app.state.image_transformer,
        app.state.media_store,
        max_concurrency=settings.upload_concurrency,
    )
    app.state.media_service = MediaService(
        app.state.image_transformer, app.state.media_store
    )
    logger.info(
        "Media store ready: backend=%s, max %dx%d %s, concurrency=%d",
        settings.media_backend,
        settings.image_max_width,
        settings.image_max_height,
        settings.image_output_format,
        settings.upload_concurrency,
    )

    from app.infrastructure.persistence import database

    if settings.database_auto_create:
        await database.create_all()

    if settings.telemetry_enabled:
        from app.shared.telemetry.telemetry import TelemetryConfig, set_telemetry

        telemetry = TelemetryConfig.from_settings(settings)
        telemetry.setup_provider(
            exporter_type=settings.telemetry_exporter,
            otlp_endpoint=settings.telemetry_otlp_endpoint,
            sample_rate=settings.telemetry_sample_rate,
        )
        database._ensure_engine()
        telemetry.instrument_app(app, engine=database.engine)
        set_telemetry(telemetry)

    yield

    # ---- Shutdown ----
    from app.shared.telemetry.telemetry import get_telemetry, set_telemetry

    telemetry_instance = get_telemetry()
    if telemetry_instance is not None:
        telemetry_instance.shutdown()
        set_telemetry(None)
        logger.info("Telemetry shutdown complete")

    await database.dispose_engine()
    logger.info("Database engine disposed")
