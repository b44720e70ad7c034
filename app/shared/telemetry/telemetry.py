"""OpenTelemetry for the shelter API.

One tracer provider per process. Incoming requests (FastAPI), SQL queries
and log correlation are instrumented here; the reconciler and media store
clients open their own spans through app.shared.telemetry.tracing.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import TYPE_CHECKING

from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.logging import LoggingInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SpanExporter,
)
from opentelemetry.sdk.trace.sampling import ParentBased, TraceIdRatioBased
from sqlalchemy.ext.asyncio import AsyncEngine

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)

EXCLUDED_URLS = "/api/v1/health"


def _build_exporter(exporter_type: str, otlp_endpoint: str | None) -> SpanExporter | None:
    """Span exporter for the configured type. None means spans are recorded but not exported."""
    if exporter_type == "none":
        return None
    if exporter_type == "otlp" and otlp_endpoint:
        logger.info("Using OTLP span exporter: %s", otlp_endpoint)
        return OTLPSpanExporter(
            endpoint=otlp_endpoint,
            insecure=otlp_endpoint.startswith("http://"),
        )
    if exporter_type != "console":
        logger.warning("Unknown or incomplete exporter '%s', using console", exporter_type)
    return ConsoleSpanExporter()


class TelemetryConfig:
    """Tracer provider plus the instrumentations attached to this app.

    Each instrumentation is attempted on its own; one failing (e.g. an
    incompatible library version) is logged and the others still apply.
    """

    def __init__(
        self,
        service_name: str,
        service_version: str,
        environment: str = "development",
        media_backend: str | None = None,
    ) -> None:
        self.service_name = service_name
        self.service_version = service_version
        self.environment = environment
        self.media_backend = media_backend
        self.tracer_provider: TracerProvider | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> TelemetryConfig:
        return cls(
            service_name=settings.app_name,
            service_version=settings.app_version,
            environment=settings.telemetry_environment,
            media_backend=settings.media_backend.lower(),
        )

    def setup_provider(
        self,
        exporter_type: str = "console",
        otlp_endpoint: str | None = None,
        sample_rate: float = 1.0,
    ) -> TracerProvider:
        """Create the tracer provider and install it globally."""
        attributes = {
            SERVICE_NAME: self.service_name,
            SERVICE_VERSION: self.service_version,
            "deployment.environment": self.environment,
        }
        if self.media_backend:
            attributes["shelter.media_backend"] = self.media_backend
        provider = TracerProvider(
            resource=Resource(attributes=attributes),
            sampler=ParentBased(TraceIdRatioBased(sample_rate)),
        )
        exporter = _build_exporter(exporter_type, otlp_endpoint)
        if exporter is not None:
            provider.add_span_processor(BatchSpanProcessor(exporter))
        trace.set_tracer_provider(provider)
        self.tracer_provider = provider
        logger.info(
            "OpenTelemetry initialized: service=%s, version=%s, exporter=%s, sample_rate=%s",
            self.service_name,
            self.service_version,
            exporter_type,
            sample_rate,
        )
        return provider

    def _instrument(self, name: str, action: Callable[[TracerProvider], None]) -> bool:
        if self.tracer_provider is None:
            return False
        try:
            action(self.tracer_provider)
        except Exception as e:
            logger.exception("Failed to instrument %s: %s", name, e)
            return False
        logger.info("%s instrumentation enabled", name)
        return True

    def instrument_app(
        self,
        app: FastAPI,
        engine: AsyncEngine | None = None,
    ) -> None:
        """Instrument requests, SQL and log records."""
        self._instrument(
            "FastAPI",
            lambda tp: FastAPIInstrumentor.instrument_app(
                app, tracer_provider=tp, excluded_urls=EXCLUDED_URLS
            ),
        )
        if engine is not None:
            self._instrument(
                "SQLAlchemy",
                lambda tp: SQLAlchemyInstrumentor().instrument(
                    engine=engine.sync_engine, tracer_provider=tp
                ),
            )
        self._instrument(
            "logging",
            lambda tp: LoggingInstrumentor().instrument(
                tracer_provider=tp, set_logging_format=True
            ),
        )

    def shutdown(self) -> None:
        """Flush remaining spans and shut the provider down."""
        if self.tracer_provider is None:
            return
        try:
            self.tracer_provider.shutdown()
        except Exception as e:
            logger.exception("Error during telemetry shutdown: %s", e)


_telemetry: TelemetryConfig | None = None
_telemetry_lock = threading.RLock()


def get_telemetry() -> TelemetryConfig | None:
    """Return the process telemetry instance (set at startup)."""
    with _telemetry_lock:
        return _telemetry


def set_telemetry(telemetry: TelemetryConfig | None) -> None:
    """Set (or clear) the process telemetry instance."""
    global _telemetry
    with _telemetry_lock:
        _telemetry = telemetry
