"""OpenTelemetry wiring and the service's own instruments."""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import Any, Iterator

from fastapi import FastAPI
from opentelemetry import metrics, trace
from opentelemetry._logs import set_logger_provider
from opentelemetry.exporter.otlp.proto.grpc._log_exporter import OTLPLogExporter
from opentelemetry.exporter.otlp.proto.grpc.metric_exporter import OTLPMetricExporter
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.httpx import HTTPXClientInstrumentor
from opentelemetry.instrumentation.logging import LoggingInstrumentor
from opentelemetry.sdk._logs import LoggerProvider
from opentelemetry.sdk._logs.export import BatchLogRecordProcessor
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.sdk.trace.sampling import ParentBased, TraceIdRatioBased
from opentelemetry.semconv.resource import ResourceAttributes

from folio_api.config import AppSettings

logger = logging.getLogger(__name__)

_METER_NAME = "folio.performance"
_EXPORT_INTERVAL_MS = 10000
_installed = False


def setup_telemetry(app: FastAPI, settings: AppSettings) -> bool:
    """Install OTLP providers and instrument the app; returns whether telemetry is active.

    Spans, metrics and log records share one resource and one collector
    endpoint. Calling this twice is a no-op.
    """

    global _installed  # noqa: PLW0603 - single initialisation guard

    if _installed:
        return True
    if not settings.telemetry_enabled:
        logger.info("Telemetry disabled via configuration")
        return False

    resource = Resource.create(
        {
            ResourceAttributes.SERVICE_NAME: settings.telemetry_service_name or settings.app_name,
            ResourceAttributes.SERVICE_NAMESPACE: "folio",
        }
    )
    otlp: dict[str, Any] = {"insecure": settings.telemetry_otlp_insecure}
    if settings.telemetry_otlp_endpoint:
        otlp["endpoint"] = settings.telemetry_otlp_endpoint

    tracer_provider = TracerProvider(
        resource=resource,
        sampler=ParentBased(TraceIdRatioBased(settings.telemetry_sample_ratio)),
    )
    tracer_provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(**otlp)))
    trace.set_tracer_provider(tracer_provider)

    reader = PeriodicExportingMetricReader(OTLPMetricExporter(**otlp), export_interval_millis=_EXPORT_INTERVAL_MS)
    meter_provider = MeterProvider(resource=resource, metric_readers=[reader])
    metrics.set_meter_provider(meter_provider)

    logger_provider = LoggerProvider(resource=resource)
    logger_provider.add_log_record_processor(BatchLogRecordProcessor(OTLPLogExporter(**otlp)))
    set_logger_provider(logger_provider)
    LoggingInstrumentor().instrument(set_logging_format=False)

    FastAPIInstrumentor.instrument_app(app, tracer_provider=tracer_provider, meter_provider=meter_provider)
    # Ledger and price requests go through httpx.
    HTTPXClientInstrumentor().instrument()

    _installed = True
    logger.info("Telemetry exporting to %s", settings.telemetry_otlp_endpoint or "the default OTLP endpoint")
    return True


def get_tracer(name: str) -> trace.Tracer:
    """Tracer from the global provider; a no-op tracer until telemetry is set up."""

    return trace.get_tracer(name)


class PerformanceMetrics:
    """Counters and timings recorded around each performance computation."""

    def __init__(self, meter: metrics.Meter | None = None) -> None:
        meter = meter or metrics.get_meter(_METER_NAME)
        self.computations = meter.create_counter(
            "folio.performance.computations",
            description="Performance computations by period and outcome",
        )
        self.duration = meter.create_histogram(
            "folio.performance.duration",
            unit="s",
            description="Wall time spent computing one performance timeline",
        )
        self.price_series = meter.create_counter(
            "folio.performance.price_series",
            description="Price series requested from the configured provider",
        )

    @contextmanager
    def timed(self, period: str) -> Iterator[dict[str, str]]:
        """Record one computation; callers may set ``outcome`` on the yielded attributes."""

        attributes = {"period": period, "outcome": "ok"}
        started = time.perf_counter()
        try:
            yield attributes
        except Exception:
            attributes["outcome"] = "error"
            raise
        finally:
            self.duration.record(time.perf_counter() - started, {"period": period})
            self.computations.add(1, attributes)


__all__ = ["PerformanceMetrics", "get_tracer", "setup_telemetry"]
