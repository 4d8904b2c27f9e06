"""Structured logging and OpenTelemetry wiring for the ordering service.

Exporters ship over OTLP/HTTP to ``OTEL_EXPORTER_OTLP_ENDPOINT``. When
``ENVIRONMENT=test`` the providers are installed without exporters so spans and
metrics are created but never leave the process.
"""

import logging
import os
from typing import Any

from opentelemetry import metrics, trace
from opentelemetry.exporter.otlp.proto.http.metric_exporter import OTLPMetricExporter
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.pymongo import PymongoInstrumentor
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from pythonjsonlogger import jsonlogger

logger = logging.getLogger(__name__)

DEFAULT_SERVICE_NAME = "ordering-svc"
DEFAULT_OTLP_ENDPOINT = "http://localhost:4318"
METRIC_EXPORT_INTERVAL_MS = 60000


def _otlp_url(signal: str) -> str:
    base = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT", DEFAULT_OTLP_ENDPOINT).rstrip("/")
    return f"{base}/v1/{signal}"


def get_service_resource() -> Resource:
    """Build the resource attached to every span and metric.

    Returns:
        Resource naming the service and its deployment environment
    """
    return Resource.create(
        {
            "service.name": os.getenv("OTEL_SERVICE_NAME", DEFAULT_SERVICE_NAME),
            "service.namespace": "restaurant",
            "deployment.environment": os.getenv("ENVIRONMENT", "development"),
        }
    )


def setup_tracing(resource: Resource) -> TracerProvider:
    """Install a tracer provider exporting batches of spans over OTLP.

    Args:
        resource: Service resource for trace identification

    Returns:
        The installed tracer provider
    """
    endpoint = _otlp_url("traces")
    provider = TracerProvider(resource=resource)
    provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(endpoint=endpoint)))
    trace.set_tracer_provider(provider)

    logger.info(f"Span export configured to {endpoint}")
    return provider


def setup_metrics(resource: Resource) -> MeterProvider:
    """Install a meter provider pushing metrics over OTLP every minute.

    Args:
        resource: Service resource for metric identification

    Returns:
        The installed meter provider
    """
    endpoint = _otlp_url("metrics")
    reader = PeriodicExportingMetricReader(
        OTLPMetricExporter(endpoint=endpoint),
        export_interval_millis=METRIC_EXPORT_INTERVAL_MS,
    )
    provider = MeterProvider(resource=resource, metric_readers=[reader])
    metrics.set_meter_provider(provider)

    logger.info(f"Metric export configured to {endpoint}")
    return provider


def setup_observability(app: Any = None, enable_exporters: bool = True) -> None:
    """Initialize tracing, metrics and auto-instrumentation.

    Args:
        app: Optional FastAPI application to instrument
        enable_exporters: Whether to enable OTLP exporters (forced off when ENVIRONMENT=test)
    """
    if os.getenv("ENVIRONMENT", "development") == "test":
        enable_exporters = False

    resource = get_service_resource()

    if enable_exporters:
        setup_tracing(resource)
        setup_metrics(resource)
    else:
        trace.set_tracer_provider(TracerProvider(resource=resource))
        metrics.set_meter_provider(MeterProvider(resource=resource))

    # MongoDB commands become child spans of the request span
    PymongoInstrumentor().instrument()

    if app is not None:
        FastAPIInstrumentor.instrument_app(app, excluded_urls="health")
        logger.info("FastAPI application instrumented")

    logger.info(f"Observability ready (exporters {'on' if enable_exporters else 'off'})")


def configure_logging(log_level: str = "INFO") -> None:
    """Send every log record to stdout as one JSON object.

    ``LOG_LEVEL`` in the environment takes precedence over ``log_level``.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    level_name = os.getenv("LOG_LEVEL", log_level).upper()
    level = getattr(logging, level_name, logging.INFO)

    handler = logging.StreamHandler()
    handler.setFormatter(
        jsonlogger.JsonFormatter(
            "%(asctime)s %(name)s %(levelname)s %(message)s",
            rename_fields={"levelname": "level", "name": "logger"},
            timestamp=True,
        )
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers[:] = [handler]

    # Driver heartbeat chatter drowns out request logs at DEBUG
    logging.getLogger("pymongo").setLevel(max(level, logging.INFO))

    logger.info(f"JSON logging configured at {level_name}")
