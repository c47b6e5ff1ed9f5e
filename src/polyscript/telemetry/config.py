"""Telemetry configuration for polyscript.

This module handles OpenTelemetry configuration and initialization,
hiding the OpenTelemetry APIs from the rest of the package.
"""

import logging

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SimpleSpanProcessor,
)

from .models import TelemetryConfigModel

logger = logging.getLogger(__name__)

# Global flag for telemetry state
_telemetry_enabled = False


def configure_telemetry(config: TelemetryConfigModel | None = None) -> None:
    """Configure tracing and metrics.

    Args:
        config: Telemetry settings. ``None`` or ``enabled=False`` disables telemetry.

    Example:
        >>> configure_telemetry(TelemetryConfigModel(enabled=True, console_export=True))
    """
    global _telemetry_enabled

    if config is None or not config.enabled:
        logger.info("Telemetry disabled")
        _telemetry_enabled = False
        return

    logger.info(f"Configuring telemetry with endpoint: {config.endpoint}")

    resource = Resource.create(
        {
            "service.name": config.service_name,
            "service.version": config.service_version,
            "deployment.environment": config.environment,
        }
    )
    provider = TracerProvider(resource=resource)

    exporter: ConsoleSpanExporter | OTLPSpanExporter
    processor: SimpleSpanProcessor | BatchSpanProcessor

    if config.console_export:
        exporter = ConsoleSpanExporter()
        processor = SimpleSpanProcessor(exporter)
    elif config.endpoint:
        exporter = OTLPSpanExporter(
            endpoint=f"{config.endpoint}/v1/traces", headers=config.headers or {}
        )
        processor = BatchSpanProcessor(exporter)
    else:
        logger.warning("Telemetry enabled but no endpoint configured")
        _telemetry_enabled = False
        return

    provider.add_span_processor(processor)
    trace.set_tracer_provider(provider)
    _telemetry_enabled = True

    if config.endpoint:
        from .metrics import configure_metrics

        configure_metrics(
            endpoint=config.endpoint,
            export_interval=config.metrics_export_interval,
            resource=resource,
        )

    logger.info(f"Telemetry configured successfully with {type(provider).__name__}")


def shutdown_telemetry() -> None:
    """Shutdown telemetry and flush any pending spans."""
    global _telemetry_enabled

    provider = trace.get_tracer_provider()
    if hasattr(provider, "shutdown"):
        provider.shutdown()
    _telemetry_enabled = False
    logger.info("Telemetry shutdown complete")


def is_telemetry_enabled() -> bool:
    """Check if telemetry is currently enabled."""
    return _telemetry_enabled
