"""Metrics support for polyscript using OpenTelemetry.

This module provides a simplified API for metrics collection that wraps
OpenTelemetry's metrics API. Every recording function is a no-op until
telemetry has been configured with an endpoint.
"""

import logging
from typing import Any

from opentelemetry import metrics
from opentelemetry.exporter.otlp.proto.http.metric_exporter import OTLPMetricExporter
from opentelemetry.metrics import Counter, Histogram, UpDownCounter
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
from opentelemetry.sdk.resources import Resource

from polyscript.core import PACKAGE_NAME, PACKAGE_VERSION

from .config import is_telemetry_enabled

logger = logging.getLogger(__name__)

_metrics_manager: "MetricsManager | None" = None


class MetricsManager:
    """Caches OpenTelemetry instruments by name."""

    def __init__(self, meter: metrics.Meter) -> None:
        self._meter = meter
        self._metrics: dict[str, Any] = {}

    def get_counter(self, name: str, description: str = "", unit: str = "") -> Counter:
        if name not in self._metrics:
            self._metrics[name] = self._meter.create_counter(
                name, description=description, unit=unit
            )
        return self._metrics[name]  # type: ignore[no-any-return]

    def get_histogram(self, name: str, description: str = "", unit: str = "") -> Histogram:
        if name not in self._metrics:
            self._metrics[name] = self._meter.create_histogram(
                name, description=description, unit=unit
            )
        return self._metrics[name]  # type: ignore[no-any-return]

    def get_gauge(self, name: str, description: str = "", unit: str = "") -> UpDownCounter:
        """Get or create a gauge metric.

        Note: OpenTelemetry uses UpDownCounter for gauge-like metrics.
        """
        if name not in self._metrics:
            self._metrics[name] = self._meter.create_up_down_counter(
                name, description=description, unit=unit
            )
        return self._metrics[name]  # type: ignore[no-any-return]


def configure_metrics(
    *,
    endpoint: str,
    export_interval: int = 60,
    resource: Resource | None = None,
) -> None:
    """Configure OTLP metrics export.

    Args:
        endpoint: OTLP endpoint for metrics export
        export_interval: Export interval in seconds
        resource: OpenTelemetry resource describing this service
    """
    global _metrics_manager

    exporter = OTLPMetricExporter(
        endpoint=endpoint if endpoint.endswith("/v1/metrics") else f"{endpoint}/v1/metrics"
    )
    reader = PeriodicExportingMetricReader(
        exporter=exporter, export_interval_millis=export_interval * 1000
    )
    provider = MeterProvider(
        resource=resource or Resource.create({"service.name": PACKAGE_NAME}),
        metric_readers=[reader],
    )
    metrics.set_meter_provider(provider)

    _metrics_manager = MetricsManager(metrics.get_meter(PACKAGE_NAME, PACKAGE_VERSION))
    logger.info(f"Configured OTLP metrics export to {endpoint}")


def get_metrics_manager() -> MetricsManager | None:
    """Get the global metrics manager, or None if metrics are disabled."""
    return _metrics_manager


def record_counter(
    name: str,
    value: int = 1,
    attributes: dict[str, Any] | None = None,
    description: str = "",
    unit: str = "1",
) -> None:
    """Record a counter metric."""
    if not _metrics_manager or not is_telemetry_enabled():
        return

    try:
        _metrics_manager.get_counter(name, description, unit).add(
            value, attributes=attributes or {}
        )
    except Exception as e:
        logger.debug(f"Failed to record counter {name}: {e}")


def record_histogram(
    name: str,
    value: float,
    attributes: dict[str, Any] | None = None,
    description: str = "",
    unit: str = "s",
) -> None:
    """Record a histogram metric."""
    if not _metrics_manager or not is_telemetry_enabled():
        return

    try:
        _metrics_manager.get_histogram(name, description, unit).record(
            value, attributes=attributes or {}
        )
    except Exception as e:
        logger.debug(f"Failed to record histogram {name}: {e}")


def record_gauge(
    name: str,
    value: int,
    attributes: dict[str, Any] | None = None,
    description: str = "",
    unit: str = "1",
) -> None:
    """Record a gauge metric (using UpDownCounter)."""
    if not _metrics_manager or not is_telemetry_enabled():
        return

    try:
        _metrics_manager.get_gauge(name, description, unit).add(
            value, attributes=attributes or {}
        )
    except Exception as e:
        logger.debug(f"Failed to record gauge {name}: {e}")


def increment_gauge(
    name: str,
    attributes: dict[str, Any] | None = None,
    description: str = "",
    unit: str = "1",
) -> None:
    """Increment a gauge metric by 1."""
    record_gauge(name, 1, attributes, description, unit)


def decrement_gauge(
    name: str,
    attributes: dict[str, Any] | None = None,
    description: str = "",
    unit: str = "1",
) -> None:
    """Decrement a gauge metric by 1."""
    record_gauge(name, -1, attributes, description, unit)
