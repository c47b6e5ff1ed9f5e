"""polyscript telemetry - OpenTelemetry wrapper for observability.

Quick Start:
    ```python
    from polyscript.telemetry import (
        TelemetryConfigModel, configure_telemetry, traced_operation, record_counter
    )

    configure_telemetry(TelemetryConfigModel(enabled=True, endpoint="http://localhost:4318"))

    with traced_operation("my.operation", {"key": "value"}) as span:
        span.set_attribute("result", "success")

    record_counter("polyscript.eval.total", attributes={"machine": "python"})
    ```
"""

from .config import configure_telemetry, is_telemetry_enabled, shutdown_telemetry
from .metrics import (
    decrement_gauge,
    get_metrics_manager,
    increment_gauge,
    record_counter,
    record_gauge,
    record_histogram,
)
from .models import Span, SpanKind, Status, StatusCode, TelemetryConfigModel
from .tracer import get_current_span, set_span_attribute, traced_operation

__all__ = [
    # Configuration
    "configure_telemetry",
    "shutdown_telemetry",
    "is_telemetry_enabled",
    "TelemetryConfigModel",
    # Tracing
    "traced_operation",
    "get_current_span",
    "set_span_attribute",
    # Metrics
    "get_metrics_manager",
    "record_counter",
    "record_histogram",
    "record_gauge",
    "increment_gauge",
    "decrement_gauge",
    # Types
    "Span",
    "Status",
    "StatusCode",
    "SpanKind",
]
