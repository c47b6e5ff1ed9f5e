"""Pydantic models and span types for polyscript telemetry."""

from enum import Enum
from typing import Any, Protocol

from pydantic import Field

from polyscript.core import PACKAGE_NAME, PACKAGE_VERSION
from polyscript.models import PolyscriptBaseModel


class StatusCode(Enum):
    """Span status codes."""

    UNSET = 0
    OK = 1
    ERROR = 2


class Status:
    """Span status: a status code plus an optional description."""

    def __init__(self, status_code: StatusCode, description: str | None = None):
        self.status_code = status_code
        self.description = description


class SpanKind(Enum):
    """Type of span.

    Describes the relationship of a span to other spans:
    - INTERNAL: Default, internal operation
    - SERVER: Server-side handling of a request
    - CLIENT: Client-side request to another service
    """

    INTERNAL = 0
    SERVER = 1
    CLIENT = 2


class Span(Protocol):
    """Protocol for span objects.

    Lets the OpenTelemetry span and the no-op span be used interchangeably.
    """

    def set_attribute(self, key: str, value: Any) -> None: ...

    def set_status(self, status: Status) -> None: ...

    def record_exception(self, exception: Exception) -> None: ...

    def is_recording(self) -> bool: ...


class TelemetryConfigModel(PolyscriptBaseModel):
    """Configuration for traces and metrics.

    Attributes:
        enabled: Global enable/disable for all telemetry
        endpoint: OTLP endpoint URL (e.g., http://localhost:4318)
        headers: Additional headers for OTLP requests
        service_name: Name of the service for identification
        service_version: Version of the service
        environment: Deployment environment (e.g., 'production', 'development')
        console_export: Print spans to the console instead of exporting them
        metrics_export_interval: How often to export metrics in seconds

    Example:
        >>> config = TelemetryConfigModel(
        ...     enabled=True,
        ...     endpoint="http://localhost:4318",
        ...     environment="production",
        ... )
    """

    enabled: bool = False
    endpoint: str | None = None
    headers: dict[str, str] | None = None
    service_name: str = PACKAGE_NAME
    service_version: str = PACKAGE_VERSION
    environment: str = "development"
    console_export: bool = False
    metrics_export_interval: int = Field(default=60, ge=1)
