"""Pydantic models for the polyscript runtime configuration.

The configuration can be loaded from a YAML file:

```yaml
polyscript:
  context:
    context_key: eval_data
    input_key: input_data
    request_key: request
    response_key: response
    script_global: ctx
  logging:
    level: INFO
  telemetry:
    enabled: true
    endpoint: http://localhost:4318
```
"""

from typing import Literal

from pydantic import Field

from polyscript.models import PolyscriptBaseModel
from polyscript.platform import constants
from polyscript.telemetry.models import TelemetryConfigModel


class ContextKeysModel(PolyscriptBaseModel):
    """Keys used to store dynamic data in an execution context.

    Attributes:
        context_key: Context key holding the data map
        input_key: Bucket for plain caller-supplied maps
        request_key: Bucket for HTTP request data
        response_key: Bucket for HTTP response data
        script_global: Name under which scripts see the merged data
    """

    context_key: str = constants.EVAL_DATA
    input_key: str = constants.INPUT_DATA
    request_key: str = constants.REQUEST
    response_key: str = constants.RESPONSE
    script_global: str = Field(default=constants.CTX, min_length=1)


class LoggingConfigModel(PolyscriptBaseModel):
    """Logging settings applied by the CLI."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    format: str = "%(levelname)s:%(name)s:%(message)s"


class RuntimeConfigModel(PolyscriptBaseModel):
    """Root configuration for polyscript.

    Example:
        >>> config = RuntimeConfigModel(
        ...     context=ContextKeysModel(context_key="request_data"),
        ...     logging=LoggingConfigModel(level="DEBUG"),
        ... )
    """

    context: ContextKeysModel = Field(default_factory=ContextKeysModel)
    logging: LoggingConfigModel = Field(default_factory=LoggingConfigModel)
    telemetry: TelemetryConfigModel = Field(default_factory=TelemetryConfigModel)
