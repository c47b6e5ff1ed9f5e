"""Runtime configuration models and loader."""

from .loader import CONFIG_ENV_VAR, load_runtime_config
from .models import ContextKeysModel, LoggingConfigModel, RuntimeConfigModel

__all__ = [
    "CONFIG_ENV_VAR",
    "load_runtime_config",
    "ContextKeysModel",
    "LoggingConfigModel",
    "RuntimeConfigModel",
]
