"""Configuration loader for the polyscript runtime configuration."""

import logging
import os
from pathlib import Path

import yaml
from pydantic import ValidationError

from .models import RuntimeConfigModel

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "POLYSCRIPT_CONFIG"


def _default_config_path() -> Path | None:
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)

    candidates = [Path.home() / ".polyscript" / "config.yaml", Path.cwd() / "polyscript.yaml"]
    for candidate in candidates:
        if candidate.exists():
            return candidate
    return None


def load_runtime_config(config_path: Path | None = None) -> RuntimeConfigModel:
    """Load the runtime configuration from a YAML file.

    Args:
        config_path: Optional path to the config file.
                    If not provided, looks for:
                    1. POLYSCRIPT_CONFIG environment variable
                    2. ~/.polyscript/config.yaml
                    3. ./polyscript.yaml

    Returns:
        RuntimeConfigModel with defaults for anything not configured

    Raises:
        FileNotFoundError: If an explicitly requested config file doesn't exist
        ValueError: If the file is not valid YAML or does not match the schema
    """
    if config_path is None:
        config_path = _default_config_path()
        if config_path is None:
            logger.info("No polyscript config file found, using defaults")
            return RuntimeConfigModel()

    if not config_path.exists():
        raise FileNotFoundError(f"polyscript config file not found at {config_path}")

    logger.debug(f"Loading polyscript config from: {config_path}")

    try:
        with open(config_path) as f:
            raw_config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Failed to parse YAML config file {config_path}: {e}") from e

    if not raw_config:
        logger.info("Empty polyscript config file, using defaults")
        return RuntimeConfigModel()

    if not isinstance(raw_config, dict):
        raise ValueError(f"Invalid polyscript config in {config_path}: expected a mapping")

    try:
        return RuntimeConfigModel.model_validate(raw_config.get("polyscript") or {})
    except ValidationError as e:
        raise ValueError(f"Invalid polyscript config: {e}") from e
