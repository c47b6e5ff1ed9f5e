import json
import logging
import os
import traceback
from pathlib import Path
from typing import Any

import click

from polyscript.core.config import LoggingConfigModel

DEBUG_ENV_VAR = "POLYSCRIPT_DEBUG"


def get_env_flag(env_var: str, default: bool = False) -> bool:
    """Get a boolean flag from an environment variable.

    Args:
        env_var: Name of the environment variable
        default: Default value if environment variable is not set

    Returns:
        True if the environment variable is set to "1", "true", or "yes" (case insensitive)
        False otherwise
    """
    value = os.environ.get(env_var, "").lower()
    return value in ("1", "true", "yes") if value else default


def configure_logging(
    debug: bool = False,
    log_level: str | None = None,
    log_format: str = "%(levelname)s:%(name)s:%(message)s",
) -> None:
    """Configure logging for all modules.

    Args:
        debug: Whether to enable debug logging (overrides log_level if True)
        log_level: Log level string ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
        log_format: Format string for the stderr handler
    """
    if not debug:
        debug = get_env_flag(DEBUG_ENV_VAR)

    if debug:
        level = logging.DEBUG
    elif log_level:
        level = getattr(logging, log_level.upper(), logging.WARNING)
    else:
        level = logging.WARNING

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove any existing handlers to avoid duplicate messages
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(logging.Formatter(log_format))
    root_logger.addHandler(stream_handler)

    for logger_name in logging.root.manager.loggerDict:
        logger = logging.getLogger(logger_name)
        logger.setLevel(level)
        logger.propagate = True


def configure_logging_from_config(logging_config: LoggingConfigModel, debug: bool = False) -> None:
    """Configure logging from the ``logging`` section of the runtime configuration."""
    configure_logging(debug=debug, log_level=logging_config.level, log_format=logging_config.format)


def load_json_argument(value: str, option: str) -> Any:
    """Parse a JSON option value, reading it from a file when it starts with ``@``.

    Raises:
        click.BadParameter: If the file is missing or the JSON is invalid
    """
    if value.startswith("@"):
        file_path = Path(value[1:])
        if not file_path.exists():
            raise click.BadParameter(f"JSON file not found: {file_path}", param_hint=option)
        try:
            with open(file_path) as f:
                return json.load(f)
        except json.JSONDecodeError as e:
            raise click.BadParameter(
                f"Invalid JSON in file {file_path}: {e}", param_hint=option
            ) from e

    try:
        return json.loads(value)
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"Invalid JSON: {e}", param_hint=option) from e


def format_error(error: Exception, debug: bool = False) -> dict[str, Any]:
    """Format an error for output.

    Args:
        error: The exception that occurred
        debug: Whether to include debug information

    Returns:
        Dict containing error information
    """
    error_info = {"error": str(error)}

    if debug:
        error_info["traceback"] = traceback.format_exc()
        error_info["type"] = error.__class__.__name__

    return error_info


def output_result(result: Any, json_output: bool = False) -> None:
    """Output a result in either JSON or human-readable format."""
    if json_output:
        click.echo(json.dumps({"status": "ok", "result": result}, indent=2, default=str))
    elif isinstance(result, list):
        for row in result:
            click.echo(row)
    else:
        click.echo(result)


def output_error(error: Exception, json_output: bool = False, debug: bool = False) -> None:
    """Output an error in either JSON or human-readable format, then abort.

    Args:
        error: The exception that occurred
        json_output: Whether to output in JSON format
        debug: Whether to include debug information
    """
    error_info = format_error(error, debug)

    if json_output:
        click.echo(json.dumps({"status": "error", **error_info}, indent=2))
    else:
        click.echo(f"Error: {error_info['error']}", err=True)
        if debug and "traceback" in error_info:
            click.echo("\nTraceback:", err=True)
            click.echo(error_info["traceback"], err=True)

    raise click.Abort()
