"""polyscript: compile scripts once, evaluate them many times with per-request data.

Example usage:
    >>> import polyscript
    >>> from polyscript.platform import ExecutionContext
    >>>
    >>> evaluator = polyscript.from_python_string_with_data(
    ...     'f"{ctx[\\'greeting\\']}, {ctx[\\'input_data\\'][\\'name\\']}!"',
    ...     {"greeting": "Hello"},
    ... )
    >>> ctx = evaluator.add_data_to_context(ExecutionContext(), {"name": "World"})
    >>> response = await evaluator.eval(ctx)
    >>> response.interface()
    'Hello, World!'
"""

import os
from collections.abc import Mapping
from typing import Any

from polyscript.engines import MachineType, from_loader
from polyscript.platform.context import ExecutionContext
from polyscript.platform.evaluator import Evaluator, EvaluatorResponse
from polyscript.platform.script.loader import FromDisk, FromString

__all__ = [
    "ExecutionContext",
    "Evaluator",
    "EvaluatorResponse",
    "MachineType",
    "from_loader",
    "from_python_file",
    "from_python_file_with_data",
    "from_python_string",
    "from_python_string_with_data",
    "from_sql_file",
    "from_sql_file_with_data",
    "from_sql_string",
    "from_sql_string_with_data",
]


def from_python_string(script: str) -> Evaluator:
    """Create a Python evaluator that only sees runtime data.

    Add data with ``evaluator.add_data_to_context`` before evaluating.
    """
    return from_loader(MachineType.PYTHON, FromString(script))


def from_python_string_with_data(script: str, static_data: Mapping[str, Any]) -> Evaluator:
    """Create a Python evaluator with static data plus runtime data.

    Runtime data added to a context overrides static values with the same key.
    """
    return from_loader(MachineType.PYTHON, FromString(script), static_data)


def from_python_file(path: str | os.PathLike[str]) -> Evaluator:
    """Create a Python evaluator from a script at an absolute path."""
    return from_loader(MachineType.PYTHON, FromDisk(path))


def from_python_file_with_data(
    path: str | os.PathLike[str], static_data: Mapping[str, Any]
) -> Evaluator:
    return from_loader(MachineType.PYTHON, FromDisk(path), static_data)


def from_sql_string(script: str) -> Evaluator:
    """Create a DuckDB evaluator that only sees runtime data."""
    return from_loader(MachineType.DUCKDB, FromString(script))


def from_sql_string_with_data(script: str, static_data: Mapping[str, Any]) -> Evaluator:
    """Create a DuckDB evaluator; ``$name`` parameters bind from static and runtime data."""
    return from_loader(MachineType.DUCKDB, FromString(script), static_data)


def from_sql_file(path: str | os.PathLike[str]) -> Evaluator:
    return from_loader(MachineType.DUCKDB, FromDisk(path))


def from_sql_file_with_data(
    path: str | os.PathLike[str], static_data: Mapping[str, Any]
) -> Evaluator:
    return from_loader(MachineType.DUCKDB, FromDisk(path), static_data)
