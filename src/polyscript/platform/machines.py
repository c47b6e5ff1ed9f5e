"""Machine types a compiled script can target."""

from enum import Enum


class MachineType(str, Enum):
    """Script engine a compiled script runs on.

    ``PYTHON`` and ``DUCKDB`` ship with polyscript. ``RISOR``, ``STARLARK``
    and ``EXTISM`` are recognised so third-party backends can register
    evaluators for them with ``polyscript.engines.register_engine``.
    """

    RISOR = "risor"
    STARLARK = "starlark"
    EXTISM = "extism"
    PYTHON = "python"
    DUCKDB = "duckdb"
