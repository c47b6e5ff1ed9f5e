"""DuckDB engine: scripts are single SQL statements with ``$name`` parameters."""

from .compiler import DuckDBCompiler, DuckDBContent
from .evaluator import DuckDBEvaluator, bind_parameters

__all__ = ["DuckDBCompiler", "DuckDBContent", "DuckDBEvaluator", "bind_parameters"]
