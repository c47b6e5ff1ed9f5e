"""Engine-agnostic platform: execution context, data providers, compiled scripts
and the evaluator contract every engine implements.

- `polyscript.platform.context`: immutable `ExecutionContext`
- `polyscript.platform.data`: `StaticProvider`, `ContextProvider`, `CompositeProvider`
- `polyscript.platform.script`: `ExecutableUnit`, compilers and loaders
- `polyscript.platform.evaluator`: `Evaluator` and `EvaluatorResponse` interfaces
"""

from .context import (
    ExecutionContext,
    get_execution_context,
    reset_execution_context,
    set_execution_context,
)
from .evaluator import DataPreparer, DataType, EvalOnly, Evaluator, EvaluatorResponse

__all__ = [
    # Context
    "ExecutionContext",
    "get_execution_context",
    "set_execution_context",
    "reset_execution_context",
    # Interfaces
    "DataPreparer",
    "DataType",
    "EvalOnly",
    "Evaluator",
    "EvaluatorResponse",
]
