"""Engine registry and evaluator factories.

Each machine type maps to a compiler factory and an evaluator factory. The
Python and DuckDB engines are registered on import; other backends can be
added with ``register_engine``.

Example usage:
    >>> from polyscript.engines import MachineType, from_loader
    >>> from polyscript.platform.script import FromString
    >>>
    >>> evaluator = from_loader(MachineType.PYTHON, FromString("ctx['greeting']"),
    ...                         static_data={"greeting": "Hello"})
    >>> (await evaluator.eval(ExecutionContext())).interface()
    'Hello'
"""

import logging
import threading
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from polyscript.core.config import ContextKeysModel
from polyscript.platform.data import CompositeProvider, ContextProvider, Provider, StaticProvider
from polyscript.platform.evaluator import Evaluator
from polyscript.platform.machines import MachineType
from polyscript.platform.script.content import Compiler
from polyscript.platform.script.loader import Loader
from polyscript.platform.script.unit import ExecutableUnit

from .base import BaseEvaluator
from .duckdb import DuckDBCompiler, DuckDBEvaluator
from .python import PythonCompiler, PythonEvaluator
from .response import EvalResult

logger = logging.getLogger(__name__)

CompilerFactory = Callable[[ContextKeysModel], Compiler]
EvaluatorFactory = Callable[[ExecutableUnit], Evaluator]


@dataclass(frozen=True)
class _Engine:
    compiler: CompilerFactory
    evaluator: EvaluatorFactory


_engines: dict[MachineType, _Engine] = {}
_lock = threading.Lock()


def register_engine(
    machine_type: MachineType,
    factory: EvaluatorFactory,
    compiler: CompilerFactory,
) -> None:
    """Register the backend for a machine type.

    Args:
        machine_type: The machine type the backend runs
        factory: Builds an evaluator for a compiled unit
        compiler: Builds a compiler from the context key configuration

    Raises:
        ValueError: If the machine type already has a backend
    """
    with _lock:
        if machine_type in _engines:
            raise ValueError(f"Engine for machine type '{machine_type.value}' is already registered")
        _engines[machine_type] = _Engine(compiler=compiler, evaluator=factory)
    logger.debug(f"Registered engine for machine type: {machine_type.value}")


def unregister_engine(machine_type: MachineType) -> None:
    """Remove the backend for a machine type, if any."""
    with _lock:
        _engines.pop(machine_type, None)


def available_engines() -> list[MachineType]:
    """Machine types with a registered backend."""
    with _lock:
        return list(_engines)


def _get_engine(machine_type: MachineType) -> _Engine:
    with _lock:
        engine = _engines.get(machine_type)
        if engine is None:
            available = [m.value for m in _engines]
            raise ValueError(
                f"Machine type '{machine_type.value}' not supported. Available: {available}"
            )
        return engine


def new_compiler(machine_type: MachineType, keys: ContextKeysModel | None = None) -> Compiler:
    """Create the compiler for ``machine_type``."""
    return _get_engine(machine_type).compiler(keys or ContextKeysModel())


def new_evaluator(unit: ExecutableUnit) -> Evaluator:
    """Create an evaluator for a compiled unit using its machine type's backend."""
    return _get_engine(unit.machine_type).evaluator(unit)


def new_data_provider(
    static_data: Mapping[str, Any] | None = None, keys: ContextKeysModel | None = None
) -> Provider:
    """Build the provider used by the factories.

    Without static data the script only sees runtime data; with static data
    the static values come first and runtime data overrides them.
    """
    keys = keys or ContextKeysModel()
    dynamic = ContextProvider.from_config(keys)
    if static_data is None:
        return dynamic
    return CompositeProvider(StaticProvider(static_data), dynamic)


def from_loader(
    machine_type: MachineType,
    loader: Loader,
    static_data: Mapping[str, Any] | None = None,
    *,
    keys: ContextKeysModel | None = None,
) -> Evaluator:
    """Compile the script from ``loader`` and return a ready evaluator.

    Args:
        machine_type: Engine to compile and run the script with
        loader: Source of the script
        static_data: Data fixed at creation time, visible to every evaluation
        keys: Context key configuration; defaults apply when omitted

    Raises:
        ValueError: If the machine type has no registered backend
        LoaderError: If the script cannot be loaded
        CompilerError: If the script does not compile
    """
    keys = keys or ContextKeysModel()
    compiler = new_compiler(machine_type, keys)
    unit = ExecutableUnit.create(
        loader,
        compiler,
        new_data_provider(static_data, keys),
        unit_id=loader.source_url,
    )
    return new_evaluator(unit)


register_engine(
    MachineType.PYTHON,
    PythonEvaluator,
    lambda keys: PythonCompiler(script_global=keys.script_global),
)
register_engine(
    MachineType.DUCKDB,
    DuckDBEvaluator,
    lambda keys: DuckDBCompiler(input_key=keys.input_key),
)

__all__ = [
    "BaseEvaluator",
    "CompilerFactory",
    "DuckDBCompiler",
    "DuckDBEvaluator",
    "EvalResult",
    "EvaluatorFactory",
    "MachineType",
    "PythonCompiler",
    "PythonEvaluator",
    "available_engines",
    "from_loader",
    "new_compiler",
    "new_data_provider",
    "new_evaluator",
    "register_engine",
    "unregister_engine",
]
