"""Interfaces implemented by every engine backend.

Hosts compile a script once into an evaluator, then for each request
enrich a context and evaluate against it:

    >>> evaluator = polyscript.from_python_string_with_data(script, {"greeting": "Hello"})
    >>> ctx = evaluator.add_data_to_context(ExecutionContext(), {"name": "World"})
    >>> response = await evaluator.eval(ctx)
    >>> response.interface()
    'Hello, World!'
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from enum import Enum
from typing import Any

from .context import ExecutionContext


class DataType(str, Enum):
    """Type of a value returned by a script."""

    BOOL = "bool"
    ERROR = "error"
    FUNCTION = "function"
    INT = "int"
    MAP = "map"
    STRING = "string"
    NONE = "none"
    FLOAT = "float"
    LIST = "list"
    TUPLE = "tuple"
    SET = "set"
    OBJECT = "object"

    @classmethod
    def from_value(cls, value: Any) -> "DataType":
        """Classify a native Python value."""
        if value is None:
            return cls.NONE
        # bool before int: bool is an int subclass
        if isinstance(value, bool):
            return cls.BOOL
        if isinstance(value, int):
            return cls.INT
        if isinstance(value, float):
            return cls.FLOAT
        if isinstance(value, str | bytes):
            return cls.STRING
        if isinstance(value, Mapping):
            return cls.MAP
        if isinstance(value, list):
            return cls.LIST
        if isinstance(value, tuple):
            return cls.TUPLE
        if isinstance(value, set | frozenset):
            return cls.SET
        if isinstance(value, BaseException):
            return cls.ERROR
        if callable(value):
            return cls.FUNCTION
        return cls.OBJECT


class EvaluatorResponse(ABC):
    """Result of one script evaluation."""

    @abstractmethod
    def type(self) -> DataType:
        """Type of the returned value."""

    @abstractmethod
    def inspect(self) -> str:
        """String representation of the returned value."""

    @abstractmethod
    def interface(self) -> Any:
        """The returned value as a native Python object."""

    @property
    @abstractmethod
    def script_exe_id(self) -> str:
        """ID of the executable unit that produced this response."""

    @property
    @abstractmethod
    def exec_time(self) -> str:
        """How long the evaluation took, e.g. ``"1.204ms"``."""


class EvalOnly(ABC):
    """Evaluates a pre-compiled script."""

    @abstractmethod
    async def eval(self, ctx: ExecutionContext) -> EvaluatorResponse:
        """Evaluate the compiled script with the data visible through ``ctx``.

        The script was compiled when the evaluator was created; evaluation
        only reads immutable state, so one evaluator may serve many
        concurrent calls, each with its own context.

        Cancellation follows asyncio: cancelling the awaiting task abandons
        the evaluation.
        """


class DataPreparer(ABC):
    """Enriches contexts with runtime data for later evaluation.

    Separating preparation from evaluation lets the two steps happen in
    different places, for example preparing in request middleware and
    evaluating in a handler.
    """

    @abstractmethod
    def add_data_to_context(
        self, ctx: ExecutionContext, *data: Mapping[str, Any]
    ) -> ExecutionContext:
        """Return a new context carrying ``data`` maps."""

    @abstractmethod
    def prepare_context(self, ctx: ExecutionContext, *items: Any) -> ExecutionContext:
        """Return a new context carrying ``items``: maps or HTTP requests/responses."""


class Evaluator(EvalOnly, DataPreparer):
    """Evaluation plus data preparation for one compiled script."""
