"""Exception types raised by polyscript.

Operations that hand a context back to the caller (provider writes, the
context-enrichment helper) attach that context to the exception as
``error.context``. What it holds depends on the operation:

- ``StaticProviderNoRuntimeUpdatesError``: the original, untouched context
- ``DataClassificationError``: the partially enriched context
- ``ProviderError`` / ``ContextPreparationError`` / ``ConfigurationError``:
  the context as it stood before the operation started

Example:
    >>> try:
    ...     ctx = provider.add_data_to_context(ctx, {"name": "World"}, object())
    ... except DataClassificationError as e:
    ...     ctx = e.context  # keep what could be classified
    ...     for failure in e.errors:
    ...         logger.warning(failure)
"""

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from polyscript.platform.context import ExecutionContext

__all__ = [
    "PolyscriptError",
    "ConfigurationError",
    "DataTypeError",
    "StaticProviderNoRuntimeUpdatesError",
    "DataClassificationError",
    "ProviderError",
    "ContextPreparationError",
    "CompilerError",
    "LoaderError",
    "ScriptNotAvailableError",
    "SchemeUnsupportedError",
    "EvaluationError",
]


class PolyscriptError(Exception):
    """Base class for all polyscript errors."""

    def __init__(self, message: str, *, context: "ExecutionContext | None" = None) -> None:
        super().__init__(message)
        self.context = context


class ConfigurationError(PolyscriptError):
    """Raised for missing or invalid wiring: no provider, empty context key, no compiler."""


class DataTypeError(PolyscriptError, TypeError):
    """Raised when a context value exists but is not a string-keyed mapping."""


class StaticProviderNoRuntimeUpdatesError(PolyscriptError):
    """Raised whenever runtime data is written to a StaticProvider.

    CompositeProvider tolerates this error from its children.
    """

    default_message = "StaticProvider doesn't support adding data at runtime"

    def __init__(
        self, message: str | None = None, *, context: "ExecutionContext | None" = None
    ) -> None:
        super().__init__(message or self.default_message, context=context)


class DataClassificationError(PolyscriptError):
    """Raised when some items passed to a ContextProvider could not be classified.

    The context on the error still carries every item that was classified.
    """

    def __init__(
        self,
        errors: Sequence[Exception],
        *,
        context: "ExecutionContext | None" = None,
    ) -> None:
        self.errors = list(errors)
        super().__init__("\n".join(str(e) for e in self.errors), context=context)


class ProviderError(PolyscriptError):
    """Raised by CompositeProvider when one of its children fails."""

    def __init__(
        self, message: str, *, index: int, context: "ExecutionContext | None" = None
    ) -> None:
        super().__init__(message, context=context)
        self.index = index


class ContextPreparationError(PolyscriptError):
    """Raised by the context-enrichment helper when the provider rejects the data."""


class CompilerError(PolyscriptError):
    """Raised when a script fails to compile or the compiler is unusable."""


class LoaderError(PolyscriptError):
    """Base class for script loader errors."""


class ScriptNotAvailableError(LoaderError):
    """Raised when a loader has no script content to offer."""


class SchemeUnsupportedError(LoaderError):
    """Raised when a loader is given a URL scheme it cannot handle."""


class EvaluationError(PolyscriptError):
    """Raised when a compiled script fails during evaluation.

    ``response`` is set when the engine produced a result that is itself
    an error, such as a script returning a function object.
    """

    def __init__(self, message: str, *, response: Any = None) -> None:
        super().__init__(message)
        self.response = response
