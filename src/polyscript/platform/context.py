"""Immutable execution context for polyscript evaluations.

An ``ExecutionContext`` is the request-scoped carrier of dynamic data. It is
never mutated: ``with_value`` returns a new context and leaves the original
usable by other callers, so one compiled script can serve many concurrent
evaluations, each with its own context chain.

Example usage:
    >>> from polyscript.platform.context import ExecutionContext
    >>>
    >>> ctx = ExecutionContext()
    >>> enriched = ctx.with_value("eval_data", {"input_data": {"name": "World"}})
    >>> enriched.get("eval_data")
    {'input_data': {'name': 'World'}}
    >>> ctx.get("eval_data") is None
    True
"""

import contextvars
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any


@dataclass(frozen=True, eq=False)
class ExecutionContext:
    """Read-only key-value context.

    Keys are strings and values can be anything. Values stored in a context
    should be treated as read-only by everyone holding it.
    """

    _data: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self) -> None:
        if not isinstance(self._data, MappingProxyType):
            object.__setattr__(self, "_data", MappingProxyType(dict(self._data)))

    def get(self, key: str, default: Any = None) -> Any:
        """Get a value by key.

        Args:
            key: The key to look up
            default: Default value if key not found

        Returns:
            The value for the key, or default if not found
        """
        return self._data.get(key, default)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def keys(self) -> Iterator[str]:
        return iter(self._data)

    def with_value(self, key: str, value: Any) -> "ExecutionContext":
        """Return a new context with ``key`` set to ``value``.

        Args:
            key: The key to set
            value: The value to store

        Returns:
            A new ExecutionContext; this one is left unchanged
        """
        data = dict(self._data)
        data[key] = value
        return ExecutionContext(_data=data)

    def with_values(self, **values: Any) -> "ExecutionContext":
        """Return a new context with several keys set at once."""
        data = dict(self._data)
        data.update(values)
        return ExecutionContext(_data=data)


# Thread-safe context management using contextvars.
# Lets code running inside an engine (for example a Python script calling
# back into the host) reach the context of the evaluation it belongs to.
execution_context_var = contextvars.ContextVar[ExecutionContext | None](
    "execution_context", default=None
)


def get_execution_context() -> ExecutionContext | None:
    """
    Get the execution context of the evaluation currently running.

    Returns:
        The ExecutionContext if available, None otherwise.
    """
    return execution_context_var.get()


def set_execution_context(
    context: ExecutionContext | None,
) -> "contextvars.Token[ExecutionContext | None]":
    """
    Set the execution context in the current context.

    Args:
        context: The ExecutionContext to set

    Returns:
        A token that can be used to reset the context
    """
    return execution_context_var.set(context)


def reset_execution_context(token: "contextvars.Token[ExecutionContext | None]") -> None:
    """
    Reset the execution context using a token.

    Args:
        token: The token returned by set_execution_context
    """
    execution_context_var.reset(token)
