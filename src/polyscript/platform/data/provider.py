"""Provider interface for runtime data handed to scripts.

A provider reads the data a script sees during evaluation and, for some
implementations, stores new data into an execution context. Three
implementations compose with each other:

- ``StaticProvider``: fixed compile-time data, rejects writes
- ``ContextProvider``: request-scoped data kept in the execution context
- ``CompositeProvider``: an ordered chain of providers merged together

Example implementation:
    >>> from polyscript.platform.data import Provider
    >>>
    >>> class EnvironmentProvider(Provider):
    ...     def get_data(self, ctx):
    ...         return {"env": dict(os.environ)}
    ...
    ...     def add_data_to_context(self, ctx, *items):
    ...         raise StaticProviderNoRuntimeUpdatesError(context=ctx)
"""

from abc import ABC, abstractmethod
from typing import Any

from polyscript.platform.context import ExecutionContext


class Provider(ABC):
    """Base interface for data providers."""

    @abstractmethod
    def get_data(self, ctx: ExecutionContext) -> dict[str, Any]:
        """Return the data visible to a script evaluated with ``ctx``.

        The returned dict belongs to the caller and may be mutated freely.

        Args:
            ctx: The execution context of the evaluation

        Returns:
            A string-keyed data map, empty when there is no data
        """

    @abstractmethod
    def add_data_to_context(self, ctx: ExecutionContext, *items: Any) -> ExecutionContext:
        """Return a new context enriched with ``items``.

        ``ctx`` itself is never modified.

        Args:
            ctx: The context to enrich
            *items: Data to store: maps, or HTTP requests/responses

        Returns:
            The enriched context
        """
