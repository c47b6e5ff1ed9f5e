"""Provider serving a fixed map of compile-time data."""

import logging
from collections.abc import Mapping
from typing import Any

from polyscript.errors import StaticProviderNoRuntimeUpdatesError
from polyscript.platform.context import ExecutionContext

from .merge import copy_tree
from .provider import Provider

logger = logging.getLogger(__name__)


class StaticProvider(Provider):
    """Supplies a predefined map of data.

    The map is copied at construction and never changes afterwards; every
    read returns a fresh copy, so callers cannot corrupt each other's view.
    Useful for configuration values and testing.

    Example:
        >>> provider = StaticProvider({"config": {"retries": 3}})
        >>> provider.get_data(ExecutionContext())
        {'config': {'retries': 3}}
    """

    def __init__(self, data: Mapping[str, Any] | None = None):
        self._data: dict[str, Any] = copy_tree(data) if data else {}

    def __repr__(self) -> str:
        return f"StaticProvider(keys={sorted(self._data)})"

    def get_data(self, ctx: ExecutionContext) -> dict[str, Any]:
        return copy_tree(self._data)  # type: ignore[no-any-return]

    def add_data_to_context(self, ctx: ExecutionContext, *items: Any) -> ExecutionContext:
        """Always raises: static data cannot be changed at runtime.

        Use a ContextProvider, or a CompositeProvider combining both, when
        runtime data is needed.

        Raises:
            StaticProviderNoRuntimeUpdatesError: always, carrying the original ``ctx``
        """
        raise StaticProviderNoRuntimeUpdatesError(context=ctx)
