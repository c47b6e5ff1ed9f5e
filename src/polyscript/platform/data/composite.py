"""Provider chaining several providers into one merged view."""

import logging
from typing import Any

from polyscript.errors import ProviderError, StaticProviderNoRuntimeUpdatesError
from polyscript.platform.context import ExecutionContext

from .merge import deep_merge
from .provider import Provider

logger = logging.getLogger(__name__)


class CompositeProvider(Provider):
    """Combines multiple providers, later providers overriding earlier ones.

    ``None`` entries are allowed and skipped. The list of providers is fixed
    at construction.

    Example:
        >>> composite = CompositeProvider(
        ...     StaticProvider({"config": {"retries": 3}}),
        ...     ContextProvider(),
        ... )
        >>> ctx = composite.add_data_to_context(ExecutionContext(), {"user": "admin"})
        >>> composite.get_data(ctx)
        {'config': {'retries': 3}, 'input_data': {'user': 'admin'}}
    """

    def __init__(self, *providers: Provider | None):
        self._providers: tuple[Provider | None, ...] = tuple(providers)

    def __repr__(self) -> str:
        return f"CompositeProvider({', '.join(repr(p) for p in self._providers)})"

    @property
    def providers(self) -> tuple[Provider | None, ...]:
        return self._providers

    def get_data(self, ctx: ExecutionContext) -> dict[str, Any]:
        """Query every provider in order and deep-merge the results.

        Stops at the first failing provider; no partial result is returned.

        Raises:
            ProviderError: chained to the failing provider's error
        """
        result: dict[str, Any] = {}

        for index, provider in enumerate(self._providers):
            if provider is None:
                continue

            try:
                data = provider.get_data(ctx)
            except Exception as e:
                raise ProviderError(f"error from provider {index}: {e}", index=index) from e

            result = deep_merge(result, data)

        return result

    def add_data_to_context(self, ctx: ExecutionContext, *items: Any) -> ExecutionContext:
        """Hand ``items`` to every provider, threading the context through.

        Providers that reject runtime data with
        ``StaticProviderNoRuntimeUpdatesError`` are skipped. Any other failure
        aborts the whole operation.

        Raises:
            ProviderError: chained to the failing provider's error; ``error.context``
                is the context passed in, not a partially enriched one
            StaticProviderNoRuntimeUpdatesError: if every provider rejected the data
        """
        current = ctx
        accepted = 0
        rejected = 0

        for index, provider in enumerate(self._providers):
            if provider is None:
                continue

            try:
                current = provider.add_data_to_context(current, *items)
            except StaticProviderNoRuntimeUpdatesError:
                logger.debug(f"Provider {index} does not accept runtime data, skipping")
                rejected += 1
                continue
            except Exception as e:
                raise ProviderError(
                    f"error from provider {index}: {e}", index=index, context=ctx
                ) from e

            accepted += 1

        if rejected and not accepted:
            raise StaticProviderNoRuntimeUpdatesError(context=ctx)

        return current
