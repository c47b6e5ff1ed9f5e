"""Context enrichment shared by every engine's evaluator."""

import logging
from typing import Any

from polyscript.errors import ConfigurationError, ContextPreparationError
from polyscript.platform.context import ExecutionContext

from .provider import Provider

logger = logging.getLogger(__name__)


def add_data_to_context_helper(
    ctx: ExecutionContext,
    provider: Provider | None,
    *items: Any,
    log: logging.Logger | None = None,
) -> ExecutionContext:
    """Enrich ``ctx`` with ``items`` through ``provider``.

    Every evaluator delegates here so that all engines report data
    preparation failures the same way.

    Args:
        ctx: The base context to enrich
        provider: The data provider of the executable unit
        *items: Data to add to the context
        log: Logger of the calling evaluator

    Returns:
        The enriched context

    Raises:
        ConfigurationError: If there is no provider
        ContextPreparationError: chained to the provider's error
    """
    log = log or logger

    if provider is None:
        log.warning("no data provider available for context preparation")
        raise ConfigurationError("no data provider available", context=ctx)

    try:
        return provider.add_data_to_context(ctx, *items)
    except Exception as e:
        raise ContextPreparationError(f"failed to prepare context: {e}", context=ctx) from e
