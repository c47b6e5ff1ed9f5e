"""Provider storing request-scoped data in the execution context."""

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

import httpx

from polyscript.errors import ConfigurationError, DataClassificationError, DataTypeError
from polyscript.platform import constants
from polyscript.platform.context import ExecutionContext

from .http import request_to_map, response_to_map
from .merge import copy_tree, deep_merge
from .provider import Provider

if TYPE_CHECKING:
    from polyscript.core.config import ContextKeysModel

logger = logging.getLogger(__name__)


class ContextProvider(Provider):
    """Reads and writes dynamic data under one key of the execution context.

    The stored value is a map split into buckets so scripts can tell
    generic input apart from HTTP data::

        {
            "input_data": {...},  # caller-supplied maps, merged together
            "request": {...},     # converted httpx.Request
            "response": {...},    # converted httpx.Response
        }

    The provider itself holds only configuration; all data lives in the
    contexts it produces.

    Example:
        >>> provider = ContextProvider()
        >>> ctx = provider.add_data_to_context(ExecutionContext(), {"name": "World"})
        >>> provider.get_data(ctx)
        {'input_data': {'name': 'World'}}
    """

    def __init__(
        self,
        context_key: str = constants.EVAL_DATA,
        *,
        input_key: str = constants.INPUT_DATA,
        request_key: str = constants.REQUEST,
        response_key: str = constants.RESPONSE,
    ):
        self.context_key = context_key
        self.input_key = input_key
        self.request_key = request_key
        self.response_key = response_key

    @classmethod
    def from_config(cls, config: "ContextKeysModel") -> "ContextProvider":
        """Create a provider using the keys from a loaded configuration."""
        return cls(
            config.context_key,
            input_key=config.input_key,
            request_key=config.request_key,
            response_key=config.response_key,
        )

    def __repr__(self) -> str:
        return f"ContextProvider(context_key={self.context_key!r})"

    def get_data(self, ctx: ExecutionContext) -> dict[str, Any]:
        """Return the data stored in ``ctx`` under the context key.

        Raises:
            ConfigurationError: If the context key is empty
            DataTypeError: If the stored value is not a string-keyed mapping
        """
        if not self.context_key:
            raise ConfigurationError("context key is empty")

        value = ctx.get(self.context_key)
        if value is None:
            return {}

        if not isinstance(value, Mapping):
            raise DataTypeError(
                f"invalid input data type: expected a mapping, got {type(value).__name__}"
            )

        return copy_tree(value)  # type: ignore[no-any-return]

    def add_data_to_context(self, ctx: ExecutionContext, *items: Any) -> ExecutionContext:
        """Classify ``items`` into buckets and store them in a new context.

        Maps go to the input bucket, ``httpx.Request`` to the request bucket
        and ``httpx.Response`` to the response bucket. Data already present in
        a bucket is deep-merged with the new data. ``None`` items are skipped.

        Unsupported items do not stop the loop. Everything that could be
        classified is still stored, and the resulting context travels on the
        raised error.

        Raises:
            ConfigurationError: If the context key is empty
            DataClassificationError: If any item could not be classified;
                ``error.context`` holds the partially enriched context
        """
        if not self.context_key:
            raise ConfigurationError("context key is empty", context=ctx)

        existing = ctx.get(self.context_key)
        to_store: dict[str, Any] = copy_tree(existing) if isinstance(existing, Mapping) else {}

        errors: list[Exception] = []
        for item in items:
            if item is None:
                continue

            try:
                bucket, data = self._classify(item)
            except (TypeError, ValueError, httpx.StreamError) as e:
                logger.debug(f"Skipping unclassifiable item: {e}")
                errors.append(e)
                continue

            current = to_store.get(bucket)
            if isinstance(current, Mapping):
                to_store[bucket] = deep_merge(current, data)
            else:
                to_store[bucket] = data

        new_ctx = ctx.with_value(self.context_key, to_store)
        if errors:
            raise DataClassificationError(errors, context=new_ctx)
        return new_ctx

    def _classify(self, item: Any) -> tuple[str, dict[str, Any]]:
        if isinstance(item, Mapping):
            for key in item:
                if not isinstance(key, str):
                    raise TypeError(f"unsupported key type in data map: {type(key).__name__}")
                if not key:
                    raise ValueError("empty keys are not allowed")
            return self.input_key, copy_tree(item)

        if isinstance(item, httpx.Request):
            return self.request_key, request_to_map(item)

        if isinstance(item, httpx.Response):
            return self.response_key, response_to_map(item)

        raise TypeError(f"unsupported data type for ContextProvider: {type(item).__name__}")
