"""Data providers feeding runtime data into script evaluations.

Example:
    >>> from polyscript.platform.context import ExecutionContext
    >>> from polyscript.platform.data import CompositeProvider, ContextProvider, StaticProvider
    >>>
    >>> provider = CompositeProvider(StaticProvider({"greeting": "Hello"}), ContextProvider())
    >>> ctx = provider.add_data_to_context(ExecutionContext(), {"name": "World"})
    >>> provider.get_data(ctx)
    {'greeting': 'Hello', 'input_data': {'name': 'World'}}
"""

from .composite import CompositeProvider
from .context_provider import ContextProvider
from .helpers import add_data_to_context_helper
from .http import request_to_map, response_to_map
from .merge import copy_tree, deep_merge
from .provider import Provider
from .static import StaticProvider

__all__ = [
    "Provider",
    "StaticProvider",
    "ContextProvider",
    "CompositeProvider",
    "add_data_to_context_helper",
    "deep_merge",
    "copy_tree",
    "request_to_map",
    "response_to_map",
]
