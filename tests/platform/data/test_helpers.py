"""Tests for the shared context-enrichment helper."""

import logging

import pytest

from polyscript.errors import (
    ConfigurationError,
    ContextPreparationError,
    StaticProviderNoRuntimeUpdatesError,
)
from polyscript.platform.data import ContextProvider, StaticProvider, add_data_to_context_helper


class TestAddDataToContextHelper:
    """Test the helper every evaluator delegates to."""

    def test_delegates_to_provider(self, ctx):
        """Data reaches the provider and the enriched context is returned."""
        provider = ContextProvider()
        new_ctx = add_data_to_context_helper(ctx, provider, {"a": 1})
        assert provider.get_data(new_ctx) == {"input_data": {"a": 1}}

    def test_missing_provider(self, ctx, caplog):
        """No provider is a configuration error carrying the original context."""
        with caplog.at_level(logging.WARNING):
            with pytest.raises(ConfigurationError) as exc_info:
                add_data_to_context_helper(ctx, None, {"a": 1})

        assert exc_info.value.context is ctx
        assert "no data provider" in caplog.text

    def test_provider_errors_wrapped(self, ctx):
        """Provider failures are wrapped uniformly with the cause chained."""
        with pytest.raises(ContextPreparationError) as exc_info:
            add_data_to_context_helper(ctx, StaticProvider({"a": 1}), {"b": 2})

        assert exc_info.value.context is ctx
        assert isinstance(exc_info.value.__cause__, StaticProviderNoRuntimeUpdatesError)
        assert "failed to prepare context" in str(exc_info.value)

    def test_uses_caller_logger(self, ctx, caplog):
        """Warnings go to the logger passed by the caller."""
        log = logging.getLogger("polyscript.tests.helper")
        with caplog.at_level(logging.WARNING, logger="polyscript.tests.helper"):
            with pytest.raises(ConfigurationError):
                add_data_to_context_helper(ctx, None, log=log)

        assert any(r.name == "polyscript.tests.helper" for r in caplog.records)
