"""Tests for CompositeProvider."""

from typing import Any

import pytest

from polyscript.errors import (
    DataClassificationError,
    ProviderError,
    StaticProviderNoRuntimeUpdatesError,
)
from polyscript.platform.context import ExecutionContext
from polyscript.platform.data import (
    CompositeProvider,
    ContextProvider,
    Provider,
    StaticProvider,
    deep_merge,
)


class FailingProvider(Provider):
    """Provider whose every operation fails."""

    def get_data(self, ctx: ExecutionContext) -> dict[str, Any]:
        raise RuntimeError("backend unavailable")

    def add_data_to_context(self, ctx: ExecutionContext, *items: Any) -> ExecutionContext:
        raise RuntimeError("backend unavailable")


class RecordingProvider(Provider):
    """Provider recording the contexts it receives."""

    def __init__(self, key: str):
        self.key = key
        self.seen: list[ExecutionContext] = []

    def get_data(self, ctx: ExecutionContext) -> dict[str, Any]:
        return {self.key: ctx.get(self.key)}

    def add_data_to_context(self, ctx: ExecutionContext, *items: Any) -> ExecutionContext:
        self.seen.append(ctx)
        return ctx.with_value(self.key, len(items))


class TestCompositeProviderGetData:
    """Test merged reads across child providers."""

    def test_empty_composite(self, ctx):
        """No children yields an empty map."""
        assert CompositeProvider().get_data(ctx) == {}

    def test_later_providers_override(self, ctx):
        """Results fold left to right with deep_merge."""
        p1 = StaticProvider({"k": 1, "only1": True, "nested": {"a": 1}})
        p2 = StaticProvider({"k": 2, "nested": {"b": 2}})
        p3 = StaticProvider({"k": 3, "nested": {"a": 3}})

        result = CompositeProvider(p1, p2, p3).get_data(ctx)

        expected = deep_merge(deep_merge(p1.get_data(ctx), p2.get_data(ctx)), p3.get_data(ctx))
        assert result == expected
        assert result == {"k": 3, "only1": True, "nested": {"a": 3, "b": 2}}

    def test_context_wins_over_static(self):
        """Runtime data overrides static data on conflict."""
        composite = CompositeProvider(
            StaticProvider({"shared": "static_value", "static_key": "v"}),
            ContextProvider(),
        )
        ctx = ExecutionContext().with_value(
            "eval_data", {"shared": "runtime_value", "runtime_key": "v2"}
        )

        assert composite.get_data(ctx) == {
            "shared": "runtime_value",
            "static_key": "v",
            "runtime_key": "v2",
        }

    def test_nested_composites_outermost_wins(self, ctx):
        """With three levels of nesting the outermost static value wins."""
        level3 = StaticProvider(
            {"level": 3, "level3_key": "level3_value", "override_key": "level3_value"}
        )
        level2 = StaticProvider(
            {"level": 2, "level2_key": "level2_value", "override_key": "level2_value"}
        )
        level1 = StaticProvider(
            {"level": 1, "level1_key": "level1_value", "override_key": "level1_value"}
        )
        composite = CompositeProvider(CompositeProvider(level3, level2), level1)

        assert composite.get_data(ctx) == {
            "level": 1,
            "level1_key": "level1_value",
            "level2_key": "level2_value",
            "level3_key": "level3_value",
            "override_key": "level1_value",
        }

    def test_none_entries_skipped(self, ctx):
        """None entries behave as if they were absent."""
        a = StaticProvider({"a": 1, "k": "a"})
        b = StaticProvider({"b": 2, "k": "b"})

        with_nones = CompositeProvider(None, a, None, b, None)
        without = CompositeProvider(a, b)

        assert with_nones.get_data(ctx) == without.get_data(ctx)

    def test_fail_fast(self, ctx):
        """The first failing child aborts the read."""
        composite = CompositeProvider(
            StaticProvider({"a": 1}), FailingProvider(), StaticProvider({"b": 2})
        )

        with pytest.raises(ProviderError) as exc_info:
            composite.get_data(ctx)

        assert exc_info.value.index == 1
        assert isinstance(exc_info.value.__cause__, RuntimeError)
        assert "backend unavailable" in str(exc_info.value)

    def test_read_stability(self, composite_provider, ctx):
        """Sequential reads return equal maps."""
        enriched = composite_provider.add_data_to_context(ctx, {"name": "World"})
        assert composite_provider.get_data(enriched) == composite_provider.get_data(enriched)


class TestCompositeProviderAddData:
    """Test context enrichment across child providers."""

    def test_static_rejection_tolerated(self, ctx):
        """Static children are skipped; the context child receives the data."""
        composite = CompositeProvider(StaticProvider({"x": 1}), ContextProvider())
        new_ctx = composite.add_data_to_context(ctx, {"name": "World"})

        assert composite.get_data(new_ctx) == {"x": 1, "input_data": {"name": "World"}}

    def test_all_static_rejects(self, ctx):
        """A composite of only static providers rejects runtime data."""
        composite = CompositeProvider(StaticProvider({"a": 1}), StaticProvider({"b": 2}))

        with pytest.raises(StaticProviderNoRuntimeUpdatesError) as exc_info:
            composite.add_data_to_context(ctx, {"name": "World"})

        assert exc_info.value.context is ctx

    def test_nested_all_static_rejects(self, ctx):
        """A nested all-static composite is itself treated as static."""
        inner = CompositeProvider(StaticProvider({"a": 1}))
        outer = CompositeProvider(inner, StaticProvider({"b": 2}))

        with pytest.raises(StaticProviderNoRuntimeUpdatesError):
            outer.add_data_to_context(ctx, {"x": 1})

    def test_empty_composite_returns_context(self, ctx):
        """With no children the context comes back unchanged."""
        assert CompositeProvider().add_data_to_context(ctx, {"a": 1}) is ctx

    def test_context_threaded_through_children(self, ctx):
        """Each child receives the context produced by the previous one."""
        first = RecordingProvider("first")
        second = RecordingProvider("second")

        result = CompositeProvider(first, second).add_data_to_context(ctx, {"a": 1}, {"b": 2})

        assert first.seen == [ctx]
        assert second.seen[0].get("first") == 2
        assert result.get("first") == 2
        assert result.get("second") == 2

    def test_other_errors_are_all_or_nothing(self, ctx):
        """A non-static failure returns the original context on the error."""
        recorder = RecordingProvider("before")
        composite = CompositeProvider(recorder, FailingProvider(), ContextProvider())

        with pytest.raises(ProviderError) as exc_info:
            composite.add_data_to_context(ctx, {"a": 1})

        error = exc_info.value
        assert error.index == 1
        assert error.context is ctx
        assert error.context.get("before") is None

    def test_classification_errors_propagate(self, ctx):
        """A partial failure in a child context provider aborts the composite."""
        composite = CompositeProvider(StaticProvider({"a": 1}), ContextProvider())

        with pytest.raises(ProviderError) as exc_info:
            composite.add_data_to_context(ctx, {"ok": 1}, object())

        assert isinstance(exc_info.value.__cause__, DataClassificationError)
        assert exc_info.value.context is ctx

    def test_none_entries_skipped(self, ctx):
        """None children are ignored when adding data."""
        composite = CompositeProvider(None, ContextProvider(), None)
        new_ctx = composite.add_data_to_context(ctx, {"a": 1})
        assert composite.get_data(new_ctx) == {"input_data": {"a": 1}}

    def test_original_context_untouched(self, composite_provider, ctx):
        """Enrichment never mutates the context passed in."""
        composite_provider.add_data_to_context(ctx, {"a": 1})
        assert list(ctx.keys()) == []

    def test_providers_property(self, static_provider, context_provider):
        """The children are exposed in construction order."""
        composite = CompositeProvider(static_provider, None, context_provider)
        assert composite.providers == (static_provider, None, context_provider)
