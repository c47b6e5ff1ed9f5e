"""
Global pytest configuration and fixtures.
"""

import os

import pytest

from polyscript.platform.context import ExecutionContext
from polyscript.platform.data import CompositeProvider, ContextProvider, StaticProvider


@pytest.fixture
def ctx() -> ExecutionContext:
    """An empty execution context."""
    return ExecutionContext()


@pytest.fixture
def context_provider() -> ContextProvider:
    """A ContextProvider using the default ``eval_data`` key."""
    return ContextProvider()


@pytest.fixture
def static_provider() -> StaticProvider:
    """A StaticProvider with nested configuration data."""
    return StaticProvider({"greeting": "Hello", "config": {"retries": 3, "timeout": 30}})


@pytest.fixture
def composite_provider(static_provider, context_provider) -> CompositeProvider:
    """Static data first, runtime data second."""
    return CompositeProvider(static_provider, context_provider)


@pytest.fixture(autouse=True)
def isolate_config_env(monkeypatch, tmp_path):
    """Keep user-level config files and debug flags out of every test.

    HOME points at an empty directory and the working directory has no
    ``polyscript.yaml``, so each test sees the built-in defaults unless it
    writes its own config.
    """
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.delenv("POLYSCRIPT_CONFIG", raising=False)
    monkeypatch.delenv("POLYSCRIPT_DEBUG", raising=False)
    original_cwd = os.getcwd()
    os.chdir(tmp_path)
    yield
    os.chdir(original_cwd)
