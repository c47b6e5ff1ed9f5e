"""Tests for ExecutableUnit construction."""

import dataclasses
import io
from typing import BinaryIO

import pytest

from polyscript.engines.python import PythonCompiler
from polyscript.errors import CompilerError, ConfigurationError, LoaderError
from polyscript.platform.data import ContextProvider
from polyscript.platform.machines import MachineType
from polyscript.platform.script import (
    CHECKSUM_LENGTH,
    Compiler,
    ExecutableContent,
    ExecutableUnit,
    FromString,
    Loader,
    sha256_hex,
)


class BrokenLoader(Loader):
    """Loader that can never supply a script."""

    def get_reader(self) -> BinaryIO:
        raise OSError("disk on fire")

    @property
    def source_url(self) -> str:
        return "broken://loader"


class TrackingReader(io.BytesIO):
    """BytesIO remembering whether it was closed."""

    closed_by_caller = False

    def close(self) -> None:
        TrackingReader.closed_by_caller = True
        super().close()


class TrackingLoader(Loader):
    def get_reader(self) -> BinaryIO:
        return TrackingReader(b"1 + 1")

    @property
    def source_url(self) -> str:
        return "tracking://loader"


class RejectingCompiler(Compiler):
    def compile(self, reader: BinaryIO) -> ExecutableContent:
        raise ValueError("not today")


class TestExecutableUnitCreate:
    """Test compiling scripts into units."""

    def test_create_compiles_content(self):
        """A successful create populates content and machine type."""
        provider = ContextProvider()
        unit = ExecutableUnit.create(FromString("1 + 1"), PythonCompiler(), provider)

        assert unit.content.source == "1 + 1"
        assert unit.machine_type is MachineType.PYTHON
        assert unit.data_provider is provider
        assert isinstance(unit.compiler, PythonCompiler)
        assert unit.loader.source_url.startswith("string://inline/")
        assert unit.created_at.tzinfo is not None

    def test_id_derived_from_source_hash(self):
        """Without an explicit ID the truncated source hash is used."""
        unit = ExecutableUnit.create(FromString("'hello'"), PythonCompiler())

        assert len(unit.id) == CHECKSUM_LENGTH == 12
        assert unit.id == sha256_hex("'hello'")[:12]

    def test_same_source_same_id(self):
        """Identical sources get identical IDs."""
        a = ExecutableUnit.create(FromString("x = 1"), PythonCompiler())
        b = ExecutableUnit.create(FromString("x = 1"), PythonCompiler())
        assert a.id == b.id

    def test_explicit_id(self):
        """A caller-supplied ID is kept as is."""
        unit = ExecutableUnit.create(FromString("1"), PythonCompiler(), unit_id="my-script")
        assert unit.id == "my-script"

    def test_unit_is_immutable(self):
        """Fields cannot be reassigned after creation."""
        unit = ExecutableUnit.create(FromString("1"), PythonCompiler())
        with pytest.raises(dataclasses.FrozenInstanceError):
            unit.id = "other"  # type: ignore[misc]

    def test_missing_compiler(self):
        """A None compiler is a configuration error."""
        with pytest.raises(ConfigurationError, match="compiler"):
            ExecutableUnit.create(FromString("1"), None)  # type: ignore[arg-type]

    def test_missing_loader(self):
        """A None loader is a configuration error."""
        with pytest.raises(ConfigurationError, match="loader"):
            ExecutableUnit.create(None, PythonCompiler())  # type: ignore[arg-type]

    def test_loader_failure(self):
        """Loader errors abort creation."""
        with pytest.raises(LoaderError, match="disk on fire"):
            ExecutableUnit.create(BrokenLoader(), PythonCompiler())

    def test_compiler_failure_wrapped(self):
        """Unexpected compiler exceptions become CompilerError."""
        with pytest.raises(CompilerError, match="not today") as exc_info:
            ExecutableUnit.create(FromString("1"), RejectingCompiler())
        assert isinstance(exc_info.value.__cause__, ValueError)

    def test_compile_error_propagates(self):
        """Syntax errors surface as CompilerError."""
        with pytest.raises(CompilerError):
            ExecutableUnit.create(FromString("def broken(:"), PythonCompiler())

    def test_reader_closed(self):
        """The loader's reader is closed after compiling."""
        TrackingReader.closed_by_caller = False
        ExecutableUnit.create(TrackingLoader(), PythonCompiler())
        assert TrackingReader.closed_by_caller
