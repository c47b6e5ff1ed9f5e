"""Compiler validating single-statement DuckDB SQL scripts."""

import logging
from typing import Any, BinaryIO

import duckdb

from polyscript.errors import CompilerError
from polyscript.platform import constants
from polyscript.platform.machines import MachineType
from polyscript.platform.script.content import Compiler, ExecutableContent

logger = logging.getLogger(__name__)


class DuckDBContent(ExecutableContent):
    """A parsed SQL statement and the named parameters it expects."""

    def __init__(
        self,
        source: str,
        statement: Any,
        parameters: list[str],
        *,
        database: str,
        read_only: bool,
        input_key: str,
    ):
        self._source = source
        self._statement = statement
        self.parameters = parameters
        self.database = database
        self.read_only = read_only
        self.input_key = input_key

    def __repr__(self) -> str:
        return f"DuckDBContent(parameters={self.parameters!r}, database={self.database!r})"

    @property
    def source(self) -> str:
        return self._source

    @property
    def bytecode(self) -> Any:
        return self._statement

    @property
    def machine_type(self) -> MachineType:
        return MachineType.DUCKDB


class DuckDBCompiler(Compiler):
    """Validates SQL with DuckDB's parser and records its named parameters.

    Parameters are written ``$name`` and bound at evaluation time:

        SELECT 'Hello, ' || $name || '!' AS greeting

    Args:
        database: Database to connect to for each evaluation
        read_only: Open file databases read-only
        input_key: Bucket whose values override top-level data when binding
    """

    def __init__(
        self,
        database: str = ":memory:",
        *,
        read_only: bool = False,
        input_key: str = constants.INPUT_DATA,
    ):
        self.database = database
        self.read_only = read_only
        self.input_key = input_key

    def compile(self, reader: BinaryIO) -> DuckDBContent:
        raw = reader.read()
        try:
            source = raw.decode("utf-8") if isinstance(raw, bytes) else str(raw)
        except UnicodeDecodeError as e:
            raise CompilerError(f"script is not valid UTF-8: {e}") from e

        source = source.strip()
        if not source:
            raise CompilerError("no script provided")

        try:
            statements = duckdb.extract_statements(source)
        except duckdb.Error as e:
            raise CompilerError(f"failed to parse SQL: {e}") from e

        if len(statements) != 1:
            raise CompilerError(f"expected exactly one SQL statement, got {len(statements)}")

        statement = statements[0]
        parameters = sorted(statement.named_parameters)
        logger.debug(f"Compiled SQL statement with parameters {parameters}")
        return DuckDBContent(
            source,
            statement,
            parameters,
            database=self.database,
            read_only=self.read_only,
            input_key=self.input_key,
        )
