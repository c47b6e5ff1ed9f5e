"""Evaluator running compiled SQL statements on DuckDB."""

import asyncio
import contextvars
from collections.abc import Mapping
from typing import Any

import duckdb

from polyscript.errors import EvaluationError
from polyscript.platform.context import (
    ExecutionContext,
    reset_execution_context,
    set_execution_context,
)
from polyscript.platform.machines import MachineType
from polyscript.platform.script.content import ExecutableContent
from polyscript.telemetry import set_span_attribute

from ..base import BaseEvaluator
from .compiler import DuckDBContent


def bind_parameters(content: DuckDBContent, data: Mapping[str, Any]) -> dict[str, Any]:
    """Pick the statement's named parameters out of the evaluation data.

    Top-level keys are visible directly and keys of the input-data bucket
    override them, so static data and per-request data can both feed a
    query.

    Raises:
        EvaluationError: If a parameter has no value
    """
    merged: dict[str, Any] = dict(data)
    bucket = data.get(content.input_key)
    if isinstance(bucket, Mapping):
        merged.update(bucket)

    missing = [name for name in content.parameters if name not in merged]
    if missing:
        raise EvaluationError(f"missing SQL parameters: {', '.join(missing)}")
    return {name: merged[name] for name in content.parameters}


def execute_query_to_dict(
    conn: duckdb.DuckDBPyConnection, query: str, params: dict[str, Any]
) -> list[dict[str, Any]] | None:
    """Execute a query and return its rows as dictionaries, or None if it returns no rows."""
    cursor = conn.execute(query, params or None)
    if cursor.description is None:
        return None
    columns = [column[0] for column in cursor.description]
    return [dict(zip(columns, row)) for row in cursor.fetchall()]


class DuckDBEvaluator(BaseEvaluator):
    """Runs a compiled SQL statement on a fresh DuckDB connection."""

    machine_type = MachineType.DUCKDB

    async def _run(
        self, content: ExecutableContent, data: dict[str, Any], ctx: ExecutionContext
    ) -> Any:
        if not isinstance(content, DuckDBContent):
            raise EvaluationError(
                f"invalid bytecode type: expected DuckDBContent, got {type(content).__name__}"
            )

        params = bind_parameters(content, data)

        def run_query() -> list[dict[str, Any]] | None:
            token = set_execution_context(ctx)
            try:
                with duckdb.connect(content.database, read_only=content.read_only) as conn:
                    return execute_query_to_dict(conn, content.source, params)
            finally:
                reset_execution_context(token)

        thread_ctx = contextvars.copy_context()
        loop = asyncio.get_running_loop()
        try:
            rows = await loop.run_in_executor(None, thread_ctx.run, run_query)
        except duckdb.Error as e:
            self._log.error(f"SQL execution failed: {e}")
            raise EvaluationError(f"duckdb execution error: {e}") from e

        if rows is not None:
            set_span_attribute("polyscript.duckdb.rows", len(rows))
        return rows
