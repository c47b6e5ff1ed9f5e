"""Shared evaluator behaviour for the bundled engines.

Engines subclass ``BaseEvaluator`` and implement ``_run``. The base class
handles data loading, context preparation and the telemetry around each
evaluation so every engine reports the same spans and metrics:

- span ``polyscript.<machine>.eval``
- counter ``polyscript.eval.total`` with ``machine`` and ``status`` attributes
- histogram ``polyscript.eval.duration`` in seconds
- gauge ``polyscript.eval.concurrent``
"""

import logging
import time
from abc import abstractmethod
from collections.abc import Mapping
from datetime import timedelta
from typing import Any, ClassVar

from polyscript.errors import EvaluationError
from polyscript.platform.context import ExecutionContext
from polyscript.platform.data.helpers import add_data_to_context_helper
from polyscript.platform.evaluator import DataType, Evaluator, EvaluatorResponse
from polyscript.platform.machines import MachineType
from polyscript.platform.script.content import ExecutableContent
from polyscript.platform.script.unit import ExecutableUnit
from polyscript.telemetry import (
    decrement_gauge,
    increment_gauge,
    record_counter,
    record_histogram,
    traced_operation,
)

from .response import EvalResult


class BaseEvaluator(Evaluator):
    """Evaluator bound to one executable unit.

    The unit is immutable and the evaluator keeps no per-call state, so one
    instance can serve any number of concurrent ``eval`` calls.
    """

    machine_type: ClassVar[MachineType]

    def __init__(self, unit: ExecutableUnit):
        self._unit = unit
        self._log = logging.getLogger(f"{type(self).__module__}.{type(self).__name__}")

    def __repr__(self) -> str:
        return f"{type(self).__name__}(unit={self._unit.id!r})"

    @property
    def unit(self) -> ExecutableUnit:
        return self._unit

    def load_input_data(self, ctx: ExecutionContext) -> dict[str, Any]:
        """Fetch the data the script will see from the unit's provider.

        A unit without a provider evaluates with empty data.
        """
        provider = self._unit.data_provider
        if provider is None:
            self._log.warning("no data provider available, using empty data")
            return {}

        data = provider.get_data(ctx)
        if not data:
            self._log.info("empty input data returned from provider")
        self._log.debug(f"Input data loaded from provider: {list(data)}")
        return data

    def add_data_to_context(
        self, ctx: ExecutionContext, *data: Mapping[str, Any]
    ) -> ExecutionContext:
        """Store data maps in a new context for the unit's provider."""
        return add_data_to_context_helper(ctx, self._unit.data_provider, *data, log=self._log)

    def prepare_context(self, ctx: ExecutionContext, *items: Any) -> ExecutionContext:
        """Like ``add_data_to_context`` but also accepts HTTP requests and responses."""
        return add_data_to_context_helper(ctx, self._unit.data_provider, *items, log=self._log)

    def _content(self) -> ExecutableContent:
        content = self._unit.content
        if content is None:
            raise EvaluationError("content is None")
        if content.bytecode is None:
            raise EvaluationError("bytecode is None")
        if content.machine_type != self.machine_type:
            raise EvaluationError(
                f"machine type mismatch: expected {self.machine_type.value}, "
                f"got {content.machine_type.value}"
            )
        if not self._unit.id:
            raise EvaluationError("executable unit ID is empty")
        return content

    @abstractmethod
    async def _run(
        self, content: ExecutableContent, data: dict[str, Any], ctx: ExecutionContext
    ) -> Any:
        """Run the compiled content against ``data`` and return the native result."""

    async def eval(self, ctx: ExecutionContext) -> EvaluatorResponse:
        machine = self.machine_type.value
        attributes = {"machine": machine}

        increment_gauge(
            "polyscript.eval.concurrent",
            attributes=attributes,
            description="Currently running evaluations",
        )
        start = time.perf_counter()
        try:
            with traced_operation(
                f"polyscript.{machine}.eval",
                attributes={
                    "polyscript.machine": machine,
                    "polyscript.exe.id": self._unit.id,
                },
            ) as span:
                content = self._content()
                try:
                    data = self.load_input_data(ctx)
                except Exception as e:
                    raise EvaluationError(f"failed to get input data: {e}") from e

                value = await self._run(content, data, ctx)
                elapsed = timedelta(seconds=time.perf_counter() - start)
                result = EvalResult(value, elapsed, self._unit.id)

                result_type = result.type()
                span.set_attribute("polyscript.result.type", result_type.value)
                if result_type in (DataType.FUNCTION, DataType.ERROR):
                    raise EvaluationError(
                        f"script returned a {result_type.value} value: {result.inspect()}",
                        response=result,
                    )

            self._log.debug(f"Eval complete for {self._unit.id} in {result.exec_time}")
            record_counter(
                "polyscript.eval.total",
                attributes={"machine": machine, "status": "success"},
                description="Total script evaluations",
            )
            return result
        except Exception:
            record_counter(
                "polyscript.eval.total",
                attributes={"machine": machine, "status": "error"},
                description="Total script evaluations",
            )
            raise
        finally:
            record_histogram(
                "polyscript.eval.duration",
                time.perf_counter() - start,
                attributes=attributes,
                description="Script evaluation duration",
            )
            decrement_gauge(
                "polyscript.eval.concurrent",
                attributes=attributes,
                description="Currently running evaluations",
            )
