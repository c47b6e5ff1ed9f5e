"""Evaluator running compiled Python scripts."""

import asyncio
import builtins
import contextvars
from typing import Any

from polyscript.errors import EvaluationError
from polyscript.platform.context import (
    ExecutionContext,
    reset_execution_context,
    set_execution_context,
)
from polyscript.platform.machines import MachineType
from polyscript.platform.script.content import ExecutableContent

from ..base import BaseEvaluator
from .compiler import RESULT_NAME, PythonContent


class PythonEvaluator(BaseEvaluator):
    """Runs a compiled Python script in a worker thread.

    Each evaluation gets fresh globals, so scripts cannot leak state into
    later evaluations. The execution context is available inside the
    script through ``polyscript.platform.get_execution_context()``.
    """

    machine_type = MachineType.PYTHON

    async def _run(
        self, content: ExecutableContent, data: dict[str, Any], ctx: ExecutionContext
    ) -> Any:
        if not isinstance(content, PythonContent):
            raise EvaluationError(
                f"invalid bytecode type: expected PythonContent, got {type(content).__name__}"
            )

        globals_: dict[str, Any] = {
            "__builtins__": builtins,
            "__name__": "__polyscript__",
            content.script_global: data,
        }

        def run_script() -> Any:
            token = set_execution_context(ctx)
            try:
                exec(content.bytecode, globals_)
            finally:
                reset_execution_context(token)

            if RESULT_NAME in globals_:
                return globals_[RESULT_NAME]
            if "result" in globals_:
                self._log.debug("Using explicit result variable")
                return globals_["result"]
            return None

        # copy_context propagates context variables into the worker thread
        thread_ctx = contextvars.copy_context()
        loop = asyncio.get_running_loop()
        try:
            return await loop.run_in_executor(None, thread_ctx.run, run_script)
        except asyncio.CancelledError:
            self._log.debug(f"Evaluation of {self.unit.id} cancelled")
            raise
        except Exception as e:
            self._log.error(f"Python execution failed: {e}")
            raise EvaluationError(f"python execution error: {e}") from e
