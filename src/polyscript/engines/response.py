"""Evaluation result shared by the bundled engines."""

from datetime import timedelta
from typing import Any

from polyscript.platform.evaluator import DataType, EvaluatorResponse


def format_duration(duration: timedelta) -> str:
    """Format a duration the way evaluation timings are reported, e.g. ``"1.204ms"``."""
    seconds = duration.total_seconds()
    if seconds >= 1:
        return f"{seconds:.3f}s"
    if seconds >= 0.001:
        return f"{seconds * 1_000:.3f}ms"
    return f"{seconds * 1_000_000:.3f}µs"


class EvalResult(EvaluatorResponse):
    """Native Python value produced by a script, plus timing and identity."""

    def __init__(self, value: Any, exec_time: timedelta, script_exe_id: str = ""):
        self._value = value
        self._exec_time = exec_time
        self._script_exe_id = script_exe_id

    def __repr__(self) -> str:
        return (
            f"EvalResult(type={self.type().value}, value={self.inspect()}, "
            f"exec_time={self.exec_time}, script_exe_id={self._script_exe_id!r})"
        )

    def type(self) -> DataType:
        return DataType.from_value(self._value)

    def inspect(self) -> str:
        if isinstance(self._value, str):
            return f'"{self._value}"'
        return repr(self._value)

    def interface(self) -> Any:
        return self._value

    @property
    def script_exe_id(self) -> str:
        return self._script_exe_id

    @property
    def exec_time(self) -> str:
        return format_duration(self._exec_time)

    @property
    def duration(self) -> timedelta:
        return self._exec_time
