"""Python engine: scripts are plain Python, data arrives in the ``ctx`` global."""

from .compiler import PythonCompiler, PythonContent
from .evaluator import PythonEvaluator

__all__ = ["PythonCompiler", "PythonContent", "PythonEvaluator"]
