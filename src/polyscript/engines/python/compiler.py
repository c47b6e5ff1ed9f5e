"""Compiler turning Python source into a reusable code object."""

import ast
import logging
from typing import Any, BinaryIO

from polyscript.errors import CompilerError
from polyscript.platform import constants
from polyscript.platform.machines import MachineType
from polyscript.platform.script.content import Compiler, ExecutableContent

logger = logging.getLogger(__name__)

# Name the trailing expression of a script is assigned to
RESULT_NAME = "__result__"


class PythonContent(ExecutableContent):
    """Compiled Python script."""

    def __init__(self, source: str, code: Any, script_global: str):
        self._source = source
        self._code = code
        self.script_global = script_global

    def __repr__(self) -> str:
        return f"PythonContent(chars={len(self._source)}, script_global={self.script_global!r})"

    @property
    def source(self) -> str:
        return self._source

    @property
    def bytecode(self) -> Any:
        return self._code

    @property
    def machine_type(self) -> MachineType:
        return MachineType.PYTHON


class PythonCompiler(Compiler):
    """Compiles Python scripts.

    The script's value is its trailing expression, or failing that a
    top-level ``result`` variable. Data is visible to the script through a
    global named ``script_global`` (``ctx`` by default):

        name = ctx["input_data"]["name"]
        f"Hello, {name}!"
    """

    def __init__(self, script_global: str = constants.CTX, filename: str = "<polyscript>"):
        if not script_global.isidentifier():
            raise CompilerError(f"invalid script global name: {script_global!r}")
        self.script_global = script_global
        self.filename = filename

    def compile(self, reader: BinaryIO) -> PythonContent:
        raw = reader.read()
        try:
            source = raw.decode("utf-8") if isinstance(raw, bytes) else str(raw)
        except UnicodeDecodeError as e:
            raise CompilerError(f"script is not valid UTF-8: {e}") from e

        if not source.strip():
            raise CompilerError("no script provided")

        try:
            tree = ast.parse(source, filename=self.filename, mode="exec")
            tree = self._capture_trailing_expression(tree)
            code = compile(tree, self.filename, "exec")
        except SyntaxError as e:
            raise CompilerError(f"failed to compile Python script: {e}") from e

        logger.debug(f"Compiled Python script ({len(source)} chars)")
        return PythonContent(source, code, self.script_global)

    @staticmethod
    def _capture_trailing_expression(tree: ast.Module) -> ast.Module:
        last = tree.body[-1] if tree.body else None
        if not isinstance(last, ast.Expr):
            return tree

        tree.body[-1] = ast.copy_location(
            ast.Assign(targets=[ast.Name(id=RESULT_NAME, ctx=ast.Store())], value=last.value),
            last,
        )
        return ast.fix_missing_locations(tree)
