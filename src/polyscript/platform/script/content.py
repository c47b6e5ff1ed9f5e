"""Compiled script content and the compiler interface that produces it."""

from abc import ABC, abstractmethod
from typing import Any, BinaryIO

from polyscript.platform.machines import MachineType


class ExecutableContent(ABC):
    """Validated script content ready for execution.

    Holds the original source and the engine-specific compiled form. The
    bytecode is checked by the engine at evaluation time, so the machine
    type and the bytecode must agree.
    """

    @property
    @abstractmethod
    def source(self) -> str:
        """The original script source."""

    @property
    @abstractmethod
    def bytecode(self) -> Any:
        """The compiled script in an engine-specific format."""

    @property
    @abstractmethod
    def machine_type(self) -> MachineType:
        """The engine this content is intended to run on."""


class Compiler(ABC):
    """Validates and compiles scripts into executable content.

    Example implementation:
        >>> class UpperCaseCompiler(Compiler):
        ...     def compile(self, reader):
        ...         source = reader.read().decode()
        ...         return MyContent(source, source.upper())
    """

    @abstractmethod
    def compile(self, reader: BinaryIO) -> ExecutableContent:
        """Compile the script read from ``reader``.

        Args:
            reader: Binary stream with the script; the caller closes it

        Returns:
            The compiled content

        Raises:
            CompilerError: If the script is empty or invalid
        """
