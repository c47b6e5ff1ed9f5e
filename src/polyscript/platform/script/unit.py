"""Compiled script bound to its data provider: the "compile once" artifact."""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone

from polyscript.errors import CompilerError, ConfigurationError, LoaderError
from polyscript.platform.data.provider import Provider
from polyscript.platform.machines import MachineType

from .content import Compiler, ExecutableContent
from .hashing import sha256_hex
from .loader.base import Loader

logger = logging.getLogger(__name__)

# Length of IDs derived from the content hash
CHECKSUM_LENGTH = 12


@dataclass(frozen=True)
class ExecutableUnit:
    """A compiled script, its data provider and a stable identifier.

    Units are immutable once created and may be shared by any number of
    concurrent evaluations. Recompiling means creating a new unit.

    Example:
        >>> unit = ExecutableUnit.create(
        ...     FromString("ctx['input_data']['name']"),
        ...     PythonCompiler(),
        ...     ContextProvider(),
        ... )
        >>> unit.id
        '3c5e0d7f2a91'
    """

    id: str
    loader: Loader = field(repr=False)
    compiler: Compiler = field(repr=False)
    content: ExecutableContent = field(repr=False)
    data_provider: Provider | None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls,
        loader: Loader,
        compiler: Compiler,
        data_provider: Provider | None = None,
        unit_id: str = "",
    ) -> "ExecutableUnit":
        """Load and compile a script into a new unit.

        Args:
            loader: Supplies the script bytes; read exactly once
            compiler: Compiles the script for its engine
            data_provider: Source of runtime data for evaluations
            unit_id: Explicit ID; when empty the ID is the first
                ``CHECKSUM_LENGTH`` hex characters of the source's SHA-256

        Returns:
            The compiled unit

        Raises:
            ConfigurationError: If the loader or compiler is missing
            LoaderError: If the loader cannot provide the script
            CompilerError: If compilation fails
        """
        if loader is None:
            raise ConfigurationError("loader is nil")
        if compiler is None:
            raise ConfigurationError("compiler is nil")

        try:
            reader = loader.get_reader()
        except LoaderError:
            raise
        except OSError as e:
            raise LoaderError(f"failed to get reader from loader: {e}") from e

        with reader:
            try:
                content = compiler.compile(reader)
            except CompilerError:
                raise
            except Exception as e:
                raise CompilerError(f"compiler failed: {e}") from e

        if not unit_id:
            unit_id = sha256_hex(content.source)[:CHECKSUM_LENGTH]

        logger.debug(f"Compiled executable unit {unit_id} from {loader.source_url}")
        return cls(
            id=unit_id,
            loader=loader,
            compiler=compiler,
            content=content,
            data_provider=data_provider,
        )

    @property
    def machine_type(self) -> MachineType:
        """The engine this unit's content targets."""
        return self.content.machine_type
