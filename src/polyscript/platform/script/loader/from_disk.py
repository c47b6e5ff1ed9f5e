"""Loader for scripts stored on the local filesystem."""

import logging
import os
from pathlib import Path
from typing import BinaryIO

from polyscript.errors import SchemeUnsupportedError, ScriptNotAvailableError
from polyscript.platform.script.hashing import sha256_reader

from .base import Loader

logger = logging.getLogger(__name__)


class FromDisk(Loader):
    """Loads a script from an absolute filesystem path.

    Accepts a plain path or a ``file://`` URL. The file is opened on each
    ``get_reader`` call, so edits on disk are picked up by the next compile.

    Example:
        >>> loader = FromDisk("/etc/polyscript/scripts/greet.py")
        >>> loader.source_url
        'file:///etc/polyscript/scripts/greet.py'
    """

    def __init__(self, path: str | os.PathLike[str]):
        raw = os.fspath(path)
        if raw.startswith("file://"):
            raw = raw[len("file://") :]

        if raw.startswith(("http://", "https://")):
            raise SchemeUnsupportedError(f"scheme not supported: {raw}")
        if "://" in raw:
            raise SchemeUnsupportedError(f"scheme not supported: {raw}")
        if not os.path.isabs(raw):
            raise ScriptNotAvailableError(
                "script not available: relative paths are not supported"
            )

        cleaned = os.path.normpath(raw)
        if cleaned in ("", ".", os.sep, "/", "\\"):
            raise ScriptNotAvailableError("script not available: path is empty or invalid")

        self._path = Path(cleaned)

    def __repr__(self) -> str:
        return f"FromDisk(path={str(self._path)!r})"

    @property
    def path(self) -> Path:
        return self._path

    @property
    def source_url(self) -> str:
        return self._path.as_uri()

    def get_reader(self) -> BinaryIO:
        try:
            return self._path.open("rb")
        except FileNotFoundError as e:
            raise ScriptNotAvailableError(f"script not available: {self._path} not found") from e
        except OSError as e:
            raise ScriptNotAvailableError(f"script not available: {e}") from e

    def checksum(self) -> str | None:
        """Short SHA-256 of the current file content, or None if unreadable."""
        try:
            with self._path.open("rb") as f:
                return sha256_reader(f)[:8]
        except OSError as e:
            logger.debug(f"Could not checksum {self._path}: {e}")
            return None
