"""Pick a loader from loosely typed input."""

import io
import os
from typing import Any
from urllib.parse import urlparse

from polyscript.errors import LoaderError

from .base import Loader
from .from_disk import FromDisk
from .from_http import FromHTTP
from .from_string import FromBytes, FromReader, from_string_base64


def infer_loader(value: Any) -> Loader:
    """Return a loader suited to ``value``.

    - ``Loader``: returned unchanged
    - ``bytes``: ``FromBytes``
    - readable stream: ``FromReader``
    - ``os.PathLike``: ``FromDisk`` (relative paths are resolved)
    - ``str``: ``http(s)://`` URLs use ``FromHTTP``, ``file://`` URLs and
      anything that looks like a path use ``FromDisk``, everything else is
      inline content (base64-decoded when possible)

    Raises:
        LoaderError: If the input type is unsupported or the loader cannot be built
    """
    if isinstance(value, Loader):
        return value
    if isinstance(value, (bytes, bytearray)):
        return FromBytes(bytes(value))
    if isinstance(value, os.PathLike):
        return FromDisk(os.path.abspath(os.fspath(value)))
    if isinstance(value, str):
        return _infer_from_string(value)
    if isinstance(value, io.IOBase) or hasattr(value, "read"):
        return FromReader(value, "inferred")
    raise LoaderError(f"unsupported input type: {type(value).__name__}")


def _infer_from_string(value: str) -> Loader:
    value = value.strip()
    if not value:
        raise LoaderError("empty string input")

    scheme = urlparse(value).scheme if "://" in value else ""
    if scheme in ("http", "https"):
        return FromHTTP(value)
    if scheme == "file":
        return FromDisk(os.path.abspath(urlparse(value).path))
    if scheme:
        return from_string_base64(value)

    if os.path.isabs(value) or "/" in value or "\\" in value:
        return FromDisk(os.path.abspath(value))

    return from_string_base64(value)
