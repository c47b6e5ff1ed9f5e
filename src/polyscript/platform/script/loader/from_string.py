"""In-memory loaders for inline scripts."""

import base64
import binascii
import io
from typing import BinaryIO

from polyscript.errors import ScriptNotAvailableError
from polyscript.platform.script.hashing import sha256_hex

from .base import Loader


class FromString(Loader):
    """Loads a script held in a string.

    Surrounding whitespace is trimmed; the remaining content must not be empty.
    """

    def __init__(self, content: str):
        content = content.strip()
        if not content:
            raise ScriptNotAvailableError("script not available: content is empty")
        self._content = content
        self._source_url = f"string://inline/{sha256_hex(content)[:8]}"

    def __repr__(self) -> str:
        return f"FromString(chars={len(self._content)})"

    @property
    def content(self) -> str:
        return self._content

    @property
    def source_url(self) -> str:
        return self._source_url

    def get_reader(self) -> BinaryIO:
        return io.BytesIO(self._content.encode("utf-8"))


class FromBytes(Loader):
    """Loads a script held in a byte string.

    The bytes are kept as given; only the emptiness check ignores whitespace.
    """

    def __init__(self, content: bytes):
        if not content:
            raise ScriptNotAvailableError("script not available: content is empty")
        if not content.strip():
            raise ScriptNotAvailableError(
                "script not available: content is empty or contains only whitespace"
            )
        self._content = bytes(content)
        self._source_url = f"bytes://inline/{sha256_hex(self._content)[:8]}"

    def __repr__(self) -> str:
        return f"FromBytes(bytes={len(self._content)})"

    @property
    def content(self) -> bytes:
        return self._content

    @property
    def source_url(self) -> str:
        return self._source_url

    def get_reader(self) -> BinaryIO:
        return io.BytesIO(self._content)


class FromReader(Loader):
    """Loads a script from a readable stream.

    The stream is drained once at construction so the script can be read
    any number of times afterwards.
    """

    def __init__(self, reader: BinaryIO, source_name: str = ""):
        if reader is None:
            raise ScriptNotAvailableError("script not available: reader is None")

        content = reader.read()
        if isinstance(content, str):
            content = content.encode("utf-8")
        if not content.strip():
            raise ScriptNotAvailableError(
                "script not available: content is empty or contains only whitespace"
            )

        self._content = content
        checksum = sha256_hex(content)[:8]
        self._source_url = f"reader://{source_name or 'unnamed'}/{checksum}"

    def __repr__(self) -> str:
        return f"FromReader(bytes={len(self._content)}, source={self._source_url!r})"

    @property
    def source_url(self) -> str:
        return self._source_url

    def get_reader(self) -> BinaryIO:
        return io.BytesIO(self._content)


def from_string_base64(content: str) -> Loader:
    """Create a loader from base64 text, or from the text itself if it is not base64.

    Decoded content is kept as bytes so non-UTF-8 payloads survive intact.

    Raises:
        ScriptNotAvailableError: If the content is empty
    """
    content = content.strip()
    if not content:
        raise ScriptNotAvailableError("script not available: content is empty")

    try:
        decoded = base64.b64decode(content, validate=True)
    except (binascii.Error, ValueError):
        return FromString(content)
    return FromBytes(decoded)
