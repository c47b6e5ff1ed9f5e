"""SHA-256 helpers used for script identity."""

import hashlib
from typing import BinaryIO


def sha256_hex(data: str | bytes) -> str:
    """Return the hex SHA-256 digest of ``data``."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    return hashlib.sha256(data).hexdigest()


def sha256_reader(reader: BinaryIO, chunk_size: int = 65536) -> str:
    """Return the hex SHA-256 digest of everything left in ``reader``."""
    digest = hashlib.sha256()
    for chunk in iter(lambda: reader.read(chunk_size), b""):
        digest.update(chunk)
    return digest.hexdigest()
