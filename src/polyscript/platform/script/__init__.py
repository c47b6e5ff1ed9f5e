"""Script compilation layer: loaders, compilers and executable units."""

from .content import Compiler, ExecutableContent
from .hashing import sha256_hex, sha256_reader
from .loader import (
    FromBytes,
    FromDisk,
    FromHTTP,
    FromReader,
    FromString,
    HTTPOptions,
    Loader,
    from_string_base64,
    infer_loader,
)
from .unit import CHECKSUM_LENGTH, ExecutableUnit

__all__ = [
    "CHECKSUM_LENGTH",
    "Compiler",
    "ExecutableContent",
    "ExecutableUnit",
    "FromBytes",
    "FromDisk",
    "FromHTTP",
    "FromReader",
    "FromString",
    "HTTPOptions",
    "Loader",
    "from_string_base64",
    "infer_loader",
    "sha256_hex",
    "sha256_reader",
]
