"""Script loaders."""

from .base import Loader
from .from_disk import FromDisk
from .from_http import FromHTTP, HTTPOptions
from .from_string import FromBytes, FromReader, FromString, from_string_base64
from .inference import infer_loader

__all__ = [
    "Loader",
    "FromString",
    "FromBytes",
    "FromReader",
    "from_string_base64",
    "FromDisk",
    "FromHTTP",
    "HTTPOptions",
    "infer_loader",
]
