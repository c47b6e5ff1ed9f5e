"""Loader interface: where script bytes come from."""

from abc import ABC, abstractmethod
from typing import BinaryIO


class Loader(ABC):
    """Supplies the raw bytes of a script.

    ``get_reader`` may be called more than once; every call returns a fresh
    stream positioned at the start of the script. Callers close the stream.
    """

    @abstractmethod
    def get_reader(self) -> BinaryIO:
        """Return a new binary stream over the script content.

        Raises:
            LoaderError: If the script cannot be obtained
        """

    @property
    @abstractmethod
    def source_url(self) -> str:
        """URL identifying where the script came from."""
