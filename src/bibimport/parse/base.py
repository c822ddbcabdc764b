"""Base types and utilities for import formats."""

from abc import ABC, abstractmethod
from collections.abc import Iterable

from bibimport.models import ParseOutcome

__all__ = [
    "ImportFormat",
    "detect_encoding",
    "normalize_line_endings",
]


class ImportFormat(ABC):
    """Contract every importer registers under.

    Implementations hold no state between calls; per-stream state lives in
    the objects created by ``import_stream``.
    """

    @abstractmethod
    def format_name(self) -> str:
        """Human-readable format name, unique within a registry."""

    @abstractmethod
    def recognized_extensions(self) -> frozenset[str]:
        """File extensions (lower-case, with dot) this format reads."""

    def description(self) -> str:
        """Short description for help output."""
        return self.format_name()

    @abstractmethod
    def is_recognized(self, stream: Iterable[str]) -> bool:
        """Whether ``stream`` looks like this format."""

    @abstractmethod
    def import_stream(self, stream: Iterable[str]) -> ParseOutcome:
        """Import every record from ``stream``.

        Errors raised while reading the stream propagate to the caller.
        """


def detect_encoding(file_bytes: bytes) -> str:
    """Detect encoding of file bytes using deterministic strategy.

    Parameters
    ----------
    file_bytes : bytes
        Complete file content as bytes.

    Returns
    -------
    str
        Detected encoding (utf-8-sig, utf-8 or latin-1).
    """
    if file_bytes.startswith(b"\xef\xbb\xbf"):
        return "utf-8-sig"

    try:
        file_bytes.decode("utf-8")
        return "utf-8"
    except UnicodeDecodeError:
        pass

    return "latin-1"


def normalize_line_endings(content: str) -> str:
    """Normalize line endings to LF."""
    content = content.replace("\r\n", "\n")
    return content.replace("\r", "\n")
