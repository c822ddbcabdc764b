"""Registry of import formats."""

from collections.abc import Iterable
from functools import lru_cache

from bibimport.parse.base import ImportFormat
from bibimport.parse.biblioscape import BiblioscapeImporter

__all__ = ["FormatRegistry", "default_format_registry"]


class FormatRegistry:
    """Import formats keyed by name.

    Names are matched case-insensitively. Build one per process (or per test)
    and treat it as read-only once shared.
    """

    def __init__(self, formats: Iterable[ImportFormat] = ()) -> None:
        self._formats: dict[str, ImportFormat] = {}
        for fmt in formats:
            self.register(fmt)

    def register(self, fmt: ImportFormat) -> None:
        """Add a format.

        Raises
        ------
        ValueError
            If a format with the same name is already registered.
        """
        key = fmt.format_name().lower()
        if key in self._formats:
            raise ValueError(f"Format already registered: {fmt.format_name()!r}")
        self._formats[key] = fmt

    def get(self, name: str) -> ImportFormat | None:
        """Return the format called ``name`` or None."""
        return self._formats.get(name.lower())

    def for_extension(self, extension: str) -> list[ImportFormat]:
        """Return formats reading ``extension`` in registration order."""
        ext = extension.lower()
        if ext and not ext.startswith("."):
            ext = f".{ext}"
        return [f for f in self._formats.values() if ext in f.recognized_extensions()]

    def format_names(self) -> list[str]:
        """Return registered format names in registration order."""
        return [f.format_name() for f in self._formats.values()]

    def __len__(self) -> int:
        return len(self._formats)


@lru_cache(maxsize=1)
def default_format_registry() -> FormatRegistry:
    """Return the process-wide format registry, built on first call."""
    return FormatRegistry([BiblioscapeImporter()])
