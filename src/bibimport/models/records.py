"""Record data models for bibimport.

This module defines the types flowing through the import pipeline, from the
raw tag buffers built by the tag-file parser to the canonical records handed
to callers.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, NamedTuple

__all__ = [
    "DEFAULT_ENTRY_ID",
    "DEFAULT_ENTRY_TYPE",
    "RawRecord",
    "ParsedFields",
    "TypeHints",
    "MappedRecord",
    "CanonicalRecord",
    "ParseOutcome",
]

# Identity assignment belongs to the caller; imported entries carry a placeholder.
DEFAULT_ENTRY_ID = "__ID"
DEFAULT_ENTRY_TYPE = "misc"

RawRecord = dict[str, str]
"""Two-character source tag -> accumulated text, in tag-opening order."""

ParsedFields = Mapping[str, str]
"""Canonical field name -> final merged value."""


@dataclass(frozen=True)
class TypeHints:
    """Raw type indicators retained from a source record.

    Attributes
    ----------
    secondary : str | None
        Reference type text (``RT`` tag). Evaluated last.
    primary : str | None
        Type-of-work text (``TW`` tag). Evaluated first.
    """

    secondary: str | None = None
    primary: str | None = None

    def slots(self) -> tuple[str | None, str | None]:
        """Return the hint slots in declared order (secondary, primary)."""
        return (self.secondary, self.primary)


@dataclass(frozen=True)
class MappedRecord:
    """Output of the field mapper for one raw record.

    Attributes
    ----------
    fields : ParsedFields
        Directly renamed canonical fields.
    hints : TypeHints
        Retained type indicators.
    title_ti : str | None
        Primary title candidate; always placed as ``title``.
    title_st : str | None
        Secondary title candidate; placement depends on the entry type.
    page_start : str | None
        First page.
    page_end : str | None
        Last page.
    address : str | None
        Publisher address.
    country : str | None
        Country appended to the address.
    comments : tuple[str, ...]
        Labeled comment lines in source order.
    """

    fields: ParsedFields = field(default_factory=dict)
    hints: TypeHints = field(default_factory=TypeHints)
    title_ti: str | None = None
    title_st: str | None = None
    page_start: str | None = None
    page_end: str | None = None
    address: str | None = None
    country: str | None = None
    comments: tuple[str, ...] = ()


@dataclass(frozen=True)
class CanonicalRecord:
    """Final imported bibliographic entry.

    Attributes
    ----------
    rid : str
        Entry identifier (placeholder until the caller assigns one).
    entry_type : str
        Canonical entry-type name (e.g. ``article``, ``misc``).
    fields : ParsedFields
        Read-only canonical field mapping.
    record_index : int
        0-based position of the record in its source.
    source_format : str
        Name of the format the record was imported from.
    """

    rid: str
    entry_type: str
    fields: ParsedFields
    record_index: int = 0
    source_format: str = ""

    def __post_init__(self) -> None:
        """Freeze the field mapping."""
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    def get(self, name: str, default: str | None = None) -> str | None:
        """Return a field value or ``default`` when absent."""
        return self.fields.get(name, default)

    def to_dict(self) -> dict[str, Any]:
        """Convert record to a JSON-serializable dictionary."""
        return {
            "rid": self.rid,
            "entry_type": self.entry_type,
            "fields": dict(self.fields),
            "record_index": self.record_index,
            "source_format": self.source_format,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CanonicalRecord":
        """Create record from dictionary produced by ``to_dict``."""
        return cls(
            rid=data["rid"],
            entry_type=data["entry_type"],
            fields=data.get("fields", {}),
            record_index=data.get("record_index", 0),
            source_format=data.get("source_format", ""),
        )


class ParseOutcome(NamedTuple):
    """Result of importing one input stream.

    Supports tuple unpacking: ``records, warnings, errors = importer.import_stream(f)``.

    A structurally invalid input yields the failure outcome: no records and a
    non-empty ``errors`` list. An input that is valid but holds no complete
    record yields empty ``records`` and empty ``errors``.

    Attributes
    ----------
    records : list[CanonicalRecord]
        Imported records in input order.
    warnings : list[str]
        Non-fatal diagnostics.
    errors : list[str]
        Fatal diagnostics; non-empty only for the failure outcome.
    """

    records: list[CanonicalRecord]
    warnings: list[str]
    errors: list[str]

    @property
    def failed(self) -> bool:
        """Whether the whole input was rejected."""
        return bool(self.errors)

    @classmethod
    def failure(cls, message: str, warnings: list[str] | None = None) -> "ParseOutcome":
        """Build the failure outcome, discarding any records."""
        return cls([], list(warnings or []), [message])
