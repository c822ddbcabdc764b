"""Public API for importing bibliographic tag files.

This module provides the main public API for bibimport, enabling:
- Importing files into CanonicalRecord objects
- Exporting records to JSONL format
- Validating records against entry-type schemas
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path

from bibimport.models import CanonicalRecord
from bibimport.parse.ingestion import IngestionStatus, ingest_file
from bibimport.parse.registry import FormatRegistry
from bibimport.schema import EntryTypeRegistry, ValidationReport, validate_record

__all__ = [
    "parse_file",
    "read_jsonl",
    "write_jsonl",
    "validate_records",
    "ParseError",
]


class ParseError(Exception):
    """Raised when an input is rejected."""

    def __init__(
        self,
        message: str,
        file: str | None = None,
        status: str | None = None,
    ) -> None:
        """Initialize parse error.

        Parameters
        ----------
        message : str
            Error message.
        file : str | None, optional
            File where error occurred.
        status : str | None, optional
            Ingestion status (e.g. "malformed", "io_error").
        """
        super().__init__(message)
        self.file = file
        self.status = status


def parse_file(
    path: str | Path,
    *,
    strict: bool = True,
    format_name: str | None = None,
    encoding: str | None = None,
    formats: FormatRegistry | None = None,
) -> list[CanonicalRecord]:
    """Import a single bibliographic file.

    Parameters
    ----------
    path : str | Path
        Path to file to import.
    strict : bool, optional
        If True, raise on a rejected file. If False, return an empty list
        instead, by default True.
    format_name : str | None, optional
        Import format. If None, chosen from the file extension.
    encoding : str | None, optional
        Text encoding. If None, detected from the bytes.
    formats : FormatRegistry | None, optional
        Registry to select the format from.

    Returns
    -------
    list[CanonicalRecord]
        Imported records in file order.

    Raises
    ------
    ParseError
        If the file is rejected and strict=True.
    FileNotFoundError
        If file does not exist.

    Examples
    --------
        >>> from bibimport import parse_file
        >>> records = parse_file("export.txt")
        >>> for record in records:
        ...     print(record.entry_type, record.get("title"))
    """
    file_path = Path(path)

    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    records, result = ingest_file(
        file_path,
        format_name=format_name,
        encoding=encoding,
        formats=formats,
    )

    if result.status is not IngestionStatus.OK and strict:
        raise ParseError(
            f"Failed to parse {file_path.name}: {'; '.join(result.errors)}",
            file=str(file_path),
            status=str(result.status),
        )

    return records


def write_jsonl(
    records: Iterable[CanonicalRecord],
    path: str | Path,
    *,
    sort_keys: bool = True,
) -> None:
    """Write records to JSONL file (one JSON object per line).

    Parameters
    ----------
    records : Iterable[CanonicalRecord]
        Records to write.
    path : str | Path
        Output file path.
    sort_keys : bool, optional
        Whether to sort dictionary keys for deterministic output,
        by default True.
    """
    file_path = Path(path)

    with file_path.open("w", encoding="utf-8", newline="\n") as f:
        for record in records:
            f.write(json.dumps(record.to_dict(), ensure_ascii=False, sort_keys=sort_keys) + "\n")


def read_jsonl(path: str | Path) -> list[CanonicalRecord]:
    """Read records written by ``write_jsonl``."""
    with Path(path).open(encoding="utf-8") as f:
        return [CanonicalRecord.from_dict(json.loads(line)) for line in f if line.strip()]


def validate_records(
    records: Iterable[CanonicalRecord],
    registry: EntryTypeRegistry | None = None,
) -> list[ValidationReport]:
    """Validate each record against its entry-type schema.

    Parameters
    ----------
    records : Iterable[CanonicalRecord]
        Records to check.
    registry : EntryTypeRegistry | None, optional
        Schema registry, by default the process-wide one.

    Returns
    -------
    list[ValidationReport]
        One report per record, in input order.
    """
    return [validate_record(record, registry) for record in records]
