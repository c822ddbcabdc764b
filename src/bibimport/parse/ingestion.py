"""File-level ingestion: decoding, format selection and audit events."""

from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path

from bibimport.audit.logger import AuditLogger
from bibimport.models import CanonicalRecord
from bibimport.parse.base import ImportFormat, detect_encoding, normalize_line_endings
from bibimport.parse.registry import FormatRegistry, default_format_registry
from bibimport.utils import calculate_file_digest, get_file_mtime, get_iso_timestamp

__all__ = [
    "INGESTION_VERSION",
    "FileIngestionResult",
    "IngestionReport",
    "IngestionStatus",
    "ingest_file",
    "ingest_folder",
]

INGESTION_VERSION = "1.0.0"


class IngestionStatus(StrEnum):
    """Outcome category of one file."""

    OK = "ok"
    IO_ERROR = "io_error"
    MALFORMED = "malformed"
    UNSUPPORTED = "unsupported"


@dataclass(frozen=True)
class FileIngestionResult:
    """Immutable result of ingesting a single file.

    Attributes
    ----------
    filename : str
        Name of the file (basename).
    filepath : str
        Full path to the file.
    status : IngestionStatus
        Outcome category; read failures are kept apart from malformed content.
    format_used : str
        Name of the import format, or "unknown".
    encoding_used : str
        Encoding used to decode the file.
    file_size : int
        Size of file in bytes.
    file_mtime : str
        ISO8601 timestamp of file modification time.
    records_parsed : int
        Number of records imported.
    warnings : tuple[str, ...]
        Warning messages.
    errors : tuple[str, ...]
        Error messages.
    file_digest : str
        SHA-256 digest of file bytes.
    """

    filename: str
    filepath: str
    status: IngestionStatus
    format_used: str = "unknown"
    encoding_used: str = ""
    file_size: int = 0
    file_mtime: str = ""
    records_parsed: int = 0
    warnings: tuple[str, ...] = ()
    errors: tuple[str, ...] = ()
    file_digest: str = ""


@dataclass(frozen=True)
class IngestionReport:
    """Immutable report for a multi-file ingestion run."""

    tool_version: str
    run_timestamp: str
    total_files: int
    total_records: int
    total_errors: int
    total_warnings: int
    file_results: tuple[FileIngestionResult, ...]


def _select_format(
    file_path: Path,
    formats: FormatRegistry,
    format_name: str | None,
) -> ImportFormat | None:
    if format_name is not None:
        return formats.get(format_name)
    candidates = formats.for_extension(file_path.suffix)
    return candidates[0] if candidates else None


def ingest_file(
    file_path: Path,
    *,
    format_name: str | None = None,
    encoding: str | None = None,
    formats: FormatRegistry | None = None,
    audit_logger: AuditLogger | None = None,
) -> tuple[list[CanonicalRecord], FileIngestionResult]:
    """Ingest a single file.

    Parameters
    ----------
    file_path : Path
        Path to file to ingest.
    format_name : str | None, optional
        Import format to use. If None, chosen from the file extension.
    encoding : str | None, optional
        Text encoding. If None, detected from the bytes.
    formats : FormatRegistry | None, optional
        Registry to select from, by default the process-wide one.
    audit_logger : AuditLogger | None, optional
        Receives import events when given.

    Returns
    -------
    tuple[list[CanonicalRecord], FileIngestionResult]
        - Imported records (empty unless status is OK)
        - File ingestion result with metadata and diagnostics
    """
    if formats is None:
        formats = default_format_registry()
    base = {"filename": file_path.name, "filepath": str(file_path)}

    fmt = _select_format(file_path, formats, format_name)
    if fmt is None:
        wanted = format_name or f"extension {file_path.suffix!r}"
        result = FileIngestionResult(
            **base,
            status=IngestionStatus.UNSUPPORTED,
            errors=(f"No import format available for {wanted}",),
        )
        _log_failure(audit_logger, result)
        return [], result

    if audit_logger is not None:
        audit_logger.import_started(file_path.name, fmt.format_name())

    try:
        file_bytes = file_path.read_bytes()
        encoding_used = encoding or detect_encoding(file_bytes)
        content = file_bytes.decode(encoding_used)
    except (OSError, UnicodeDecodeError, LookupError) as e:
        result = FileIngestionResult(
            **base,
            status=IngestionStatus.IO_ERROR,
            format_used=fmt.format_name(),
            errors=(f"Failed to read file: {e}",),
        )
        _log_failure(audit_logger, result)
        return [], result

    lines = normalize_line_endings(content).split("\n")
    records, warnings, errors = fmt.import_stream(lines)

    result = FileIngestionResult(
        **base,
        status=IngestionStatus.MALFORMED if errors else IngestionStatus.OK,
        format_used=fmt.format_name(),
        encoding_used=encoding_used,
        file_size=len(file_bytes),
        file_mtime=get_file_mtime(file_path),
        records_parsed=len(records),
        warnings=tuple(warnings),
        errors=tuple(errors),
        file_digest=calculate_file_digest(file_bytes),
    )

    if errors:
        _log_failure(audit_logger, result)
    elif audit_logger is not None:
        for record in records:
            audit_logger.record_imported(record.record_index, record.entry_type)
        audit_logger.import_finished(file_path.name, len(records), list(warnings))

    return records, result


def ingest_folder(
    folder_path: Path,
    *,
    recursive: bool = False,
    glob_pattern: str = "*",
    format_name: str | None = None,
    encoding: str | None = None,
    formats: FormatRegistry | None = None,
    audit_logger: AuditLogger | None = None,
) -> tuple[list[CanonicalRecord], IngestionReport]:
    """Ingest every file in a folder whose extension a format reads.

    Files are processed in sorted path order. With ``format_name`` set every
    file is read with that format, whatever its extension.

    Returns
    -------
    tuple[list[CanonicalRecord], IngestionReport]
        - All imported records
        - Report with per-file results and totals
    """
    if formats is None:
        formats = default_format_registry()
    files = folder_path.rglob(glob_pattern) if recursive else folder_path.glob(glob_pattern)
    supported = sorted(
        f
        for f in files
        if f.is_file() and (format_name is not None or formats.for_extension(f.suffix))
    )

    all_records: list[CanonicalRecord] = []
    file_results: list[FileIngestionResult] = []
    for file_path in supported:
        records, result = ingest_file(
            file_path,
            format_name=format_name,
            encoding=encoding,
            formats=formats,
            audit_logger=audit_logger,
        )
        all_records.extend(records)
        file_results.append(result)

    report = IngestionReport(
        tool_version=INGESTION_VERSION,
        run_timestamp=get_iso_timestamp(),
        total_files=len(file_results),
        total_records=sum(r.records_parsed for r in file_results),
        total_errors=sum(len(r.errors) for r in file_results),
        total_warnings=sum(len(r.warnings) for r in file_results),
        file_results=tuple(file_results),
    )
    return all_records, report


def _log_failure(audit_logger: AuditLogger | None, result: FileIngestionResult) -> None:
    if audit_logger is not None:
        audit_logger.import_failed(result.filename, str(result.status), list(result.errors))
