"""Import configuration and result dataclasses."""

import codecs
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any


@dataclass
class ImportConfig:
    """Configuration for an import run.

    Attributes
    ----------
    format_name : str | None
        Import format to use. If None, chosen per file from its extension.
    encoding : str | None
        Text encoding of the input. If None, detected per file.
    strict : bool
        Treat any rejected file as a failed run (default: True).
    recursive : bool
        Search subdirectories when the input is a folder.
    output_path : Path | None
        JSONL destination for imported records. If None, nothing is written.
    audit_log_path : Path | None
        JSONL destination for audit events. If None, no events are logged.
    """

    format_name: str | None = None
    encoding: str | None = None
    strict: bool = True
    recursive: bool = False
    output_path: Path | None = None
    audit_log_path: Path | None = None

    def __post_init__(self) -> None:
        """Normalize paths and validate."""
        if self.format_name is not None and not self.format_name.strip():
            raise ValueError("format_name must not be blank")

        if self.encoding is not None:
            try:
                codecs.lookup(self.encoding)
            except LookupError:
                raise ValueError(f"Unknown encoding: {self.encoding!r}") from None

        if self.output_path is not None:
            self.output_path = Path(self.output_path)

        if self.audit_log_path is not None:
            self.audit_log_path = Path(self.audit_log_path)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        data = asdict(self)
        data["output_path"] = str(self.output_path) if self.output_path is not None else None
        data["audit_log_path"] = (
            str(self.audit_log_path) if self.audit_log_path is not None else None
        )
        return data


@dataclass
class ImportResult:
    """Results from an import run.

    Attributes
    ----------
    success : bool
        Whether every file was imported (or, when not strict, whether the run completed).
    total_files : int
        Files processed.
    total_records : int
        Records imported.
    failed_files : list[str]
        Names of files rejected as a whole.
    warnings : list[str]
        Warnings collected across files, prefixed with the file name.
    output_files : dict[str, str]
        Map of artifact type to file path.
    error_message : str | None
        Error message if failed.
    """

    success: bool
    total_files: int
    total_records: int
    failed_files: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    output_files: dict[str, str] = field(default_factory=dict)
    error_message: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)
