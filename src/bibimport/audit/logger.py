"""Structured audit logger for JSONL event logging.

Provides append-only structured event logging to JSONL files with
a persistent file handle for efficient I/O.
"""

import json
from dataclasses import asdict
from pathlib import Path
from typing import Any

from bibimport.audit.models import LOG_LEVELS, LogEvent
from bibimport.utils import get_iso_timestamp

__all__ = ["AuditLogger"]


class AuditLogger:
    """JSONL audit logger with persistent file handle.

    Writes one JSON object per line. Events are append-only and flushed after
    each write.

    Attributes
    ----------
    run_id : str
        Unique run identifier.
    log_path : Path
        Path to JSONL log file.
    current_source : str | None
        File being imported; attached to events that do not name one.
    """

    def __init__(self, run_id: str, log_path: Path) -> None:
        """Initialize audit logger and open file handle.

        Parameters
        ----------
        run_id : str
            Unique run identifier.
        log_path : Path
            Path to JSONL log file.
        """
        self.run_id = run_id
        self.log_path = Path(log_path)
        self.current_source: str | None = None

        self.log_path.parent.mkdir(parents=True, exist_ok=True)
        self._file = self.log_path.open("a", encoding="utf-8")

    def __enter__(self) -> "AuditLogger":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        """Flush and close the log file handle."""
        if not self._file.closed:
            self._file.flush()
            self._file.close()

    def event(
        self,
        event_type: str,
        data: dict[str, Any] | None = None,
        level: str = "INFO",
        source: str | None = None,
        record_index: int | None = None,
    ) -> None:
        """Write structured event to log.

        Parameters
        ----------
        event_type : str
            Event type identifier (e.g., "import_started").
        data : dict[str, Any] | None, optional
            Event-specific data payload.
        level : str, optional
            Log level ("DEBUG", "INFO", "WARN", "ERROR").
        source : str | None, optional
            File name, uses current_source if not provided.
        record_index : int | None, optional
            Record position if event is record-specific.

        Raises
        ------
        ValueError
            If ``level`` is not a known log level.
        """
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {level!r}")

        log_event = LogEvent(
            ts=get_iso_timestamp(),
            run_id=self.run_id,
            level=level,
            event=event_type,
            data=data or {},
            source=source if source is not None else self.current_source,
            record_index=record_index,
        )
        json.dump(asdict(log_event), self._file, ensure_ascii=False, separators=(",", ":"))
        self._file.write("\n")
        self._file.flush()

    def run_started(self, command: list[str], parameters: dict[str, Any]) -> None:
        """Log run_started event."""
        self.event("run_started", data={"command": command, "parameters": parameters})

    def run_finished(self, status: str, duration_seconds: float, records_imported: int) -> None:
        """Log run_finished event.

        Parameters
        ----------
        status : str
            Run status ("success" or "failed").
        duration_seconds : float
            Total execution time in seconds.
        records_imported : int
            Total records imported.
        """
        self.event(
            "run_finished",
            data={
                "status": status,
                "duration_seconds": duration_seconds,
                "records_imported": records_imported,
            },
            level="INFO" if status == "success" else "ERROR",
        )

    def import_started(self, source: str, format_name: str) -> None:
        """Log import_started and make ``source`` the current source."""
        self.current_source = source
        self.event("import_started", data={"format": format_name})

    def import_finished(self, source: str, records: int, warnings: list[str]) -> None:
        """Log import_finished; warnings raise the level to WARN."""
        self.event(
            "import_finished",
            data={"records": records, "warnings": warnings},
            level="WARN" if warnings else "INFO",
            source=source,
        )
        self.current_source = None

    def import_failed(self, source: str, status: str, errors: list[str]) -> None:
        """Log import_failed for a file rejected as a whole."""
        self.event(
            "import_failed",
            data={"status": status, "errors": errors},
            level="ERROR",
            source=source,
        )
        self.current_source = None

    def record_imported(self, record_index: int, entry_type: str) -> None:
        """Log record_imported at DEBUG level."""
        self.event(
            "record_imported",
            data={"entry_type": entry_type},
            level="DEBUG",
            record_index=record_index,
        )
