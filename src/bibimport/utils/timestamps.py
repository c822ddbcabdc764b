"""Timestamp helpers shared by audit events and ingestion results."""

from datetime import UTC, datetime
from pathlib import Path

__all__ = ["get_iso_timestamp", "get_file_mtime"]


def _to_iso(moment: datetime) -> str:
    return moment.isoformat().replace("+00:00", "Z")


def get_iso_timestamp() -> str:
    """Return the current UTC time as ISO8601 with microseconds and ``Z`` suffix."""
    return _to_iso(datetime.now(UTC))


def get_file_mtime(file_path: Path) -> str:
    """Return a file's modification time as ISO8601, whole seconds.

    Returns an empty string when the file cannot be stat'ed.
    """
    try:
        mtime = datetime.fromtimestamp(file_path.stat().st_mtime, UTC)
    except (OSError, ValueError):
        return ""
    return _to_iso(mtime.replace(microsecond=0))
