"""Common utility functions for bibimport."""

from bibimport.utils.hashing import calculate_file_digest
from bibimport.utils.timestamps import get_file_mtime, get_iso_timestamp

__all__ = [
    "get_iso_timestamp",
    "get_file_mtime",
    "calculate_file_digest",
]
