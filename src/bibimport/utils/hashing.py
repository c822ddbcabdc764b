"""Hashing utilities for bibimport."""

import hashlib

__all__ = ["calculate_file_digest"]


def calculate_file_digest(file_bytes: bytes) -> str:
    """Calculate SHA-256 digest of file bytes.

    Parameters
    ----------
    file_bytes : bytes
        Complete file content as bytes.

    Returns
    -------
    str
        SHA-256 digest in format "sha256:<hex>".
    """
    return f"sha256:{hashlib.sha256(file_bytes).hexdigest()}"
