"""Helper utilities for audit logging: run IDs and environment info."""

import importlib.metadata
import secrets
import sys

from bibimport.utils import get_iso_timestamp

__all__ = [
    "generate_run_id",
    "get_package_version",
    "get_environment_info",
]


def generate_run_id() -> str:
    """Generate unique run identifier.

    Returns
    -------
    str
        Run ID in format: ISO8601_timestamp__random_suffix.
    """
    return f"{get_iso_timestamp()}__{secrets.token_hex(4)}"


def get_package_version(package: str = "bibimport") -> str:
    """Return the installed version of ``package`` or "unknown"."""
    try:
        return importlib.metadata.version(package)
    except importlib.metadata.PackageNotFoundError:
        return "unknown"


def get_environment_info() -> dict[str, object]:
    """Describe the interpreter and key dependency versions for run events."""
    return {
        "python_version": sys.version.split()[0],
        "package_version": get_package_version(),
        "dependencies": {name: get_package_version(name) for name in ("click", "jsonschema")},
    }
