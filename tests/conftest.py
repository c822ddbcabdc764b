"""Pytest configuration and fixtures for test suite."""

import sys
from collections.abc import Callable
from pathlib import Path

import pytest

# Add src directory to path for imports
SRC_PATH = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(SRC_PATH))

from bibimport.models import DEFAULT_ENTRY_ID, CanonicalRecord  # noqa: E402

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    """Path to Biblioscape fixtures directory."""
    return FIXTURES_DIR / "biblioscape"


@pytest.fixture
def sample_file(fixtures_dir: Path) -> Path:
    """Three-record Biblioscape export (article, book section, master's thesis)."""
    return fixtures_dir / "sample.txt"


@pytest.fixture
def schemas_dir() -> Path:
    """Path to bundled JSON schemas."""
    return Path(__file__).parent.parent / "schemas"


@pytest.fixture
def make_record() -> Callable[..., CanonicalRecord]:
    """Factory for canonical records with minimal boilerplate."""

    def _factory(entry_type: str = "misc", index: int = 0, **fields: str) -> CanonicalRecord:
        return CanonicalRecord(
            rid=DEFAULT_ENTRY_ID,
            entry_type=entry_type,
            fields=fields,
            record_index=index,
            source_format="Biblioscape",
        )

    return _factory