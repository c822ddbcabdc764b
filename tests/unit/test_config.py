"""Tests for import configuration."""

from pathlib import Path

import pytest

from bibimport.engine import ImportConfig, ImportResult


@pytest.mark.unit
def test_defaults() -> None:
    """Test default configuration values."""
    config = ImportConfig()

    assert config.format_name is None
    assert config.encoding is None
    assert config.strict is True
    assert config.recursive is False
    assert config.output_path is None
    assert config.audit_log_path is None


@pytest.mark.unit
def test_paths_coerced(tmp_path: Path) -> None:
    """Test string paths become Path objects."""
    config = ImportConfig(output_path=str(tmp_path / "o.jsonl"), audit_log_path="e.jsonl")

    assert isinstance(config.output_path, Path)
    assert config.audit_log_path == Path("e.jsonl")


@pytest.mark.unit
def test_blank_format_rejected() -> None:
    """Test a blank format name is invalid."""
    with pytest.raises(ValueError, match="format_name"):
        ImportConfig(format_name="  ")


@pytest.mark.unit
def test_unknown_encoding_rejected() -> None:
    """Test encodings are checked against the codec registry."""
    with pytest.raises(ValueError, match="Unknown encoding"):
        ImportConfig(encoding="no-such-codec")

    assert ImportConfig(encoding="latin-1").encoding == "latin-1"


@pytest.mark.unit
def test_to_dict_serializes_paths() -> None:
    """Test to_dict renders paths as strings."""
    data = ImportConfig(output_path=Path("out/r.jsonl")).to_dict()

    assert data["output_path"] == str(Path("out/r.jsonl"))
    assert data["audit_log_path"] is None
    assert data["strict"] is True


@pytest.mark.unit
def test_result_to_dict() -> None:
    """Test ImportResult converts to a plain dict."""
    result = ImportResult(success=True, total_files=1, total_records=2)

    assert result.to_dict() == {
        "success": True,
        "total_files": 1,
        "total_records": 2,
        "failed_files": [],
        "warnings": [],
        "output_files": {},
        "error_message": None,
    }
