"""Import run orchestration."""

from bibimport.engine.config import ImportConfig, ImportResult
from bibimport.engine.runner import run_import

__all__ = ["ImportConfig", "ImportResult", "run_import"]
