"""Import bibliographic tag files into typed, schema-checked records.

This package provides:
- Data models (bibimport.models): raw, mapped and canonical record types
- Parsing (bibimport.parse): tag-file reader, field mapping, import formats
- Schema (bibimport.schema): entry-type registry and record validation
- Engine (bibimport.engine): import run configuration and orchestration
- Audit (bibimport.audit): JSONL event logging
- CLI (bibimport.cli): command-line interface
- Public API (bibimport.api): high-level convenience functions
"""

__version__ = "0.1.0"
__license__ = "MIT"

from bibimport.api import (
    ParseError,
    parse_file,
    read_jsonl,
    validate_records,
    write_jsonl,
)
from bibimport.models import CanonicalRecord, ParseOutcome

__all__ = [
    "__version__",
    "__license__",
    "CanonicalRecord",
    "ParseOutcome",
    "ParseError",
    "parse_file",
    "read_jsonl",
    "validate_records",
    "write_jsonl",
]
