"""Shared data types for bibimport.

Schema types live closer to their consumers in bibimport.schema.
"""

from bibimport.models.records import (
    DEFAULT_ENTRY_ID,
    DEFAULT_ENTRY_TYPE,
    CanonicalRecord,
    MappedRecord,
    ParsedFields,
    ParseOutcome,
    RawRecord,
    TypeHints,
)

__all__ = [
    "DEFAULT_ENTRY_ID",
    "DEFAULT_ENTRY_TYPE",
    "CanonicalRecord",
    "MappedRecord",
    "ParsedFields",
    "ParseOutcome",
    "RawRecord",
    "TypeHints",
]
