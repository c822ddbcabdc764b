"""Entry-type schema registry and record validation."""

from bibimport.schema.entry_types import (
    BIBTEX_ENTRY_TYPES,
    IEEETRAN_ENTRY_TYPES,
    EntryTypeRegistry,
    EntryTypeSchema,
    default_registry,
)
from bibimport.schema.validation import ValidationReport, build_json_schema, validate_record

__all__ = [
    "BIBTEX_ENTRY_TYPES",
    "IEEETRAN_ENTRY_TYPES",
    "EntryTypeRegistry",
    "EntryTypeSchema",
    "default_registry",
    "ValidationReport",
    "build_json_schema",
    "validate_record",
]
