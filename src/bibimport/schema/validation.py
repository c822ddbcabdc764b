"""Validate canonical records against entry-type schemas.

The importer never validates; imported data is often incomplete and meant to
be corrected afterwards. Editors, exporters and the ``validate`` CLI command
use this module instead.
"""

from dataclasses import dataclass
from typing import Any

from jsonschema import Draft202012Validator

from bibimport.models import CanonicalRecord
from bibimport.schema.entry_types import EntryTypeRegistry, EntryTypeSchema, default_registry

__all__ = ["ValidationReport", "build_json_schema", "validate_record"]


@dataclass(frozen=True)
class ValidationReport:
    """Outcome of validating one record.

    Attributes
    ----------
    rid : str
        Record identifier.
    entry_type : str
        Entry type of the record.
    known_type : bool
        Whether the registry knows the entry type.
    missing : tuple[str, ...]
        Unsatisfied requirements, alternatives joined with ``/``.
    """

    rid: str
    entry_type: str
    known_type: bool
    missing: tuple[str, ...] = ()

    @property
    def is_valid(self) -> bool:
        """Whether the type is known and every requirement is met."""
        return self.known_type and not self.missing


def build_json_schema(entry_schema: EntryTypeSchema) -> dict[str, Any]:
    """Render a JSON Schema for the ``fields`` mapping of a record.

    Every requirement group becomes one ``allOf`` item so that failures map
    back to the group that produced them.
    """
    json_schema: dict[str, Any] = {
        "$schema": "https://json-schema.org/draft/2020-12/schema",
        "title": entry_schema.name,
        "type": "object",
        "properties": {name: {"type": "string"} for name in sorted(entry_schema.all_fields)},
        "additionalProperties": {"type": "string"},
    }
    # allOf must not be empty
    if entry_schema.requirement_groups:
        json_schema["allOf"] = [
            {"anyOf": [{"required": [alt]} for alt in group]}
            for group in entry_schema.requirement_groups
        ]
    return json_schema


def validate_record(
    record: CanonicalRecord,
    registry: EntryTypeRegistry | None = None,
) -> ValidationReport:
    """Check a record's fields against its entry type.

    Parameters
    ----------
    record : CanonicalRecord
        Record to check.
    registry : EntryTypeRegistry | None, optional
        Registry to consult, by default the process-wide one.

    Returns
    -------
    ValidationReport
        Report listing unmet requirements.
    """
    if registry is None:
        registry = default_registry()
    entry_schema = registry.lookup(record.entry_type)
    if entry_schema is None:
        return ValidationReport(rid=record.rid, entry_type=record.entry_type, known_type=False)

    groups = entry_schema.requirement_groups
    validator = Draft202012Validator(build_json_schema(entry_schema))

    missing: set[str] = set()
    for error in validator.iter_errors(dict(record.fields)):
        path = list(error.relative_schema_path)
        if len(path) >= 2 and path[0] == "allOf":
            missing.add("/".join(groups[path[1]]))

    return ValidationReport(
        rid=record.rid,
        entry_type=record.entry_type,
        known_type=True,
        missing=tuple(sorted(missing)),
    )
