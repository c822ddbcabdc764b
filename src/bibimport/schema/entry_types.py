"""Entry-type schemas: required and optional fields per citation type.

Each schema is plain data. Required names may list alternatives separated by
``/`` (``year/yearfiled``); any one of them satisfies the requirement.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from functools import lru_cache

__all__ = [
    "EntryTypeSchema",
    "EntryTypeRegistry",
    "IEEETRAN_ENTRY_TYPES",
    "BIBTEX_ENTRY_TYPES",
    "default_registry",
]


@dataclass(frozen=True)
class EntryTypeSchema:
    """Field schema for a single entry type.

    Attributes
    ----------
    name : str
        Entry-type name as displayed (e.g. ``Periodical``).
    required : frozenset[str]
        Required field names; ``a/b`` means either ``a`` or ``b``.
    optional : frozenset[str]
        Optional field names. Disjoint from ``required``.
    """

    name: str
    required: frozenset[str] = frozenset()
    optional: frozenset[str] = frozenset()

    def __post_init__(self) -> None:
        """Validate name and disjointness of the field sets."""
        if not self.name:
            raise ValueError("Entry type name must not be empty")

        object.__setattr__(self, "required", frozenset(self.required))
        object.__setattr__(self, "optional", frozenset(self.optional))

        overlap = self.required & self.optional
        if overlap:
            raise ValueError(
                f"Entry type {self.name!r} lists fields as both required and optional: "
                f"{sorted(overlap)}"
            )

    @property
    def requirement_groups(self) -> tuple[tuple[str, ...], ...]:
        """Required fields split into alternative groups, sorted."""
        return tuple(tuple(req.split("/")) for req in sorted(self.required))

    @property
    def all_fields(self) -> frozenset[str]:
        """Every field name the type knows, alternatives expanded."""
        names = {alt for group in self.requirement_groups for alt in group}
        return frozenset(names | self.optional)


class EntryTypeRegistry:
    """Read-only lookup table of entry-type schemas.

    Lookups are case-insensitive. The table is never mutated after
    construction, so one instance can be shared across threads.
    """

    def __init__(self, schemas: Iterable[EntryTypeSchema]) -> None:
        """Build the table.

        Parameters
        ----------
        schemas : Iterable[EntryTypeSchema]
            Schemas to register.

        Raises
        ------
        ValueError
            If two schemas share a name (case-insensitively).
        """
        table: dict[str, EntryTypeSchema] = {}
        for entry_schema in schemas:
            key = entry_schema.name.lower()
            if key in table:
                raise ValueError(f"Duplicate entry type: {entry_schema.name!r}")
            table[key] = entry_schema
        self._table = table

    def lookup(self, type_name: str) -> EntryTypeSchema | None:
        """Return the schema for ``type_name`` or None if unknown."""
        return self._table.get(type_name.lower())

    def all_type_names(self) -> frozenset[str]:
        """Return all registered type names."""
        return frozenset(s.name for s in self._table.values())

    def __contains__(self, type_name: object) -> bool:
        return isinstance(type_name, str) and type_name.lower() in self._table

    def __iter__(self) -> Iterator[EntryTypeSchema]:
        return iter(self._table.values())

    def __len__(self) -> int:
        return len(self._table)


def _schema(
    name: str,
    required: Iterable[str] = (),
    optional: Iterable[str] = (),
) -> EntryTypeSchema:
    return EntryTypeSchema(name=name, required=frozenset(required), optional=frozenset(optional))


# IEEEtran bibliography style types
# See IEEEtran_bst_HOWTO.pdf on CTAN.
IEEETRAN_ENTRY_TYPES: tuple[EntryTypeSchema, ...] = (
    # Internet references
    _schema(
        "Electronic",
        optional=[
            "author", "month", "year", "title", "language",
            "howpublished", "organization", "address", "note", "url",
        ],
    ),
    # Controls aspects of the bibliography style
    _schema(
        "IEEEtranBSTCTL",
        optional=[
            "ctluse_article_number", "ctluse_paper", "ctluse_forced_etal", "ctluse_url",
            "ctlmax_names_forced_etal", "ctlnames_show_etal", "ctluse_alt_spacing",
            "ctlalt_stretch_factor", "ctldash_repeated_names", "ctlname_format_string",
            "ctlname_latex_cmd", "ctlname_url_prefix",
        ],
    ),
    # Journals and magazines
    _schema(
        "Periodical",
        required=["title", "year"],
        optional=[
            "editor", "language", "series", "volume", "number",
            "organization", "month", "note", "url",
        ],
    ),
    _schema(
        "Patent",
        required=["nationality", "number", "year/yearfiled"],
        optional=[
            "author", "title", "language", "assignee", "address", "type",
            "day", "dayfiled", "month", "monthfiled", "note", "url",
        ],
    ),
    # Proposed or formally published standards
    _schema(
        "Standard",
        required=["title", "organization/institution"],
        optional=[
            "author", "language", "howpublished", "type", "number",
            "revision", "address", "month", "year", "note", "url",
        ],
    ),
)

# Standard types produced by the tag-file importers
BIBTEX_ENTRY_TYPES: tuple[EntryTypeSchema, ...] = (
    _schema("misc", optional=["author", "title", "howpublished", "month", "year", "note"]),
    _schema(
        "article",
        required=["author", "title", "journal", "year"],
        optional=["volume", "number", "pages", "month", "note"],
    ),
    _schema(
        "book",
        required=["author/editor", "title", "publisher", "year"],
        optional=["volume", "number", "series", "address", "edition", "month", "note"],
    ),
    _schema(
        "inbook",
        required=["author/editor", "title", "chapter/pages", "publisher", "year"],
        optional=["volume", "number", "series", "type", "address", "edition", "month", "note"],
    ),
    _schema(
        "inproceedings",
        required=["author", "title", "booktitle", "year"],
        optional=[
            "editor", "volume", "number", "series", "pages", "address",
            "month", "organization", "publisher", "note",
        ],
    ),
    _schema(
        "techreport",
        required=["author", "title", "institution", "year"],
        optional=["type", "number", "address", "month", "note"],
    ),
    _schema(
        "mastersthesis",
        required=["author", "title", "school", "year"],
        optional=["type", "address", "month", "note"],
    ),
    _schema(
        "phdthesis",
        required=["author", "title", "school", "year"],
        optional=["type", "address", "month", "note"],
    ),
)


@lru_cache(maxsize=1)
def default_registry() -> EntryTypeRegistry:
    """Return the process-wide registry, built on first call."""
    return EntryTypeRegistry(BIBTEX_ENTRY_TYPES + IEEETRAN_ENTRY_TYPES)
