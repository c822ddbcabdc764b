"""Biblioscape tag-file importer.

Several Biblioscape fields have no BibTeX counterpart and are ignored; others
are only kept inside the ``comment`` field. Titles are placed once the entry
type is known: the secondary title is the journal of an article and the book
title of everything else.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum

from bibimport.models import (
    DEFAULT_ENTRY_ID,
    DEFAULT_ENTRY_TYPE,
    CanonicalRecord,
    MappedRecord,
    ParseOutcome,
    RawRecord,
    TypeHints,
)
from bibimport.parse.base import ImportFormat
from bibimport.parse.tagfile import MalformedTagFileError, TagFileParser

__all__ = [
    "FORMAT_NAME",
    "FIELD_RULES",
    "TYPE_RULES",
    "BiblioscapeImporter",
    "FieldRule",
    "RuleKind",
    "assemble_entry",
    "convert_record",
    "infer_entry_type",
    "map_fields",
]

FORMAT_NAME = "Biblioscape"
URL_SCHEMES = ("http://", "ftp://")
COMMENT_SEPARATOR = ";"


class RuleKind(StrEnum):
    """How a source tag contributes to the record."""

    RENAME = "rename"
    COMPOSITE = "composite"
    COMMENT = "comment"
    LINK = "link"
    TITLE = "title"
    HINT = "hint"


@dataclass(frozen=True)
class FieldRule:
    """Mapping rule for one source tag.

    ``target`` is the canonical field for RENAME, the comment label for
    COMMENT, and a ``MappedRecord`` slot for COMPOSITE, TITLE and HINT.
    """

    kind: RuleKind
    target: str = ""


def _rename(target: str) -> FieldRule:
    return FieldRule(RuleKind.RENAME, target)


def _comment(label: str) -> FieldRule:
    return FieldRule(RuleKind.COMMENT, label)


FIELD_RULES: dict[str, FieldRule] = {
    "AU": _rename("author"),
    "YP": _rename("year"),
    "VL": _rename("volume"),
    "NB": _rename("number"),
    "KW": _rename("keywords"),
    "NT": _rename("note"),
    "PB": _rename("publisher"),
    "ED": _rename("edition"),
    "IS": _rename("isbn"),
    "AB": _rename("abstract"),
    "LG": _rename("language"),
    "DE": _rename("annote"),
    "SE": _rename("chapter"),
    "PS": FieldRule(RuleKind.COMPOSITE, "page_start"),
    "PE": FieldRule(RuleKind.COMPOSITE, "page_end"),
    "AD": FieldRule(RuleKind.COMPOSITE, "address"),
    "CO": FieldRule(RuleKind.COMPOSITE, "country"),
    "SB": _comment("Subject"),
    "SA": _comment("Secondary Authors"),
    "TA": _comment("Tertiary Authors"),
    "TT": _comment("Tertiary Title"),
    "QA": _comment("Quaternary Authors"),
    "QT": _comment("Quaternary Title"),
    "C1": _comment("Custom1"),
    "C2": _comment("Custom2"),
    "C3": _comment("Custom3"),
    "C4": _comment("Custom4"),
    "C5": _comment("Custom5"),
    "C6": _comment("Custom6"),
    "CA": _comment("Categories"),
    "TH": _comment("Short Title"),
    "UR": FieldRule(RuleKind.LINK),
    "AT": FieldRule(RuleKind.LINK),
    "TI": FieldRule(RuleKind.TITLE, "title_ti"),
    "ST": FieldRule(RuleKind.TITLE, "title_st"),
    "RT": FieldRule(RuleKind.HINT, "secondary"),
    "TW": FieldRule(RuleKind.HINT, "primary"),
}

# First match wins within a hint; order matters ("book section" before "book").
TYPE_RULES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("article",), "article"),
    (("journal",), "article"),
    (("book section",), "inbook"),
    (("book",), "book"),
    (("conference",), "inproceedings"),
    (("proceedings",), "inproceedings"),
    (("report",), "techreport"),
    (("thesis", "master"), "mastersthesis"),
    (("thesis",), "phdthesis"),
)


def map_fields(raw: RawRecord) -> MappedRecord:
    """Translate source tags into canonical fields and retained slots.

    Tags without a rule are dropped.

    Parameters
    ----------
    raw : RawRecord
        Tag buffers of one record.

    Returns
    -------
    MappedRecord
        Renamed fields, type hints, title candidates and composite parts.
    """
    fields: dict[str, str] = {}
    slots: dict[str, str] = {}
    hints: dict[str, str] = {}
    comments: list[str] = []

    for tag, value in raw.items():
        rule = FIELD_RULES.get(tag)
        if rule is None:
            continue

        if rule.kind is RuleKind.RENAME:
            fields[rule.target] = value
        elif rule.kind is RuleKind.LINK:
            fields["url" if value.strip().startswith(URL_SCHEMES) else "pdf"] = value
        elif rule.kind is RuleKind.COMMENT:
            comments.append(f"{rule.target}: {value}")
        elif rule.kind is RuleKind.HINT:
            hints[rule.target] = value
        else:
            slots[rule.target] = value

    return MappedRecord(
        fields=fields,
        hints=TypeHints(**hints),
        comments=tuple(comments),
        **slots,
    )


def infer_entry_type(hints: TypeHints) -> str:
    """Pick the entry type from the type hints.

    The primary hint is checked first; the secondary one only when the
    primary is absent or matches no keyword.
    """
    for hint in reversed(hints.slots()):
        if hint is None:
            continue
        text = hint.lower()
        for keywords, entry_type in TYPE_RULES:
            if all(keyword in text for keyword in keywords):
                return entry_type
    return DEFAULT_ENTRY_TYPE


def assemble_entry(
    mapped: MappedRecord,
    entry_type: str,
    record_index: int = 0,
    source_format: str = FORMAT_NAME,
) -> CanonicalRecord:
    """Build the canonical record from mapped fields and the entry type.

    Parameters
    ----------
    mapped : MappedRecord
        Output of ``map_fields``.
    entry_type : str
        Resolved entry type.
    record_index : int, optional
        Position of the record in its source, by default 0.
    source_format : str, optional
        Format name stored on the record.

    Returns
    -------
    CanonicalRecord
        Record with placeholder identifier.
    """
    fields = dict(mapped.fields)

    # Non-article types all take ST as booktitle, chapters included.
    if mapped.title_st is not None:
        fields["journal" if entry_type == "article" else "booktitle"] = mapped.title_st
    if mapped.title_ti is not None:
        fields["title"] = mapped.title_ti

    if mapped.page_start is not None or mapped.page_end is not None:
        start = mapped.page_start or ""
        end = "" if mapped.page_end is None else f"--{mapped.page_end}"
        fields["pages"] = start + end

    if mapped.address is not None:
        country = "" if mapped.country is None else f", {mapped.country}"
        fields["address"] = mapped.address + country

    if mapped.comments:
        fields["comment"] = COMMENT_SEPARATOR.join(mapped.comments)

    return CanonicalRecord(
        rid=DEFAULT_ENTRY_ID,
        entry_type=entry_type,
        fields=fields,
        record_index=record_index,
        source_format=source_format,
    )


def convert_record(raw: RawRecord, record_index: int = 0) -> CanonicalRecord:
    """Run one raw record through mapping, type inference and assembly."""
    mapped = map_fields(raw)
    return assemble_entry(mapped, infer_entry_type(mapped.hints), record_index)


class BiblioscapeImporter(ImportFormat):
    """Importer for Biblioscape tag files."""

    def format_name(self) -> str:
        return FORMAT_NAME

    def recognized_extensions(self) -> frozenset[str]:
        return frozenset({".txt"})

    def description(self) -> str:
        return (
            "Imports a Biblioscape Tag File.\n"
            "Several Biblioscape field types are ignored. "
            'Others are only included in the BibTeX field "comment".'
        )

    def is_recognized(self, stream: Iterable[str]) -> bool:
        """Always True: the format has no reliable marker to sniff."""
        if stream is None:
            raise TypeError("stream must not be None")
        return True

    def import_stream(self, stream: Iterable[str]) -> ParseOutcome:
        """Import records from an iterable of lines.

        A continuation line with no open field rejects the whole input,
        including records read before it.

        Parameters
        ----------
        stream : Iterable[str]
            Text lines (e.g. an open text file).

        Returns
        -------
        ParseOutcome
            Records in input order, or the failure outcome.
        """
        parser = TagFileParser()
        records: list[CanonicalRecord] = []

        try:
            for index, raw in enumerate(parser.iter_records(stream)):
                records.append(convert_record(raw, index))
        except MalformedTagFileError as e:
            return ParseOutcome.failure(str(e))

        warnings: list[str] = []
        if parser.pending_discarded:
            warnings.append("End of input reached without record delimiter; last record discarded")

        return ParseOutcome(records, warnings, [])
