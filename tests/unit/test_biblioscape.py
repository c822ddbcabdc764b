"""Unit tests for Biblioscape field mapping, type inference and assembly."""

import pytest

from bibimport.models import DEFAULT_ENTRY_ID, MappedRecord, TypeHints
from bibimport.parse.biblioscape import (
    FIELD_RULES,
    RuleKind,
    assemble_entry,
    convert_record,
    infer_entry_type,
    map_fields,
)

# ---------------------------------------------------------------------------
# Field mapping
# ---------------------------------------------------------------------------


@pytest.mark.unit
@pytest.mark.parametrize(
    ("tag", "field"),
    [
        ("AU", "author"),
        ("YP", "year"),
        ("VL", "volume"),
        ("NB", "number"),
        ("KW", "keywords"),
        ("NT", "note"),
        ("PB", "publisher"),
        ("ED", "edition"),
        ("IS", "isbn"),
        ("AB", "abstract"),
        ("LG", "language"),
        ("DE", "annote"),
        ("SE", "chapter"),
    ],
)
def test_direct_renames(tag: str, field: str) -> None:
    """Test one-to-one tags land under their canonical name."""
    mapped = map_fields({tag: "value"})

    assert dict(mapped.fields) == {field: "value"}


@pytest.mark.unit
def test_unknown_tags_dropped() -> None:
    """Test tags without a rule produce nothing."""
    mapped = map_fields({"ZZ": "x", "AC": "y", "LP": "z"})

    assert mapped == MappedRecord()


@pytest.mark.unit
def test_titles_and_hints_are_not_fields() -> None:
    """Test TI/ST and RT/TW are retained outside the field mapping."""
    mapped = map_fields({"TI": "T", "ST": "S", "RT": "Book", "TW": "Thesis"})

    assert dict(mapped.fields) == {}
    assert mapped.title_ti == "T"
    assert mapped.title_st == "S"
    assert mapped.hints == TypeHints(secondary="Book", primary="Thesis")


@pytest.mark.unit
def test_composite_parts_retained() -> None:
    """Test page and address parts are kept for assembly."""
    mapped = map_fields({"PS": "1", "PE": "9", "AD": "Rome", "CO": "Italy"})

    assert (mapped.page_start, mapped.page_end) == ("1", "9")
    assert (mapped.address, mapped.country) == ("Rome", "Italy")
    assert dict(mapped.fields) == {}


@pytest.mark.unit
def test_comments_keep_record_order() -> None:
    """Test labeled comment lines follow tag order in the record."""
    mapped = map_fields({"C2": "b", "SB": "Physics", "C1": "a", "TH": "Short"})

    assert mapped.comments == ("Custom2: b", "Subject: Physics", "Custom1: a", "Short Title: Short")


@pytest.mark.unit
@pytest.mark.parametrize(
    ("tag", "label"),
    [
        ("SA", "Secondary Authors"),
        ("TA", "Tertiary Authors"),
        ("TT", "Tertiary Title"),
        ("QA", "Quaternary Authors"),
        ("QT", "Quaternary Title"),
        ("C6", "Custom6"),
        ("CA", "Categories"),
    ],
)
def test_comment_labels(tag: str, label: str) -> None:
    """Test comment tags carry their label."""
    assert map_fields({tag: "v"}).comments == (f"{label}: v",)


@pytest.mark.unit
@pytest.mark.parametrize(
    ("tag", "value", "expected"),
    [
        ("UR", "http://example.org/a", {"url": "http://example.org/a"}),
        ("UR", "  http://example.org/b ", {"url": "  http://example.org/b "}),
        ("UR", "https://example.org/s", {"pdf": "https://example.org/s"}),
        ("AT", "ftp://files.example.org/c.pdf", {"url": "ftp://files.example.org/c.pdf"}),
        ("AT", " papers/local.pdf", {"pdf": " papers/local.pdf"}),
        ("UR", "www.example.org", {"pdf": "www.example.org"}),
    ],
)
def test_link_tags(tag: str, value: str, expected: dict[str, str]) -> None:
    """Test UR/AT become url for http/ftp schemes and pdf otherwise, value kept as is."""
    assert dict(map_fields({tag: value}).fields) == expected


@pytest.mark.unit
def test_every_rule_kind_used() -> None:
    """Test the rule table covers each rule kind."""
    assert {rule.kind for rule in FIELD_RULES.values()} == set(RuleKind)


@pytest.mark.unit
def test_mapping_is_pure() -> None:
    """Test mapping the same raw record twice gives identical results."""
    raw = {"AU": "A", "TI": "T", "PS": "1", "SB": "S", "RT": "Report", "UR": "http://x"}
    snapshot = dict(raw)

    assert map_fields(raw) == map_fields(raw)
    assert raw == snapshot


# ---------------------------------------------------------------------------
# Type inference
# ---------------------------------------------------------------------------


@pytest.mark.unit
@pytest.mark.parametrize(
    ("hint", "entry_type"),
    [
        ("Journal Article", "article"),
        ("Magazine ARTICLE", "article"),
        ("Journal", "article"),
        ("Book Section", "inbook"),
        ("Edited Book", "book"),
        ("Conference Paper", "inproceedings"),
        ("Proceedings", "inproceedings"),
        ("Technical Report", "techreport"),
        ("Master's Thesis", "mastersthesis"),
        ("PhD Thesis", "phdthesis"),
        ("Thesis", "phdthesis"),
        ("Web Page", "misc"),
    ],
)
def test_keyword_table(hint: str, entry_type: str) -> None:
    """Test each keyword rule, case-insensitively."""
    assert infer_entry_type(TypeHints(secondary=hint)) == entry_type


@pytest.mark.unit
def test_first_matching_rule_wins_within_hint() -> None:
    """Test rule order decides when a hint matches several keywords."""
    assert infer_entry_type(TypeHints(primary="Book of Conference Articles")) == "article"
    assert infer_entry_type(TypeHints(primary="Report on a book")) == "book"


@pytest.mark.unit
def test_secondary_hint_alone() -> None:
    """Test RT alone decides the type when TW is absent."""
    assert infer_entry_type(TypeHints(secondary="Conference Proceedings")) == "inproceedings"


@pytest.mark.unit
def test_primary_hint_takes_priority() -> None:
    """Test TW wins over RT when both match."""
    hints = TypeHints(secondary="Conference Proceedings", primary="Journal Article")

    assert infer_entry_type(hints) == "article"


@pytest.mark.unit
def test_unmatched_primary_falls_back_to_secondary() -> None:
    """Test a non-matching TW lets RT decide."""
    hints = TypeHints(secondary="Book", primary="Unpublished work")

    assert infer_entry_type(hints) == "book"


@pytest.mark.unit
def test_no_hints_default_to_misc() -> None:
    """Test absent or unmatched hints keep the default type."""
    assert infer_entry_type(TypeHints()) == "misc"
    assert infer_entry_type(TypeHints(secondary="Map", primary="Film")) == "misc"


# ---------------------------------------------------------------------------
# Assembly
# ---------------------------------------------------------------------------


@pytest.mark.unit
@pytest.mark.parametrize(
    ("entry_type", "st_field"),
    [
        ("article", "journal"),
        ("inbook", "booktitle"),
        ("book", "booktitle"),
        ("misc", "booktitle"),
    ],
)
def test_title_placement(entry_type: str, st_field: str) -> None:
    """Test ST goes to journal for articles and booktitle otherwise."""
    record = assemble_entry(MappedRecord(title_ti="Main", title_st="Container"), entry_type)

    assert record.fields["title"] == "Main"
    assert record.fields[st_field] == "Container"
    assert len(record.fields) == 2


@pytest.mark.unit
@pytest.mark.parametrize(
    ("start", "end", "expected"),
    [
        ("12", "20", "12--20"),
        ("12", None, "12"),
        (None, "20", "--20"),
        (None, None, None),
    ],
)
def test_pages_composite(start: str | None, end: str | None, expected: str | None) -> None:
    """Test page start/end merge into one pages field."""
    record = assemble_entry(MappedRecord(page_start=start, page_end=end), "article")

    assert record.get("pages") == expected


@pytest.mark.unit
@pytest.mark.parametrize(
    ("address", "country", "expected"),
    [
        ("Paris", "France", "Paris, France"),
        ("Paris", None, "Paris"),
        (None, "France", None),
    ],
)
def test_address_composite(address: str | None, country: str | None, expected: str | None) -> None:
    """Test country is appended to the address and dropped without one."""
    record = assemble_entry(MappedRecord(address=address, country=country), "book")

    assert record.get("address") == expected


@pytest.mark.unit
def test_comments_joined() -> None:
    """Test comment lines are joined with ';' and omitted when empty."""
    joined = assemble_entry(MappedRecord(comments=("Subject: A", "Custom1: B")), "misc")
    empty = assemble_entry(MappedRecord(), "misc")

    assert joined.fields["comment"] == "Subject: A;Custom1: B"
    assert "comment" not in empty.fields


@pytest.mark.unit
def test_assembled_record_identity() -> None:
    """Test records carry the placeholder id, type and position."""
    record = assemble_entry(MappedRecord(fields={"author": "X"}), "book", record_index=4)

    assert record.rid == DEFAULT_ENTRY_ID
    assert record.entry_type == "book"
    assert record.record_index == 4
    assert record.source_format == "Biblioscape"


@pytest.mark.unit
def test_convert_record_end_to_end() -> None:
    """Test a raw record goes through mapping, inference and assembly."""
    raw = {
        "RT": "Conference Proceedings",
        "AU": "Doe, J.",
        "TI": "Talk",
        "ST": "Proc. of Things",
        "PS": "5",
        "PE": "7",
        "XX": "ignored",
    }

    record = convert_record(raw, record_index=2)

    assert record.entry_type == "inproceedings"
    assert dict(record.fields) == {
        "author": "Doe, J.",
        "title": "Talk",
        "booktitle": "Proc. of Things",
        "pages": "5--7",
    }


@pytest.mark.unit
def test_no_raw_tags_escape() -> None:
    """Test canonical records never hold two-letter source tags as keys."""
    raw = {tag: "v" for tag in FIELD_RULES}
    raw["ZZ"] = "v"

    record = convert_record(raw)

    assert not set(record.fields) & (set(FIELD_RULES) | {"ZZ"})
