"""Line-folding tag-file reader.

Layout: each field opens on a line ``--XX-- value`` where ``XX`` is a
two-character tag. Any other non-blank line continues the last opened field.
A line of exactly six dashes closes the record.

Reference: http://www.biblioscape.com/download/Biblioscape8.pdf
"""

from collections.abc import Iterable, Iterator

from bibimport.models import RawRecord

__all__ = [
    "RECORD_DELIMITER",
    "MalformedTagFileError",
    "TagFileParser",
    "parse_tag_lines",
]

RECORD_DELIMITER = "------"
FIELD_MARKER = "--"
TAG_MARKER = "-- "


class MalformedTagFileError(ValueError):
    """Raised when a continuation line has no field to continue."""

    def __init__(self, line_num: int, line: str) -> None:
        """Initialize error.

        Parameters
        ----------
        line_num : int
            1-based line number of the offending line.
        line : str
            The offending line.
        """
        super().__init__(f"Line {line_num}: continuation without an open field: {line[:50]!r}")
        self.line_num = line_num
        self.line = line


def split_field_line(line: str) -> tuple[str, str] | None:
    """Split a field-opening line into (tag, initial text).

    Returns None if the line does not open a field.
    """
    if line.startswith(FIELD_MARKER) and len(line) >= 7 and line[4:7] == TAG_MARKER:
        return line[2:4], line[7:]
    return None


class TagFileParser:
    """Stateful reader turning physical lines into raw records.

    One instance reads one stream. Records are yielded as their delimiter is
    reached; a trailing record with no delimiter is dropped.

    Attributes
    ----------
    pending_discarded : bool
        Set after a full pass when an unterminated record was dropped.
    records_emitted : int
        Number of records yielded so far.
    """

    def __init__(self) -> None:
        self.pending_discarded = False
        self.records_emitted = 0

    def iter_records(self, lines: Iterable[str]) -> Iterator[RawRecord]:
        """Yield one raw record per delimiter line.

        Parameters
        ----------
        lines : Iterable[str]
            Physical lines, with or without trailing newlines.

        Yields
        ------
        RawRecord
            Tag buffers of a complete record.

        Raises
        ------
        MalformedTagFileError
            On a continuation line before any field was opened.
        """
        current: RawRecord = {}
        current_tag: str | None = None

        for line_num, line in enumerate(lines, start=1):
            line = line.rstrip("\r\n")

            if not line:
                continue

            if line == RECORD_DELIMITER:
                self.records_emitted += 1
                yield current
                current = {}
                current_tag = None
                continue

            opened = split_field_line(line)
            if opened is not None:
                current_tag, text = opened
                current[current_tag] = text
                continue

            if current_tag is None:
                raise MalformedTagFileError(line_num, line)
            current[current_tag] += line.strip()

        self.pending_discarded = bool(current)


def parse_tag_lines(lines: Iterable[str]) -> list[RawRecord]:
    """Read every record from ``lines``, all or nothing.

    Raises
    ------
    MalformedTagFileError
        If the input is structurally invalid anywhere.
    """
    return list(TagFileParser().iter_records(lines))
