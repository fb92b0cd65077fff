"""
Line_Break property lookup

``LineBreak.txt`` lists ranges of codepoints with their class.  It is
turned into 256 codepoint pages.  Pages where every codepoint has the
same class are not stored, instead the page index holds the class
tagged with :data:`UNIFORM_PAGE`.
"""

from __future__ import annotations

import dataclasses
import re

from typing import Iterator, NamedTuple

from .classes import BreakClass
from .exceptions import DataError

MAX_CODEPOINT = 0x10FFFF

PAGE_SHIFT = 8
PAGE_SIZE = 1 << PAGE_SHIFT
PAGE_MASK = PAGE_SIZE - 1
PAGE_COUNT = (MAX_CODEPOINT + 1) >> PAGE_SHIFT

UNIFORM_PAGE = 0x8000
"Set in a page index when the whole page is one class (held in the low bits)"

# (start, end, class) for codepoints not listed in the data file, from
# the @missing lines of LineBreak.txt.  Everything else defaults to XX
default_ranges = (
    # The unassigned code points in the following blocks default to ID
    (0x3400, 0x4DBF, BreakClass.ID),
    (0x4E00, 0x9FFF, BreakClass.ID),
    (0xF900, 0xFAFF, BreakClass.ID),
    # All undesignated code points in Planes 2 and 3 default to ID
    (0x20000, 0x2FFFD, BreakClass.ID),
    (0x30000, 0x3FFFD, BreakClass.ID),
    # Plane 1 pictographic range
    (0x1F000, 0x1FFFD, BreakClass.ID),
    # Currency symbols
    (0x20A0, 0x20CF, BreakClass.PR),
)


def default_class(codepoint: int) -> BreakClass:
    "Class of a codepoint that isn't listed in the data file"
    for start, end, cls in default_ranges:
        if start <= codepoint <= end:
            return cls
    return BreakClass.XX


class Record(NamedTuple):
    "One data line"

    start: int
    end: int
    cls: BreakClass
    line_number: int


_data_line = re.compile(
    r"""^(?P<start>[0-9A-Fa-f]{4,6})          # codepoint
        (?:\.\.(?P<end>[0-9A-Fa-f]{4,6}))?    # optional end of range
        \s*;\s*
        (?P<cls>[A-Z][A-Z0-9]{1,2})           # Line_Break value
        \s*(?:\#.*)?$""",
    re.VERBOSE,
)

_version_line = re.compile(r"#\s*LineBreak-(?P<version>\d+\.\d+(?:\.\d+)?)\.txt")


def extract_version(source: str) -> str:
    """Returns major.minor Unicode version from the first line of ``LineBreak.txt``

    :raises DataError: if the header is missing"""
    first = source.lstrip("\ufeff").split("\n", 1)[0].strip()
    mo = _version_line.match(first)
    if not mo:
        raise DataError("Missing '# LineBreak-VERSION.txt' header", 1, first)
    # only major.minor matter
    return ".".join(mo.group("version").split(".")[:2])


def parse_records(source: str) -> Iterator[Record]:
    """Yields each data line of ``LineBreak.txt`` content

    Records are checked to be ascending and not overlapping.

    :raises DataError: on malformed lines, unknown classes, and out of order ranges
    """
    last_end = -1
    for line_number, line in enumerate(source.splitlines(), 1):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        mo = _data_line.match(stripped)
        if not mo:
            raise DataError("Malformed data line", line_number, line)
        start = int(mo.group("start"), 16)
        end = int(mo.group("end"), 16) if mo.group("end") else start
        try:
            cls = BreakClass[mo.group("cls")]
        except KeyError:
            raise DataError(f"Unknown line break class {mo.group('cls')!r}", line_number, line) from None
        if end < start:
            raise DataError("Range end is before start", line_number, line)
        if end > MAX_CODEPOINT:
            raise DataError(f"Codepoint beyond 0x{MAX_CODEPOINT:X}", line_number, line)
        if start <= last_end:
            raise DataError(f"Range overlaps or precedes previous range ending 0x{last_end:04X}", line_number, line)
        last_end = end
        yield Record(start, end, cls, line_number)


def codepoint_classes(records: Iterator[Record]) -> bytearray:
    "Class value of every codepoint, with unlisted ones given their default"
    values = bytearray([BreakClass.XX]) * (MAX_CODEPOINT + 1)
    for start, end, cls in default_ranges:
        values[start : end + 1] = bytes([cls]) * (end - start + 1)
    for record in records:
        values[record.start : record.end + 1] = bytes([record.cls]) * (record.end - record.start + 1)
    return values


@dataclasses.dataclass(frozen=True)
class PropertyTable:
    """Paged codepoint to :class:`~linebreak.classes.BreakClass` lookup

    Each entry of :attr:`page_indices` covers 256 codepoints.  If it
    has :data:`UNIFORM_PAGE` set then the low bits are the class for
    the whole page, otherwise it is the index into :attr:`pages`.
    """

    page_indices: tuple[int, ...]
    "One per 256 codepoints"
    pages: tuple[bytes, ...]
    "256 class values each"

    def class_index(self, codepoint: int) -> int:
        "Numeric class of an int codepoint - codepoints out of range are XX"
        if not 0 <= codepoint <= MAX_CODEPOINT:
            return BreakClass.XX
        index = self.page_indices[codepoint >> PAGE_SHIFT]
        if index & UNIFORM_PAGE:
            return index & ~UNIFORM_PAGE
        return self.pages[index][codepoint & PAGE_MASK]

    def class_of(self, codepoint: int | str) -> BreakClass:
        """Returns the line break class of the codepoint

        :param codepoint: An int, or a str of length one.  Any int is
           accepted with those outside the Unicode range giving ``XX``."""
        if isinstance(codepoint, str):
            if len(codepoint) != 1:
                raise TypeError(f"Expected a single character, not {len(codepoint)} characters")
            codepoint = ord(codepoint)
        elif not isinstance(codepoint, int):
            raise TypeError(f"Expected int or str, not {type(codepoint).__name__}")
        return _classes[self.class_index(codepoint)]

    @property
    def uniform_pages(self) -> int:
        "How many pages are held inline in the index"
        return sum(1 for index in self.page_indices if index & UNIFORM_PAGE)


_classes = tuple(BreakClass)


def build_property_table(records: Iterator[Record]) -> PropertyTable:
    "Pages the classes of every codepoint, storing each distinct non-uniform page once"
    values = codepoint_classes(records)

    page_indices: list[int] = []
    pages: list[bytes] = []
    seen: dict[bytes, int] = {}

    for page_number in range(PAGE_COUNT):
        page = bytes(values[page_number << PAGE_SHIFT : (page_number + 1) << PAGE_SHIFT])
        if page.count(page[0]) == PAGE_SIZE:
            page_indices.append(page[0] | UNIFORM_PAGE)
            continue
        if page not in seen:
            seen[page] = len(pages)
            pages.append(page)
        page_indices.append(seen[page])

    return PropertyTable(tuple(page_indices), tuple(pages))
