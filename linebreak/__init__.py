"""
:mod:`linebreak` - Unicode line breaking

Finds where text can be broken and resumed on the next line, following
`Unicode Technical Report #14 <https://www.unicode.org/reports/tr14/>`__
for Unicode :data:`unicode_version`.  Complex context (``SA``) text
such as Thai is treated as alphabetic and not broken within words.

Break opportunities

    :func:`scan` yields each position where a line may
    (:attr:`BreakOpportunity.Allowed`) or must
    (:attr:`BreakOpportunity.Mandatory`) end.  Positions are
    :class:`str` indices, and there is always a mandatory break at the
    end of non-empty text.

    Building on that are iterators providing the text of each segment,
    optionally with offsets.

Lookups

    * Line break class of a codepoint :func:`class_of`
    * If the break between two classes needs no earlier context :func:`is_safe_pair`

Tables

    The property and rule tables are built from ``LineBreak.txt``.  Run
    ``python -m linebreak.build`` once to generate them as a module, or
    point the ``LINEBREAK_DATA`` environment variable at the data file.
    See :func:`linebreak.tables.load`.
"""

from __future__ import annotations

from typing import Iterator

from .classes import BreakClass, BreakOpportunity
from .config import UNICODE_VERSION
from .exceptions import DataError, LineBreakError, RuleError, StateOverflowError, TablesUnavailableError
from .scanner import next_break, scan
from .tables import Tables, load

__version__ = "0.1.0"

unicode_version = UNICODE_VERSION
"""The `Unicode version <https://www.unicode.org/versions/enumeratedversions.html>`__
that the rules and data tables implement"""

__all__ = [
    "BreakClass",
    "BreakOpportunity",
    "DataError",
    "LineBreakError",
    "RuleError",
    "StateOverflowError",
    "Tables",
    "TablesUnavailableError",
    "class_of",
    "is_safe_pair",
    "line_break_iter",
    "line_break_iter_with_offsets",
    "line_break_next_break",
    "scan",
    "unicode_version",
]


def class_of(codepoint: int | str) -> BreakClass:
    """Returns the line break class - eg ``AL`` for ``a``

    Any int is accepted, with values outside the Unicode range being
    ``XX``.  A str must be exactly one character."""
    return load().properties.class_of(codepoint)


def is_safe_pair(first: BreakClass, second: BreakClass) -> bool:
    """True if the break between first and second never depends on earlier text

    Breaking can restart from the start of ``second`` after a safe pair."""
    return load().is_safe_pair(first, second)


def line_break_next_break(text: str, offset: int = 0) -> int:
    """Returns next opportunity to break a line

    :param text: The text to examine
    :param offset: Where the line starts

    :returns:  Next break point
    """
    return next_break(text, offset)


def line_break_iter(text: str, offset: int = 0) -> Iterator[str]:
    "Iterator providing text of each line"
    for _, _, segment in line_break_iter_with_offsets(text, offset):
        yield segment


def line_break_iter_with_offsets(text: str, offset: int = 0) -> Iterator[tuple[int, int, str]]:
    "Iterator providing start, end, text of each line"
    start = offset
    for end, _ in scan(text, offset):
        yield (start, end, text[start:end])
        start = end
