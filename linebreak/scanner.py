"""
Finds line break opportunities in text

Offsets are indices into the ``str``, so each is the position of the
codepoint that starts the next line.  They count codepoints, not UTF-8
bytes, and can be used directly to slice the text.
"""

from __future__ import annotations

from typing import Iterator

from .classes import BreakClass, BreakOpportunity, State
from .compiler import ALLOWED_BREAK_BIT, MANDATORY_BREAK_BIT, STATE_MASK
from . import tables as _tables

_ZWJ = int(BreakClass.ZWJ)
_EOT = int(State.eot)


def scan(
    text: str, offset: int = 0, *, tables: _tables.Tables | None = None
) -> Iterator[tuple[int, BreakOpportunity]]:
    """Yields ``(offset, opportunity)`` for each line break opportunity in text

    There is always a :attr:`~linebreak.classes.BreakOpportunity.Mandatory`
    break at the end of non-empty text.  Nothing is yielded for empty text.
    Codepoints are classified as they are reached, so abandoning the
    iteration early doesn't examine the rest of the text.

    :param offset: Where scanning starts, treated as the start of a line.
       Yielded offsets are still relative to the start of text.
    :param tables: Defaults to :func:`linebreak.tables.load`
    """
    end = len(text)
    if offset >= end:
        return
    if tables is None:
        tables = _tables.load()

    class_index = tables.properties.class_index
    rows = tables.pair_table.rows

    state = int(State.sot)
    after_zwj = False
    for position in range(offset, end + 1):
        cls = class_index(ord(text[position])) if position < end else _EOT
        cell = rows[state][cls]
        mandatory = bool(cell & MANDATORY_BREAK_BIT)
        # no break after ZWJ (LB8a) unless it is mandatory
        if cell & ALLOWED_BREAK_BIT and (not after_zwj or mandatory):
            yield position, BreakOpportunity.Mandatory if mandatory else BreakOpportunity.Allowed
        state = cell & STATE_MASK
        after_zwj = cls == _ZWJ


def next_break(text: str, offset: int = 0, *, tables: _tables.Tables | None = None) -> int:
    """Returns the offset of the first break opportunity after offset

    Scanning starts afresh at offset, so it should be the start of a
    line or a position following a safe pair."""
    for position, _ in scan(text, offset, tables=tables):
        if position > offset:
            return position
    return len(text)
