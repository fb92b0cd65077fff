"""
Line break classes, the synthetic states of the pair table, and break kinds

The numbering here is shared by the table compiler and the scanner.
Break classes come first, then the synthetic states, so a pair table
row index is either a :class:`BreakClass` or a :class:`State`.
"""

from __future__ import annotations

import enum


class BreakClass(enum.IntEnum):
    "Unicode Line_Break property values, as used in ``LineBreak.txt``"

    # Non-tailorable
    BK = 0
    CR = 1
    LF = 2
    CM = 3
    NL = 4
    SG = 5
    WJ = 6
    ZW = 7
    GL = 8
    SP = 9
    ZWJ = 10
    # Break opportunities
    B2 = 11
    BA = 12
    BB = 13
    HY = 14
    CB = 15
    # Characters prohibiting certain breaks
    CL = 16
    CP = 17
    EX = 18
    IN = 19
    NS = 20
    OP = 21
    QU = 22
    # Numeric context
    IS = 23
    NU = 24
    PO = 25
    PR = 26
    SY = 27
    # Other characters
    AI = 28
    AL = 29
    CJ = 30
    EB = 31
    EM = 32
    H2 = 33
    H3 = 34
    HL = 35
    ID = 36
    JL = 37
    JV = 38
    JT = 39
    RI = 40
    SA = 41
    XX = 42

    @property
    def long_name(self) -> str:
        "Descriptive name, eg ``Alphabetic`` for ``AL``"
        return _long_names[self]


_long_names = {
    BreakClass.BK: "Mandatory Break",
    BreakClass.CR: "Carriage Return",
    BreakClass.LF: "Line Feed",
    BreakClass.CM: "Combining Mark",
    BreakClass.NL: "Next Line",
    BreakClass.SG: "Surrogate",
    BreakClass.WJ: "Word Joiner",
    BreakClass.ZW: "Zero Width Space",
    BreakClass.GL: "Non-breaking Glue",
    BreakClass.SP: "Space",
    BreakClass.ZWJ: "Zero Width Joiner",
    BreakClass.B2: "Break Opportunity Before and After",
    BreakClass.BA: "Break After",
    BreakClass.BB: "Break Before",
    BreakClass.HY: "Hyphen",
    BreakClass.CB: "Contingent Break Opportunity",
    BreakClass.CL: "Close Punctuation",
    BreakClass.CP: "Close Parenthesis",
    BreakClass.EX: "Exclamation/Interrogation",
    BreakClass.IN: "Inseparable",
    BreakClass.NS: "Nonstarter",
    BreakClass.OP: "Open Punctuation",
    BreakClass.QU: "Quotation",
    BreakClass.IS: "Infix Numeric Separator",
    BreakClass.NU: "Numeric",
    BreakClass.PO: "Postfix Numeric",
    BreakClass.PR: "Prefix Numeric",
    BreakClass.SY: "Symbols Allowing Break After",
    BreakClass.AI: "Ambiguous (Alphabetic or Ideographic)",
    BreakClass.AL: "Alphabetic",
    BreakClass.CJ: "Conditional Japanese Starter",
    BreakClass.EB: "Emoji Base",
    BreakClass.EM: "Emoji Modifier",
    BreakClass.H2: "Hangul LV Syllable",
    BreakClass.H3: "Hangul LVT Syllable",
    BreakClass.HL: "Hebrew Letter",
    BreakClass.ID: "Ideographic",
    BreakClass.JL: "Hangul L Jamo",
    BreakClass.JV: "Hangul V Jamo",
    BreakClass.JT: "Hangul T Jamo",
    BreakClass.RI: "Regional Indicator",
    BreakClass.SA: "Complex Context Dependent (South East Asian)",
    BreakClass.XX: "Unknown",
}


class State(enum.IntEnum):
    """Pair table states that are not break classes

    ``eot`` doubles as the last pair table column.  The ``..SP`` states
    remember a class followed by a run of spaces, ``HLHYBA`` is a
    Hebrew letter followed by a hyphen, and ``RIRI`` is a complete pair
    of regional indicators."""

    eot = 43
    sot = 44
    ZWSP = 45
    OPSP = 46
    QUSP = 47
    CLSP = 48
    CPSP = 49
    B2SP = 50
    HLHYBA = 51
    RIRI = 52


NUM_CLASSES = len(BreakClass)

# columns of the pair table: every break class plus end of text
NUM_COLUMNS = NUM_CLASSES + 1

assert State.eot == NUM_CLASSES


def state_names() -> tuple[str, ...]:
    "Names of every pair table state, indexed by state number"
    return tuple(c.name for c in BreakClass) + tuple(s.name for s in State)


def state_index(name: str) -> int:
    "Number of a break class or state by name, eg 3 for ``CM`` and 44 for ``sot``"
    if name in BreakClass.__members__:
        return BreakClass[name]
    return State[name]


class BreakOpportunity(enum.Enum):
    "Kind of line break opportunity"

    Mandatory = "mandatory"
    "A line must break at this spot"
    Allowed = "allowed"
    "A line is allowed to end at this spot"
