"""
Safe pairs of break classes

A pair of adjacent classes is safe when the break decision between them
doesn't depend on anything earlier in the text.  Editors use this to
restart breaking at a safe pair instead of at the start of the text.
"""

from __future__ import annotations

from .classes import NUM_CLASSES
from .compiler import STATE_MASK, PairTable


def derive_unsafe_pairs(pair_table: PairTable, n_classes: int = NUM_CLASSES) -> frozenset[tuple[int, int]]:
    """Returns the ``(first, second)`` class pairs that are not safe

    After seeing class ``first`` the scanner can be in any of the states
    that a column ``first`` cell leads to.  The pair is safe only when
    every one of those states has the same cell for ``second``.
    """
    unsafe = set()
    for first in range(n_classes):
        possible = {row[first] & STATE_MASK for row in pair_table.rows}
        for second in range(n_classes):
            if len({pair_table.rows[state][second] for state in possible}) > 1:
                unsafe.add((first, second))
    return frozenset(unsafe)
