"""
Compiles line breaking rules into a pair table

The pair table has a row per state and a column per break class plus
end of text.  A cell holds the state to move to in the low 6 bits,
with :data:`ALLOWED_BREAK_BIT` and :data:`MANDATORY_BREAK_BIT` saying
whether there is a break opportunity before the class of the column.

Every row starts out as ``0, 1, 2, ... eot`` meaning the next state is
the class just seen with no break.  Rules are then applied in order,
each overwriting cells touched by earlier rules.
"""

from __future__ import annotations

import dataclasses
import logging

from typing import Iterable, Sequence

from .classes import NUM_COLUMNS, state_names
from .exceptions import RuleError, StateOverflowError
from .rules import (
    ALLOW,
    FORBID,
    MANDATORY,
    BreakAssertion,
    ClassAlias,
    ClassSet,
    CombiningRun,
    PairAlias,
    Rule,
)

logger = logging.getLogger(__name__)

ALLOWED_BREAK_BIT = 0x80
MANDATORY_BREAK_BIT = 0x40
STATE_MASK = 0x3F

# the all ones state is reserved
MAX_STATES = STATE_MASK


@dataclasses.dataclass(frozen=True)
class PairTable:
    "Compiled rules"

    rows: tuple[bytes, ...]
    "One per state, each :attr:`columns` cells"
    names: tuple[str, ...]
    "Name of each state"

    @property
    def columns(self) -> int:
        return len(self.rows[0])

    def cell(self, state: int, column: int) -> int:
        return self.rows[state][column]

    def next_state(self, state: int, column: int) -> int:
        return self.rows[state][column] & STATE_MASK

    def describe(self, state: int, column: int) -> str:
        "Cell as text such as ``÷ AL`` - the break (if any) then next state"
        cell = self.rows[state][column]
        if cell & MANDATORY_BREAK_BIT:
            op = MANDATORY
        elif cell & ALLOWED_BREAK_BIT:
            op = ALLOW
        else:
            op = FORBID
        return f"{op} {self.names[cell & STATE_MASK]}"


class _Compiler:
    def __init__(self, names: Sequence[str], n_columns: int):
        if len(names) > MAX_STATES:
            raise StateOverflowError(f"{len(names)} states exceeds the maximum of {MAX_STATES}")
        if not 0 < n_columns <= len(names):
            raise ValueError(f"Column count {n_columns} must be between 1 and the number of states {len(names)}")
        self.names = tuple(names)
        self.n_columns = n_columns
        self.index = {name: i for i, name in enumerate(self.names)}
        if len(self.index) != len(self.names):
            raise ValueError("State names must be unique")
        self.table = [list(range(n_columns)) for _ in self.names]

    def lookup(self, name: str, rule: Rule) -> int:
        try:
            return self.index[name]
        except KeyError:
            raise RuleError(rule.text, f"Unknown class or state {name!r}", max(0, rule.text.find(name))) from None

    def rows(self, cs: ClassSet, rule: Rule) -> list[int]:
        "Resolves a set on the left of a rule where it ranges over every state"
        return self.resolve(cs, rule, len(self.names))

    def columns(self, cs: ClassSet, rule: Rule) -> list[int]:
        "Resolves a set on the right of a rule where it ranges over the columns"
        indices = self.resolve(cs, rule, self.n_columns)
        if not cs.negated:
            for name, i in zip(cs.names, indices):
                if i >= self.n_columns:
                    message = f"{name} is a state and can't follow another class"
                    raise RuleError(rule.text, message, max(0, rule.text.rfind(name)))
        return indices

    def resolve(self, cs: ClassSet, rule: Rule, universe: int) -> list[int]:
        indices = [self.lookup(name, rule) for name in cs.names]
        if cs.negated:
            excluded = set(indices)
            return [i for i in range(universe) if i not in excluded]
        return indices

    def apply(self, rule: Rule) -> None:
        table = self.table
        if isinstance(rule, BreakAssertion):
            first, second = self.rows(rule.first, rule), self.columns(rule.second, rule)
            for i in first:
                row = table[i]
                for j in second:
                    if rule.operator == FORBID:
                        row[j] &= ~(ALLOWED_BREAK_BIT | MANDATORY_BREAK_BIT)
                    elif rule.operator == ALLOW:
                        row[j] |= ALLOWED_BREAK_BIT
                    else:
                        row[j] |= ALLOWED_BREAK_BIT | MANDATORY_BREAK_BIT

        elif isinstance(rule, CombiningRun):
            marks, bases = self.columns(rule.marks, rule), self.rows(rule.bases, rule)
            for i in bases:
                for j in marks:
                    table[i][j] = i

        elif isinstance(rule, PairAlias):
            first, second = self.rows(rule.first, rule), self.columns(rule.second, rule)
            target = self.lookup(rule.target, rule)
            for i in first:
                for j in second:
                    table[i][j] = target

        elif isinstance(rule, ClassAlias):
            sources = self.rows(rule.sources, rule)
            target = self.lookup(rule.target, rule)
            # columns only exist for classes so states are only aliased as rows
            for j in sources:
                if target < self.n_columns and j < self.n_columns:
                    for row in table:
                        row[j] = row[target]
            template = list(table[target])
            for i in sources:
                table[i] = list(template)

        else:
            raise TypeError(f"Not a rule: {rule!r}")


def compile_rules(rules: Iterable[Rule], names: Sequence[str] | None = None, n_columns: int = NUM_COLUMNS) -> PairTable:
    """Applies each rule in order to produce a :class:`PairTable`

    :param names: Names of every state, defaulting to the break classes,
       ``eot``, and the synthetic states
    :param n_columns: How many of the leading states are also columns

    :raises StateOverflowError: if there are more states than fit in a cell
    :raises RuleError: if a rule names something unknown, or puts a state
       where only a class can go
    """
    compiler = _Compiler(state_names() if names is None else names, n_columns)
    count = 0
    for rule in rules:
        compiler.apply(rule)
        count += 1
    logger.debug("Compiled %d rules into %d states by %d columns", count, len(compiler.names), compiler.n_columns)
    return PairTable(tuple(bytes(row) for row in compiler.table), compiler.names)
