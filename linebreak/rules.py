"""
The line breaking rules, and the parser for the rule language

Rules are written close to the notation of `UAX #14
<https://www.unicode.org/reports/tr14/#Algorithm>`__, one per line.
Each rule mutates a pair table and later rules overwrite what earlier
ones did, so :data:`DEFAULT_RULES` is listed from lowest precedence
(LB31) to highest (LB1).

Class sets are a single name, ``(A | B)`` for any of those,
``[^A B]`` for everything except those, and ``ALL``.  Names are break
classes or the synthetic states in :class:`~linebreak.classes.State`.

``SET × SET``
    No break between them.  ``÷`` allows a break and ``!`` makes it
    mandatory.  Either set can be omitted meaning everything.

``Treat X SET* as if it were X where X = SET``
    A run of the marks takes on the class before it

``Treat SET SET as if it were NAME``
    The sequence is remembered as state NAME

``Treat SET as if it were NAME``
    The classes behave exactly as NAME
"""

from __future__ import annotations

import dataclasses
import re

from typing import NoReturn, Union

from .exceptions import RuleError


# The pair table friendly equivalent of a rule like
#
#     B SP* ÷ A
#
# uses an extra state BSP:
#
#     (B | BSP) ÷ A, Treat (B | BSP) SP as if it were BSP, Treat BSP as if it were SP
#
# The repeated "Treat ZWSP as if it were SP" under LB14 matches the
# tables this implementation has always produced.

DEFAULT_RULES = """
# LB31 Break everywhere else.
ALL ÷
÷ ALL

# LB30b Do not break between an emoji base and an emoji modifier.
EB × EM

# LB30a Break between two regional indicator symbols if and only if there
# are an even number of regional indicators preceding the position of the break.
Treat RIRI as if it were RI
Treat RI RI as if it were RIRI
RI × RI

# LB30 Do not break between letters, numbers, or ordinary symbols and
# opening or closing parentheses.
CP × (AL | HL | NU)
(AL | HL | NU) × OP

# LB29 Do not break between numeric punctuation and alphabetics ("e.g.").
IS × (AL | HL)

# LB28 Do not break between alphabetics ("at").
(AL | HL) × (AL | HL)

# LB27 Treat a Korean Syllable Block the same as ID.
PR × (JL | JV | JT | H2 | H3)
(JL | JV | JT | H2 | H3) × PO
(JL | JV | JT | H2 | H3) × IN

# LB26 Do not break a Korean syllable.
(JT | H3) × JT
(JV | H2) × (JV | JT)
JL × (JL | JV | H2 | H3)

# LB25 Do not break between the following pairs of classes relevant to numbers.
SY × NU
NU × NU
IS × NU
HY × NU
PR × NU
PR × OP
PO × NU
PO × OP
NU × PR
NU × PO
CP × PR
CL × PR
CP × PO
CL × PO

# LB24 Do not break between numeric prefix/postfix and letters, or between
# letters and prefix/postfix.
(AL | HL) × (PR | PO)
(PR | PO) × (AL | HL)

# LB23a Do not break between numeric prefixes and ideographs, or between
# ideographs and numeric postfixes.
(ID | EB | EM) × PO
PR × (ID | EB | EM)

# LB23 Do not break between digits and letters.
NU × (AL | HL)
(AL | HL) × NU

# LB22 Do not break between two ellipses, or between letters, numbers or
# exclamations and ellipsis.
NU × IN
IN × IN
(ID | EB | EM) × IN
EX × IN
(AL | HL) × IN

# LB21b Don't break between Solidus and Hebrew letters.
SY × HL

# LB21a Don't break after Hebrew + Hyphen.  HLHYBA stands for both HL HY and HL BA
Treat HLHYBA as if it were HY
Treat HL (HY | BA) as if it were HLHYBA
HLHYBA ×

# LB21 Do not break before hyphen-minus, other hyphens, fixed-width spaces,
# small kana, and other non-starters, or after acute accents.
BB ×
× NS
× HY
× BA

# LB20 Break before and after unresolved CB.
CB ÷
÷ CB

# LB19 Do not break before or after quotation marks.
QU ×
× QU

# LB18 Break after spaces.
SP ÷

# LB17 Do not break between two B2 (such as em dashes), even with intervening spaces.
Treat B2SP as if it were SP
Treat (B2 | B2SP) SP as if it were B2SP
(B2 | B2SP) × B2

# LB16 Do not break between closing punctuation and a nonstarter, even with
# intervening spaces.
Treat CPSP as if it were SP
Treat (CP | CPSP) SP as if it were CPSP
Treat CLSP as if it were SP
Treat (CL | CLSP) SP as if it were CLSP
(CL | CLSP | CP | CPSP) × NS

# LB15 Do not break within "”[", even with intervening spaces.
Treat QUSP as if it were SP
Treat (QU | QUSP) SP as if it were QUSP
(QU | QUSP) × OP

# LB14 Do not break after "[", even after spaces.
Treat ZWSP as if it were SP
Treat (OP | OPSP) SP as if it were OPSP
(OP | OPSP) ×

# LB13 Do not break before "]" or "!" or ";" or "/", even after spaces.
× SY
× IS
× EX
× CP
× CL

# LB12a Do not break before NBSP and related characters, except after spaces and hyphens.
[^SP BA HY sot eot ZWSP OPSP QUSP CLSP CPSP B2SP] × GL

# LB12 Do not break after NBSP and related characters.
GL ×

# LB11 Do not break before or after Word joiner and related characters.
WJ ×
× WJ

# LB10 Treat any remaining combining mark or ZWJ as AL.
Treat (CM | ZWJ) as if it were AL

# LB9 Do not break a combining character sequence; treat it as if it has the
# line breaking class of the base character.  Treat ZWJ as if it were CM.
# LB8a (no break after ZWJ) is done by the scanner.
Treat X (CM | ZWJ)* as if it were X where X = [^BK CR LF NL SP ZW sot eot ZWSP OPSP QUSP CLSP CPSP B2SP]

# LB8 Break before any character following a zero-width space, even if one
# or more spaces intervene.
Treat ZWSP as if it were SP
Treat (ZW | ZWSP) SP as if it were ZWSP
(ZW | ZWSP) ÷

# LB7 Do not break before spaces or zero width space.
× ZW
× SP

# LB6 Do not break before hard line breaks.
× (BK | CR | LF | NL)

# LB5 Treat CR followed by LF, as well as CR, LF, and NL as hard line breaks.
NL !
LF !
CR !
CR × LF

# LB4 Always break after hard line breaks.
BK !

# LB3 Always break at the end of text.
! eot

# LB2 Never break at the start of text.
sot ×

# LB1 Resolve AI, CB, CJ, SA, SG, and XX.  SA is resolved to AL regardless
# of General_Category.
Treat CJ as if it were NS
Treat (AI | SG | XX | SA) as if it were AL
"""


FORBID = "×"
ALLOW = "÷"
MANDATORY = "!"

OPERATORS = (FORBID, ALLOW, MANDATORY)


@dataclasses.dataclass(frozen=True)
class ClassSet:
    "Names to match, or all names except those when negated"

    names: tuple[str, ...] = ()
    negated: bool = False

    @classmethod
    def all(cls) -> ClassSet:
        return cls((), negated=True)

    def __str__(self) -> str:
        if self.negated:
            return f"[^{' '.join(self.names)}]" if self.names else "ALL"
        if len(self.names) == 1:
            return self.names[0]
        return "(" + " | ".join(self.names) + ")"


@dataclasses.dataclass(frozen=True)
class BreakAssertion:
    "``first OP second`` - forbids, allows, or mandates breaks between the sets"

    first: ClassSet
    operator: str
    second: ClassSet
    text: str = ""


@dataclasses.dataclass(frozen=True)
class CombiningRun:
    "``Treat X marks* as if it were X where X = bases``"

    marks: ClassSet
    bases: ClassSet
    text: str = ""


@dataclasses.dataclass(frozen=True)
class PairAlias:
    "``Treat first second as if it were target``"

    first: ClassSet
    second: ClassSet
    target: str
    text: str = ""


@dataclasses.dataclass(frozen=True)
class ClassAlias:
    "``Treat sources as if it were target``"

    sources: ClassSet
    target: str
    text: str = ""


Rule = Union[BreakAssertion, CombiningRun, PairAlias, ClassAlias]


_token = re.compile(r"(?P<punct>\[\^|[()|\]*=])|(?P<op>[×÷!])|(?P<word>[A-Za-z][A-Za-z0-9]*)")


class _Parser:
    """Parses one rule

    Tokens are (kind, value, offset) tuples where kind is ``punct``,
    ``op``, or ``word``"""

    def __init__(self, rule: str):
        self.rule = rule
        self.tokens = self.get_tokens()
        self.token_pos = 0

    def error(self, message: str, position: int | None = None) -> NoReturn:
        if position is None:
            position = self.lookahead[2] if self.lookahead else len(self.rule)
        raise RuleError(self.rule, message, position)

    def get_tokens(self) -> list[tuple[str, str, int]]:
        tokens: list[tuple[str, str, int]] = []
        pos = 0
        while pos < len(self.rule):
            if self.rule[pos].isspace():
                pos += 1
                continue
            mo = _token.match(self.rule, pos)
            if not mo:
                self.error("Unexpected character", pos)
            tokens.append((mo.lastgroup, mo.group(), pos))
            pos = mo.end()
        return tokens

    @property
    def lookahead(self) -> tuple[str, str, int] | None:
        return self.tokens[self.token_pos] if self.token_pos < len(self.tokens) else None

    def take(self) -> tuple[str, str, int]:
        token = self.lookahead
        if token is None:
            self.error("Unexpected end of rule")
        self.token_pos += 1
        return token

    def expect(self, *values: str) -> None:
        for value in values:
            token = self.lookahead
            if token is None or token[1] != value:
                self.error(f"Expected '{value}'")
            self.token_pos += 1

    def at_word(self, word: str) -> bool:
        token = self.lookahead
        return token is not None and token[0] == "word" and token[1] == word

    def at_set(self) -> bool:
        token = self.lookahead
        return token is not None and (token[0] == "word" or token[1] in {"(", "[^"})

    def parse(self) -> Rule:
        if self.at_word("Treat"):
            self.take()
            rule = self.parse_treat()
        else:
            rule = self.parse_assertion()
        if self.lookahead is not None:
            self.error("Unexpected text after rule")
        return rule

    def parse_assertion(self) -> BreakAssertion:
        first = self.parse_set() if self.at_set() else ClassSet.all()
        token = self.take()
        if token[0] != "op":
            self.error("Expected one of " + " ".join(OPERATORS), token[2])
        second = self.parse_set() if self.at_set() else ClassSet.all()
        return BreakAssertion(first, token[1], second, self.rule)

    def parse_treat(self) -> Rule:
        if self.at_word("X"):
            self.take()
            marks = self.parse_set()
            self.expect("*", "as", "if", "it", "were", "X", "where", "X", "=")
            return CombiningRun(marks, self.parse_set(), self.rule)

        first = self.parse_set()
        second = None
        if not self.at_word("as"):
            second = self.parse_set()
        self.expect("as", "if", "it", "were")
        target = self.take_name()
        if second is None:
            return ClassAlias(first, target, self.rule)
        return PairAlias(first, second, target, self.rule)

    def parse_set(self) -> ClassSet:
        token = self.take()
        if token[0] == "word":
            if token[1] == "ALL":
                return ClassSet.all()
            return ClassSet((token[1],))
        if token[1] == "(":
            names = [self.take_name()]
            while self.lookahead is not None and self.lookahead[1] == "|":
                self.take()
                names.append(self.take_name())
            self.expect(")")
            return ClassSet(tuple(names))
        if token[1] == "[^":
            names = []
            while self.lookahead is not None and self.lookahead[0] == "word":
                names.append(self.take_name())
            if not names:
                self.error("Expected at least one name after '[^'")
            self.expect("]")
            return ClassSet(tuple(names), negated=True)
        self.error("Expected a class set", token[2])

    def take_name(self) -> str:
        token = self.take()
        if token[0] != "word" or token[1] == "ALL":
            self.error("Expected a name", token[2])
        return token[1]


def parse_rule(rule: str) -> Rule:
    """Parses one rule

    Names are not checked here, that happens when the rule is compiled.

    :raises RuleError: on syntax errors
    """
    return _Parser(rule.strip()).parse()


def parse_rules(text: str = DEFAULT_RULES) -> list[Rule]:
    "Parses rules one per line, skipping blank lines and ``#`` comments"
    rules = []
    for line in text.splitlines():
        line = line.split("#", 1)[0].strip()
        if line:
            rules.append(parse_rule(line))
    return rules
