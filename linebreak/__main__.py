"""
Command line tools

    python -m linebreak [--data FILE] breaktest|show|codepoint ...
"""

from __future__ import annotations

import argparse
import difflib
import sys
import unicodedata

from typing import Iterable, Iterator, NamedTuple

from .classes import BreakClass
from .exceptions import LineBreakError
from .scanner import scan
from .tables import Tables, load

ok = "÷"
not_ok = "×"

# These cases depend on the tailorable LB25 which is implemented
# with the simpler pair rules, not the regular expression
tailored_markers = ("(OP)", "(NU)", "(PO)", "(PR)")


class BreakTest(NamedTuple):
    "One line of ``LineBreakTest.txt``"

    line_number: int
    text: str
    breaks: list[int]
    "Offsets where there is a break opportunity"
    comment: str


def parse_break_tests(lines: Iterable[str], include_all: bool = False) -> Iterator[BreakTest]:
    """Yields each test case

    :param include_all: If False then tests whose comments mention the
       classes in :data:`tailored_markers` are skipped
    """
    for line_number, line in enumerate(lines, 1):
        if not line.strip() or line.startswith("#"):
            continue
        line, _, comment = line.partition("#")
        if not include_all and any(marker in comment for marker in tailored_markers):
            continue
        items = line.split()
        if items[0] != not_ok or items[-1] != ok:
            raise ValueError(f"Line {line_number} must start with {not_ok} and end with {ok}")
        text = ""
        breaks: list[int] = []
        for item in items[1:]:
            if item == not_ok:
                continue
            if item == ok:
                breaks.append(len(text))
                continue
            text += chr(int(item, 16))
        yield BreakTest(line_number, text, breaks, comment.strip())


def codepoint_details(c: str, tables: Tables, counter: int | None = None) -> str:
    cls = tables.properties.class_of(c)
    name = unicodedata.name(c, "<unnamed>")
    counter = f"#{counter}:" if counter is not None else ""
    return "{" + f"{counter}U+{ord(c):04X} {name} : {cls.name} {cls.long_name}" + "}"


def breaktest(options: argparse.Namespace, tables: Tables) -> int:
    passed: int = 0
    fails: list[str] = []
    with open(options.file, encoding="utf8") as f:
        for test in parse_break_tests(f, options.all):
            if options.verbose:
                print(f"{test.line_number}: {test.comment}")
            seen = [offset for offset, _ in scan(test.text, tables=tables)]
            if seen != test.breaks:
                fails.append(f"Line {test.line_number} got breaks at {seen} expected at {test.breaks}")
                if max(len(seen), len(test.breaks)) > 5:
                    sm = difflib.SequenceMatcher(a=seen, b=test.breaks)
                    for tag, a1, a2, b1, b2 in sm.get_opcodes():
                        if tag == "equal":
                            continue
                        if a1 != a2:
                            fails[-1] += f"\n       seen {tag} {seen[a1:a2]}"
                        if b1 != b2:
                            fails[-1] += f"\n    expected {tag} {test.breaks[b1:b2]}"
                fails.append(test.comment)
                fails.append(" ".join(codepoint_details(c, tables, i) for i, c in enumerate(test.text)))
                fails.append("")
                if options.fail_fast:
                    break
                continue
            passed += 1

    if fails:
        print(f"{len(fails) // 4} tests failed, {passed:,} passed:", file=sys.stderr)
        for fail in fails:
            print(fail, file=sys.stderr)
        return 2
    print(f"{passed:,} passed")
    return 0


def show(options: argparse.Namespace, tables: Tables) -> int:
    text = ""
    if options.text_file:
        with open(options.text_file, encoding="utf8") as f:
            text += f.read()
    if options.text:
        if text:
            text += " "
        text += " ".join(options.text)

    begin = 0
    for counter, (end, opportunity) in enumerate(scan(text, tables=tables)):
        print(f"#{counter} span {begin}-{end} {opportunity.value} codepoints {end - begin} value: {text[begin:end]!r}")
        if options.verbose:
            for i in range(begin, end):
                print(" ", codepoint_details(text[i], tables))
        begin = end
    return 0


def codepoint(options: argparse.Namespace, tables: Tables) -> int:
    codepoints: list[int] = []
    for t in options.text:
        try:
            codepoints.append(int(t.removeprefix("U+").removeprefix("u+"), 16))
        except ValueError:
            codepoints.extend(ord(c) for c in t)

    for cp in codepoints:
        cls: BreakClass = tables.properties.class_of(cp)
        try:
            name = unicodedata.name(chr(cp), "<unnamed>")
        except ValueError:
            name = "<out of range>"
        print(f"U+{cp:04X} {cls.name:3} {cls.long_name} - {name}")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="python -m linebreak", description="Unicode line breaking tools")
    parser.add_argument(
        "--data", help="LineBreak.txt (or a directory containing it) to build tables from instead of the defaults"
    )

    subparsers = parser.add_subparsers(required=True)
    p = subparsers.add_parser("breaktest", help="Run Unicode test file")
    p.set_defaults(function=breaktest)
    p.add_argument("-v", default=False, action="store_true", dest="verbose", help="Show each line as it is tested")
    p.add_argument("--fail-fast", default=False, action="store_true", help="Exit on first test failure")
    p.add_argument(
        "--all",
        default=False,
        action="store_true",
        help="Include tests that depend on tailored number handling, which are expected to fail",
    )
    p.add_argument(
        "file",
        help="LineBreakTest.txt file.  It can be downloaded from https://www.unicode.org/Public/12.1.0/ucd/auxiliary/",
    )

    p = subparsers.add_parser("show", help="Show break opportunities in provided text")
    p.set_defaults(function=show)
    p.add_argument("-v", default=False, action="store_true", dest="verbose", help="Show details of each codepoint")
    p.add_argument("--text-file")
    p.add_argument("text", nargs="*", help="Text to break unless --text-file used")

    p = subparsers.add_parser("codepoint", help="Show line break class of codepoints")
    p.add_argument("text", nargs="+", help="If a hex constant then use that value, otherwise treat as text")
    p.set_defaults(function=codepoint)

    options = parser.parse_args(argv)

    if options.function is show and not options.text_file and not options.text:
        parser.error("You must specify at least --text-file or text arguments")

    try:
        tables = load(options.data)
    except (LineBreakError, OSError) as exc:
        print(f"Unable to load tables: {exc}", file=sys.stderr)
        return 1

    return options.function(options, tables)


if __name__ == "__main__":
    sys.exit(main())
