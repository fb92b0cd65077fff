"Exceptions raised while building tables"

from __future__ import annotations


class LineBreakError(Exception):
    "Base class for all exceptions raised by this package"


class DataError(LineBreakError):
    """Raised when ``LineBreak.txt`` content can't be used

    Nothing is built from data that fails.  A simple printer::

        print(f"line {exc.line_number}: {exc.line}")
        print(exc.message)
    """

    message: str
    "Description of error"
    line_number: int | None
    "Line (one based) where the error occurred, if known"
    line: str | None
    "Text of that line"

    def __init__(self, message: str, line_number: int | None = None, line: str | None = None):
        self.message = message
        self.line_number = line_number
        self.line = line
        if line_number is not None:
            message = f"{message} at line {line_number}: {line!r}"
        super().__init__(message)


class RuleError(LineBreakError):
    """Raised when a rule can't be parsed or resolved

    A simple printer::

        print(exc.rule)
        print(" " * exc.position + "^", exc.message)
    """

    rule: str
    "The rule that was being processed"
    message: str
    "Description of error"
    position: int
    "Offset in rule where the error occurred"

    def __init__(self, rule: str, message: str, position: int = 0):
        self.rule = rule
        self.message = message
        self.position = position
        super().__init__(f"{message} in rule {rule!r} at offset {position}")


class StateOverflowError(LineBreakError):
    "Raised when a rule set needs more pair table states than a cell can encode"


class TablesUnavailableError(LineBreakError):
    "Raised when there is no generated tables module and no ``LineBreak.txt`` to build from"
