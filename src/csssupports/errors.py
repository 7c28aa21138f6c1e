"""Error types raised while parsing and minifying supports rules."""

from __future__ import annotations


class ParseError(Exception):
    """Raised when supports condition or stylesheet source cannot be parsed."""

    def __init__(
        self, message: str, line: int | None = None, column: int | None = None
    ):
        self.line = line
        self.column = column
        super().__init__(message)

    def __str__(self) -> str:
        message = super().__str__()
        if self.line is None:
            return message
        return f"{message} (line {self.line}, column {self.column})"


class MinifyError(Exception):
    """Raised by a rule list when one of its rules cannot be minified."""

    def __init__(self, message: str, *, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.cause = cause
