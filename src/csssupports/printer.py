"""Output writer used to serialize conditions and rules."""

from __future__ import annotations

import io
from dataclasses import dataclass
from typing import Protocol

from csssupports.config import PrinterOptions

__all__ = ["Location", "Mapping", "Printer", "Writer"]


class Writer(Protocol):
    """Destination for printed text; errors it raises propagate to the caller."""

    def write(self, text: str) -> object: ...


@dataclass(frozen=True)
class Location:
    """Position of a rule in its source file (1-based line and column)."""

    source_index: int
    line: int
    column: int


@dataclass(frozen=True)
class Mapping:
    """A source map entry linking a generated position to a source location."""

    generated_line: int
    generated_column: int
    source_index: int
    original_line: int
    original_column: int


class Printer:
    """Writes CSS text while tracking the output position and indentation.

    In minify mode optional whitespace and newlines are dropped.
    """

    def __init__(
        self,
        dest: Writer | None = None,
        options: PrinterOptions | None = None,
    ) -> None:
        self.dest: Writer = dest if dest is not None else io.StringIO()
        self.options = options or PrinterOptions()
        self.minify = self.options.minify
        self.mappings: list[Mapping] = []
        self.line = 0
        self.col = 0
        self._indent = 0

    # --- raw output -----------------------------------------------------------

    def write_str(self, text: str) -> None:
        self.dest.write(text)
        newlines = text.count("\n")
        if newlines:
            self.line += newlines
            self.col = len(text) - text.rindex("\n") - 1
        else:
            self.col += len(text)

    def write_char(self, char: str) -> None:
        self.write_str(char)

    # --- formatting directives ------------------------------------------------

    def whitespace(self) -> None:
        """Write a space unless minifying."""
        if not self.minify:
            self.write_char(" ")

    def delim(self, char: str, ws_before: bool) -> None:
        """Write a delimiter, padded with optional whitespace."""
        if ws_before:
            self.whitespace()
        self.write_char(char)
        self.whitespace()

    def newline(self) -> None:
        """Start a new line at the current indentation unless minifying."""
        if self.minify:
            return
        self.write_str("\n" + " " * self._indent)

    def indent(self) -> None:
        self._indent += self.options.indent_width

    def dedent(self) -> None:
        self._indent -= self.options.indent_width

    # --- source maps ----------------------------------------------------------

    def add_mapping(self, loc: Location) -> None:
        if not self.options.source_map:
            return
        self.mappings.append(
            Mapping(
                generated_line=self.line,
                generated_column=self.col,
                source_index=loc.source_index,
                original_line=loc.line,
                original_column=loc.column,
            )
        )

    def getvalue(self) -> str:
        """Return the printed text when writing to the default buffer."""
        if not isinstance(self.dest, io.StringIO):
            raise TypeError("Printer was given an external destination")
        return self.dest.getvalue()
