"""Stylesheet front end: parse, minify and print a whole CSS file."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import tinycss2

from csssupports.config import MinifyOptions, PrinterOptions
from csssupports.printer import Mapping, Printer
from csssupports.rules import CssRuleList, build_rule_list
from csssupports.tokens import SourceText

__all__ = ["StyleSheet", "ToCssResult", "parse_stylesheet"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToCssResult:
    """Printed CSS plus the source mappings recorded while printing."""

    code: str
    mappings: list[Mapping] = field(default_factory=list)


@dataclass
class StyleSheet:
    """A parsed stylesheet owning its top-level rule list."""

    rules: CssRuleList
    source_index: int = 0

    def minify(self, options: MinifyOptions | None = None) -> None:
        """Expand supports conditions for the targets and drop empty rules."""
        options = options or MinifyOptions()
        logger.debug("Minifying %d rule(s), targets=%s", len(self.rules), options.targets)
        self.rules.minify(options, False)

    def to_css(self, options: PrinterOptions | None = None) -> ToCssResult:
        printer = Printer(options=options)
        self.rules.to_css(printer)
        if not printer.minify and self.rules.rules:
            printer.write_char("\n")
        return ToCssResult(code=printer.getvalue(), mappings=printer.mappings)


def parse_stylesheet(source: str, source_index: int = 0) -> StyleSheet:
    """Parse CSS source into a :class:`StyleSheet`.

    Raises :class:`~csssupports.errors.ParseError` for an invalid rule or an
    invalid ``@supports`` condition.
    """
    text = SourceText(source)
    nodes = tinycss2.parse_stylesheet(text.text, skip_comments=True, skip_whitespace=True)
    return StyleSheet(
        rules=build_rule_list(nodes, source_index, text), source_index=source_index
    )
