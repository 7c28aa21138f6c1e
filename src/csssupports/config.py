"""Options for printing and minifying."""

from __future__ import annotations

from dataclasses import dataclass

from csssupports.targets import Browsers


@dataclass(frozen=True)
class PrinterOptions:
    minify: bool = False
    indent_width: int = 2
    source_map: bool = False
    source_index: int = 0  # index of the input file in the source map


@dataclass(frozen=True)
class MinifyOptions:
    targets: Browsers | None = None
