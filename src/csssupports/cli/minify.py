"""CLI command: csssupports minify -- rewrite the @supports rules of a CSS file."""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from csssupports.config import MinifyOptions, PrinterOptions
from csssupports.errors import MinifyError, ParseError
from csssupports.stylesheet import parse_stylesheet
from csssupports.targets import Browsers


def parse_targets(query: str | None) -> Browsers | None:
    """Parse a ``--targets`` query, turning bad input into a usage error."""
    if not query:
        return None
    try:
        return Browsers.parse(query)
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="--targets") from exc


@click.command()
@click.argument("cssfile", type=click.Path(exists=True))
@click.option("--targets", "query", default=None, help='Browser targets, e.g. "safari 15, chrome 100".')
@click.option("--minify/--no-minify", "compact", default=False, help="Drop optional whitespace.")
@click.option("--source-map", is_flag=True, help="Print source mappings as JSON to stderr.")
@click.option("-o", "--output", type=click.Path(), default=None, help="Write to a file instead of stdout.")
def minify(
    cssfile: str, query: str | None, compact: bool, source_map: bool, output: str | None
) -> None:
    """Parse CSSFILE, prefix its @supports conditions and print the result.

    Exits with code 1 if the stylesheet cannot be parsed or minified.
    """
    targets = parse_targets(query)
    css_path = Path(cssfile)

    try:
        stylesheet = parse_stylesheet(css_path.read_text(encoding="utf-8"))
        stylesheet.minify(MinifyOptions(targets=targets))
    except ParseError as exc:
        click.echo(f"Parse error: {exc}", err=True)
        sys.exit(1)
    except MinifyError as exc:
        click.echo(f"Minify error: {exc}", err=True)
        sys.exit(1)

    result = stylesheet.to_css(PrinterOptions(minify=compact, source_map=source_map))

    if output:
        Path(output).write_text(result.code, encoding="utf-8")
    else:
        click.echo(result.code, nl=False)

    if source_map:
        mappings = [
            [m.generated_line, m.generated_column, m.original_line, m.original_column]
            for m in result.mappings
        ]
        click.echo(json.dumps(mappings), err=True)
