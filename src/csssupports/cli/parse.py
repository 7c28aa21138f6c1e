"""CLI command: csssupports parse -- normalize a single supports condition."""

from __future__ import annotations

import json
import sys

import click

from csssupports.cli.minify import parse_targets
from csssupports.condition import parse_supports_condition
from csssupports.config import PrinterOptions
from csssupports.errors import ParseError


@click.command()
@click.argument("condition")
@click.option("--json", "as_json", is_flag=True, help="Print the condition tree as JSON.")
@click.option("--targets", "query", default=None, help="Browser targets for prefix expansion.")
@click.option("--minify/--no-minify", "compact", default=False)
def parse(condition: str, as_json: bool, query: str | None, compact: bool) -> None:
    """Parse CONDITION (an @supports prelude) and print it back normalized."""
    targets = parse_targets(query)

    try:
        parsed = parse_supports_condition(condition)
    except ParseError as exc:
        click.echo(f"Parse error: {exc}", err=True)
        sys.exit(1)

    if targets is not None:
        parsed.set_prefixes_for_targets(targets)

    if as_json:
        click.echo(json.dumps(parsed.to_dict(), indent=2))
    else:
        click.echo(parsed.to_css_string(PrinterOptions(minify=compact)))
