"""csssupports CLI entry point: Click group with subcommands."""

import logging

import click

from csssupports import __version__


@click.group()
@click.version_option(version=__version__, prog_name="csssupports")
@click.option("-v", "--verbose", is_flag=True, help="Log debug output to stderr.")
def cli(verbose: bool) -> None:
    """csssupports - normalize and vendor-prefix CSS @supports rules."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# Import and register subcommands
from csssupports.cli.minify import minify  # noqa: E402
from csssupports.cli.parse import parse  # noqa: E402

cli.add_command(minify)
cli.add_command(parse)
