"""fjson2csv CLI main entry point with global options."""

import logging
import sys

import click

from .. import __version__


@click.group()
@click.version_option(__version__, prog_name="fjson2csv")
@click.option("-v", "--verbose", is_flag=True, help="Log debug output to stderr")
def cli(verbose):
    """Convert flat, heterogeneous JSON records into CSV."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            stream=sys.stderr,
            format="%(levelname)s %(name)s: %(message)s",
        )


# Register commands at module level so tests can import cli with commands attached
from .commands.convert import convert
from .commands.generate import generate

cli.add_command(convert)
cli.add_command(generate)


def main():
    """Entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
