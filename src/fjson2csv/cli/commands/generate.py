"""Generate command - write sample JSON input."""

from contextlib import ExitStack

import click

from ...generator import MEGABYTE
from ...generator import generate as generate_data
from ..helpers import fail, open_output


@click.command()
@click.argument("output_file", default="-")
@click.option(
    "-f",
    "--fields",
    type=int,
    default=10,
    show_default=True,
    help="Maximum number of fields (clamped to 1-20)",
)
@click.option(
    "-m",
    "--size",
    type=int,
    default=10,
    show_default=True,
    help="Approximate size of the generated file in MB",
)
@click.option("--seed", type=int, help="Random seed for reproducible output")
def generate(output_file, fields, size, seed):
    """Generate sample JSON data for testing the converter.

    Examples:
        fjson2csv generate -m 100 -f 20 big.json
        fjson2csv generate --seed 7 -m 1 | fjson2csv convert
    """
    try:
        with ExitStack() as stack:
            stream = open_output(stack, output_file, binary=False)
            generate_data(stream, size=max(size, 1) * MEGABYTE, fields=fields, seed=seed)
    except OSError as e:
        fail(e)
