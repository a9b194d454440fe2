"""Convert command - JSON array to CSV."""

from contextlib import ExitStack

import click
from pydantic import ValidationError

from ...converter import convert as run_conversion
from ...errors import ConversionError
from ...models import ConvertOptions
from ..helpers import KILOBYTE, fail, open_input, open_output


@click.command()
@click.argument("input_file", default="-")
@click.argument("output_file", default="-")
@click.option(
    "-i",
    "--incremental",
    is_flag=True,
    envvar="FJSON2CSV_INCREMENTAL",
    help="Read the input twice instead of holding it in memory",
)
@click.option(
    "-d",
    "--delimiter",
    default=",",
    show_default=True,
    envvar="FJSON2CSV_DELIMITER",
    help="Output field delimiter",
)
@click.option(
    "-r",
    "--read-buffer",
    type=click.IntRange(min=1),
    default=1024,
    show_default=True,
    envvar="FJSON2CSV_READ_BUFFER",
    help="Internal read buffer size in KB",
)
@click.option(
    "-w",
    "--write-buffer",
    type=click.IntRange(min=1),
    default=1024,
    show_default=True,
    envvar="FJSON2CSV_WRITE_BUFFER",
    help="Internal write buffer size in KB",
)
@click.option(
    "--fail-on-empty",
    is_flag=True,
    help="Exit with an error when the input has no fields",
)
@click.option(
    "--summary",
    is_flag=True,
    help="Print a JSON summary of the conversion to stderr",
)
def convert(
    input_file,
    output_file,
    incremental,
    delimiter,
    read_buffer,
    write_buffer,
    fail_on_empty,
    summary,
):
    """Convert a JSON array of flat objects into CSV.

    Columns are every field seen in the input, ordered by how many records
    contain them (most first), ties broken alphabetically. Records missing a
    field get an empty cell.

    By default the whole input is held in memory. Use -i to convert very
    large files incrementally; the input must then be a regular file.

    Examples:
        fjson2csv convert records.json records.csv
        fjson2csv convert -i big.json big.csv
        cat records.json | fjson2csv convert -d ';' > records.csv
    """
    try:
        options = ConvertOptions(
            mode="streaming" if incremental else "buffered",
            delimiter=delimiter,
            read_buffer_size=read_buffer * KILOBYTE,
            write_buffer_size=write_buffer * KILOBYTE,
            fail_on_empty=fail_on_empty,
        )
        with ExitStack() as stack:
            source = open_input(stack, input_file)
            sink = open_output(stack, output_file)
            result = run_conversion(source, sink, options)
    except (ConversionError, OSError, ValidationError) as e:
        fail(e)

    if summary:
        click.echo(result.model_dump_json(), err=True)
