"""CLI helper utilities shared across commands."""

import sys
from contextlib import ExitStack
from typing import BinaryIO, TextIO

import click
from pydantic import ValidationError

KILOBYTE = 1024


def open_input(stack: ExitStack, path: str) -> BinaryIO:
    """Open ``path`` for binary reading; ``-`` means stdin."""
    if path == "-":
        return click.get_binary_stream("stdin")
    return stack.enter_context(open(path, "rb"))


def open_output(stack: ExitStack, path: str, binary: bool = True) -> BinaryIO | TextIO:
    """Open ``path`` for writing; ``-`` means stdout."""
    if path == "-":
        if binary:
            return click.get_binary_stream("stdout")
        return click.get_text_stream("stdout")
    return stack.enter_context(open(path, "wb" if binary else "w"))


def error_message(e: Exception) -> str:
    """Collapse an exception into a single line for stderr."""
    if isinstance(e, ValidationError):
        first = e.errors()[0]
        loc = ".".join(str(part) for part in first["loc"])
        return f"invalid {loc}: {first['msg']}" if loc else first["msg"]
    return " ".join(str(e).split()) or type(e).__name__


def fail(e: Exception) -> None:
    """Print a one-line error and exit with status 1."""
    click.echo(f"Error: {error_message(e)}", err=True)
    sys.exit(1)
