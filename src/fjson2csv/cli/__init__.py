"""Command-line interface for fjson2csv."""

from .main import cli, main

__all__ = ["cli", "main"]
