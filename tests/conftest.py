"""Pytest configuration and shared fixtures."""

from pathlib import Path

import pytest
from click.testing import CliRunner

from fjson2csv.cli import cli

DATA_DIR = Path(__file__).parent / "data"


@pytest.fixture
def cli_runner():
    """Provide Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def invoke(cli_runner):
    """Helper to invoke the CLI with args and optional input.

    Usage:
        result = invoke(["convert", "in.json", "out.csv"])
        result = invoke(["convert"], input_data=b"[...]")
    """

    def _invoke(args, input_data=None, env=None):
        return cli_runner.invoke(cli, args, input=input_data, env=env)

    return _invoke


@pytest.fixture
def example_json() -> bytes:
    return (DATA_DIR / "example.json").read_bytes()


@pytest.fixture
def example_csv() -> bytes:
    return (DATA_DIR / "example.csv").read_bytes()


@pytest.fixture
def example_path() -> Path:
    return DATA_DIR / "example.json"


@pytest.fixture
def two_records() -> bytes:
    return b'[\n  {"test":"hello", "example":42},\n  {"example":12}\n]'
