"""Unit tests for the incremental JSON array walker."""

import io
from decimal import Decimal

import pytest

from fjson2csv.errors import MalformedInput, SourceFailure
from fjson2csv.walker import walk
from tests.helpers import FailingReader, NonSeekable


class Collect:
    def __init__(self):
        self.records = []

    def visit(self, record):
        self.records.append(record)


class Explode:
    def visit(self, record):
        raise RuntimeError("intentional")


def test_walk_yields_each_object():
    visitor = Collect()
    source = io.BytesIO(b'[{"test": "hello", "example": 42}, {"example": 12}]')
    count = walk(source, visitor)
    assert count == 2
    assert visitor.records == [{"test": "hello", "example": 42}, {"example": 12}]


def test_walk_decodes_scalars():
    visitor = Collect()
    walk(io.BytesIO(b'[{"s": "x", "i": 4, "f": 1.5, "b": false, "n": null}]'), visitor)
    assert visitor.records == [
        {"s": "x", "i": 4, "f": Decimal("1.5"), "b": False, "n": None}
    ]


def test_walk_keeps_nested_values_inside_record():
    visitor = Collect()
    walk(io.BytesIO(b'[{"a": {"b": [1, {"c": 2}]}, "d": 3}, {"e": 4}]'), visitor)
    assert visitor.records == [{"a": {"b": [1, {"c": 2}]}, "d": 3}, {"e": 4}]


def test_walk_empty_array():
    visitor = Collect()
    assert walk(io.BytesIO(b"  [ ]  "), visitor) == 0
    assert visitor.records == []


def test_walk_small_read_buffer():
    visitor = Collect()
    data = b'[{"name": "pickle", "category": "condiment"}, {"name": "salt"}]'
    assert walk(io.BytesIO(data), visitor, read_buffer_size=3) == 2


@pytest.mark.parametrize(
    "raw",
    [
        pytest.param(b'test":1}]', id="malformed json"),
        pytest.param(b'{"test":1}]', id="malformed open bracket"),
        pytest.param(b'[{"test":1}', id="malformed close bracket"),
        pytest.param(b'{"test":1}', id="top-level object"),
        pytest.param(b'"text"', id="top-level string"),
        pytest.param(b"", id="empty document"),
        pytest.param(b"[1, 2]", id="scalar elements"),
        pytest.param(b'[{"a": 1}, [2]]', id="array element"),
        pytest.param(b'[{"a": 1},, {"b": 2}]', id="double comma"),
        pytest.param(b'[{"a": }]', id="missing value"),
    ],
)
def test_walk_rejects_malformed_input(raw):
    with pytest.raises(MalformedInput):
        walk(io.BytesIO(raw), Collect())


def test_walk_rejects_element_after_visiting_earlier_ones():
    visitor = Collect()
    with pytest.raises(MalformedInput):
        walk(io.BytesIO(b'[{"a": 1}, "oops"]'), visitor)
    assert visitor.records == [{"a": 1}]


def test_walk_propagates_visitor_error():
    with pytest.raises(RuntimeError, match="intentional"):
        walk(io.BytesIO(b'[{"test":1}]'), Explode())


def test_walk_rewinds_source():
    source = io.BytesIO(b'[{"test":1}]')
    walk(source, Collect(), rewind=True)
    assert source.tell() == 0
    assert walk(source, Collect()) == 1


def test_walk_bad_seek():
    with pytest.raises(SourceFailure):
        walk(NonSeekable(b'[{"test":1}]'), Collect(), rewind=True)


def test_walk_non_seekable_without_rewind():
    assert walk(NonSeekable(b'[{"test":1}]'), Collect()) == 1


def test_walk_read_failure():
    with pytest.raises(SourceFailure, match="device not ready"):
        walk(FailingReader(), Collect())


@pytest.mark.parametrize(
    "raw",
    [
        pytest.param(b'[{"a": 1e5000}]', id="huge exponent"),
        pytest.param(b'[{"a": -1e309}]', id="negative overflow"),
        pytest.param(b'[{"a": 1e100000000}]', id="enormous exponent"),
        pytest.param(b'[{"a": ' + b"9" * 400 + b"}]", id="long integer"),
        pytest.param(b'[{"a": {"b": 2e400}}]', id="nested"),
    ],
)
def test_walk_rejects_numbers_out_of_double_range(raw):
    with pytest.raises(MalformedInput):
        walk(io.BytesIO(raw), Collect())


def test_walk_number_out_of_range_message():
    with pytest.raises(MalformedInput, match="number out of range"):
        walk(io.BytesIO(b'[{"a": 1e5000}]'), Collect())


def test_walk_accepts_numbers_at_double_range():
    visitor = Collect()
    walk(io.BytesIO(b'[{"a": 1e308, "b": -1.5e308, "c": 0e999, "d": 1e-400}]'), visitor)
    assert visitor.records[0]["a"] == Decimal("1e308")
    assert visitor.records[0]["c"] == 0


def test_walk_closed_source():
    source = io.BytesIO(b'[{"test":1}]')
    source.close()
    with pytest.raises(SourceFailure):
        walk(source, Collect())
