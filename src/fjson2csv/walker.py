"""Incremental walker over a top-level JSON array of objects.

The walker never materializes the whole document. ijson emits parse events
and each array element is rebuilt into a dict with ``ijson.ObjectBuilder``
before it is handed to a :class:`RecordVisitor`.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, BinaryIO, Dict, Iterator, Protocol, Tuple

import ijson

from .errors import MalformedInput, SourceFailure

logger = logging.getLogger(__name__)

Record = Dict[str, Any]
Event = Tuple[str, str, Any]

_OPENERS = ("start_map", "start_array")
_CLOSERS = ("end_map", "end_array")

# Largest magnitude a double can hold, about 1.8e308
_MAX_EXPONENT = 308
_MAX_INT_BITS = 1024


class RecordVisitor(Protocol):
    """Receives each decoded record of a walk.

    Raising from ``visit`` aborts the walk; the exception propagates to the
    caller of :func:`walk` unchanged.
    """

    def visit(self, record: Record) -> None: ...


def _events(source: BinaryIO, buf_size: int) -> Iterator[Event]:
    """Yield ijson parse events, translating parser and I/O errors."""
    try:
        for event in ijson.parse(source, buf_size=buf_size):
            yield event
    except OSError as e:
        raise SourceFailure(f"file read failure: {e}") from e
    except (ijson.JSONError, ValueError) as e:
        if getattr(source, "closed", False):
            raise SourceFailure(f"file read failure: {e}") from e
        raise MalformedInput(f"malformed JSON: {e}") from e


def _check_number(value: Any) -> None:
    """Reject numbers outside the range of a double."""
    if isinstance(value, Decimal):
        out_of_range = not value.is_finite() or (
            value and value.adjusted() > _MAX_EXPONENT
        )
    else:
        out_of_range = value.bit_length() > _MAX_INT_BITS
    if out_of_range:
        raise MalformedInput("malformed JSON: number out of range")


def _build_object(events: Iterator[Event]) -> Record:
    """Assemble the object whose ``start_map`` event was just consumed."""
    builder = ijson.ObjectBuilder()
    builder.event("start_map", None)
    depth = 1
    for _, event, value in events:
        if event == "number":
            _check_number(value)
        builder.event(event, value)
        if event in _OPENERS:
            depth += 1
        elif event in _CLOSERS:
            depth -= 1
            if depth == 0:
                return builder.value
    raise MalformedInput("malformed JSON: object does not end properly")


def walk(
    source: BinaryIO,
    visitor: RecordVisitor,
    *,
    read_buffer_size: int = 64 * 1024,
    rewind: bool = False,
) -> int:
    """Walk a flat JSON array, invoking ``visitor`` for every object.

    Args:
        source: Binary stream holding a single JSON array of objects
        visitor: Receives each decoded object as a dict
        read_buffer_size: Bytes requested from the source per read
        rewind: Reposition the source at offset 0 after a successful walk

    Returns:
        Number of records visited

    Raises:
        MalformedInput: Document is not an array, an element is not an
            object, or the array does not end properly
        SourceFailure: Reading or rewinding the source failed
    """
    events = _events(source, read_buffer_size)

    # Opening bracket
    first = next(events, None)
    if first is None:
        raise MalformedInput("malformed JSON: empty document")
    if first[:2] != ("", "start_array"):
        raise MalformedInput("malformed JSON: document must be an array of objects")

    count = 0
    for prefix, event, _ in events:
        if prefix == "" and event == "end_array":
            break
        if event != "start_map":
            raise MalformedInput(
                f"malformed JSON: array element {count} is not an object"
            )
        visitor.visit(_build_object(events))
        count += 1
    else:
        raise MalformedInput("malformed JSON: array does not end properly")

    logger.debug("walked %d records", count)

    if rewind:
        try:
            source.seek(0)
        except (AttributeError, OSError, ValueError) as e:
            raise SourceFailure(f"file read failure: cannot rewind source: {e}") from e

    return count


__all__ = ["Record", "RecordVisitor", "walk"]
