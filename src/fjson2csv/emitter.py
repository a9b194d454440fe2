"""CSV emission: value rendering, buffered sink and the row writer.

Notes:
    - Values are never quoted or escaped; a string containing the
      delimiter produces an extra cell
    - Numbers are truncated toward zero, never rounded
    - Nested objects and arrays render as empty cells
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, BinaryIO, Sequence

from .errors import SinkFailure
from .models import DEFAULT_BUFFER_SIZE
from .walker import Record

logger = logging.getLogger(__name__)


def format_value(value: Any) -> str:
    """Render a JSON scalar as CSV cell text.

    Examples:
        >>> format_value(12.9), format_value(-1.7), format_value(True)
        ('12', '-1', 'true')
    """
    if isinstance(value, str):
        return value
    # bool is an int subclass, check it first
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float, Decimal)):
        return str(int(value))
    return ""


class BufferedSink:
    """Bounded write buffer in front of a binary sink.

    Data is accumulated until the next write would overflow ``size`` bytes,
    then flushed in one call. Writes larger than the buffer bypass it.
    Use as a context manager so the buffer is flushed on every exit path.
    """

    def __init__(self, sink: BinaryIO, size: int = DEFAULT_BUFFER_SIZE):
        self._sink = sink
        self._size = size
        self._buffer = bytearray()
        self.bytes_written = 0
        self.failed = False

    def _write_through(self, data: bytes) -> None:
        try:
            self._sink.write(data)
        except (OSError, ValueError) as e:
            self.failed = True
            raise SinkFailure(f"write failure: {e}") from e
        self.bytes_written += len(data)

    def write(self, data: bytes) -> None:
        if self.failed:
            raise SinkFailure("write failure: sink already failed")
        if len(self._buffer) + len(data) > self._size:
            self.flush()
        if len(data) >= self._size:
            self._write_through(data)
        else:
            self._buffer += data

    def flush(self) -> None:
        if self._buffer and not self.failed:
            logger.debug("flushing %d buffered bytes", len(self._buffer))
            data = bytes(self._buffer)
            self._buffer.clear()
            self._write_through(data)

    def close(self) -> None:
        """Flush pending data and the underlying sink.

        The sink itself is left open; it belongs to the caller.
        """
        self.flush()
        if self.bytes_written and hasattr(self._sink, "flush"):
            try:
                self._sink.flush()
            except (OSError, ValueError) as e:
                self.failed = True
                raise SinkFailure(f"write failure: {e}") from e

    def __enter__(self) -> "BufferedSink":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.close()
            return
        # Another error is already propagating: flush what we can, keep it.
        try:
            self.close()
        except SinkFailure as flush_error:
            logger.warning("flush after failed conversion also failed: %s", flush_error)


class RecordEmitter:
    """Walk visitor that writes each record as one CSV row."""

    def __init__(
        self,
        columns: Sequence[str],
        out: BufferedSink,
        delimiter: str = ",",
        encoding: str = "utf-8",
    ):
        self.columns = tuple(columns)
        self.out = out
        self.delimiter = delimiter
        self.encoding = encoding

    def _write_line(self, cells: Sequence[str]) -> None:
        line = self.delimiter.join(cells) + "\n"
        try:
            data = line.encode(self.encoding)
        except UnicodeEncodeError as e:
            raise SinkFailure(f"cannot encode output as {self.encoding}: {e}") from e
        self.out.write(data)

    def write_header(self) -> None:
        """Write the column names, or nothing at all when there are none."""
        if self.columns:
            self._write_line(self.columns)

    def visit(self, record: Record) -> None:
        self._write_line([format_value(record.get(key)) for key in self.columns])


__all__ = ["BufferedSink", "RecordEmitter", "format_value"]
