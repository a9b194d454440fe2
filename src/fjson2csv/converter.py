"""Conversion drivers: streaming (two passes) and buffered (one parse).

Both drivers share the same state machine and produce byte-identical
output for the same input:

    INIT -> INDEXING -> SORTING -> EMITTING -> DONE
                 \\          \\          \\
                  +----------+----------+--> FAILED

Output already flushed to the sink when a run fails is not retracted.
"""

from __future__ import annotations

import logging
from typing import BinaryIO, ClassVar, Dict, List, Optional, Tuple, Type

from .emitter import BufferedSink, RecordEmitter
from .errors import ConversionError, EmptyInput
from .indexer import BufferingVisitor, FieldIndex, IndexingVisitor
from .models import ConversionState, ConversionSummary, ConvertOptions, Mode
from .walker import Record, walk

logger = logging.getLogger(__name__)


class Converter:
    """Converts one JSON array source into CSV on a binary sink.

    Subclasses provide the indexing pass and the emission pass. A converter
    owns its frequency table, column order and (buffered mode) record
    buffer; nothing is shared between instances.
    """

    mode: ClassVar[Mode]

    def __init__(self, options: Optional[ConvertOptions] = None):
        options = options or ConvertOptions(mode=self.mode)
        if options.mode != self.mode:
            options = options.model_copy(update={"mode": self.mode})
        self.options = options
        self.index = FieldIndex()
        self.columns: Tuple[str, ...] = ()
        self.state = ConversionState.INIT

    def _walk(self, source: BinaryIO, visitor, rewind: bool = False) -> int:
        return walk(
            source,
            visitor,
            read_buffer_size=self.options.read_buffer_size,
            rewind=rewind,
        )

    def _index(self, source: BinaryIO) -> None:
        raise NotImplementedError

    def _emit(self, source: BinaryIO, emitter: RecordEmitter) -> None:
        raise NotImplementedError

    def _finish(self) -> None:
        """Release per-run resources after emission or failure."""

    def _summary(self, bytes_written: int = 0) -> ConversionSummary:
        return ConversionSummary(
            mode=self.mode,
            state=self.state,
            records=self.index.records,
            columns=list(self.columns),
            bytes_written=bytes_written,
            empty=not self.columns,
        )

    def convert(self, source: BinaryIO, sink: BinaryIO) -> ConversionSummary:
        """Run the full conversion.

        Raises:
            MalformedInput: Source is not a JSON array of objects
            SourceFailure: Source could not be read or rewound
            SinkFailure: Output could not be written
            EmptyInput: No fields found and ``fail_on_empty`` is set
        """
        self.index = FieldIndex()
        self.columns = ()
        try:
            self.state = ConversionState.INDEXING
            logger.debug("%s conversion: indexing fields", self.mode)
            self._index(source)

            self.state = ConversionState.SORTING
            self.columns = self.index.column_order()
            logger.debug(
                "indexed %d records, %d columns", self.index.records, len(self.columns)
            )

            if not self.columns:
                if self.options.fail_on_empty:
                    raise EmptyInput("no fields found in input")
                self.state = ConversionState.DONE
                return self._summary()

            self.state = ConversionState.EMITTING
            with BufferedSink(sink, self.options.write_buffer_size) as out:
                emitter = RecordEmitter(
                    self.columns,
                    out,
                    delimiter=self.options.delimiter,
                    encoding=self.options.encoding,
                )
                emitter.write_header()
                self._emit(source, emitter)
        except ConversionError:
            self.state = ConversionState.FAILED
            raise
        finally:
            self._finish()

        self.state = ConversionState.DONE
        return self._summary(out.bytes_written)


class StreamingConverter(Converter):
    """Reads the source twice; memory is bounded by the number of fields.

    The source must support ``seek(0)`` between the passes.
    """

    mode = "streaming"

    def _index(self, source: BinaryIO) -> None:
        self._walk(source, IndexingVisitor(self.index), rewind=True)

    def _emit(self, source: BinaryIO, emitter: RecordEmitter) -> None:
        self._walk(source, emitter)


class BufferedConverter(Converter):
    """Parses the source once and replays records from memory."""

    mode = "buffered"

    def __init__(self, options: Optional[ConvertOptions] = None):
        super().__init__(options)
        self.buffer: List[Record] = []

    def _index(self, source: BinaryIO) -> None:
        self.buffer = []
        self._walk(source, BufferingVisitor(self.index, self.buffer))

    def _emit(self, source: BinaryIO, emitter: RecordEmitter) -> None:
        for record in self.buffer:
            emitter.visit(record)

    def _finish(self) -> None:
        self.buffer = []


CONVERTERS: Dict[str, Type[Converter]] = {
    StreamingConverter.mode: StreamingConverter,
    BufferedConverter.mode: BufferedConverter,
}


def convert(
    source: BinaryIO,
    sink: BinaryIO,
    options: Optional[ConvertOptions] = None,
    **overrides,
) -> ConversionSummary:
    """Convert a JSON array of flat objects into CSV.

    Args:
        source: Binary stream with one JSON array (rewindable in streaming mode)
        sink: Binary stream receiving CSV text
        options: Conversion options (defaults if None)
        **overrides: Individual option values, e.g. ``mode="streaming"``

    Returns:
        ConversionSummary describing the finished run

    Example:
        >>> import io
        >>> out = io.BytesIO()
        >>> _ = convert(io.BytesIO(b'[{"a": 1}, {"a": 2, "b": true}]'), out)
        >>> out.getvalue().decode()
        'a,b\\n1,\\n2,true\\n'
    """
    if options is None:
        options = ConvertOptions(**overrides)
    elif overrides:
        options = ConvertOptions(**{**options.model_dump(), **overrides})
    converter = CONVERTERS[options.mode](options)
    return converter.convert(source, sink)


__all__ = [
    "BufferedConverter",
    "CONVERTERS",
    "Converter",
    "StreamingConverter",
    "convert",
]
