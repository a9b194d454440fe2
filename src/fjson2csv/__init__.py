"""fjson2csv: convert flat, heterogeneous JSON records into CSV."""

from .converter import BufferedConverter, StreamingConverter, convert
from .errors import (
    ConversionError,
    EmptyInput,
    MalformedInput,
    SinkFailure,
    SourceFailure,
)
from .models import ConversionState, ConversionSummary, ConvertOptions

__all__ = [
    "__version__",
    "BufferedConverter",
    "ConversionError",
    "ConversionState",
    "ConversionSummary",
    "ConvertOptions",
    "EmptyInput",
    "MalformedInput",
    "SinkFailure",
    "SourceFailure",
    "StreamingConverter",
    "convert",
]

__version__ = "1.0.0"
