"""Errors raised by the JSON to CSV conversion pipeline."""


class ConversionError(Exception):
    """Base class for all conversion failures.

    Every conversion error is terminal: the run stops at the first one and
    the exception reaches the caller unchanged.
    """


class MalformedInput(ConversionError):
    """Source is not a well-formed top-level JSON array of objects."""


class SourceFailure(ConversionError):
    """Reading or repositioning the source failed."""


class SinkFailure(ConversionError):
    """Writing to the output sink failed."""


class EmptyInput(ConversionError):
    """No fields were discovered in the input.

    Only raised when the caller asks for it (``fail_on_empty``); otherwise
    an empty input converts to zero bytes of output.
    """


__all__ = [
    "ConversionError",
    "EmptyInput",
    "MalformedInput",
    "SinkFailure",
    "SourceFailure",
]
