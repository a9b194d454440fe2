"""Pydantic models for conversion options and results."""

from __future__ import annotations

import codecs
from enum import Enum
from typing import List, Literal

from pydantic import BaseModel, Field, field_validator

DEFAULT_BUFFER_SIZE = 1024 * 1024

Mode = Literal["streaming", "buffered"]


class ConversionState(Enum):
    """Lifecycle of a single conversion run."""

    INIT = "init"
    INDEXING = "indexing"
    SORTING = "sorting"
    EMITTING = "emitting"
    DONE = "done"
    FAILED = "failed"


class ConvertOptions(BaseModel):
    """Options recognized by the converters.

    Buffer sizes are in bytes. ``mode`` selects the driver: ``streaming``
    reads the source twice and needs it to be rewindable, ``buffered``
    parses once and keeps every record in memory.
    """

    mode: Mode = "buffered"
    delimiter: str = ","
    read_buffer_size: int = Field(default=DEFAULT_BUFFER_SIZE, gt=0)
    write_buffer_size: int = Field(default=DEFAULT_BUFFER_SIZE, gt=0)
    encoding: str = "utf-8"
    fail_on_empty: bool = False

    @field_validator("delimiter")
    @classmethod
    def single_character(cls, v: str) -> str:
        """Delimiter must be exactly one character and not a line break."""

        if len(v) != 1:
            raise ValueError("delimiter must be a single character")
        if v in "\r\n":
            raise ValueError("delimiter cannot be a line break")
        return v

    @field_validator("encoding")
    @classmethod
    def known_codec(cls, v: str) -> str:
        try:
            codecs.lookup(v)
        except LookupError as e:
            raise ValueError(f"unknown encoding: {v}") from e
        return v


class ConversionSummary(BaseModel):
    """Outcome of a finished conversion."""

    mode: Mode
    state: ConversionState
    records: int = 0
    columns: List[str] = Field(default_factory=list)
    bytes_written: int = 0
    empty: bool = False


__all__ = [
    "ConversionState",
    "ConversionSummary",
    "ConvertOptions",
    "DEFAULT_BUFFER_SIZE",
    "Mode",
]
