"""Cursor-tracked mutable byte buffers with numeral-system conversions."""

from .buffer import (
    ByteBufferError,
    ByteRangeError,
    CapacityExceededError,
    CursorBuffer,
    IndexOutOfBoundsError,
    InvalidInputError,
    NoFileHandleError,
    RegionUnsetError,
    UnsupportedEncodingError,
)
from .numeral import InvalidNumeralFormatError, NumeralRangeError, NumeralSystem

__all__ = [
    "ByteBufferError",
    "ByteRangeError",
    "CapacityExceededError",
    "CursorBuffer",
    "IndexOutOfBoundsError",
    "InvalidInputError",
    "InvalidNumeralFormatError",
    "NoFileHandleError",
    "NumeralRangeError",
    "NumeralSystem",
    "RegionUnsetError",
    "UnsupportedEncodingError",
    "buffer",
    "numeral",
    "runtime",
]

__version__ = "0.1.0"
