"""Cursor-tracked byte buffers and their supporting services."""

from .buffer import BufferSnapshot, CursorBuffer, Transaction
from .encodings import (
    SUPPORTED_ENCODINGS,
    Encoding,
    decode_bytes,
    encode_text,
    encoded_length,
    resolve_encoding,
)
from .errors import (
    ByteBufferError,
    ByteRangeError,
    CapacityExceededError,
    IndexOutOfBoundsError,
    InvalidInputError,
    NoFileHandleError,
    RegionUnsetError,
    UnsupportedEncodingError,
)
from .files import FileHandle, shutdown_executor
from .state import RegionState
from .validation import ensure_byte, ensure_char, ensure_index, ensure_region

__all__ = [
    "BufferSnapshot",
    "ByteBufferError",
    "ByteRangeError",
    "CapacityExceededError",
    "CursorBuffer",
    "Encoding",
    "FileHandle",
    "IndexOutOfBoundsError",
    "InvalidInputError",
    "NoFileHandleError",
    "RegionState",
    "RegionUnsetError",
    "SUPPORTED_ENCODINGS",
    "Transaction",
    "UnsupportedEncodingError",
    "decode_bytes",
    "encode_text",
    "encoded_length",
    "ensure_byte",
    "ensure_char",
    "ensure_index",
    "ensure_region",
    "resolve_encoding",
    "shutdown_executor",
]
