"""Exceptions raised by cursor buffers."""

from __future__ import annotations

from typing import Optional


class ByteBufferError(RuntimeError):
    """Base class; carries the offending index and the cursor when known."""

    def __init__(
        self,
        message: str,
        *,
        index: Optional[int] = None,
        cursor: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.index = index
        self.cursor = cursor


class CapacityExceededError(ByteBufferError):
    """``append`` was handed more bytes than ``available()``."""

    def __init__(self, required: int, available: int, *, cursor: int) -> None:
        super().__init__(
            f"Not enough memory available: need {required} bytes, {available} left",
            cursor=cursor,
        )
        self.required = required
        self.available = available


class NoFileHandleError(ByteBufferError):
    """A file operation needs a bound handle and none is open."""

    def __init__(self, operation: str) -> None:
        super().__init__(f"No file handle bound for '{operation}'")
        self.operation = operation


class InvalidInputError(ByteBufferError):
    """Malformed direct input (empty char, undecodable text, ...)."""


class ByteRangeError(InvalidInputError):
    def __init__(self, value: int, *, index: Optional[int] = None) -> None:
        super().__init__(f"{value} does not fit in a byte (0-255)", index=index)
        self.value = value


class UnsupportedEncodingError(InvalidInputError):
    def __init__(self, encoding: str) -> None:
        super().__init__(f"Unsupported encoding '{encoding}'")
        self.encoding = encoding


class IndexOutOfBoundsError(ByteBufferError):
    def __init__(self, index: int, length: int) -> None:
        super().__init__(f"Index {index} out of range for length {length}", index=index)
        self.length = length


class RegionUnsetError(ByteBufferError):
    """The buffer has no region yet; allocate or load one first."""

    def __init__(self, operation: str) -> None:
        super().__init__(f"'{operation}' needs an allocated region")
        self.operation = operation


__all__ = [
    "ByteBufferError",
    "ByteRangeError",
    "CapacityExceededError",
    "IndexOutOfBoundsError",
    "InvalidInputError",
    "NoFileHandleError",
    "RegionUnsetError",
    "UnsupportedEncodingError",
]
