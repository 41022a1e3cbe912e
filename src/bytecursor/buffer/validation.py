"""Validation helpers shared by the cursor buffer operations."""

from __future__ import annotations

from .errors import (
    ByteRangeError,
    IndexOutOfBoundsError,
    InvalidInputError,
    RegionUnsetError,
)
from .state import RegionState


def ensure_region(state: RegionState, operation: str) -> bytearray:
    if state.data is None:
        raise RegionUnsetError(operation)
    return state.data


def ensure_index(state: RegionState, index: int) -> int:
    length = state.length
    if isinstance(index, bool) or not isinstance(index, int):
        raise InvalidInputError(f"Index must be an int, got {index!r}")
    if index < 0 or index >= length:
        raise IndexOutOfBoundsError(index, length)
    return index


def ensure_byte(value: int, *, index: int | None = None) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInputError(f"Byte value must be an int, got {value!r}", index=index)
    if not 0 <= value <= 0xFF:
        raise ByteRangeError(value, index=index)
    return value


def ensure_char(char: str, *, index: int | None = None) -> int:
    """Return the code point of the first character of ``char`` as a byte."""

    if not isinstance(char, str) or not char:
        raise InvalidInputError("Expected a non-empty string", index=index)
    return ensure_byte(ord(char[0]), index=index)


__all__ = ["ensure_byte", "ensure_char", "ensure_index", "ensure_region"]
