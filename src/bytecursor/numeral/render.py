"""Whole-buffer numeral renderings.

Each byte is written with the fixed width of its system (binary 8, octal 3,
decimal 3, hex 2) and the digit groups are concatenated without separators,
which makes ``parse_bytes`` an exact inverse of ``render_bytes``.
"""

from __future__ import annotations

from typing import Iterable

from .convert import (
    BYTE_MAX,
    InvalidNumeralFormatError,
    NumeralRangeError,
    system_to_decimal,
)
from .systems import NumeralSystem, resolve_system


def render_byte(value: int, system: NumeralSystem | str) -> str:
    target = resolve_system(system)
    if not 0 <= value <= BYTE_MAX:
        raise NumeralRangeError(value)
    return format(value, f"0{target.width}{target.format_code}")


def render_bytes(data: Iterable[int], system: NumeralSystem | str) -> str:
    target = resolve_system(system)
    if target is NumeralSystem.HEX and isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data).hex()
    return "".join(render_byte(value, target) for value in data)


def parse_bytes(text: str, system: NumeralSystem | str) -> bytes:
    source = resolve_system(system)
    width = source.width
    if len(text) % width:
        raise InvalidNumeralFormatError(text, source)
    out = bytearray()
    for start in range(0, len(text), width):
        value = system_to_decimal(text[start : start + width], source)
        if value > BYTE_MAX:
            raise NumeralRangeError(value)
        out.append(value)
    return bytes(out)


__all__ = ["parse_bytes", "render_byte", "render_bytes"]
