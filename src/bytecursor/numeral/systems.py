"""Numeral systems understood by the conversion layer."""

from __future__ import annotations

import re
from enum import Enum
from typing import Dict, Pattern


class NumeralSystem(str, Enum):
    """Textual digit encodings of an unsigned integer."""

    DECIMAL = "decimal"
    BINARY = "binary"
    OCTAL = "octal"
    HEX = "hex"

    @property
    def radix(self) -> int:
        return _RADIX[self]

    @property
    def width(self) -> int:
        """Digits needed to render any byte (0-255) in this system."""
        return _BYTE_WIDTH[self]

    @property
    def pattern(self) -> Pattern[str]:
        return _DIGITS[self]

    @property
    def format_code(self) -> str:
        return _FORMAT_CODE[self]


_RADIX: Dict[NumeralSystem, int] = {
    NumeralSystem.DECIMAL: 10,
    NumeralSystem.BINARY: 2,
    NumeralSystem.OCTAL: 8,
    NumeralSystem.HEX: 16,
}

_BYTE_WIDTH: Dict[NumeralSystem, int] = {
    NumeralSystem.DECIMAL: 3,
    NumeralSystem.BINARY: 8,
    NumeralSystem.OCTAL: 3,
    NumeralSystem.HEX: 2,
}

_DIGITS: Dict[NumeralSystem, Pattern[str]] = {
    NumeralSystem.DECIMAL: re.compile(r"[0-9]+"),
    NumeralSystem.BINARY: re.compile(r"[0-1]+"),
    NumeralSystem.OCTAL: re.compile(r"[0-7]+"),
    NumeralSystem.HEX: re.compile(r"[0-9a-fA-F]+"),
}

_FORMAT_CODE: Dict[NumeralSystem, str] = {
    NumeralSystem.DECIMAL: "d",
    NumeralSystem.BINARY: "b",
    NumeralSystem.OCTAL: "o",
    NumeralSystem.HEX: "x",
}

_ALIASES: Dict[str, NumeralSystem] = {
    "dec": NumeralSystem.DECIMAL,
    "bin": NumeralSystem.BINARY,
    "oct": NumeralSystem.OCTAL,
    "hexadecimal": NumeralSystem.HEX,
}


def resolve_system(system: NumeralSystem | str) -> NumeralSystem:
    if isinstance(system, NumeralSystem):
        return system
    key = str(system).strip().lower()
    if key in _ALIASES:
        return _ALIASES[key]
    try:
        return NumeralSystem(key)
    except ValueError as exc:
        raise ValueError(f"Unknown numeral system '{system}'") from exc


__all__ = ["NumeralSystem", "resolve_system"]
