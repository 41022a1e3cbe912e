"""Stateless conversions between decimal, binary, octal and hex."""

from .convert import (
    BYTE_MAX,
    InvalidNumeralFormatError,
    NumeralRangeError,
    binary_to,
    convert,
    decimal_to,
    decimal_to_system,
    hex_to,
    is_valid_numeral,
    octal_to,
    system_to_decimal,
)
from .render import parse_bytes, render_byte, render_bytes
from .systems import NumeralSystem, resolve_system

__all__ = [
    "BYTE_MAX",
    "InvalidNumeralFormatError",
    "NumeralRangeError",
    "NumeralSystem",
    "binary_to",
    "convert",
    "decimal_to",
    "decimal_to_system",
    "hex_to",
    "is_valid_numeral",
    "octal_to",
    "parse_bytes",
    "render_byte",
    "render_bytes",
    "resolve_system",
    "system_to_decimal",
]
