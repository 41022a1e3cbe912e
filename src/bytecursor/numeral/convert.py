"""Single-value conversions between decimal, binary, octal and hex.

Every function here is pure. ``system_to_decimal`` checks the digit set but
not the magnitude; ``decimal_to_system`` only accepts byte values, so cross
conversions into a non-decimal target are bounded to 0-255 as well.
"""

from __future__ import annotations

from .systems import NumeralSystem, resolve_system

BYTE_MAX = 0xFF


class InvalidNumeralFormatError(ValueError):
    """Raised when a digit string contains characters outside its radix."""

    def __init__(self, text: str, system: NumeralSystem | str) -> None:
        name = resolve_system(system).value
        super().__init__(f"'{text}' is not a valid {name} numeral")
        self.text = text
        self.system = name


class NumeralRangeError(ValueError):
    """Raised when a value handed to ``decimal_to_system`` is not a byte."""

    def __init__(self, value: int) -> None:
        super().__init__(f"{value} is outside the byte range 0-{BYTE_MAX}")
        self.value = value


def is_valid_numeral(text: str, system: NumeralSystem | str) -> bool:
    if not isinstance(text, str):
        return False
    return resolve_system(system).pattern.fullmatch(text) is not None


def decimal_to_system(value: int, system: NumeralSystem | str) -> str:
    """Render ``value`` in ``system`` without zero padding (``97, binary -> '1100001'``)."""

    target = resolve_system(system)
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"expected int, got {type(value).__name__}")
    if not 0 <= value <= BYTE_MAX:
        raise NumeralRangeError(value)
    return format(value, target.format_code)


def system_to_decimal(text: str, system: NumeralSystem | str) -> int:
    source = resolve_system(system)
    if not is_valid_numeral(text, source):
        raise InvalidNumeralFormatError(text, source)
    return int(text, source.radix)


def _convert(
    text: str, source: NumeralSystem, target: NumeralSystem | str
) -> int | str:
    value = system_to_decimal(text, source)
    resolved = resolve_system(target)
    if resolved is NumeralSystem.DECIMAL:
        return value
    return decimal_to_system(value, resolved)


def binary_to(text: str, target: NumeralSystem | str) -> int | str:
    return _convert(text, NumeralSystem.BINARY, target)


def octal_to(text: str, target: NumeralSystem | str) -> int | str:
    return _convert(text, NumeralSystem.OCTAL, target)


def hex_to(text: str, target: NumeralSystem | str) -> int | str:
    return _convert(text, NumeralSystem.HEX, target)


def decimal_to(value: int, target: NumeralSystem | str) -> int | str:
    """Like ``decimal_to_system`` but a decimal target hands back the int."""

    resolved = resolve_system(target)
    text = decimal_to_system(value, resolved)
    return value if resolved is NumeralSystem.DECIMAL else text


def convert(
    text: str, source: NumeralSystem | str, target: NumeralSystem | str
) -> int | str:
    """Generic form of ``binary_to``/``octal_to``/``hex_to`` for any source."""

    return _convert(text, resolve_system(source), target)


__all__ = [
    "BYTE_MAX",
    "InvalidNumeralFormatError",
    "NumeralRangeError",
    "binary_to",
    "convert",
    "decimal_to",
    "decimal_to_system",
    "hex_to",
    "is_valid_numeral",
    "octal_to",
    "system_to_decimal",
]
