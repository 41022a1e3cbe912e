import pytest

from bytecursor.numeral import (
    InvalidNumeralFormatError,
    NumeralRangeError,
    NumeralSystem,
    binary_to,
    convert,
    decimal_to,
    decimal_to_system,
    hex_to,
    is_valid_numeral,
    octal_to,
    parse_bytes,
    render_bytes,
    resolve_system,
    system_to_decimal,
)


def test_decimal_to_system_has_no_padding() -> None:
    assert decimal_to_system(97, "binary") == "1100001"
    assert decimal_to_system(8, "octal") == "10"
    assert decimal_to_system(255, "hex") == "ff"
    assert decimal_to_system(0, NumeralSystem.BINARY) == "0"


@pytest.mark.parametrize("system", ["binary", "octal", "hex"])
def test_every_byte_survives_a_round_trip(system: str) -> None:
    for value in range(256):
        assert system_to_decimal(decimal_to_system(value, system), system) == value


@pytest.mark.parametrize("value", [-1, 256, 1024])
def test_decimal_to_system_rejects_non_bytes(value: int) -> None:
    with pytest.raises(NumeralRangeError):
        decimal_to_system(value, "hex")


def test_system_to_decimal_accepts_mixed_case_hex() -> None:
    assert system_to_decimal("ff", "hex") == 255
    assert system_to_decimal("Ff", "hex") == 255


def test_system_to_decimal_does_not_range_check() -> None:
    assert system_to_decimal("1ff", "hex") == 511
    assert system_to_decimal("111111111", "binary") == 511


@pytest.mark.parametrize(
    ("text", "system"),
    [("102", "binary"), ("8", "octal"), ("fg", "hex"), ("", "binary"), (" 1", "binary")],
)
def test_system_to_decimal_rejects_foreign_digits(text: str, system: str) -> None:
    assert is_valid_numeral(text, system) is False
    with pytest.raises(InvalidNumeralFormatError) as excinfo:
        system_to_decimal(text, system)
    assert excinfo.value.text == text


def test_cross_conversions() -> None:
    assert binary_to("1100001", "decimal") == 97
    assert binary_to("1100001", "hex") == "61"
    assert hex_to("61", "octal") == "141"
    assert octal_to("141", "binary") == "1100001"
    assert hex_to("1ff", "decimal") == 511
    assert convert("97", "decimal", "binary") == "1100001"


def test_cross_conversion_to_radix_is_bounded_to_a_byte() -> None:
    with pytest.raises(NumeralRangeError):
        hex_to("1ff", "binary")


def test_resolve_system_aliases() -> None:
    assert resolve_system("HEX") is NumeralSystem.HEX
    assert resolve_system("bin") is NumeralSystem.BINARY
    assert resolve_system(NumeralSystem.OCTAL) is NumeralSystem.OCTAL
    with pytest.raises(ValueError):
        resolve_system("roman")


def test_render_bytes_uses_fixed_width_per_byte() -> None:
    data = b"\x01\xff"
    assert render_bytes(data, "binary") == "0000000111111111"
    assert render_bytes(data, "octal") == "001377"
    assert render_bytes(data, "decimal") == "001255"
    assert render_bytes(data, "hex") == "01ff"
    assert render_bytes(b"", "binary") == ""


def test_parse_bytes_inverts_render_bytes() -> None:
    data = bytes([0, 7, 97, 128, 255])
    for system in NumeralSystem:
        assert parse_bytes(render_bytes(data, system), system) == data


def test_parse_bytes_rejects_partial_groups_and_overflow() -> None:
    with pytest.raises(InvalidNumeralFormatError):
        parse_bytes("0101", "binary")
    with pytest.raises(NumeralRangeError):
        parse_bytes("256", "decimal")
    with pytest.raises(NumeralRangeError):
        parse_bytes("400", "octal")
    with pytest.raises(InvalidNumeralFormatError):
        parse_bytes("0x", "hex")


def test_decimal_to_keeps_ints_for_decimal_targets() -> None:
    assert decimal_to(97, "decimal") == 97
    assert decimal_to(97, "octal") == "141"
    with pytest.raises(NumeralRangeError):
        decimal_to(300, "decimal")
