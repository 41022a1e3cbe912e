from __future__ import annotations

import pytest

from bytecursor import (
    ByteRangeError,
    CapacityExceededError,
    CursorBuffer,
    IndexOutOfBoundsError,
    InvalidInputError,
    InvalidNumeralFormatError,
    RegionUnsetError,
)


def make_buffer(text: str, size: int | None = None) -> CursorBuffer:
    buffer = CursorBuffer()
    buffer.allocate(len(text.encode("utf-8")) if size is None else size)
    for char in text:
        buffer.append(char)
    return buffer


def test_empty_initialization() -> None:
    buffer = CursorBuffer()

    assert buffer.is_buffer() is False
    assert buffer.encoding == "utf-8"
    assert buffer.cursor == 0
    assert buffer.file_handle is None
    assert buffer.length == 0
    assert buffer.available() == 0
    assert buffer.region is None
    assert buffer.at(0) is None


@pytest.mark.parametrize("size", [0, 1, 7, 1024])
def test_allocate_resets_cursor(size: int) -> None:
    buffer = CursorBuffer()

    buffer.allocate(size)

    assert buffer.is_buffer() is True
    assert buffer.length == size
    assert buffer.byte_length == size
    assert buffer.cursor == 0
    assert buffer.available() == size


def test_allocation_unit_variants() -> None:
    buffer = CursorBuffer()

    buffer.allocate_uninitialized(1)
    assert buffer.length == 1
    buffer.allocate_kilobytes(1)
    assert buffer.length == 1024
    buffer.allocate_kilobytes_uninitialized(1)
    assert buffer.length == 1024
    buffer.allocate_megabytes(1)
    assert buffer.length == 1048576
    buffer.allocate_megabytes_uninitialized(1)
    assert buffer.length == 1048576
    assert buffer.cursor == 0


def test_allocate_fill_values() -> None:
    buffer = CursorBuffer()

    buffer.allocate(3, 7)
    assert buffer.to_array() == [7, 7, 7]

    buffer.allocate(3, "ab")
    assert buffer.to_bytes() == b"aba"

    buffer.allocate(2, b"")
    assert buffer.to_array() == [0, 0]


def test_allocate_rejects_bad_arguments() -> None:
    buffer = CursorBuffer()

    with pytest.raises(ByteRangeError):
        buffer.allocate(2, 256)
    with pytest.raises(InvalidInputError):
        buffer.allocate(-1)


def test_allocate_after_writes_resets_cursor() -> None:
    buffer = make_buffer("abc")

    buffer.allocate(2)

    assert buffer.cursor == 0
    assert buffer.to_array() == [0, 0]


def test_append_until_full() -> None:
    buffer = CursorBuffer()
    buffer.allocate(3)

    buffer.append("a")
    buffer.append("b")
    buffer.append("c")

    assert buffer.cursor == 3
    with pytest.raises(CapacityExceededError) as excinfo:
        buffer.append("d")
    assert excinfo.value.required == 1
    assert excinfo.value.available == 0
    assert buffer.cursor == 3


def test_append_advances_by_encoded_length() -> None:
    buffer = CursorBuffer()
    buffer.allocate(4)

    written = buffer.append("é")

    assert written == 2
    assert buffer.cursor == 2
    assert buffer.available() == 2
    with pytest.raises(CapacityExceededError):
        buffer.append("abc")
    assert buffer.cursor == 2


def test_available_tracks_cursor() -> None:
    buffer = CursorBuffer()
    assert buffer.available() == 0

    buffer.allocate(4)
    assert buffer.available() == 4

    buffer.append("a")
    assert buffer.available() == 3
    assert buffer.available() == buffer.length - buffer.cursor


def test_write_defaults_to_cursor_and_truncates() -> None:
    buffer = CursorBuffer()
    buffer.allocate(3)
    buffer.append("x")

    written = buffer.write("abcdef")

    assert written == 2
    assert buffer.cursor == 3
    assert buffer.to_string() == "xab"


def test_write_at_offset() -> None:
    buffer = CursorBuffer()
    buffer.allocate(5)

    written = buffer.write("xy", 2)

    assert written == 2
    assert buffer.cursor == 4
    assert buffer.to_array() == [0, 0, 120, 121, 0]


def test_write_never_splits_a_character() -> None:
    buffer = CursorBuffer()
    buffer.allocate(2)

    written = buffer.write("aé", 0)

    assert written == 1
    assert buffer.cursor == 1
    assert buffer.at(1) == 0


def test_write_rejects_offset_past_end() -> None:
    buffer = CursorBuffer()
    buffer.allocate(2)

    assert buffer.write("a", 2) == 0
    with pytest.raises(IndexOutOfBoundsError):
        buffer.write("a", 3)


def test_writes_need_a_region() -> None:
    buffer = CursorBuffer()

    with pytest.raises(RegionUnsetError):
        buffer.write("a")
    with pytest.raises(RegionUnsetError):
        buffer.append("a")
    with pytest.raises(RegionUnsetError):
        buffer.set(0, 1)


def test_fit() -> None:
    buffer = CursorBuffer()
    buffer.allocate(1)

    assert buffer.fit("a")
    assert not buffer.fit("ab")


def test_is_empty_and_is_full() -> None:
    buffer = CursorBuffer()
    buffer.allocate(2)
    assert buffer.is_empty()
    assert not buffer.is_full()

    buffer.append("ab")
    assert not buffer.is_empty()
    assert buffer.is_full()


def test_cursor_assignment_is_clamped() -> None:
    buffer = CursorBuffer()
    buffer.allocate(3)

    buffer.cursor = 10
    assert buffer.cursor == 3

    buffer.cursor = -4
    assert buffer.cursor == 0


def test_region_assignment_reclamps_cursor() -> None:
    buffer = make_buffer("abcde")
    assert buffer.cursor == 5

    buffer.region = b"ab"

    assert buffer.cursor == 2
    assert buffer.to_string() == "ab"

    buffer.region = None
    assert buffer.cursor == 0
    assert buffer.is_buffer() is False


def test_at_renders_numeral_systems() -> None:
    buffer = make_buffer("abc")

    assert buffer.at(0) == 97
    assert buffer.at(1) == 98
    assert buffer.at(2) == 99
    assert buffer.at(0, "binary") == "1100001"
    assert buffer.at(0, "octal") == "141"
    assert buffer.at(0, "hex") == "61"


def test_at_negative_and_out_of_range() -> None:
    buffer = make_buffer("abc")

    assert buffer.at(-1) == 99
    assert buffer.at(-3) == 97
    assert buffer.at(-4) is None
    assert buffer.at(3) is None


def test_set_validates_index_and_value() -> None:
    buffer = CursorBuffer()
    buffer.allocate(3)

    buffer.set(0, 255)
    assert buffer.at(0) == 255

    with pytest.raises(IndexOutOfBoundsError):
        buffer.set(3, 1)
    with pytest.raises(IndexOutOfBoundsError):
        buffer.set(-1, 1)
    with pytest.raises(ByteRangeError):
        buffer.set(0, 256)
    assert buffer.at(0) == 255


def test_numeral_setters() -> None:
    buffer = CursorBuffer()
    buffer.allocate(3)

    buffer.set_binary(0, "11111111")
    buffer.set_hex(1, "7F")
    buffer.set_octal(2, "377")

    assert buffer.to_array() == [255, 127, 255]


def test_numeral_setters_validate_digits_then_range() -> None:
    buffer = CursorBuffer()
    buffer.allocate(1)

    with pytest.raises(InvalidNumeralFormatError):
        buffer.set_binary(0, "2")
    with pytest.raises(InvalidNumeralFormatError):
        buffer.set_hex(0, "0x1")
    with pytest.raises(ByteRangeError):
        buffer.set_binary(0, "111111111")
    with pytest.raises(ByteRangeError):
        buffer.set_octal(0, "400")
    assert buffer.at(0) == 0


def test_set_char() -> None:
    buffer = CursorBuffer()
    buffer.allocate(2)

    buffer.set_char(0, "zebra")
    assert buffer.at(0) == 122

    with pytest.raises(InvalidInputError):
        buffer.set_char(1, "")
    with pytest.raises(ByteRangeError):
        buffer.set_char(1, "€")


def test_constructor_from_string() -> None:
    buffer = CursorBuffer("abc")

    assert buffer.length == 3
    assert buffer.cursor == 3
    assert buffer.is_full()


def test_from_hex_round_trip() -> None:
    buffer = CursorBuffer()

    buffer.from_hex("616263")

    assert buffer.encoding == "hex"
    assert buffer.cursor == 3
    assert buffer.to_string("utf-8") == "abc"
    assert buffer.to_string() == "616263"


def test_from_ascii_and_utf8() -> None:
    buffer = CursorBuffer()

    buffer.from_ascii("hi")
    assert buffer.encoding == "ascii"
    assert buffer.to_array() == [104, 105]

    buffer.from_utf8("é")
    assert buffer.encoding == "utf-8"
    assert buffer.length == 2


def test_of_array_validates_values() -> None:
    assert CursorBuffer.of_array([1, 2, 3]).to_array() == [1, 2, 3]
    assert CursorBuffer.of_bytes(b"\x00\x01").length == 2
    with pytest.raises(ByteRangeError):
        CursorBuffer.of_array([1, 256])


def test_numeral_views_and_loaders() -> None:
    buffer = CursorBuffer.of_array([1, 255])

    assert buffer.to_binary() == "0000000111111111"
    assert buffer.to_octal() == "001377"
    assert buffer.to_decimal() == "001255"
    assert buffer.to_hex() == "01ff"

    for text, loader in (
        (buffer.to_binary(), "from_binary_digits"),
        (buffer.to_octal(), "from_octal_digits"),
        (buffer.to_decimal(), "from_decimal_digits"),
    ):
        other = CursorBuffer()
        getattr(other, loader)(text)
        assert other.equals(buffer)


def test_move_index_positions() -> None:
    buffer = CursorBuffer()
    buffer.allocate(5)

    assert buffer.move_index("center") == 2
    assert buffer.move_index("end") == 4
    assert buffer.move_index("start") == 0

    buffer.append("ab")
    buffer.cursor = 5
    assert buffer.move_index("empty") == 2
    assert buffer.cursor == 2


def test_move_index_without_zero_byte_keeps_cursor() -> None:
    buffer = CursorBuffer("abc")

    assert buffer.move_index("empty") is None
    assert buffer.cursor == 3

    with pytest.raises(InvalidInputError):
        buffer.move_index("middle")


def test_move_index_end_on_zero_length_region() -> None:
    buffer = CursorBuffer()
    buffer.allocate(0)

    assert buffer.move_index("end") == 0


def test_snapshot_and_dunder_helpers() -> None:
    buffer = make_buffer("ab", size=4)

    snap = buffer.snapshot()

    assert snap.data == b"ab\x00\x00"
    assert snap.cursor == 2
    assert snap.length == 4
    assert snap.available == 2
    assert snap.has_file is False
    assert len(buffer) == 4
    assert list(buffer) == [97, 98, 0, 0]
    assert "cursor=2" in repr(buffer)


def test_failed_load_keeps_encoding_and_region() -> None:
    buffer = CursorBuffer("abc")

    with pytest.raises(InvalidInputError):
        buffer.from_source("zz", "hex")
    with pytest.raises(InvalidInputError):
        buffer.from_hex("abc")

    assert buffer.encoding == "utf-8"
    assert buffer.to_bytes() == b"abc"
    assert buffer.cursor == 3


def test_load_with_unknown_encoding_changes_nothing() -> None:
    buffer = CursorBuffer("abc")

    with pytest.raises(InvalidInputError):
        buffer.from_source("abc", "ebcdic")

    assert buffer.encoding == "utf-8"
    assert buffer.to_string() == "abc"


def test_base64_and_json_views() -> None:
    buffer = CursorBuffer("abc")

    assert buffer.to_base64() == "YWJj"
    assert buffer.to_json() == {"type": "Buffer", "data": [97, 98, 99]}
    assert CursorBuffer().to_json() == {"type": "Buffer", "data": []}
