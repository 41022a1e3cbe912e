"""Text encodings a cursor buffer can translate strings through.

``binary`` is the byte-preserving latin-1 mapping, not the digit-string form
produced by ``bytecursor.numeral``.
"""

from __future__ import annotations

import base64
import re
from dataclasses import dataclass
from typing import Callable, Dict

from .errors import InvalidInputError, UnsupportedEncodingError

_HEX_TEXT = re.compile(r"(?:[0-9a-fA-F]{2})*")


@dataclass(frozen=True, slots=True)
class Encoding:
    name: str
    encode: Callable[[str], bytes]
    decode: Callable[[bytes], str]
    # longest prefix of ``data`` (at most ``limit`` bytes) that ends on a
    # character boundary
    boundary: Callable[[bytes, int], int]


def _byte_exact(data: bytes, limit: int) -> int:
    return max(0, min(len(data), limit))


def _utf8_boundary(data: bytes, limit: int) -> int:
    cut = _byte_exact(data, limit)
    while 0 < cut < len(data) and (data[cut] & 0xC0) == 0x80:
        cut -= 1
    return cut


def _utf16_boundary(data: bytes, limit: int) -> int:
    cut = _byte_exact(data, limit) & ~1
    if 2 <= cut < len(data):
        unit = data[cut - 2] | (data[cut - 1] << 8)
        if 0xD800 <= unit <= 0xDBFF:
            cut -= 2
    return cut


def _encode_hex(text: str) -> bytes:
    if _HEX_TEXT.fullmatch(text) is None:
        raise InvalidInputError(f"'{text}' is not an even-length hex string")
    return bytes.fromhex(text)


def _decode_b64(text: str, *, urlsafe: bool) -> bytes:
    compact = "".join(text.split())
    compact += "=" * (-len(compact) % 4)
    altchars = b"-_" if urlsafe else None
    return base64.b64decode(compact, altchars=altchars, validate=True)


def _encode_low_bytes(text: str) -> bytes:
    """One byte per UTF-16 code unit: its low byte."""

    return text.encode("utf-16-le", errors="surrogatepass")[::2]


def _decode_ascii(data: bytes) -> str:
    return bytes(b & 0x7F for b in data).decode("ascii")


_ENCODINGS: Dict[str, Encoding] = {
    "utf-8": Encoding(
        name="utf-8",
        encode=lambda text: text.encode("utf-8"),
        decode=lambda data: data.decode("utf-8", errors="replace"),
        boundary=_utf8_boundary,
    ),
    "ascii": Encoding(
        name="ascii",
        encode=_encode_low_bytes,
        decode=_decode_ascii,
        boundary=_byte_exact,
    ),
    "binary": Encoding(
        name="binary",
        encode=_encode_low_bytes,
        decode=lambda data: data.decode("latin-1"),
        boundary=_byte_exact,
    ),
    "hex": Encoding(
        name="hex",
        encode=_encode_hex,
        decode=lambda data: data.hex(),
        boundary=_byte_exact,
    ),
    "base64": Encoding(
        name="base64",
        encode=lambda text: _decode_b64(text, urlsafe=False),
        decode=lambda data: base64.b64encode(data).decode("ascii"),
        boundary=_byte_exact,
    ),
    "base64url": Encoding(
        name="base64url",
        encode=lambda text: _decode_b64(text, urlsafe=True),
        decode=lambda data: base64.urlsafe_b64encode(data).decode("ascii").rstrip("="),
        boundary=_byte_exact,
    ),
    "utf16le": Encoding(
        name="utf16le",
        encode=lambda text: text.encode("utf-16-le"),
        decode=lambda data: data[: len(data) & ~1].decode("utf-16-le", errors="replace"),
        boundary=_utf16_boundary,
    ),
}

_ALIASES: Dict[str, str] = {
    "utf8": "utf-8",
    "latin1": "binary",
    "latin-1": "binary",
    "utf-16le": "utf16le",
    "ucs2": "utf16le",
    "ucs-2": "utf16le",
}

SUPPORTED_ENCODINGS = tuple(_ENCODINGS)


def resolve_encoding(name: str | Encoding) -> Encoding:
    if isinstance(name, Encoding):
        return name
    key = str(name).strip().lower()
    key = _ALIASES.get(key, key)
    try:
        return _ENCODINGS[key]
    except KeyError as exc:
        raise UnsupportedEncodingError(str(name)) from exc


def normalize_encoding(name: str) -> str:
    return resolve_encoding(name).name


def encode_text(text: str, encoding: str | Encoding) -> bytes:
    codec = resolve_encoding(encoding)
    if not isinstance(text, str):
        raise InvalidInputError(f"Expected str, got {type(text).__name__}")
    try:
        return codec.encode(text)
    except ValueError as exc:
        raise InvalidInputError(f"Cannot encode text as {codec.name}: {exc}") from exc


def decode_bytes(data: bytes | bytearray | memoryview, encoding: str | Encoding) -> str:
    return resolve_encoding(encoding).decode(bytes(data))


def encoded_length(text: str, encoding: str | Encoding) -> int:
    return len(encode_text(text, encoding))


def fit_prefix(data: bytes, limit: int, encoding: str | Encoding) -> bytes:
    """Trim ``data`` to at most ``limit`` bytes without splitting a character."""

    return data[: resolve_encoding(encoding).boundary(data, limit)]


__all__ = [
    "Encoding",
    "SUPPORTED_ENCODINGS",
    "decode_bytes",
    "encode_text",
    "encoded_length",
    "fit_prefix",
    "normalize_encoding",
    "resolve_encoding",
]
