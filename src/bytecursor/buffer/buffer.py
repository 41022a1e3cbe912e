"""Cursor buffer façade combining region state, encodings, numerals and file I/O."""

from __future__ import annotations

from array import array
from concurrent.futures import Future
from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import (
    Any,
    Callable,
    ContextManager,
    Iterator,
    Optional,
    Sequence,
    Union,
)

from bytecursor.numeral import (
    InvalidNumeralFormatError,
    NumeralSystem,
    decimal_to_system,
    is_valid_numeral,
    parse_bytes,
    render_bytes,
    resolve_system,
    system_to_decimal,
)
from bytecursor.runtime import telemetry
from bytecursor.runtime.settings import get_settings

from . import files
from .encodings import decode_bytes, encode_text, fit_prefix, normalize_encoding
from .errors import (
    CapacityExceededError,
    IndexOutOfBoundsError,
    InvalidInputError,
    NoFileHandleError,
)
from .state import RegionState
from .validation import ensure_byte, ensure_char, ensure_index, ensure_region

KILOBYTE = 1024
MEGABYTE = 1024**2

BytesLike = Union[bytes, bytearray, memoryview]
Source = Union[str, BytesLike, Sequence[int], "CursorBuffer"]
Fill = Union[int, str, BytesLike]
FileCallback = Callable[[Optional[BaseException], "CursorBuffer"], None]

_POSITIONS = ("start", "center", "end", "empty")


@dataclass(slots=True)
class BufferSnapshot:
    data: bytes
    cursor: int
    encoding: str
    has_file: bool

    @property
    def length(self) -> int:
        return len(self.data)

    @property
    def available(self) -> int:
        return len(self.data) - self.cursor


class CursorBuffer:
    """Fixed-capacity byte region with a cursor, an encoding and a file handle.

    The region only changes size through explicit reallocation (``allocate*``,
    ``from_*``, ``extend``, ``concat``). The cursor is clamped to
    ``[0, length]`` whenever either of them is assigned.
    """

    def __init__(
        self,
        source: Optional[Source] = None,
        encoding: Optional[str] = None,
        *,
        name: str = "buffer",
    ) -> None:
        self.name = name
        self._state = RegionState()
        self._encoding = normalize_encoding(encoding or get_settings().default_encoding)
        self._handle: Optional[files.FileHandle] = None
        if source is not None:
            self.from_source(source)

    @classmethod
    def of(cls, source: Source, encoding: Optional[str] = None) -> "CursorBuffer":
        return cls(source, encoding)

    @classmethod
    def of_array(cls, values: Sequence[int]) -> "CursorBuffer":
        return cls(list(values))

    @classmethod
    def of_bytes(cls, data: BytesLike) -> "CursorBuffer":
        return cls(bytes(data))

    # -- state ---------------------------------------------------------------

    @property
    def region(self) -> Optional[memoryview]:
        """Read-only view of the region, or ``None`` when nothing is allocated."""

        if self._state.data is None:
            return None
        return memoryview(self._state.data).toreadonly()

    @region.setter
    def region(self, data: Optional[BytesLike]) -> None:
        with Transaction(self, "replace_region"):
            self._state.replace_region(None if data is None else bytearray(data))

    @property
    def cursor(self) -> int:
        return self._state.cursor

    @cursor.setter
    def cursor(self, position: int) -> None:
        self._state.set_cursor(position)

    @property
    def encoding(self) -> str:
        return self._encoding

    @encoding.setter
    def encoding(self, encoding: str) -> None:
        self._encoding = normalize_encoding(encoding)

    @property
    def file_handle(self) -> Optional[files.FileHandle]:
        return self._handle

    @property
    def length(self) -> int:
        return self._state.length

    @property
    def byte_length(self) -> int:
        return self._state.length

    def is_buffer(self) -> bool:
        return self._state.is_set

    def available(self) -> int:
        return self._state.available

    def is_empty(self) -> bool:
        return self._state.cursor == 0

    def is_full(self) -> bool:
        return self.available() == 0

    def snapshot(self) -> BufferSnapshot:
        return BufferSnapshot(
            data=self._state.view(),
            cursor=self.cursor,
            encoding=self.encoding,
            has_file=self._handle is not None,
        )

    def __len__(self) -> int:
        return self.length

    def __iter__(self) -> Iterator[int]:
        return iter(self._state.view())

    def __repr__(self) -> str:
        return (
            f"CursorBuffer(name={self.name!r}, length={self.length}, "
            f"cursor={self.cursor}, encoding={self.encoding!r})"
        )

    def __enter__(self) -> "CursorBuffer":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._handle is not None:
            self.close_file()
        return False

    # -- allocation ------------------------------------------------------------

    def allocate(self, size: int, fill: Fill = 0) -> None:
        """Replace the region with ``size`` bytes of ``fill``; the cursor goes to 0.

        ``fill`` is a byte value, or a string (encoded with the buffer encoding)
        or bytes pattern repeated to fill the region.
        """

        size = _ensure_size(size)
        with Transaction(self, "allocate", size=size):
            self._state.replace_region(self._filled(size, fill), cursor=0)

    def allocate_uninitialized(self, size: int) -> None:
        size = _ensure_size(size)
        with Transaction(self, "allocate_uninitialized", size=size):
            self._state.replace_region(bytearray(size), cursor=0)

    def allocate_kilobytes(self, size: int, fill: Fill = 0) -> None:
        self.allocate(KILOBYTE * _ensure_size(size), fill)

    def allocate_kilobytes_uninitialized(self, size: int) -> None:
        self.allocate_uninitialized(KILOBYTE * _ensure_size(size))

    def allocate_megabytes(self, size: int, fill: Fill = 0) -> None:
        self.allocate(MEGABYTE * _ensure_size(size), fill)

    def allocate_megabytes_uninitialized(self, size: int) -> None:
        self.allocate_uninitialized(MEGABYTE * _ensure_size(size))

    def from_source(self, source: Source, encoding: Optional[str] = None) -> None:
        """Rebuild the region from ``source``; the cursor moves to the end.

        Strings are encoded with ``encoding``, which also becomes the buffer
        encoding when given.
        """

        target = self.encoding if encoding is None else normalize_encoding(encoding)
        data = self._coerce_source(source, target)
        with Transaction(self, "from_source", size=len(data), encoding=target):
            self._state.replace_region(data, cursor=len(data))
            self._encoding = target

    def from_ascii(self, text: str) -> None:
        self.from_source(text, "ascii")

    def from_hex(self, text: str) -> None:
        self.from_source(text, "hex")

    def from_utf8(self, text: str) -> None:
        self.from_source(text, "utf-8")

    def from_numeral(self, text: str, system: NumeralSystem | str) -> None:
        """Load a fixed-width digit rendering as produced by ``to_binary`` & co."""

        self.from_source(parse_bytes(text, system))

    def from_binary_digits(self, text: str) -> None:
        self.from_numeral(text, NumeralSystem.BINARY)

    def from_octal_digits(self, text: str) -> None:
        self.from_numeral(text, NumeralSystem.OCTAL)

    def from_decimal_digits(self, text: str) -> None:
        self.from_numeral(text, NumeralSystem.DECIMAL)

    def extend(self, size: int) -> None:
        """Reallocate with ``size`` zero bytes appended; the cursor is kept."""

        size = _ensure_size(size)
        with Transaction(self, "extend", size=size):
            grown = bytearray(self._state.view())
            grown.extend(bytes(size))
            self._state.replace_region(grown)

    # -- cursor writes -----------------------------------------------------------

    def fit(self, text: str) -> bool:
        return len(encode_text(text, self.encoding)) <= self.available()

    def write(self, text: str, offset: Optional[int] = None) -> int:
        """Write ``text`` at ``offset`` (default: the cursor), truncating silently.

        Only whole characters are written. The cursor ends up right after the
        last written byte. Returns the number of bytes written.
        """

        data = ensure_region(self._state, "write")
        start = self.cursor if offset is None else offset
        if isinstance(start, bool) or not isinstance(start, int):
            raise InvalidInputError(f"Offset must be an int, got {start!r}")
        if not 0 <= start <= len(data):
            raise IndexOutOfBoundsError(start, len(data))
        encoded = encode_text(text, self.encoding)
        with Transaction(self, "write", offset=start) as tx:
            written = self._write_encoded(data, encoded, start)
            tx.note("written", written)
        return written

    def append(self, text: str) -> int:
        """Write ``text`` at the cursor, or raise if it does not fit entirely."""

        data = ensure_region(self._state, "append")
        encoded = encode_text(text, self.encoding)
        available = self.available()
        if len(encoded) > available:
            raise CapacityExceededError(len(encoded), available, cursor=self.cursor)
        with Transaction(self, "append", size=len(encoded)):
            return self._write_encoded(data, encoded, self.cursor)

    def _write_encoded(self, data: bytearray, encoded: bytes, start: int) -> int:
        chunk = fit_prefix(encoded, len(data) - start, self.encoding)
        data[start : start + len(chunk)] = chunk
        self._state.set_cursor(start + len(chunk))
        return len(chunk)

    # -- indexed access ----------------------------------------------------------

    def at(
        self, index: int, system: NumeralSystem | str = NumeralSystem.DECIMAL
    ) -> int | str | None:
        """Byte at ``index`` rendered in ``system``; negative indexes count from the end.

        Out-of-range indexes give ``None``.
        """

        target = resolve_system(system)
        length = self.length
        position = length + index if index < 0 else index
        if not 0 <= position < length:
            return None
        value = self._state.data[position]  # type: ignore[index]
        if target is NumeralSystem.DECIMAL:
            return value
        return decimal_to_system(value, target)

    def set(self, index: int, value: int) -> None:
        data = ensure_region(self._state, "set")
        ensure_index(self._state, index)
        data[index] = ensure_byte(value, index=index)

    def set_binary(self, index: int, value: str) -> None:
        self._set_numeral(index, value, NumeralSystem.BINARY)

    def set_octal(self, index: int, value: str) -> None:
        self._set_numeral(index, value, NumeralSystem.OCTAL)

    def set_hex(self, index: int, value: str) -> None:
        self._set_numeral(index, value, NumeralSystem.HEX)

    def set_char(self, index: int, char: str) -> None:
        data = ensure_region(self._state, "set_char")
        ensure_index(self._state, index)
        data[index] = ensure_char(char, index=index)

    def _set_numeral(self, index: int, text: str, system: NumeralSystem) -> None:
        data = ensure_region(self._state, f"set_{system.value}")
        ensure_index(self._state, index)
        if not is_valid_numeral(text, system):
            raise InvalidNumeralFormatError(text, system)
        data[index] = ensure_byte(system_to_decimal(text, system), index=index)

    # -- whole-buffer operations --------------------------------------------------

    def compare(self, other: "CursorBuffer | BytesLike") -> int:
        """-1 if this buffer sorts before ``other``, 1 if after, 0 if equal."""

        mine, theirs = self._state.view(), _bytes_of(other)
        return (mine > theirs) - (mine < theirs)

    def equals(self, other: "CursorBuffer | BytesLike") -> bool:
        return self._state.view() == _bytes_of(other)

    def concat(self, *others: "CursorBuffer | BytesLike") -> None:
        with Transaction(self, "concat", parts=len(others)):
            merged = bytearray(self._state.view())
            for other in others:
                merged.extend(_bytes_of(other))
            self._state.replace_region(merged)

    def copy(
        self,
        target: "CursorBuffer",
        target_start: int = 0,
        source_start: int = 0,
        source_end: Optional[int] = None,
    ) -> int:
        """Copy ``[source_start, source_end)`` into ``target`` at ``target_start``.

        The copy stops at the end of the target; neither cursor moves.
        Returns the number of bytes copied.
        """

        source = ensure_region(self._state, "copy")
        dest = ensure_region(target._state, "copy")
        end = len(source) if source_end is None else min(source_end, len(source))
        if target_start < 0:
            raise IndexOutOfBoundsError(target_start, len(dest))
        if not 0 <= source_start <= len(source):
            raise IndexOutOfBoundsError(source_start, len(source))
        count = max(0, min(end - source_start, len(dest) - target_start))
        if count:
            dest[target_start : target_start + count] = source[
                source_start : source_start + count
            ]
        return count

    def copy_to_index(
        self,
        target: "CursorBuffer",
        source_start: int = 0,
        source_end: Optional[int] = None,
    ) -> int:
        return self.copy(target, target.cursor, source_start, source_end)

    def clone(self) -> "CursorBuffer":
        """Independent copy of region, cursor and encoding; never the file handle."""

        twin = CursorBuffer(encoding=self.encoding, name=self.name)
        if self._state.data is not None:
            twin._state.replace_region(bytearray(self._state.data), cursor=self.cursor)
        return twin

    def move_index(self, position: str) -> Optional[int]:
        """Move the cursor to ``start``, ``center``, ``end`` or the first zero byte.

        Returns the new cursor. For ``empty`` with no zero byte the cursor stays
        put and ``None`` is returned.
        """

        key = str(position).strip().lower()
        length = self.length
        if key == "start":
            return self._state.set_cursor(0)
        if key == "center":
            return self._state.set_cursor(length // 2)
        if key == "end":
            return self._state.set_cursor(max(0, length - 1))
        if key == "empty":
            found = self._state.view().find(0)
            if found < 0:
                return None
            return self._state.set_cursor(found)
        raise InvalidInputError(
            f"Unknown position '{position}' (expected one of {', '.join(_POSITIONS)})"
        )

    # -- encoding views ------------------------------------------------------------

    def to_string(self, encoding: Optional[str] = None) -> str:
        return decode_bytes(self._state.view(), encoding or self.encoding)

    def to_ascii(self) -> str:
        return self.to_string("ascii")

    def to_hex(self) -> str:
        return self.to_string("hex")

    def to_utf8(self) -> str:
        return self.to_string("utf-8")

    def to_base64(self) -> str:
        return self.to_string("base64")

    def to_json(self) -> dict[str, Any]:
        """Node-compatible JSON shape: ``{"type": "Buffer", "data": [...]}``."""

        return {"type": "Buffer", "data": self.to_array()}

    def to_binary(self) -> str:
        return render_bytes(self._state.view(), NumeralSystem.BINARY)

    def to_octal(self) -> str:
        return render_bytes(self._state.view(), NumeralSystem.OCTAL)

    def to_decimal(self) -> str:
        return render_bytes(self._state.view(), NumeralSystem.DECIMAL)

    def to_array(self) -> list[int]:
        return list(self._state.view())

    def to_bytes(self) -> bytes:
        return self._state.view()

    def to_uint8_array(self) -> "array[int]":
        return array("B", self._state.view())

    def to_view(self, offset: int = 0, length: Optional[int] = None) -> memoryview:
        """Read-only window over the current region without copying.

        The view keeps pointing at the old storage after a reallocation.
        """

        size = self.length
        span = size - offset if length is None else length
        if offset < 0 or span < 0 or offset + span > size:
            raise IndexOutOfBoundsError(offset, size)
        region = self.region
        if region is None:
            return memoryview(b"")
        return region[offset : offset + span]

    def slice(self, start: int = 0, end: Optional[int] = None) -> memoryview:
        region = self.region
        if region is None:
            return memoryview(b"")
        return region[start:end]

    # -- file I/O --------------------------------------------------------------------

    def open_file(self, path: files.PathLike, mode: Optional[str] = None) -> None:
        """Open ``path`` and bind it; a previously bound handle is closed first."""

        if self._handle is not None:
            self.close_file()
        handle = files.open_handle(path, mode or get_settings().file_mode)
        self._handle = handle
        telemetry.record_event(
            "file.open", data={"buffer": self.name, "path": handle.path, "mode": handle.mode}
        )

    def close_file(self) -> None:
        handle = self._require_handle("close_file")
        try:
            files.close_handle(handle)
        finally:
            self._handle = None
        telemetry.record_event("file.close", data={"buffer": self.name, "path": handle.path})

    def from_file_sync(self) -> None:
        handle = self._require_handle("from_file")
        data = files.read_all(handle)
        with Transaction(self, "from_file", path=handle.path, size=len(data)):
            self._state.replace_region(bytearray(data), cursor=len(data))

    def write_to_file_sync(self) -> None:
        handle = self._require_handle("write_to_file")
        payload = bytes(ensure_region(self._state, "write_to_file"))
        written = files.write_all(handle, payload)
        telemetry.record_event(
            "file.write", data={"buffer": self.name, "path": handle.path, "size": written}
        )

    def append_to_file_sync(self) -> None:
        handle = self._require_handle("append_to_file")
        payload = bytes(ensure_region(self._state, "append_to_file"))
        written = files.append_all(handle, payload)
        telemetry.record_event(
            "file.append", data={"buffer": self.name, "path": handle.path, "size": written}
        )

    def copy_to_file_sync(self, path: files.PathLike) -> None:
        """Write the region to a freshly opened ``path``; the bound handle is untouched."""

        payload = bytes(ensure_region(self._state, "copy_to_file"))
        written = files.write_path(path, payload)
        telemetry.record_event(
            "file.copy", data={"buffer": self.name, "path": str(path), "size": written}
        )

    def from_file(self, callback: Optional[FileCallback] = None) -> "Future[None]":
        self._require_handle("from_file")
        return self._dispatch("from_file", self.from_file_sync, callback)

    def write_to_file(self, callback: Optional[FileCallback] = None) -> "Future[None]":
        handle = self._require_handle("write_to_file")
        payload = bytes(ensure_region(self._state, "write_to_file"))
        return self._dispatch(
            "write_to_file", lambda: _discard(files.write_all(handle, payload)), callback
        )

    def append_to_file(self, callback: Optional[FileCallback] = None) -> "Future[None]":
        handle = self._require_handle("append_to_file")
        payload = bytes(ensure_region(self._state, "append_to_file"))
        return self._dispatch(
            "append_to_file", lambda: _discard(files.append_all(handle, payload)), callback
        )

    def copy_to_file(
        self, path: files.PathLike, callback: Optional[FileCallback] = None
    ) -> "Future[None]":
        payload = bytes(ensure_region(self._state, "copy_to_file"))
        return self._dispatch(
            "copy_to_file", lambda: _discard(files.write_path(path, payload)), callback
        )

    def _require_handle(self, operation: str) -> files.FileHandle:
        if self._handle is None:
            raise NoFileHandleError(operation)
        return self._handle

    def _dispatch(
        self,
        operation: str,
        work: Callable[[], None],
        callback: Optional[FileCallback],
    ) -> "Future[None]":
        """Run ``work`` off-thread; ``callback(error, self)`` fires exactly once."""

        future = files.submit(work)

        def _done(finished: "Future[None]") -> None:
            error = finished.exception()
            if callback is not None:
                callback(error, self)
            elif error is not None:
                telemetry.record_event(
                    f"file.{operation}.failed",
                    level="error",
                    data={"buffer": self.name, "error": repr(error)},
                )

        future.add_done_callback(_done)
        return future

    # -- helpers ---------------------------------------------------------------------

    def _filled(self, size: int, fill: Fill) -> bytearray:
        if isinstance(fill, int) and not isinstance(fill, bool):
            return bytearray([ensure_byte(fill)]) * size
        if isinstance(fill, str):
            pattern = encode_text(fill, self.encoding)
        elif isinstance(fill, (bytes, bytearray, memoryview)):
            pattern = bytes(fill)
        else:
            raise InvalidInputError(f"Unsupported fill value {fill!r}")
        if not pattern:
            return bytearray(size)
        repeats = -(-size // len(pattern))
        return bytearray((pattern * repeats)[:size])

    def _coerce_source(self, source: Source, encoding: str) -> bytearray:
        if isinstance(source, str):
            return bytearray(encode_text(source, encoding))
        if isinstance(source, CursorBuffer):
            return bytearray(source._state.view())
        if isinstance(source, (bytes, bytearray, memoryview)):
            return bytearray(source)
        try:
            values = list(source)
        except TypeError as exc:
            raise InvalidInputError(f"Unsupported source {source!r}") from exc
        return bytearray(ensure_byte(value, index=i) for i, value in enumerate(values))


class Transaction(AbstractContextManager["Transaction"]):
    """Telemetry span around one region mutation."""

    def __init__(self, buffer: CursorBuffer, label: str, **metadata: Any) -> None:
        self.buffer = buffer
        self.label = label
        self.metadata = metadata
        self._span_cm: Optional[ContextManager[telemetry.BufferSpan]] = None
        self._handle: Optional[telemetry.BufferSpan] = None

    def __enter__(self) -> "Transaction":
        self._span_cm = telemetry.buffer_span(
            self.buffer.name,
            self.label,
            length=self.buffer.length,
            cursor=self.buffer.cursor,
            **self.metadata,
        )
        self._handle = self._span_cm.__enter__()
        return self

    def note(self, key: str, value: Any) -> None:
        if self._handle is not None:
            self._handle.note(key, value)

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc_type is None and self._handle is not None:
            self._handle.finish(self.buffer.length, self.buffer.cursor)
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False


def _ensure_size(size: int) -> int:
    if isinstance(size, bool) or not isinstance(size, int):
        raise InvalidInputError(f"Size must be an int, got {size!r}")
    if size < 0:
        raise InvalidInputError(f"Size must be >= 0, got {size}")
    return size


def _bytes_of(other: "CursorBuffer | BytesLike") -> bytes:
    if isinstance(other, CursorBuffer):
        return other._state.view()
    if isinstance(other, (bytes, bytearray, memoryview)):
        return bytes(other)
    raise InvalidInputError(f"Expected a CursorBuffer or bytes, got {type(other).__name__}")


def _discard(_: object) -> None:
    return None


__all__ = ["BufferSnapshot", "CursorBuffer", "Transaction"]
