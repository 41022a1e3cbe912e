"""File-system boundary for cursor buffers.

Blocking primitives operate on a bound ``FileHandle``; ``submit`` runs any of
them on a shared thread pool for the non-blocking forms. ``OSError`` from the
host is never translated.
"""

from __future__ import annotations

import os
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import BinaryIO, Callable, Optional, TypeVar

from bytecursor.runtime.settings import get_settings

from .errors import InvalidInputError

T = TypeVar("T")

PathLike = str | os.PathLike[str]

OPEN_MODES = frozenset({"r", "r+", "w", "w+", "a", "a+", "x", "x+"})


@dataclass(slots=True)
class FileHandle:
    """An open binary file bound to one cursor buffer."""

    path: str
    mode: str
    stream: BinaryIO

    @property
    def closed(self) -> bool:
        return self.stream.closed

    def fileno(self) -> int:
        return self.stream.fileno()


def _binary_mode(mode: str) -> str:
    normalized = mode.strip().replace("b", "")
    if normalized not in OPEN_MODES:
        raise InvalidInputError(
            f"Unsupported open mode '{mode}' (expected one of {sorted(OPEN_MODES)})"
        )
    return normalized + "b"


def open_handle(path: PathLike, mode: str) -> FileHandle:
    binary_mode = _binary_mode(mode)
    stream = open(os.fspath(path), binary_mode)
    return FileHandle(path=os.fspath(path), mode=binary_mode, stream=stream)


def close_handle(handle: FileHandle) -> None:
    handle.stream.close()


def read_all(handle: FileHandle) -> bytes:
    """Read the whole file, from offset 0 when the stream can seek."""

    stream = handle.stream
    if stream.seekable():
        stream.seek(0)
    return stream.read()


def write_all(handle: FileHandle, data: bytes) -> int:
    """Replace the file content with ``data``."""

    stream = handle.stream
    if stream.seekable():
        stream.seek(0)
    written = stream.write(data)
    if stream.seekable():
        stream.truncate()
    stream.flush()
    return written


def append_all(handle: FileHandle, data: bytes) -> int:
    stream = handle.stream
    if stream.seekable():
        stream.seek(0, os.SEEK_END)
    written = stream.write(data)
    stream.flush()
    return written


def write_path(path: PathLike, data: bytes) -> int:
    with open(os.fspath(path), "wb") as stream:
        return stream.write(data)


_EXECUTOR: Optional[ThreadPoolExecutor] = None
_EXECUTOR_LOCK = threading.Lock()


def get_executor() -> ThreadPoolExecutor:
    global _EXECUTOR
    with _EXECUTOR_LOCK:
        if _EXECUTOR is None:
            _EXECUTOR = ThreadPoolExecutor(
                max_workers=get_settings().io_workers,
                thread_name_prefix="bytecursor-io",
            )
        return _EXECUTOR


def submit(work: Callable[[], T]) -> "Future[T]":
    return get_executor().submit(work)


def shutdown_executor(*, wait: bool = True) -> None:
    """Drain pending file work; the next ``submit`` starts a fresh pool."""

    global _EXECUTOR
    with _EXECUTOR_LOCK:
        executor, _EXECUTOR = _EXECUTOR, None
    if executor is not None:
        executor.shutdown(wait=wait)


__all__ = [
    "FileHandle",
    "OPEN_MODES",
    "append_all",
    "close_handle",
    "get_executor",
    "open_handle",
    "read_all",
    "shutdown_executor",
    "submit",
    "write_all",
    "write_path",
]
