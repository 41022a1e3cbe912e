"""Environment-driven defaults shared by buffers and file I/O."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

ENV_PREFIX = "BYTECURSOR_"

DEFAULT_ENCODING = "utf-8"
DEFAULT_IO_WORKERS = 4
DEFAULT_FILE_MODE = "r+"


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def _env_int(name: str, fallback: int) -> int:
    value = _env(name)
    if value is None:
        return fallback
    try:
        return int(value)
    except ValueError:
        return fallback


@dataclass(frozen=True, slots=True)
class Settings:
    """Process-wide defaults.

    ``default_encoding`` seeds every new ``CursorBuffer``, ``io_workers`` sizes
    the executor behind the non-blocking file calls and ``file_mode`` is the
    mode ``open_file`` uses when none is given.
    """

    default_encoding: str = DEFAULT_ENCODING
    io_workers: int = DEFAULT_IO_WORKERS
    file_mode: str = DEFAULT_FILE_MODE

    @classmethod
    def from_env(cls) -> "Settings":
        workers = _env_int("IO_WORKERS", DEFAULT_IO_WORKERS)
        encoding = _env("DEFAULT_ENCODING") or DEFAULT_ENCODING
        return cls(
            default_encoding=encoding.strip().lower(),
            io_workers=workers if workers > 0 else DEFAULT_IO_WORKERS,
            file_mode=(_env("FILE_MODE") or DEFAULT_FILE_MODE).strip(),
        )


_SETTINGS: Optional[Settings] = None


def get_settings() -> Settings:
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = Settings.from_env()
    return _SETTINGS


def reload_settings() -> Settings:
    """Re-read the environment, e.g. after a test patched it."""

    global _SETTINGS
    _SETTINGS = Settings.from_env()
    return _SETTINGS


__all__ = ["Settings", "get_settings", "reload_settings"]
