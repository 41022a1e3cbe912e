"""Structured logging for bytecursor, built on telelog.

Two entry points feed the log:

``buffer_span(buffer, operation, length=..., cursor=...)`` profiles one region
mutation and logs its before/after shape when it finishes or fails.
``record_event(name, data=...)`` logs a single fact, e.g. a file being opened.

Payloads travel with each log call rather than through shared logger context,
so spans running on the file I/O worker threads never see each other's keys.
"""

from __future__ import annotations

import os
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, MutableMapping, Optional, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "BYTECURSOR_"
DEFAULT_LOGGER_NAME = os.getenv(f"{ENV_PREFIX}LOGGER", "bytecursor")
BUFFER_COMPONENT = "buffer"

# Keys map onto ``telelog.Config.with_<key>``.
_PRESETS: Dict[str, Dict[str, Any]] = {
    "development": {
        "min_level": "DEBUG",
        "console_output": True,
        "colored_output": True,
        "json_format": False,
    },
    "production": {
        "min_level": "WARNING",
        "console_output": False,
        "buffering": True,
        "file_output": "bytecursor.log",
    },
    "performance": {
        "min_level": "DEBUG",
        "console_output": False,
        "buffering": True,
        "json_format": True,
        "file_output": "bytecursor-performance.log",
    },
}

_LOGGER_CACHE: MutableMapping[str, Any] = {}
_ACTIVE_CONFIG: Optional[Any] = None


def _env(name: str) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}")


def _env_flag(name: str, default: bool) -> bool:
    raw = _env(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).hex()
    return str(value)


def _env_options() -> Dict[str, Any]:
    options: Dict[str, Any] = {"min_level": (_env("LOG_LEVEL") or "WARNING").upper()}
    console = not _env_flag("DISABLE_CONSOLE", False)
    options["console_output"] = console
    if console:
        options["colored_output"] = not _env_flag("NO_COLOR", False)
    if _env_flag("LOG_JSON", False):
        options["json_format"] = True
    if _env_flag("LOG_BUFFERED", False):
        options["buffering"] = True
        options["buffer_size"] = int(_env("LOG_BUFFER_SIZE") or "2048")
    return options


def build_config(preset: Optional[str] = None) -> Any:
    """Build a ``telelog.Config`` from a named preset, or from the environment.

    ``BYTECURSOR_LOG_FILE`` overrides the preset's log file. Profiling is
    always on since ``buffer_span`` relies on ``logger.profile``.
    """

    if preset is None:
        options = _env_options()
    else:
        try:
            options = dict(_PRESETS[preset.lower()])
        except KeyError:
            raise ValueError(
                f"Unknown preset '{preset}' (expected one of {', '.join(_PRESETS)})"
            ) from None

    log_file = _env("LOG_FILE")
    if log_file:
        options["file_output"] = log_file
    options["profiling"] = True

    config = tl.Config()
    for key, value in options.items():
        getattr(config, f"with_{key}")(value)
    return config


def configure(*, config: Optional[Any] = None, preset: Optional[str] = None) -> None:
    """Adopt ``config`` or a named ``preset``; with neither, re-read the environment."""

    global _ACTIVE_CONFIG
    if config is not None and preset is not None:
        raise ValueError("Provide either `config` or `preset`, not both.")

    _ACTIVE_CONFIG = config if config is not None else build_config(preset)
    _LOGGER_CACHE.clear()


def get_logger(name: Optional[str] = None) -> Any:
    global _ACTIVE_CONFIG
    logger_name = name or DEFAULT_LOGGER_NAME
    if logger_name not in _LOGGER_CACHE:
        if _ACTIVE_CONFIG is None:
            _ACTIVE_CONFIG = build_config()
        _LOGGER_CACHE[logger_name] = tl.Logger.with_config(logger_name, _ACTIVE_CONFIG)
    return _LOGGER_CACHE[logger_name]


def _log(log: Any, level: str, message: str, payload: Dict[str, Any]) -> None:
    name = str(level).lower()
    structured = getattr(log, f"{name}_with", None)
    if structured is not None:
        structured(message, [(str(key), _stringify(value)) for key, value in payload.items()])
        return
    plain = getattr(log, name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    plain(f"{message} {payload}")


def record_event(
    name: str,
    *,
    level: str = "debug",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    """Emit ``event::<name>`` with ``data`` attached as key/value pairs."""

    _log(get_logger(logger_name), level, f"event::{name}", {"event": name, **(data or {})})


@dataclass
class BufferSpan:
    """Handle yielded by ``buffer_span`` for one region mutation."""

    logger: Any
    buffer: str
    operation: str
    length_before: int
    cursor_before: int
    details: Dict[str, str] = field(default_factory=dict)

    @property
    def name(self) -> str:
        return f"{BUFFER_COMPONENT}::{self.operation}"

    def note(self, key: str, value: Any) -> None:
        self.details[key] = _stringify(value)

    def payload(self) -> Dict[str, Any]:
        return {
            "buffer": self.buffer,
            "length_before": self.length_before,
            "cursor_before": self.cursor_before,
            **self.details,
        }

    def finish(self, length: int, cursor: int) -> None:
        self.note("length", length)
        self.note("cursor", cursor)
        _log(self.logger, "debug", f"{self.name}::done", self.payload())

    def fail(self, reason: str) -> None:
        _log(self.logger, "error", f"{self.name}::fail", {**self.payload(), "reason": reason})


@contextmanager
def buffer_span(
    buffer: str,
    operation: str,
    *,
    length: int,
    cursor: int,
    logger_name: Optional[str] = None,
    **details: Any,
) -> Iterator[BufferSpan]:
    """Profile ``operation`` on ``buffer`` under the ``buffer`` component.

    ``length`` and ``cursor`` describe the region before the mutation; extra
    keyword ``details`` are logged alongside them. A failure inside the block
    is logged at error level and re-raised.
    """

    log = get_logger(logger_name)
    handle = BufferSpan(log, buffer, operation, length, cursor)
    for key, value in details.items():
        handle.note(key, value)

    with log.track_component(BUFFER_COMPONENT), log.profile(handle.name):
        try:
            yield handle
        except Exception as exc:
            handle.fail(str(exc))
            raise


__all__ = [
    "BufferSpan",
    "build_config",
    "buffer_span",
    "configure",
    "get_logger",
    "record_event",
]
