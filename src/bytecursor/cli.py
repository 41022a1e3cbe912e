"""Command line entry point: radix conversion and file dumps."""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence

from bytecursor.buffer import SUPPORTED_ENCODINGS, ByteBufferError, CursorBuffer
from bytecursor.numeral import NumeralSystem, convert
from bytecursor.runtime import telemetry

_SYSTEMS = [system.value for system in NumeralSystem]
_DUMP_FORMATS = sorted({"binary-digits", "octal", "decimal", *SUPPORTED_ENCODINGS})


def _cmd_convert(args: argparse.Namespace) -> int:
    print(convert(args.value, args.source, args.target))
    return 0


def _cmd_dump(args: argparse.Namespace) -> int:
    buffer = CursorBuffer(name="cli")
    buffer.open_file(args.path, "r")
    try:
        buffer.from_file_sync()
    finally:
        buffer.close_file()

    fmt = args.format
    if fmt == "binary-digits":
        text = buffer.to_binary()
    elif fmt == "octal":
        text = buffer.to_octal()
    elif fmt == "decimal":
        text = buffer.to_decimal()
    else:
        text = buffer.to_string(fmt)
    print(text)
    return 0


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="bytecursor", description="Byte buffer and numeral-system utilities."
    )
    parser.add_argument(
        "--log-preset",
        choices=["development", "production", "performance"],
        help="telemetry preset (default: environment driven)",
    )
    sub = parser.add_subparsers(dest="cmd", required=True)

    sp = sub.add_parser("convert", help="convert one value between numeral systems")
    sp.add_argument("value")
    sp.add_argument("--from", dest="source", choices=_SYSTEMS, default="decimal")
    sp.add_argument("--to", dest="target", choices=_SYSTEMS, default="hex")
    sp.set_defaults(func=_cmd_convert)

    sp = sub.add_parser("dump", help="print a file's bytes in a chosen rendering")
    sp.add_argument("path")
    sp.add_argument(
        "--as",
        dest="format",
        choices=_DUMP_FORMATS,
        default="hex",
        help="binary-digits/octal/decimal give fixed-width digit groups; "
        "anything else is a text encoding",
    )
    sp.set_defaults(func=_cmd_dump)

    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    if args.log_preset:
        telemetry.configure(preset=args.log_preset)
    try:
        return args.func(args)
    except (ByteBufferError, ValueError, OSError) as exc:
        print(f"bytecursor: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":  # pragma: no cover - manual entry
    raise SystemExit(main())
