#!/usr/bin/env python3
"""Notation CLI for converting between bar|beat text and clip note JSON.

Run with ``poetry run python tools/notation_cli.py parse "1|1 C3 E3 G3"`` to
print the parsed notes, or pipe a JSON note list into ``format`` to get the
notation a clip read tool would return.
"""
from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
import sys
from typing import Sequence, TextIO

from pydantic import ValidationError

from domain.persistence import NoteSerializer
from notation import (
    NotationError,
    TimeSignature,
    beats_to_duration,
    beats_to_position,
    duration_to_beats,
    format_notation,
    parse_notation,
    position_to_beats,
)

logger = logging.getLogger(__name__)


def _time_signature(value: str) -> TimeSignature:
    try:
        return TimeSignature.parse(value)
    except NotationError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Convert between bar|beat notation, note JSON, and host beats.",
    )
    parser.add_argument(
        "--time-signature",
        type=_time_signature,
        default=TimeSignature(),
        metavar="N/D",
        help="Time signature used for every conversion (default: 4/4).",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log codec activity at DEBUG level.",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    parse_cmd = commands.add_parser("parse", help="Parse notation into note JSON.")
    parse_cmd.add_argument("notation", help='Notation text such as "1|1 C3 1|2 D3".')

    format_cmd = commands.add_parser("format", help="Format note JSON as notation.")
    format_cmd.add_argument(
        "--notes-file",
        type=Path,
        default=None,
        help="JSON note list to read instead of stdin.",
    )

    position_cmd = commands.add_parser("position", help="Host beats -> bar|beat position.")
    position_cmd.add_argument("beats", type=float)

    duration_cmd = commands.add_parser("duration", help="Host beats -> bar:beat duration.")
    duration_cmd.add_argument("beats", type=float)

    to_beats_cmd = commands.add_parser(
        "to-beats", help='bar|beat position or bar:beat duration -> host beats.'
    )
    to_beats_cmd.add_argument("value")
    return parser.parse_args(argv)


def _run(args: argparse.Namespace, stdin: TextIO, stdout: TextIO) -> None:
    numerator, denominator = args.time_signature.as_tuple()
    if args.command == "parse":
        notes = parse_notation(args.notation, numerator, denominator)
        print(NoteSerializer.dumps(notes), file=stdout)
    elif args.command == "format":
        if args.notes_file is not None:
            text = args.notes_file.expanduser().read_text(encoding="utf-8")
        else:
            text = stdin.read()
        notes = NoteSerializer.loads(text)
        print(format_notation(notes, numerator, denominator), file=stdout)
    elif args.command == "position":
        print(beats_to_position(args.beats, numerator, denominator), file=stdout)
    elif args.command == "duration":
        print(beats_to_duration(args.beats, numerator, denominator), file=stdout)
    elif args.command == "to-beats":
        if "|" in args.value:
            beats = position_to_beats(args.value, numerator, denominator)
        else:
            beats = duration_to_beats(args.value, numerator, denominator)
        print(json.dumps(beats), file=stdout)


def main(
    argv: Sequence[str] | None = None,
    *,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="[%(levelname)s] %(message)s",
    )
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr
    try:
        _run(args, stdin or sys.stdin, stdout)
    except (NotationError, ValidationError, ValueError) as exc:
        logger.debug("%s failed", args.command, exc_info=True)
        print(f"error: {exc}", file=stderr)
        return 2
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
