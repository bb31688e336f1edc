"""Command-line entry point: apply a line-editing program to every input line."""

from __future__ import annotations

import argparse
import contextlib
import logging
import os
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import TextIO

from . import __version__
from .errors import LinedError
from .evaluator import compile_program
from .runner import read_program_text, run_stream

logger = logging.getLogger(__name__)

_DEFAULT_LOG_LEVEL = os.environ.get("LINED_LOG_LEVEL", "WARNING").upper()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lined",
        description="A simple non-interactive line editor.",
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "-p",
        "--programtext",
        metavar="TEXT",
        help="the line editing program to run",
    )
    source.add_argument(
        "-f",
        "--programfile",
        metavar="FILE",
        help="a file containing the line editing program to run",
    )
    parser.add_argument(
        "infile",
        nargs="?",
        help="input file (default STDIN)",
    )
    parser.add_argument(
        "outfile",
        nargs="?",
        help="output file (default STDOUT)",
    )
    parser.add_argument(
        "--ignore-done",
        action="store_true",
        help="keep running commands after find/rfind fail or nextline runs",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="log debug output to STDERR",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def resolve_log_level(name: str) -> int | None:
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else None


def _same_file(first: str, second: str) -> bool:
    return Path(first).resolve() == Path(second).resolve()


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    level = resolve_log_level(_DEFAULT_LOG_LEVEL)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else (level if level is not None else logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    if level is None:
        logger.warning("Ignoring LINED_LOG_LEVEL=%r: unknown level, using WARNING", _DEFAULT_LOG_LEVEL)

    if args.infile is not None and args.outfile is not None and _same_file(args.infile, args.outfile):
        print("error: infile and outfile must be different files", file=sys.stderr)
        return 1

    # Nothing is opened for writing until the program has compiled.
    try:
        source = read_program_text(text=args.programtext, path=args.programfile)
        program = compile_program(source, stop_on_done=False if args.ignore_done else None)
    except LinedError as err:
        print(f"error: {err}", file=sys.stderr)
        return 1
    logger.debug("Stopping on done: %s", program.stop_on_done)

    with contextlib.ExitStack() as stack:
        try:
            infile = _open_stream(stack, args.infile, "r", sys.stdin)
            outfile = _open_stream(stack, args.outfile, "w", sys.stdout)
        except OSError as err:
            print(f"error: {err}", file=sys.stderr)
            return 1
        run_stream(program, infile, outfile)
        outfile.flush()
    return 0


def _open_stream(stack: contextlib.ExitStack, path: str | None, mode: str, default: TextIO) -> TextIO:
    if path is None:
        return default
    return stack.enter_context(open(path, mode, encoding="utf-8"))


if __name__ == "__main__":
    raise SystemExit(main())
