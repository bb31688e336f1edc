"""Program loading and line streaming around the evaluator."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import TextIO

from .errors import LinedProgramError
from .evaluator import LineProgram

logger = logging.getLogger(__name__)


def read_program_text(*, text: str | None = None, path: str | Path | None = None) -> str:
    """Return the program source from a literal or by reading ``path`` in full."""
    if (text is None) == (path is None):
        raise ValueError("read_program_text() takes exactly one of text= or path=")
    if text is not None:
        logger.info("Using program text from the command line")
        return text
    try:
        source = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise LinedProgramError(f"cannot read program file {str(path)!r}: {exc}") from exc
    logger.info("Read program from %s", path)
    return source


def _strip_line_ending(line: str) -> str:
    if line.endswith("\n"):
        line = line[:-1]
    if line.endswith("\r"):
        line = line[:-1]
    return line


def transform_lines(program: LineProgram, lines: Iterable[str]) -> Iterator[str]:
    for line in lines:
        yield program(_strip_line_ending(line))


def run_stream(program: LineProgram, infile: TextIO, outfile: TextIO) -> int:
    count = 0
    for out in transform_lines(program, infile):
        outfile.write(out + "\n")
        count += 1
    logger.info("Processed %d lines", count)
    return count
