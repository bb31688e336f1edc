"""Evaluator for line-editing programs."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from functools import lru_cache
from typing import Final

from . import operations as ops
from .ast import (
    Back,
    BackWord,
    Block,
    Command,
    Copy,
    CopyLine,
    Cut,
    Delete,
    DeleteBefore,
    DowncaseCharacter,
    DowncaseClipboard,
    DowncaseLine,
    DowncaseRegion,
    DowncaseWord,
    End,
    Find,
    Forward,
    ForwardWord,
    Goto,
    Home,
    Insert,
    Kill,
    KillFullWord,
    KillLine,
    KillWord,
    Last,
    LeftTrimClipboard,
    LeftTrimLine,
    Mark,
    NextLine,
    Paste,
    Program,
    Repeat,
    ReverseKillLine,
    ReverseKillWord,
    RFind,
    RightTrimClipboard,
    RightTrimLine,
    SentenceCaseClipboard,
    SentenceCaseWord,
    Translate,
    Transpose,
    TransposeCharacter,
    TransposeWord,
    TrimClipboard,
    TrimLine,
    TruncateBy,
    UpcaseCharacter,
    UpcaseClipboard,
    UpcaseLine,
    UpcaseRegion,
    UpcaseWord,
)
from .errors import LinedParseError, LinedProgramError, LinedUnsupportedError
from .parser import ParseError, parse_program
from .state import LineState

logger = logging.getLogger(__name__)


def _env_int(name: str, default: int, *, minimum: int = 1) -> int:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not an integer, using %d", name, raw, default)
        return default
    return max(minimum, value)


_STOP_ON_DONE: Final[bool] = os.environ.get("LINED_IGNORE_DONE", "0") != "1"
_PROGRAM_CACHE_MAX: Final[int] = _env_int("LINED_PROGRAM_CACHE_MAX", 64)


@lru_cache(maxsize=_PROGRAM_CACHE_MAX)
def _parse_program_cached(source: str) -> Program | None:
    return parse_program(source)


_SIMPLE_COMMANDS: Final[dict[type, Callable[[LineState], None]]] = {
    Back: ops.back,
    Forward: ops.forward,
    ForwardWord: ops.forward_word,
    BackWord: ops.back_word,
    Home: ops.home,
    End: ops.end,
    Last: ops.last,
    Delete: ops.delete,
    DeleteBefore: ops.delete_before,
    TransposeCharacter: ops.transpose_character,
    UpcaseCharacter: ops.upcase_character,
    DowncaseCharacter: ops.downcase_character,
    CopyLine: ops.copy_line,
    KillWord: ops.kill_word,
    ReverseKillWord: ops.reverse_kill_word,
    KillFullWord: ops.kill_full_word,
    TransposeWord: ops.transpose_word,
    UpcaseWord: ops.upcase_word,
    DowncaseWord: ops.downcase_word,
    SentenceCaseWord: ops.sentence_case_word,
    Mark: ops.mark,
    UpcaseRegion: ops.upcase_region,
    DowncaseRegion: ops.downcase_region,
    Transpose: ops.transpose,
    Copy: ops.copy,
    Paste: ops.paste,
    Cut: ops.cut,
    UpcaseClipboard: ops.upcase_clipboard,
    DowncaseClipboard: ops.downcase_clipboard,
    SentenceCaseClipboard: ops.sentencecase_clipboard,
    LeftTrimClipboard: ops.left_trim_clipboard,
    RightTrimClipboard: ops.right_trim_clipboard,
    TrimClipboard: ops.trim_clipboard,
    Kill: ops.kill,
    KillLine: ops.kill_line_after,
    ReverseKillLine: ops.kill_line_before,
    TrimLine: ops.trim_line,
    LeftTrimLine: ops.ltrim_line,
    RightTrimLine: ops.rtrim_line,
    UpcaseLine: ops.upcase_line,
    DowncaseLine: ops.downcase_line,
}


def _run_commands(commands: Iterable[Command], state: LineState, stop_on_done: bool) -> None:
    for command in commands:
        if stop_on_done and state.done:
            return
        eval_command(command, state, stop_on_done=stop_on_done)


def _unwind_repeat(command: Repeat) -> tuple[int, Command]:
    """Collapse directly nested repeats into one count and the innermost body.

    Running the body ``a * b`` times is the same as ``repeat a repeat b``, the
    ``done`` check included.
    """
    times = 1
    body: Command = command
    while isinstance(body, Repeat):
        times *= body.times
        body = body.command
        if times == 0:
            break
    return times, body


def eval_command(command: Command, state: LineState, *, stop_on_done: bool = True) -> None:
    handler = _SIMPLE_COMMANDS.get(type(command))
    if handler is not None:
        handler(state)
        return

    if isinstance(command, Goto):
        ops.goto(state, command.column)
        return

    if isinstance(command, Insert):
        ops.insert(state, command.text)
        return

    if isinstance(command, TruncateBy):
        ops.truncate_by(state, command.amount)
        return

    if isinstance(command, Translate):
        ops.translate(state, command.table)
        return

    if isinstance(command, Find):
        state.done = not ops.find(state, command.char)
        return

    if isinstance(command, RFind):
        state.done = not ops.rfind(state, command.char)
        return

    if isinstance(command, NextLine):
        state.done = True
        return

    if isinstance(command, Repeat):
        times, body = _unwind_repeat(command)
        _run_commands((body for _ in range(times)), state, stop_on_done)
        return

    if isinstance(command, Block):
        _run_commands(command.commands, state, stop_on_done)
        return

    raise LinedUnsupportedError(f"Unsupported command node: {type(command)!r}")


def execute(program: Program, line: str, *, stop_on_done: bool | None = None) -> LineState:
    """Run ``program`` against a fresh state built from ``line`` and return the state."""
    stop = _STOP_ON_DONE if stop_on_done is None else stop_on_done
    state = LineState.from_line(line)
    _run_commands(program.commands, state, stop)
    if state.done and stop:
        logger.debug("Stopped early on line %r", line)
    return state


def run_line(program: Program, line: str, *, stop_on_done: bool | None = None) -> str:
    return execute(program, line, stop_on_done=stop_on_done).text


@dataclass(frozen=True)
class LineProgram:
    """Callable wrapper applying a parsed program to one line at a time.

    The program is shared read-only; every call gets its own LineState.
    """

    program: Program
    stop_on_done: bool = _STOP_ON_DONE

    def __call__(self, line: str) -> str:
        return run_line(self.program, line, stop_on_done=self.stop_on_done)

    def execute(self, line: str) -> LineState:
        return execute(self.program, line, stop_on_done=self.stop_on_done)


def compile_program(source: str, *, stop_on_done: bool | None = None) -> LineProgram:
    """Parse ``source`` once into a reusable LineProgram.

    Raises LinedParseError on malformed text and LinedProgramError when the
    text holds no commands.
    """
    try:
        program = _parse_program_cached(source)
    except ParseError as err:
        raise LinedParseError.from_parse_error(err) from err
    if program is None:
        raise LinedProgramError("program contains no commands")
    stop = _STOP_ON_DONE if stop_on_done is None else stop_on_done
    return LineProgram(program=program, stop_on_done=stop)
