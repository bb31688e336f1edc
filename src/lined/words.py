"""Word boundary scans over a line buffer.

A word is a maximal run of characters outside ``WORD_SEPARATORS``.
"""

from __future__ import annotations

from .state import LineState

WORD_SEPARATORS = frozenset(" \t.,;:")


def is_word_separator(ch: str) -> bool:
    return ch in WORD_SEPARATORS


def current_word_start(state: LineState) -> int:
    chars = state.buffer
    pos = state.cursor

    # Off a word: back up to the nearest one.
    while pos > 0 and (pos == len(chars) or is_word_separator(chars[pos])):
        pos -= 1

    while pos > 0 and not is_word_separator(chars[pos - 1]):
        pos -= 1

    return pos


def previous_word_start(state: LineState) -> int:
    chars = state.buffer
    pos = state.cursor

    while 0 < pos < len(chars) and not is_word_separator(chars[pos]):
        pos -= 1

    while pos > 0 and (pos == len(chars) or is_word_separator(chars[pos])):
        pos -= 1

    while pos > 0 and not is_word_separator(chars[pos - 1]):
        pos -= 1

    return pos


def current_word_end(state: LineState) -> int:
    chars = state.buffer
    pos = state.cursor
    end = len(chars)

    while pos < end and is_word_separator(chars[pos]):
        pos += 1

    while pos < end and not is_word_separator(chars[pos]):
        pos += 1

    return pos


def word_spans(state: LineState) -> list[tuple[int, int]]:
    spans: list[tuple[int, int]] = []
    start: int | None = None
    for index, ch in enumerate(state.buffer):
        if is_word_separator(ch):
            if start is not None:
                spans.append((start, index))
                start = None
        elif start is None:
            start = index
    if start is not None:
        spans.append((start, len(state.buffer)))
    return spans


def forward_word_target(state: LineState) -> int:
    """Separator ending the first word at or after the cursor.

    A word running into the end of the buffer ends there; with no word ahead
    the cursor stays put.
    """
    chars = state.buffer
    inside_word = False
    for pos in range(state.cursor, len(chars)):
        if is_word_separator(chars[pos]):
            if inside_word:
                return pos
        else:
            inside_word = True
    return len(chars) if inside_word else state.cursor


def back_word_target(state: LineState) -> int:
    """One past the separator before the first word at or before the cursor."""
    chars = state.buffer
    inside_word = False
    for pos in range(min(state.cursor, len(chars) - 1), -1, -1):
        if is_word_separator(chars[pos]):
            if inside_word:
                return pos + 1
        else:
            inside_word = True
    return 0 if inside_word else state.cursor
