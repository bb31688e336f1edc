"""Command family implementations acting on a LineState.

Every operation is total: at an invalid boundary it degrades to a no-op or
clamps, so evaluating a command never raises.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping

from .state import LineState
from .words import (
    back_word_target,
    current_word_end,
    current_word_start,
    forward_word_target,
    previous_word_start,
    word_spans,
)


def _upcase(text: str) -> str:
    return text.upper()


def _downcase(text: str) -> str:
    return text.lower()


def _sentence_case(text: str) -> str:
    if not text:
        return text
    return text[0].upper() + text[1:]


def _transform_span(state: LineState, start: int, end: int, fn: Callable[[str], str]) -> None:
    # Case mappings may change the length, e.g. "ß" -> "SS".
    state.buffer[start:end] = list(fn("".join(state.buffer[start:end])))
    state.clamp()


# Navigation


def back(state: LineState) -> None:
    state.cursor = max(0, state.cursor - 1)


def forward(state: LineState) -> None:
    state.cursor = min(state.cursor + 1, len(state.buffer))


def home(state: LineState) -> None:
    state.cursor = 0


def end(state: LineState) -> None:
    state.cursor = len(state.buffer)


def last(state: LineState) -> None:
    state.cursor = max(0, len(state.buffer) - 1)


def goto(state: LineState, column: int) -> None:
    state.cursor = max(0, min(column, len(state.buffer)))


def forward_word(state: LineState) -> None:
    state.cursor = forward_word_target(state)


def back_word(state: LineState) -> None:
    state.cursor = back_word_target(state)


# Character


def delete(state: LineState) -> None:
    if state.at_character():
        del state.buffer[state.cursor]


def delete_before(state: LineState) -> None:
    if state.cursor > 0:
        del state.buffer[state.cursor - 1]
        state.cursor -= 1


def transpose_character(state: LineState) -> None:
    """Swap the characters before and at the cursor, then move forward.

    At home the cursor first steps forward, at the end it first steps back,
    so the last two characters are swapped there.
    """
    chars = state.buffer
    if len(chars) <= 1:
        return
    if state.cursor == 0:
        forward(state)
    elif state.at_end():
        back(state)
    first = state.cursor - 1
    second = min(state.cursor, len(chars) - 1)
    if first != second:
        chars[first], chars[second] = chars[second], chars[first]
        forward(state)


def upcase_character(state: LineState) -> None:
    if state.at_character():
        _transform_span(state, state.cursor, state.cursor + 1, _upcase)


def downcase_character(state: LineState) -> None:
    if state.at_character():
        _transform_span(state, state.cursor, state.cursor + 1, _downcase)


def translate(state: LineState, table: Mapping[str, str]) -> None:
    state.buffer[:] = [table.get(ch, ch) for ch in state.buffer]


def copy_line(state: LineState) -> None:
    state.push_clipboard(state.text)


def insert(state: LineState, text: str) -> None:
    state.buffer[state.cursor:state.cursor] = list(text)
    state.cursor += len(text)


# Word


def kill_word(state: LineState) -> None:
    start = state.cursor
    stop = current_word_end(state)
    del state.buffer[start:stop]
    state.shift_mark_if_greater(start, stop - start)


def reverse_kill_word(state: LineState) -> None:
    """Kill back to the start of the current word, or of the previous one when
    the cursor already sits on a word start."""
    stop = state.cursor
    start = current_word_start(state)
    if start == stop:
        start = previous_word_start(state)
    del state.buffer[start:stop]
    state.shift_mark_if_greater(start, stop - start)
    state.cursor = start


def kill_full_word(state: LineState) -> None:
    start = current_word_start(state)
    stop = current_word_end(state)
    del state.buffer[start:stop]
    state.shift_mark_if_greater(start, stop - start)
    state.cursor = start


def transpose_word(state: LineState) -> None:
    """Swap the word around (or before) the cursor with the word after it.

    With the cursor past the last word the final two words are swapped. The
    cursor ends after the second of the swapped words.
    """
    spans = word_spans(state)
    if len(spans) < 2:
        return

    index = len(spans) - 2
    for i, (start, stop) in enumerate(spans):
        if start <= state.cursor <= stop:
            index = i
            break
        if state.cursor < start:
            index = max(i - 1, 0)
            break
    index = min(index, len(spans) - 2)

    (first_start, first_end), (second_start, second_end) = spans[index], spans[index + 1]
    chars = state.buffer
    state.buffer[first_start:second_end] = (
        chars[second_start:second_end]
        + chars[first_end:second_start]
        + chars[first_start:first_end]
    )
    state.cursor = second_end


def upcase_word(state: LineState) -> None:
    _transform_span(state, current_word_start(state), current_word_end(state), _upcase)


def downcase_word(state: LineState) -> None:
    _transform_span(state, current_word_start(state), current_word_end(state), _downcase)


def sentence_case_word(state: LineState) -> None:
    old = state.cursor
    state.cursor = current_word_start(state)
    upcase_character(state)
    state.cursor = old


# Region


def mark(state: LineState) -> None:
    state.mark = state.cursor


def upcase_region(state: LineState) -> None:
    start, stop = state.region()
    _transform_span(state, start, stop, _upcase)


def downcase_region(state: LineState) -> None:
    start, stop = state.region()
    _transform_span(state, start, stop, _downcase)


def transpose(state: LineState) -> None:
    """Rotate the prefix up to and including the cursor right by one and
    move it to the end of the buffer. The cursor is left where it was."""
    if not state.buffer:
        return
    stop = min(state.cursor + 1, len(state.buffer))
    moved = state.buffer[:stop]
    del state.buffer[:stop]
    state.buffer.extend(moved[-1:] + moved[:-1])


# Clipboard


def copy(state: LineState) -> None:
    start, stop = state.region()
    state.push_clipboard("".join(state.buffer[start:stop]))


def cut(state: LineState) -> None:
    start, stop = state.region()
    state.push_clipboard("".join(state.buffer[start:stop]))
    del state.buffer[start:stop]
    if state.cursor < stop:
        state.mark = start
    state.cursor = start


def paste(state: LineState) -> None:
    text = state.clipboard_text
    if text is not None:
        insert(state, text)


def _map_clipboard(state: LineState, fn: Callable[[str], str]) -> None:
    if state.clipboard:
        state.replace_clipboard_top(fn(state.clipboard[-1]))


def upcase_clipboard(state: LineState) -> None:
    _map_clipboard(state, _upcase)


def downcase_clipboard(state: LineState) -> None:
    _map_clipboard(state, _downcase)


def sentencecase_clipboard(state: LineState) -> None:
    _map_clipboard(state, _sentence_case)


def left_trim_clipboard(state: LineState) -> None:
    _map_clipboard(state, str.lstrip)


def right_trim_clipboard(state: LineState) -> None:
    _map_clipboard(state, str.rstrip)


def trim_clipboard(state: LineState) -> None:
    _map_clipboard(state, str.strip)


# Kill and whole line


def kill_line_after(state: LineState) -> None:
    start = state.cursor
    delta = len(state.buffer) - start
    del state.buffer[start:]
    state.shift_mark_if_greater(start, delta)


def kill_line_before(state: LineState) -> None:
    stop = state.cursor
    del state.buffer[:stop]
    state.shift_mark_if_greater(0, stop)
    state.cursor = 0


def kill(state: LineState) -> None:
    # Unlike kill_line_after, the mark is left alone.
    del state.buffer[state.cursor:]


def truncate_by(state: LineState, amount: int) -> None:
    amount = max(0, min(amount, len(state.buffer)))
    del state.buffer[len(state.buffer) - amount:]
    state.clamp()


def _replace_line(state: LineState, text: str) -> None:
    state.buffer[:] = list(text)
    state.clamp()


def ltrim_line(state: LineState) -> None:
    _replace_line(state, state.text.lstrip())


def rtrim_line(state: LineState) -> None:
    _replace_line(state, state.text.rstrip())


def trim_line(state: LineState) -> None:
    rtrim_line(state)
    ltrim_line(state)


def upcase_line(state: LineState) -> None:
    _replace_line(state, _upcase(state.text))


def downcase_line(state: LineState) -> None:
    _replace_line(state, _downcase(state.text))


# Search


def find(state: LineState, char: str) -> bool:
    for pos in range(state.cursor, len(state.buffer)):
        if state.buffer[pos] == char:
            state.cursor = pos
            return True
    return False


def rfind(state: LineState, char: str) -> bool:
    for pos in range(min(state.cursor, len(state.buffer)) - 1, -1, -1):
        if state.buffer[pos] == char:
            state.cursor = pos
            return True
    return False
