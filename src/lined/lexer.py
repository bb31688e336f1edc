"""Tokenization for line-editing programs."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass


@dataclass(frozen=True)
class Token:
    kind: str
    text: str
    line: int
    column: int

    @property
    def value(self) -> str | int:
        if self.kind == "INT":
            return int(self.text)
        return self.text


_BRACKET_TOKENS = {
    "(": "LPAREN",
    ")": "RPAREN",
    "{": "LBRACE",
    "}": "RBRACE",
}

_WHITESPACE = {" ", "\t", "\r", "\n"}

_INT_RE = re.compile(r"[+-]?[0-9]+", re.ASCII)
_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1


def _is_int32(text: str) -> bool:
    if not _INT_RE.fullmatch(text):
        return False
    return _INT_MIN <= int(text) <= _INT_MAX


class Lexer:
    """Single forward pass over a character source, producing tokens on demand.

    Positions are 1-based. A token reports the line and column at which it was
    completed: the character that terminated it, or one past the last
    character when the input ends first.
    """

    def __init__(self, chars: Iterable[str]) -> None:
        self._chars = iter(chars)
        self._buf: list[str] = []
        self.line = 1
        self.column = 0
        self._pending_newline = False
        self._pending_string = False

    def __iter__(self) -> Iterator[Token]:
        return self

    def __next__(self) -> Token:
        token = self._next_token()
        if token is None:
            raise StopIteration
        return token

    def end_position(self) -> tuple[int, int]:
        """Position just past the last character consumed so far."""
        return self.line, self.column + 1

    def _read(self) -> str | None:
        if self._pending_newline:
            self.line += 1
            self.column = 0
            self._pending_newline = False
        ch = next(self._chars, None)
        if ch is None:
            self.column += 1
            return None
        self.column += 1
        if ch == "\n":
            self._pending_newline = True
        return ch

    def _unread_end(self) -> None:
        # Keep repeated reads past the end from drifting the column.
        self.column -= 1

    def _word(self) -> Token:
        text = "".join(self._buf)
        self._buf.clear()
        kind = "INT" if _is_int32(text) else "WORD"
        return Token(kind, text, self.line, self.column)

    def _quoted_string(self) -> Token:
        out: list[str] = []
        escape = False
        while True:
            ch = self._read()
            if ch is None:
                break
            if escape:
                out.append(ch)
                escape = False
                continue
            if ch == "\\":
                escape = True
                continue
            if ch == '"':
                return Token("STRING", "".join(out), self.line, self.column)
            out.append(ch)
        # Unterminated strings end silently at end of input.
        token = Token("STRING", "".join(out), self.line, self.column)
        self._unread_end()
        return token

    def _next_token(self) -> Token | None:
        if self._pending_string:
            self._pending_string = False
            return self._quoted_string()
        while True:
            ch = self._read()
            if ch is None:
                token = self._word() if self._buf else None
                self._unread_end()
                return token

            if ch in _BRACKET_TOKENS:
                if not self._buf:
                    return Token(_BRACKET_TOKENS[ch], ch, self.line, self.column)
                token = self._word()
                # The delimiter starts the next word instead of becoming a token.
                self._buf.append(ch)
                return token

            if ch == '"':
                if self._buf:
                    # Finish the buffered word; the string follows on the next call.
                    self._pending_string = True
                    return self._word()
                return self._quoted_string()

            if ch in _WHITESPACE:
                if self._buf:
                    return self._word()
                continue

            self._buf.append(ch)


def tokenize(source: Iterable[str]) -> Lexer:
    return Lexer(source)
