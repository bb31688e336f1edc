"""Parser for line-editing programs."""

from __future__ import annotations

import difflib
import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from .ast import (
    Back,
    BackWord,
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
from .lexer import Lexer, Token

logger = logging.getLogger(__name__)

_KEYWORDS: dict[str, Command] = {
    "forward": Forward(),
    "back": Back(),
    "forward_word": ForwardWord(),
    "back_word": BackWord(),
    "home": Home(),
    "end": End(),
    "last": Last(),
    "delete": Delete(),
    "rdelete": DeleteBefore(),
    "transpose_char": TransposeCharacter(),
    "upcase_char": UpcaseCharacter(),
    "downcase_char": DowncaseCharacter(),
    "copy_line": CopyLine(),
    "kill_word": KillWord(),
    "rkill_word": ReverseKillWord(),
    "kill_full_word": KillFullWord(),
    "transpose_word": TransposeWord(),
    "upcase_word": UpcaseWord(),
    "downcase_word": DowncaseWord(),
    "sentencecase_word": SentenceCaseWord(),
    "mark": Mark(),
    "upcase": UpcaseRegion(),
    "downcase": DowncaseRegion(),
    "transpose": Transpose(),
    "copy": Copy(),
    "paste": Paste(),
    "cut": Cut(),
    "upcase_clipboard": UpcaseClipboard(),
    "downcase_clipboard": DowncaseClipboard(),
    "sentencecase_clipboard": SentenceCaseClipboard(),
    "ltrim_clipboard": LeftTrimClipboard(),
    "rtrim_clipboard": RightTrimClipboard(),
    "trim_clipboard": TrimClipboard(),
    "kill": Kill(),
    "kill_line": KillLine(),
    "rkill_line": ReverseKillLine(),
    "trim_line": TrimLine(),
    "ltrim_line": LeftTrimLine(),
    "rtrim_line": RightTrimLine(),
    "upcase_line": UpcaseLine(),
    "downcase_line": DowncaseLine(),
    "nextline": NextLine(),
}

_KW_REPEAT = "repeat"
_KW_INSERT = "insert"
_KW_TRUNCATE_BY = "truncate_by"
_KW_FIND = "find"
_KW_RFIND = "rfind"
_KW_GOTO = "goto"
_KW_TRANSLATE = "translate"

KEYWORDS = frozenset(_KEYWORDS) | {
    _KW_REPEAT,
    _KW_INSERT,
    _KW_TRUNCATE_BY,
    _KW_FIND,
    _KW_RFIND,
    _KW_GOTO,
    _KW_TRANSLATE,
}


class ParseError(SyntaxError):
    def __init__(
        self,
        message: str,
        line: int,
        column: int,
        expected: tuple[str, ...] = (),
        found: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.line = line
        self.column = column
        self.expected = expected
        self.found = found

    def __str__(self) -> str:
        expected_text = ""
        if self.expected:
            expected_text = f"; expected {', '.join(self.expected)}"
        found_text = ""
        if self.found is not None:
            found_text = f"; found {self.found}"
        return f"{self.message} at line {self.line}, column {self.column}{expected_text}{found_text}"


@dataclass
class _Parser:
    tokens: Iterator[Token]
    lexer: Lexer | None = None
    commands: list[Command] = field(default_factory=list)

    def parse_program(self) -> Program | None:
        while True:
            tok = self._advance()
            if tok is None:
                break
            self.commands.append(self._parse_command(tok))
        if not self.commands:
            return None
        logger.debug("Parsed %d commands", len(self.commands))
        return Program(commands=tuple(self.commands))

    def _advance(self) -> Token | None:
        return next(self.tokens, None)

    def _error(self, tok: Token | None, *, message: str | None = None, expected: tuple[str, ...] = ()) -> None:
        detail = message if message is not None else "Unexpected token"
        if tok is None:
            line, column = self.lexer.end_position() if self.lexer is not None else (0, 0)
            raise ParseError(detail, line, column, expected=expected, found="EOF")
        found = f"{tok.kind}({tok.text})" if tok.text else tok.kind
        raise ParseError(detail, tok.line, tok.column, expected=expected, found=found)

    def _expect(self, kind: str, *, message: str) -> Token:
        tok = self._advance()
        if tok is None or tok.kind != kind:
            self._error(tok, message=message, expected=(kind,))
        assert tok is not None
        return tok

    def _expect_count(self, keyword: str) -> int:
        tok = self._expect("INT", message=f"Expected an integer after {keyword!r}")
        value = int(tok.text)
        if value < 0:
            self._error(tok, message=f"Expected a non-negative integer after {keyword!r}", expected=("INT",))
        return value

    def _expect_char(self, keyword: str) -> str:
        tok = self._expect("STRING", message=f"Expected a string after {keyword!r}")
        if len(tok.text) != 1:
            self._error(tok, message=f"Expected a single-character string after {keyword!r}", expected=("STRING",))
        return tok.text

    def _parse_command(self, tok: Token) -> Command:
        # Nested repeats are read as a flat prefix, so depth is unbounded.
        counts: list[int] = []
        while tok.kind == "WORD" and tok.text == _KW_REPEAT:
            times = self._expect_count(_KW_REPEAT)
            nested = self._advance()
            if nested is None:
                self._error(None, message=f"Expected a command after {_KW_REPEAT!r} {times}", expected=("WORD",))
            assert nested is not None
            counts.append(times)
            tok = nested

        command = self._parse_simple_command(tok)
        for times in reversed(counts):
            command = Repeat(times=times, command=command)
        return command

    def _parse_simple_command(self, tok: Token) -> Command:
        if tok.kind != "WORD":
            self._error(tok, message="Expected a command", expected=("WORD",))

        command = _KEYWORDS.get(tok.text)
        if command is not None:
            return command

        if tok.text == _KW_INSERT:
            text = self._expect("STRING", message=f"Expected a string after {_KW_INSERT!r}").text
            return Insert(text=text)

        if tok.text == _KW_TRUNCATE_BY:
            return TruncateBy(amount=self._expect_count(_KW_TRUNCATE_BY))

        if tok.text == _KW_GOTO:
            tok = self._expect("INT", message=f"Expected an integer after {_KW_GOTO!r}")
            return Goto(column=int(tok.text))

        if tok.text == _KW_FIND:
            return Find(char=self._expect_char(_KW_FIND))

        if tok.text == _KW_RFIND:
            return RFind(char=self._expect_char(_KW_RFIND))

        if tok.text == _KW_TRANSLATE:
            source = self._expect("STRING", message=f"Expected a string after {_KW_TRANSLATE!r}")
            target = self._expect("STRING", message=f"Expected a second string after {_KW_TRANSLATE!r}")
            if len(source.text) != len(target.text):
                self._error(
                    target,
                    message=f"{_KW_TRANSLATE!r} strings must have equal length",
                    expected=("STRING",),
                )
            return Translate.from_mapping(dict(zip(source.text, target.text)))

        message = f"Unknown command {tok.text!r}"
        suggestion = suggest_keyword(tok.text)
        if suggestion is not None:
            message = f"{message} (did you mean {suggestion!r}?)"
        self._error(tok, message=message, expected=("WORD",))
        raise AssertionError("unreachable")


def suggest_keyword(word: str) -> str | None:
    matches = difflib.get_close_matches(word, KEYWORDS, n=1, cutoff=0.75)
    return matches[0] if matches else None


def parse_tokens(tokens: Iterable[Token]) -> Program | None:
    lexer = tokens if isinstance(tokens, Lexer) else None
    parser = _Parser(tokens=iter(tokens), lexer=lexer)
    return parser.parse_program()


def parse_program(source: Iterable[str]) -> Program | None:
    """Parse program text; ``None`` when it holds no commands."""
    lexer = Lexer(source)
    parser = _Parser(tokens=lexer, lexer=lexer)
    return parser.parse_program()
