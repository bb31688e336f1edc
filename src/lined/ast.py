"""Command nodes for line-editing programs."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Union


# Navigation


@dataclass(frozen=True)
class Back:
    pass


@dataclass(frozen=True)
class Forward:
    pass


@dataclass(frozen=True)
class ForwardWord:
    pass


@dataclass(frozen=True)
class BackWord:
    pass


@dataclass(frozen=True)
class Home:
    pass


@dataclass(frozen=True)
class End:
    pass


@dataclass(frozen=True)
class Last:
    pass


@dataclass(frozen=True)
class Goto:
    column: int


# Character


@dataclass(frozen=True)
class Delete:
    pass


@dataclass(frozen=True)
class DeleteBefore:
    pass


@dataclass(frozen=True)
class TransposeCharacter:
    pass


@dataclass(frozen=True)
class UpcaseCharacter:
    pass


@dataclass(frozen=True)
class DowncaseCharacter:
    pass


@dataclass(frozen=True)
class Translate:
    pairs: tuple[tuple[str, str], ...]

    @classmethod
    def from_mapping(cls, table: Mapping[str, str]) -> "Translate":
        return cls(pairs=tuple(table.items()))

    @property
    def table(self) -> dict[str, str]:
        return dict(self.pairs)


@dataclass(frozen=True)
class CopyLine:
    pass


@dataclass(frozen=True)
class Insert:
    text: str


# Word


@dataclass(frozen=True)
class KillWord:
    pass


@dataclass(frozen=True)
class ReverseKillWord:
    pass


@dataclass(frozen=True)
class KillFullWord:
    pass


@dataclass(frozen=True)
class TransposeWord:
    pass


@dataclass(frozen=True)
class UpcaseWord:
    pass


@dataclass(frozen=True)
class DowncaseWord:
    pass


@dataclass(frozen=True)
class SentenceCaseWord:
    pass


# Region


@dataclass(frozen=True)
class Mark:
    pass


@dataclass(frozen=True)
class UpcaseRegion:
    pass


@dataclass(frozen=True)
class DowncaseRegion:
    pass


@dataclass(frozen=True)
class Transpose:
    pass


# Clipboard


@dataclass(frozen=True)
class Copy:
    pass


@dataclass(frozen=True)
class Paste:
    pass


@dataclass(frozen=True)
class Cut:
    pass


@dataclass(frozen=True)
class UpcaseClipboard:
    pass


@dataclass(frozen=True)
class DowncaseClipboard:
    pass


@dataclass(frozen=True)
class SentenceCaseClipboard:
    pass


@dataclass(frozen=True)
class LeftTrimClipboard:
    pass


@dataclass(frozen=True)
class RightTrimClipboard:
    pass


@dataclass(frozen=True)
class TrimClipboard:
    pass


# Kill and whole line


@dataclass(frozen=True)
class Kill:
    pass


@dataclass(frozen=True)
class KillLine:
    pass


@dataclass(frozen=True)
class ReverseKillLine:
    pass


@dataclass(frozen=True)
class TruncateBy:
    amount: int


@dataclass(frozen=True)
class TrimLine:
    pass


@dataclass(frozen=True)
class LeftTrimLine:
    pass


@dataclass(frozen=True)
class RightTrimLine:
    pass


@dataclass(frozen=True)
class UpcaseLine:
    pass


@dataclass(frozen=True)
class DowncaseLine:
    pass


# Search and control


@dataclass(frozen=True)
class Find:
    char: str


@dataclass(frozen=True)
class RFind:
    char: str


@dataclass(frozen=True)
class NextLine:
    pass


@dataclass(frozen=True)
class Repeat:
    times: int
    command: "Command"


@dataclass(frozen=True)
class Block:
    commands: tuple["Command", ...]


@dataclass(frozen=True)
class Program:
    commands: tuple["Command", ...]

    def __len__(self) -> int:
        return len(self.commands)

    def __iter__(self) -> Iterator[Command]:
        return iter(self.commands)


Command = Union[
    Back, Forward, ForwardWord, BackWord, Home, End, Last, Goto,
    Delete, DeleteBefore, TransposeCharacter, UpcaseCharacter, DowncaseCharacter, Translate, CopyLine, Insert,
    KillWord, ReverseKillWord, KillFullWord, TransposeWord, UpcaseWord, DowncaseWord, SentenceCaseWord,
    Mark, UpcaseRegion, DowncaseRegion, Transpose,
    Copy, Paste, Cut, UpcaseClipboard, DowncaseClipboard, SentenceCaseClipboard,
    LeftTrimClipboard, RightTrimClipboard, TrimClipboard,
    Kill, KillLine, ReverseKillLine, TruncateBy, TrimLine, LeftTrimLine, RightTrimLine, UpcaseLine, DowncaseLine,
    Find, RFind, NextLine, Repeat, Block,
]
