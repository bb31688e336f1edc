"""Per-line editing state."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import NamedTuple


class Region(NamedTuple):
    start: int
    end: int


@dataclass
class LineState:
    """Cursor, character buffer, optional mark and clipboard stack for one line.

    ``cursor`` may equal ``len(buffer)``, the insertion point past the last
    character. Clipboard entries are immutable strings, so they never alias
    the buffer.
    """

    buffer: list[str] = field(default_factory=list)
    cursor: int = 0
    mark: int | None = None
    clipboard: list[str] = field(default_factory=list)
    done: bool = False

    @classmethod
    def from_line(cls, line: str) -> "LineState":
        return cls(buffer=list(line))

    @property
    def text(self) -> str:
        return "".join(self.buffer)

    @property
    def clipboard_text(self) -> str | None:
        if not self.clipboard:
            return None
        return self.clipboard[-1]

    @property
    def end(self) -> int:
        return len(self.buffer)

    def at_character(self) -> bool:
        return self.cursor < len(self.buffer)

    def at_end(self) -> bool:
        return self.cursor == len(self.buffer)

    def region(self) -> Region:
        mark = self.cursor if self.mark is None else min(self.mark, len(self.buffer))
        return Region(min(mark, self.cursor), max(mark, self.cursor))

    def shift_mark_if_greater(self, left: int, delta: int) -> None:
        """Move the mark back by ``delta`` after text at or after ``left`` was removed.

        The mark never moves before ``left``, the deletion point.
        """
        if self.mark is not None and self.mark > left:
            self.mark = max(left, self.mark - delta)

    def clamp(self) -> None:
        end = len(self.buffer)
        self.cursor = min(max(self.cursor, 0), end)
        if self.mark is not None:
            self.mark = min(max(self.mark, 0), end)

    def push_clipboard(self, text: str) -> None:
        self.clipboard.append(text)

    def replace_clipboard_top(self, text: str) -> None:
        self.clipboard[-1] = text
