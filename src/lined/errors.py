"""Structured error types for program loading and evaluation."""

from __future__ import annotations

from dataclasses import dataclass

from .parser import ParseError


class LinedError(Exception):
    """Base class for structured lined errors."""


@dataclass(frozen=True)
class LinedParseError(LinedError):
    """Wraps parser failures with explicit parse-stage typing."""

    message: str
    line: int
    column: int
    expected: tuple[str, ...] = ()
    found: str | None = None

    @classmethod
    def from_parse_error(cls, err: ParseError) -> "LinedParseError":
        return cls(
            message=err.message,
            line=err.line,
            column=err.column,
            expected=err.expected,
            found=err.found,
        )

    def __str__(self) -> str:
        expected = ""
        if self.expected:
            expected = f"; expected {', '.join(self.expected)}"
        found = ""
        if self.found is not None:
            found = f"; found {self.found}"
        return f"{self.message} at line {self.line}, column {self.column}{expected}{found}"


class LinedProgramError(LinedError):
    """Program text could not be obtained or holds no commands."""


class LinedUnsupportedError(LinedError):
    """Command node the evaluator has no implementation for."""
