"""lined public API."""

__version__ = "0.1.0"

from .ast import Program
from .errors import LinedError, LinedParseError, LinedProgramError, LinedUnsupportedError
from .evaluator import LineProgram, compile_program, eval_command, execute, run_line
from .lexer import Lexer, Token, tokenize
from .parser import ParseError, parse_program, parse_tokens
from .runner import read_program_text, run_stream, transform_lines
from .state import LineState, Region

__all__ = [
    "__version__",
    "tokenize",
    "Lexer",
    "Token",
    "parse_program",
    "parse_tokens",
    "ParseError",
    "Program",
    "LineState",
    "Region",
    "eval_command",
    "execute",
    "run_line",
    "LineProgram",
    "compile_program",
    "read_program_text",
    "transform_lines",
    "run_stream",
    "LinedError",
    "LinedParseError",
    "LinedProgramError",
    "LinedUnsupportedError",
]
