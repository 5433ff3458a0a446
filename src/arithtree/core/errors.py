"""
Error types for arithtree lexing, parsing and configuration.

Evaluation failures are not exceptions; they travel as
:class:`arithtree.core.expression_lang.values.Error` values.
"""

from dataclasses import dataclass
from typing import Optional


class ArithError(Exception):
    """Base exception for all arithtree errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message


class LexError(ArithError):
    """
    Raised when the input contains a character the tokenizer rejects.

    Only raised under the strict ``unknown_characters="error"`` policy.
    """

    pass


class ParseError(ArithError):
    """
    Raised when an expression cannot be parsed.

    Examples:
    - Unmatched parenthesis
    - Operator where an operand was expected
    - Trailing tokens after a complete expression
    """

    pass


class ConfigError(ArithError):
    """Raised when configuration values (usually from the environment) are invalid."""

    pass


@dataclass
class ErrorContext:
    """
    Source location of an error.

    Attributes:
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        snippet: Optional source line the error occurred on
    """

    line: int
    column: int
    snippet: str | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "<expr>:1:5" followed by the snippet
        """
        location = f"<expr>:{self.line}:{self.column}"
        if self.snippet is not None:
            return f"{location}\n{self._format_snippet()}"
        return location

    def _format_snippet(self) -> str:
        """Format the snippet with an error marker under the column."""
        prefix = f"{self.line:4d} | "
        marker = " " * (len(prefix) + self.column - 1) + "^"
        return f"{prefix}{self.snippet}\n{marker}"


def locate(source: str, pos: int) -> ErrorContext:
    """Build an :class:`ErrorContext` for a 0-based offset into ``source``."""
    pos = max(0, min(pos, len(source)))
    line = source.count("\n", 0, pos) + 1
    line_start = source.rfind("\n", 0, pos) + 1
    line_end = source.find("\n", pos)
    if line_end == -1:
        line_end = len(source)
    return ErrorContext(
        line=line,
        column=pos - line_start + 1,
        snippet=source[line_start:line_end],
    )
