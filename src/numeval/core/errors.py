"""
Error types for numeval expression recognition.

Two tiers:
- ExpressionSyntaxError: the input text does not match the grammar.
- GrammarContractError: the grammar handed the parser something it does
  not understand. Never caused by user input alone.
"""

from __future__ import annotations

from dataclasses import dataclass


class NumevalError(Exception):
    """Base exception for all numeval errors."""

    def __init__(self, message: str, context: ErrorContext | None = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.message} at {self.context.format()}"
        return self.message


class ExpressionSyntaxError(NumevalError):
    """
    Raised when expression text cannot be recognized.

    Examples:
    - Unbalanced parentheses
    - Invalid characters
    - Incomplete function-call syntax
    - Trailing input after a complete expression
    """

    @property
    def pos(self) -> int:
        return self.context.offset if self.context else 0


class ExpressionTokenError(ExpressionSyntaxError):
    """Raised when the tokenizer meets a character outside the alphabet."""


class GrammarContractError(NumevalError):
    """
    Raised when the token tree violates what the Pratt builder expects.

    Examples:
    - A rule in primary position that is not number, expr or function
    - An unknown infix or prefix operator rule
    - A number literal whose text is not a valid float
    """


@dataclass
class ErrorContext:
    """
    Source location of an error.

    Attributes:
        source: The full expression text
        offset: Character offset (0-indexed) where the error was detected
    """

    source: str
    offset: int

    @property
    def column(self) -> int:
        """1-indexed column."""
        return self.offset + 1

    def format(self) -> str:
        """
        Format the location with a caret marker.

        Returns:
            Formatted string like:
                column 5
                  1 + (2
                      ^
        """
        return f"column {self.column}\n{self._format_snippet()}"

    def _format_snippet(self) -> str:
        # Expressions are single-line; newlines are just whitespace to us
        line = self.source.replace("\n", " ")
        prefix = "  "
        return f"{prefix}{line}\n{' ' * (len(prefix) + self.offset)}^"


def make_syntax_error(message: str, source: str, offset: int) -> ExpressionSyntaxError:
    """
    Helper to create an ExpressionSyntaxError with context.

    Args:
        message: Error description
        source: Expression text being parsed
        offset: Character offset of the failure

    Returns:
        ExpressionSyntaxError with context attached
    """
    return ExpressionSyntaxError(message, ErrorContext(source=source, offset=offset))
