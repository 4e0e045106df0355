"""Core numeval functionality: AST types, errors, configuration, expression parsing."""

from . import ir
from .errors import (
    ErrorContext,
    ExpressionSyntaxError,
    ExpressionTokenError,
    GrammarContractError,
    NumevalError,
)
from .expression_lang import build_expr, parse_expr, parse_token_tree

__all__ = [
    "ir",
    "ErrorContext",
    "ExpressionSyntaxError",
    "ExpressionTokenError",
    "GrammarContractError",
    "NumevalError",
    "build_expr",
    "parse_expr",
    "parse_token_tree",
]
