"""
numeval - arithmetic expression recognition.

Parses text such as ``7 + max(2, min(3, 4))`` into an immutable AST
that respects operator precedence and associativity. Evaluation is left
to the caller.
"""

from __future__ import annotations

from ._version import get_version
from .core import ir
from .core.errors import (
    ExpressionSyntaxError,
    ExpressionTokenError,
    GrammarContractError,
    NumevalError,
)
from .core.expression_lang import parse_expr
from .core.ir import BinOp, Expr, Function, Number, Op, UnaryMinus, dump_expr, load_expr

__version__ = get_version()

__all__ = [
    "__version__",
    "ir",
    "parse_expr",
    "dump_expr",
    "load_expr",
    # AST
    "Expr",
    "Number",
    "BinOp",
    "UnaryMinus",
    "Function",
    "Op",
    # Errors
    "NumevalError",
    "ExpressionSyntaxError",
    "ExpressionTokenError",
    "GrammarContractError",
]
