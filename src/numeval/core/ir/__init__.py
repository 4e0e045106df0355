"""
numeval intermediate representation: the expression AST.
"""

from .expressions import (
    BinOp,
    Expr,
    Function,
    Number,
    Op,
    UnaryMinus,
    dump_expr,
    format_number,
    load_expr,
)

__all__ = [
    "BinOp",
    "Expr",
    "Function",
    "Number",
    "Op",
    "UnaryMinus",
    "dump_expr",
    "format_number",
    "load_expr",
]
