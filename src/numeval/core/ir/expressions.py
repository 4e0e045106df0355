"""
Expression AST for numeval.

Supports:
- Numbers: 3, 3.2
- Arithmetic: +, -, *, /, %, ^
- Negation: -x
- Function calls: max(2, 3), pi()

Nodes are frozen pydantic models. Each node owns its children outright,
so a parsed expression is always a tree. Every node carries a ``kind``
discriminator, which lets an Expr round-trip through JSON.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated
from typing import Literal as TypingLiteral

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

# ---------------------------------------------------------------------------
# Operators
# ---------------------------------------------------------------------------


class Op(StrEnum):
    """Binary operators, valued by their source symbol."""

    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"
    MODULO = "%"
    POWER = "^"


# ---------------------------------------------------------------------------
# AST node types
# ---------------------------------------------------------------------------


def format_number(value: float) -> str:
    """Render a float the short way: 2.0 -> "2", 3.2 -> "3.2"."""
    if value.is_integer():
        return str(int(value))
    return repr(value)


class Number(BaseModel):
    """A numeric literal, already converted to float."""

    kind: TypingLiteral["number"] = "number"
    value: float = Field(description="The parsed value")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return format_number(self.value)


class BinOp(BaseModel):
    """Binary operation: lhs op rhs."""

    kind: TypingLiteral["binop"] = "binop"
    lhs: Expr
    op: Op
    rhs: Expr

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"({self.lhs}{self.op.value}{self.rhs})"


class UnaryMinus(BaseModel):
    """Negation of a single operand."""

    kind: TypingLiteral["unary_minus"] = "unary_minus"
    operand: Expr

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"-({self.operand})"


class Function(BaseModel):
    """
    Function call: name(arg1, arg2, ...).

    The name is not resolved here; ``sin``, ``max`` and ``nosuchthing``
    are all equally valid. Arguments keep their source order and may be
    empty.
    """

    kind: TypingLiteral["function"] = "function"
    name: str = Field(description="Function name")
    args: list[Expr] = Field(default_factory=list, description="Arguments")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        args_str = ", ".join(str(a) for a in self.args)
        return f"{self.name}({args_str})"


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

Expr = Annotated[Number | BinOp | UnaryMinus | Function, Field(discriminator="kind")]

# Rebuild models for recursive forward references
BinOp.model_rebuild()
UnaryMinus.model_rebuild()
Function.model_rebuild()

_expr_adapter: TypeAdapter[Expr] = TypeAdapter(Expr)


def dump_expr(expr: Expr) -> str:
    """Serialize an expression tree to JSON."""
    return _expr_adapter.dump_json(expr).decode()


def load_expr(data: str | bytes) -> Expr:
    """Rebuild an expression tree from dump_expr() output."""
    return _expr_adapter.validate_json(data)
