"""
Pratt parser for numeval arithmetic expressions.

Consumes the token tree produced by the grammar recognizer and folds each
``expr`` node's flat run of operands and operators into an Expr AST.

Binding power (low to high):
    add, subtract                  left-associative
    multiply, divide, modulo       left-associative
    power                          right-associative
    unary_minus                    prefix

Anything in the token tree that does not fit this table is a
GrammarContractError, never a syntax error: it means the grammar and the
parser disagree, not that the user typed something wrong.
"""

from __future__ import annotations

import logging
from enum import StrEnum
from typing import NamedTuple

from numeval.core.errors import GrammarContractError
from numeval.core.expression_lang.grammar import Pair, Rule, parse_token_tree
from numeval.core.ir.expressions import BinOp, Expr, Function, Number, Op, UnaryMinus

logger = logging.getLogger(__name__)


class Assoc(StrEnum):
    LEFT = "left"
    RIGHT = "right"


class InfixOp(NamedTuple):
    tier: int
    assoc: Assoc
    op: Op


INFIX_OPS: dict[Rule, InfixOp] = {
    Rule.ADD: InfixOp(1, Assoc.LEFT, Op.ADD),
    Rule.SUBTRACT: InfixOp(1, Assoc.LEFT, Op.SUBTRACT),
    Rule.MULTIPLY: InfixOp(2, Assoc.LEFT, Op.MULTIPLY),
    Rule.DIVIDE: InfixOp(2, Assoc.LEFT, Op.DIVIDE),
    Rule.MODULO: InfixOp(2, Assoc.LEFT, Op.MODULO),
    Rule.POWER: InfixOp(3, Assoc.RIGHT, Op.POWER),
}

# Above every infix tier, so a prefix operand never absorbs an infix operator
PREFIX_OPS: dict[Rule, int] = {
    Rule.UNARY_MINUS: 4,
}


class _PairStream:
    """Cursor over the children of one ``expr`` node."""

    def __init__(self, pairs: tuple[Pair, ...]) -> None:
        self.pairs = pairs
        self.pos = 0

    def peek(self) -> Pair | None:
        if self.pos < len(self.pairs):
            return self.pairs[self.pos]
        return None

    def next(self) -> Pair:
        pair = self.peek()
        if pair is None:
            raise GrammarContractError("Expected atom, found end of expr")
        self.pos += 1
        return pair


def _parse_bp(stream: _PairStream, min_bp: int) -> Expr:
    """Parse operands and fold every infix operator binding at least min_bp."""
    lhs = _parse_prefix(stream)

    while (pair := stream.peek()) is not None:
        infix = INFIX_OPS.get(pair.rule)
        if infix is None:
            raise GrammarContractError(f"Expected infix operation, found {pair.rule}")
        if infix.tier < min_bp:
            break
        stream.next()
        next_bp = infix.tier + 1 if infix.assoc == Assoc.LEFT else infix.tier
        rhs = _parse_bp(stream, next_bp)
        lhs = BinOp(lhs=lhs, op=infix.op, rhs=rhs)

    return lhs


def _parse_prefix(stream: _PairStream) -> Expr:
    pair = stream.next()
    if pair.rule in PREFIX_OPS:
        operand = _parse_bp(stream, PREFIX_OPS[pair.rule])
        if pair.rule == Rule.UNARY_MINUS:
            return UnaryMinus(operand=operand)
        raise GrammarContractError(f"Expected prefix operation, found {pair.rule}")
    return _parse_primary(pair)


def _parse_primary(pair: Pair) -> Expr:
    """number | expr | function"""
    if pair.rule == Rule.NUMBER:
        return _parse_number(pair)
    if pair.rule == Rule.EXPR:
        return _parse_group(pair)
    if pair.rule == Rule.FUNCTION:
        return _parse_function(pair)
    raise GrammarContractError(f"Expected atom, found {pair.rule}")


def _parse_number(pair: Pair) -> Number:
    try:
        value = float(pair.text)
    except ValueError as e:
        raise GrammarContractError(
            f"Number literal {pair.text!r} is not a valid float"
        ) from e
    return Number(value=value)


def _parse_group(pair: Pair) -> Expr:
    if pair.rule != Rule.EXPR:
        raise GrammarContractError(f"Expected expr, found {pair.rule}")
    if not pair.children:
        raise GrammarContractError("Empty expr node")
    return _parse_bp(_PairStream(pair.children), 0)


def _parse_function(pair: Pair) -> Function:
    """function_name function_args"""
    rules = tuple(child.rule for child in pair.children)
    if rules != (Rule.FUNCTION_NAME, Rule.FUNCTION_ARGS):
        raise GrammarContractError(
            f"Malformed function node: expected (function_name, function_args), found {rules}"
        )
    name_pair, args_pair = pair.children
    args = [_parse_group(arg) for arg in args_pair.children]
    return Function(name=name_pair.text, args=args)


def build_expr(tree: Pair) -> Expr:
    """Build an Expr AST from an ``equation`` or ``expr`` token tree.

    Raises:
        GrammarContractError: If the tree does not have the shape the
            grammar recognizer produces.
    """
    if tree.rule == Rule.EQUATION:
        if len(tree.children) != 1:
            raise GrammarContractError(
                f"Equation must hold exactly one expr, found {len(tree.children)}"
            )
        return _parse_group(tree.children[0])
    return _parse_group(tree)


def parse_expr(source: str, *, max_depth: int | None = None) -> Expr:
    """Parse an expression string into an AST.

    Args:
        source: Expression string (e.g., "7 + max(2, min(3, 4))")
        max_depth: Nesting limit; defaults to NUMEVAL_MAX_DEPTH.

    Returns:
        Parsed expression AST.

    Raises:
        ExpressionSyntaxError: If the expression is invalid.
        GrammarContractError: If the grammar and parser disagree.
    """
    logger.debug("Parsing expression (%d chars)", len(source))
    tree = parse_token_tree(source, max_depth=max_depth)
    return build_expr(tree)
