"""
Grammar recognizer for numeval arithmetic expressions.

Turns the tokenizer's flat token list into a tagged token tree. The tree
records structure only; precedence is applied later by the Pratt builder,
so an ``expr`` node holds a flat run of operands and infix operators.

Grammar:
    equation      → expr EOF
    expr          → unary_minus? primary (infix unary_minus? primary)*
    primary       → function | number | "(" expr ")"
    function      → function_name "(" function_args ")"
    function_args → (expr ("," expr)*)?
    infix         → add | subtract | multiply | divide | modulo | power

Limits (both set by max_depth):
    nesting       parentheses and call arguments
    tree height   operators and prefixes stacked on the tallest operand
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum

from numeval.core.environment import resolve_max_depth
from numeval.core.errors import ExpressionSyntaxError, make_syntax_error
from numeval.core.expression_lang.tokenizer import Token, TokenKind, tokenize

logger = logging.getLogger(__name__)


class Rule(StrEnum):
    """Node kinds of the token tree."""

    NUMBER = "number"
    ADD = "add"
    SUBTRACT = "subtract"
    MULTIPLY = "multiply"
    DIVIDE = "divide"
    MODULO = "modulo"
    POWER = "power"
    UNARY_MINUS = "unary_minus"
    EXPR = "expr"
    FUNCTION = "function"
    FUNCTION_NAME = "function_name"
    FUNCTION_ARGS = "function_args"
    EQUATION = "equation"


@dataclass(frozen=True)
class Pair:
    """A token tree node: a rule, the source text it spans, and its children."""

    rule: Rule
    text: str
    start: int
    end: int
    children: tuple[Pair, ...] = ()

    def count(self) -> int:
        """Number of nodes in this subtree, including itself."""
        return 1 + sum(child.count() for child in self.children)

    def __repr__(self) -> str:
        return f"Pair({self.rule}, {self.text!r}, {self.start}..{self.end})"


_INFIX_RULES: dict[TokenKind, Rule] = {
    TokenKind.PLUS: Rule.ADD,
    TokenKind.MINUS: Rule.SUBTRACT,
    TokenKind.STAR: Rule.MULTIPLY,
    TokenKind.SLASH: Rule.DIVIDE,
    TokenKind.PERCENT: Rule.MODULO,
    TokenKind.CARET: Rule.POWER,
}


class _Recognizer:
    """Recursive descent recognizer producing a Pair tree."""

    def __init__(self, source: str, tokens: list[Token], max_depth: int) -> None:
        self.source = source
        self.tokens = tokens
        self.pos = 0
        self.max_depth = max_depth
        self.depth = 0
        self.last_end = 0

    @property
    def current(self) -> Token:
        return self.tokens[self.pos]

    def advance(self) -> Token:
        tok = self.tokens[self.pos]
        if self.pos < len(self.tokens) - 1:
            self.pos += 1
        self.last_end = tok.end
        return tok

    def expect(self, kind: TokenKind, what: str) -> Token:
        tok = self.current
        if tok.kind != kind:
            raise self._error(f"Expected {what}, got {_describe(tok)}", tok)
        return self.advance()

    def _error(self, message: str, tok: Token) -> ExpressionSyntaxError:
        return make_syntax_error(message, self.source, tok.pos)

    def _leaf(self, rule: Rule, tok: Token) -> Pair:
        return Pair(rule, tok.value, tok.pos, tok.end)

    # -- Grammar rules --

    def parse_equation(self) -> Pair:
        """expr EOF"""
        expr = self.parse_expr()
        if self.current.kind != TokenKind.EOF:
            raise self._error(
                f"Unexpected {_describe(self.current)} after expression", self.current
            )
        self._measure(expr)
        return Pair(Rule.EQUATION, self.source, 0, len(self.source), (expr,))

    def _measure(self, pair: Pair) -> int:
        """Upper bound on the height of the AST built from pair.

        Every operator or prefix in an expr can add one level on top of its
        tallest operand, so a flat run like 1+1+...+1 is as tall as it is
        long. Recurses only per nesting level, which parse_expr already
        bounds.
        """
        if pair.rule == Rule.NUMBER:
            return 1
        if pair.rule == Rule.FUNCTION:
            args = pair.children[1].children
            return 1 + max((self._measure(arg) for arg in args), default=0)

        operators = 0
        tallest = 0
        for child in pair.children:
            if child.rule in (Rule.NUMBER, Rule.EXPR, Rule.FUNCTION):
                tallest = max(tallest, self._measure(child))
            else:
                operators += 1

        height = tallest + operators
        if height > self.max_depth:
            raise make_syntax_error(
                f"Expression tree deeper than {self.max_depth} levels",
                self.source,
                pair.start,
            )
        return height

    def parse_expr(self) -> Pair:
        """unary_minus? primary (infix unary_minus? primary)*"""
        start_tok = self.current
        self.depth += 1
        if self.depth > self.max_depth:
            raise self._error(
                f"Expression nested deeper than {self.max_depth} levels", start_tok
            )

        children: list[Pair] = []
        self._parse_operand(children)
        while self.current.kind in _INFIX_RULES:
            tok = self.advance()
            children.append(self._leaf(_INFIX_RULES[tok.kind], tok))
            self._parse_operand(children)

        self.depth -= 1
        start, end = start_tok.pos, self.last_end
        return Pair(Rule.EXPR, self.source[start:end], start, end, tuple(children))

    def _parse_operand(self, children: list[Pair]) -> None:
        if self.current.kind == TokenKind.MINUS:
            children.append(self._leaf(Rule.UNARY_MINUS, self.advance()))
        children.append(self.parse_primary())

    def parse_primary(self) -> Pair:
        """function | number | '(' expr ')'"""
        tok = self.current

        if tok.kind == TokenKind.NUMBER:
            return self._leaf(Rule.NUMBER, self.advance())

        # Grouping leaves only the inner expr behind
        if tok.kind == TokenKind.LPAREN:
            self.advance()
            inner = self.parse_expr()
            self.expect(TokenKind.RPAREN, "')'")
            return inner

        if tok.kind == TokenKind.IDENT:
            return self.parse_function()

        if tok.kind == TokenKind.EOF:
            raise self._error("Unexpected end of expression", tok)
        raise self._error(f"Unexpected {_describe(tok)}", tok)

    def parse_function(self) -> Pair:
        """function_name '(' function_args ')'"""
        name_tok = self.advance()
        if self.current.kind != TokenKind.LPAREN:
            raise self._error(
                f"Expected '(' after function name {name_tok.value!r}, "
                f"got {_describe(self.current)}",
                self.current,
            )
        lparen = self.advance()

        args: list[Pair] = []
        if self.current.kind != TokenKind.RPAREN:
            args.append(self.parse_expr())
            while self.current.kind == TokenKind.COMMA:
                self.advance()
                args.append(self.parse_expr())
        rparen = self.expect(TokenKind.RPAREN, "',' or ')'")

        name = self._leaf(Rule.FUNCTION_NAME, name_tok)
        arg_list = Pair(
            Rule.FUNCTION_ARGS,
            self.source[lparen.end : rparen.pos],
            lparen.end,
            rparen.pos,
            tuple(args),
        )
        return Pair(
            Rule.FUNCTION,
            self.source[name_tok.pos : rparen.end],
            name_tok.pos,
            rparen.end,
            (name, arg_list),
        )


def _describe(tok: Token) -> str:
    if tok.kind == TokenKind.EOF:
        return "end of expression"
    return f"{tok.kind} ({tok.value!r})"


def parse_token_tree(source: str, *, max_depth: int | None = None) -> Pair:
    """Recognize an expression string and return its token tree.

    Args:
        source: Expression string (e.g., "max(2, 3) / 3")
        max_depth: Nesting limit; defaults to NUMEVAL_MAX_DEPTH.

    Returns:
        Pair tree rooted at an ``equation`` holding exactly one ``expr``.

    Raises:
        ExpressionSyntaxError: If the text does not match the grammar.
    """
    limit = resolve_max_depth(max_depth)
    try:
        tokens = tokenize(source)
        tree = _Recognizer(source, tokens, limit).parse_equation()
    except ExpressionSyntaxError as e:
        logger.debug("Rejected expression %r: %s", source, e.message)
        raise

    logger.debug("Recognized %d token tree nodes", tree.count())
    return tree
