"""
numeval expression recognition.

Tokenizer, grammar recognizer and Pratt parser for arithmetic
expressions. The stages can be used separately:

    from numeval.core.expression_lang import build_expr, parse_token_tree

    tree = parse_token_tree("1 + 2 * 3")   # tagged token tree
    expr = build_expr(tree)                # (1+(2*3))

or in one step:

    from numeval.core.expression_lang import parse_expr

    expr = parse_expr("1 + 2 * 3")
"""

from numeval.core.expression_lang.grammar import Pair, Rule, parse_token_tree
from numeval.core.expression_lang.parser import build_expr, parse_expr
from numeval.core.expression_lang.tokenizer import Token, TokenKind, tokenize

__all__ = [
    "Pair",
    "Rule",
    "Token",
    "TokenKind",
    "build_expr",
    "parse_expr",
    "parse_token_tree",
    "tokenize",
]
