"""
arithtree expression language.

Tokenizer, parser, evaluator and DOT renderer for integer arithmetic
expressions.

Usage:
    from arithtree.core.expression_lang import parse_expr, evaluate

    expr = parse_expr("2 + 3 * 4")
    str(expr)        # "2 + (3 * 4)"
    evaluate(expr)   # Int(value=14)
"""

from arithtree.core.expression_lang.evaluator import evaluate
from arithtree.core.expression_lang.graph import to_dot, write_dot
from arithtree.core.expression_lang.parser import ParseResult, parse, parse_expr
from arithtree.core.expression_lang.tokenizer import TokenStream, tokenize
from arithtree.core.expression_lang.values import Error, Int, Value, binary_op

__all__ = [
    "Error",
    "Int",
    "ParseResult",
    "TokenStream",
    "Value",
    "binary_op",
    "evaluate",
    "parse",
    "parse_expr",
    "to_dot",
    "tokenize",
    "write_dot",
]
