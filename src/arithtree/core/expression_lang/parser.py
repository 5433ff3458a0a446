"""
Recursive descent parser for arithmetic expressions.

Grammar (precedence low to high):
    expr    → term (ADD_OP term)*
    term    → power (MULT_OP power)*
    power   → factor (EXP_OP factor)*       # exponent_associativity="left"
            | factor (EXP_OP power)?        # exponent_associativity="right"
    factor  → ADD_OP factor | NUMBER | "(" expr ")"
    input   → expr EOL* EOF

Repetitions fold to the left, so ``10 - 3 - 2`` groups as ``(10 - 3) - 2``.
Unary sign is desugared while parsing: ``+x`` is ``x`` and ``-x`` is
``0 - x``. Operator chains and sign runs are collected in loops; only
parentheses recurse.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from arithtree.core.config import ArithConfig
from arithtree.core.errors import ParseError, locate
from arithtree.core.expression_lang.evaluator import evaluate
from arithtree.core.expression_lang.tokenizer import (
    ExpressionTokenError,
    Token,
    TokenKind,
    TokenStream,
)
from arithtree.core.expression_lang.values import Value
from arithtree.core.ir.expressions import BinaryExpr, BinaryOp, Expr, Literal, negate

logger = logging.getLogger(__name__)


class ExpressionParseError(ParseError):
    """Error during expression parsing."""

    def __init__(self, message: str, pos: int = 0, source: str | None = None) -> None:
        super().__init__(message, locate(source, pos) if source is not None else None)
        self.pos = pos


def _describe(tok: Token) -> str:
    if tok.kind == TokenKind.EOF:
        return "end of input"
    if tok.kind == TokenKind.EOL:
        return "end of line"
    return f"{tok.kind.name} ({tok.lexeme!r})"


class _Parser:
    """Recursive descent parser over a :class:`TokenStream`."""

    def __init__(self, stream: TokenStream) -> None:
        self.stream = stream
        self.source = stream.source
        self.right_assoc_exp = stream.config.exponent_associativity == "right"

    @property
    def current(self) -> Token:
        return self.stream.peek()

    def advance(self) -> Token:
        return self.stream.advance()

    def error(self, message: str, tok: Token) -> ExpressionParseError:
        return ExpressionParseError(message, tok.pos, self.source)

    # -- Grammar rules --

    def parse_input(self) -> Expr:
        """expr EOL* EOF"""
        expr = self.parse_expr()
        while self.current.kind == TokenKind.EOL:
            self.advance()
        tok = self.current
        if tok.kind != TokenKind.EOF:
            raise self.error(f"Unexpected token after expression: {tok.lexeme!r}", tok)
        return expr

    def parse_expr(self) -> Expr:
        """term (ADD_OP term)*"""
        left = self.parse_term()
        while self.current.kind == TokenKind.ADD_OP:
            op = BinaryOp(self.advance().lexeme)
            right = self.parse_term()
            left = BinaryExpr(op=op, left=left, right=right)
        return left

    def parse_term(self) -> Expr:
        """power (MULT_OP power)*"""
        left = self.parse_power()
        while self.current.kind == TokenKind.MULT_OP:
            op = BinaryOp(self.advance().lexeme)
            right = self.parse_power()
            left = BinaryExpr(op=op, left=left, right=right)
        return left

    def parse_power(self) -> Expr:
        """factor (EXP_OP factor)*, or factor (EXP_OP power)? when right-associative"""
        operands = [self.parse_factor()]
        while self.current.kind == TokenKind.EXP_OP:
            self.advance()
            operands.append(self.parse_factor())

        if self.right_assoc_exp:
            right = operands.pop()
            while operands:
                right = BinaryExpr(op=BinaryOp.POW, left=operands.pop(), right=right)
            return right

        left = operands[0]
        for right in operands[1:]:
            left = BinaryExpr(op=BinaryOp.POW, left=left, right=right)
        return left

    def parse_factor(self) -> Expr:
        """ADD_OP factor | NUMBER | '(' expr ')'"""
        # Unary signs: '+' is the identity, each '-' wraps the operand in 0 - x
        negations = 0
        while self.current.kind == TokenKind.ADD_OP:
            if self.advance().lexeme == "-":
                negations += 1

        operand = self.parse_primary()
        for _ in range(negations):
            operand = negate(operand)
        return operand

    def parse_primary(self) -> Expr:
        """NUMBER | '(' expr ')'"""
        tok = self.current

        if tok.kind == TokenKind.NUMBER:
            self.advance()
            return Literal(text=tok.lexeme)

        # Parenthesized expression
        if tok.kind == TokenKind.LPAREN:
            self.advance()
            expr = self.parse_expr()
            closing = self.current
            if closing.kind != TokenKind.RPAREN:
                raise self.error(
                    f"Unmatched '(' at column {tok.pos + 1}: expected ')', got {_describe(closing)}",
                    closing,
                )
            self.advance()
            return expr

        raise self.error(f"Expected a number, sign or '(', got {_describe(tok)}", tok)


def parse_expr(source: str, config: ArithConfig | None = None) -> Expr:
    """Parse an expression string into a tree.

    Args:
        source: Expression string (e.g., "2 + 3 * 4")
        config: Lexing and associativity policies; defaults apply if omitted.

    Returns:
        Root of the parsed expression tree.

    Raises:
        ExpressionParseError: If the expression is invalid, including
            tokenization failures under the strict lexing policy.
    """
    stream = TokenStream(source, config)
    try:
        return _Parser(stream).parse_input()
    except ExpressionTokenError as e:
        raise ExpressionParseError(e.message, e.pos, source) from e
    except RecursionError as e:
        raise ExpressionParseError("Expression is nested too deeply", stream.peek().pos, source) from e


@dataclass(frozen=True)
class ParseResult:
    """Outcome of :func:`parse`: a tree, or the error that prevented one."""

    source: str
    tree: Expr | None = None
    error: ExpressionParseError | None = None
    config: ArithConfig | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Expr:
        """Return the tree, or raise the parse error."""
        if self.error is not None:
            raise self.error
        if self.tree is None:
            raise ExpressionParseError("Parse result holds no tree", 0, self.source)
        return self.tree

    def evaluate(self) -> Value:
        """Evaluate the tree. A failed parse is never evaluated; its error is raised."""
        return evaluate(self.unwrap(), self.config)


def parse(source: str, config: ArithConfig | None = None) -> ParseResult:
    """Parse without raising: malformed input yields a failed :class:`ParseResult`."""
    try:
        tree = parse_expr(source, config)
    except ExpressionParseError as e:
        logger.debug(f"Parse failed for {source!r}: {e.message}")
        return ParseResult(source=source, error=e, config=config)
    return ParseResult(source=source, tree=tree, config=config)
