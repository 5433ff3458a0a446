"""
Expression tree types.

A parsed expression is a binary tree of frozen pydantic models:

- :class:`Literal` leaves hold the exact digit run from the source; numeric
  conversion happens at evaluation time.
- :class:`BinaryExpr` nodes always have two children. Unary sign never
  appears in the tree: ``-x`` is stored as ``0 - x`` and ``+x`` as ``x``.

``str(expr)`` gives the canonical reconstruction: every non-literal child is
parenthesized and operators are printed infix with single spaces.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Operators
# ---------------------------------------------------------------------------


class BinaryOp(StrEnum):
    """Binary operators for expressions."""

    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    MOD = "%"
    POW = "^"


# ---------------------------------------------------------------------------
# AST node types
# ---------------------------------------------------------------------------


class Literal(BaseModel):
    """An integer literal, kept as its source text."""

    text: str = Field(description="The matched digit run")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return self.text

    @property
    def label(self) -> str:
        return self.text

    @property
    def children(self) -> tuple[()]:
        return ()


class BinaryExpr(BaseModel):
    """Binary operation: left op right."""

    op: BinaryOp
    left: Expr
    right: Expr

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        # Explicit stack of pieces to emit; popped left to right
        parts: list[str] = []
        pending: list[Expr | str] = []
        _push_binary(pending, self)
        while pending:
            item = pending.pop()
            if isinstance(item, str):
                parts.append(item)
            elif isinstance(item, Literal):
                parts.append(item.text)
            else:
                _push_binary(pending, item)
        return "".join(parts)

    @property
    def label(self) -> str:
        return self.op.value

    @property
    def children(self) -> tuple[Expr, Expr]:
        return (self.left, self.right)


def _push_binary(pending: list[Expr | str], expr: BinaryExpr) -> None:
    _push_operand(pending, expr.right)
    pending.append(f" {expr.op.value} ")
    _push_operand(pending, expr.left)


def _push_operand(pending: list[Expr | str], expr: Expr) -> None:
    if isinstance(expr, Literal):
        pending.append(expr)
    else:
        pending.extend((")", expr, "("))


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

Expr = Literal | BinaryExpr

# Rebuild models for recursive forward references
BinaryExpr.model_rebuild()


def to_source(expr: Expr) -> str:
    """Canonical textual reconstruction of ``expr``."""
    return str(expr)


def negate(operand: Expr) -> BinaryExpr:
    """Desugar unary minus into ``0 - operand``."""
    return BinaryExpr(op=BinaryOp.SUB, left=Literal(text="0"), right=operand)
