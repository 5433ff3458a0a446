"""Expression tree (IR) types."""

from .expressions import BinaryExpr, BinaryOp, Expr, Literal, negate, to_source

__all__ = ["BinaryExpr", "BinaryOp", "Expr", "Literal", "negate", "to_source"]
