"""
Expression evaluator.

Walks an expression tree post-order and folds it into a single
:class:`~arithtree.core.expression_lang.values.Value`. Pure evaluation: no
I/O, no caching, no mutation of the tree. Arithmetic failures come back as
``Error`` values rather than exceptions.
"""

from __future__ import annotations

from arithtree.core.config import ArithConfig
from arithtree.core.errors import ArithError
from arithtree.core.expression_lang.values import Value, binary_op, from_literal
from arithtree.core.ir.expressions import BinaryExpr, Expr, Literal


class ExpressionEvalError(ArithError):
    """Raised only for objects that are not expression nodes."""


def evaluate(expr: Expr, config: ArithConfig | None = None) -> Value:
    """Evaluate an expression tree.

    Args:
        expr: Parsed expression tree.
        config: Overflow range and other policies; defaults apply if omitted.

    Returns:
        ``Int`` on success, ``Error`` describing the first failure otherwise.

    Raises:
        ExpressionEvalError: If ``expr`` (or any node under it) is not a
            tree node (e.g. ``None``).
    """
    config = config or ArithConfig()
    return _interpret(expr, config)


def _interpret(expr: Expr, config: ArithConfig) -> Value:
    """Post-order fold over an explicit stack; chains may be thousands of levels deep."""
    values: list[Value] = []
    pending: list[tuple[Expr, bool]] = [(expr, False)]

    while pending:
        node, children_done = pending.pop()

        if isinstance(node, Literal):
            values.append(from_literal(node.text, config))
        elif isinstance(node, BinaryExpr):
            if children_done:
                right = values.pop()
                left = values.pop()
                values.append(binary_op(node.op, left, right, config))
            else:
                pending.append((node, True))
                pending.append((node.right, False))
                pending.append((node.left, False))
        else:
            raise ExpressionEvalError(f"Unknown expression type: {type(node).__name__}")

    return values.pop()
