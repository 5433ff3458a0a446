"""
Runtime values produced by evaluating an expression tree.

A value is either :class:`Int` or :class:`Error`. Errors are absorbing: any
operation with an ``Error`` operand returns that same error, so a failure
deep in the tree surfaces unchanged at the root. Nothing in this module
raises for bad arithmetic; every failure is an ``Error`` value.

Integer semantics:
- ``/`` truncates toward zero and ``%`` takes the sign of the dividend.
- ``^`` is repeated multiplication; negative exponents are an error.
- Results are checked against a signed range (64-bit unless configured
  otherwise); anything outside it becomes an overflow error.
"""

from __future__ import annotations

from dataclasses import dataclass

from arithtree.core.config import ArithConfig
from arithtree.core.ir.expressions import BinaryOp

_DEFAULT_CONFIG = ArithConfig()


@dataclass(frozen=True)
class Int:
    """A successfully computed integer."""

    value: int

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Error:
    """A failed computation, carrying a diagnostic message."""

    message: str

    def __str__(self) -> str:
        return self.message


Value = Int | Error


def from_literal(text: str, config: ArithConfig | None = None) -> Value:
    """Convert literal text to a value; malformed or out-of-range text is an Error."""
    config = config or _DEFAULT_CONFIG
    if not text.isascii() or not text.isdigit():
        return Error(f"illegal literal '{text}'")
    number = int(text)
    if number > config.int_max:
        return Error(f"illegal literal '{text}'")
    return Int(number)


def binary_op(op: BinaryOp | str, left: Value, right: Value, config: ArithConfig | None = None) -> Value:
    """Apply ``op`` to two values.

    The left error wins if both operands are errors.
    """
    if isinstance(left, Error):
        return left
    if isinstance(right, Error):
        return right

    config = config or _DEFAULT_CONFIG
    x, y = left.value, right.value

    if op == BinaryOp.ADD:
        result = x + y
    elif op == BinaryOp.SUB:
        result = x - y
    elif op == BinaryOp.MUL:
        result = x * y
    elif op == BinaryOp.DIV:
        if y == 0:
            return Error(f"division by zero: '{x} / {y}'")
        result = _trunc_div(x, y)
    elif op == BinaryOp.MOD:
        if y == 0:
            return Error(f"modulo of zero: '{x} % {y}'")
        result = x - y * _trunc_div(x, y)
    elif op == BinaryOp.POW:
        if y < 0:
            return Error(f"negative exponent: '{x} ^ {y}'")
        return _power(x, y, config)
    else:
        return Error(f"illegal op: '{x} {op} {y}'")

    if not config.int_min <= result <= config.int_max:
        return Error(f"integer overflow: '{x} {op} {y}'")
    return Int(result)


def _trunc_div(x: int, y: int) -> int:
    q = abs(x) // abs(y)
    return q if (x < 0) == (y < 0) else -q


def _power(base: int, exponent: int, config: ArithConfig) -> Value:
    """Repeated multiplication, stopping at the first overflow."""
    # 0, 1 and -1 are fixed points of repeated multiplication
    if base in (0, 1):
        return Int(1 if exponent == 0 else base)
    if base == -1:
        return Int(-1 if exponent % 2 else 1)

    answer = 1
    for _ in range(exponent):
        answer *= base
        if not config.int_min <= answer <= config.int_max:
            return Error(f"integer overflow: '{base} ^ {exponent}'")
    return Int(answer)
