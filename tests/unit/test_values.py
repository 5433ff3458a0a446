"""Tests for the Int | Error value model."""

from __future__ import annotations

import pytest

from arithtree.core.config import ArithConfig
from arithtree.core.expression_lang.values import Error, Int, binary_op, from_literal
from arithtree.core.ir.expressions import BinaryOp


class TestFromLiteral:
    def test_digits(self) -> None:
        assert from_literal("123") == Int(123)

    def test_leading_zeros(self) -> None:
        assert from_literal("0042") == Int(42)

    @pytest.mark.parametrize("text", ["", "12a", "-3", " 7", "١٢"])
    def test_malformed(self, text: str) -> None:
        assert from_literal(text) == Error(f"illegal literal '{text}'")

    def test_respects_int_bits(self) -> None:
        assert from_literal("32767", ArithConfig(int_bits=16)) == Int(32767)
        assert isinstance(from_literal("32768", ArithConfig(int_bits=16)), Error)


class TestBinaryOp:
    """binary_op never raises; failures come back as Error values."""

    @pytest.mark.parametrize(
        "op,x,y,expected",
        [
            (BinaryOp.ADD, 3, 4, 7),
            (BinaryOp.SUB, 3, 4, -1),
            (BinaryOp.MUL, -3, 4, -12),
            (BinaryOp.DIV, 9, 2, 4),
            (BinaryOp.DIV, -9, 2, -4),
            (BinaryOp.MOD, 9, 4, 1),
            (BinaryOp.MOD, -9, 4, -1),
            (BinaryOp.POW, 3, 4, 81),
            (BinaryOp.POW, -2, 3, -8),
            (BinaryOp.POW, 5, 0, 1),
        ],
    )
    def test_arithmetic(self, op: BinaryOp, x: int, y: int, expected: int) -> None:
        assert binary_op(op, Int(x), Int(y)) == Int(expected)

    def test_plain_string_operator(self) -> None:
        assert binary_op("*", Int(6), Int(7)) == Int(42)

    def test_division_by_zero(self) -> None:
        assert binary_op(BinaryOp.DIV, Int(5), Int(0)) == Error("division by zero: '5 / 0'")

    def test_modulo_by_zero(self) -> None:
        assert binary_op(BinaryOp.MOD, Int(5), Int(0)) == Error("modulo of zero: '5 % 0'")

    def test_negative_exponent(self) -> None:
        assert binary_op(BinaryOp.POW, Int(2), Int(-3)) == Error("negative exponent: '2 ^ -3'")

    def test_illegal_operator(self) -> None:
        assert binary_op("&", Int(1), Int(2)) == Error("illegal op: '1 & 2'")

    def test_overflow(self) -> None:
        config = ArithConfig(int_bits=8)
        assert binary_op(BinaryOp.MUL, Int(16), Int(8), config) == Error("integer overflow: '16 * 8'")
        assert binary_op(BinaryOp.MUL, Int(-16), Int(8), config) == Int(-128)

    def test_power_stops_at_overflow(self) -> None:
        config = ArithConfig(int_bits=8)
        assert binary_op(BinaryOp.POW, Int(2), Int(10**12), config) == Error(
            "integer overflow: '2 ^ 1000000000000'"
        )

    def test_division_of_minimum_overflows(self) -> None:
        config = ArithConfig(int_bits=8)
        assert binary_op(BinaryOp.DIV, Int(-128), Int(-1), config) == Error(
            "integer overflow: '-128 / -1'"
        )


class TestErrorAbsorption:
    """Any operation touching an Error returns that Error."""

    @pytest.mark.parametrize("op", list(BinaryOp))
    def test_left_error(self, op: BinaryOp) -> None:
        err = Error("boom")
        assert binary_op(op, err, Int(1)) is err

    @pytest.mark.parametrize("op", list(BinaryOp))
    def test_right_error(self, op: BinaryOp) -> None:
        err = Error("boom")
        assert binary_op(op, Int(1), err) is err

    def test_left_error_wins(self) -> None:
        first, second = Error("first"), Error("second")
        assert binary_op(BinaryOp.ADD, first, second) is first

    def test_error_survives_illegal_operator(self) -> None:
        err = Error("boom")
        assert binary_op("&", err, Int(1)) is err


class TestValueStr:
    def test_int(self) -> None:
        assert str(Int(-5)) == "-5"

    def test_error(self) -> None:
        assert str(Error("division by zero: '1 / 0'")) == "division by zero: '1 / 0'"

    def test_values_are_frozen(self) -> None:
        from dataclasses import FrozenInstanceError

        with pytest.raises(FrozenInstanceError):
            Int(1).value = 2  # type: ignore[misc]
