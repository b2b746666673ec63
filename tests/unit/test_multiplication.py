"""
Тесты для регистровых алгоритмов умножения

Покрывает:
- multiply_unsigned: сложение со сдвигом, регистры [C, A, P], дробные операнды
- multiply_booth: алгоритм Бута, регистры [A, P, P0]
- multiply_modified_booth: перекодирование множителя в цифры {-2..2}
- Согласованность трёх алгоритмов на общих операндах
- Трасса шагов и отказ всего алгоритма при ошибке
"""

import logging

import pytest

from src.algorithms import (
    MultiplicationResult,
    booth_radix4_digits,
    multiply_booth,
    multiply_modified_booth,
    multiply_unsigned,
)
from src.core.domain import ArithmeticContext, ErrorKind, Representation


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def ctx():
    """Свежий контекст вызова."""
    return ArithmeticContext()


SIGNED_PAIRS = [
    ("-5", "3", "-15"),
    ("7", "-3", "-21"),
    ("-8", "-8", "64"),
    ("0", "5", "0"),
    ("-6", "-6", "36"),
    ("13", "11", "143"),
    ("-1", "1", "-1"),
]


# =============================================================================
# СЛОЖЕНИЕ СО СДВИГОМ
# =============================================================================


class TestMultiplyUnsigned:
    """Тесты умножения без знака."""

    def test_five_by_three(self):
        """5 * 3 = 15"""
        result = multiply_unsigned("5", "3")
        assert isinstance(result, MultiplicationResult)
        assert result.decimal == "15"
        assert result.product.to_signed() == "1111"
        assert result.product.representation == Representation.UNSIGNED

    def test_register_trace(self):
        """Начальное состояние и n шагов."""
        result = multiply_unsigned("5", "3")
        assert result.register_names == ("C", "A", "P")
        assert len(result.steps) == 5
        assert result.steps[0].registers == ("0", "0000", "0011")
        assert result.steps[0].comment == "init"
        assert result.steps[-1].registers == ("0", "0000", "1111")

    def test_carry_into_c(self):
        """6 * 7 = 42"""
        assert multiply_unsigned("6", "7").decimal == "42"

    def test_fraction(self):
        """2.5 * 1.5 = 3.75"""
        assert multiply_unsigned("2.5", "1.5").decimal == "3.75"

    def test_zero(self):
        """Умножение на ноль."""
        assert multiply_unsigned("0", "9").decimal == "0"

    @pytest.mark.parametrize("first, second", [("0", "0"), ("-0", "7"), ("7", "0")])
    def test_zero_operands_accepted(self, ctx, first, second):
        """Нулевой операнд, в том числе -0, допустим."""
        assert multiply_unsigned(first, second, ctx=ctx).decimal == "0"
        assert len(ctx.diagnostics) == 0

    def test_narrates_steps(self, ctx):
        """Состояния регистров попадают в трассу."""
        multiply_unsigned("5", "3", ctx=ctx)
        assert "0: C=0 A=0000 P=0011 init" in ctx.trace.fragments

    def test_negative_operand(self, ctx):
        """Отрицательный операнд: SIGN_REQUIREMENT."""
        assert multiply_unsigned("-5", "3", ctx=ctx) is None
        record = ctx.diagnostics.last()
        assert record.kind == ErrorKind.SIGN_REQUIREMENT
        assert record.source == "multiply_unsigned"

    def test_invalid_operand(self, ctx):
        """Некорректный операнд прерывает алгоритм."""
        assert multiply_unsigned("5x", "3", ctx=ctx) is None
        assert len(ctx.diagnostics) == 1
        assert ctx.diagnostics.last().kind == ErrorKind.INVALID_DIGIT
        assert ctx.diagnostics.last().source == "parse"


# =============================================================================
# АЛГОРИТМ БУТА
# =============================================================================


class TestMultiplyBooth:
    """Тесты алгоритма Бута."""

    def test_negative_by_positive(self):
        """-5 * 3 = -15"""
        result = multiply_booth("-5", "3")
        assert result.decimal == "-15"
        assert result.product.representation == Representation.TC

    def test_register_trace(self):
        """A‖P после последнего шага содержит произведение."""
        result = multiply_booth("-5", "3")
        assert result.register_names == ("A", "P", "P0")
        assert len(result.steps) == 5
        assert result.steps[-1].registers == ("1111", "0001", "0")

    def test_operands_are_tc(self):
        """Операнды приводятся к TC одинаковой разрядности."""
        result = multiply_booth("-5", "3")
        assert result.multiplicand.to_whole() == "1011"
        assert result.multiplier.to_whole() == "0011"

    def test_invalid_operand(self, ctx):
        """Пустой операнд: EMPTY_INPUT."""
        assert multiply_booth("", "3", ctx=ctx) is None
        assert ctx.diagnostics.last().kind == ErrorKind.EMPTY_INPUT

    def test_result_logged(self, caplog):
        """Произведение фиксируется в логе."""
        with caplog.at_level(logging.DEBUG, logger="src.algorithms.multiplication"):
            multiply_booth("-5", "3")
        assert "booth: -5 * 3 = -15" in caplog.text


# =============================================================================
# МОДИФИЦИРОВАННЫЙ АЛГОРИТМ БУТА
# =============================================================================


class TestModifiedBooth:
    """Тесты модифицированного алгоритма Бута."""

    @pytest.mark.parametrize(
        "bits, digits",
        [
            ("0011", [-1, 1]),
            ("1011", [-1, -1]),
            ("0110", [-2, 2]),
            ("0000", [0, 0]),
        ],
    )
    def test_recoding(self, bits, digits):
        """Перекодирование множителя (младшая цифра первой)."""
        assert booth_radix4_digits(bits) == digits

    def test_negative_by_positive(self):
        """-5 * 3 = -15"""
        result = multiply_modified_booth("-5", "3")
        assert result.decimal == "-15"

    def test_step_count(self):
        """Число шагов равно половине разрядности множителя."""
        result = multiply_modified_booth("-5", "3")
        assert result.register_names == ("S", "M")
        assert len(result.steps) == 3

    def test_odd_width_padded(self):
        """Нечётная разрядность дополняется до чётной."""
        result = multiply_modified_booth("-8", "-8")
        assert result.multiplier.width % 2 == 0
        assert result.decimal == "64"

    def test_narrates_recoding(self, ctx):
        """Перекодированный множитель попадает в трассу."""
        multiply_modified_booth("-5", "3", ctx=ctx)
        assert "Recoded multiplier: +1 -1" in ctx.trace.fragments


# =============================================================================
# СОГЛАСОВАННОСТЬ
# =============================================================================


class TestAlgorithmsAgree:
    """Алгоритм Бута и модифицированный алгоритм дают одно произведение."""

    @pytest.mark.parametrize("first, second, expected", SIGNED_PAIRS)
    def test_booth(self, first, second, expected):
        """Алгоритм Бута."""
        assert multiply_booth(first, second).decimal == expected

    @pytest.mark.parametrize("first, second, expected", SIGNED_PAIRS)
    def test_modified_booth(self, first, second, expected):
        """Модифицированный алгоритм Бута."""
        assert multiply_modified_booth(first, second).decimal == expected

    @pytest.mark.parametrize("first, second", [("5", "3"), ("13", "11"), ("0", "7")])
    def test_unsigned_matches_booth(self, first, second):
        """Для неотрицательных операндов все три алгоритма совпадают."""
        unsigned = multiply_unsigned(first, second).decimal
        assert unsigned == multiply_booth(first, second).decimal
        assert unsigned == multiply_modified_booth(first, second).decimal
