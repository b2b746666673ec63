"""
Тесты для Representation Converter

Покрывает:
- Преобразования между UNSIGNED, SIGNED, SMR, OC, TC
- OC ⇄ TC через ±1 в младшем разряде
- Обратимость: convert(convert(n, Y), X) == n для стандартизованного n
  (все пары представлений, основания 2, 3, 10, 16)
- Предупреждение при переводе отрицательного числа в UNSIGNED
- convert_to_all
- Ошибки: отсутствующее число, неизвестное представление, неверный знак
"""

import logging

import pytest

from src.converters import RepresentationTable, convert, convert_to_all
from src.core.domain import ArithmeticContext, ErrorKind, Number, Representation, parse


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def ctx():
    """Свежий контекст вызова."""
    return ArithmeticContext()


def signed(text, base=10):
    return parse(text, base, Representation.SIGNED)


SIGNED_REPRESENTATIONS = [
    Representation.SIGNED,
    Representation.SMR,
    Representation.OC,
    Representation.TC,
]

ROUND_TRIP_VALUES = [
    ("-5", 10),
    ("17", 10),
    ("-10.25", 10),
    ("0", 10),
    ("-1F.8", 16),
    ("A3", 16),
    ("-101", 2),
    ("110.01", 2),
    ("-12.1", 3),
    ("21", 3),
]

UNSIGNED_ROUND_TRIP_VALUES = [
    ("17", 10),
    ("10.25", 10),
    ("0", 10),
    ("A3", 16),
    ("110.01", 2),
    ("21", 3),
]


# =============================================================================
# ПРЯМЫЕ ПРЕОБРАЗОВАНИЯ
# =============================================================================


class TestConvert:
    """Тесты convert для конкретных значений."""

    @pytest.mark.parametrize(
        "target, expected",
        [
            (Representation.SMR, "95"),
            (Representation.OC, "94"),
            (Representation.TC, "95"),
        ],
    )
    def test_negative_decimal(self, target, expected):
        """-5 во всех знаковых представлениях."""
        assert convert(signed("-5"), target).to_signed() == expected

    @pytest.mark.parametrize("target", [Representation.SMR, Representation.OC, Representation.TC])
    def test_positive_decimal(self, target):
        """+5 получает знаковую цифру 0."""
        assert convert(signed("5"), target).to_signed() == "05"

    def test_fraction_to_tc(self):
        """Дробное отрицательное число в TC."""
        assert convert(signed("-10.5"), Representation.TC).to_signed() == "989.5"

    def test_fraction_to_oc(self):
        """Дробное отрицательное число в OC."""
        assert convert(signed("-10.5"), Representation.OC).to_signed() == "989.4"

    def test_binary_tc_to_signed(self):
        """Двоичный TC 1011 равен -101."""
        number = parse("1011", 2, Representation.TC)
        assert convert(number, Representation.SIGNED).to_signed() == "-101"

    def test_binary_to_smr(self):
        """Двоичный прямой код."""
        assert convert(signed("-101", 2), Representation.SMR).to_signed() == "1101"

    def test_unsigned_to_tc(self):
        """UNSIGNED получает положительный знак."""
        number = parse("12", 10, Representation.UNSIGNED)
        assert convert(number, Representation.TC).to_signed() == "012"

    def test_oc_to_tc(self):
        """OC → TC: +1 в младшем разряде."""
        number = parse("94", 10, Representation.OC)
        assert convert(number, Representation.TC).to_signed() == "95"

    def test_tc_to_oc(self):
        """TC → OC: -1 в младшем разряде."""
        number = parse("95", 10, Representation.TC)
        assert convert(number, Representation.OC).to_signed() == "94"

    def test_tc_to_oc_with_borrow(self):
        """Заём через всю целую часть расширяет её знаковой цифрой."""
        number = parse("90", 10, Representation.TC)
        assert convert(number, Representation.OC).to_signed() == "989"

    def test_positive_between_complement_codes(self):
        """Положительное число меняет только метку представления."""
        number = parse("0123", 10, Representation.OC)
        result = convert(number, Representation.TC)
        assert result.to_signed() == "0123"
        assert result.representation == Representation.TC

    def test_negative_oc_zero_to_tc(self):
        """Отрицательный ноль OC становится нулём TC."""
        number = parse("99", 10, Representation.OC)
        assert convert(number, Representation.TC).to_signed() == "00"

    def test_non_standardized_input(self):
        """Серия знаковых цифр стандартизуется перед преобразованием."""
        number = parse("99995", 10, Representation.TC)
        assert convert(number, Representation.SIGNED).to_signed() == "-5"

    def test_same_representation_standardizes(self):
        """Совпадающее представление: стандартизованная копия."""
        number = parse("0005", 10, Representation.TC)
        assert convert(number, Representation.TC).to_signed() == "05"

    def test_target_by_value(self):
        """Целевое представление можно передать строкой."""
        assert convert(signed("-5"), "TC").to_signed() == "95"

    def test_input_unchanged(self):
        """Исходное число не изменяется."""
        number = signed("-5")
        convert(number, Representation.TC)
        assert number.to_signed() == "-5"


class TestConvertToUnsigned:
    """Тесты перевода в UNSIGNED."""

    def test_positive(self, ctx):
        """Положительное число переводится без предупреждения."""
        result = convert(signed("7"), Representation.UNSIGNED, ctx=ctx)
        assert result.to_signed() == "7"
        assert not any(f.startswith("Warning!") for f in ctx.trace.fragments)

    def test_negative_warns(self, ctx):
        """Отрицательное число: модуль и предупреждение в трассе."""
        result = convert(signed("-7"), Representation.UNSIGNED, ctx=ctx)
        assert result.to_signed() == "7"
        assert any(f.startswith("Warning!") for f in ctx.trace.fragments)
        assert len(ctx.diagnostics) == 0

    def test_negative_tc_warns(self, ctx):
        """Отрицательный TC переводится в модуль."""
        result = convert(parse("95", 10, Representation.TC), Representation.UNSIGNED, ctx=ctx)
        assert result.to_signed() == "5"
        assert any(f.startswith("Warning!") for f in ctx.trace.fragments)


# =============================================================================
# ОБРАТИМОСТЬ
# =============================================================================


class TestRoundTrip:
    """convert(convert(n, Y), X) == n для стандартизованного n."""

    @pytest.mark.parametrize(
        "text, base",
        [
            ("-5", 10),
            ("17", 10),
            ("-10.25", 10),
            ("0", 10),
            ("-1F", 16),
            ("-101", 2),
            ("110.01", 2),
        ],
    )
    @pytest.mark.parametrize("target", [Representation.SMR, Representation.OC, Representation.TC])
    def test_signed_round_trip(self, text, base, target):
        """SIGNED → target → SIGNED."""
        number = signed(text, base)
        converted = convert(number, target)
        assert convert(converted, Representation.SIGNED) == number

    @pytest.mark.parametrize("text", ["94", "989", "05", "99.4"])
    def test_oc_tc_round_trip(self, text):
        """OC → TC → OC."""
        number = parse(text, 10, Representation.OC)
        converted = convert(number, Representation.TC)
        assert convert(converted, Representation.OC) == number

    @pytest.mark.parametrize("text", ["95", "90", "05", "99.5"])
    def test_tc_oc_round_trip(self, text):
        """TC → OC → TC."""
        number = parse(text, 10, Representation.TC)
        converted = convert(number, Representation.OC)
        assert convert(converted, Representation.TC) == number

    @pytest.mark.parametrize("text, base", ROUND_TRIP_VALUES)
    @pytest.mark.parametrize("target", SIGNED_REPRESENTATIONS)
    @pytest.mark.parametrize("source", SIGNED_REPRESENTATIONS)
    def test_all_pairs_round_trip(self, source, target, text, base):
        """X → Y → X для всех пар знаковых представлений."""
        number = convert(signed(text, base), source)
        converted = convert(number, target)
        assert convert(converted, source) == number

    @pytest.mark.parametrize("text, base", UNSIGNED_ROUND_TRIP_VALUES)
    @pytest.mark.parametrize("target", SIGNED_REPRESENTATIONS)
    def test_unsigned_round_trip(self, target, text, base):
        """UNSIGNED → Y → UNSIGNED для неотрицательных значений."""
        number = convert(signed(text, base), Representation.UNSIGNED)
        converted = convert(number, target)
        assert convert(converted, Representation.UNSIGNED) == number

    def test_conversion_logged(self, caplog):
        """Результат преобразования фиксируется в логе."""
        with caplog.at_level(logging.DEBUG, logger="src.converters.representation"):
            convert(signed("-5"), Representation.TC)
        assert "convert -5 SIGNED -> 95 TC" in caplog.text


# =============================================================================
# ВСЕ ПРЕДСТАВЛЕНИЯ
# =============================================================================


class TestConvertToAll:
    """Тесты convert_to_all."""

    def test_table(self):
        """Одно значение во всех знаковых представлениях."""
        table = convert_to_all(signed("-5"))
        assert isinstance(table, RepresentationTable)
        assert table.signed.to_signed() == "-5"
        assert table.smr.to_signed() == "95"
        assert table.oc.to_signed() == "94"
        assert table.tc.to_signed() == "95"

    def test_invalid_input(self, ctx):
        """Ошибка любого преобразования прерывает построение таблицы."""
        assert convert_to_all(None, ctx=ctx) is None
        assert ctx.diagnostics.last().kind == ErrorKind.INVALID_NUMBER


# =============================================================================
# ОШИБКИ
# =============================================================================


class TestConvertErrors:
    """Тесты ошибок convert."""

    def test_missing_number(self, ctx):
        """Отсутствующее число: INVALID_NUMBER."""
        assert convert(None, Representation.TC, ctx=ctx) is None
        assert ctx.diagnostics.last().kind == ErrorKind.INVALID_NUMBER

    def test_unknown_target(self, ctx):
        """Неизвестное представление: INVALID_TYPE."""
        assert convert(signed("5"), "BCD", ctx=ctx) is None
        assert ctx.diagnostics.last().kind == ErrorKind.INVALID_TYPE

    def test_inconsistent_sign(self, ctx):
        """Неверный знак: SIGN_MISMATCH."""
        number = Number(sign="09", whole="5", base=10, representation=Representation.TC)
        assert convert(number, Representation.SIGNED, ctx=ctx) is None
        assert ctx.diagnostics.last().kind == ErrorKind.SIGN_MISMATCH
