"""
Base Converter — Перевод чисел между системами счисления

- to_decimal: основание b → 10 (разложение по степеням основания)
- from_decimal: 10 → основание b (последовательное деление целой части,
  последовательное умножение дробной)
- convert_bases: композиция to_decimal и from_decimal
- вспомогательные переводы цифр в двоичный вид и двоично-десятичный
  код 8421 (BCD)

Дробная часть переводится с фиксированной точностью PRECISION десятичных
знаков и усекается (перевод дробей с потерей точности).
"""

import logging
from typing import Final, List

from src.arithmetic.primitives import complement
from src.core.domain.context import ArithmeticContext, fallible
from src.core.domain.errors import ArithmeticFault, ErrorKind
from src.core.domain.number import (
    COMPLEMENT_CODES,
    DIGITS,
    Number,
    Representation,
    digit_value,
    is_valid_base,
    parse,
    standardize,
    trim,
)

logger = logging.getLogger(__name__)


# =============================================================================
# КОНСТАНТЫ
# =============================================================================
# Число десятичных знаков дробной части при переводе
PRECISION: Final[int] = 8

# Единица фиксированной точности (10^PRECISION)
PRECISION_UNIT: Final[int] = 10**PRECISION

# Ширина тетрады BCD 8421
BCD_GROUP_LENGTH: Final[int] = 4

DECIMAL: Final[int] = 10


# =============================================================================
# ВСПОМОГАТЕЛЬНЫЕ ФУНКЦИИ
# =============================================================================


def _target_sign(number: Number, base: int) -> str:
    """Знак результата в основании base (для OC/TC берётся модуль)."""
    if number.representation == Representation.SIGNED:
        return number.sign
    if number.representation == Representation.SMR:
        return DIGITS[base - 1] if number.is_negative else "0"
    if number.representation in COMPLEMENT_CODES:
        return "0"
    return ""


def _describe_expansion(number: Number, whole_value: int, fraction_value: int) -> str:
    terms: List[str] = []
    for power, ch in zip(range(len(number.whole) - 1, -1, -1), number.whole):
        terms.append(f"{digit_value(ch)}*{number.base}^{power}")
    for power, ch in enumerate(number.fraction, start=1):
        terms.append(f"{digit_value(ch)}*{number.base}^-{power}")
    value = str(whole_value)
    if number.fraction:
        value += "." + str(fraction_value).zfill(PRECISION).rstrip("0")
    return f"{number.to_unsigned()} ({number.base}) = {' + '.join(terms) or '0'} = {value}"


# =============================================================================
# ОСНОВНЫЕ ПРЕОБРАЗОВАНИЯ
# =============================================================================


@fallible("to_decimal")
def to_decimal(number: Number, *, ctx: ArithmeticContext) -> Number:
    """
    Перевод числа в десятичную систему.

    Для отрицательных OC/TC сначала берётся дополнение, переводится модуль,
    затем дополнение строится уже в основании 10. Целая часть вычисляется
    схемой Горнера, дробная суммой digit * (PRECISION_UNIT // base^i) в
    целочисленной арифметике (с усечением).

    Returns:
        Стандартизованное десятичное число того же представления

    Raises:
        ArithmeticFault: SIGN_MISMATCH

    Examples:
        >>> to_decimal(parse("8AF.8", 16, Representation.UNSIGNED)).to_signed()
        '2223.5'
    """
    number = standardize(number, ctx=ctx)
    if number.base == DECIMAL:
        return number

    decomplement = number.representation in COMPLEMENT_CODES and number.is_negative
    if decomplement:
        number = complement(number, ctx=ctx)

    whole_value = int(number.whole or "0", number.base)
    fraction_value = 0
    for position, ch in enumerate(number.fraction, start=1):
        fraction_value += digit_value(ch) * PRECISION_UNIT // number.base**position
    ctx.narrate(_describe_expansion(number, whole_value, fraction_value))

    fraction = str(fraction_value).zfill(PRECISION) if number.fraction else ""
    result = Number(
        sign=_target_sign(number, DECIMAL),
        whole=str(whole_value),
        fraction=fraction,
        base=DECIMAL,
        representation=number.representation,
    )
    if decomplement:
        result = complement(result, ctx=ctx)
    return trim(result, ctx=ctx)


@fallible("from_decimal")
def from_decimal(number: Number, base: int, *, ctx: ArithmeticContext) -> Number:
    """
    Перевод десятичного числа в основание base.

    Целая часть: последовательное деление с остатком (младшая цифра первой).
    Дробная часть: последовательное умножение на base с отделением целой
    части, до обнуления остатка либо PRECISION цифр.

    Args:
        number: Десятичное число
        base: Целевое основание (2..35)

    Returns:
        Стандартизованное число в основании base

    Raises:
        ArithmeticFault: BASE_MISMATCH (число не десятичное), INVALID_BASE
    """
    number = standardize(number, ctx=ctx)
    if number.base != DECIMAL:
        raise ArithmeticFault(ErrorKind.BASE_MISMATCH, f"Number {number} is not decimal")
    if not is_valid_base(base):
        raise ArithmeticFault(ErrorKind.INVALID_BASE, f'Invalid base "{base}"')
    if base == DECIMAL:
        return number

    decomplement = number.representation in COMPLEMENT_CODES and number.is_negative
    if decomplement:
        number = complement(number, ctx=ctx)

    whole_value = int(number.whole or "0")
    whole = ""
    while True:
        quotient, remainder = divmod(whole_value, base)
        ctx.narrate(f"{whole_value} / {base} = {quotient}, remainder {remainder} ({DIGITS[remainder]})")
        whole = DIGITS[remainder] + whole
        whole_value = quotient
        if whole_value == 0:
            break

    fraction = ""
    if number.fraction:
        fraction_value = int(number.fraction[:PRECISION].ljust(PRECISION, "0"))
        while fraction_value > 0 and len(fraction) < PRECISION:
            digit, rest = divmod(fraction_value * base, PRECISION_UNIT)
            ctx.narrate(
                f"0.{fraction_value:0{PRECISION}d} * {base} = {digit}.{rest:0{PRECISION}d} -> {DIGITS[digit]}"
            )
            fraction += DIGITS[digit]
            fraction_value = rest
        if fraction_value:
            logger.debug("Fraction of %s truncated to %d digits in base %d", number, PRECISION, base)

    result = Number(
        sign=_target_sign(number, base),
        whole=whole,
        fraction=fraction,
        base=base,
        representation=number.representation,
    )
    if decomplement:
        result = complement(result, ctx=ctx)
    return trim(result, ctx=ctx)


@fallible("convert_bases")
def convert_bases(number: Number, base: int, *, ctx: ArithmeticContext) -> Number:
    """
    Перевод числа в другое основание через десятичную систему.

    При совпадении оснований возвращается стандартизованная копия.
    """
    if not is_valid_base(base):
        raise ArithmeticFault(ErrorKind.INVALID_BASE, f'Invalid base "{base}"')
    number = standardize(number, ctx=ctx)
    if number.base == base:
        return number
    return from_decimal(to_decimal(number, ctx=ctx), base, ctx=ctx)


# =============================================================================
# ЦЕЛЫЕ ЗНАЧЕНИЯ
# =============================================================================


@fallible("to_decimal_integer")
def to_decimal_integer(number: Number, *, ctx: ArithmeticContext) -> int:
    """
    Целая часть числа как int (со знаком, дробная часть отбрасывается).

    Examples:
        >>> to_decimal_integer(parse("F8AF.4D", 16, Representation.TC))
        -1872
    """
    number = standardize(number, ctx=ctx)
    negative = number.is_negative
    if negative and number.representation in COMPLEMENT_CODES:
        number = complement(number, ctx=ctx)
    value = int(number.whole or "0", number.base)
    return -value if negative else value


@fallible("base_to_decimal_integer")
def base_to_decimal_integer(text: str, base: int, representation: Representation, *, ctx: ArithmeticContext) -> int:
    """Целая часть текстовой записи числа как int."""
    number = parse(text, base, representation, ctx=ctx)
    return to_decimal_integer(number.replace(fraction=""), ctx=ctx)


# =============================================================================
# ДВОИЧНЫЕ ЦИФРЫ И BCD 8421
# =============================================================================


@fallible("digit_to_binary")
def digit_to_binary(text: str, index: int, *, ctx: ArithmeticContext) -> str:
    """Цифра text[index] в двоичной записи (без ведущих нулей)."""
    if not 0 <= index < len(text):
        raise ArithmeticFault(ErrorKind.INVALID_NUMBER, f'Index {index} out of bounds for "{text}"')
    return number_to_binary(digit_value(text[index]), ctx=ctx)


@fallible("number_to_binary")
def number_to_binary(value: int, *, ctx: ArithmeticContext) -> str:
    """Неотрицательное целое в двоичной записи."""
    if value < 0:
        raise ArithmeticFault(ErrorKind.INVALID_NUMBER, f"Cannot convert negative number {value}")
    return format(value, "b")


@fallible("binary_to_number")
def binary_to_number(text: str, *, ctx: ArithmeticContext) -> int:
    """Двоичная запись (пробелы игнорируются) в целое."""
    digits = "".join(text.split())
    if not digits:
        raise ArithmeticFault(ErrorKind.EMPTY_INPUT, "Binary number is empty")
    if any(ch not in "01" for ch in digits):
        raise ArithmeticFault(ErrorKind.INVALID_NUMBER, f'Invalid binary number "{text}"')
    return int(digits, 2)


@fallible("decimal_to_bcd")
def decimal_to_bcd(text: str, *, ctx: ArithmeticContext) -> str:
    """
    Кодирование десятичных цифр в BCD 8421 (по тетраде на цифру).

    Examples:
        >>> decimal_to_bcd("59")
        '01011001'
    """
    digits = "".join(text.split())
    if not digits:
        raise ArithmeticFault(ErrorKind.EMPTY_INPUT, "Decimal number is empty")
    groups: List[str] = []
    for ch in digits:
        value = digit_value(ch)
        if value > 9:
            raise ArithmeticFault(ErrorKind.INVALID_DIGIT, f'Invalid decimal digit "{ch}" in "{text}"')
        groups.append(number_to_binary(value, ctx=ctx).zfill(BCD_GROUP_LENGTH))
    return "".join(groups)


@fallible("bcd_to_decimal")
def bcd_to_decimal(text: str, *, ctx: ArithmeticContext) -> str:
    """
    Декодирование BCD 8421 в десятичные цифры.

    Raises:
        ArithmeticFault: LENGTH_MISMATCH (длина не кратна 4),
            INVALID_NUMBER (не двоичная запись), INVALID_DIGIT (тетрада > 9)
    """
    bits = "".join(text.split())
    if not bits:
        raise ArithmeticFault(ErrorKind.EMPTY_INPUT, "BCD number is empty")
    if len(bits) % BCD_GROUP_LENGTH:
        raise ArithmeticFault(
            ErrorKind.LENGTH_MISMATCH, f"BCD length {len(bits)} is not a multiple of {BCD_GROUP_LENGTH}"
        )
    digits = ""
    for start in range(0, len(bits), BCD_GROUP_LENGTH):
        group = bits[start : start + BCD_GROUP_LENGTH]
        value = binary_to_number(group, ctx=ctx)
        if value > 9:
            raise ArithmeticFault(ErrorKind.INVALID_DIGIT, f'BCD group "{group}" is not a decimal digit')
        digits += DIGITS[value]
    return digits
