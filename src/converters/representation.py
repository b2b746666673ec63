"""
Representation Converter — Преобразования между представлениями

Отображения между UNSIGNED, SIGNED, SMR, OC и TC при неизменном основании.

- OC ⇄ TC: ±1 в младшем разряде для отрицательных чисел
- остальные пары: через знак и модуль (отрицательный OC/TC получается
  дополнением модуля)

Результат всегда стандартизован, поэтому convert(convert(n, Y), X) == n
для стандартизованного n.
"""

import logging
from dataclasses import dataclass
from typing import Tuple

from src.arithmetic.primitives import add_to_lowest_point, complement
from src.core.domain.context import ArithmeticContext, fallible
from src.core.domain.errors import ArithmeticFault, ErrorKind
from src.core.domain.number import (
    COMPLEMENT_CODES,
    Number,
    Representation,
    sign_digits,
    standardize,
    trim,
)

logger = logging.getLogger(__name__)


# =============================================================================
# RESULT TYPES
# =============================================================================


@dataclass(frozen=True)
class RepresentationTable:
    """Одно значение во всех знаковых представлениях."""

    signed: Number
    smr: Number
    oc: Number
    tc: Number


# =============================================================================
# ЗНАК И МОДУЛЬ
# =============================================================================


def _split_magnitude(number: Number, ctx: ArithmeticContext) -> Tuple[bool, str, str]:
    """(отрицательно ли, цифры целой части модуля, цифры дробной части модуля)"""
    if number.representation in COMPLEMENT_CODES and number.is_negative:
        positive = complement(number, ctx=ctx)
        return True, positive.whole, positive.fraction
    return number.is_negative, number.whole, number.fraction


def _from_magnitude(
    negative: bool, whole: str, fraction: str, base: int, target: Representation, ctx: ArithmeticContext
) -> Number:
    positive, minus = sign_digits(base, target)
    if target == Representation.UNSIGNED:
        magnitude = Number(whole=whole, fraction=fraction, base=base, representation=target)
        if negative:
            ctx.warn("convert", f"Negative value -{magnitude.to_unsigned()} converted to UNSIGNED as its magnitude")
        return magnitude
    number = Number(sign=positive, whole=whole, fraction=fraction, base=base, representation=target)
    if not negative:
        return number
    if target in COMPLEMENT_CODES:
        return complement(number, ctx=ctx)
    return number.replace(sign=minus)


def _between_complement_codes(number: Number, target: Representation, ctx: ArithmeticContext) -> Number:
    if not number.is_negative:
        return number.replace(representation=target)
    if target == Representation.OC:
        # Расширение на одну знаковую цифру: заём не доходит до знака
        extended = number.replace(whole=number.sign + number.whole)
        return add_to_lowest_point(extended, -1, ctx=ctx).replace(representation=target)
    return add_to_lowest_point(number.replace(representation=target), 1, ctx=ctx)


# =============================================================================
# PUBLIC API
# =============================================================================


@fallible("convert")
def convert(number: Number, target: Representation, *, ctx: ArithmeticContext) -> Number:
    """
    Преобразование числа в другое представление.

    Args:
        number: Исходное число
        target: Целевое представление

    Returns:
        Стандартизованное число в целевом представлении

    Raises:
        ArithmeticFault: INVALID_NUMBER, INVALID_TYPE, SIGN_MISMATCH

    Examples:
        >>> convert(parse("-10.5", 10, Representation.SIGNED), Representation.TC).to_signed()
        '989.5'
    """
    if number is None:
        raise ArithmeticFault(ErrorKind.INVALID_NUMBER, "Number is missing")
    try:
        target = Representation(target)
    except ValueError:
        raise ArithmeticFault(ErrorKind.INVALID_TYPE, f'Invalid representation "{target}"')

    number = standardize(number, ctx=ctx)
    source = number.representation
    ctx.narrate(f"{number.to_signed()} {source.value} -> {target.value}")

    if source == target:
        return number
    if source in COMPLEMENT_CODES and target in COMPLEMENT_CODES:
        result = _between_complement_codes(number, target, ctx)
    else:
        negative, whole, fraction = _split_magnitude(number, ctx)
        result = _from_magnitude(negative, whole, fraction, number.base, target, ctx)

    result = trim(result, ctx=ctx)
    ctx.narrate(f"= {result.to_signed()}")
    logger.debug("convert %s %s -> %s %s", number.to_signed(), source.value, result.to_signed(), target.value)
    return result


@fallible("convert_to_all")
def convert_to_all(number: Number, *, ctx: ArithmeticContext) -> RepresentationTable:
    """Значение во всех знаковых представлениях (SIGNED, SMR, OC, TC)."""
    return RepresentationTable(
        signed=convert(number, Representation.SIGNED, ctx=ctx),
        smr=convert(number, Representation.SMR, ctx=ctx),
        oc=convert(number, Representation.OC, ctx=ctx),
        tc=convert(number, Representation.TC, ctx=ctx),
    )
