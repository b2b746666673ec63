"""
Division — Деление с восстановлением остатка

Регистры [A, P]: A — остаток, P — делимое, в которое по одному разряду
вдвигается частное; M — делитель. Число шагов равно разрядности операнда
(знак + целая часть). Поддерживаются только целые операнды.
"""

import logging
from typing import Final

from src.algorithms.registers import (
    DivisionResult,
    RegisterTrace,
    fit,
    prepare_operands,
    render_decimal,
    zero_register,
)
from src.arithmetic.primitives import ShiftMode, add, complement, shift
from src.core.domain.context import ArithmeticContext, fallible
from src.core.domain.errors import ArithmeticFault, ErrorKind
from src.core.domain.number import Number, trim

logger = logging.getLogger(__name__)


# =============================================================================
# КОНСТАНТЫ
# =============================================================================
ALGORITHM_UNSIGNED: Final[str] = "restoring_unsigned"
ALGORITHM_SIGNED: Final[str] = "restoring_signed"


def _set_lowest(register: Number, digit: str) -> Number:
    return register.replace(whole=register.whole[:-1] + digit)


def _restoring(dividend: Number, divisor: Number, signed: bool, ctx: ArithmeticContext) -> DivisionResult:
    if divisor.is_zero:
        raise ArithmeticFault(ErrorKind.DIVISION_BY_ZERO, "Division by zero")

    length = dividend.width
    negative_divisor = complement(divisor, ctx=ctx)

    # Знаковое деление: операция фиксируется по исходным знакам операндов
    add_mode = signed and dividend.sign != divisor.sign
    operation, inverse = (divisor, negative_divisor) if add_mode else (negative_divisor, divisor)
    label = "A = A + M" if add_mode else "A = A - M"

    if signed:
        a = dividend.replace(whole=dividend.sign * len(dividend.whole))
    else:
        a = zero_register(dividend)
    p = dividend

    trace = RegisterTrace(("A", "P"), ctx)
    trace.record((a, p), "init")
    for step in range(1, length + 1):
        a, p = shift((a, p), 1, ShiftMode.LEFT, ctx=ctx)
        a = fit(add(a, operation, ctx=ctx), a)
        if signed:
            pending = p.to_whole()[: length - step]
            accepted = a.sign == dividend.sign or (a.is_zero and not pending.strip("0"))
        else:
            accepted = not a.is_negative
        if accepted:
            p = _set_lowest(p, "1")
            comment = f"shift left, {label}, q=1"
        else:
            a = fit(add(a, inverse, ctx=ctx), a)
            comment = f"shift left, {label}, restore, q=0"
        trace.record((a, p), comment)

    quotient = complement(p, ctx=ctx) if add_mode else p
    quotient = trim(quotient, ctx=ctx)
    remainder = trim(a, ctx=ctx)
    algorithm = ALGORITHM_SIGNED if signed else ALGORITHM_UNSIGNED
    quotient_decimal = render_decimal(quotient, ctx)
    remainder_decimal = render_decimal(remainder, ctx)
    logger.debug(
        "%s: %s / %s = %s remainder %s",
        algorithm,
        dividend.to_signed(),
        divisor.to_signed(),
        quotient_decimal,
        remainder_decimal,
    )
    return DivisionResult(
        algorithm=algorithm,
        dividend=dividend,
        divisor=divisor,
        quotient=quotient,
        remainder=remainder,
        quotient_decimal=quotient_decimal,
        remainder_decimal=remainder_decimal,
        steps=trace.freeze(),
    )


@fallible("divide_unsigned")
def divide_unsigned(dividend: str, divisor: str, *, ctx: ArithmeticContext) -> DivisionResult:
    """
    Деление с восстановлением остатка для неотрицательных целых.

    На каждом шаге: сдвиг [A, P] влево, A = A - M; если A < 0 —
    восстановление A = A + M и разряд частного 0, иначе разряд 1.

    Raises:
        ArithmeticFault: SIGN_REQUIREMENT, INVALID_NUMBER, DIVISION_BY_ZERO

    Examples:
        >>> divide_unsigned("17", "5").quotient_decimal
        '3'
    """
    first, second = prepare_operands(dividend, divisor, ctx, unsigned=True, integer=True)
    return _restoring(first, second, signed=False, ctx=ctx)


@fallible("divide_signed")
def divide_signed(dividend: str, divisor: str, *, ctx: ArithmeticContext) -> DivisionResult:
    """
    Деление с восстановлением остатка для целых со знаком.

    Операция выбирается один раз по знакам операндов: разные знаки —
    сложение, одинаковые — вычитание. A инициализируется знаковым
    расширением делимого. Шаг принимается, если A сохранил знак делимого
    (или A и ещё не сдвинутые разряды делимого нулевые), иначе A
    восстанавливается. Частное меняет знак, если операцией было сложение;
    остаток имеет знак делимого.

    Examples:
        >>> result = divide_signed("-17", "5")
        >>> result.quotient_decimal, result.remainder_decimal
        ('-3', '-2')
    """
    first, second = prepare_operands(dividend, divisor, ctx, integer=True)
    return _restoring(first, second, signed=True, ctx=ctx)
