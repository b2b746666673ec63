"""
Multiplication — Регистровые алгоритмы умножения

Операнды задаются десятичными строками и переводятся в двоичный
дополнительный код одинаковой разрядности n (знак + целая + дробная часть).

- multiply_unsigned: сложение со сдвигом, регистры [C, A, P]
- multiply_booth: алгоритм Бута, регистры [A, P, P0]
- multiply_modified_booth: модифицированный алгоритм Бута (основание 4),
  сумма частичных произведений S и сдвигаемое множимое M

Каждый алгоритм выполняет фиксированное число шагов и возвращает
MultiplicationResult с трассой состояний регистров. Ошибка на любом шаге
прерывает алгоритм целиком.
"""

import logging
from typing import Final, List

from src.algorithms.registers import (
    BINARY,
    MultiplicationResult,
    RegisterTrace,
    fit,
    prepare_operands,
    render_decimal,
    split_product,
    zero_register,
)
from src.arithmetic.primitives import ShiftMode, add, complement, shift
from src.core.domain.context import ArithmeticContext, fallible
from src.core.domain.number import Number, Representation, trim, whole_to_length

logger = logging.getLogger(__name__)


# =============================================================================
# КОНСТАНТЫ
# =============================================================================
ALGORITHM_UNSIGNED: Final[str] = "unsigned"
ALGORITHM_BOOTH: Final[str] = "booth"
ALGORITHM_MODIFIED_BOOTH: Final[str] = "modified_booth"


def _unsigned_register(digits: str) -> Number:
    return Number(whole=digits, base=BINARY, representation=Representation.UNSIGNED)


# =============================================================================
# СЛОЖЕНИЕ СО СДВИГОМ
# =============================================================================


@fallible("multiply_unsigned")
def multiply_unsigned(first: str, second: str, *, ctx: ArithmeticContext) -> MultiplicationResult:
    """
    Умножение неотрицательных чисел сложением со сдвигом.

    Регистры: C (перенос, 1 разряд), A (накопитель), P (множитель, затем
    младшая половина произведения); M — множимое. На каждом из n шагов:
    если младший разряд P равен 1, A = A + M (перенос уходит в C), затем
    логический сдвиг [C, A, P] вправо. Произведение A‖P имеет 2f дробных
    разрядов (f — дробных разрядов операнда).

    Args:
        first: Множимое (десятичная строка)
        second: Множитель (десятичная строка)

    Raises:
        ArithmeticFault: SIGN_REQUIREMENT для отрицательного операнда

    Examples:
        >>> multiply_unsigned("5", "3").decimal
        '15'
    """
    multiplicand, multiplier = prepare_operands(first, second, ctx, unsigned=True)
    width = multiplier.width
    fraction_length = len(multiplier.fraction)

    m = _unsigned_register(multiplicand.to_whole())
    carry_line = _unsigned_register("0" * (width + 1))
    c = _unsigned_register("0")
    a = _unsigned_register("0" * width)
    p = _unsigned_register(multiplier.to_whole())

    trace = RegisterTrace(("C", "A", "P"), ctx)
    trace.record((c, a, p), "init")
    for _ in range(width):
        comment = ""
        if p.whole[-1] == "1":
            total = fit(add(a, m, ctx=ctx), carry_line)
            c = c.replace(whole=total.whole[0])
            a = a.replace(whole=total.whole[1:])
            comment = "A = A + M, "
        c, a, p = shift((c, a, p), 1, ShiftMode.RIGHT_LOGICAL, ctx=ctx)
        trace.record((c, a, p), comment + "shift right")

    product = trim(split_product(a.whole + p.whole, 2 * fraction_length, a), ctx=ctx)
    decimal = render_decimal(product, ctx)
    logger.debug("%s: %s * %s = %s", ALGORITHM_UNSIGNED, first, second, decimal)
    return MultiplicationResult(
        algorithm=ALGORITHM_UNSIGNED,
        multiplicand=multiplicand,
        multiplier=multiplier,
        product=product,
        decimal=decimal,
        register_names=trace.names,
        steps=trace.freeze(),
    )


# =============================================================================
# АЛГОРИТМ БУТА
# =============================================================================


@fallible("multiply_booth")
def multiply_booth(first: str, second: str, *, ctx: ArithmeticContext) -> MultiplicationResult:
    """
    Умножение по алгоритму Бута.

    Регистры: A (накопитель), P (множитель), P0 (дополнительный триггер).
    Пара (младший разряд P, P0): 10 → A = A - M, 01 → A = A + M, 00/11 →
    без операции; затем арифметический сдвиг [A, P, P0] вправо.

    Examples:
        >>> multiply_booth("-5", "3").decimal
        '-15'
    """
    multiplicand, multiplier = prepare_operands(first, second, ctx)
    width = multiplier.width
    fraction_length = len(multiplier.fraction)
    negative = complement(multiplicand, ctx=ctx)

    a = zero_register(multiplier)
    p = multiplier
    p0 = Number(sign="0", base=BINARY, representation=Representation.TC)

    trace = RegisterTrace(("A", "P", "P0"), ctx)
    trace.record((a, p, p0), "init")
    for _ in range(width):
        pair = p.to_whole()[-1] + p0.sign
        comment = ""
        if pair == "10":
            a = fit(add(a, negative, ctx=ctx), a)
            comment = "A = A - M, "
        elif pair == "01":
            a = fit(add(a, multiplicand, ctx=ctx), a)
            comment = "A = A + M, "
        a, p, p0 = shift((a, p, p0), 1, ShiftMode.RIGHT_ARITHMETIC, ctx=ctx)
        trace.record((a, p, p0), f"{pair}: {comment}shift right")

    product = trim(split_product(a.to_whole() + p.to_whole(), 2 * fraction_length, a), ctx=ctx)
    decimal = render_decimal(product, ctx)
    logger.debug("%s: %s * %s = %s", ALGORITHM_BOOTH, first, second, decimal)
    return MultiplicationResult(
        algorithm=ALGORITHM_BOOTH,
        multiplicand=multiplicand,
        multiplier=multiplier,
        product=product,
        decimal=decimal,
        register_names=trace.names,
        steps=trace.freeze(),
    )


# =============================================================================
# МОДИФИЦИРОВАННЫЙ АЛГОРИТМ БУТА
# =============================================================================


def booth_radix4_digits(bits: str) -> List[int]:
    """
    Перекодирование множителя в цифры {-2, -1, 0, 1, 2} (младшая первой).

    Группа k: q(2k-1) + q(2k) - 2*q(2k+1), где q(-1) = 0.

    Examples:
        >>> booth_radix4_digits("0011")
        [-1, 1]
    """
    low_first = [int(ch) for ch in reversed(bits)]
    digits: List[int] = []
    for k in range(0, len(low_first), 2):
        previous = low_first[k - 1] if k > 0 else 0
        digits.append(previous + low_first[k] - 2 * low_first[k + 1])
    return digits


@fallible("multiply_modified_booth")
def multiply_modified_booth(first: str, second: str, *, ctx: ArithmeticContext) -> MultiplicationResult:
    """
    Умножение по модифицированному алгоритму Бута (основание 4).

    Множитель дополняется до чётной разрядности n и перекодируется в n/2
    цифр из {-2, -1, 0, 1, 2}. Множимое расширяется знаком до 2n разрядов;
    для каждой цифры к сумме S прибавляется 0, ±M или ±2M, после чего M
    сдвигается влево на 2 разряда (вес 4^k).

    Examples:
        >>> multiply_modified_booth("-5", "3").decimal
        '-15'
    """
    multiplicand, multiplier = prepare_operands(first, second, ctx)
    if multiplier.width % 2:
        multiplicand = whole_to_length(multiplicand, len(multiplicand.whole) + 1, ctx=ctx)
        multiplier = whole_to_length(multiplier, len(multiplier.whole) + 1, ctx=ctx)
    width = multiplier.width
    fraction_length = len(multiplier.fraction)

    line = multiplicand.to_whole().rjust(2 * width, multiplicand.sign)
    m = Number(sign=line[0], whole=line[1:], base=BINARY, representation=Representation.TC)
    s = zero_register(m)
    digits = booth_radix4_digits(multiplier.to_whole())
    ctx.narrate(f"Recoded multiplier: {' '.join(f'{d:+d}' for d in reversed(digits))}")

    trace = RegisterTrace(("S", "M"), ctx)
    trace.record((s, m), "init")
    for digit in digits:
        if digit:
            partial = m if abs(digit) == 1 else shift((m,), 1, ShiftMode.LEFT, ctx=ctx)[0]
            if digit < 0:
                partial = fit(complement(partial, ctx=ctx), m)
            s = fit(add(s, partial, ctx=ctx), s)
        m = shift((m,), 2, ShiftMode.LEFT, ctx=ctx)[0]
        trace.record((s, m), f"digit {digit:+d}: S = S + ({digit:+d})M, M = M * 4")

    product = trim(split_product(s.to_whole(), 2 * fraction_length, s), ctx=ctx)
    decimal = render_decimal(product, ctx)
    logger.debug("%s: %s * %s = %s", ALGORITHM_MODIFIED_BOOTH, first, second, decimal)
    return MultiplicationResult(
        algorithm=ALGORITHM_MODIFIED_BOOTH,
        multiplicand=multiplicand,
        multiplier=multiplier,
        product=product,
        decimal=decimal,
        register_names=trace.names,
        steps=trace.freeze(),
    )
