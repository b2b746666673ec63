"""
Primitives — Базовые арифметические операции над Number

Общий фундамент для всех алгоритмов умножения и деления:

- is_greater: сравнение модулей с учётом знака
- get_absolute_value: модуль числа
- add: сложение во всех пяти представлениях
- complement: смена знака (дополнение для OC/TC)
- shift: сдвиг группы регистров как одной разрядной строки
- add_to_lowest_point: прибавление к младшему разряду с переносом

Поразрядные операции выполняются над строками цифр, все функции
возвращают новые экземпляры Number.
"""

import logging
from enum import Enum
from typing import List, Sequence, Tuple

from src.core.domain.context import ArithmeticContext, fallible
from src.core.domain.errors import ArithmeticFault, ErrorKind
from src.core.domain.number import (
    COMPLEMENT_CODES,
    DIGITS,
    Number,
    Representation,
    digit_value,
    equalize_length,
    sign_digits,
    trim,
    trim_sign,
)

logger = logging.getLogger(__name__)


# =============================================================================
# ENUMS
# =============================================================================


class ShiftMode(str, Enum):
    """Режим сдвига регистров"""

    LEFT = "LEFT"
    RIGHT_LOGICAL = "RIGHT_LOGICAL"
    RIGHT_ARITHMETIC = "RIGHT_ARITHMETIC"


# =============================================================================
# ПОРАЗРЯДНЫЕ ПОМОЩНИКИ
# =============================================================================


def _to_digits(value: int, base: int) -> str:
    """Неотрицательное целое → строка цифр в основании base."""
    digits = ""
    while True:
        value, rest = divmod(value, base)
        digits = DIGITS[rest] + digits
        if value == 0:
            return digits


def _add_lines(x: str, y: str, base: int) -> Tuple[str, int]:
    """
    Поразрядное сложение строк одинаковой длины.

    Returns:
        (сумма той же длины, перенос из старшего разряда)
    """
    carry = 0
    result: List[str] = []
    for a, b in zip(reversed(x), reversed(y)):
        carry, digit = divmod(digit_value(a) + digit_value(b) + carry, base)
        result.append(DIGITS[digit])
    return "".join(reversed(result)), carry


def _subtract_lines(x: str, y: str, base: int) -> str:
    """Поразрядное вычитание x - y (x >= y, одинаковая длина)."""
    borrow = 0
    result: List[str] = []
    for a, b in zip(reversed(x), reversed(y)):
        borrow_next, digit = divmod(digit_value(a) - digit_value(b) - borrow, base)
        borrow = -borrow_next
        result.append(DIGITS[digit])
    return "".join(reversed(result))


def _compare_magnitudes(a: Number, b: Number) -> int:
    """
    Сравнение модулей, записанных в whole/fraction.

    Returns:
        1 если |a| > |b|, -1 если |a| < |b|, 0 при равенстве
    """
    a_whole = a.whole.lstrip("0")
    b_whole = b.whole.lstrip("0")
    if len(a_whole) != len(b_whole):
        return 1 if len(a_whole) > len(b_whole) else -1
    if a_whole != b_whole:
        return 1 if a_whole > b_whole else -1

    a_fraction = a.fraction.rstrip("0")
    b_fraction = b.fraction.rstrip("0")
    length = max(len(a_fraction), len(b_fraction))
    a_fraction = a_fraction.ljust(length, "0")
    b_fraction = b_fraction.ljust(length, "0")
    if a_fraction == b_fraction:
        return 0
    return 1 if a_fraction > b_fraction else -1


def _require_compatible(a: Number, b: Number) -> None:
    if a.base != b.base:
        raise ArithmeticFault(ErrorKind.BASE_MISMATCH, f"Bases of {a} and {b} differ")
    if a.representation != b.representation:
        raise ArithmeticFault(
            ErrorKind.TYPE_MISMATCH,
            f"Representations {a.representation.value} and {b.representation.value} differ",
        )


# =============================================================================
# СРАВНЕНИЕ И МОДУЛЬ
# =============================================================================


@fallible("is_greater")
def is_greater(a: Number, b: Number, *, ctx: ArithmeticContext) -> bool:
    """
    Сравнение двух чисел одного основания и представления.

    Сначала сравниваются множители знака (+1/0/-1), для операндов одного
    знака сравниваются модули: целые части слева направо, затем дробные.
    При равном общем префиксе большим считается число с дополнительными
    ненулевыми дробными цифрами.

    Returns:
        True, если a больше b

    Raises:
        ArithmeticFault: BASE_MISMATCH, TYPE_MISMATCH
    """
    _require_compatible(a, b)
    a = trim_sign(a, ctx=ctx)
    b = trim_sign(b, ctx=ctx)
    a_mult = a.sign_multiplier
    b_mult = b.sign_multiplier
    if a_mult != b_mult:
        return a_mult > b_mult
    if a_mult == 0:
        return False
    a_abs = get_absolute_value(a, ctx=ctx)
    b_abs = get_absolute_value(b, ctx=ctx)
    return _compare_magnitudes(a_abs, b_abs) > 0


@fallible("get_absolute_value")
def get_absolute_value(number: Number, *, ctx: ArithmeticContext) -> Number:
    """
    Модуль числа в том же представлении.

    UNSIGNED: без изменений; SIGNED/SMR: положительный знак;
    OC/TC: дополнение, если число отрицательно. Разрядность сохраняется.

    Examples:
        >>> get_absolute_value(parse("910.50", 10, Representation.TC)).to_signed()
        '089.50'
    """
    number = trim_sign(number, ctx=ctx)
    if number.representation == Representation.UNSIGNED:
        return number
    positive = sign_digits(number.base, number.representation)[0]
    if number.representation in COMPLEMENT_CODES:
        if number.is_negative:
            return complement(number, ctx=ctx)
        return number
    return number.replace(sign=positive)


# =============================================================================
# ДОПОЛНЕНИЕ
# =============================================================================


@fallible("complement")
def complement(number: Number, *, ctx: ArithmeticContext) -> Number:
    """
    Смена знака числа.

    - SIGNED: '+' ↔ '-'
    - SMR: знаковая цифра 0 ↔ base-1
    - OC: поразрядное дополнение до base-1 (включая знак)
    - TC: дополнение OC плюс единица младшего разряда

    Raises:
        ArithmeticFault: UNCOMPLEMENTABLE для UNSIGNED
    """
    number = trim_sign(number, ctx=ctx)
    representation = number.representation
    if representation == Representation.UNSIGNED:
        raise ArithmeticFault(ErrorKind.UNCOMPLEMENTABLE, f"Cannot complement UNSIGNED number {number}")

    positive, negative = sign_digits(number.base, representation)
    if representation in (Representation.SIGNED, Representation.SMR):
        return number.replace(sign=positive if number.is_negative else negative)

    top = number.base - 1

    def flip(digits: str) -> str:
        return "".join(DIGITS[top - digit_value(ch)] for ch in digits)

    result = number.replace(
        sign=flip(number.sign),
        whole=flip(number.whole),
        fraction=flip(number.fraction),
    )
    if representation == Representation.TC:
        result = add_to_lowest_point(result, 1, ctx=ctx)
    return result


# =============================================================================
# ПРИБАВЛЕНИЕ К МЛАДШЕМУ РАЗРЯДУ
# =============================================================================


@fallible("add_to_lowest_point")
def add_to_lowest_point(number: Number, delta: int, *, ctx: ArithmeticContext) -> Number:
    """
    Прибавление малого целого к младшему разряду (дробному, либо целому
    при отсутствии дробной части) с распространением переноса.

    Перенос из целой части:
    - UNSIGNED/SIGNED/SMR: дописывается слева к целой части (модуль растёт)
    - OC/TC положительное: дописывается слева, знак остаётся 0
    - OC/TC отрицательное: число становится неотрицательным; для OC
      перенос из знакового разряда возвращается в младший (циклический
      перенос), для TC отбрасывается

    Args:
        number: Исходное число
        delta: Прибавляемое значение (может быть отрицательным)

    Raises:
        ArithmeticFault: UNSUPPORTED_NEGATIVE_CARRY, если заём выходит за
            пределы целой части
    """
    number = trim_sign(number, ctx=ctx)
    if delta == 0:
        return number

    digits = [digit_value(ch) for ch in number.whole + number.fraction]
    carry = delta
    for index in range(len(digits) - 1, -1, -1):
        if carry == 0:
            break
        carry, digits[index] = divmod(digits[index] + carry, number.base)

    line = "".join(DIGITS[d] for d in digits)
    split = len(number.whole)
    whole, fraction = line[:split], line[split:]

    if carry < 0:
        raise ArithmeticFault(
            ErrorKind.UNSUPPORTED_NEGATIVE_CARRY,
            f"Adding {delta} to {number} borrows beyond the whole part",
        )
    if carry == 0:
        return number.replace(whole=whole, fraction=fraction)

    if number.representation not in COMPLEMENT_CODES or not number.is_negative:
        return number.replace(whole=_to_digits(carry, number.base) + whole, fraction=fraction)

    # Отрицательное OC/TC: перенос гасит знаковую цифру base-1
    grown = _to_digits(carry - 1, number.base) if carry > 1 else ""
    result = number.replace(sign="0", whole=grown + whole, fraction=fraction)
    if number.representation == Representation.OC:
        ctx.narrate(f"End-around carry: {result.to_signed()} + 1")
        result = add_to_lowest_point(result, 1, ctx=ctx)
    return result


# =============================================================================
# СЛОЖЕНИЕ
# =============================================================================


def _add_complement_codes(a: Number, b: Number, ctx: ArithmeticContext) -> Number:
    line, carry = _add_lines(a.to_whole(), b.to_whole(), a.base)
    sign = line[0]
    whole = line[1 : 1 + len(a.whole)]
    fraction = line[1 + len(a.whole) :]

    if a.sign == b.sign and sign != a.sign:
        # Переполнение: выпавшая знаковая цифра становится старшей цифрой
        ctx.narrate(f"Overflow: digit {sign} prepended, sign {a.sign} kept")
        logger.debug("Overflow in %s + %s", a.to_signed(), b.to_signed())
        whole = sign + whole
        sign = a.sign

    result = a.replace(sign=sign, whole=whole, fraction=fraction)
    if a.representation == Representation.OC and carry:
        ctx.narrate(f"End-around carry: {result.to_signed()} + {carry}")
        result = add_to_lowest_point(result, carry, ctx=ctx)
    return result


def _add_sign_magnitude(a: Number, b: Number, ctx: ArithmeticContext) -> Number:
    positive = sign_digits(a.base, a.representation)[0]
    a_digits = a.whole + a.fraction
    b_digits = b.whole + b.fraction
    split = len(a.whole)

    if a.is_negative == b.is_negative:
        line, carry = _add_lines(a_digits, b_digits, a.base)
        carried = _to_digits(carry, a.base) if carry else ""
        return a.replace(whole=carried + line[:split], fraction=line[split:])

    order = _compare_magnitudes(a, b)
    if order == 0:
        return a.replace(sign=positive, whole="0" * split, fraction="0" * len(a.fraction))
    larger, smaller = (a, b) if order > 0 else (b, a)
    line = _subtract_lines(larger.whole + larger.fraction, smaller.whole + smaller.fraction, a.base)
    return larger.replace(whole=line[:split], fraction=line[split:])


@fallible("add")
def add(a: Number, b: Number, *, ctx: ArithmeticContext) -> Number:
    """
    Сложение двух чисел одного основания и представления.

    - UNSIGNED: позиционное сложение, перенос наращивает целую часть
    - OC/TC: сложение разрядных строк вместе со знаком; переполнение при
      одинаковых знаках операндов добавляет старшую цифру; OC дополнительно
      выполняет циклический перенос
    - SIGNED/SMR: сложение модулей при равных знаках, иначе вычитание
      меньшего модуля из большего со знаком большего (равные модули дают +0)

    Returns:
        Стандартизованная сумма

    Raises:
        ArithmeticFault: BASE_MISMATCH, TYPE_MISMATCH, SIGN_MISMATCH

    Examples:
        >>> add(parse("950.5", 10, Representation.TC), parse("970.6", 10, Representation.TC)).to_signed()
        '921.1'
    """
    _require_compatible(a, b)
    a, b = equalize_length(trim_sign(a, ctx=ctx), trim_sign(b, ctx=ctx), ctx=ctx)
    ctx.narrate(f"{a.to_signed()} + {b.to_signed()}")

    if a.representation == Representation.UNSIGNED:
        line, carry = _add_lines(a.whole + a.fraction, b.whole + b.fraction, a.base)
        split = len(a.whole)
        carried = _to_digits(carry, a.base) if carry else ""
        result = a.replace(whole=carried + line[:split], fraction=line[split:])
    elif a.representation in COMPLEMENT_CODES:
        result = _add_complement_codes(a, b, ctx)
    else:
        result = _add_sign_magnitude(a, b, ctx)

    result = trim(result, ctx=ctx)
    ctx.narrate(f"= {result.to_signed()}")
    return result


# =============================================================================
# СДВИГ
# =============================================================================


@fallible("shift")
def shift(
    registers: Sequence[Number], amount: int, mode: ShiftMode, *, ctx: ArithmeticContext
) -> Tuple[Number, ...]:
    """
    Сдвиг группы регистров как одной разрядной строки.

    Разряды всех регистров (знак, целая, дробная часть) склеиваются в одну
    строку, сдвигаются на amount позиций и раскладываются обратно по
    исходным ширинам полей.

    - LEFT: справа дописываются нули, старшие разряды теряются
    - RIGHT_LOGICAL: слева дописываются нули
    - RIGHT_ARITHMETIC: слева дописывается знаковая цифра первого регистра

    Args:
        registers: Регистры (общее основание и представление)
        amount: Число позиций (>= 0)
        mode: Режим сдвига

    Returns:
        Новый кортеж регистров той же формы

    Raises:
        ArithmeticFault: SHIFT_ON_SIGNED, BASE_MISMATCH, TYPE_MISMATCH,
            INVALID_NUMBER
    """
    if not registers:
        raise ArithmeticFault(ErrorKind.EMPTY_INPUT, "No registers to shift")
    if amount < 0:
        raise ArithmeticFault(ErrorKind.INVALID_NUMBER, f"Shift amount {amount} is negative")
    mode = ShiftMode(mode)
    first = registers[0]
    for register in registers:
        if register.representation == Representation.SIGNED:
            raise ArithmeticFault(ErrorKind.SHIFT_ON_SIGNED, f"Cannot shift SIGNED register {register}")
        _require_compatible(first, register)

    line = "".join(register.to_whole() for register in registers)
    width = len(line)
    if mode == ShiftMode.LEFT:
        line = (line + "0" * amount)[amount:]
    else:
        fill = line[0] if mode == ShiftMode.RIGHT_ARITHMETIC else "0"
        line = (fill * amount + line)[:width]

    shifted: List[Number] = []
    position = 0
    for register in registers:
        sign_end = position + len(register.sign)
        whole_end = sign_end + len(register.whole)
        fraction_end = whole_end + len(register.fraction)
        shifted.append(
            register.replace(
                sign=line[position:sign_end],
                whole=line[sign_end:whole_end],
                fraction=line[whole_end:fraction_end],
            )
        )
        position = fraction_end
    return tuple(shifted)
