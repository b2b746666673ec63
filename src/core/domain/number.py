"""
Number — Модель числа в позиционной системе счисления

Immutable Pydantic модель числа (знак, целая часть, дробная часть, основание,
представление) и операции нормализации:

- parse: текст → Number (с проверкой цифр для основания)
- trim_sign / standardize / trim: приведение знака и лишних цифр
- equalize_length / whole_to_length / fraction_to_length / to_length:
  выравнивание разрядной сетки

Представления:
- UNSIGNED: без знака
- SIGNED: явный знак '+' / '-'
- SMR: прямой код (знаковая цифра 0 или base-1, модуль отдельно)
- OC: обратный код (дополнение до base-1)
- TC: дополнительный код (дополнение до base)

Все операции возвращают новый экземпляр; входные значения не изменяются.
"""

import logging
import re
from enum import Enum
from typing import Final, Tuple

from pydantic import BaseModel, Field, field_validator

from src.core.domain.context import ArithmeticContext, fallible
from src.core.domain.errors import ArithmeticFault, ErrorKind

logger = logging.getLogger(__name__)


# =============================================================================
# КОНСТАНТЫ
# =============================================================================
# Допустимые цифры: после 9 идут латинские буквы
DIGITS: Final[str] = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"

# Диапазон допустимых оснований
MIN_BASE: Final[int] = 2
MAX_BASE: Final[int] = 35

PLUS: Final[str] = "+"
MINUS: Final[str] = "-"

# Разделитель целой и дробной части (допускается и запятая)
RADIX_POINTS: Final[str] = ".,"

_WHITESPACE = re.compile(r"\s+")


# =============================================================================
# ENUMS
# =============================================================================


class Representation(str, Enum):
    """Машинное представление числа"""

    UNSIGNED = "UNSIGNED"
    SIGNED = "SIGNED"
    SMR = "SMR"
    OC = "OC"
    TC = "TC"


# Представления со знаковой цифрой
DIGIT_SIGNED: Final[Tuple[Representation, ...]] = (
    Representation.SMR,
    Representation.OC,
    Representation.TC,
)

# Дополнительные коды (знак расширяется в целую часть)
COMPLEMENT_CODES: Final[Tuple[Representation, ...]] = (Representation.OC, Representation.TC)


# =============================================================================
# ЦИФРЫ И ОСНОВАНИЯ
# =============================================================================


def is_valid_base(base: int) -> bool:
    """Проверка основания: целое в диапазоне [MIN_BASE, MAX_BASE]."""
    return isinstance(base, int) and not isinstance(base, bool) and MIN_BASE <= base <= MAX_BASE


def digit_value(char: str) -> int:
    """
    Значение одной цифры.

    Args:
        char: Символ цифры ('0'..'9', 'A'..'Z', регистр не важен)

    Returns:
        Числовое значение цифры

    Raises:
        ArithmeticFault: INVALID_DIGIT, если символ не является цифрой
    """
    index = DIGITS.find(char.upper()) if len(char) == 1 else -1
    if index < 0:
        raise ArithmeticFault(ErrorKind.INVALID_DIGIT, f'"{char}" is not a digit')
    return index


def digit_char(value: int) -> str:
    """
    Символ цифры по её значению.

    Raises:
        ArithmeticFault: INVALID_DIGIT, если значение вне [0, 35]
    """
    if not 0 <= value < len(DIGITS):
        raise ArithmeticFault(ErrorKind.INVALID_DIGIT, f"No digit for value {value}")
    return DIGITS[value]


def sign_digits(base: int, representation: Representation) -> Tuple[str, str]:
    """
    Канонические значения знака (положительный, отрицательный).

    Examples:
        >>> sign_digits(10, Representation.TC)
        ('0', '9')
        >>> sign_digits(10, Representation.SIGNED)
        ('+', '-')
    """
    if representation == Representation.UNSIGNED:
        return ("", "")
    if representation == Representation.SIGNED:
        return (PLUS, MINUS)
    return ("0", DIGITS[base - 1])


# =============================================================================
# NUMBER MODEL
# =============================================================================


class Number(BaseModel):
    """
    Число в позиционной системе счисления.

    Immutable модель (frozen=True): все преобразования создают новый
    экземпляр (см. replace).

    Знаковое поле может содержать несколько символов (до trim_sign) и
    любые цифры основания (регистры после сдвига); проверку канонического
    знака выполняют trim_sign и standardize.
    """

    base: int = Field(..., ge=MIN_BASE, le=MAX_BASE, description="Основание системы счисления")
    representation: Representation = Field(..., description="Машинное представление")
    sign: str = Field(default="", description="Знак: '', '+'/'-' или знаковая цифра")
    whole: str = Field(default="", description="Целая часть (старшая цифра первой)")
    fraction: str = Field(default="", description="Дробная часть (старшая цифра первой)")

    model_config = {"frozen": True}  # Immutable

    @field_validator("sign")
    @classmethod
    def validate_sign(cls, v: str, info) -> str:
        """Знак должен соответствовать представлению"""
        representation = info.data.get("representation")
        base = info.data.get("base")
        if representation is None or base is None:
            return v
        if representation == Representation.UNSIGNED:
            if v:
                raise ValueError(f"UNSIGNED number cannot carry sign {v!r}")
        elif representation == Representation.SIGNED:
            if not v or any(ch not in (PLUS, MINUS) for ch in v):
                raise ValueError(f"SIGNED sign must consist of '+'/'-', got {v!r}")
        else:
            allowed = DIGITS[:base]
            if not v or any(ch not in allowed for ch in v):
                raise ValueError(f"{representation.value} sign must be digits of base {base}, got {v!r}")
        return v

    @field_validator("whole", "fraction")
    @classmethod
    def validate_digits(cls, v: str, info) -> str:
        """Все цифры должны быть допустимы для основания"""
        base = info.data.get("base")
        if base is None:
            return v
        allowed = DIGITS[:base]
        for ch in v:
            if ch not in allowed:
                raise ValueError(f"Digit {ch!r} is not valid for base {base}")
        return v

    # -------------------------------------------------------------------------
    # Свойства
    # -------------------------------------------------------------------------

    @property
    def is_negative(self) -> bool:
        """Отрицательно ли число (по знаку, без учёта нулевого модуля)."""
        if self.representation == Representation.UNSIGNED:
            return False
        if self.representation == Representation.SIGNED:
            return self.sign.count(MINUS) % 2 == 1
        return self.sign[0] != "0"

    @property
    def is_zero(self) -> bool:
        """
        Нулевой ли модуль.

        Для отрицательного OC нулём считается запись из одних цифр base-1,
        отрицательный TC нулём не бывает.
        """
        filler = "0"
        if self.representation in COMPLEMENT_CODES and self.is_negative:
            if self.representation == Representation.TC:
                return False
            filler = DIGITS[self.base - 1]
        return all(ch == filler for ch in self.whole + self.fraction)

    @property
    def sign_multiplier(self) -> int:
        """+1 для положительного, -1 для отрицательного, 0 для нулевого модуля."""
        if self.is_zero:
            return 0
        return -1 if self.is_negative else 1

    @property
    def is_standardized(self) -> bool:
        """Знак записан ровно одним каноническим символом."""
        if self.representation == Representation.UNSIGNED:
            return self.sign == ""
        return self.sign in sign_digits(self.base, self.representation)

    @property
    def width(self) -> int:
        """Число разрядов регистра (знак + целая + дробная)."""
        return len(self.sign) + len(self.whole) + len(self.fraction)

    # -------------------------------------------------------------------------
    # Копирование
    # -------------------------------------------------------------------------

    def replace(self, **changes) -> "Number":
        """Новый экземпляр с изменёнными полями (с повторной валидацией)."""
        data = self.model_dump()
        data.update(changes)
        return Number(**data)

    def copy(self) -> "Number":  # type: ignore[override]
        return self.model_copy()

    # -------------------------------------------------------------------------
    # Представление в виде текста
    # -------------------------------------------------------------------------

    def to_signed(self) -> str:
        """Текст со знаком: '<sign><whole>[.<fraction>]'."""
        return self.sign + self.to_unsigned()

    def to_unsigned(self) -> str:
        """Текст без знака: '<whole>[.<fraction>]'."""
        if self.fraction:
            return f"{self.whole}.{self.fraction}"
        return self.whole

    def to_whole(self) -> str:
        """Все разряды одной строкой (без точки)."""
        return self.sign + self.whole + self.fraction

    def to_contract(self) -> dict:
        """Сериализация в форму контракта number.json"""
        return {
            "sign": self.sign,
            "whole": self.whole,
            "fraction": self.fraction,
            "base": self.base,
            "representation": self.representation.value,
            "text": self.to_signed(),
        }

    def __str__(self) -> str:
        return f"{self.to_signed()} ({self.base})"


# =============================================================================
# ЗАПОЛНЕНИЕ РАЗРЯДОВ
# =============================================================================


def whole_fill(number: Number) -> str:
    """Цифра расширения целой части: знаковая цифра для OC/TC, иначе '0'."""
    if number.representation in COMPLEMENT_CODES:
        return number.sign[0]
    return "0"


def fraction_fill(number: Number) -> str:
    """Цифра расширения дробной части: base-1 для отрицательного OC, иначе '0'."""
    if number.representation == Representation.OC and number.is_negative:
        return DIGITS[number.base - 1]
    return "0"


# =============================================================================
# РАЗБОР ТЕКСТА
# =============================================================================


def _coerce_representation(representation) -> Representation:
    try:
        return Representation(representation)
    except ValueError:
        raise ArithmeticFault(ErrorKind.INVALID_TYPE, f'Invalid representation "{representation}"')


def _check_base(base) -> None:
    if not is_valid_base(base):
        raise ArithmeticFault(ErrorKind.INVALID_BASE, f'Invalid base "{base}"')


def _split_sign(integer_part: str, base: int, representation: Representation) -> Tuple[str, str]:
    positive, negative = sign_digits(base, representation)

    if representation == Representation.UNSIGNED:
        return "", integer_part

    if representation == Representation.SIGNED:
        run = len(integer_part) - len(integer_part.lstrip(PLUS + MINUS))
        return (integer_part[:run] or PLUS), integer_part[run:]

    head = integer_part[:1]
    if head not in (positive, negative):
        logger.info("No sign digit in %r, assuming positive", integer_part)
        return positive, integer_part

    if representation == Representation.SMR:
        if len(integer_part) == 1:
            # Одиночная цифра трактуется как модуль
            return positive, integer_part
        return head, integer_part[1:]

    run = len(integer_part) - len(integer_part.lstrip(head))
    if run < len(integer_part):
        return integer_part[:run], integer_part[run:]
    # Вся целая часть состоит из знаковых цифр: последняя остаётся расширением
    if run == 1:
        return head, ""
    return integer_part[:-1], integer_part[-1]


@fallible("parse")
def parse(text: str, base: int, representation: Representation, *, ctx: ArithmeticContext) -> Number:
    """
    Разбор текстовой записи числа.

    Пробельные символы игнорируются, буквенные цифры приводятся к верхнему
    регистру, разделителем дробной части служит '.' или ','.

    Знак:
    - SIGNED: ведущая серия '+'/'-' (по умолчанию '+')
    - SMR: одна ведущая каноническая цифра (0 или base-1)
    - OC/TC: ведущая серия одинаковых канонических цифр (знак с расширением)
    - отсутствующий знак считается положительным

    Args:
        text: Текстовая запись числа
        base: Основание (2..35)
        representation: Представление

    Returns:
        Number (знак может быть нестандартизован, см. trim_sign)

    Raises:
        ArithmeticFault: EMPTY_INPUT, INVALID_BASE, INVALID_TYPE,
            INVALID_NUMBER, INVALID_DIGIT

    Examples:
        >>> parse("-10.5", 10, Representation.SIGNED).to_signed()
        '-10.5'
        >>> parse("9950.5", 10, Representation.TC).sign
        '99'
    """
    if text is None or not _WHITESPACE.sub("", str(text)):
        raise ArithmeticFault(ErrorKind.EMPTY_INPUT, "Number is empty")
    _check_base(base)
    representation = _coerce_representation(representation)

    cleaned = _WHITESPACE.sub("", str(text)).upper()
    parts = re.split(f"[{re.escape(RADIX_POINTS)}]", cleaned)
    if len(parts) > 2:
        raise ArithmeticFault(ErrorKind.INVALID_NUMBER, f'Invalid number "{text}": more than one radix point')

    integer_part = parts[0]
    fraction = parts[1] if len(parts) == 2 else ""
    if not integer_part and not fraction:
        raise ArithmeticFault(ErrorKind.INVALID_NUMBER, f'Invalid number "{text}": no digits')
    sign, whole = _split_sign(integer_part, base, representation)

    allowed = DIGITS[:base]
    for ch in whole + fraction:
        if ch not in allowed:
            raise ArithmeticFault(
                ErrorKind.INVALID_DIGIT, f'Invalid digit "{ch}" for base {base} in "{text}"'
            )

    if not whole and representation not in COMPLEMENT_CODES:
        if not fraction:
            raise ArithmeticFault(ErrorKind.INVALID_NUMBER, f'Invalid number "{text}": no digits')
        whole = "0"

    return Number(sign=sign, whole=whole, fraction=fraction, base=base, representation=representation)


def is_valid_number(text: str, base: int, representation: Representation) -> bool:
    """Проверка текстовой записи без записи в журнал ошибок."""
    return parse(text, base, representation, log=False) is not None


# =============================================================================
# НОРМАЛИЗАЦИЯ
# =============================================================================


@fallible("trim_sign")
def trim_sign(number: Number, *, ctx: ArithmeticContext) -> Number:
    """
    Сворачивание знака с расширением в один канонический символ.

    SIGNED: серия '+'/'-' сворачивается по чётности минусов.
    SMR/OC/TC: все цифры знака должны совпадать с канонической знаковой
    цифрой (0 или base-1).

    Raises:
        ArithmeticFault: SIGN_MISMATCH
    """
    if number.representation == Representation.UNSIGNED:
        return number
    if number.representation == Representation.SIGNED:
        return number.replace(sign=MINUS if number.is_negative else PLUS)

    head = number.sign[0]
    if head not in sign_digits(number.base, number.representation):
        raise ArithmeticFault(ErrorKind.SIGN_MISMATCH, f'Invalid sign "{number.sign}" for number {number}')
    if any(ch != head for ch in number.sign):
        raise ArithmeticFault(ErrorKind.SIGN_MISMATCH, f'Inconsistent sign "{number.sign}" for number {number}')
    if len(number.sign) == 1:
        return number
    return number.replace(sign=head)


def _trim_digits(number: Number) -> Number:
    fill = whole_fill(number)
    whole = number.whole.lstrip(fill) or fill
    fraction = number.fraction.rstrip(fraction_fill(number))
    if whole == number.whole and fraction == number.fraction:
        return number
    return number.replace(whole=whole, fraction=fraction)


@fallible("trim")
def trim(number: Number, *, ctx: ArithmeticContext) -> Number:
    """
    Минимальная запись: удаление ведущих цифр расширения целой части
    (одна цифра сохраняется) и хвостовых цифр расширения дробной части.

    Знак используется как есть (ожидается один символ).
    """
    return _trim_digits(number)


@fallible("standardize")
def standardize(number: Number, *, ctx: ArithmeticContext) -> Number:
    """
    Стандартизация: канонический однозначный знак и минимальная запись.

    Examples:
        >>> standardize(parse("00010.500", 10, Representation.TC)).to_signed()
        '010.5'

    Raises:
        ArithmeticFault: SIGN_MISMATCH
    """
    return _trim_digits(trim_sign(number, ctx=ctx))


# =============================================================================
# РАЗРЯДНАЯ СЕТКА
# =============================================================================


@fallible("whole_to_length")
def whole_to_length(number: Number, length: int, *, ctx: ArithmeticContext) -> Number:
    """
    Приведение целой части к заданной длине.

    Короткая целая часть расширяется слева цифрой расширения; длинная
    укорачивается только за счёт ведущих цифр расширения.

    Raises:
        ArithmeticFault: NUMBER_TOO_LARGE, если значащие цифры не помещаются
    """
    fill = whole_fill(number)
    current = len(number.whole)
    if current == length:
        return number
    if current < length:
        return number.replace(whole=fill * (length - current) + number.whole)
    excess = number.whole[: current - length]
    if any(ch != fill for ch in excess):
        raise ArithmeticFault(
            ErrorKind.NUMBER_TOO_LARGE, f"Number {number} does not fit into {length} whole digits"
        )
    return number.replace(whole=number.whole[current - length :])


@fallible("fraction_to_length")
def fraction_to_length(number: Number, length: int, *, ctx: ArithmeticContext) -> Number:
    """Приведение дробной части к заданной длине (лишние младшие цифры отбрасываются)."""
    current = len(number.fraction)
    if current == length:
        return number
    if current > length:
        return number.replace(fraction=number.fraction[:length])
    return number.replace(fraction=number.fraction + fraction_fill(number) * (length - current))


@fallible("to_length")
def to_length(number: Number, whole_length: int, fraction_length: int, *, ctx: ArithmeticContext) -> Number:
    """Приведение целой и дробной части к заданным длинам."""
    number = whole_to_length(number, whole_length, ctx=ctx)
    return fraction_to_length(number, fraction_length, ctx=ctx)


@fallible("equalize_length")
def equalize_length(a: Number, b: Number, *, ctx: ArithmeticContext) -> Tuple[Number, Number]:
    """
    Выравнивание пары операндов по длине целой и дробной части.

    Целая часть расширяется знаковой цифрой (OC/TC) или нулями, дробная
    часть нулями (отрицательный OC: цифрой base-1). Исходные операнды не
    изменяются.

    Returns:
        Новая пара (a, b) одинаковой разрядности

    Raises:
        ArithmeticFault: BASE_MISMATCH, TYPE_MISMATCH
    """
    if a.base != b.base:
        raise ArithmeticFault(ErrorKind.BASE_MISMATCH, f"Bases of {a} and {b} differ")
    if a.representation != b.representation:
        raise ArithmeticFault(
            ErrorKind.TYPE_MISMATCH,
            f"Representations {a.representation.value} and {b.representation.value} differ",
        )
    whole_length = max(len(a.whole), len(b.whole))
    fraction_length = max(len(a.fraction), len(b.fraction))
    return (
        to_length(a, whole_length, fraction_length, ctx=ctx),
        to_length(b, whole_length, fraction_length, ctx=ctx),
    )
