"""
Registers — Общие элементы регистровых алгоритмов

- prepare_operands: десятичные строки → пара операндов TC (основание 2)
  одинаковой разрядности
- fit: приведение результата сложения к ширине регистра (по модулю)
- RegisterTrace: накопление состояний регистров по шагам
- MultiplicationResult / DivisionResult: результаты алгоритмов
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence, Tuple

from src.converters.base import from_decimal, to_decimal
from src.converters.representation import convert
from src.core.domain.context import ArithmeticContext
from src.core.domain.errors import ArithmeticFault, ErrorKind
from src.core.domain.number import (
    Number,
    Representation,
    equalize_length,
    parse,
    whole_to_length,
)

BINARY = 2


# =============================================================================
# RESULT TYPES
# =============================================================================


@dataclass(frozen=True)
class RegisterStep:
    """Состояние регистров после одного шага."""

    step: int
    registers: Tuple[str, ...]
    comment: str = ""

    def to_contract(self) -> Dict[str, Any]:
        return {"step": self.step, "registers": list(self.registers), "comment": self.comment}


@dataclass(frozen=True)
class MultiplicationResult:
    """
    Результат умножения.

    Attributes:
        algorithm: Имя алгоритма
        multiplicand: Множимое (TC, основание 2)
        multiplier: Множитель (TC, основание 2)
        product: Произведение (основание 2)
        decimal: Произведение в десятичной записи ('-15', '7.5')
        register_names: Имена регистров в порядке steps[i].registers
        steps: Состояния регистров (шаг 0 — начальное)
    """

    algorithm: str
    multiplicand: Number
    multiplier: Number
    product: Number
    decimal: str
    register_names: Tuple[str, ...]
    steps: Tuple[RegisterStep, ...]

    def to_contract(self) -> Dict[str, Any]:
        """Сериализация в форму контракта algorithm_result.json"""
        return {
            "algorithm": self.algorithm,
            "operands": [self.multiplicand.to_contract(), self.multiplier.to_contract()],
            "result": self.product.to_contract(),
            "decimal": self.decimal,
            "register_names": list(self.register_names),
            "steps": [step.to_contract() for step in self.steps],
        }


@dataclass(frozen=True)
class DivisionResult:
    """Результат деления: частное, остаток и трасса регистров [A, P]."""

    algorithm: str
    dividend: Number
    divisor: Number
    quotient: Number
    remainder: Number
    quotient_decimal: str
    remainder_decimal: str
    steps: Tuple[RegisterStep, ...]
    register_names: Tuple[str, ...] = ("A", "P")

    def to_contract(self) -> Dict[str, Any]:
        """Сериализация в форму контракта algorithm_result.json"""
        return {
            "algorithm": self.algorithm,
            "operands": [self.dividend.to_contract(), self.divisor.to_contract()],
            "result": self.quotient.to_contract(),
            "remainder": self.remainder.to_contract(),
            "decimal": self.quotient_decimal,
            "remainder_decimal": self.remainder_decimal,
            "register_names": list(self.register_names),
            "steps": [step.to_contract() for step in self.steps],
        }


# =============================================================================
# REGISTER TRACE
# =============================================================================


@dataclass
class RegisterTrace:
    """Пошаговая запись состояний регистров (с дублированием в трассу контекста)."""

    names: Tuple[str, ...]
    ctx: ArithmeticContext
    steps: List[RegisterStep] = field(default_factory=list)

    def record(self, registers: Sequence[Number], comment: str = "") -> None:
        step = RegisterStep(
            step=len(self.steps),
            registers=tuple(register.to_whole() for register in registers),
            comment=comment,
        )
        self.steps.append(step)
        cells = " ".join(f"{name}={value}" for name, value in zip(self.names, step.registers))
        self.ctx.narrate(f"{step.step}: {cells} {comment}".rstrip())

    def freeze(self) -> Tuple[RegisterStep, ...]:
        return tuple(self.steps)


# =============================================================================
# ОПЕРАНДЫ
# =============================================================================


def _to_register_operand(text: str, ctx: ArithmeticContext) -> Tuple[Number, Number]:
    """Десятичная строка → (десятичное SIGNED, двоичное TC)."""
    decimal = parse(text, 10, Representation.SIGNED, ctx=ctx)
    binary = from_decimal(decimal, BINARY, ctx=ctx)
    operand = convert(binary, Representation.TC, ctx=ctx)
    # Разрядность не меньше модуля: операнд не совпадает с наибольшим по модулю отрицательным
    operand = whole_to_length(operand, max(len(operand.whole), len(binary.whole)), ctx=ctx)
    return decimal, operand


def prepare_operands(
    first: str, second: str, ctx: ArithmeticContext, unsigned: bool = False, integer: bool = False
) -> Tuple[Number, Number]:
    """
    Подготовка пары операндов для регистровых алгоритмов.

    Args:
        first: Первый операнд (десятичная строка)
        second: Второй операнд (десятичная строка)
        ctx: Контекст вызова
        unsigned: Требовать неотрицательные операнды
        integer: Требовать целые операнды

    Returns:
        Пара чисел TC основания 2 одинаковой разрядности

    Raises:
        ArithmeticFault: EMPTY_INPUT, INVALID_DIGIT, INVALID_NUMBER,
            SIGN_REQUIREMENT
    """
    operands: List[Number] = []
    for text in (first, second):
        decimal, operand = _to_register_operand(text, ctx)
        if unsigned and decimal.is_negative and not decimal.is_zero:
            raise ArithmeticFault(ErrorKind.SIGN_REQUIREMENT, f"Operand {decimal} must be non-negative")
        if integer and decimal.fraction.strip("0"):
            raise ArithmeticFault(ErrorKind.INVALID_NUMBER, f"Operand {decimal} must be a whole number")
        operands.append(operand)
    a, b = equalize_length(operands[0], operands[1], ctx=ctx)
    ctx.narrate(f"Operands: {a.to_signed()}, {b.to_signed()}")
    return a, b


# =============================================================================
# РЕГИСТРЫ
# =============================================================================


def zero_register(template: Number) -> Number:
    """Регистр той же формы, заполненный нулями."""
    return template.replace(
        sign="0" * len(template.sign),
        whole="0" * len(template.whole),
        fraction="0" * len(template.fraction),
    )


def fit(number: Number, template: Number) -> Number:
    """
    Приведение числа к ширине регистра template.

    Строка знак+целая часть усекается слева (арифметика по модулю) или
    расширяется знаковой цифрой; дробная часть дополняется нулями.
    """
    head = number.sign + number.whole
    width = len(template.sign) + len(template.whole)
    if len(head) > width:
        head = head[len(head) - width :]
    else:
        fill = "0" if number.representation == Representation.UNSIGNED else (head[:1] or "0")
        head = head.rjust(width, fill)
    fraction = number.fraction[: len(template.fraction)].ljust(len(template.fraction), "0")
    split = len(template.sign)
    return template.replace(sign=head[:split], whole=head[split:], fraction=fraction)


def split_product(line: str, fraction_length: int, template: Number) -> Number:
    """Строка разрядов произведения → число с точкой fraction_length разрядов справа."""
    split = len(line) - fraction_length
    if template.representation == Representation.UNSIGNED:
        return template.replace(sign="", whole=line[:split], fraction=line[split:])
    return template.replace(sign=line[0], whole=line[1:split], fraction=line[split:])


def render_decimal(number: Number, ctx: ArithmeticContext) -> str:
    """Десятичная запись результата: '-15', '7.5', '0'."""
    if number.representation != Representation.UNSIGNED:
        number = convert(number, Representation.SIGNED, ctx=ctx)
    decimal = to_decimal(number, ctx=ctx)
    text = decimal.to_unsigned()
    if decimal.is_negative and not decimal.is_zero:
        return "-" + text
    return text
