"""
Errors — Таксономия ошибок арифметического ядра

Все операции ядра сигнализируют о нарушении предусловий через ArithmeticFault.
На границе публичного API (см. context.fallible) исключение превращается в
sentinel-значение (None/False) и одну диагностическую запись.
"""

from enum import Enum
from typing import Optional


# =============================================================================
# ENUMS
# =============================================================================


class ErrorKind(str, Enum):
    """Категория ошибки"""

    EMPTY_INPUT = "EMPTY_INPUT"
    INVALID_DIGIT = "INVALID_DIGIT"
    INVALID_NUMBER = "INVALID_NUMBER"
    INVALID_BASE = "INVALID_BASE"
    INVALID_TYPE = "INVALID_TYPE"
    BASE_MISMATCH = "BASE_MISMATCH"
    TYPE_MISMATCH = "TYPE_MISMATCH"
    SIGN_MISMATCH = "SIGN_MISMATCH"
    SIGN_REQUIREMENT = "SIGN_REQUIREMENT"
    UNCOMPLEMENTABLE = "UNCOMPLEMENTABLE"
    UNSUPPORTED_NEGATIVE_CARRY = "UNSUPPORTED_NEGATIVE_CARRY"
    SHIFT_ON_SIGNED = "SHIFT_ON_SIGNED"
    NUMBER_TOO_LARGE = "NUMBER_TOO_LARGE"
    DIVISION_BY_ZERO = "DIVISION_BY_ZERO"
    INVALID_GENERATOR = "INVALID_GENERATOR"
    LENGTH_MISMATCH = "LENGTH_MISMATCH"


# =============================================================================
# EXCEPTIONS
# =============================================================================


class ArithmeticFault(Exception):
    """
    Нарушение предусловия операции над числами.

    Attributes:
        kind: Категория ошибки (ErrorKind)
        message: Человекочитаемая причина
        source: Имя публичной операции, в которой возникла ошибка.
            Заполняется декоратором fallible самой внутренней операции.
    """

    def __init__(self, kind: ErrorKind, message: str, source: Optional[str] = None):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.source = source

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message}"
