"""
Register-level multiplication and division algorithms.
"""

from src.algorithms.division import divide_signed, divide_unsigned
from src.algorithms.multiplication import (
    booth_radix4_digits,
    multiply_booth,
    multiply_modified_booth,
    multiply_unsigned,
)
from src.algorithms.registers import DivisionResult, MultiplicationResult, RegisterStep

__all__ = [
    # Results
    "RegisterStep",
    "MultiplicationResult",
    "DivisionResult",
    # Multiplication
    "multiply_unsigned",
    "multiply_booth",
    "multiply_modified_booth",
    "booth_radix4_digits",
    # Division
    "divide_unsigned",
    "divide_signed",
]
