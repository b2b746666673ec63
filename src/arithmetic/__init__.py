"""
Arithmetic primitives shared by the register algorithms.
"""

from src.arithmetic.primitives import (
    ShiftMode,
    add,
    add_to_lowest_point,
    complement,
    get_absolute_value,
    is_greater,
    shift,
)

__all__ = [
    "ShiftMode",
    "is_greater",
    "get_absolute_value",
    "add",
    "complement",
    "shift",
    "add_to_lowest_point",
]
