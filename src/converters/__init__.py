"""
Converters between representations and between number bases.
"""

from src.converters.base import (
    BCD_GROUP_LENGTH,
    PRECISION,
    PRECISION_UNIT,
    base_to_decimal_integer,
    bcd_to_decimal,
    binary_to_number,
    convert_bases,
    decimal_to_bcd,
    digit_to_binary,
    from_decimal,
    number_to_binary,
    to_decimal,
    to_decimal_integer,
)
from src.converters.representation import RepresentationTable, convert, convert_to_all

__all__ = [
    # Representation converter
    "RepresentationTable",
    "convert",
    "convert_to_all",
    # Base converter
    "PRECISION",
    "PRECISION_UNIT",
    "BCD_GROUP_LENGTH",
    "to_decimal",
    "from_decimal",
    "convert_bases",
    "to_decimal_integer",
    "base_to_decimal_integer",
    "digit_to_binary",
    "number_to_binary",
    "binary_to_number",
    "decimal_to_bcd",
    "bcd_to_decimal",
]
