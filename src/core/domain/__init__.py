"""
Domain models and value objects.

Contains the Number value type, its representations, the error taxonomy
and the diagnostic / trace collaborators.
"""

from src.core.domain.context import (
    ArithmeticContext,
    DiagnosticRecord,
    DiagnosticSink,
    TraceSink,
    fallible,
)
from src.core.domain.errors import ArithmeticFault, ErrorKind
from src.core.domain.number import (
    DIGITS,
    MAX_BASE,
    MIN_BASE,
    Number,
    Representation,
    digit_char,
    digit_value,
    equalize_length,
    fraction_to_length,
    is_valid_base,
    is_valid_number,
    parse,
    sign_digits,
    standardize,
    to_length,
    trim,
    trim_sign,
    whole_to_length,
)

__all__ = [
    # Number model
    "DIGITS",
    "MIN_BASE",
    "MAX_BASE",
    "Number",
    "Representation",
    "digit_char",
    "digit_value",
    "sign_digits",
    "is_valid_base",
    "is_valid_number",
    "parse",
    "trim_sign",
    "trim",
    "standardize",
    "whole_to_length",
    "fraction_to_length",
    "to_length",
    "equalize_length",
    # Errors
    "ArithmeticFault",
    "ErrorKind",
    # Context
    "ArithmeticContext",
    "DiagnosticRecord",
    "DiagnosticSink",
    "TraceSink",
    "fallible",
]
