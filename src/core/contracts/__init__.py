"""
Contract Validation Module

Валидация сериализованных форм чисел, диагностических записей и
результатов алгоритмов по JSON Schema контрактам.
"""

from .validators import (
    AlgorithmResultValidator,
    ContractValidator,
    DiagnosticRecordValidator,
    NumberValidator,
    SchemaLoader,
    validate_algorithm_result,
    validate_diagnostic_record,
    validate_number,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "NumberValidator",
    "DiagnosticRecordValidator",
    "AlgorithmResultValidator",
    # Functions
    "validate_number",
    "validate_diagnostic_record",
    "validate_algorithm_result",
]
