"""
JSON Schema Contract Validators

Проверка сериализованных форм (to_contract) на соответствие формальным
JSON Schema контрактам из contracts/schema/.

Схемы:
- number.json: Number.to_contract()
- diagnostic_record.json: DiagnosticRecord.to_contract()
- algorithm_result.json: MultiplicationResult / DivisionResult.to_contract()
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterator, Optional

import jsonschema
from jsonschema import Draft202012Validator, ValidationError

logger = logging.getLogger(__name__)


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов с кэшированием.

    По умолчанию схемы ищутся в contracts/schema/ в корне проекта.
    """

    def __init__(self, schema_dir: Optional[Path] = None):
        # Корень проекта: 4 уровня вверх от этого файла
        self._schema_dir = schema_dir or Path(__file__).parent.parent.parent.parent / "contracts" / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        self._schemas: Dict[str, Dict[str, Any]] = {}

    @property
    def schema_dir(self) -> Path:
        return self._schema_dir

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'number')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если схема не проходит meta-validation
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}")

        logger.debug("Loaded schema %s", schema_path)
        self._schemas[schema_name] = schema
        return schema


# Глобальный экземпляр загрузчика
_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """Базовый валидатор: данные против одной JSON Schema."""

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Raises:
            ValidationError: Если данные не соответствуют схеме
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]) -> Iterator[ValidationError]:
        """Все ошибки валидации (без остановки на первой)."""
        return self.validator.iter_errors(data)


class NumberValidator(ContractValidator):
    """Валидатор сериализованного Number."""

    def __init__(self):
        super().__init__("number")


class DiagnosticRecordValidator(ContractValidator):
    """Валидатор записи журнала ошибок."""

    def __init__(self):
        super().__init__("diagnostic_record")


class AlgorithmResultValidator(ContractValidator):
    """Валидатор результата умножения или деления."""

    def __init__(self):
        super().__init__("algorithm_result")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_number(data: Dict[str, Any]) -> None:
    """
    Валидация сериализованного Number.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    NumberValidator().validate(data)


def validate_diagnostic_record(data: Dict[str, Any]) -> None:
    """
    Валидация записи журнала ошибок.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    DiagnosticRecordValidator().validate(data)


def validate_algorithm_result(data: Dict[str, Any]) -> None:
    """
    Валидация результата регистрового алгоритма.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    AlgorithmResultValidator().validate(data)
