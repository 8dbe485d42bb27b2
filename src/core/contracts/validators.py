"""
JSON Schema Contract Validators

Модуль для валидации экспортируемых JSON снапшотов леджера согласно
формальным JSON Schema контрактам. Использует библиотеку jsonschema.

Схемы:
- policy.json (запись полиса)
- ledger_state.json (полный снапшот леджера)
"""

import json
from pathlib import Path
from typing import Any, Dict

import jsonschema
from jsonschema import Draft202012Validator, ValidationError


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Схемы лежат в schema/ рядом с модулем и устанавливаются как package data.
    """

    def __init__(self):
        self._schema_dir = Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла (с кэшированием).

        Args:
            schema_name: Имя схемы без расширения (например, 'policy')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если файл не является валидной JSON Schema
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        # meta-validation
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}")

        self._schemas[schema_name] = schema
        return schema


_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Базовый класс для валидаторов контрактов.

    Инкапсулирует логику валидации данных против JSON Schema.
    """

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Валидация данных против схемы.

        Raises:
            ValidationError: Если данные не соответствуют схеме
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]):
        """Итератор по всем ошибкам валидации."""
        return self.validator.iter_errors(data)


class PolicyValidator(ContractValidator):
    """Валидатор для policy контракта."""

    def __init__(self):
        super().__init__("policy")


class LedgerStateValidator(ContractValidator):
    """Валидатор для ledger_state контракта."""

    def __init__(self):
        super().__init__("ledger_state")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_policy(data: Dict[str, Any]) -> None:
    """
    Валидация policy данных.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    PolicyValidator().validate(data)


def validate_ledger_state(data: Dict[str, Any]) -> None:
    """
    Валидация ledger_state данных.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    LedgerStateValidator().validate(data)


__all__ = [
    "ValidationError",
    "SchemaLoader",
    "ContractValidator",
    "PolicyValidator",
    "LedgerStateValidator",
    "validate_policy",
    "validate_ledger_state",
]
