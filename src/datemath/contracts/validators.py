"""
JSON Schema Contract Validators

Модуль для валидации JSON данных согласно формальным JSON Schema контрактам.
Использует библиотеку jsonschema для проверки соответствия данных схемам.

Схемы (contracts/schema/):
- resolve_request.json: запрос на разрешение выражения
- operation.json: сериализованная Operation
"""

import json
from pathlib import Path
from typing import Any, Dict

import jsonschema
from jsonschema import Draft202012Validator


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Схемы поставляются вместе с пакетом в contracts/schema/.
    """

    def __init__(self, schema_dir: Path | None = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Кэш загруженных схем
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'resolve_request')

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
        """Проверка валидности данных без exception."""
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]):
        return self.validator.iter_errors(data)


class ResolveRequestValidator(ContractValidator):
    """Валидатор для resolve_request контракта."""

    def __init__(self):
        super().__init__("resolve_request")


class OperationValidator(ContractValidator):
    """Валидатор для operation контракта."""

    def __init__(self):
        super().__init__("operation")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_resolve_request(data: Dict[str, Any]) -> None:
    """
    Валидация resolve_request данных.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    ResolveRequestValidator().validate(data)


def validate_operation(data: Dict[str, Any]) -> None:
    """
    Валидация сериализованной Operation.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    OperationValidator().validate(data)
