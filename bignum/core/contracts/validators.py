"""
JSON Schema Contract Validators

Валидация внешних payload'ов bignum по JSON Schema (draft 2020-12).
Схемы лежат в пакете: bignum/core/contracts/schema/.

Схемы:
- big_number.json: {"value": "<decimal>", "scale": N}
- numeral_systems.json: {"systems": [{"name": ..., "alphabet": ...}]}
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterator, Mapping

import jsonschema
from jsonschema import Draft202012Validator, ValidationError

SCHEMA_DIR = Path(__file__).parent / "schema"


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов с кэшем и meta-validation.

    Args:
        schema_dir: Каталог со схемами (по умолчанию схемы пакета)
    """

    def __init__(self, schema_dir: Path = SCHEMA_DIR):
        self._schema_dir = Path(schema_dir)
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'big_number')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Файл схемы не найден
            ValueError: Файл не является валидной JSON Schema
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
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}") from e

        self._schemas[schema_name] = schema
        return schema


_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """Валидация данных против одной JSON Schema."""

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Mapping[str, Any]) -> None:
        """
        Raises:
            ValidationError: Данные не соответствуют схеме
        """
        self.validator.validate(data)

    def is_valid(self, data: Mapping[str, Any]) -> bool:
        return self.validator.is_valid(data)

    def iter_errors(self, data: Mapping[str, Any]) -> Iterator[ValidationError]:
        return self.validator.iter_errors(data)


class BigNumberValidator(ContractValidator):
    def __init__(self):
        super().__init__("big_number")


class NumeralSystemsValidator(ContractValidator):
    def __init__(self):
        super().__init__("numeral_systems")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_big_number(data: Mapping[str, Any]) -> None:
    """
    Валидация payload BigNumber.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    BigNumberValidator().validate(data)


def validate_numeral_systems(data: Mapping[str, Any]) -> None:
    """
    Валидация определений пользовательских систем счисления.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    NumeralSystemsValidator().validate(data)
