"""
JSON Schema Contract Validators

Модуль для валидации JSON данных согласно формальным JSON Schema контрактам.
Использует библиотеку jsonschema для проверки соответствия данных схемам.

Схемы поставляются внутри пакета (src/core/contracts/schema/):
- generator_config.json (параметры генератора)
"""

import json
from importlib.resources import files
from importlib.resources.abc import Traversable
from pathlib import Path
from typing import Any, Dict, Optional

import jsonschema
from jsonschema import Draft202012Validator, ValidationError

from src.core.domain.config import GeneratorConfig


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Схемы читаются как ресурсы пакета src.core.contracts, поэтому
    доступны и из исходного дерева, и из установленного wheel.
    """

    def __init__(self):
        self._schema_dir: Traversable = files(__package__).joinpath("schema")
        if not self._schema_dir.is_dir():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Кэш загруженных схем
        self._schemas: Dict[str, Dict[str, Any]] = {}

    @property
    def schema_dir(self) -> Traversable:
        return self._schema_dir

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'generator_config')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если файл не является валидной JSON Schema
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir.joinpath(f"{schema_name}.json")
        if not schema_path.is_file():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        schema = json.loads(schema_path.read_text(encoding="utf-8"))

        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}")

        self._schemas[schema_name] = schema
        return schema


# Глобальный экземпляр загрузчика (создаётся при первой валидации)
_SCHEMA_LOADER: Optional[SchemaLoader] = None


def get_schema_loader() -> SchemaLoader:
    """Общий SchemaLoader; схемы не читаются, пока не нужна валидация."""
    global _SCHEMA_LOADER
    if _SCHEMA_LOADER is None:
        _SCHEMA_LOADER = SchemaLoader()
    return _SCHEMA_LOADER


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
        self.schema = get_schema_loader().load_schema(schema_name)
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
        """Итератор по всем ошибкам валидации."""
        return self.validator.iter_errors(data)


class GeneratorConfigValidator(ContractValidator):
    """Валидатор для generator_config контракта."""

    def __init__(self):
        super().__init__("generator_config")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_generator_config(data: Dict[str, Any]) -> None:
    """
    Валидация generator_config данных.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    GeneratorConfigValidator().validate(data)


def load_generator_config(path: str | Path) -> GeneratorConfig:
    """
    Загрузка конфигурации генератора из JSON файла.

    Файл сначала проверяется схемой generator_config, затем
    материализуется как immutable GeneratorConfig. Инварианты
    переполнения здесь не проверяются (см. ensure_valid_configuration).

    Args:
        path: Путь к JSON файлу

    Returns:
        GeneratorConfig

    Raises:
        FileNotFoundError: Если файл не найден
        json.JSONDecodeError: Если файл не является валидным JSON
        ValidationError: Если данные не соответствуют схеме
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    validate_generator_config(data)
    return GeneratorConfig(**data)


__all__ = [
    "SchemaLoader",
    "ContractValidator",
    "GeneratorConfigValidator",
    "ValidationError",
    "validate_generator_config",
    "get_schema_loader",
    "load_generator_config",
]
