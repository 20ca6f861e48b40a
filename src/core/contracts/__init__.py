"""
Contract Validation Module

Модуль для валидации JSON контрактов генератора.
"""

from .validators import (
    ContractValidator,
    GeneratorConfigValidator,
    SchemaLoader,
    get_schema_loader,
    load_generator_config,
    validate_generator_config,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "GeneratorConfigValidator",
    # Functions
    "get_schema_loader",
    "validate_generator_config",
    "load_generator_config",
]
