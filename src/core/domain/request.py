"""
GenerationRequest — Модель запроса на генерацию наблюдений

Immutable Pydantic модель: число наблюдений и seed. Неотрицательность
проверяется моделью, верхние границы зависят от GeneratorConfig и
проверяются в validate_request.
"""

from pydantic import BaseModel, Field, ValidationError

from src.core.domain.config import GeneratorConfig


# =============================================================================
# EXCEPTIONS
# =============================================================================


class InputValidationError(ValueError):
    """
    Невалидный запрос: число наблюдений или seed вне допустимых границ.

    Восстановимая ошибка на границе системы: вызывающий печатает usage
    и завершается с ошибкой, частичный вывод не производится.
    """

    pass


# =============================================================================
# REQUEST MODEL
# =============================================================================


class GenerationRequest(BaseModel):
    """Запрос на генерацию num_observations наблюдений для seed."""

    num_observations: int = Field(..., ge=0, description="Число наблюдений")
    seed: int = Field(..., ge=0, description="Seed генератора")

    model_config = {"frozen": True}


def validate_request(request: GenerationRequest, config: GeneratorConfig) -> None:
    """
    Проверка запроса против лимитов конфигурации.

    Args:
        request: Запрос на генерацию
        config: Конфигурация генератора

    Raises:
        InputValidationError: Если num_observations > max_observations
            или seed > max_seed
    """
    if request.num_observations > config.max_observations:
        raise InputValidationError(
            f"num_observations must be <= {config.max_observations}, "
            f"got {request.num_observations}"
        )

    if request.seed > config.max_seed:
        raise InputValidationError(
            f"seed must be <= {config.max_seed}, got {request.seed}"
        )


def make_request(
    num_observations: int, seed: int, config: GeneratorConfig
) -> GenerationRequest:
    """
    Построение и проверка запроса одним вызовом.

    Raises:
        InputValidationError: Если значения отрицательные, не целые
            или превышают лимиты конфигурации
    """
    try:
        request = GenerationRequest(num_observations=num_observations, seed=seed)
    except ValidationError as e:
        raise InputValidationError(str(e)) from e

    validate_request(request, config)
    return request
