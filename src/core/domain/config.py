"""
GeneratorConfig — Конфигурация PRNG на простых Софи Жермен

Immutable Pydantic модель, описывающая один набор параметров генератора:
рабочую ширину W, лимиты наблюдений и seed, число цифр в наблюдении и
максимальный разрыв между соседними безопасными простыми.

Две конфигурации используют одну реализацию:
- PRODUCTION_CONFIG: W = 64 (промежуточный тип 128 бит)
- TEST_CONFIG: W = 16 (промежуточный тип 32 бита), для верификации

КРИТИЧЕСКИЕ ИНВАРИАНТЫ (проверяются один раз при старте):
1. double_width_bits >= 2 * width_bits
2. max_seed * max_prime_gap помещается в W бит
3. max_observations * digits_per_observation помещается в W бит
4. max_seed * max_prime_gap + max_observations * digits_per_observation + 1
   помещается в W бит
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Final

from pydantic import BaseModel, Field, field_validator

from src.core.math.fixed_width import (
    DEFAULT_WIDTH_BITS,
    MIN_WIDTH_BITS,
    TEST_WIDTH_BITS,
    fits_width,
    max_value,
)

# =============================================================================
# PRODUCTION-ПАРАМЕТРЫ
# =============================================================================

NUM_OBSERVATIONS_MAX: Final[int] = 2**32 - 1
SEED_MAX: Final[int] = 2**16 - 1
NUM_DIGITS_PER_OBSERVATION: Final[int] = 15

# Максимальное расстояние между соседними безопасными простыми Софи Жермен,
# меньшими 2 * (NUM_OBSERVATIONS_MAX + SEED_MAX). Гарантирует хотя бы одно
# безопасное простое в каждом окне [min_q, min_q + gap] для любого seed.
NUM_PRIME_GERMAIN_GAP_MAX: Final[int] = 17904

# =============================================================================
# TEST-ПАРАМЕТРЫ (узкая ширина)
# =============================================================================

TEST_NUM_OBSERVATIONS_MAX: Final[int] = 255
TEST_SEED_MAX: Final[int] = 15
TEST_NUM_DIGITS_PER_OBSERVATION: Final[int] = 2
TEST_NUM_PRIME_GERMAIN_GAP_MAX: Final[int] = 616


# =============================================================================
# EXCEPTIONS
# =============================================================================


class ConfigurationError(Exception):
    """
    Фатальная ошибка конфигурации.

    Константы генератора подобраны так, что переполнение невозможно, а
    безопасное простое всегда находится в окне seed. Нарушение означает
    дефект сборки или неверно изменённые лимиты, а не ошибку ввода:
    работа прекращается до генерации первой цифры.
    """

    pass


# =============================================================================
# ENUMS
# =============================================================================


class ConfigProfile(str, Enum):
    """Именованный набор параметров генератора."""

    PRODUCTION = "production"
    TEST = "test"


# =============================================================================
# CONFIG MODEL
# =============================================================================


class GeneratorConfig(BaseModel):
    """
    Параметры генератора.

    Immutable модель (frozen=True). Полная совместимость с JSON Schema
    (src/core/contracts/schema/generator_config.json).
    """

    width_bits: int = Field(
        DEFAULT_WIDTH_BITS, ge=MIN_WIDTH_BITS, description="Рабочая ширина W (бит)"
    )
    double_width_bits: int | None = Field(
        None,
        ge=MIN_WIDTH_BITS,
        description="Ширина промежуточного типа для умножения (default: 2W)",
    )
    max_observations: int = Field(
        NUM_OBSERVATIONS_MAX, ge=0, description="Максимальное число наблюдений"
    )
    max_seed: int = Field(SEED_MAX, ge=0, description="Максимальный seed")
    digits_per_observation: int = Field(
        NUM_DIGITS_PER_OBSERVATION, ge=1, description="Число цифр в наблюдении"
    )
    max_prime_gap: int = Field(
        NUM_PRIME_GERMAIN_GAP_MAX,
        ge=1,
        description="Максимальный разрыв между безопасными простыми",
    )

    model_config = {"frozen": True}

    @field_validator("double_width_bits")
    @classmethod
    def validate_double_width(cls, v: int | None, info) -> int | None:
        """Промежуточный тип не может быть уже рабочего"""
        if v is not None and "width_bits" in info.data and v < info.data["width_bits"]:
            raise ValueError("double_width_bits must not be narrower than width_bits")
        return v

    @property
    def intermediate_width_bits(self) -> int:
        """Фактическая ширина промежуточного типа"""
        if self.double_width_bits is None:
            return 2 * self.width_bits
        return self.double_width_bits

    @property
    def max_working_value(self) -> int:
        """2^W - 1 (значение-сентинел поиска)"""
        return max_value(self.width_bits)

    @property
    def observation_width(self) -> int:
        """Длина строки наблюдения: "0." + цифры"""
        return self.digits_per_observation + 2


# =============================================================================
# CONFIGURATION CHECKS
# =============================================================================


@dataclass(frozen=True)
class ConfigurationCheckResult:
    """Результат проверки инвариантов конфигурации."""

    is_valid: bool
    violations: tuple[str, ...] = field(default_factory=tuple)

    @property
    def details(self) -> str:
        if self.is_valid:
            return "PASS"
        return "; ".join(self.violations)


def check_configuration(config: GeneratorConfig) -> ConfigurationCheckResult:
    """
    Проверка инвариантов переполнения без exception.

    Args:
        config: Проверяемая конфигурация

    Returns:
        ConfigurationCheckResult со списком нарушений (пустой при успехе)
    """
    width = config.width_bits
    violations: list[str] = []

    if config.intermediate_width_bits < 2 * width:
        violations.append(
            f"double_width_bits={config.intermediate_width_bits} "
            f"is narrower than 2 * width_bits={2 * width}"
        )

    for name in ("max_observations", "max_seed", "digits_per_observation", "max_prime_gap"):
        value = getattr(config, name)
        if not fits_width(value, width):
            violations.append(f"{name}={value} does not fit in {width} bits")

    seed_span = config.max_seed * config.max_prime_gap
    if not fits_width(seed_span, width):
        violations.append(
            f"(max_seed * max_prime_gap) = {seed_span} overflows {width} bits"
        )

    digit_span = config.max_observations * config.digits_per_observation
    if not fits_width(digit_span, width):
        violations.append(
            f"(max_observations * digits_per_observation) = {digit_span} "
            f"overflows {width} bits"
        )

    max_lower_bound = seed_span + digit_span + 1
    if not fits_width(max_lower_bound, width):
        violations.append(
            "(max_seed * max_prime_gap + max_observations * digits_per_observation + 1) "
            f"= {max_lower_bound} overflows {width} bits"
        )

    return ConfigurationCheckResult(
        is_valid=not violations, violations=tuple(violations)
    )


def ensure_valid_configuration(config: GeneratorConfig) -> GeneratorConfig:
    """
    Проверка инвариантов с exception.

    Returns:
        config без изменений

    Raises:
        ConfigurationError: Если хотя бы один инвариант нарушен
    """
    result = check_configuration(config)
    if not result.is_valid:
        raise ConfigurationError(f"Invalid configuration: {result.details}")
    return config


# =============================================================================
# PROFILES
# =============================================================================


PRODUCTION_CONFIG: Final[GeneratorConfig] = GeneratorConfig()

TEST_CONFIG: Final[GeneratorConfig] = GeneratorConfig(
    width_bits=TEST_WIDTH_BITS,
    max_observations=TEST_NUM_OBSERVATIONS_MAX,
    max_seed=TEST_SEED_MAX,
    digits_per_observation=TEST_NUM_DIGITS_PER_OBSERVATION,
    max_prime_gap=TEST_NUM_PRIME_GERMAIN_GAP_MAX,
)

_PROFILES: Final[dict[ConfigProfile, GeneratorConfig]] = {
    ConfigProfile.PRODUCTION: PRODUCTION_CONFIG,
    ConfigProfile.TEST: TEST_CONFIG,
}


def get_profile_config(profile: ConfigProfile | str) -> GeneratorConfig:
    """
    Конфигурация по имени профиля.

    Raises:
        ValueError: Если профиль неизвестен
    """
    return _PROFILES[ConfigProfile(profile)]
