"""Observation Generator — равномерная выборка из десятичной дроби 1/q.

Для seed вычисляется нижняя граница поиска:

    min_q = max_observations * digits_per_observation + 1 + seed * max_prime_gap

Окна соседних seed сдвинуты ровно на max_prime_gap, а max_prime_gap
превышает максимальный разрыв между безопасными простыми в диапазоне,
поэтому каждый seed получает своё q (инвариант: q <= min_q + max_prime_gap).
Так как q > max_observations * digits_per_observation, период 1/q не
короче запрошенного числа цифр.

Цифры извлекаются делением в столбик: r = 1; digit = 10r div q; r = 10r mod q.
"""

import logging
from typing import Iterator, Optional

from src.core.domain.config import (
    PRODUCTION_CONFIG,
    GeneratorConfig,
    ensure_valid_configuration,
)
from src.core.domain.request import make_request
from src.core.math.fixed_width import checked_add, checked_mul, narrow, widening_mul
from src.prng.safe_prime_search import SafePrimeSearchResult, search_safe_prime

logger = logging.getLogger(__name__)


def compute_lower_bound(
    seed: int,
    max_observations: int,
    digits_per_observation: int,
    max_prime_gap: int,
    width_bits: int | None = None,
) -> int:
    """Нижняя граница поиска безопасного простого для seed.

    Args:
        seed: Seed генератора
        max_observations: Максимальное число наблюдений
        digits_per_observation: Число цифр в наблюдении
        max_prime_gap: Максимальный разрыв между безопасными простыми
        width_bits: Если задана, каждая операция проверяется на переполнение

    Returns:
        max_observations * digits_per_observation + 1 + seed * max_prime_gap
    """
    if width_bits is None:
        return max_observations * digits_per_observation + 1 + seed * max_prime_gap

    digit_span = checked_mul(max_observations, digits_per_observation, width_bits)
    seed_span = checked_mul(seed, max_prime_gap, width_bits)
    return checked_add(checked_add(digit_span, 1, width_bits), seed_span, width_bits)


def expand_reciprocal_digits(
    q: int,
    num_observations: int,
    digits_per_observation: int,
    width_bits: int,
    double_width_bits: Optional[int] = None,
) -> Iterator[str]:
    """Ленивый поток наблюдений из десятичного разложения 1/q.

    Каждое наблюдение — строка "0." и ровно digits_per_observation цифр.
    Поток однопроходный; для повтора вызовите функцию заново.
    """
    r = 1
    for _ in range(num_observations):
        digits = []
        for _ in range(digits_per_observation):
            shifted = widening_mul(r, 10, width_bits, double_width_bits)
            digits.append(str(shifted // q))
            r = narrow(shifted % q, width_bits)
        yield "0." + "".join(digits)


class ObservationGenerator:
    """Генератор наблюдений для одной конфигурации.

    Конфигурация проверяется один раз в конструкторе. generate() выполняет
    поиск q сразу (ошибки возникают в момент вызова), а цифры отдаёт лениво.
    """

    def __init__(self, config: GeneratorConfig = PRODUCTION_CONFIG):
        self.config = ensure_valid_configuration(config)

    def lower_bound_for(self, seed: int) -> int:
        return compute_lower_bound(
            seed,
            self.config.max_observations,
            self.config.digits_per_observation,
            self.config.max_prime_gap,
            width_bits=self.config.width_bits,
        )

    def find_prime(self, seed: int) -> SafePrimeSearchResult:
        """Безопасное простое q для seed (с проверкой постусловий)."""
        lower_bound = self.lower_bound_for(seed)
        logger.info("Looking for a Sophie-Germain safe prime q >= %d", lower_bound)

        result = search_safe_prime(
            lower_bound,
            self.config.max_prime_gap,
            self.config.width_bits,
            self.config.intermediate_width_bits,
        )
        logger.info("Found a Sophie-Germain safe prime q = %d", result.q)
        logger.debug(
            "p = %d, %d candidates examined", result.p, result.candidates_examined
        )
        return result

    def generate(self, num_observations: int, seed: int) -> Iterator[str]:
        """Поток из num_observations наблюдений для seed.

        Raises:
            InputValidationError: если запрос вне лимитов конфигурации
            ConfigurationError: если поиск q нарушил постусловия
        """
        request = make_request(num_observations, seed, self.config)

        result = self.find_prime(request.seed)
        logger.info("Generating the decimal expansion of 1/%d...", result.q)

        return expand_reciprocal_digits(
            result.q,
            request.num_observations,
            self.config.digits_per_observation,
            self.config.width_bits,
            self.config.intermediate_width_bits,
        )


def generate(
    num_observations: int, seed: int, config: GeneratorConfig = PRODUCTION_CONFIG
) -> Iterator[str]:
    """Shortcut: ObservationGenerator(config).generate(num_observations, seed)."""
    return ObservationGenerator(config).generate(num_observations, seed)
