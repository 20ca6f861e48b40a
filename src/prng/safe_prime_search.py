"""Safe Prime Search — поиск безопасных простых Софи Жермен.

Безопасное простое q = 2p + 1, где p — простое Софи Жермен. Для
генератора дополнительно требуется p mod 20 ∈ {3, 9, 11}: необходимое
условие максимального периода десятичной дроби 1/q.

Порядок проверок в is_safe_prime:
1. p mod 20 (дёшево, отсекает ~85% кандидатов)
2. is_prime(q)
3. is_prime(p)

Поиск — линейный проход вверх от нижней границы до значения-сентинела
2^W - 1 (сам сентинел не проверяется).
"""

from dataclasses import dataclass
from typing import Final, Optional

from src.core.domain.config import ConfigurationError
from src.core.math.fixed_width import DEFAULT_WIDTH_BITS, max_value, require_width
from src.core.math.primality import is_prime

# Остатки p mod 20, при которых 1/q может иметь максимальный период
MAX_PERIOD_RESIDUES_MOD_20: Final[frozenset[int]] = frozenset({3, 9, 11})


class SafePrimeSearchExhausted(ConfigurationError):
    """Безопасное простое не найдено до конца рабочего диапазона.

    При корректной конфигурации невозможно: означает переполнение
    нижней границы или неверный max_prime_gap.
    """

    pass


class PrimeGapViolation(ConfigurationError):
    """Найденное q лежит дальше max_prime_gap от нижней границы.

    Разные seed больше не гарантируют разные q: max_prime_gap
    не является верхней оценкой разрыва для текущих лимитов.
    """

    pass


@dataclass(frozen=True)
class SafePrimeSearchResult:
    """Результат поиска безопасного простого."""

    lower_bound: int
    q: int
    p: int

    # Диагностика
    candidates_examined: int

    @property
    def distance(self) -> int:
        """Расстояние от нижней границы до найденного q"""
        return self.q - self.lower_bound


def is_safe_prime(
    q: int,
    width_bits: int = DEFAULT_WIDTH_BITS,
    double_width_bits: Optional[int] = None,
) -> bool:
    """Проверка, является ли q безопасным простым Софи Жермен.

    Args:
        q: Кандидат (ширина W)
        width_bits: рабочая ширина W
        double_width_bits: промежуточная ширина (default: 2W)

    Returns:
        True если q и p = (q - 1) / 2 простые и p mod 20 ∈ {3, 9, 11}
    """
    require_width(q, "q", width_bits)
    if q < 3:
        return False

    p = (q - 1) // 2
    return (
        p % 20 in MAX_PERIOD_RESIDUES_MOD_20
        and is_prime(q, width_bits, double_width_bits)
        and is_prime(p, width_bits, double_width_bits)
    )


def find_safe_prime_from(
    lower_bound: int,
    width_bits: int = DEFAULT_WIDTH_BITS,
    double_width_bits: Optional[int] = None,
) -> Optional[int]:
    """Первое безопасное простое q >= lower_bound.

    Args:
        lower_bound: Включительная нижняя граница (ширина W)
        width_bits: рабочая ширина W
        double_width_bits: промежуточная ширина (default: 2W)

    Returns:
        Найденное q или None, если до 2^W - 1 безопасных простых нет
    """
    require_width(lower_bound, "lower_bound", width_bits)
    sentinel = max_value(width_bits)

    for q_candidate in range(lower_bound, sentinel):
        if is_safe_prime(q_candidate, width_bits, double_width_bits):
            return q_candidate

    return None


def search_safe_prime(
    lower_bound: int,
    max_prime_gap: int,
    width_bits: int = DEFAULT_WIDTH_BITS,
    double_width_bits: Optional[int] = None,
) -> SafePrimeSearchResult:
    """Поиск с проверкой постусловий.

    Args:
        lower_bound: Включительная нижняя граница
        max_prime_gap: Допустимое расстояние q - lower_bound
        width_bits: рабочая ширина W
        double_width_bits: промежуточная ширина (default: 2W)

    Returns:
        SafePrimeSearchResult

    Raises:
        SafePrimeSearchExhausted: если q не найдено
        PrimeGapViolation: если q > lower_bound + max_prime_gap
    """
    q = find_safe_prime_from(lower_bound, width_bits, double_width_bits)
    if q is None:
        raise SafePrimeSearchExhausted(
            f"Invalid configuration: no Sophie-Germain safe prime q >= {lower_bound} "
            f"below {max_value(width_bits)} (numeric overflow?)"
        )

    if q > lower_bound + max_prime_gap:
        raise PrimeGapViolation(
            f"Invalid configuration: q={q} exceeds lower_bound + max_prime_gap = "
            f"{lower_bound} + {max_prime_gap} (incorrect max_prime_gap)"
        )

    return SafePrimeSearchResult(
        lower_bound=lower_bound,
        q=q,
        p=(q - 1) // 2,
        candidates_examined=q - lower_bound + 1,
    )
