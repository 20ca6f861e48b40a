"""PRNG на безопасных простых Софи Жермен.

Поток псевдослучайных десятичных цифр как разложение 1/q, где q —
безопасное простое, однозначно выбранное по seed.
"""

from .observation_generator import (
    ObservationGenerator,
    compute_lower_bound,
    expand_reciprocal_digits,
    generate,
)
from .safe_prime_search import (
    MAX_PERIOD_RESIDUES_MOD_20,
    PrimeGapViolation,
    SafePrimeSearchExhausted,
    SafePrimeSearchResult,
    find_safe_prime_from,
    is_safe_prime,
    search_safe_prime,
)

__all__ = [
    "ObservationGenerator",
    "compute_lower_bound",
    "expand_reciprocal_digits",
    "generate",
    "MAX_PERIOD_RESIDUES_MOD_20",
    "PrimeGapViolation",
    "SafePrimeSearchExhausted",
    "SafePrimeSearchResult",
    "find_safe_prime_from",
    "is_safe_prime",
    "search_safe_prime",
]
