"""Unit тесты для Safe Prime Search.

Coverage:
- is_safe_prime: известные безопасные простые, фильтр p mod 20
- find_safe_prime_from: первый подходящий q, сентинел 2^W - 1
- search_safe_prime: постусловия (exhausted, gap violation)
"""

import pytest
from sympy import isprime

from src.core.domain.config import ConfigurationError
from src.prng.safe_prime_search import (
    MAX_PERIOD_RESIDUES_MOD_20,
    PrimeGapViolation,
    SafePrimeSearchExhausted,
    SafePrimeSearchResult,
    find_safe_prime_from,
    is_safe_prime,
    search_safe_prime,
)


def oracle_is_safe_prime(q: int) -> bool:
    p = (q - 1) // 2
    return q >= 3 and isprime(q) and isprime(p) and p % 20 in (3, 9, 11)


# =============================================================================
# is_safe_prime
# =============================================================================


class TestIsSafePrime:
    """Предикат безопасного простого."""

    def test_residues(self):
        assert MAX_PERIOD_RESIDUES_MOD_20 == {3, 9, 11}

    def test_q_23_accepted(self):
        """q=23, p=11: оба простые, 11 mod 20 = 11."""
        assert is_safe_prime(23)

    def test_q_11_rejected_by_residue(self):
        """q=11, p=5: оба простые, но 5 mod 20 = 5."""
        assert not is_safe_prime(11)

    def test_accepted_examples(self):
        for q in (7, 23, 47, 59, 167, 863, 1367):
            assert is_safe_prime(q), q

    def test_safe_primes_with_wrong_residue_rejected(self):
        """Безопасные простые, не проходящие фильтр максимального периода."""
        for q in (5, 11, 83, 107, 563, 587, 719, 839):
            assert not is_safe_prime(q), q

    def test_p_composite_rejected(self):
        """q=19 простое, p=9 mod 20 = 9, но p составное."""
        assert not is_safe_prime(19)

    def test_q_composite_rejected(self):
        """p=43 простое, 43 mod 20 = 3, но q=87=3*29."""
        assert not is_safe_prime(87)

    def test_tiny_values(self):
        for q in (0, 1, 2, 3, 4):
            assert not is_safe_prime(q)

    def test_sweep_matches_oracle(self):
        for q in range(0, 12000):
            assert is_safe_prime(q, width_bits=16) == oracle_is_safe_prime(q), q


# =============================================================================
# find_safe_prime_from
# =============================================================================


class TestFindSafePrimeFrom:
    """Линейный поиск вверх."""

    def test_from_zero(self):
        assert find_safe_prime_from(0) == 7

    def test_lower_bound_inclusive(self):
        assert find_safe_prime_from(23) == 23
        assert find_safe_prime_from(24) == 47

    def test_skips_filtered_safe_prime(self):
        """11 — безопасное простое, но не проходит фильтр."""
        assert find_safe_prime_from(8) == 23

    def test_test_profile_seed_zero(self):
        """Наименьшее подходящее q >= 255 * 2 + 1 = 511."""
        assert find_safe_prime_from(511, width_bits=16) == 863

    def test_sentinel_not_examined(self):
        """Поиск от 2^W - 1 не проверяет ни одного кандидата."""
        assert find_safe_prime_from(65535, width_bits=16) is None

    def test_production_range(self):
        """Первое подходящее q в production-диапазоне для seed 0."""
        q = find_safe_prime_from(64424509426)
        assert q == 64424509847
        assert oracle_is_safe_prime(q)


# =============================================================================
# search_safe_prime
# =============================================================================


class TestSearchSafePrime:
    """Поиск с проверкой постусловий."""

    def test_result_fields(self):
        result = search_safe_prime(511, 616, width_bits=16)
        assert isinstance(result, SafePrimeSearchResult)
        assert result.lower_bound == 511
        assert result.q == 863
        assert result.p == 431
        assert result.distance == 352
        assert result.candidates_examined == 353

    def test_gap_violation(self):
        with pytest.raises(PrimeGapViolation, match="max_prime_gap"):
            search_safe_prime(511, 100, width_bits=16)

    def test_gap_boundary_inclusive(self):
        """q == lower_bound + max_prime_gap допустимо."""
        result = search_safe_prime(511, 352, width_bits=16)
        assert result.q == 863

    def test_exhausted(self):
        with pytest.raises(SafePrimeSearchExhausted):
            search_safe_prime(65535, 616, width_bits=16)

    def test_errors_are_configuration_errors(self):
        assert issubclass(SafePrimeSearchExhausted, ConfigurationError)
        assert issubclass(PrimeGapViolation, ConfigurationError)
