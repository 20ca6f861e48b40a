"""Unit тесты для Observation Generator.

Coverage:
- compute_lower_bound: формула, монотонность по seed, переполнение
- expand_reciprocal_digits: деление в столбик, формат, ленивость
- ObservationGenerator.generate: end-to-end для TEST и PRODUCTION профилей
- Детерминизм и различие q для разных seed
"""

import logging
from fractions import Fraction

import pytest

import src.prng.observation_generator as observation_generator
from src.core.domain.config import (
    PRODUCTION_CONFIG,
    TEST_CONFIG,
    ConfigurationError,
    GeneratorConfig,
)
from src.core.domain.request import InputValidationError
from src.core.math.fixed_width import FixedWidthOverflow
from src.prng.observation_generator import (
    ObservationGenerator,
    compute_lower_bound,
    expand_reciprocal_digits,
    generate,
)


@pytest.fixture
def test_generator():
    """Генератор на узкой 16-битной конфигурации."""
    return ObservationGenerator(TEST_CONFIG)


def reference_digits(q: int, count: int) -> str:
    """Первые count цифр 1/q через Fraction (независимый расчёт)."""
    scaled = Fraction(1, q) * 10**count
    return str(scaled.numerator // scaled.denominator).zfill(count)


# =============================================================================
# compute_lower_bound
# =============================================================================


class TestComputeLowerBound:
    """Нижняя граница поиска."""

    def test_test_profile_seed_zero(self):
        assert compute_lower_bound(0, 255, 2, 616) == 511

    def test_production_seed_zero(self):
        assert compute_lower_bound(0, 2**32 - 1, 15, 17904) == 64424509426

    def test_strictly_increasing_by_gap(self):
        """Соседние seed сдвинуты ровно на max_prime_gap."""
        bounds = [compute_lower_bound(s, 255, 2, 616) for s in range(16)]
        for lower, upper in zip(bounds, bounds[1:]):
            assert upper - lower == 616

    def test_checked_matches_unchecked(self):
        for seed in (0, 1, 65535):
            assert compute_lower_bound(
                seed, 2**32 - 1, 15, 17904, width_bits=64
            ) == compute_lower_bound(seed, 2**32 - 1, 15, 17904)

    def test_checked_overflow_raises(self):
        with pytest.raises(FixedWidthOverflow):
            compute_lower_bound(200, 255, 2, 616, width_bits=16)


# =============================================================================
# expand_reciprocal_digits
# =============================================================================


class TestExpandReciprocalDigits:
    """Поток цифр 1/q."""

    def test_known_expansion_863(self):
        assert list(expand_reciprocal_digits(863, 5, 2, 16)) == [
            "0.00",
            "0.11",
            "0.58",
            "0.74",
            "0.85",
        ]

    def test_matches_fraction_reference(self):
        for q in (863, 1367, 9887):
            digits = "".join(
                group[2:] for group in expand_reciprocal_digits(q, 40, 2, 16)
            )
            assert digits == reference_digits(q, 80)

    def test_zero_observations(self):
        assert list(expand_reciprocal_digits(863, 0, 2, 16)) == []

    def test_lazy_and_single_pass(self):
        stream = expand_reciprocal_digits(863, 2, 2, 16)
        assert next(stream) == "0.00"
        assert next(stream) == "0.11"
        with pytest.raises(StopIteration):
            next(stream)

    def test_narrow_intermediate_overflows(self):
        """10 * r проверяется по промежуточной ширине."""
        with pytest.raises(FixedWidthOverflow):
            list(expand_reciprocal_digits(9887, 40, 2, 16, double_width_bits=16))

    def test_periodic_with_period_q_minus_one(self):
        """Для q = 7 (p = 3) период 1/7 равен 6 = q - 1."""
        groups = list(expand_reciprocal_digits(7, 4, 3, 16))
        assert groups == ["0.142", "0.857", "0.142", "0.857"]


# =============================================================================
# ObservationGenerator — TEST profile
# =============================================================================


class TestGeneratorTestProfile:
    """End-to-end на 16-битной конфигурации."""

    def test_three_observations_seed_zero(self, test_generator):
        assert list(test_generator.generate(3, 0)) == ["0.00", "0.11", "0.58"]

    def test_selects_smallest_safe_prime_above_bound(self, test_generator):
        result = test_generator.find_prime(0)
        assert result.lower_bound == 511
        assert result.q == 863

    def test_format(self, test_generator):
        for group in test_generator.generate(255, 15):
            assert len(group) == TEST_CONFIG.observation_width
            assert group.startswith("0.")
            assert group[2:].isdigit() and group[2:].isascii()

    def test_exact_count(self, test_generator):
        assert len(list(test_generator.generate(255, 3))) == 255

    def test_zero_observations(self, test_generator):
        assert list(test_generator.generate(0, 0)) == []

    def test_deterministic(self, test_generator):
        first = list(test_generator.generate(50, 7))
        second = list(ObservationGenerator(TEST_CONFIG).generate(50, 7))
        assert first == second

    def test_every_seed_within_gap_and_distinct(self, test_generator):
        primes = []
        for seed in range(TEST_CONFIG.max_seed + 1):
            result = test_generator.find_prime(seed)
            assert result.q <= result.lower_bound + TEST_CONFIG.max_prime_gap
            primes.append(result.q)
        assert len(set(primes)) == len(primes)
        assert primes == sorted(primes)

    def test_distinct_seeds_distinct_streams(self, test_generator):
        assert list(test_generator.generate(20, 0)) != list(test_generator.generate(20, 1))

    def test_out_of_range_request(self, test_generator):
        with pytest.raises(InputValidationError):
            test_generator.generate(256, 0)
        with pytest.raises(InputValidationError):
            test_generator.generate(1, 16)

    def test_errors_raised_before_iteration(self, test_generator):
        """Ошибки возникают при вызове generate, а не при первой итерации."""
        with pytest.raises(InputValidationError):
            test_generator.generate(-1, 0)

    def test_logs_progress(self, test_generator, caplog):
        with caplog.at_level(logging.INFO, logger="src.prng.observation_generator"):
            list(test_generator.generate(1, 0))
        messages = [r.getMessage() for r in caplog.records]
        assert "Looking for a Sophie-Germain safe prime q >= 511" in messages
        assert "Found a Sophie-Germain safe prime q = 863" in messages
        assert "Generating the decimal expansion of 1/863..." in messages


# =============================================================================
# ObservationGenerator — PRODUCTION profile
# =============================================================================


class TestGeneratorProductionProfile:
    """64-битная конфигурация."""

    def test_three_observations_seed_zero(self):
        assert list(generate(3, 0)) == [
            "0.000000000015522",
            "0.042812197912723",
            "0.997134736012142",
        ]

    def test_format(self):
        for group in generate(10, 65535):
            assert len(group) == PRODUCTION_CONFIG.observation_width == 17
            assert group.startswith("0.")
            assert group[2:].isdigit()

    def test_seeds_within_gap(self):
        generator = ObservationGenerator()
        for seed in (0, 1, 2, 1000, 65535):
            result = generator.find_prime(seed)
            assert result.q <= result.lower_bound + PRODUCTION_CONFIG.max_prime_gap

    def test_deterministic(self):
        assert list(generate(5, 42)) == list(generate(5, 42))


# =============================================================================
# Configuration defects
# =============================================================================


class TestConfigurationDefects:
    """Дефекты конфигурации фатальны."""

    def test_invalid_config_rejected_at_construction(self):
        config = TEST_CONFIG.model_copy(update={"max_seed": 200})
        with pytest.raises(ConfigurationError):
            ObservationGenerator(config)

    def test_gap_too_small_detected(self):
        """max_prime_gap, не покрывающий разрыв, обнаруживается после поиска."""
        config = GeneratorConfig(
            width_bits=16,
            max_observations=255,
            max_seed=15,
            digits_per_observation=2,
            max_prime_gap=100,
        )
        with pytest.raises(ConfigurationError, match="max_prime_gap"):
            ObservationGenerator(config).generate(1, 0)


# =============================================================================
# Intermediate width
# =============================================================================


class TestIntermediateWidth:
    """double_width_bits конфигурации доходит до арифметики."""

    def test_configured_width_reaches_search_and_digits(self, monkeypatch):
        calls = {}
        real_search = observation_generator.search_safe_prime
        real_expand = observation_generator.expand_reciprocal_digits

        def spy_search(*args):
            calls["search"] = args
            return real_search(*args)

        def spy_expand(*args):
            calls["expand"] = args
            return real_expand(*args)

        monkeypatch.setattr(observation_generator, "search_safe_prime", spy_search)
        monkeypatch.setattr(
            observation_generator, "expand_reciprocal_digits", spy_expand
        )

        config = TEST_CONFIG.model_copy(update={"double_width_bits": 40})
        observations = list(ObservationGenerator(config).generate(3, 0))

        assert observations == ["0.00", "0.11", "0.58"]
        assert calls["search"][-1] == 40
        assert calls["expand"][-1] == 40

    def test_default_is_twice_working_width(self, monkeypatch):
        calls = {}
        real_search = observation_generator.search_safe_prime

        def spy_search(*args):
            calls["search"] = args
            return real_search(*args)

        monkeypatch.setattr(observation_generator, "search_safe_prime", spy_search)
        list(ObservationGenerator(TEST_CONFIG).generate(1, 0))
        assert calls["search"][-1] == 32
