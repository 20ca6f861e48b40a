"""
Primality — детерминированный тест Миллера-Рабина

Фиксированный набор свидетелей (первые 12 простых) делает тест
детерминированным (ноль ложноположительных) для всех n < 3.317 * 10^24,
то есть для любого 64-битного и тем более 16-битного значения.

Алгоритм:
    1. n <= 37: точная проверка принадлежности набору свидетелей
    2. n чётное: составное
    3. n - 1 = d * 2^r, d нечётное
    4. Для каждого свидетеля a: x = a^d mod n;
       проход, если x == 1 или x == n - 1, иначе до r - 1 возведений
       в квадрат в поисках n - 1
    5. Первый непрошедший свидетель → составное (short-circuit)
"""

from typing import Final, Optional

from src.core.math.fixed_width import DEFAULT_WIDTH_BITS, require_width
from src.core.math.modular import mul_mod, pow_mod

# =============================================================================
# СВИДЕТЕЛИ
# =============================================================================

# Отсортированы по возрастанию: последний элемент — граница точной проверки
MILLER_RABIN_WITNESSES: Final[tuple[int, ...]] = (
    2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37,
)

# Верхняя граница n, для которой набор гарантирует детерминизм
# (Sorenson & Webster, 2015: ψ12 = 318665857834031151167461)
DETERMINISTIC_LIMIT: Final[int] = 318665857834031151167461

_LARGEST_WITNESS: Final[int] = MILLER_RABIN_WITNESSES[-1]
_WITNESS_SET: Final[frozenset[int]] = frozenset(MILLER_RABIN_WITNESSES)


# =============================================================================
# ВСПОМОГАТЕЛЬНЫЕ ФУНКЦИИ
# =============================================================================


def decompose_odd_part(n_minus_one: int) -> tuple[int, int]:
    """
    Разложение n - 1 = d * 2^r с нечётным d.

    Args:
        n_minus_one: Чётное положительное число

    Returns:
        (d, r)

    Examples:
        >>> decompose_odd_part(40)
        (5, 3)
        >>> decompose_odd_part(7)
        (7, 0)
    """
    if n_minus_one <= 0:
        raise ValueError(f"n_minus_one must be positive, got {n_minus_one}")

    d = n_minus_one
    r = 0
    while d % 2 == 0:
        r += 1
        d //= 2
    return d, r


def passes_witness(
    n: int,
    d: int,
    r: int,
    witness: int,
    width_bits: int = DEFAULT_WIDTH_BITS,
    double_width_bits: Optional[int] = None,
) -> bool:
    """
    Проверка одного свидетеля Миллера-Рабина.

    Args:
        n: Нечётный кандидат > 3
        d: Нечётная часть n - 1
        r: Степень двойки в n - 1 (2^r * d == n - 1)
        witness: Свидетель
        width_bits: Рабочая ширина
        double_width_bits: Промежуточная ширина (default: 2W)

    Returns:
        True, если witness не доказывает составность n
    """
    x = pow_mod(witness, d, n, width_bits, double_width_bits)
    if x == 1 or x == n - 1:
        return True

    for _ in range(r - 1):
        x = mul_mod(x, x, n, width_bits, double_width_bits)
        if x == n - 1:
            return True

    return False


# =============================================================================
# PRIMALITY TEST
# =============================================================================


def is_prime(
    n: int,
    width_bits: int = DEFAULT_WIDTH_BITS,
    double_width_bits: Optional[int] = None,
) -> bool:
    """
    Детерминированная проверка простоты.

    Args:
        n: Кандидат (ширина W)
        width_bits: Рабочая ширина W (default: 64)
        double_width_bits: Промежуточная ширина (default: 2W)

    Returns:
        True если n простое, False иначе

    Raises:
        FixedWidthOverflow: Если n не помещается в W бит

    Examples:
        >>> is_prime(2)
        True
        >>> is_prime(1)
        False
        >>> is_prime(3215031751)  # сильное псевдопростое по 2, 3, 5, 7
        False
        >>> is_prime(2**61 - 1)
        True
    """
    require_width(n, "n", width_bits)

    if n <= _LARGEST_WITNESS:
        return n in _WITNESS_SET

    if n % 2 == 0:
        return False

    d, r = decompose_odd_part(n - 1)

    for witness in MILLER_RABIN_WITNESSES:
        if not passes_witness(n, d, r, witness, width_bits, double_width_bits):
            return False

    return True
