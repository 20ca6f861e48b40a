"""
Modular Arithmetic — mul_mod / pow_mod для беззнаковых целых ширины W

Модуль обеспечивает точную модульную арифметику без переполнения:
- mul_mod: произведение расширяется до 2W бит, затем редуцируется по p
- pow_mod: бинарное возведение в степень (square-and-multiply), O(log y)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Все операнды и результаты лежат в [0, 2^W - 1]
2. Промежуточное произведение лежит в [0, 2^(2W) - 1]
3. Результат mul_mod строго меньше p, поэтому сужение до W бит безопасно
4. pow_mod(x, y, 1) == 0 без единой итерации

ФОРМУЛЫ:
    mul_mod(x, y, p) = (x * y) mod p
    pow_mod(x, y, p) = x^y mod p
"""

from typing import Optional

from src.core.math.fixed_width import (
    DEFAULT_WIDTH_BITS,
    narrow,
    require_width,
    widening_mul,
)


# =============================================================================
# MUL MOD
# =============================================================================


def mul_mod(
    x: int,
    y: int,
    p: int,
    width_bits: int = DEFAULT_WIDTH_BITS,
    double_width_bits: Optional[int] = None,
) -> int:
    """
    Вычисление (x * y) mod p без переполнения рабочей ширины.

    Произведение формируется в промежуточном типе двойной ширины,
    редуцируется по p и сужается обратно (результат < p <= 2^W - 1).

    Args:
        x: Первый множитель (ширина W)
        y: Второй множитель (ширина W)
        p: Модуль (ширина W, > 0)
        width_bits: Рабочая ширина W (default: 64)
        double_width_bits: Промежуточная ширина (default: 2W)

    Returns:
        (x * y) mod p

    Raises:
        ValueError: Если p == 0
        FixedWidthOverflow: Если операнды не помещаются в W бит
            или произведение в промежуточную ширину

    Examples:
        >>> mul_mod(3, 4, 5)
        2
        >>> mul_mod(2**64 - 1, 2**64 - 1, 2**64 - 59)
        3364
    """
    require_width(p, "p", width_bits)
    if p == 0:
        raise ValueError("modulus p must be positive, got 0")

    product = widening_mul(x, y, width_bits, double_width_bits)
    return narrow(product % p, width_bits)


# =============================================================================
# POW MOD
# =============================================================================


def pow_mod(
    x: int,
    y: int,
    p: int,
    width_bits: int = DEFAULT_WIDTH_BITS,
    double_width_bits: Optional[int] = None,
) -> int:
    """
    Вычисление x^y mod p бинарным возведением в степень.

    Биты показателя обходятся от младшего к старшему: на каждом шаге
    основание возводится в квадрат, показатель делится пополам, и при
    единичном бите аккумулятор домножается на текущую степень основания.

    Args:
        x: Основание (ширина W)
        y: Показатель (ширина W)
        p: Модуль (ширина W, > 0)
        width_bits: Рабочая ширина W (default: 64)
        double_width_bits: Промежуточная ширина (default: 2W)

    Returns:
        x^y mod p (0 при p == 1)

    Raises:
        ValueError: Если p == 0
        FixedWidthOverflow: Если операнды не помещаются в W бит
            или произведение в промежуточную ширину

    Examples:
        >>> pow_mod(2, 10, 1000)
        24
        >>> pow_mod(7, 0, 13)
        1
        >>> pow_mod(5, 3, 1)
        0
    """
    require_width(x, "x", width_bits)
    require_width(y, "y", width_bits)
    require_width(p, "p", width_bits)
    if p == 0:
        raise ValueError("modulus p must be positive, got 0")

    # Любое число по модулю 1 равно 0
    if p == 1:
        return 0

    result = 1
    base = x % p
    exponent = y

    while exponent > 0:
        if exponent % 2 == 1:
            result = mul_mod(result, base, p, width_bits, double_width_bits)
        base = mul_mod(base, base, p, width_bits, double_width_bits)
        exponent //= 2

    return result
