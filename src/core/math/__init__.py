"""
Core math modules для PRNG на простых Софи Жермен

Целочисленные примитивы фиксированной ширины с гарантией отсутствия переполнения.
"""

# Fixed-width arithmetic
from src.core.math.fixed_width import (
    # Width constants
    DEFAULT_WIDTH_BITS,
    MIN_WIDTH_BITS,
    TEST_WIDTH_BITS,
    # Exceptions
    FixedWidthOverflow,
    # Width bounds
    fits_width,
    max_value,
    require_width,
    # Checked operations
    checked_add,
    checked_mul,
    narrow,
    widening_mul,
)

# Modular arithmetic
from src.core.math.modular import mul_mod, pow_mod

# Primality
from src.core.math.primality import (
    DETERMINISTIC_LIMIT,
    MILLER_RABIN_WITNESSES,
    decompose_odd_part,
    is_prime,
    passes_witness,
)

__all__ = [
    # Fixed-width — Constants
    "DEFAULT_WIDTH_BITS",
    "MIN_WIDTH_BITS",
    "TEST_WIDTH_BITS",
    # Fixed-width — Exceptions
    "FixedWidthOverflow",
    # Fixed-width — Functions
    "fits_width",
    "max_value",
    "require_width",
    "checked_add",
    "checked_mul",
    "narrow",
    "widening_mul",
    # Modular arithmetic
    "mul_mod",
    "pow_mod",
    # Primality — Constants
    "DETERMINISTIC_LIMIT",
    "MILLER_RABIN_WITNESSES",
    # Primality — Functions
    "decompose_odd_part",
    "is_prime",
    "passes_witness",
]
