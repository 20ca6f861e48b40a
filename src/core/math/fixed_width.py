"""
Fixed-Width Arithmetic — эмуляция беззнаковых целых фиксированной ширины

Python int не переполняется, поэтому рабочая ширина W эмулируется явно:
- Каждый операнд проверяется на принадлежность [0, 2^W - 1]
- Каждое промежуточное произведение проверяется на [0, 2^(2W) - 1]
  (или на явно заданную промежуточную ширину)
- Переполнение не "заворачивается", а возбуждает FixedWidthOverflow

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Результат любой операции в рабочей ширине лежит в [0, 2^W - 1]
2. Произведение двух рабочих значений всегда помещается в 2W бит
3. Все проверки детерминированы и не зависят от платформы
"""

from typing import Final, Optional

# =============================================================================
# ШИРИНЫ ПО УМОЛЧАНИЮ
# =============================================================================

# Рабочая ширина production-конфигурации (uint64)
DEFAULT_WIDTH_BITS: Final[int] = 64

# Ширина тестовой конфигурации (uint16 с промежуточным uint32)
TEST_WIDTH_BITS: Final[int] = 16

# Минимально допустимая ширина (иначе не помещаются свидетели Miller-Rabin)
MIN_WIDTH_BITS: Final[int] = 8


# =============================================================================
# EXCEPTIONS
# =============================================================================


class FixedWidthOverflow(ArithmeticError):
    """
    Значение вышло за пределы рабочей (или двойной) ширины.

    Это всегда дефект конфигурации, а не ошибка пользовательского ввода:
    при корректно подобранных лимитах переполнение невозможно.
    """

    pass


# =============================================================================
# ГРАНИЦЫ ШИРИНЫ
# =============================================================================


def max_value(width_bits: int) -> int:
    """
    Максимальное беззнаковое значение для ширины width_bits.

    Args:
        width_bits: Ширина в битах (>= MIN_WIDTH_BITS)

    Returns:
        2^width_bits - 1

    Raises:
        ValueError: Если ширина меньше MIN_WIDTH_BITS

    Examples:
        >>> max_value(16)
        65535
        >>> max_value(64)
        18446744073709551615
    """
    if width_bits < MIN_WIDTH_BITS:
        raise ValueError(f"width_bits must be >= {MIN_WIDTH_BITS}, got {width_bits}")
    return (1 << width_bits) - 1


def fits_width(value: int, width_bits: int) -> bool:
    """
    Проверка, помещается ли value в беззнаковое целое ширины width_bits.

    Examples:
        >>> fits_width(65535, 16)
        True
        >>> fits_width(65536, 16)
        False
        >>> fits_width(-1, 16)
        False
    """
    return 0 <= value <= max_value(width_bits)


def require_width(value: int, name: str, width_bits: int) -> int:
    """
    Валидация операнда рабочей ширины.

    Args:
        value: Проверяемое значение
        name: Имя параметра (для сообщения об ошибке)
        width_bits: Рабочая ширина

    Returns:
        value без изменений

    Raises:
        FixedWidthOverflow: Если value вне [0, 2^width_bits - 1]
    """
    if not fits_width(value, width_bits):
        raise FixedWidthOverflow(
            f"{name}={value} does not fit in {width_bits}-bit unsigned integer"
        )
    return value


# =============================================================================
# CHECKED-ОПЕРАЦИИ
# =============================================================================


def checked_add(a: int, b: int, width_bits: int) -> int:
    """
    Сложение с проверкой переполнения рабочей ширины.

    Examples:
        >>> checked_add(65000, 535, 16)
        65535
        >>> checked_add(65000, 536, 16)  # doctest: +SKIP
        Traceback (most recent call last):
            ...
        FixedWidthOverflow: ...
    """
    require_width(a, "a", width_bits)
    require_width(b, "b", width_bits)
    return require_width(a + b, f"{a} + {b}", width_bits)


def checked_mul(a: int, b: int, width_bits: int) -> int:
    """
    Умножение с проверкой переполнения рабочей ширины.

    Эквивалент проверки (a * b) / b == a для беззнакового типа.
    """
    require_width(a, "a", width_bits)
    require_width(b, "b", width_bits)
    return require_width(a * b, f"{a} * {b}", width_bits)


def widening_mul(
    a: int, b: int, width_bits: int, double_width_bits: Optional[int] = None
) -> int:
    """
    Умножение двух значений ширины W в промежуточный тип двойной ширины.

    Промежуточная ширина по умолчанию 2W: (2^W - 1)^2 < 2^(2W), поэтому
    произведение рабочих значений всегда помещается. Более узкий
    промежуточный тип (double_width_bits < 2W) может переполниться.

    Raises:
        FixedWidthOverflow: Если операнды не помещаются в W бит
            или произведение не помещается в промежуточную ширину
    """
    require_width(a, "a", width_bits)
    require_width(b, "b", width_bits)
    if double_width_bits is None:
        double_width_bits = 2 * width_bits
    return require_width(a * b, f"{a} * {b}", double_width_bits)


def narrow(value: int, width_bits: int) -> int:
    """
    Сужение значения двойной ширины обратно в рабочую ширину.

    В отличие от C-каста значение не усекается: если оно не помещается,
    это ошибка.
    """
    return require_width(value, "narrowed value", width_bits)
