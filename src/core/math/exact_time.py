"""
Exact Time — наносекундная арифметика на линейной оси времени

Все значения exact time — обычные Python int, считающие наносекунды от
1970-01-01T00:00:00Z. Python int имеет произвольную точность, поэтому ни одна
операция модуля не переполняется и не теряет точность.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Поддерживаемые instant лежат в пределах ±10^8 дней от epoch (включительно)
2. Epoch-getter'ы отбрасывают дробную часть к нулю, а не floor
3. Float никогда не попадает в путь exact time
"""

from typing import Final

from src.core.errors import RangeValidationError

# =============================================================================
# КОНСТАНТЫ ЕДИНИЦ
# =============================================================================

NS_PER_MICROSECOND: Final[int] = 1_000
NS_PER_MILLISECOND: Final[int] = 1_000_000
NS_PER_SECOND: Final[int] = 1_000_000_000
NS_PER_MINUTE: Final[int] = 60 * NS_PER_SECOND
NS_PER_HOUR: Final[int] = 60 * NS_PER_MINUTE
NS_PER_DAY: Final[int] = 24 * NS_PER_HOUR

SECONDS_PER_DAY: Final[int] = 86_400

# =============================================================================
# ПОДДЕРЖИВАЕМЫЙ ДИАПАЗОН
# =============================================================================

# 10^8 дней в обе стороны от epoch
MAX_EPOCH_DAYS: Final[int] = 100_000_000

EPOCH_NANOSECONDS_MAX: Final[int] = MAX_EPOCH_DAYS * NS_PER_DAY
EPOCH_NANOSECONDS_MIN: Final[int] = -EPOCH_NANOSECONDS_MAX

# Civil datetime может выходить за диапазон instant не более чем на сутки:
# у каждого поддерживаемого instant есть civil-представление в любом offset.
CIVIL_NANOSECONDS_MAX: Final[int] = EPOCH_NANOSECONDS_MAX + NS_PER_DAY
CIVIL_NANOSECONDS_MIN: Final[int] = EPOCH_NANOSECONDS_MIN - NS_PER_DAY


def is_valid_epoch_nanoseconds(epoch_nanoseconds: int) -> bool:
    """Проверка exact time на попадание в диапазон instant."""
    return EPOCH_NANOSECONDS_MIN <= epoch_nanoseconds <= EPOCH_NANOSECONDS_MAX


def validate_epoch_nanoseconds(epoch_nanoseconds: int) -> int:
    """
    Валидация exact time по поддерживаемому диапазону instant.

    Args:
        epoch_nanoseconds: Наносекунды от epoch

    Returns:
        Значение без изменений

    Raises:
        RangeValidationError: Если значение вне ±10^8 дней
    """
    if not is_valid_epoch_nanoseconds(epoch_nanoseconds):
        raise RangeValidationError(
            f"epoch nanoseconds {epoch_nanoseconds} outside of the supported range "
            f"[{EPOCH_NANOSECONDS_MIN}, {EPOCH_NANOSECONDS_MAX}]"
        )
    return epoch_nanoseconds


def validate_civil_nanoseconds(utc_nanoseconds: int) -> int:
    """
    Валидация civil datetime, выраженного как UTC, по civil-диапазону.

    Raises:
        RangeValidationError: Если civil datetime не представим
    """
    if not CIVIL_NANOSECONDS_MIN < utc_nanoseconds < CIVIL_NANOSECONDS_MAX:
        raise RangeValidationError("date-time outside of the supported range")
    return utc_nanoseconds


# =============================================================================
# ДЕЛЕНИЕ
# =============================================================================


def trunc_div(dividend: int, divisor: int) -> int:
    """
    Целочисленное деление с отбрасыванием к нулю.

    Examples:
        >>> trunc_div(7, 2)
        3
        >>> trunc_div(-7, 2)
        -3
    """
    quotient = abs(dividend) // abs(divisor)
    if (dividend < 0) != (divisor < 0):
        return -quotient
    return quotient


def trunc_divmod(dividend: int, divisor: int) -> tuple[int, int]:
    """Truncating divmod: остаток имеет знак делимого."""
    quotient = trunc_div(dividend, divisor)
    return quotient, dividend - quotient * divisor


def sign(value: int) -> int:
    """Знак целого: -1, 0 или 1."""
    return (value > 0) - (value < 0)
