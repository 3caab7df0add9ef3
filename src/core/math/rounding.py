"""
Rounding — точное округление целых и дробей до increment

Величины — int или fractions.Fraction, никогда не float, поэтому округление
точно при любой величине.

Режимы:
- nearest: половина от нуля
- ceil: к +infinity
- floor: к -infinity
- trunc: к нулю
"""

import math
from fractions import Fraction
from typing import Optional, Union

from src.core.errors import RangeValidationError
from src.core.options import RoundingMode

Quantity = Union[int, Fraction]


# =============================================================================
# ОКРУГЛЕНИЕ
# =============================================================================


def round_to_integer(quantity: Quantity, mode: RoundingMode) -> int:
    """
    Округление величины до целого.

    Examples:
        >>> round_to_integer(Fraction(5, 2), RoundingMode.NEAREST)
        3
        >>> round_to_integer(Fraction(-5, 2), RoundingMode.NEAREST)
        -3
        >>> round_to_integer(Fraction(-5, 2), RoundingMode.FLOOR)
        -3
    """
    if mode is RoundingMode.CEIL:
        return math.ceil(quantity)
    if mode is RoundingMode.FLOOR:
        return math.floor(quantity)
    if mode is RoundingMode.TRUNC:
        return math.trunc(quantity)
    # nearest: половина от нуля
    magnitude = math.floor(abs(quantity) + Fraction(1, 2))
    return -magnitude if quantity < 0 else magnitude


def round_number_to_increment(
    quantity: Quantity, increment: int, mode: RoundingMode
) -> int:
    """
    Округление величины до кратного `increment`.

    Args:
        quantity: Округляемое значение (int или Fraction)
        increment: Положительный целый increment
        mode: Режим округления

    Returns:
        Округлённое кратное `increment`
    """
    if increment <= 0:
        raise RangeValidationError(f"rounding increment must be positive, got {increment}")
    return round_to_integer(Fraction(quantity) / increment, mode) * increment


def negate_rounding_mode(mode: RoundingMode) -> RoundingMode:
    """Меняет местами ceil и floor; остальные режимы симметричны."""
    if mode is RoundingMode.CEIL:
        return RoundingMode.FLOOR
    if mode is RoundingMode.FLOOR:
        return RoundingMode.CEIL
    return mode


# =============================================================================
# ВАЛИДАЦИЯ INCREMENT
# =============================================================================


def validate_rounding_increment(
    increment: int, dividend: Optional[int], inclusive: bool
) -> int:
    """
    Валидация rounding increment по максимуму его единицы.

    Args:
        increment: Запрошенный increment
        dividend: Максимум для единицы (None, если максимума нет)
        inclusive: Может ли increment равняться максимуму

    Returns:
        Increment без изменений

    Raises:
        RangeValidationError: Если increment вне диапазона или не делит
            максимум нацело
    """
    if dividend is None:
        maximum = None
    elif inclusive:
        maximum = dividend
    else:
        maximum = dividend - 1 if dividend > 1 else 1

    if increment < 1 or (maximum is not None and increment > maximum):
        raise RangeValidationError(
            f"rounding increment {increment} out of range (maximum {maximum})"
        )
    if dividend is not None and dividend % increment != 0:
        raise RangeValidationError(
            f"rounding increment {increment} must evenly divide {dividend}"
        )
    return increment
