"""
Coercion — конверсия сырых значений на границе API

Тонкий слой, приводящий слабо типизированный ввод к точным видам, с которыми
работает движок: int произвольной точности для exact time, int для
календарных полей, snake_case ключи для field bags.
"""

import math
import operator
from collections.abc import Mapping
from typing import Any

from pydantic.alias_generators import to_snake

from src.core.errors import ArgumentTypeError, RangeValidationError


def to_big_int(value: Any) -> int:
    """
    Конверсия: аргумент exact time -> int

    Принимает int, целочисленные строки (десятичные или с префиксом 0x/0o/0b)
    и объекты с __index__. Float отклоняется: он не несёт наносекундной
    точности.

    Raises:
        ArgumentTypeError: Для None, float и прочих нецелых видов
        RangeValidationError: Для строк, не являющихся целыми числами
    """
    if isinstance(value, int):
        return int(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0
        try:
            return int(text, 10)
        except ValueError:
            pass
        try:
            return int(text, 0)
        except ValueError:
            raise RangeValidationError(f"cannot convert {value!r} to an integer") from None
    if value is None or isinstance(value, float):
        raise ArgumentTypeError(f"cannot convert {value!r} to an integer")
    try:
        return operator.index(value)
    except TypeError:
        raise ArgumentTypeError(
            f"cannot convert {type(value).__name__} to an integer"
        ) from None


def to_integer_field(value: Any, name: str) -> int:
    """
    Конверсия: значение календарного поля -> int с отбрасыванием дробной части

    Raises:
        ArgumentTypeError: Если значение не число
        RangeValidationError: Если значение бесконечно или NaN
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ArgumentTypeError(f"{name} must be a number, got {type(value).__name__}")
    if isinstance(value, float):
        if not math.isfinite(value):
            raise RangeValidationError(f"{name} must be finite, got {value}")
        return math.trunc(value)
    return value


def to_field_bag(fields: Any) -> dict[str, Any]:
    """
    Конверсия: mapping -> dict со snake_case ключами (`eraYear` -> `era_year`)

    Raises:
        ArgumentTypeError: Если `fields` не mapping
    """
    if not isinstance(fields, Mapping):
        raise ArgumentTypeError(f"expected a mapping, got {type(fields).__name__}")
    return {to_snake(str(key)): value for key, value in fields.items()}


def to_integral_number(value: Any, name: str) -> int:
    """
    Конверсия: целое число -> int, дроби отклоняются

    Целочисленные float принимаются (1e26 становится ближайшим int).

    Raises:
        ArgumentTypeError: Если значение не число
        RangeValidationError: Если значение бесконечно, NaN или дробное
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ArgumentTypeError(f"{name} must be a number, got {type(value).__name__}")
    if isinstance(value, float):
        if not math.isfinite(value):
            raise RangeValidationError(f"{name} must be finite, got {value}")
        if not value.is_integer():
            raise RangeValidationError(f"{name} must be an integer, got {value}")
        return int(value)
    return value
