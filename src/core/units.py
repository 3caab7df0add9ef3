"""
TemporalUnits — единственное место, где temporal-единицы названы и упорядочены

Единицы идут от years до nanoseconds. Date-единицы (year, month, week, day)
не имеют фиксированной длины; только time-единицы переводятся в фиксированное
число наносекунд.

Принимаются и singular, и plural написания ("hour" и "hours").
Смешивать единицы в обход этого модуля запрещено.
"""

from enum import Enum
from typing import Final

from src.core.errors import RangeValidationError
from src.core.math.exact_time import (
    NS_PER_DAY,
    NS_PER_HOUR,
    NS_PER_MICROSECOND,
    NS_PER_MILLISECOND,
    NS_PER_MINUTE,
    NS_PER_SECOND,
)


# =============================================================================
# ЕДИНИЦЫ
# =============================================================================


class TemporalUnit(str, Enum):
    """Temporal-единица, от крупной к мелкой"""

    YEAR = "year"
    MONTH = "month"
    WEEK = "week"
    DAY = "day"
    HOUR = "hour"
    MINUTE = "minute"
    SECOND = "second"
    MILLISECOND = "millisecond"
    MICROSECOND = "microsecond"
    NANOSECOND = "nanosecond"

    @classmethod
    def _missing_(cls, value: object) -> "TemporalUnit | None":
        if isinstance(value, str) and value.endswith("s"):
            singular = value[:-1]
            for member in cls:
                if member.value == singular:
                    return member
        return None

    @property
    def plural(self) -> str:
        """Plural-написание, оно же имя соответствующего поля Duration"""
        return self.value + "s"

    @property
    def is_date_unit(self) -> bool:
        return self in DATE_UNITS


#: Единицы от крупной к мелкой.
UNIT_ORDER: Final[tuple[TemporalUnit, ...]] = tuple(TemporalUnit)

DATE_UNITS: Final[frozenset[TemporalUnit]] = frozenset(
    (TemporalUnit.YEAR, TemporalUnit.MONTH, TemporalUnit.WEEK, TemporalUnit.DAY)
)

TIME_UNITS: Final[tuple[TemporalUnit, ...]] = UNIT_ORDER[4:]

#: Фиксированные длины в наносекундах; DAY считается 24-часовым.
NANOSECONDS_PER_UNIT: Final[dict[TemporalUnit, int]] = {
    TemporalUnit.DAY: NS_PER_DAY,
    TemporalUnit.HOUR: NS_PER_HOUR,
    TemporalUnit.MINUTE: NS_PER_MINUTE,
    TemporalUnit.SECOND: NS_PER_SECOND,
    TemporalUnit.MILLISECOND: NS_PER_MILLISECOND,
    TemporalUnit.MICROSECOND: NS_PER_MICROSECOND,
    TemporalUnit.NANOSECOND: 1,
}

#: Верхняя граница rounding increment для каждой единицы при округлении datetime.
MAXIMUM_INCREMENTS: Final[dict[TemporalUnit, int]] = {
    TemporalUnit.DAY: 1,
    TemporalUnit.HOUR: 24,
    TemporalUnit.MINUTE: 60,
    TemporalUnit.SECOND: 60,
    TemporalUnit.MILLISECOND: 1000,
    TemporalUnit.MICROSECOND: 1000,
    TemporalUnit.NANOSECOND: 1000,
}


# =============================================================================
# КОНВЕРТЕРЫ
# =============================================================================


def to_unit(value: "TemporalUnit | str") -> TemporalUnit:
    """
    Конверсия: имя единицы -> TemporalUnit

    Raises:
        RangeValidationError: Если имя не является temporal-единицей
    """
    try:
        return TemporalUnit(value)
    except ValueError:
        raise RangeValidationError(f"invalid temporal unit {value!r}") from None


def unit_rank(unit: TemporalUnit) -> int:
    """Позиция единицы в UNIT_ORDER; меньший rank означает более крупную единицу."""
    return UNIT_ORDER.index(unit)


def larger_of_two_units(one: TemporalUnit, two: TemporalUnit) -> TemporalUnit:
    """Более крупная из двух единиц."""
    return one if unit_rank(one) <= unit_rank(two) else two


def unit_nanoseconds(unit: TemporalUnit) -> int:
    """
    Конверсия: time-единица -> наносекунды

    Raises:
        RangeValidationError: Для year, month и week, у которых нет фиксированной длины
    """
    try:
        return NANOSECONDS_PER_UNIT[unit]
    except KeyError:
        raise RangeValidationError(f"{unit.value} has no fixed length") from None


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def validate_unit_range(largest: TemporalUnit, smallest: TemporalUnit) -> None:
    """
    Проверка, что `largest` не мельче `smallest`.

    Raises:
        RangeValidationError: Если границы перепутаны
    """
    if unit_rank(largest) > unit_rank(smallest):
        raise RangeValidationError(
            f"largest unit {largest.value} cannot be smaller than "
            f"smallest unit {smallest.value}"
        )
