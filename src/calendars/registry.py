"""
Calendar registry — поиск по идентификатору и приведение аргументов
"""

from typing import Any, Final

from src.calendars.base import Calendar
from src.calendars.gregorian import GregorianCalendar
from src.calendars.iso8601 import ISO8601Calendar
from src.codec.parse import parse_calendar_string
from src.core.errors import ArgumentTypeError, RangeValidationError


ISO8601: Final[Calendar] = ISO8601Calendar()
GREGORY: Final[Calendar] = GregorianCalendar()

CALENDARS: Final[dict[str, Calendar]] = {
    ISO8601.id: ISO8601,
    GREGORY.id: GREGORY,
}


def get_iso8601_calendar() -> Calendar:
    return ISO8601


def get_calendar(calendar_id: str) -> Calendar:
    """
    Поиск календаря по идентификатору (без учёта регистра).

    Raises:
        RangeValidationError: Если календаря с таким идентификатором нет
    """
    calendar = CALENDARS.get(calendar_id.lower())
    if calendar is None:
        raise RangeValidationError(f"invalid calendar identifier {calendar_id!r}")
    return calendar


def to_calendar(value: Any) -> Calendar:
    """
    Приведение аргумента calendar.

    Принимает None (ISO календарь), Calendar, идентификатор, строку с
    аннотацией `[u-ca=...]` или любое значение с атрибутом `calendar`.

    Raises:
        ArgumentTypeError: Для значения любого другого вида
        RangeValidationError: Для неизвестного идентификатора
    """
    if value is None:
        return ISO8601
    if isinstance(value, Calendar):
        return value
    if isinstance(value, str):
        return get_calendar(parse_calendar_string(value))
    nested = getattr(value, "calendar", None)
    if isinstance(nested, Calendar):
        return nested
    raise ArgumentTypeError(f"cannot convert {type(value).__name__} to a calendar")


def compare_calendars(one: Calendar, two: Calendar) -> int:
    """Порядок календарей по идентификатору: -1, 0 или 1."""
    return (one.id > two.id) - (one.id < two.id)


def assert_same_calendar(one: Calendar, two: Calendar) -> None:
    """
    Raises:
        RangeValidationError: Если календари различаются (с обоими идентификаторами)
    """
    if one.id != two.id:
        raise RangeValidationError(
            f"cannot compute difference between dates of {one.id} and {two.id} calendars"
        )
