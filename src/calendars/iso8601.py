"""
ISO8601Calendar — пролептический календарь ISO-8601

Календарь по умолчанию для всех значений. Месяцы и годы следуют правилам
Gregorian, продолженным назад без эр; пропуска года ноль нет.
"""

from collections.abc import Mapping
from typing import Any, Final, Optional

from src.calendars.base import Calendar, iso_date_of
from src.core.coercion import to_integer_field
from src.core.errors import ArgumentTypeError
from src.core.math import iso_calendar
from src.core.math.iso_calendar import IsoDate
from src.core.options import Overflow
from src.core.units import TemporalUnit

#: Високосный год-якорь для month-day значений, чтобы 02-29 был представим.
REFERENCE_ISO_YEAR: Final[int] = 1972
REFERENCE_ISO_DAY: Final[int] = 1


def require_field(fields: Mapping[str, Any], name: str) -> int:
    """
    Получение обязательного целого поля.

    Raises:
        ArgumentTypeError: Если поля нет
        RangeValidationError: Если поле бесконечно или NaN
    """
    if fields.get(name) is None:
        raise ArgumentTypeError(f"required property {name!r} is missing")
    return to_integer_field(fields[name], name)


class ISO8601Calendar(Calendar):
    """Календарь с идентификатором 'iso8601'."""

    __slots__ = ()

    @property
    def id(self) -> str:
        return "iso8601"

    # -------------------------------------------------------------------------
    # Доступ к полям
    # -------------------------------------------------------------------------

    def year(self, date: Any) -> int:
        return iso_date_of(date).year

    def month(self, date: Any) -> int:
        return iso_date_of(date).month

    def day(self, date: Any) -> int:
        return iso_date_of(date).day

    def era(self, date: Any) -> Optional[str]:
        iso_date_of(date)
        return None

    def era_year(self, date: Any) -> Optional[int]:
        iso_date_of(date)
        return None

    def day_of_week(self, date: Any) -> int:
        return iso_calendar.day_of_week(iso_date_of(date))

    def day_of_year(self, date: Any) -> int:
        return iso_calendar.day_of_year(iso_date_of(date))

    def week_of_year(self, date: Any) -> int:
        return iso_calendar.week_of_year(iso_date_of(date))

    def days_in_week(self, date: Any) -> int:
        iso_date_of(date)
        return iso_calendar.DAYS_IN_WEEK

    def days_in_month(self, date: Any) -> int:
        iso = iso_date_of(date)
        return iso_calendar.days_in_month(iso.year, iso.month)

    def days_in_year(self, date: Any) -> int:
        return iso_calendar.days_in_year(iso_date_of(date).year)

    def months_in_year(self, date: Any) -> int:
        iso_date_of(date)
        return iso_calendar.MONTHS_IN_YEAR

    def in_leap_year(self, date: Any) -> bool:
        return iso_calendar.is_leap_year(iso_date_of(date).year)

    # -------------------------------------------------------------------------
    # Разрешение полей
    # -------------------------------------------------------------------------

    def resolve_year(self, fields: Mapping[str, Any]) -> int:
        return require_field(fields, "year")

    def iso_date_from_fields(self, fields: Mapping[str, Any], overflow: Overflow) -> IsoDate:
        year = self.resolve_year(fields)
        month = require_field(fields, "month")
        day = require_field(fields, "day")
        return iso_calendar.regulate_iso_date(year, month, day, overflow)

    def iso_year_month_from_fields(self, fields: Mapping[str, Any], overflow: Overflow) -> IsoDate:
        year = self.resolve_year(fields)
        month = require_field(fields, "month")
        return iso_calendar.regulate_iso_date(year, month, REFERENCE_ISO_DAY, overflow)

    def iso_month_day_from_fields(self, fields: Mapping[str, Any], overflow: Overflow) -> IsoDate:
        month = require_field(fields, "month")
        day = require_field(fields, "day")
        has_year = any(fields.get(name) is not None for name in ("year", "era", "era_year"))
        # Заданный год ограничивает день (02-29 только в високосные годы).
        year = self.resolve_year(fields) if has_year else REFERENCE_ISO_YEAR
        regulated = iso_calendar.regulate_iso_date(year, month, day, overflow)
        return IsoDate(REFERENCE_ISO_YEAR, regulated.month, regulated.day)

    # -------------------------------------------------------------------------
    # Арифметика
    # -------------------------------------------------------------------------

    def date_add(
        self,
        date: Any,
        years: int,
        months: int,
        weeks: int,
        days: int,
        overflow: Overflow,
    ) -> IsoDate:
        return iso_calendar.add_iso_date(iso_date_of(date), years, months, weeks, days, overflow)

    def date_until(
        self, one: Any, two: Any, largest_unit: TemporalUnit
    ) -> tuple[int, int, int, int]:
        return iso_calendar.difference_iso_date(iso_date_of(one), iso_date_of(two), largest_unit)
