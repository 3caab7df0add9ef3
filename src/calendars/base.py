"""
Calendar — capability interface календарной системы

Календарь переводит свои civil-поля (year, month, day, era...) в ISO даты и
обратно, знает длины месяцев и лет и выполняет арифметику дат под overflow
policy. Календари — stateless singleton'ы, сравниваемые по идентификатору.

Все date-аргументы — ISO записи (IsoDate / IsoDateTime) или значения,
отдающие такую запись через атрибут `iso_date`.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from typing import Any, Optional

from src.core.contracts.validators import validate_date_time_fields
from src.core.errors import ArgumentTypeError
from src.core.math.iso_calendar import IsoDate, IsoDateTime
from src.core.options import AssignmentOptions, Overflow, normalize_options
from src.core.units import TemporalUnit


def iso_date_of(value: Any) -> IsoDate:
    """
    Извлечение ISO даты из date-like значения.

    Raises:
        ArgumentTypeError: Если у значения нет ISO даты
    """
    if isinstance(value, IsoDateTime):
        return value.date
    if isinstance(value, IsoDate):
        return value
    iso = getattr(value, "iso_date", None)
    if isinstance(iso, IsoDate):
        return iso
    raise ArgumentTypeError(f"expected a date, got {type(value).__name__}")


class Calendar(ABC):
    """Capability календаря."""

    __slots__ = ()

    @property
    @abstractmethod
    def id(self) -> str:
        """Идентификатор календаря, например 'iso8601'"""

    # -------------------------------------------------------------------------
    # Доступ к полям
    # -------------------------------------------------------------------------

    @abstractmethod
    def year(self, date: Any) -> int: ...

    @abstractmethod
    def month(self, date: Any) -> int: ...

    @abstractmethod
    def day(self, date: Any) -> int: ...

    @abstractmethod
    def era(self, date: Any) -> Optional[str]: ...

    @abstractmethod
    def era_year(self, date: Any) -> Optional[int]: ...

    @abstractmethod
    def day_of_week(self, date: Any) -> int: ...

    @abstractmethod
    def day_of_year(self, date: Any) -> int: ...

    @abstractmethod
    def week_of_year(self, date: Any) -> int: ...

    @abstractmethod
    def days_in_week(self, date: Any) -> int: ...

    @abstractmethod
    def days_in_month(self, date: Any) -> int: ...

    @abstractmethod
    def days_in_year(self, date: Any) -> int: ...

    @abstractmethod
    def months_in_year(self, date: Any) -> int: ...

    @abstractmethod
    def in_leap_year(self, date: Any) -> bool: ...

    # -------------------------------------------------------------------------
    # Разрешение полей
    # -------------------------------------------------------------------------

    @abstractmethod
    def iso_date_from_fields(self, fields: Mapping[str, Any], overflow: Overflow) -> IsoDate:
        """Разрешение провалидированных snake_case полей в ISO дату."""

    @abstractmethod
    def iso_year_month_from_fields(self, fields: Mapping[str, Any], overflow: Overflow) -> IsoDate:
        """Разрешение year и month; ISO день берётся reference day."""

    @abstractmethod
    def iso_month_day_from_fields(self, fields: Mapping[str, Any], overflow: Overflow) -> IsoDate:
        """Разрешение month и day; ISO год берётся reference year."""

    def fields(self, names: Iterable[str]) -> list[str]:
        """Имена полей, нужные календарю вместо данных ISO имён."""
        return list(names)

    # -------------------------------------------------------------------------
    # Арифметика
    # -------------------------------------------------------------------------

    @abstractmethod
    def date_add(
        self,
        date: Any,
        years: int,
        months: int,
        weeks: int,
        days: int,
        overflow: Overflow,
    ) -> IsoDate: ...

    @abstractmethod
    def date_until(
        self, one: Any, two: Any, largest_unit: TemporalUnit
    ) -> tuple[int, int, int, int]:
        """(years, months, weeks, days) от `one` до `two`."""

    # -------------------------------------------------------------------------
    # Идентичность
    # -------------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Calendar):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(("calendar", self.id))

    def __str__(self) -> str:
        return self.id

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.id}>"

    def to_json(self) -> str:
        return self.id

    # -------------------------------------------------------------------------
    # Построение значений
    # -------------------------------------------------------------------------

    def date_from_fields(self, fields: Mapping[str, Any], options: Any = None) -> Any:
        """Построение PlainDate в этом календаре из field bag."""
        from src.core.domain.civil import PlainDate

        overflow = normalize_options(options, AssignmentOptions).overflow
        bag = validate_date_time_fields(fields)
        return PlainDate.from_iso(self.iso_date_from_fields(bag, overflow), self)

    def year_month_from_fields(self, fields: Mapping[str, Any], options: Any = None) -> Any:
        """Построение PlainYearMonth в этом календаре из field bag."""
        from src.core.domain.civil import PlainYearMonth

        overflow = normalize_options(options, AssignmentOptions).overflow
        bag = validate_date_time_fields(fields)
        return PlainYearMonth.from_iso(self.iso_year_month_from_fields(bag, overflow), self)

    def month_day_from_fields(self, fields: Mapping[str, Any], options: Any = None) -> Any:
        """Построение PlainMonthDay в этом календаре из field bag."""
        from src.core.domain.civil import PlainMonthDay

        overflow = normalize_options(options, AssignmentOptions).overflow
        bag = validate_date_time_fields(fields)
        return PlainMonthDay.from_iso(self.iso_month_day_from_fields(bag, overflow), self)
