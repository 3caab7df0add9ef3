"""
Civil values — wall-clock даты и время без time zone

- PlainDate: календарная дата
- PlainTime: wall-clock время суток (только ISO календарь)
- PlainDateTime: дата и время суток
- PlainYearMonth: месяц года
- PlainMonthDay: повторяющийся день года

Все хранят ISO поля плюс календарь; календарно-специфичные поля (era, week
of year, длины месяцев...) вычисляются календарём при обращении.
"""

from collections.abc import Mapping
from typing import Any, Optional

from src.calendars.base import Calendar
from src.calendars.iso8601 import REFERENCE_ISO_DAY, REFERENCE_ISO_YEAR
from src.calendars.registry import ISO8601, to_calendar
from src.codec.parse import parse_date_time, parse_month_day, parse_time, parse_year_month
from src.codec.serialize import (
    format_calendar_annotation,
    format_iso_date,
    format_iso_date_time,
    format_iso_time,
    format_month_day,
    format_year_month,
)
from src.core.coercion import to_integer_field
from src.core.contracts.validators import validate_date_time_fields
from src.core.domain.base import TemporalValue, calendar_field, time_field
from src.core.errors import ArgumentTypeError, RangeValidationError, branded
from src.core.math.iso_calendar import (
    IsoDate,
    IsoDateTime,
    IsoTime,
    compare_iso_date,
    compare_iso_date_time,
    regulate_iso_date,
    regulate_iso_time,
    round_iso_date_time,
    validate_iso_date_time,
)
from src.core.options import (
    AssignmentOptions,
    CalendarNameDisplay,
    DisambiguationOptions,
    Overflow,
    ToStringOptions,
    normalize_options,
)
from src.core.units import TemporalUnit

TIME_FIELD_NAMES = ("hour", "minute", "second", "millisecond", "microsecond", "nanosecond")


# =============================================================================
# ХЕЛПЕРЫ
# =============================================================================


def _integers(*pairs: tuple[Any, str]) -> list[int]:
    return [to_integer_field(value, name) for value, name in pairs]


def _validate_date(iso: IsoDate) -> IsoDate:
    # Дата представима, если представим её полдень.
    validate_iso_date_time(IsoDateTime.combine(iso, IsoTime(12)))
    return iso


def _overflow(options: Any) -> Overflow:
    return normalize_options(options, AssignmentOptions).overflow


def time_from_fields(bag: Mapping[str, Any], overflow: Overflow) -> IsoTime:
    values = [to_integer_field(bag.get(name) or 0, name) for name in TIME_FIELD_NAMES]
    return regulate_iso_time(IsoTime(*values), overflow)


def _calendar_of_string(annotation: Optional[str]) -> Calendar:
    return to_calendar(annotation) if annotation else ISO8601


def _round_time_string(time: IsoTime, options: Any) -> str:
    opts = normalize_options(options, ToStringOptions)
    precision, unit, increment = opts.seconds_precision()
    rounded = round_iso_date_time(
        IsoDateTime.combine(IsoDate(1970, 1, 1), time), increment, unit, opts.rounding_mode
    )
    return format_iso_time(rounded.time, precision)


# =============================================================================
# PLAIN DATE
# =============================================================================


class PlainDate(TemporalValue):
    """
    Календарная дата.

    Args:
        iso_year, iso_month, iso_day: ISO поля, валидируются с reject
        calendar: Calendar или идентификатор (по умолчанию ISO-8601)
    """

    __slots__ = ("_iso", "_calendar")

    def __init__(self, iso_year: Any, iso_month: Any, iso_day: Any, calendar: Any = None):
        year, month, day = _integers((iso_year, "iso_year"), (iso_month, "iso_month"), (iso_day, "iso_day"))
        self._calendar = to_calendar(calendar)
        self._iso = _validate_date(regulate_iso_date(year, month, day, Overflow.REJECT))

    @classmethod
    def from_iso(cls, iso: IsoDate, calendar: Calendar) -> "PlainDate":
        return cls(iso.year, iso.month, iso.day, calendar)

    @classmethod
    def from_(cls, item: Any, options: Any = None) -> "PlainDate":
        """
        Приведение PlainDate, значения с датой, ISO строки или field bag.

        Raises:
            ArgumentTypeError: Для других видов или отсутствующих полей
            RangeValidationError: Для невалидных строк или полей вне диапазона
        """
        overflow = _overflow(options)
        if isinstance(item, PlainDate):
            return cls.from_iso(item._iso, item._calendar)
        if isinstance(item, str):
            parsed = parse_date_time(item)
            return cls.from_iso(parsed.iso.date, _calendar_of_string(parsed.calendar))
        if isinstance(item, Mapping):
            bag = validate_date_time_fields(item)
            calendar = to_calendar(bag.get("calendar"))
            return cls.from_iso(calendar.iso_date_from_fields(bag, overflow), calendar)
        iso = getattr(item, "iso_date", None)
        if isinstance(iso, IsoDate) and isinstance(getattr(item, "calendar", None), Calendar):
            return cls.from_iso(iso, item.calendar)
        raise ArgumentTypeError(f"cannot convert {type(item).__name__} to a PlainDate")

    # =========================================================================
    # ПОЛЯ
    # =========================================================================

    @property
    @branded
    def calendar(self) -> Calendar:
        return self._calendar

    @property
    @branded
    def iso_date(self) -> IsoDate:
        return self._iso

    year = calendar_field("year")
    month = calendar_field("month")
    day = calendar_field("day")
    era = calendar_field("era")
    era_year = calendar_field("era_year")
    day_of_week = calendar_field("day_of_week")
    day_of_year = calendar_field("day_of_year")
    week_of_year = calendar_field("week_of_year")
    days_in_week = calendar_field("days_in_week")
    days_in_month = calendar_field("days_in_month")
    days_in_year = calendar_field("days_in_year")
    months_in_year = calendar_field("months_in_year")
    in_leap_year = calendar_field("in_leap_year")

    @branded
    def get_iso_fields(self) -> dict[str, Any]:
        return {
            "calendar": self._calendar,
            "iso_day": self._iso.day,
            "iso_month": self._iso.month,
            "iso_year": self._iso.year,
        }

    # =========================================================================
    # КОНВЕРСИЯ
    # =========================================================================

    @branded
    def to_plain_date_time(self, time: Any = None) -> "PlainDateTime":
        iso_time = PlainTime.from_(time).iso_time if time is not None else IsoTime()
        return PlainDateTime.from_iso(IsoDateTime.combine(self._iso, iso_time), self._calendar)

    @branded
    def to_plain_year_month(self) -> "PlainYearMonth":
        fields = {"year": self.year, "month": self.month}
        return PlainYearMonth.from_iso(
            self._calendar.iso_year_month_from_fields(fields, Overflow.CONSTRAIN), self._calendar
        )

    @branded
    def to_plain_month_day(self) -> "PlainMonthDay":
        fields = {"month": self.month, "day": self.day}
        return PlainMonthDay.from_iso(
            self._calendar.iso_month_day_from_fields(fields, Overflow.CONSTRAIN), self._calendar
        )

    # =========================================================================
    # СРАВНЕНИЕ / СЕРИАЛИЗАЦИЯ
    # =========================================================================

    @branded
    def equals(self, other: Any) -> bool:
        other = PlainDate.from_(other)
        return self._iso == other._iso and self._calendar.id == other._calendar.id

    @staticmethod
    def compare(one: Any, two: Any) -> int:
        return compare_iso_date(PlainDate.from_(one)._iso, PlainDate.from_(two)._iso)

    @branded
    def to_string(self, options: Any = None) -> str:
        opts = normalize_options(options, ToStringOptions)
        return format_iso_date(self._iso) + format_calendar_annotation(self._calendar.id, opts.calendar_name)

    @branded
    def to_json(self) -> str:
        return self.to_string()

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"PlainDate({self.to_string()})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PlainDate):
            return NotImplemented
        return self._iso == other._iso and self._calendar.id == other._calendar.id

    def __hash__(self) -> int:
        return hash(("plain_date", self._iso, self._calendar.id))


# =============================================================================
# PLAIN TIME
# =============================================================================


class PlainTime(TemporalValue):
    """Wall-clock время суток; всегда в ISO календаре."""

    __slots__ = ("_iso",)

    def __init__(
        self,
        hour: Any = 0,
        minute: Any = 0,
        second: Any = 0,
        millisecond: Any = 0,
        microsecond: Any = 0,
        nanosecond: Any = 0,
    ):
        values = _integers(*zip((hour, minute, second, millisecond, microsecond, nanosecond), TIME_FIELD_NAMES))
        self._iso = regulate_iso_time(IsoTime(*values), Overflow.REJECT)

    @classmethod
    def from_(cls, item: Any, options: Any = None) -> "PlainTime":
        overflow = _overflow(options)
        if isinstance(item, PlainTime):
            return cls(*item._iso)
        if isinstance(item, str):
            time, calendar = parse_time(item)
            if calendar is not None and to_calendar(calendar).id != ISO8601.id:
                raise RangeValidationError(f"PlainTime only supports the ISO calendar, got {calendar}")
            return cls(*time)
        if isinstance(item, Mapping):
            return cls(*time_from_fields(validate_date_time_fields(item), overflow))
        iso = getattr(item, "iso_time", None)
        if isinstance(iso, IsoTime):
            return cls(*iso)
        raise ArgumentTypeError(f"cannot convert {type(item).__name__} to a PlainTime")

    @property
    @branded
    def calendar(self) -> Calendar:
        return ISO8601

    @property
    @branded
    def iso_time(self) -> IsoTime:
        return self._iso

    hour = time_field("hour")
    minute = time_field("minute")
    second = time_field("second")
    millisecond = time_field("millisecond")
    microsecond = time_field("microsecond")
    nanosecond = time_field("nanosecond")

    @branded
    def get_iso_fields(self) -> dict[str, Any]:
        fields: dict[str, Any] = {"calendar": ISO8601}
        fields.update({f"iso_{name}": value for name, value in zip(TIME_FIELD_NAMES, self._iso)})
        return fields

    @branded
    def to_plain_date_time(self, date: Any) -> "PlainDateTime":
        plain_date = PlainDate.from_(date)
        return PlainDateTime.from_iso(IsoDateTime.combine(plain_date.iso_date, self._iso), plain_date.calendar)

    @branded
    def equals(self, other: Any) -> bool:
        return self._iso == PlainTime.from_(other)._iso

    @staticmethod
    def compare(one: Any, two: Any) -> int:
        a, b = PlainTime.from_(one)._iso, PlainTime.from_(two)._iso
        return (a > b) - (a < b)

    @branded
    def to_string(self, options: Any = None) -> str:
        """HH:MM[:SS[.fraction]]; округление переходит через полночь."""
        return _round_time_string(self._iso, options)

    @branded
    def to_json(self) -> str:
        return self.to_string()

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"PlainTime({self.to_string()})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PlainTime):
            return NotImplemented
        return self._iso == other._iso

    def __hash__(self) -> int:
        return hash(("plain_time", self._iso))


# =============================================================================
# PLAIN DATE TIME
# =============================================================================


class PlainDateTime(TemporalValue):
    """
    Дата и wall-clock время в календаре, без time zone.
    """

    __slots__ = ("_iso", "_calendar")

    def __init__(
        self,
        iso_year: Any,
        iso_month: Any,
        iso_day: Any,
        hour: Any = 0,
        minute: Any = 0,
        second: Any = 0,
        millisecond: Any = 0,
        microsecond: Any = 0,
        nanosecond: Any = 0,
        calendar: Any = None,
    ):
        year, month, day = _integers((iso_year, "iso_year"), (iso_month, "iso_month"), (iso_day, "iso_day"))
        values = _integers(*zip((hour, minute, second, millisecond, microsecond, nanosecond), TIME_FIELD_NAMES))
        self._calendar = to_calendar(calendar)
        date = regulate_iso_date(year, month, day, Overflow.REJECT)
        time = regulate_iso_time(IsoTime(*values), Overflow.REJECT)
        self._iso = validate_iso_date_time(IsoDateTime.combine(date, time))

    @classmethod
    def from_iso(cls, iso: IsoDateTime, calendar: Calendar) -> "PlainDateTime":
        return cls(*iso, calendar=calendar)

    @classmethod
    def from_(cls, item: Any, options: Any = None) -> "PlainDateTime":
        """
        Приведение PlainDateTime, zoned или date значения, ISO строки или field bag.

        Raises:
            ArgumentTypeError: Для других видов или отсутствующих полей
            RangeValidationError: Для невалидных строк (включая `Z`) или
                полей вне диапазона
        """
        overflow = _overflow(options)
        if isinstance(item, PlainDateTime):
            return cls.from_iso(item._iso, item._calendar)
        if isinstance(item, str):
            parsed = parse_date_time(item)
            if parsed.utc_designator:
                raise RangeValidationError(f"{item!r}: a UTC designator has no wall-clock time")
            return cls.from_iso(parsed.iso, _calendar_of_string(parsed.calendar))
        if isinstance(item, Mapping):
            bag = validate_date_time_fields(item)
            calendar = to_calendar(bag.get("calendar"))
            date = calendar.iso_date_from_fields(bag, overflow)
            return cls.from_iso(IsoDateTime.combine(date, time_from_fields(bag, overflow)), calendar)
        to_plain_date_time = getattr(item, "to_plain_date_time", None)
        if callable(to_plain_date_time) and getattr(item, "time_zone", None) is not None:
            return to_plain_date_time()
        if isinstance(item, PlainDate):
            return cls.from_iso(IsoDateTime.combine(item.iso_date), item.calendar)
        raise ArgumentTypeError(f"cannot convert {type(item).__name__} to a PlainDateTime")

    # =========================================================================
    # ПОЛЯ
    # =========================================================================

    @property
    @branded
    def calendar(self) -> Calendar:
        return self._calendar

    @property
    @branded
    def iso_date_time(self) -> IsoDateTime:
        return self._iso

    @property
    @branded
    def iso_date(self) -> IsoDate:
        return self._iso.date

    @property
    @branded
    def iso_time(self) -> IsoTime:
        return self._iso.time

    year = calendar_field("year")
    month = calendar_field("month")
    day = calendar_field("day")
    era = calendar_field("era")
    era_year = calendar_field("era_year")
    day_of_week = calendar_field("day_of_week")
    day_of_year = calendar_field("day_of_year")
    week_of_year = calendar_field("week_of_year")
    days_in_week = calendar_field("days_in_week")
    days_in_month = calendar_field("days_in_month")
    days_in_year = calendar_field("days_in_year")
    months_in_year = calendar_field("months_in_year")
    in_leap_year = calendar_field("in_leap_year")
    hour = time_field("hour")
    minute = time_field("minute")
    second = time_field("second")
    millisecond = time_field("millisecond")
    microsecond = time_field("microsecond")
    nanosecond = time_field("nanosecond")

    @branded
    def get_iso_fields(self) -> dict[str, Any]:
        fields: dict[str, Any] = {
            "calendar": self._calendar,
            "iso_day": self._iso.day,
            "iso_month": self._iso.month,
            "iso_year": self._iso.year,
        }
        fields.update({f"iso_{name}": value for name, value in zip(TIME_FIELD_NAMES, self._iso.time)})
        return fields

    # =========================================================================
    # КОНВЕРСИЯ
    # =========================================================================

    @branded
    def to_zoned_date_time(self, time_zone: Any, options: Any = None) -> Any:
        """
        Размещение этого wall-clock времени в time zone.

        Gap и overlap разрешаются опцией `disambiguation` (по умолчанию
        compatible).
        """
        from src.core.domain.zoned_datetime import ZonedDateTime
        from src.timezones.registry import to_time_zone

        zone = to_time_zone(time_zone)
        disambiguation = normalize_options(options, DisambiguationOptions).disambiguation
        return ZonedDateTime(zone.resolve_epoch_nanoseconds(self._iso, disambiguation), zone, self._calendar)

    @branded
    def to_plain_date(self) -> PlainDate:
        return PlainDate.from_iso(self._iso.date, self._calendar)

    @branded
    def to_plain_time(self) -> PlainTime:
        return PlainTime(*self._iso.time)

    @branded
    def to_plain_year_month(self) -> "PlainYearMonth":
        return self.to_plain_date().to_plain_year_month()

    @branded
    def to_plain_month_day(self) -> "PlainMonthDay":
        return self.to_plain_date().to_plain_month_day()

    # =========================================================================
    # СРАВНЕНИЕ / СЕРИАЛИЗАЦИЯ
    # =========================================================================

    @branded
    def equals(self, other: Any) -> bool:
        other = PlainDateTime.from_(other)
        return self._iso == other._iso and self._calendar.id == other._calendar.id

    @staticmethod
    def compare(one: Any, two: Any) -> int:
        return compare_iso_date_time(PlainDateTime.from_(one)._iso, PlainDateTime.from_(two)._iso)

    @branded
    def to_string(self, options: Any = None) -> str:
        opts = normalize_options(options, ToStringOptions)
        precision, unit, increment = opts.seconds_precision()
        rounded = round_iso_date_time(self._iso, increment, unit, opts.rounding_mode)
        return format_iso_date_time(rounded, precision) + format_calendar_annotation(
            self._calendar.id, opts.calendar_name
        )

    @branded
    def to_json(self) -> str:
        return self.to_string()

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"PlainDateTime({self.to_string()})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PlainDateTime):
            return NotImplemented
        return self._iso == other._iso and self._calendar.id == other._calendar.id

    def __hash__(self) -> int:
        return hash(("plain_date_time", self._iso, self._calendar.id))


# =============================================================================
# PLAIN YEAR MONTH
# =============================================================================


class PlainYearMonth(TemporalValue):
    """Месяц года; ISO день служит reference day."""

    __slots__ = ("_iso", "_calendar")

    def __init__(
        self,
        iso_year: Any,
        iso_month: Any,
        calendar: Any = None,
        reference_iso_day: Any = REFERENCE_ISO_DAY,
    ):
        year, month, day = _integers(
            (iso_year, "iso_year"), (iso_month, "iso_month"), (reference_iso_day, "reference_iso_day")
        )
        self._calendar = to_calendar(calendar)
        self._iso = _validate_date(regulate_iso_date(year, month, day, Overflow.REJECT))

    @classmethod
    def from_iso(cls, iso: IsoDate, calendar: Calendar) -> "PlainYearMonth":
        return cls(iso.year, iso.month, calendar, iso.day)

    @classmethod
    def from_(cls, item: Any, options: Any = None) -> "PlainYearMonth":
        overflow = _overflow(options)
        if isinstance(item, PlainYearMonth):
            return cls.from_iso(item._iso, item._calendar)
        if isinstance(item, str):
            iso, annotation = parse_year_month(item)
            return cls.from_iso(IsoDate(iso.year, iso.month, REFERENCE_ISO_DAY), _calendar_of_string(annotation))
        if isinstance(item, Mapping):
            bag = validate_date_time_fields(item)
            calendar = to_calendar(bag.get("calendar"))
            return cls.from_iso(calendar.iso_year_month_from_fields(bag, overflow), calendar)
        if isinstance(item, (PlainDate, PlainDateTime)):
            return item.to_plain_year_month()
        raise ArgumentTypeError(f"cannot convert {type(item).__name__} to a PlainYearMonth")

    @property
    @branded
    def calendar(self) -> Calendar:
        return self._calendar

    @property
    @branded
    def iso_date(self) -> IsoDate:
        return self._iso

    year = calendar_field("year")
    month = calendar_field("month")
    era = calendar_field("era")
    era_year = calendar_field("era_year")
    days_in_month = calendar_field("days_in_month")
    days_in_year = calendar_field("days_in_year")
    months_in_year = calendar_field("months_in_year")
    in_leap_year = calendar_field("in_leap_year")

    @branded
    def to_plain_date(self, day: Any) -> PlainDate:
        """Соединение с днём, заданным bag вида {'day': 15}."""
        if not isinstance(day, Mapping):
            raise ArgumentTypeError("to_plain_date expects a mapping with a 'day' field")
        fields = {"year": self.year, "month": self.month, **validate_date_time_fields(day)}
        return PlainDate.from_iso(self._calendar.iso_date_from_fields(fields, Overflow.REJECT), self._calendar)

    @branded
    def equals(self, other: Any) -> bool:
        other = PlainYearMonth.from_(other)
        return self._iso == other._iso and self._calendar.id == other._calendar.id

    @staticmethod
    def compare(one: Any, two: Any) -> int:
        return compare_iso_date(PlainYearMonth.from_(one)._iso, PlainYearMonth.from_(two)._iso)

    @branded
    def to_string(self, options: Any = None) -> str:
        """YYYY-MM; другим календарям нужна полная reference дата."""
        opts = normalize_options(options, ToStringOptions)
        if self._calendar.id == ISO8601.id and opts.calendar_name is not CalendarNameDisplay.ALWAYS:
            return format_year_month(self._iso)
        return format_iso_date(self._iso) + format_calendar_annotation(self._calendar.id, opts.calendar_name)

    @branded
    def to_json(self) -> str:
        return self.to_string()

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"PlainYearMonth({self.to_string()})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PlainYearMonth):
            return NotImplemented
        return self._iso == other._iso and self._calendar.id == other._calendar.id

    def __hash__(self) -> int:
        return hash(("plain_year_month", self._iso, self._calendar.id))


# =============================================================================
# PLAIN MONTH DAY
# =============================================================================


class PlainMonthDay(TemporalValue):
    """Повторяющийся день года; ISO год служит високосным reference year."""

    __slots__ = ("_iso", "_calendar")

    def __init__(
        self,
        iso_month: Any,
        iso_day: Any,
        calendar: Any = None,
        reference_iso_year: Any = REFERENCE_ISO_YEAR,
    ):
        month, day, year = _integers(
            (iso_month, "iso_month"), (iso_day, "iso_day"), (reference_iso_year, "reference_iso_year")
        )
        self._calendar = to_calendar(calendar)
        self._iso = _validate_date(regulate_iso_date(year, month, day, Overflow.REJECT))

    @classmethod
    def from_iso(cls, iso: IsoDate, calendar: Calendar) -> "PlainMonthDay":
        return cls(iso.month, iso.day, calendar, iso.year)

    @classmethod
    def from_(cls, item: Any, options: Any = None) -> "PlainMonthDay":
        overflow = _overflow(options)
        if isinstance(item, PlainMonthDay):
            return cls.from_iso(item._iso, item._calendar)
        if isinstance(item, str):
            iso, annotation = parse_month_day(item, REFERENCE_ISO_YEAR)
            return cls.from_iso(iso, _calendar_of_string(annotation))
        if isinstance(item, Mapping):
            bag = validate_date_time_fields(item)
            calendar = to_calendar(bag.get("calendar"))
            return cls.from_iso(calendar.iso_month_day_from_fields(bag, overflow), calendar)
        if isinstance(item, (PlainDate, PlainDateTime)):
            return item.to_plain_month_day()
        raise ArgumentTypeError(f"cannot convert {type(item).__name__} to a PlainMonthDay")

    @property
    @branded
    def calendar(self) -> Calendar:
        return self._calendar

    @property
    @branded
    def iso_date(self) -> IsoDate:
        return self._iso

    month = calendar_field("month")
    day = calendar_field("day")

    @branded
    def to_plain_date(self, year: Any) -> PlainDate:
        """Соединение с годом, заданным bag вида {'year': 2021}; 02-29 зажимается."""
        if not isinstance(year, Mapping):
            raise ArgumentTypeError("to_plain_date expects a mapping with a 'year' field")
        fields = {"month": self.month, "day": self.day, **validate_date_time_fields(year)}
        return PlainDate.from_iso(self._calendar.iso_date_from_fields(fields, Overflow.CONSTRAIN), self._calendar)

    @branded
    def equals(self, other: Any) -> bool:
        other = PlainMonthDay.from_(other)
        return self._iso == other._iso and self._calendar.id == other._calendar.id

    @branded
    def to_string(self, options: Any = None) -> str:
        """MM-DD; другим календарям нужна полная reference дата."""
        opts = normalize_options(options, ToStringOptions)
        if self._calendar.id == ISO8601.id and opts.calendar_name is not CalendarNameDisplay.ALWAYS:
            return format_month_day(self._iso)
        return format_iso_date(self._iso) + format_calendar_annotation(self._calendar.id, opts.calendar_name)

    @branded
    def to_json(self) -> str:
        return self.to_string()

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"PlainMonthDay({self.to_string()})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PlainMonthDay):
            return NotImplemented
        return self._iso == other._iso and self._calendar.id == other._calendar.id

    def __hash__(self) -> int:
        return hash(("plain_month_day", self._iso, self._calendar.id))
