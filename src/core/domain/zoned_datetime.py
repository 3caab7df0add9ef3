"""
ZonedDateTime — exact time в паре с time zone и календарём

Хранимое состояние: (epoch nanoseconds, TimeZone, Calendar); источник истины
— exact time. Wall-clock поля вычисляются при каждом обращении: offset
запрашивается у зоны, значения полей у календаря.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Epoch nanoseconds в пределах ±10^8 дней, проверяется при создании
2. Civil-поля никогда не хранятся; with_time_zone()/with_calendar() сохраняют
   exact time и не переразрешают wall clock
3. equals() сравнивает exact time, id зоны и id календаря; compare()
   упорядочивает по exact time, затем id календаря, затем id зоны
4. a.since(b) есть отрицание a.until(b), вычисленного с противоположным
   направлением округления
"""

from collections.abc import Mapping
from typing import Any, Optional, Union

from src.calendars.base import Calendar
from src.calendars.registry import ISO8601, assert_same_calendar, compare_calendars, to_calendar
from src.codec.display import BasicDateTimeFormat, DateTimeFormat
from src.codec.parse import parse_date_time, parse_offset_string
from src.codec.serialize import (
    format_calendar_annotation,
    format_iso_date_time,
    format_offset_string,
)
from src.core.coercion import to_big_int, to_field_bag
from src.core.contracts.validators import validate_date_time_fields, validate_zoned_date_time_like
from src.core.domain.arithmetic import add_zoned, difference_zoned, interpret_offset
from src.core.domain.base import TemporalValue, calendar_field, time_field
from src.core.domain.civil import (
    PlainDate,
    PlainDateTime,
    PlainMonthDay,
    PlainTime,
    PlainYearMonth,
    time_from_fields,
)
from src.core.domain.duration import Duration
from src.core.domain.instant import Instant
from src.core.errors import ArgumentTypeError, RangeValidationError, branded
from src.core.math.exact_time import (
    NS_PER_HOUR,
    NS_PER_MICROSECOND,
    NS_PER_MILLISECOND,
    NS_PER_SECOND,
    trunc_div,
    validate_epoch_nanoseconds,
)
from src.core.math.iso_calendar import (
    IsoDate,
    IsoDateTime,
    IsoTime,
    add_iso_date,
    iso_date_time_to_epoch_nanoseconds,
    round_iso_date_time,
)
from src.core.math.rounding import (
    negate_rounding_mode,
    round_number_to_increment,
    validate_rounding_increment,
)
from src.core.options import (
    AssignmentOptions,
    DifferenceOptions,
    Disambiguation,
    FromOptions,
    OffsetDisplay,
    OffsetPolicy,
    Overflow,
    ResolutionOptions,
    RoundOptions,
    TimeZoneNameDisplay,
    ToStringOptions,
    normalize_options,
)
from src.core.units import (
    MAXIMUM_INCREMENTS,
    TemporalUnit,
    larger_of_two_units,
    unit_nanoseconds,
    validate_unit_range,
)
from src.timezones.base import TimeZone
from src.timezones.registry import compare_time_zones, to_time_zone


class ZonedDateTime(TemporalValue):
    """
    Exact time в time zone и календаре.

    Args:
        epoch_nanoseconds: int или целочисленная строка
        time_zone: TimeZone, идентификатор или объект с `time_zone`
        calendar: Calendar, идентификатор или None для ISO-8601

    Raises:
        ArgumentTypeError: Если аргумент не приводится
        RangeValidationError: Если exact time вне диапазона или идентификатор
            неизвестен
    """

    __slots__ = ("_epoch_nanoseconds", "_time_zone", "_calendar", "_instant")

    def __init__(self, epoch_nanoseconds: Any, time_zone: Any, calendar: Any = None):
        nanoseconds = to_big_int(epoch_nanoseconds)
        self._time_zone: TimeZone = to_time_zone(time_zone)
        self._calendar: Calendar = to_calendar(calendar)
        self._epoch_nanoseconds = validate_epoch_nanoseconds(nanoseconds)
        self._instant = Instant(nanoseconds)

    def _derive(self, epoch_nanoseconds: int) -> "ZonedDateTime":
        return ZonedDateTime(epoch_nanoseconds, self._time_zone, self._calendar)

    # =========================================================================
    # ПОСТРОЕНИЕ ИЗ ДРУГИХ ЗНАЧЕНИЙ
    # =========================================================================

    @classmethod
    def from_(cls, item: Any, options: Any = None) -> "ZonedDateTime":
        """
        Приведение ZonedDateTime, канонической строки или field bag.

        ZonedDateTime копируется как есть; options влияют только на конверсию.
        Строка обязана содержать зону в скобках; `Z` фиксирует exact time,
        числовой offset сверяется с зоной согласно `offset`.

        Args:
            item: Конвертируемое значение
            options: overflow, disambiguation, offset (по умолчанию reject)

        Raises:
            ArgumentTypeError: Для других видов или bag без time_zone
            RangeValidationError: Для некорректных строк, невалидных полей
                или конфликтующего offset при reject
        """
        opts = normalize_options(options, FromOptions)
        if isinstance(item, ZonedDateTime):
            return cls(item._epoch_nanoseconds, item._time_zone, item._calendar)
        if isinstance(item, str):
            return cls._from_string(item, opts)
        if isinstance(item, Mapping):
            bag = validate_zoned_date_time_like(item)
            return cls._from_fields(bag, to_time_zone(bag["time_zone"]), to_calendar(bag.get("calendar")), opts)
        raise ArgumentTypeError(f"cannot convert {type(item).__name__} to a ZonedDateTime")

    @classmethod
    def _from_string(cls, text: str, opts: FromOptions) -> "ZonedDateTime":
        parsed = parse_date_time(text)
        if parsed.time_zone is None:
            raise RangeValidationError(f"{text!r}: a ZonedDateTime string requires a time zone annotation")
        time_zone = to_time_zone(parsed.time_zone)
        calendar = to_calendar(parsed.calendar) if parsed.calendar else ISO8601
        if parsed.utc_designator:
            nanoseconds = validate_epoch_nanoseconds(iso_date_time_to_epoch_nanoseconds(parsed.iso))
        else:
            nanoseconds = interpret_offset(
                parsed.iso, time_zone, parsed.offset_nanoseconds, opts.offset, opts.disambiguation
            )
        return cls(nanoseconds, time_zone, calendar)

    @classmethod
    def _from_fields(
        cls,
        bag: Mapping[str, Any],
        time_zone: TimeZone,
        calendar: Calendar,
        opts: Union[FromOptions, ResolutionOptions],
    ) -> "ZonedDateTime":
        date = calendar.iso_date_from_fields(bag, opts.overflow)
        time = time_from_fields(bag, opts.overflow)
        offset = bag.get("offset")
        offset_nanoseconds = parse_offset_string(offset) if offset is not None else None
        nanoseconds = interpret_offset(
            IsoDateTime.combine(date, time), time_zone, offset_nanoseconds, opts.offset, opts.disambiguation
        )
        return cls(nanoseconds, time_zone, calendar)

    # =========================================================================
    # ХРАНИМОЕ СОСТОЯНИЕ
    # =========================================================================

    @property
    @branded
    def time_zone(self) -> TimeZone:
        return self._time_zone

    @property
    @branded
    def calendar(self) -> Calendar:
        return self._calendar

    @property
    @branded
    def epoch_seconds(self) -> int:
        return trunc_div(self._epoch_nanoseconds, NS_PER_SECOND)

    @property
    @branded
    def epoch_milliseconds(self) -> int:
        return trunc_div(self._epoch_nanoseconds, NS_PER_MILLISECOND)

    @property
    @branded
    def epoch_microseconds(self) -> int:
        return trunc_div(self._epoch_nanoseconds, NS_PER_MICROSECOND)

    @property
    @branded
    def epoch_nanoseconds(self) -> int:
        return self._epoch_nanoseconds

    # =========================================================================
    # ПРОИЗВОДНЫЕ CIVIL-ПОЛЯ
    # =========================================================================

    @property
    @branded
    def iso_date_time(self) -> IsoDateTime:
        """Wall-clock ISO поля, пересчитанные по offset зоны."""
        return self._time_zone.iso_date_time_at(self._epoch_nanoseconds)

    @property
    @branded
    def iso_date(self) -> IsoDate:
        return self.iso_date_time.date

    @property
    @branded
    def iso_time(self) -> IsoTime:
        return self.iso_date_time.time

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

    @property
    @branded
    def offset_nanoseconds(self) -> int:
        return self._time_zone.offset_nanoseconds_at(self._epoch_nanoseconds)

    @property
    @branded
    def offset(self) -> str:
        """Действующий UTC offset, например '-04:00'."""
        return format_offset_string(self.offset_nanoseconds)

    def _start_of_day_nanoseconds(self, date: IsoDate) -> int:
        return self._time_zone.resolve_epoch_nanoseconds(IsoDateTime.combine(date), Disambiguation.COMPATIBLE)

    @property
    @branded
    def hours_in_day(self) -> Union[int, float]:
        """
        Длина текущих wall-clock суток в часах.

        23 или 25 в дни с часовым offset transition; float, если длина не
        равна целому числу часов.
        """
        today = self.iso_date
        tomorrow = add_iso_date(today, 0, 0, 0, 1, Overflow.CONSTRAIN)
        length = self._start_of_day_nanoseconds(tomorrow) - self._start_of_day_nanoseconds(today)
        hours, remainder = divmod(length, NS_PER_HOUR)
        return hours if remainder == 0 else length / NS_PER_HOUR

    @branded
    def get_fields(self) -> dict[str, Any]:
        """Календарные поля плюс offset, зона и календарь (snake_case ключи)."""
        fields: dict[str, Any] = {
            "calendar": self._calendar,
            "day": self.day,
            "hour": self.hour,
            "microsecond": self.microsecond,
            "millisecond": self.millisecond,
            "minute": self.minute,
            "month": self.month,
            "nanosecond": self.nanosecond,
            "offset": self.offset,
            "second": self.second,
            "time_zone": self._time_zone,
            "year": self.year,
        }
        era = self.era
        if era is not None:
            fields["era"] = era
            fields["era_year"] = self.era_year
        return fields

    @branded
    def get_iso_fields(self) -> dict[str, Any]:
        dt = self.iso_date_time
        return {
            "calendar": self._calendar,
            "iso_day": dt.day,
            "iso_hour": dt.hour,
            "iso_microsecond": dt.microsecond,
            "iso_millisecond": dt.millisecond,
            "iso_minute": dt.minute,
            "iso_month": dt.month,
            "iso_nanosecond": dt.nanosecond,
            "iso_second": dt.second,
            "iso_year": dt.year,
            "offset": self.offset,
            "time_zone": self._time_zone,
        }

    # =========================================================================
    # ПРОИЗВОДНЫЕ ЗНАЧЕНИЯ
    # =========================================================================

    @branded
    def with_(self, fields: Any, options: Any = None) -> "ZonedDateTime":
        """
        Замена части wall-clock полей.

        Текущий offset сохраняется, пока он валиден (offset "prefer"), поэтому
        изменение поля внутри повторяющегося часа остаётся по ту же сторону
        transition.

        Raises:
            ArgumentTypeError: Если `fields` не mapping или содержит calendar
                или time_zone
        """
        if not isinstance(fields, Mapping):
            raise ArgumentTypeError(f"with_() expects a mapping, got {type(fields).__name__}")
        bag = to_field_bag(fields)
        if "calendar" in bag or "time_zone" in bag:
            raise ArgumentTypeError("use with_calendar() or with_time_zone() to change calendar or time zone")
        bag = validate_date_time_fields(bag)
        opts = normalize_options(options, ResolutionOptions)

        merged = self.get_fields()
        if "year" in bag and not ("era" in bag or "era_year" in bag):
            merged.pop("era", None)
            merged.pop("era_year", None)
        elif "era" in bag or "era_year" in bag:
            merged.pop("year", None)
        merged.update(bag)
        return ZonedDateTime._from_fields(merged, self._time_zone, self._calendar, opts)

    @branded
    def with_time_zone(self, time_zone: Any) -> "ZonedDateTime":
        return ZonedDateTime(self._epoch_nanoseconds, to_time_zone(time_zone), self._calendar)

    @branded
    def with_calendar(self, calendar: Any) -> "ZonedDateTime":
        if calendar is None:
            raise ArgumentTypeError("calendar is required")
        return ZonedDateTime(self._epoch_nanoseconds, self._time_zone, to_calendar(calendar))

    @branded
    def start_of_day(self) -> "ZonedDateTime":
        """Первый exact time текущей wall-clock даты (не всегда 00:00)."""
        return self._derive(self._start_of_day_nanoseconds(self.iso_date))

    # =========================================================================
    # АРИФМЕТИКА
    # =========================================================================

    @branded
    def add(self, duration: Any, options: Any = None) -> "ZonedDateTime":
        """
        Прибавление duration: календарные единицы по wall clock, затем exact time.

        Args:
            duration: Duration, ISO-8601 строка или field bag
            options: overflow (constrain | reject)

        Raises:
            RangeValidationError: Для полей разных знаков, отклонённого
                overflow или результата вне диапазона
        """
        duration = Duration.from_(duration)
        overflow = normalize_options(options, AssignmentOptions).overflow
        return self._derive(
            add_zoned(self._epoch_nanoseconds, self._time_zone, self._calendar, duration.fields, overflow)
        )

    @branded
    def subtract(self, duration: Any, options: Any = None) -> "ZonedDateTime":
        return self.add(Duration.from_(duration).negated(), options)

    @branded
    def until(self, other: Any, options: Any = None) -> Duration:
        """
        Duration от этого значения до `other`.

        Календарные единицы считаются по wall clock зоны этого значения;
        largest unit по умолчанию days (или smallest unit, если он крупнее).

        Raises:
            RangeValidationError: Для разных календарей, date-единиц между
                разными time zones или невалидных options единиц/increment
        """
        return self._difference(ZonedDateTime.from_(other), options, negate=False)

    @branded
    def since(self, other: Any, options: Any = None) -> Duration:
        """Duration от `other` до этого значения; зеркальное отражение until()."""
        return self._difference(ZonedDateTime.from_(other), options, negate=True)

    def _difference(self, other: "ZonedDateTime", options: Any, negate: bool) -> Duration:
        assert_same_calendar(self._calendar, other._calendar)
        opts = normalize_options(options, DifferenceOptions)
        smallest = opts.smallest_unit or TemporalUnit.NANOSECOND
        largest = opts.largest_unit or larger_of_two_units(TemporalUnit.DAY, smallest)
        validate_unit_range(largest, smallest)
        increment = validate_rounding_increment(
            opts.rounding_increment,
            None if smallest.is_date_unit else MAXIMUM_INCREMENTS[smallest],
            inclusive=False,
        )
        if largest.is_date_unit and self._time_zone.id != other._time_zone.id:
            raise RangeValidationError(
                f"cannot count {largest.plural} between time zones {self._time_zone.id} and {other._time_zone.id}"
            )
        mode = negate_rounding_mode(opts.rounding_mode) if negate else opts.rounding_mode

        fields = difference_zoned(
            self._epoch_nanoseconds,
            other._epoch_nanoseconds,
            self._time_zone,
            self._calendar,
            largest,
            smallest,
            increment,
            mode,
        )
        result = Duration.from_fields(fields)
        return result.negated() if negate else result

    @branded
    def round(self, options: Any = None) -> "ZonedDateTime":
        """
        Округление wall-clock времени до единицы.

        Округление до дня использует фактическую длину текущих суток.

        Raises:
            ArgumentTypeError: Если options не переданы
            RangeValidationError: Для единиц крупнее дня или increment, не
                делящего максимум единицы нацело
        """
        if options is None:
            raise ArgumentTypeError("options parameter is required")
        opts = normalize_options(options, RoundOptions)
        smallest = opts.smallest_unit
        if smallest in (TemporalUnit.YEAR, TemporalUnit.MONTH, TemporalUnit.WEEK):
            raise RangeValidationError(f"cannot round a ZonedDateTime to {smallest.plural}")
        increment = validate_rounding_increment(
            opts.rounding_increment, MAXIMUM_INCREMENTS[smallest], inclusive=False
        )

        dt = self.iso_date_time
        if smallest is TemporalUnit.DAY:
            start = self._start_of_day_nanoseconds(dt.date)
            end = self._start_of_day_nanoseconds(add_iso_date(dt.date, 0, 0, 0, 1, Overflow.CONSTRAIN))
            elapsed = round_number_to_increment(self._epoch_nanoseconds - start, end - start, opts.rounding_mode)
            return self._derive(start + elapsed)

        rounded = round_iso_date_time(dt, increment, smallest, opts.rounding_mode)
        return self._derive(
            interpret_offset(
                rounded, self._time_zone, self.offset_nanoseconds, OffsetPolicy.PREFER, Disambiguation.COMPATIBLE
            )
        )

    # =========================================================================
    # СРАВНЕНИЕ
    # =========================================================================

    @branded
    def equals(self, other: Any) -> bool:
        """Тот же exact time, тот же id зоны и тот же id календаря."""
        other = ZonedDateTime.from_(other)
        if self._epoch_nanoseconds != other._epoch_nanoseconds:
            return False
        if self._time_zone.id != other._time_zone.id:
            return False
        return self._calendar.id == other._calendar.id

    @staticmethod
    def compare(one: Any, two: Any) -> int:
        """Порядок по exact time, затем id календаря, затем id time zone."""
        one = ZonedDateTime.from_(one)
        two = ZonedDateTime.from_(two)
        ns1, ns2 = one._epoch_nanoseconds, two._epoch_nanoseconds
        if ns1 != ns2:
            return -1 if ns1 < ns2 else 1
        by_calendar = compare_calendars(one._calendar, two._calendar)
        if by_calendar:
            return by_calendar
        return compare_time_zones(one._time_zone, two._time_zone)

    # =========================================================================
    # КОНВЕРСИЯ
    # =========================================================================

    @branded
    def to_instant(self) -> Instant:
        return Instant(self._instant.epoch_nanoseconds)

    @branded
    def to_plain_date_time(self) -> PlainDateTime:
        return PlainDateTime.from_iso(self.iso_date_time, self._calendar)

    @branded
    def to_plain_date(self) -> PlainDate:
        return PlainDate.from_iso(self.iso_date, self._calendar)

    @branded
    def to_plain_time(self) -> PlainTime:
        return PlainTime(*self.iso_time)

    @branded
    def to_plain_year_month(self) -> PlainYearMonth:
        return self.to_plain_date().to_plain_year_month()

    @branded
    def to_plain_month_day(self) -> PlainMonthDay:
        return self.to_plain_date().to_plain_month_day()

    # =========================================================================
    # СЕРИАЛИЗАЦИЯ
    # =========================================================================

    @branded
    def to_string(self, options: Any = None) -> str:
        """
        Каноническая строка, например '2020-03-08T03:30:00-04:00[America/New_York]'.

        Options:
            fractional_second_digits / smallest_unit: точность (по умолчанию auto)
            rounding_mode: по умолчанию trunc
            calendar_name: auto | always | never
            time_zone_name: auto | never
            offset: auto | never
        """
        opts = normalize_options(options, ToStringOptions)
        precision, unit, increment = opts.seconds_precision()

        # Округляем wall clock, затем сдвигаем exact time на ту же величину.
        dt = self.iso_date_time
        rounded = round_iso_date_time(dt, increment, unit, opts.rounding_mode)
        delta = iso_date_time_to_epoch_nanoseconds(rounded) - iso_date_time_to_epoch_nanoseconds(dt)
        nanoseconds = validate_epoch_nanoseconds(self._epoch_nanoseconds + delta)
        offset = self._time_zone.offset_nanoseconds_at(nanoseconds)

        text = format_iso_date_time(self._time_zone.iso_date_time_at(nanoseconds), precision)
        if opts.offset is not OffsetDisplay.NEVER:
            text += format_offset_string(offset)
        if opts.time_zone_name is not TimeZoneNameDisplay.NEVER:
            text += f"[{self._time_zone.id}]"
        return text + format_calendar_annotation(self._calendar.id, opts.calendar_name)

    @branded
    def to_json(self) -> str:
        return self.to_string()

    @branded
    def to_locale_string(
        self,
        locales: Any = None,
        options: Optional[Mapping[str, Any]] = None,
        formatter: Optional[DateTimeFormat] = None,
    ) -> str:
        """Человекочитаемая форма от `formatter` (по умолчанию BasicDateTimeFormat)."""
        if formatter is None:
            formatter = BasicDateTimeFormat(locales, options)
        elif not isinstance(formatter, DateTimeFormat):
            raise ArgumentTypeError(f"{type(formatter).__name__} has no format() method")
        return formatter.format(self)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"ZonedDateTime({self.to_string()})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ZonedDateTime):
            return NotImplemented
        return (
            self._epoch_nanoseconds == other._epoch_nanoseconds
            and self._time_zone.id == other._time_zone.id
            and self._calendar.id == other._calendar.id
        )

    def __hash__(self) -> int:
        return hash(("zoned_date_time", self._epoch_nanoseconds, self._time_zone.id, self._calendar.id))
