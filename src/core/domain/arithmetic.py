"""
Zoned arithmetic — календарное сложение, разница и разрешение offset

Exact times — это int; зона и календарь превращают их в wall-clock поля.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Календарные единицы (years, months, weeks, days) сначала применяются к
   wall-clock дате; затем time-единицы прибавляются как точные наносекунды
2. Разница раскладывается на календарные единицы шагами от начала и никогда
   не перескакивает конец
3. Все поля разницы имеют знак end - start
"""

import logging
from fractions import Fraction
from typing import Optional

from src.calendars.base import Calendar
from src.codec.serialize import format_offset_string
from src.core.domain.duration import DurationFields, balance_time_nanoseconds, time_nanoseconds_of
from src.core.errors import RangeValidationError
from src.core.math.exact_time import sign, trunc_divmod, validate_epoch_nanoseconds
from src.core.math.iso_calendar import (
    DAYS_IN_WEEK,
    IsoDateTime,
    compare_iso_date,
    epoch_days_from_iso,
    iso_date_time_to_epoch_nanoseconds,
    time_to_nanoseconds,
)
from src.core.math.rounding import round_number_to_increment
from src.core.options import Disambiguation, OffsetPolicy, Overflow, RoundingMode
from src.core.units import TemporalUnit, unit_nanoseconds, unit_rank
from src.timezones.base import TimeZone

logger = logging.getLogger(__name__)

_ZERO = DurationFields()


# =============================================================================
# СЛОЖЕНИЕ
# =============================================================================


def add_zoned(
    epoch_nanoseconds: int,
    time_zone: TimeZone,
    calendar: Calendar,
    fields: DurationFields,
    overflow: Overflow,
) -> int:
    """
    Прибавление duration к exact time в зоне и календаре.

    Args:
        epoch_nanoseconds: Начало
        time_zone: Зона, дающая wall-clock дату
        calendar: Календарь, выполняющий арифметику дат
        fields: Поля duration единого знака
        overflow: Policy для переполнения дня месяца после years/months

    Returns:
        Итоговый exact time

    Raises:
        RangeValidationError: При overflow REJECT или если результат вне
            диапазона
    """
    time_ns = time_nanoseconds_of(fields)
    years, months, weeks, days = fields[:4]
    if not (years or months or weeks or days):
        return validate_epoch_nanoseconds(epoch_nanoseconds + time_ns)

    dt = time_zone.iso_date_time_at(epoch_nanoseconds)
    date = calendar.date_add(dt.date, years, months, weeks, days, overflow)
    start = time_zone.resolve_epoch_nanoseconds(
        IsoDateTime.combine(date, dt.time), Disambiguation.COMPATIBLE
    )
    return validate_epoch_nanoseconds(start + time_ns)


def _with_field(base: DurationFields, unit: TemporalUnit, value: int) -> DurationFields:
    return base._replace(**{unit.plural: value})


def _truncate_below(fields: DurationFields, unit: TemporalUnit) -> DurationFields:
    """Оставляет поля строго крупнее `unit`."""
    keep = unit_rank(unit)
    return DurationFields(*(v if i < keep else 0 for i, v in enumerate(fields)))


# =============================================================================
# РАЗНИЦА
# =============================================================================


def nanoseconds_to_days(
    nanoseconds: int,
    relative_to: int,
    time_zone: TimeZone,
    calendar: Calendar,
) -> tuple[int, int, int]:
    """
    Разбиение точного промежутка на wall-clock дни и остаток.

    День — промежуток между одинаковым wall-clock временем соседних дат,
    поэтому около offset transition он не равен 24 часам.

    Returns:
        (days, оставшиеся наносекунды, длина следующего дня)
    """
    direction = sign(nanoseconds)
    if direction == 0:
        return 0, 0, unit_nanoseconds(TemporalUnit.DAY)

    end = relative_to + nanoseconds
    start_date = time_zone.iso_date_time_at(relative_to).date
    end_date = time_zone.iso_date_time_at(end).date
    days = epoch_days_from_iso(*end_date) - epoch_days_from_iso(*start_date)

    def days_after(count: int) -> int:
        return add_zoned(relative_to, time_zone, calendar, _ZERO._replace(days=count), Overflow.CONSTRAIN)

    intermediate = days_after(days)
    # Civil-разница дат может перескочить на день, если время суток в конце
    # раньше, чем в начале.
    while days and sign(end - intermediate) == -direction:
        days -= direction
        intermediate = days_after(days)

    while True:
        next_day = days_after(days + direction)
        day_length = next_day - intermediate
        if (end - next_day) * direction < 0:
            return days, end - intermediate, abs(day_length)
        days += direction
        intermediate = next_day


def _difference_exact(
    one: int,
    two: int,
    time_zone: TimeZone,
    calendar: Calendar,
    largest_unit: TemporalUnit,
) -> DurationFields:
    """Неокруглённая разница с date largest unit."""
    direction = sign(two - one)
    if direction == 0:
        return _ZERO

    start = time_zone.iso_date_time_at(one)
    end = time_zone.iso_date_time_at(two)
    start_date = start.date
    time_ns = time_to_nanoseconds(end.time) - time_to_nanoseconds(start.time)
    if compare_iso_date(end.date, start_date) == direction and sign(time_ns) == -direction:
        start_date = calendar.date_add(start_date, 0, 0, 0, direction, Overflow.CONSTRAIN)

    years, months, weeks, _ = calendar.date_until(start_date, end.date, largest_unit)
    if any(sign(value) == -direction for value in (years, months, weeks)):
        # Порядок wall-clock расходится с точным порядком (внутри overlap).
        years = months = weeks = 0

    while True:
        intermediate = add_zoned(
            one, time_zone, calendar, DurationFields(years, months, weeks), Overflow.CONSTRAIN
        )
        if sign(two - intermediate) != -direction or not (years or months or weeks):
            break
        if weeks:
            weeks -= direction
        elif months:
            months -= direction
        else:
            years -= direction
            if largest_unit is TemporalUnit.YEAR:
                months = 11 * direction

    days, remainder, _ = nanoseconds_to_days(two - intermediate, intermediate, time_zone, calendar)
    time = balance_time_nanoseconds(remainder, TemporalUnit.HOUR)
    return DurationFields(years, months, weeks, days, *time[4:])


def _round_date_unit(
    one: int,
    two: int,
    time_zone: TimeZone,
    calendar: Calendar,
    exact: DurationFields,
    unit: TemporalUnit,
    increment: int,
    mode: RoundingMode,
) -> int:
    """
    Округление поля `unit` точной разницы; возвращает округлённый конец.

    Прогресс внутри increment измеряется в exact time между двумя
    кандидатами конца, поэтому месяцы в 29 и 31 день округляются каждый по
    своей середине.
    """
    direction = sign(two - one)
    if direction == 0:
        return two
    base = _truncate_below(exact, unit)

    def end_for(count: int) -> int:
        return add_zoned(one, time_zone, calendar, _with_field(base, unit, count), Overflow.CONSTRAIN)

    whole = getattr(exact, unit.plural)
    while (two - end_for(whole + direction)) * direction >= 0:
        whole += direction

    lower = (abs(whole) // increment) * increment * direction
    upper = lower + increment * direction
    lower_end, upper_end = end_for(lower), end_for(upper)
    progress = Fraction(two - lower_end, upper_end - lower_end)
    value = lower + progress * (upper - lower)
    return end_for(round_number_to_increment(value, increment, mode))


def difference_zoned(
    one: int,
    two: int,
    time_zone: TimeZone,
    calendar: Calendar,
    largest_unit: TemporalUnit,
    smallest_unit: TemporalUnit = TemporalUnit.NANOSECOND,
    increment: int = 1,
    mode: RoundingMode = RoundingMode.NEAREST,
) -> DurationFields:
    """
    Разница от `one` до `two`, разложенная и округлённая.

    Args:
        one: Начальный exact time
        two: Конечный exact time
        time_zone: Зона, в которой считаются календарные единицы
        calendar: Календарь, в котором считаются календарные единицы
        largest_unit: Наибольшая единица результата
        smallest_unit: Единица округления
        increment: Rounding increment в `smallest_unit`
        mode: Режим округления

    Returns:
        Поля со знаком `two - one`
    """
    if not largest_unit.is_date_unit:
        rounded = round_number_to_increment(two - one, increment * unit_nanoseconds(smallest_unit), mode)
        return balance_time_nanoseconds(rounded, largest_unit)

    exact = _difference_exact(one, two, time_zone, calendar, largest_unit)
    if smallest_unit is TemporalUnit.NANOSECOND and increment == 1:
        return exact

    if not smallest_unit.is_date_unit:
        rounded = round_number_to_increment(
            time_nanoseconds_of(exact), increment * unit_nanoseconds(smallest_unit), mode
        )
        date_end = add_zoned(one, time_zone, calendar, _truncate_below(exact, TemporalUnit.HOUR), Overflow.CONSTRAIN)
        return _difference_exact(one, date_end + rounded, time_zone, calendar, largest_unit)

    new_end = _round_date_unit(one, two, time_zone, calendar, exact, smallest_unit, increment, mode)
    result = _difference_exact(one, new_end, time_zone, calendar, largest_unit)
    if smallest_unit is TemporalUnit.WEEK and largest_unit is not TemporalUnit.WEEK:
        # При разложении по месяцам остаток считается в днях.
        weeks, days = trunc_divmod(result.weeks * DAYS_IN_WEEK + result.days, DAYS_IN_WEEK)
        result = result._replace(weeks=weeks, days=days)
    return _with_field(_truncate_below(result, smallest_unit), smallest_unit, getattr(result, smallest_unit.plural))


# =============================================================================
# РАЗРЕШЕНИЕ OFFSET
# =============================================================================


def interpret_offset(
    dt: IsoDateTime,
    time_zone: TimeZone,
    offset_nanoseconds: Optional[int],
    policy: OffsetPolicy,
    disambiguation: Disambiguation,
) -> int:
    """
    Exact time для wall-clock времени, возможно с явным offset.

    - IGNORE или offset нет: разрешение через `disambiguation`
    - USE: exact time определяется только offset
    - PREFER: кандидат с этим offset, иначе `disambiguation`
    - REJECT: кандидат с этим offset, иначе ошибка

    Raises:
        RangeValidationError: При REJECT, если offset невалиден для зоны в
            это wall-clock время
    """
    if offset_nanoseconds is None or policy is OffsetPolicy.IGNORE:
        return time_zone.resolve_epoch_nanoseconds(dt, disambiguation)
    if policy is OffsetPolicy.USE:
        return validate_epoch_nanoseconds(iso_date_time_to_epoch_nanoseconds(dt) - offset_nanoseconds)

    for candidate in time_zone.possible_epoch_nanoseconds(dt):
        if time_zone.offset_nanoseconds_at(candidate) == offset_nanoseconds:
            return candidate

    if policy is OffsetPolicy.REJECT:
        raise RangeValidationError(
            f"offset {format_offset_string(offset_nanoseconds)} is invalid for {tuple(dt)} in {time_zone.id}"
        )
    logger.debug("offset %s not valid in %s, falling back to %s",
                 format_offset_string(offset_nanoseconds), time_zone.id, disambiguation.value)
    return time_zone.resolve_epoch_nanoseconds(dt, disambiguation)
