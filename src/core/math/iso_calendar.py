"""
ISO Calendar — алгоритмы civil date и time пролептического ISO-8601

Чистые функции над записями IsoDate / IsoTime / IsoDateTime. Любой другой
календарь выражается через эти записи; ни один другой модуль не вычисляет
високосные годы, длины месяцев и epoch days.

Счёт дней — алгоритм days-from-civil (era из 400 лет = 146097 дней), точный
для любого целого года.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. После regulation месяц 1-12, день 1..days_in_month
2. Балансировка time-полей идёт через floor: отрицательное переполнение
   занимает у даты
3. Civil datetime переводится в наносекунды так, как если бы он был UTC
"""

from typing import Final, NamedTuple

from src.core.errors import RangeValidationError
from src.core.math.exact_time import (
    NS_PER_DAY,
    NS_PER_HOUR,
    NS_PER_MICROSECOND,
    NS_PER_MILLISECOND,
    NS_PER_MINUTE,
    NS_PER_SECOND,
    sign,
    trunc_divmod,
    validate_civil_nanoseconds,
)
from src.core.math.rounding import round_number_to_increment
from src.core.options import Overflow, RoundingMode
from src.core.units import TemporalUnit, unit_nanoseconds

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

MONTHS_IN_YEAR: Final[int] = 12
DAYS_IN_WEEK: Final[int] = 7

_DAYS_IN_MONTH: Final[tuple[int, ...]] = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)

# Накопленное число дней до каждого месяца в невисокосном году
_DAYS_BEFORE_MONTH: Final[tuple[int, ...]] = (
    0, 31, 59, 90, 120, 151, 181, 212, 243, 273, 304, 334,
)

_DAYS_PER_ERA: Final[int] = 146_097
# Дней от 0000-03-01 до 1970-01-01
_EPOCH_SHIFT: Final[int] = 719_468


# =============================================================================
# ЗАПИСИ
# =============================================================================


class IsoDate(NamedTuple):
    year: int
    month: int
    day: int


class IsoTime(NamedTuple):
    hour: int = 0
    minute: int = 0
    second: int = 0
    millisecond: int = 0
    microsecond: int = 0
    nanosecond: int = 0


class IsoDateTime(NamedTuple):
    """Поля ISO даты и wall-clock времени без зоны"""

    year: int
    month: int
    day: int
    hour: int = 0
    minute: int = 0
    second: int = 0
    millisecond: int = 0
    microsecond: int = 0
    nanosecond: int = 0

    @classmethod
    def combine(cls, date: IsoDate, time: IsoTime = IsoTime()) -> "IsoDateTime":
        return cls(*date, *time)

    @property
    def date(self) -> IsoDate:
        return IsoDate(self.year, self.month, self.day)

    @property
    def time(self) -> IsoTime:
        return IsoTime(*self[3:])


MIDNIGHT: Final[IsoTime] = IsoTime()


# =============================================================================
# ГЕОМЕТРИЯ ГОДА / МЕСЯЦА
# =============================================================================


def is_leap_year(year: int) -> bool:
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_year(year: int) -> int:
    return 366 if is_leap_year(year) else 365


def days_in_month(year: int, month: int) -> int:
    """
    Число дней в месяце.

    Examples:
        >>> days_in_month(2020, 2)
        29
        >>> days_in_month(1900, 2)
        28
    """
    if month == 2 and is_leap_year(year):
        return 29
    return _DAYS_IN_MONTH[month - 1]


def balance_year_month(year: int, month: int) -> tuple[int, int]:
    """Перенос месяцев вне 1-12 в год."""
    year += (month - 1) // MONTHS_IN_YEAR
    month = (month - 1) % MONTHS_IN_YEAR + 1
    return year, month


# =============================================================================
# EPOCH DAYS
# =============================================================================


def epoch_days_from_iso(year: int, month: int, day: int) -> int:
    """
    Дни от 1970-01-01 до валидной ISO даты.

    Examples:
        >>> epoch_days_from_iso(1970, 1, 1)
        0
        >>> epoch_days_from_iso(2000, 3, 1)
        11017
    """
    y = year - 1 if month <= 2 else year
    era = y // 400
    year_of_era = y - era * 400
    month_index = month + 9 if month <= 2 else month - 3
    day_of_year = (153 * month_index + 2) // 5 + day - 1
    day_of_era = year_of_era * 365 + year_of_era // 4 - year_of_era // 100 + day_of_year
    return era * _DAYS_PER_ERA + day_of_era - _EPOCH_SHIFT


def iso_from_epoch_days(epoch_days: int) -> IsoDate:
    """Обратная к epoch_days_from_iso."""
    z = epoch_days + _EPOCH_SHIFT
    era = z // _DAYS_PER_ERA
    day_of_era = z - era * _DAYS_PER_ERA
    year_of_era = (
        day_of_era - day_of_era // 1460 + day_of_era // 36524 - day_of_era // 146096
    ) // 365
    day_of_year = day_of_era - (365 * year_of_era + year_of_era // 4 - year_of_era // 100)
    month_index = (5 * day_of_year + 2) // 153
    day = day_of_year - (153 * month_index + 2) // 5 + 1
    month = month_index + 3 if month_index < 10 else month_index - 9
    year = year_of_era + era * 400 + (1 if month <= 2 else 0)
    return IsoDate(year, month, day)


def balance_iso_date(year: int, month: int, day: int) -> IsoDate:
    """Перенос месяцев и дней вне диапазона в более крупные поля."""
    year, month = balance_year_month(year, month)
    return iso_from_epoch_days(epoch_days_from_iso(year, month, 1) + day - 1)


# =============================================================================
# ПРОИЗВОДНЫЕ ПОЛЯ
# =============================================================================


def day_of_week(date: IsoDate) -> int:
    """ISO день недели, понедельник = 1 ... воскресенье = 7."""
    return (epoch_days_from_iso(*date) + 3) % DAYS_IN_WEEK + 1


def day_of_year(date: IsoDate) -> int:
    leap_day = 1 if date.month > 2 and is_leap_year(date.year) else 0
    return _DAYS_BEFORE_MONTH[date.month - 1] + leap_day + date.day


def _weeks_in_year(year: int) -> int:
    def weekday_marker(y: int) -> int:
        return (y + y // 4 - y // 100 + y // 400) % 7

    if weekday_marker(year) == 4 or weekday_marker(year - 1) == 3:
        return 53
    return 52


def week_of_year(date: IsoDate) -> int:
    """
    Номер недели ISO-8601: неделя 1 содержит первый четверг года.

    Examples:
        >>> week_of_year(IsoDate(2021, 1, 3))
        53
        >>> week_of_year(IsoDate(2019, 12, 30))
        1
    """
    week = (day_of_year(date) - day_of_week(date) + 10) // DAYS_IN_WEEK
    if week < 1:
        return _weeks_in_year(date.year - 1)
    if week > _weeks_in_year(date.year):
        return 1
    return week


# =============================================================================
# REGULATION
# =============================================================================


def _regulate_field(value: int, low: int, high: int, name: str, overflow: Overflow) -> int:
    if low <= value <= high:
        return value
    if overflow is Overflow.REJECT:
        raise RangeValidationError(f"{name} {value} outside of range {low}-{high}")
    return min(max(value, low), high)


def regulate_iso_date(year: int, month: int, day: int, overflow: Overflow) -> IsoDate:
    """
    Валидация или clamp полей ISO даты.

    Args:
        year: ISO год (любое целое)
        month: Месяц, допустимо 1-12
        day: День, допустимо 1..days_in_month
        overflow: REJECT бросает ошибку, CONSTRAIN зажимает поле в диапазон

    Raises:
        RangeValidationError: Если поле вне диапазона при REJECT
    """
    month = _regulate_field(month, 1, MONTHS_IN_YEAR, "month", overflow)
    day = _regulate_field(day, 1, days_in_month(year, month), "day", overflow)
    return IsoDate(year, month, day)


def regulate_iso_time(time: IsoTime, overflow: Overflow) -> IsoTime:
    """Валидация или clamp полей wall-clock времени."""
    return IsoTime(
        _regulate_field(time.hour, 0, 23, "hour", overflow),
        _regulate_field(time.minute, 0, 59, "minute", overflow),
        _regulate_field(time.second, 0, 59, "second", overflow),
        _regulate_field(time.millisecond, 0, 999, "millisecond", overflow),
        _regulate_field(time.microsecond, 0, 999, "microsecond", overflow),
        _regulate_field(time.nanosecond, 0, 999, "nanosecond", overflow),
    )


# =============================================================================
# ВРЕМЯ СУТОК
# =============================================================================


def time_to_nanoseconds(time: IsoTime) -> int:
    return (
        time.hour * NS_PER_HOUR
        + time.minute * NS_PER_MINUTE
        + time.second * NS_PER_SECOND
        + time.millisecond * NS_PER_MILLISECOND
        + time.microsecond * NS_PER_MICROSECOND
        + time.nanosecond
    )


def balance_time(nanoseconds: int) -> tuple[int, IsoTime]:
    """
    Разбиение знакового числа наносекунд на целые дни и время суток.

    Returns:
        (сдвиг в днях, время суток); время суток всегда неотрицательно
    """
    days, remainder = divmod(nanoseconds, NS_PER_DAY)
    hour, remainder = divmod(remainder, NS_PER_HOUR)
    minute, remainder = divmod(remainder, NS_PER_MINUTE)
    second, remainder = divmod(remainder, NS_PER_SECOND)
    millisecond, remainder = divmod(remainder, NS_PER_MILLISECOND)
    microsecond, nanosecond = divmod(remainder, NS_PER_MICROSECOND)
    return days, IsoTime(hour, minute, second, millisecond, microsecond, nanosecond)


def add_time(dt: IsoDateTime, nanoseconds: int) -> IsoDateTime:
    """Прибавление точных наносекунд к civil datetime с переносом в дату."""
    day_delta, time = balance_time(time_to_nanoseconds(dt.time) + nanoseconds)
    date = iso_from_epoch_days(epoch_days_from_iso(*dt.date) + day_delta)
    return IsoDateTime.combine(date, time)


# =============================================================================
# КОНВЕРСИЯ EPOCH
# =============================================================================


def iso_date_time_to_epoch_nanoseconds(dt: IsoDateTime) -> int:
    """Наносекунды от epoch для civil datetime, прочитанного как UTC."""
    return epoch_days_from_iso(*dt.date) * NS_PER_DAY + time_to_nanoseconds(dt.time)


def epoch_nanoseconds_to_iso_date_time(epoch_nanoseconds: int) -> IsoDateTime:
    """Civil datetime в UTC для exact time (floor в сторону прошлого)."""
    days, time = balance_time(epoch_nanoseconds)
    return IsoDateTime.combine(iso_from_epoch_days(days), time)


def validate_iso_date_time(dt: IsoDateTime) -> IsoDateTime:
    """
    Проверка civil datetime по представимому civil-диапазону.

    Raises:
        RangeValidationError: Если datetime выходит за диапазон instant более
            чем на сутки
    """
    validate_civil_nanoseconds(iso_date_time_to_epoch_nanoseconds(dt))
    return dt


# =============================================================================
# СРАВНЕНИЕ
# =============================================================================


def compare_iso_date(one: IsoDate, two: IsoDate) -> int:
    return (tuple(one) > tuple(two)) - (tuple(one) < tuple(two))


def compare_iso_date_time(one: IsoDateTime, two: IsoDateTime) -> int:
    return (tuple(one) > tuple(two)) - (tuple(one) < tuple(two))


# =============================================================================
# АРИФМЕТИКА ДАТ
# =============================================================================


def add_iso_date(
    date: IsoDate,
    years: int,
    months: int,
    weeks: int,
    days: int,
    overflow: Overflow,
) -> IsoDate:
    """
    Прибавление календарных единиц к ISO дате.

    Сначала применяются годы и месяцы, день регулируется через `overflow`
    (2020-01-31 + 1 month = 2020-02-29 при CONSTRAIN); затем недели и дни
    прибавляются как обычные дни.
    """
    year, month = balance_year_month(date.year + years, date.month + months)
    regulated = regulate_iso_date(year, month, date.day, overflow)
    return iso_from_epoch_days(epoch_days_from_iso(*regulated) + weeks * DAYS_IN_WEEK + days)


def difference_iso_date(
    one: IsoDate, two: IsoDate, largest_unit: TemporalUnit
) -> tuple[int, int, int, int]:
    """
    Календарная разница от `one` до `two`.

    Args:
        one: Начальная дата
        two: Конечная дата
        largest_unit: YEAR, MONTH, WEEK или DAY

    Returns:
        (years, months, weeks, days), все со знаком two - one
    """
    if largest_unit in (TemporalUnit.YEAR, TemporalUnit.MONTH):
        direction = compare_iso_date(two, one)
        if direction == 0:
            return 0, 0, 0, 0

        total_months = (two.year - one.year) * MONTHS_IN_YEAR + (two.month - one.month)
        middle = add_iso_date(one, 0, total_months, 0, 0, Overflow.CONSTRAIN)
        if compare_iso_date(middle, two) == direction:
            total_months -= direction
            middle = add_iso_date(one, 0, total_months, 0, 0, Overflow.CONSTRAIN)

        days = epoch_days_from_iso(*two) - epoch_days_from_iso(*middle)
        if largest_unit is TemporalUnit.YEAR:
            years, months = trunc_divmod(total_months, MONTHS_IN_YEAR)
            return years, months, 0, days
        return 0, total_months, 0, days

    days = epoch_days_from_iso(*two) - epoch_days_from_iso(*one)
    if largest_unit is TemporalUnit.WEEK:
        weeks, days = trunc_divmod(days, DAYS_IN_WEEK)
        return 0, 0, weeks, days
    return 0, 0, 0, days


def difference_iso_date_time(
    one: IsoDateTime, two: IsoDateTime, largest_unit: TemporalUnit
) -> tuple[int, int, int, int, int]:
    """
    Civil-разница от `one` до `two`, разбитая на календарные единицы и время.

    Returns:
        (years, months, weeks, days, наносекунды времени); date-часть и
        time-часть одного знака
    """
    time_ns = time_to_nanoseconds(two.time) - time_to_nanoseconds(one.time)
    start = one.date
    date_sign = compare_iso_date(two.date, start)
    if date_sign != 0 and sign(time_ns) == -date_sign:
        # Занимаем один день у date-части.
        start = iso_from_epoch_days(epoch_days_from_iso(*start) + date_sign)
        time_ns += date_sign * NS_PER_DAY

    date_largest = largest_unit if largest_unit.is_date_unit else TemporalUnit.DAY
    years, months, weeks, days = difference_iso_date(start, two.date, date_largest)
    return years, months, weeks, days, time_ns


# =============================================================================
# ОКРУГЛЕНИЕ
# =============================================================================


def round_iso_date_time(
    dt: IsoDateTime,
    increment: int,
    unit: TemporalUnit,
    mode: RoundingMode,
    day_length_ns: int = NS_PER_DAY,
) -> IsoDateTime:
    """
    Округление времени суток civil datetime.

    Args:
        dt: Civil datetime
        increment: Rounding increment в `unit`
        unit: DAY или time-единица
        mode: Режим округления
        day_length_ns: Длина данных civil-суток (отличается от 24h около
            offset transitions); используется только при `unit` == DAY

    Returns:
        Округлённый civil datetime; округление вверх может перейти на
        следующий день
    """
    time_ns = time_to_nanoseconds(dt.time)
    if unit is TemporalUnit.DAY:
        day_delta = round_number_to_increment(time_ns, day_length_ns, mode) // day_length_ns
        date = iso_from_epoch_days(epoch_days_from_iso(*dt.date) + day_delta)
        return IsoDateTime.combine(date, MIDNIGHT)

    rounded = round_number_to_increment(time_ns, increment * unit_nanoseconds(unit), mode)
    day_delta, time = balance_time(rounded)
    date = iso_from_epoch_days(epoch_days_from_iso(*dt.date) + day_delta)
    return IsoDateTime.combine(date, time)
