"""
Serialize — канонические строковые формы

    YYYY-MM-DDTHH:MM:SS[.fraction]±HH:MM[:SS][[TimeZoneId]][u-ca=CalendarId]

Duration сериализуется как `[-]PnYnMnWnDTnHnMn.fS`; миллисекунды,
микросекунды и наносекунды сворачиваются в поле секунд.
"""

from typing import Final, Union

from src.core.math.exact_time import (
    NS_PER_HOUR,
    NS_PER_MINUTE,
    NS_PER_SECOND,
)
from src.core.math.iso_calendar import IsoDate, IsoDateTime, IsoTime
from src.core.options import CalendarNameDisplay

ISO_CALENDAR_ID: Final[str] = "iso8601"

Precision = Union[int, str]


# =============================================================================
# ЧАСТИ DATE / TIME
# =============================================================================


def format_year(year: int) -> str:
    """
    Четыре цифры внутри 0000-9999, иначе знак и шесть цифр.

    Examples:
        >>> format_year(2020)
        '2020'
        >>> format_year(-1)
        '-000001'
        >>> format_year(10000)
        '+010000'
    """
    if 0 <= year <= 9999:
        return f"{year:04d}"
    sign = "-" if year < 0 else "+"
    return f"{sign}{abs(year):06d}"


def format_seconds_part(
    second: int, millisecond: int, microsecond: int, nanosecond: int, precision: Precision
) -> str:
    """
    Секунды с дробной частью, включая ведущее двоеточие.

    Precision "minute" полностью убирает секунды. "auto" печатает кратчайшую
    точную дробь, а int печатает ровно столько цифр дробной части.
    """
    if precision == "minute":
        return ""
    result = f":{second:02d}"
    fraction = f"{millisecond:03d}{microsecond:03d}{nanosecond:03d}"
    if precision == "auto":
        fraction = fraction.rstrip("0")
    else:
        fraction = fraction[: int(precision)]
    if fraction:
        result += "." + fraction
    return result


def format_iso_date(date: IsoDate) -> str:
    return f"{format_year(date.year)}-{date.month:02d}-{date.day:02d}"


def format_iso_time(time: IsoTime, precision: Precision = "auto") -> str:
    seconds = format_seconds_part(
        time.second, time.millisecond, time.microsecond, time.nanosecond, precision
    )
    return f"{time.hour:02d}:{time.minute:02d}{seconds}"


def format_iso_date_time(dt: IsoDateTime, precision: Precision = "auto") -> str:
    return f"{format_iso_date(dt.date)}T{format_iso_time(dt.time, precision)}"


def format_year_month(date: IsoDate) -> str:
    return f"{format_year(date.year)}-{date.month:02d}"


def format_month_day(date: IsoDate) -> str:
    return f"{date.month:02d}-{date.day:02d}"


# =============================================================================
# OFFSETS / АННОТАЦИИ
# =============================================================================


def format_offset_string(offset_nanoseconds: int) -> str:
    """
    ±HH:MM; :SS и дробная часть только если они ненулевые.

    Examples:
        >>> format_offset_string(-5 * 3600 * 10**9)
        '-05:00'
        >>> format_offset_string(19800 * 10**9 + 15 * 10**9)
        '+05:30:15'
    """
    sign = "-" if offset_nanoseconds < 0 else "+"
    remainder = abs(offset_nanoseconds)
    hours, remainder = divmod(remainder, NS_PER_HOUR)
    minutes, remainder = divmod(remainder, NS_PER_MINUTE)
    seconds, subsecond = divmod(remainder, NS_PER_SECOND)
    result = f"{sign}{hours:02d}:{minutes:02d}"
    if seconds or subsecond:
        result += f":{seconds:02d}"
        if subsecond:
            result += "." + f"{subsecond:09d}".rstrip("0")
    return result


def format_calendar_annotation(calendar_id: str, display: CalendarNameDisplay) -> str:
    """`[u-ca=id]`; ISO календарь пишется только при ALWAYS."""
    if display is CalendarNameDisplay.NEVER:
        return ""
    if display is CalendarNameDisplay.AUTO and calendar_id == ISO_CALENDAR_ID:
        return ""
    return f"[u-ca={calendar_id}]"


# =============================================================================
# DURATIONS
# =============================================================================


def format_duration(
    sign: int,
    years: int,
    months: int,
    weeks: int,
    days: int,
    hours: int,
    minutes: int,
    seconds: int,
    milliseconds: int,
    microseconds: int,
    nanoseconds: int,
) -> str:
    """
    Сериализация duration по знаку и модулям полей.

    Доли секунды сворачиваются в секунды; число цифр дроби 9, 6 или 3 в
    зависимости от самого мелкого ненулевого поля, поэтому PT3.500S сохраняет
    заданную миллисекундную точность.

    Examples:
        >>> format_duration(1, 0, 0, 0, 0, 0, 0, 120, 3500, 0, 0)
        'PT123.500S'
        >>> format_duration(0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0)
        'PT0S'
    """
    subsecond_total = milliseconds * 1_000_000 + microseconds * 1_000 + nanoseconds
    whole_seconds = seconds + subsecond_total // NS_PER_SECOND
    fraction_ns = subsecond_total % NS_PER_SECOND

    if nanoseconds:
        digits = 9
    elif microseconds:
        digits = 6
    elif milliseconds:
        digits = 3
    else:
        digits = 0

    date_part = ""
    for value, designator in ((years, "Y"), (months, "M"), (weeks, "W"), (days, "D")):
        if value:
            date_part += f"{value}{designator}"

    time_part = ""
    if hours:
        time_part += f"{hours}H"
    if minutes:
        time_part += f"{minutes}M"
    if whole_seconds or digits:
        seconds_text = str(whole_seconds)
        if digits:
            seconds_text += "." + f"{fraction_ns:09d}"[:digits]
        time_part += f"{seconds_text}S"

    if not date_part and not time_part:
        return "PT0S"

    result = "-P" if sign < 0 else "P"
    result += date_part
    if time_part:
        result += "T" + time_part
    return result
