"""
Parse — строки ISO-8601 / RFC 3339 с аннотациями в квадратных скобках

Принимаемая форма date-time:

    YYYY-MM-DD[THH[:MM[:SS[.fffffffff]]]][Z|±HH[:MM[:SS[.f]]]][[Zone]][[u-ca=id]]

- годы вне 0000-9999 записываются в расширенной форме ±YYYYYY; -000000 невалиден
- basic format (без разделителей) принимается для date, time и offset
- leap second (:60) читается как :59
- дробь содержит до девяти цифр и разбивается на ms/us/ns

Разобранные поля регулируются с REJECT: строки никогда не clamp'ятся.
"""

import re
from typing import Final, NamedTuple, Optional

from src.core.errors import RangeValidationError
from src.core.math.exact_time import (
    NS_PER_HOUR,
    NS_PER_MINUTE,
    NS_PER_SECOND,
)
from src.core.math.iso_calendar import (
    IsoDate,
    IsoDateTime,
    IsoTime,
    regulate_iso_date,
    regulate_iso_time,
)
from src.core.options import Overflow

# =============================================================================
# ГРАММАТИКА
# =============================================================================

_SIGN: Final[str] = "[+−-]"
_YEAR: Final[str] = rf"(?P<year>{_SIGN}\d{{6}}|\d{{4}})"
_DATE: Final[str] = rf"{_YEAR}(?P<date_sep>-?)(?P<month>\d{{2}})(?P=date_sep)(?P<day>\d{{2}})"
_TIME: Final[str] = (
    r"(?P<hour>\d{2})"
    r"(?:(?P<time_sep>:?)(?P<minute>\d{2})"
    r"(?:(?P=time_sep)(?P<second>\d{2})(?:[.,](?P<fraction>\d{1,9}))?)?)?"
)
_OFFSET_BODY: Final[str] = rf"{_SIGN}\d{{2}}(?::?\d{{2}}(?::?\d{{2}}(?:[.,]\d{{1,9}})?)?)?"
_OFFSET: Final[str] = rf"(?P<offset>[zZ]|{_OFFSET_BODY})"
_ZONE: Final[str] = r"(?:\[(?!u-ca=)(?P<zone>[^\]\s]+)\])"
_CALENDAR: Final[str] = r"(?:\[u-ca=(?P<calendar>[A-Za-z0-9-]+)\])"

DATE_TIME_RE: Final[re.Pattern[str]] = re.compile(
    rf"^{_DATE}(?:[Tt ]{_TIME})?{_OFFSET}?{_ZONE}?{_CALENDAR}?$"
)
TIME_RE: Final[re.Pattern[str]] = re.compile(
    rf"^[Tt]?{_TIME}{_OFFSET}?{_ZONE}?{_CALENDAR}?$"
)
YEAR_MONTH_RE: Final[re.Pattern[str]] = re.compile(
    rf"^{_YEAR}-?(?P<month>\d{{2}}){_CALENDAR}?$"
)
MONTH_DAY_RE: Final[re.Pattern[str]] = re.compile(
    rf"^(?:--)?(?P<month>\d{{2}})-?(?P<day>\d{{2}}){_CALENDAR}?$"
)
OFFSET_RE: Final[re.Pattern[str]] = re.compile(
    rf"^(?P<sign>{_SIGN})(?P<hours>\d{{2}})(?::?(?P<minutes>\d{{2}})"
    rf"(?::?(?P<seconds>\d{{2}})(?:[.,](?P<fraction>\d{{1,9}}))?)?)?$"
)
DURATION_RE: Final[re.Pattern[str]] = re.compile(
    rf"^(?P<sign>{_SIGN})?[Pp]"
    r"(?:(?P<years>\d+)[Yy])?"
    r"(?:(?P<months>\d+)[Mm])?"
    r"(?:(?P<weeks>\d+)[Ww])?"
    r"(?:(?P<days>\d+)[Dd])?"
    r"(?:[Tt]"
    r"(?:(?P<hours>\d+)(?:[.,](?P<hours_fraction>\d{1,9}))?[Hh])?"
    r"(?:(?P<minutes>\d+)(?:[.,](?P<minutes_fraction>\d{1,9}))?[Mm])?"
    r"(?:(?P<seconds>\d+)(?:[.,](?P<fraction>\d{1,9}))?[Ss])?"
    r")?$"
)

_DURATION_FIELDS: Final[tuple[str, ...]] = (
    "years", "months", "weeks", "days", "hours", "minutes", "seconds",
)


# =============================================================================
# РЕЗУЛЬТАТЫ
# =============================================================================


class ParsedDateTime(NamedTuple):
    """
    Разобранная date-time строка.

    `offset_nanoseconds` равен None, если в строке нет числового offset;
    `utc_designator` равен True для offset `Z`, который фиксирует exact time,
    не подразумевая UTC wall clock.
    """

    iso: IsoDateTime
    offset_nanoseconds: Optional[int]
    utc_designator: bool
    time_zone: Optional[str]
    calendar: Optional[str]
    has_time: bool


class ParsedDuration(NamedTuple):
    sign: int
    years: int
    months: int
    weeks: int
    days: int
    hours: int
    minutes: int
    seconds: int
    milliseconds: int
    microseconds: int
    nanoseconds: int


# =============================================================================
# ХЕЛПЕРЫ
# =============================================================================


def _sign_of(text: str) -> int:
    return -1 if text in ("-", "−") else 1


def _parse_year(text: str) -> int:
    if len(text) == 4:
        return int(text)
    if text[1:] == "000000" and _sign_of(text[0]) < 0:
        raise RangeValidationError("negative zero year -000000 is not allowed")
    return _sign_of(text[0]) * int(text[1:])


def split_fraction(fraction: Optional[str]) -> tuple[int, int, int]:
    """Разбиение до девяти цифр дроби на (ms, us, ns)."""
    if not fraction:
        return 0, 0, 0
    digits = fraction.ljust(9, "0")
    return int(digits[0:3]), int(digits[3:6]), int(digits[6:9])


def _time_from_match(match: re.Match[str]) -> IsoTime:
    second = int(match.group("second") or 0)
    if second == 60:
        second = 59
    return regulate_iso_time(
        IsoTime(
            int(match.group("hour") or 0),
            int(match.group("minute") or 0),
            second,
            *split_fraction(match.group("fraction")),
        ),
        Overflow.REJECT,
    )


def _offset_from_match(match: re.Match[str]) -> tuple[Optional[int], bool]:
    offset = match.group("offset")
    if offset is None:
        return None, False
    if offset in ("Z", "z"):
        return 0, True
    return parse_offset_string(offset), False


# =============================================================================
# ПАРСЕРЫ
# =============================================================================


def parse_offset_string(text: str) -> int:
    """
    Разбор `±HH[:MM[:SS[.fffffffff]]]` в знаковые наносекунды.

    Raises:
        RangeValidationError: Если текст не offset или часть вне диапазона
    """
    match = OFFSET_RE.match(text)
    if match is None:
        raise RangeValidationError(f"invalid offset string {text!r}")
    hours = int(match.group("hours"))
    minutes = int(match.group("minutes") or 0)
    seconds = int(match.group("seconds") or 0)
    if hours > 23 or minutes > 59 or seconds > 59:
        raise RangeValidationError(f"offset {text!r} out of range")
    ms, us, ns = split_fraction(match.group("fraction"))
    magnitude = (
        hours * NS_PER_HOUR
        + minutes * NS_PER_MINUTE
        + seconds * NS_PER_SECOND
        + ms * 1_000_000
        + us * 1_000
        + ns
    )
    return _sign_of(match.group("sign")) * magnitude


def parse_date_time(text: str) -> ParsedDateTime:
    """
    Разбор date или date-time строки с необязательными offset и аннотациями.

    Raises:
        RangeValidationError: Если строка не соответствует грамматике или
            поле вне диапазона
    """
    match = DATE_TIME_RE.match(text.strip())
    if match is None:
        raise RangeValidationError(f"invalid ISO 8601 date-time string {text!r}")
    date = regulate_iso_date(
        _parse_year(match.group("year")),
        int(match.group("month")),
        int(match.group("day")),
        Overflow.REJECT,
    )
    has_time = match.group("hour") is not None
    time = _time_from_match(match) if has_time else IsoTime()
    offset, utc_designator = _offset_from_match(match) if has_time else (None, False)
    return ParsedDateTime(
        iso=IsoDateTime.combine(date, time),
        offset_nanoseconds=offset,
        utc_designator=utc_designator,
        time_zone=match.group("zone"),
        calendar=match.group("calendar"),
        has_time=has_time,
    )


def parse_time(text: str) -> tuple[IsoTime, Optional[str]]:
    """
    Разбор time строки или time-части date-time строки.

    Returns:
        (время суток, календарная аннотация)
    """
    text = text.strip()
    match = DATE_TIME_RE.match(text)
    if match is not None and match.group("hour") is not None:
        if match.group("offset") in ("Z", "z"):
            raise RangeValidationError(f"{text!r}: a UTC designator has no wall-clock time")
        return _time_from_match(match), match.group("calendar")
    match = TIME_RE.match(text)
    if match is None:
        raise RangeValidationError(f"invalid ISO 8601 time string {text!r}")
    return _time_from_match(match), match.group("calendar")


def parse_year_month(text: str) -> tuple[IsoDate, Optional[str]]:
    """Разбор `YYYY-MM` или полной date строки; день берётся первым числом месяца."""
    match = YEAR_MONTH_RE.match(text.strip())
    if match is None:
        parsed = parse_date_time(text)
        return parsed.iso.date, parsed.calendar
    date = regulate_iso_date(_parse_year(match.group("year")), int(match.group("month")), 1, Overflow.REJECT)
    return date, match.group("calendar")


def parse_month_day(text: str, reference_year: int) -> tuple[IsoDate, Optional[str]]:
    """Разбор `--MM-DD`, `MM-DD` или полной date строки в reference year."""
    match = MONTH_DAY_RE.match(text.strip())
    if match is None:
        parsed = parse_date_time(text)
        month, day = parsed.iso.month, parsed.iso.day
        calendar = parsed.calendar
    else:
        month, day = int(match.group("month")), int(match.group("day"))
        calendar = match.group("calendar")
    return regulate_iso_date(reference_year, month, day, Overflow.REJECT), calendar


def parse_time_zone_string(text: str) -> str:
    """
    Извлечение идентификатора time zone из строки.

    Голый идентификатор возвращается без изменений. Для date-time строки
    приоритет у зоны в скобках, затем у числового offset; `Z` означает UTC.
    """
    text = text.strip()
    match = DATE_TIME_RE.match(text)
    if match is None:
        return text
    if match.group("zone"):
        return match.group("zone")
    offset = match.group("offset")
    if offset in ("Z", "z"):
        return "UTC"
    if offset:
        return offset
    raise RangeValidationError(f"{text!r} names no time zone")


def parse_calendar_string(text: str) -> str:
    """Извлечение идентификатора календаря из голого id или аннотированной строки."""
    text = text.strip()
    match = DATE_TIME_RE.match(text)
    if match is None:
        return text
    return match.group("calendar") or "iso8601"


def _time_fraction(match: re.Match[str], text: str) -> tuple[int, int, int, int, int]:
    """
    Раскладка дроби последней time-единицы по более мелким единицам.

    Returns:
        (доп. минуты, доп. секунды, ms, us, ns)
    """
    hours_fraction = match.group("hours_fraction")
    minutes_fraction = match.group("minutes_fraction")
    if hours_fraction is not None and (match.group("minutes"), match.group("seconds")) != (None, None):
        raise RangeValidationError(f"duration string {text!r}: only the last unit may have a fraction")
    if minutes_fraction is not None and match.group("seconds") is not None:
        raise RangeValidationError(f"duration string {text!r}: only the last unit may have a fraction")

    if hours_fraction is not None:
        excess = int(hours_fraction.ljust(9, "0")) * (NS_PER_HOUR // NS_PER_SECOND)
    elif minutes_fraction is not None:
        excess = int(minutes_fraction.ljust(9, "0")) * (NS_PER_MINUTE // NS_PER_SECOND)
    else:
        return (0, 0, *split_fraction(match.group("fraction")))

    minutes, excess = divmod(excess, NS_PER_MINUTE)
    seconds, excess = divmod(excess, NS_PER_SECOND)
    return (minutes, seconds, *split_fraction(f"{excess:09d}"))


def parse_duration(text: str) -> ParsedDuration:
    """
    Разбор ISO-8601 duration (`[-]PnYnMnWnDTnHnMn.fS`).

    Последняя присутствующая time-единица может нести дробь до девяти цифр;
    `PT1.5H` читается как один час тридцать минут. Значения — точные int
    любого размера.

    Raises:
        RangeValidationError: Если строка некорректна, не содержит единиц или
            за дробью следует более мелкая единица
    """
    match = DURATION_RE.match(text.strip())
    if match is None:
        raise RangeValidationError(f"invalid ISO 8601 duration string {text!r}")
    if all(match.group(name) is None for name in _DURATION_FIELDS):
        raise RangeValidationError(f"duration string {text!r} names no unit")
    if text.strip().upper().endswith("T"):
        raise RangeValidationError(f"duration string {text!r} has an empty time part")
    values = [int(match.group(name) or 0) for name in _DURATION_FIELDS]
    minutes, seconds, *subsecond = _time_fraction(match, text)
    values[5] += minutes
    values[6] += seconds
    return ParsedDuration(_sign_of(match.group("sign") or "+"), *values, *subsecond)
