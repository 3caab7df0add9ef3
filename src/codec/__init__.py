"""
String codec — каноническая сериализация, разбор строк и display-форматирование.
"""

from src.codec.display import BasicDateTimeFormat, DateTimeFormat
from src.codec.parse import (
    ParsedDateTime,
    ParsedDuration,
    parse_calendar_string,
    parse_date_time,
    parse_duration,
    parse_month_day,
    parse_offset_string,
    parse_time,
    parse_time_zone_string,
    parse_year_month,
)
from src.codec.serialize import (
    format_calendar_annotation,
    format_duration,
    format_iso_date,
    format_iso_date_time,
    format_iso_time,
    format_month_day,
    format_offset_string,
    format_seconds_part,
    format_year,
    format_year_month,
)

__all__ = [
    # Разбор
    "ParsedDateTime",
    "ParsedDuration",
    "parse_calendar_string",
    "parse_date_time",
    "parse_duration",
    "parse_month_day",
    "parse_offset_string",
    "parse_time",
    "parse_time_zone_string",
    "parse_year_month",
    # Сериализация
    "format_calendar_annotation",
    "format_duration",
    "format_iso_date",
    "format_iso_date_time",
    "format_iso_time",
    "format_month_day",
    "format_offset_string",
    "format_seconds_part",
    "format_year",
    "format_year_month",
    # Display
    "BasicDateTimeFormat",
    "DateTimeFormat",
]
