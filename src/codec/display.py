"""
Display — человекочитаемое представление zoned-значений

to_locale_string() делегирует объекту-formatter'у; вместо него можно передать
любой объект с методом format(value). По умолчанию используется фиксированный
layout, не зависящий от locale:

    2020-11-01 01:30:00 -04:00 (America/New_York)
"""

from collections.abc import Mapping, Sequence
from typing import Any, Optional, Protocol, runtime_checkable

from src.codec.serialize import (
    ISO_CALENDAR_ID,
    format_iso_date,
    format_iso_time,
)
from src.core.coercion import to_field_bag
from src.core.errors import ArgumentTypeError


@runtime_checkable
class DateTimeFormat(Protocol):
    """Formatter, принимаемый ZonedDateTime.to_locale_string()."""

    def format(self, value: Any) -> str: ...


class BasicDateTimeFormat:
    """
    Formatter, не зависящий от locale.

    Args:
        locales: Locale tag или последовательность tags; сохраняется, но не
            интерпретируется
        options: Mapping; `time_zone` отображает значение в другой зоне
    """

    def __init__(self, locales: Any = None, options: Optional[Mapping[str, Any]] = None):
        if locales is None:
            self.locales: tuple[str, ...] = ()
        elif isinstance(locales, str):
            self.locales = (locales,)
        elif isinstance(locales, Sequence) and all(isinstance(tag, str) for tag in locales):
            self.locales = tuple(locales)
        else:
            raise ArgumentTypeError("locales must be a string or a sequence of strings")
        self.options = to_field_bag(options) if options is not None else {}

    def format(self, value: Any) -> str:
        time_zone = self.options.get("time_zone")
        if time_zone is not None:
            value = value.with_time_zone(time_zone)
        dt = value.iso_date_time
        text = f"{format_iso_date(dt.date)} {format_iso_time(dt.time, 0)} {value.offset} ({value.time_zone.id})"
        if value.calendar.id != ISO_CALENDAR_ID:
            text += f" {value.calendar.id}"
        return text
