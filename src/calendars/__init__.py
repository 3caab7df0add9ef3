"""
Calendar systems — capability interface, ISO-8601 и Gregorian.
"""

from src.calendars.base import Calendar, iso_date_of
from src.calendars.gregorian import GregorianCalendar
from src.calendars.iso8601 import ISO8601Calendar
from src.calendars.registry import (
    CALENDARS,
    GREGORY,
    ISO8601,
    assert_same_calendar,
    compare_calendars,
    get_calendar,
    get_iso8601_calendar,
    to_calendar,
)

__all__ = [
    "CALENDARS",
    "Calendar",
    "GREGORY",
    "GregorianCalendar",
    "ISO8601",
    "ISO8601Calendar",
    "assert_same_calendar",
    "compare_calendars",
    "get_calendar",
    "get_iso8601_calendar",
    "iso_date_of",
    "to_calendar",
]
