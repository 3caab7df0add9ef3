"""
Domain values.

Неизменяемые temporal-значения: Duration, Instant, civil (plain) значения и
ZonedDateTime.
"""

from src.core.domain.civil import (
    PlainDate,
    PlainDateTime,
    PlainMonthDay,
    PlainTime,
    PlainYearMonth,
)
from src.core.domain.duration import Duration, DurationFields
from src.core.domain.instant import Instant
from src.core.domain.zoned_datetime import ZonedDateTime

__all__ = [
    # Длительности
    "Duration",
    "DurationFields",
    # Exact time
    "Instant",
    # Civil-значения
    "PlainDate",
    "PlainDateTime",
    "PlainMonthDay",
    "PlainTime",
    "PlainYearMonth",
    # Zoned-значение
    "ZonedDateTime",
]
