"""
ZoneInfoTimeZone — IANA time zones на базе tz database

Offset берутся из модуля стандартной библиотеки `zoneinfo`; дистрибутив
`tzdata` поставляет базу, если её нет на хосте. Instants за пределами лет,
представимых datetime, используют offset ближайшего представимого instant
(первое или последнее правило зоны).
"""

from datetime import datetime, timedelta, timezone
from typing import Final
from zoneinfo import ZoneInfo

from src.core.math.exact_time import NS_PER_MICROSECOND, NS_PER_SECOND
from src.timezones.base import TimeZone

# На сутки внутри окна datetime (годы 1 .. 9999) с обеих сторон, чтобы
# локальное время оставалось представимым при любом offset.
_MIN_SECONDS: Final[int] = int(datetime(1, 1, 2, tzinfo=timezone.utc).timestamp())
_MAX_SECONDS: Final[int] = int(datetime(9999, 12, 30, tzinfo=timezone.utc).timestamp())

_ONE_MICROSECOND: Final[timedelta] = timedelta(microseconds=1)


class ZoneInfoTimeZone(TimeZone):
    """Зона, заданная IANA именем, например 'America/New_York'."""

    __slots__ = ("_zone",)

    def __init__(self, zone: ZoneInfo):
        self._zone = zone

    @property
    def id(self) -> str:
        return self._zone.key

    def offset_nanoseconds_at(self, epoch_nanoseconds: int) -> int:
        seconds = min(max(epoch_nanoseconds // NS_PER_SECOND, _MIN_SECONDS), _MAX_SECONDS)
        offset = datetime.fromtimestamp(seconds, tz=self._zone).utcoffset()
        return (offset // _ONE_MICROSECOND) * NS_PER_MICROSECOND
