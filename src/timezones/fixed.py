"""
FixedOffsetTimeZone — зона с одним постоянным UTC offset

Покрывает UTC и offset идентификаторы вида '+05:30' или '-03:00:15'.
"""

from typing import Final, Optional

from src.codec.serialize import format_offset_string
from src.core.errors import RangeValidationError
from src.core.math.exact_time import NS_PER_DAY
from src.core.math.iso_calendar import (
    IsoDateTime,
    iso_date_time_to_epoch_nanoseconds,
    validate_iso_date_time,
)
from src.timezones.base import TimeZone


class FixedOffsetTimeZone(TimeZone):
    """
    Зона с постоянным offset.

    Args:
        offset_nanoseconds: Offset от UTC, строго внутри ±24h
        identifier: Явный идентификатор (используется для 'UTC'); по
            умолчанию offset строка
    """

    __slots__ = ("_offset_nanoseconds", "_id")

    def __init__(self, offset_nanoseconds: int, identifier: Optional[str] = None):
        if not -NS_PER_DAY < offset_nanoseconds < NS_PER_DAY:
            raise RangeValidationError(f"offset {offset_nanoseconds} ns must be within ±24 hours")
        self._offset_nanoseconds = offset_nanoseconds
        self._id = identifier or format_offset_string(offset_nanoseconds)

    @property
    def id(self) -> str:
        return self._id

    @property
    def offset_nanoseconds(self) -> int:
        return self._offset_nanoseconds

    def offset_nanoseconds_at(self, epoch_nanoseconds: int) -> int:
        return self._offset_nanoseconds

    def possible_epoch_nanoseconds(self, dt: IsoDateTime) -> list[int]:
        # Фиксированный offset не пропускает и не повторяет wall-clock время.
        validate_iso_date_time(dt)
        return [iso_date_time_to_epoch_nanoseconds(dt) - self._offset_nanoseconds]


UTC: Final[FixedOffsetTimeZone] = FixedOffsetTimeZone(0, "UTC")
