"""
TimeZone — capability interface time zone

Time zone отвечает на два вопроса:
1. Какой UTC offset действует в данный exact time?
2. В какие exact time зона показывает данное wall-clock время? (0 = gap, 1,
   или 2 = overlap)

Всё остальное, включая disambiguation gap и overlap, выводится из этих двух
ответов и общее для всех реализаций.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Offset — целые наносекунды строго внутри ±24h
2. Transitions отстоят друг от друга более чем на сутки
3. Кандидаты exact time возвращаются по возрастанию
"""

import logging
from abc import ABC, abstractmethod
from typing import Any

from src.codec.serialize import format_offset_string
from src.core.errors import RangeValidationError
from src.core.math.exact_time import NS_PER_DAY
from src.core.math.iso_calendar import (
    IsoDateTime,
    add_time,
    epoch_nanoseconds_to_iso_date_time,
    iso_date_time_to_epoch_nanoseconds,
    validate_iso_date_time,
)
from src.core.options import Disambiguation, DisambiguationOptions, normalize_options

logger = logging.getLogger(__name__)


class TimeZone(ABC):
    """Capability time zone."""

    __slots__ = ()

    @property
    @abstractmethod
    def id(self) -> str:
        """IANA имя, 'UTC' или offset строка вида '+05:30'"""

    @abstractmethod
    def offset_nanoseconds_at(self, epoch_nanoseconds: int) -> int:
        """UTC offset, действующий в данный exact time."""

    # =========================================================================
    # EXACT TIME <-> CIVIL TIME
    # =========================================================================

    def iso_date_time_at(self, epoch_nanoseconds: int) -> IsoDateTime:
        """Wall-clock время, которое зона показывает в данный exact time."""
        offset = self.offset_nanoseconds_at(epoch_nanoseconds)
        return epoch_nanoseconds_to_iso_date_time(epoch_nanoseconds + offset)

    def possible_epoch_nanoseconds(self, dt: IsoDateTime) -> list[int]:
        """
        Exact times, в которые зона показывает wall-clock время `dt`.

        Кандидаты строятся из offset за сутки до и после и остаются, только
        если зона действительно показывает `dt` в этот exact time.

        Returns:
            Список по возрастанию: пустой в gap, два элемента в overlap
        """
        validate_iso_date_time(dt)
        utc = iso_date_time_to_epoch_nanoseconds(dt)
        offsets = {
            self.offset_nanoseconds_at(utc - NS_PER_DAY),
            self.offset_nanoseconds_at(utc),
            self.offset_nanoseconds_at(utc + NS_PER_DAY),
        }
        candidates = {utc - offset for offset in offsets}
        return sorted(
            candidate
            for candidate in candidates
            if candidate + self.offset_nanoseconds_at(candidate) == utc
        )

    def resolve_epoch_nanoseconds(
        self, dt: IsoDateTime, disambiguation: Disambiguation
    ) -> int:
        """
        Выбор одного exact time для wall-clock времени.

        Overlap: COMPATIBLE и EARLIER берут более ранний кандидат, LATER более
        поздний. Gap: wall-clock время сдвигается на длину gap, назад для
        EARLIER и вперёд для COMPATIBLE и LATER.

        Raises:
            RangeValidationError: При REJECT, если время неоднозначно или
                пропущено, либо datetime вне диапазона
        """
        possible = self.possible_epoch_nanoseconds(dt)
        if len(possible) == 1:
            return possible[0]

        if possible:
            logger.debug("%s is ambiguous in %s, resolving with %s", dt, self.id, disambiguation.value)
            if disambiguation in (Disambiguation.COMPATIBLE, Disambiguation.EARLIER):
                return possible[0]
            if disambiguation is Disambiguation.LATER:
                return possible[-1]
            raise RangeValidationError(f"{tuple(dt)} is ambiguous in time zone {self.id}")

        logger.debug("%s is skipped in %s, resolving with %s", dt, self.id, disambiguation.value)
        if disambiguation is Disambiguation.REJECT:
            raise RangeValidationError(f"{tuple(dt)} does not exist in time zone {self.id}")

        utc = iso_date_time_to_epoch_nanoseconds(dt)
        gap = self.offset_nanoseconds_at(utc + NS_PER_DAY) - self.offset_nanoseconds_at(utc - NS_PER_DAY)
        if disambiguation is Disambiguation.EARLIER:
            shifted = self.possible_epoch_nanoseconds(add_time(dt, -gap))
            index = 0
        else:
            shifted = self.possible_epoch_nanoseconds(add_time(dt, gap))
            index = -1
        if not shifted:
            raise RangeValidationError(f"cannot resolve {tuple(dt)} in time zone {self.id}")
        return shifted[index]

    # =========================================================================
    # VALUE-LEVEL API
    # =========================================================================

    def get_offset_nanoseconds_for(self, instant: Any) -> int:
        from src.core.domain.instant import Instant

        return self.offset_nanoseconds_at(Instant.from_(instant).epoch_nanoseconds)

    def get_offset_string_for(self, instant: Any) -> str:
        return format_offset_string(self.get_offset_nanoseconds_for(instant))

    def get_plain_date_time_for(self, instant: Any, calendar: Any = None) -> Any:
        """Wall-clock PlainDateTime для Instant в этой зоне."""
        from src.calendars.registry import to_calendar
        from src.core.domain.civil import PlainDateTime
        from src.core.domain.instant import Instant

        epoch_nanoseconds = Instant.from_(instant).epoch_nanoseconds
        return PlainDateTime.from_iso(self.iso_date_time_at(epoch_nanoseconds), to_calendar(calendar))

    def get_possible_instants_for(self, date_time: Any) -> list[Any]:
        """
        Instants, в которые зона показывает wall-clock время.

        `date_time` может быть PlainDateTime, field bag (с необязательным
        calendar) или ISO строкой.
        """
        from src.core.domain.civil import PlainDateTime
        from src.core.domain.instant import Instant

        iso = PlainDateTime.from_(date_time).iso_date_time
        return [Instant(ns) for ns in self.possible_epoch_nanoseconds(iso)]

    def get_instant_for(self, date_time: Any, options: Any = None) -> Any:
        """Один Instant для wall-clock времени по опции disambiguation."""
        from src.core.domain.civil import PlainDateTime
        from src.core.domain.instant import Instant

        disambiguation = normalize_options(options, DisambiguationOptions).disambiguation
        iso = PlainDateTime.from_(date_time).iso_date_time
        return Instant(self.resolve_epoch_nanoseconds(iso, disambiguation))

    # =========================================================================
    # ИДЕНТИЧНОСТЬ
    # =========================================================================

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TimeZone):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(("time_zone", self.id))

    def __str__(self) -> str:
        return self.id

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.id}>"

    def to_json(self) -> str:
        return self.id
