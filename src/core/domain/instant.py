"""
Instant — точная точка на оси времени, без зоны и календаря

Хранится как int наносекунд от 1970-01-01T00:00Z в пределах ±10^8 дней.
"""

from typing import Any

from src.codec.parse import parse_date_time
from src.codec.serialize import format_iso_date_time, format_offset_string
from src.core.coercion import to_big_int, to_integral_number
from src.core.domain.base import TemporalValue
from src.core.domain.duration import Duration, balance_time_nanoseconds
from src.core.errors import ArgumentTypeError, RangeValidationError, branded
from src.core.math.exact_time import (
    NS_PER_DAY,
    NS_PER_MICROSECOND,
    NS_PER_MILLISECOND,
    NS_PER_SECOND,
    trunc_div,
    validate_epoch_nanoseconds,
)
from src.core.math.iso_calendar import (
    epoch_nanoseconds_to_iso_date_time,
    iso_date_time_to_epoch_nanoseconds,
)
from src.core.math.rounding import (
    negate_rounding_mode,
    round_number_to_increment,
    validate_rounding_increment,
)
from src.core.options import (
    DifferenceOptions,
    RoundOptions,
    RoundingMode,
    ToStringOptions,
    normalize_options,
)
from src.core.units import (
    MAXIMUM_INCREMENTS,
    TemporalUnit,
    larger_of_two_units,
    unit_nanoseconds,
    validate_unit_range,
)


def _time_line_mode(mode: RoundingMode) -> RoundingMode:
    # Exact time округляется вдоль оси времени: trunc означает в сторону прошлого.
    return RoundingMode.FLOOR if mode is RoundingMode.TRUNC else mode


def _require_time_unit(unit: TemporalUnit) -> TemporalUnit:
    if unit.is_date_unit:
        raise RangeValidationError(f"{unit.plural} are not allowed for exact times")
    return unit


class Instant(TemporalValue):
    """
    Exact time.

    Args:
        epoch_nanoseconds: int или целочисленная строка

    Raises:
        ArgumentTypeError: Если аргумент не приводится к целому
        RangeValidationError: Если он вне ±10^8 дней
    """

    __slots__ = ("_epoch_nanoseconds",)

    def __init__(self, epoch_nanoseconds: Any):
        self._epoch_nanoseconds = validate_epoch_nanoseconds(to_big_int(epoch_nanoseconds))

    # =========================================================================
    # КОНСТРУКТОРЫ
    # =========================================================================

    @classmethod
    def from_epoch_seconds(cls, seconds: Any) -> "Instant":
        return cls(to_integral_number(seconds, "epoch_seconds") * NS_PER_SECOND)

    @classmethod
    def from_epoch_milliseconds(cls, milliseconds: Any) -> "Instant":
        return cls(to_integral_number(milliseconds, "epoch_milliseconds") * NS_PER_MILLISECOND)

    @classmethod
    def from_epoch_microseconds(cls, microseconds: Any) -> "Instant":
        return cls(to_big_int(microseconds) * NS_PER_MICROSECOND)

    @classmethod
    def from_epoch_nanoseconds(cls, nanoseconds: Any) -> "Instant":
        return cls(to_big_int(nanoseconds))

    @classmethod
    def from_(cls, item: Any) -> "Instant":
        """
        Приведение Instant, ZonedDateTime или строки с `Z` или offset.

        Raises:
            ArgumentTypeError: Для значения любого другого вида
            RangeValidationError: Для строки без информации об offset
        """
        if isinstance(item, Instant):
            return cls(item._epoch_nanoseconds)
        to_instant = getattr(item, "to_instant", None)
        if callable(to_instant) and not isinstance(item, type):
            return cls(to_instant().epoch_nanoseconds)
        if not isinstance(item, str):
            raise ArgumentTypeError(f"cannot convert {type(item).__name__} to an Instant")
        parsed = parse_date_time(item)
        if parsed.offset_nanoseconds is None:
            raise RangeValidationError(f"{item!r}: an Instant string requires Z or a UTC offset")
        return cls(iso_date_time_to_epoch_nanoseconds(parsed.iso) - parsed.offset_nanoseconds)

    # =========================================================================
    # EPOCH GETTERS (отбрасывание к нулю)
    # =========================================================================

    @property
    @branded
    def epoch_seconds(self) -> int:
        return trunc_div(self._epoch_nanoseconds, NS_PER_SECOND)

    @property
    @branded
    def epoch_milliseconds(self) -> int:
        return trunc_div(self._epoch_nanoseconds, NS_PER_MILLISECOND)

    @property
    @branded
    def epoch_microseconds(self) -> int:
        return trunc_div(self._epoch_nanoseconds, NS_PER_MICROSECOND)

    @property
    @branded
    def epoch_nanoseconds(self) -> int:
        return self._epoch_nanoseconds

    # =========================================================================
    # АРИФМЕТИКА
    # =========================================================================

    @branded
    def add(self, duration: Any) -> "Instant":
        """
        Прибавление time-полей duration.

        Raises:
            RangeValidationError: Если у duration есть date-поля или результат
                вне диапазона
        """
        duration = Duration.from_(duration)
        if duration.has_date_units():
            raise RangeValidationError("years, months, weeks and days cannot be added to an Instant")
        return Instant(self._epoch_nanoseconds + duration.time_nanoseconds())

    @branded
    def subtract(self, duration: Any) -> "Instant":
        return self.add(Duration.from_(duration).negated())

    @branded
    def until(self, other: Any, options: Any = None) -> Duration:
        """Точная разница до `other`; largest unit по умолчанию seconds."""
        return self._difference(Instant.from_(other), options, negate=False)

    @branded
    def since(self, other: Any, options: Any = None) -> Duration:
        """Зеркальное отражение until()."""
        return self._difference(Instant.from_(other), options, negate=True)

    def _difference(self, other: "Instant", options: Any, negate: bool) -> Duration:
        opts = normalize_options(options, DifferenceOptions)
        smallest = _require_time_unit(opts.smallest_unit or TemporalUnit.NANOSECOND)
        largest = _require_time_unit(
            opts.largest_unit or larger_of_two_units(TemporalUnit.SECOND, smallest)
        )
        validate_unit_range(largest, smallest)
        increment = validate_rounding_increment(
            opts.rounding_increment, MAXIMUM_INCREMENTS[smallest], inclusive=False
        )
        mode = negate_rounding_mode(opts.rounding_mode) if negate else opts.rounding_mode

        difference = other._epoch_nanoseconds - self._epoch_nanoseconds
        rounded = round_number_to_increment(difference, increment * unit_nanoseconds(smallest), mode)
        result = Duration.from_fields(balance_time_nanoseconds(rounded, largest))
        return result.negated() if negate else result

    @branded
    def round(self, options: Any = None) -> "Instant":
        """
        Округление до кратного time-единицы.

        Increment должен нацело делить 24-часовые сутки.

        Raises:
            ArgumentTypeError: Если options не переданы
            RangeValidationError: Для date-единицы или невалидного increment
        """
        if options is None:
            raise ArgumentTypeError("options parameter is required")
        opts = normalize_options(options, RoundOptions)
        smallest = _require_time_unit(opts.smallest_unit)
        quantum = unit_nanoseconds(smallest)
        increment = validate_rounding_increment(
            opts.rounding_increment, NS_PER_DAY // quantum, inclusive=True
        )
        return Instant(
            round_number_to_increment(
                self._epoch_nanoseconds, increment * quantum, _time_line_mode(opts.rounding_mode)
            )
        )

    # =========================================================================
    # СРАВНЕНИЕ
    # =========================================================================

    @branded
    def equals(self, other: Any) -> bool:
        return self._epoch_nanoseconds == Instant.from_(other)._epoch_nanoseconds

    @staticmethod
    def compare(one: Any, two: Any) -> int:
        """-1, 0 или 1 по exact time."""
        ns1 = Instant.from_(one)._epoch_nanoseconds
        ns2 = Instant.from_(two)._epoch_nanoseconds
        return (ns1 > ns2) - (ns1 < ns2)

    # =========================================================================
    # КОНВЕРСИЯ
    # =========================================================================

    @branded
    def to_zoned_date_time(self, time_zone: Any, calendar: Any = None) -> Any:
        from src.core.domain.zoned_datetime import ZonedDateTime

        return ZonedDateTime(self._epoch_nanoseconds, time_zone, calendar)

    @branded
    def to_string(self, time_zone: Any = None, options: Any = None) -> str:
        """
        RFC 3339 строка: UTC с `Z` или, если задана time zone, wall-clock
        время с offset.
        """
        from src.timezones.registry import to_time_zone

        opts = normalize_options(options, ToStringOptions)
        precision, unit, increment = opts.seconds_precision()
        ns = round_number_to_increment(
            self._epoch_nanoseconds, increment * unit_nanoseconds(unit), _time_line_mode(opts.rounding_mode)
        )
        if time_zone is None:
            return format_iso_date_time(epoch_nanoseconds_to_iso_date_time(ns), precision) + "Z"
        zone = to_time_zone(time_zone)
        offset = zone.offset_nanoseconds_at(ns)
        local = epoch_nanoseconds_to_iso_date_time(ns + offset)
        return format_iso_date_time(local, precision) + format_offset_string(offset)

    @branded
    def to_json(self) -> str:
        return self.to_string()

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Instant({self.to_string()})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Instant):
            return NotImplemented
        return self._epoch_nanoseconds == other._epoch_nanoseconds

    def __hash__(self) -> int:
        return hash(("instant", self._epoch_nanoseconds))
