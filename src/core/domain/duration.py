"""
Duration — знаковое разложение промежутка времени на десять полей

Поля: years, months, weeks, days, hours, minutes, seconds, milliseconds,
microseconds, nanoseconds. Каждое поле — точный int.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Единый знак: все ненулевые поля одного знака
2. |field| не превышает наибольший конечный double
3. Date-поля (years..days) никогда не балансируются друг в друга

Конструктор принимает модули полей и разрешает отрицательный ввод через
disambiguation policy:
- reject (по умолчанию): любое отрицательное поле даёт ошибку
- constrain: отрицательные поля инвертируются, чтобы знаки совпали
- balance: time-поля переносятся в более крупные time-поля (1000ms -> 1s,
  100min -> 1h40min); date-поля остаются как есть

Знаковые durations получаются через from_() ('-P1D', {'days': -1}),
negated() и арифметику.
"""

import sys
from collections.abc import Mapping
from typing import Any, Final, NamedTuple

from src.codec.parse import parse_duration
from src.codec.serialize import format_duration
from src.core.coercion import to_integral_number
from src.core.contracts.validators import validate_duration_like
from src.core.domain.base import TemporalValue, field
from src.core.errors import ArgumentTypeError, RangeValidationError, branded
from src.core.math.exact_time import (
    NS_PER_HOUR,
    NS_PER_MICROSECOND,
    NS_PER_MILLISECOND,
    NS_PER_MINUTE,
    NS_PER_SECOND,
    sign,
)
from src.core.options import DurationDisambiguation
from src.core.units import UNIT_ORDER, TemporalUnit, unit_nanoseconds, unit_rank

# Наибольший модуль одного поля
MAX_FIELD_MAGNITUDE: Final[float] = sys.float_info.max


class DurationFields(NamedTuple):
    years: int = 0
    months: int = 0
    weeks: int = 0
    days: int = 0
    hours: int = 0
    minutes: int = 0
    seconds: int = 0
    milliseconds: int = 0
    microseconds: int = 0
    nanoseconds: int = 0


FIELD_NAMES: Final[tuple[str, ...]] = DurationFields._fields

_TIME_FIELD_NANOSECONDS: Final[tuple[int, ...]] = (
    NS_PER_HOUR,
    NS_PER_MINUTE,
    NS_PER_SECOND,
    NS_PER_MILLISECOND,
    NS_PER_MICROSECOND,
    1,
)


# =============================================================================
# ВАЛИДАЦИЯ ПОЛЕЙ
# =============================================================================


def _to_field(value: Any, name: str) -> int:
    number = to_integral_number(value, name)
    if abs(number) > MAX_FIELD_MAGNITUDE:
        raise RangeValidationError(f"{name} {number} is not representable")
    return number


def _to_disambiguation(value: Any) -> DurationDisambiguation:
    if isinstance(value, DurationDisambiguation):
        return value
    try:
        return DurationDisambiguation(value)
    except ValueError:
        raise ArgumentTypeError(f"invalid disambiguation {value!r}") from None


def _check_sign_uniformity(values: DurationFields) -> None:
    signs = {sign(value) for value in values} - {0}
    if len(signs) > 1:
        raise RangeValidationError(f"mixed-sign values not allowed as duration fields: {tuple(values)}")


def _balance_time(values: DurationFields) -> DurationFields:
    total = sum(v * ns for v, ns in zip(values[4:], _TIME_FIELD_NANOSECONDS))
    balanced = []
    for ns in _TIME_FIELD_NANOSECONDS:
        quotient, total = divmod(total, ns)
        balanced.append(quotient)
    return DurationFields(*values[:4], *balanced)


def time_nanoseconds_of(values: DurationFields) -> int:
    """Поля от hours до nanoseconds как одно точное число."""
    return sum(v * ns for v, ns in zip(values[4:], _TIME_FIELD_NANOSECONDS))


def balance_time_nanoseconds(nanoseconds: int, largest_unit: TemporalUnit) -> DurationFields:
    """
    Разбиение знаковых наносекунд на поля начиная с `largest_unit`.

    DAY считает 24-часовые сутки; более крупные единицы не порождаются.

    Examples:
        >>> balance_time_nanoseconds(5_400_000_000_000, TemporalUnit.HOUR).minutes
        30
    """
    if unit_rank(largest_unit) < unit_rank(TemporalUnit.DAY):
        raise RangeValidationError(f"cannot balance exact time into {largest_unit.plural}")
    direction = sign(nanoseconds)
    remainder = abs(nanoseconds)
    values = dict.fromkeys(FIELD_NAMES, 0)
    for unit in UNIT_ORDER[unit_rank(largest_unit):]:
        quotient, remainder = divmod(remainder, unit_nanoseconds(unit))
        values[unit.plural] = direction * quotient
    return DurationFields(**values)


# =============================================================================
# DURATION
# =============================================================================


class Duration(TemporalValue):
    """
    Неизменяемая duration.

    Args:
        years ... nanoseconds: Модули полей (int или целочисленные float)
        disambiguation: reject | constrain | balance (keyword-only)

    Raises:
        RangeValidationError: Отрицательный ввод при reject, бесконечные,
            дробные или непредставимые поля
        ArgumentTypeError: Неизвестный disambiguation или нечисловое поле
    """

    __slots__ = ("_fields",)

    def __init__(
        self,
        years: Any = 0,
        months: Any = 0,
        weeks: Any = 0,
        days: Any = 0,
        hours: Any = 0,
        minutes: Any = 0,
        seconds: Any = 0,
        milliseconds: Any = 0,
        microseconds: Any = 0,
        nanoseconds: Any = 0,
        *,
        disambiguation: Any = DurationDisambiguation.REJECT,
    ):
        mode = _to_disambiguation(disambiguation)
        raw = (years, months, weeks, days, hours, minutes, seconds, milliseconds, microseconds, nanoseconds)
        values = DurationFields(*(_to_field(v, n) for v, n in zip(raw, FIELD_NAMES)))

        if mode is DurationDisambiguation.CONSTRAIN:
            values = DurationFields(*(abs(v) for v in values))
        elif any(v < 0 for v in values):
            raise RangeValidationError(f"negative values not allowed as duration fields: {tuple(values)}")
        elif mode is DurationDisambiguation.BALANCE:
            values = _balance_time(values)

        self._fields = values

    @classmethod
    def from_fields(cls, values: DurationFields) -> "Duration":
        """Построение знаковой duration из уже провалидированных полей."""
        _check_sign_uniformity(values)
        for value, name in zip(values, FIELD_NAMES):
            _to_field(value, name)
        duration = cls.__new__(cls)
        duration._fields = DurationFields(*values)
        return duration

    @classmethod
    def from_(cls, item: Any) -> "Duration":
        """
        Приведение Duration, ISO-8601 duration строки или field bag.

        Raises:
            ArgumentTypeError: Для значения любого другого вида
            RangeValidationError: Для некорректной строки, пустого bag или
                смешанных знаков
        """
        if isinstance(item, Duration):
            return cls.from_fields(item._fields)
        if isinstance(item, str):
            parsed = parse_duration(item)
            return cls.from_fields(DurationFields(*(parsed.sign * v for v in parsed[1:])))
        if isinstance(item, Mapping):
            bag = validate_duration_like(item)
            return cls.from_fields(
                DurationFields(*(_to_field(bag.get(name, 0), name) for name in FIELD_NAMES))
            )
        raise ArgumentTypeError(f"cannot convert {type(item).__name__} to a Duration")

    # =========================================================================
    # ПОЛЯ
    # =========================================================================

    years = field(lambda self: self._fields.years)
    months = field(lambda self: self._fields.months)
    weeks = field(lambda self: self._fields.weeks)
    days = field(lambda self: self._fields.days)
    hours = field(lambda self: self._fields.hours)
    minutes = field(lambda self: self._fields.minutes)
    seconds = field(lambda self: self._fields.seconds)
    milliseconds = field(lambda self: self._fields.milliseconds)
    microseconds = field(lambda self: self._fields.microseconds)
    nanoseconds = field(lambda self: self._fields.nanoseconds)

    @property
    @branded
    def fields(self) -> DurationFields:
        return self._fields

    @property
    @branded
    def sign(self) -> int:
        """-1, 0 or 1"""
        for value in self._fields:
            if value:
                return sign(value)
        return 0

    @property
    @branded
    def blank(self) -> bool:
        return not any(self._fields)

    @branded
    def time_nanoseconds(self) -> int:
        """Поля от hours до nanoseconds как одно точное число."""
        return time_nanoseconds_of(self._fields)

    @branded
    def has_date_units(self) -> bool:
        return any(self._fields[:4])

    # =========================================================================
    # ПРОИЗВОДНЫЕ ЗНАЧЕНИЯ
    # =========================================================================

    @branded
    def negated(self) -> "Duration":
        return Duration.from_fields(DurationFields(*(-v for v in self._fields)))

    @branded
    def abs(self) -> "Duration":
        return Duration.from_fields(DurationFields(*(abs(v) for v in self._fields)))

    # =========================================================================
    # СЕРИАЛИЗАЦИЯ / ИДЕНТИЧНОСТЬ
    # =========================================================================

    @branded
    def to_string(self) -> str:
        """Форма ISO-8601, например 'P1Y2M3DT4H5M6.007S' или '-PT1S'."""
        return format_duration(self.sign, *(abs(v) for v in self._fields))

    @branded
    def to_json(self) -> str:
        return self.to_string()

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Duration({self.to_string()})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Duration):
            return NotImplemented
        return self._fields == other._fields

    def __hash__(self) -> int:
        return hash(("duration", self._fields))

    def __neg__(self) -> "Duration":
        return self.negated()

    def __abs__(self) -> "Duration":
        return self.abs()
