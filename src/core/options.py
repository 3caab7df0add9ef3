"""
Options — policy enums и option bags

Каждая операция, способная наткнуться на разрыв (переполнение календаря,
неоднозначность offset зоны, ничья при округлении), принимает явную policy с
документированным значением по умолчанию. Policies — закрытые str-enum;
option bags — неизменяемые Pydantic модели, принимающие snake_case имена и
camelCase алиасы (`largest_unit` / `largestUnit`).

Везде, где принимаются options, можно передать None, mapping или экземпляр
модели; `normalize_options` приводит все три варианта к модели.
"""

from collections.abc import Mapping
from enum import Enum
from typing import Any, NamedTuple, Optional, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from src.core.errors import ArgumentTypeError, RangeValidationError
from src.core.units import TemporalUnit, to_unit


# =============================================================================
# ENUMS
# =============================================================================


class Overflow(str, Enum):
    """Обработка календарных полей вне допустимого диапазона"""

    CONSTRAIN = "constrain"
    REJECT = "reject"


class Disambiguation(str, Enum):
    """Разрешение civil time, которому соответствует ноль или два exact time"""

    COMPATIBLE = "compatible"
    EARLIER = "earlier"
    LATER = "later"
    REJECT = "reject"


class OffsetPolicy(str, Enum):
    """Обработка явного offset, конфликтующего с time zone"""

    PREFER = "prefer"
    USE = "use"
    IGNORE = "ignore"
    REJECT = "reject"


class RoundingMode(str, Enum):
    """Направление округления"""

    NEAREST = "nearest"
    CEIL = "ceil"
    FLOOR = "floor"
    TRUNC = "trunc"


class CalendarNameDisplay(str, Enum):
    """Календарная аннотация в сериализованных строках"""

    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"


class TimeZoneNameDisplay(str, Enum):
    """Аннотация time zone в квадратных скобках"""

    AUTO = "auto"
    NEVER = "never"


class OffsetDisplay(str, Enum):
    """Числовой суффикс offset в сериализованных строках"""

    AUTO = "auto"
    NEVER = "never"


class DurationDisambiguation(str, Enum):
    """Обработка отрицательных или переполненных аргументов конструктора Duration"""

    CONSTRAIN = "constrain"
    BALANCE = "balance"
    REJECT = "reject"


# =============================================================================
# OPTION BAGS
# =============================================================================


def _unit_or_auto(value: Any) -> Any:
    if value is None or value == "auto":
        return None
    if isinstance(value, str):
        return to_unit(value)
    return value


class OptionBag(BaseModel):
    """База всех option bags: immutable, camelCase алиасы, неизвестные ключи игнорируются"""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        alias_generator=to_camel,
        populate_by_name=True,
    )


class AssignmentOptions(OptionBag):
    """Options для add() и subtract()"""

    overflow: Overflow = Field(Overflow.CONSTRAIN, description="Calendar overflow policy")


class DisambiguationOptions(OptionBag):
    """Options разрешения civil datetime в time zone"""

    disambiguation: Disambiguation = Field(
        Disambiguation.COMPATIBLE, description="Gap/overlap resolution"
    )


class ResolutionOptions(OptionBag):
    """Options для with_(): offset из field bag предпочитается, пока он валиден"""

    overflow: Overflow = Field(Overflow.CONSTRAIN)
    disambiguation: Disambiguation = Field(Disambiguation.COMPATIBLE)
    offset: OffsetPolicy = Field(OffsetPolicy.PREFER)


class FromOptions(OptionBag):
    """Options для from_(): конфликтующий offset по умолчанию отклоняется"""

    overflow: Overflow = Field(Overflow.CONSTRAIN)
    disambiguation: Disambiguation = Field(Disambiguation.COMPATIBLE)
    offset: OffsetPolicy = Field(OffsetPolicy.REJECT)


class DifferenceOptions(OptionBag):
    """
    Options для until() и since().

    Незаданные единицы означают "auto": smallest по умолчанию nanoseconds,
    largest — более крупная из days и smallest.
    """

    largest_unit: Optional[TemporalUnit] = Field(None, description="Largest unit of the result")
    smallest_unit: Optional[TemporalUnit] = Field(None, description="Smallest unit of the result")
    rounding_mode: RoundingMode = Field(RoundingMode.NEAREST)
    rounding_increment: int = Field(1, ge=1)

    @field_validator("largest_unit", "smallest_unit", mode="before")
    @classmethod
    def validate_unit(cls, v: Any) -> Any:
        """Принимает plural-написания и "auto"."""
        return _unit_or_auto(v)


class RoundOptions(OptionBag):
    """Options для round(); smallest_unit обязателен"""

    smallest_unit: TemporalUnit = Field(..., description="Unit to round to")
    rounding_mode: RoundingMode = Field(RoundingMode.NEAREST)
    rounding_increment: int = Field(1, ge=1)

    @field_validator("smallest_unit", mode="before")
    @classmethod
    def validate_unit(cls, v: Any) -> Any:
        """Принимает plural-написания."""
        return to_unit(v) if isinstance(v, str) else v


class SecondsPrecision(NamedTuple):
    """Итоговая точность сериализации: digits ("auto", "minute" или 0-9), unit, increment"""

    precision: Union[int, str]
    unit: TemporalUnit
    increment: int


class ToStringOptions(OptionBag):
    """
    Options для to_string().

    Сериализация по умолчанию отбрасывает дробную часть (trunc), в отличие от
    арифметики, которая округляет к ближайшему.
    """

    fractional_second_digits: Optional[int] = Field(None, ge=0, le=9)
    smallest_unit: Optional[TemporalUnit] = Field(None)
    rounding_mode: RoundingMode = Field(RoundingMode.TRUNC)
    calendar_name: CalendarNameDisplay = Field(CalendarNameDisplay.AUTO)
    time_zone_name: TimeZoneNameDisplay = Field(TimeZoneNameDisplay.AUTO)
    offset: OffsetDisplay = Field(OffsetDisplay.AUTO)

    @field_validator("fractional_second_digits", mode="before")
    @classmethod
    def validate_digits(cls, v: Any) -> Any:
        """Принимает "auto"; bool под видом int отклоняется."""
        if v is None or v == "auto":
            return None
        if isinstance(v, bool):
            raise ValueError("fractional_second_digits must be an integer or 'auto'")
        return v

    @field_validator("smallest_unit", mode="before")
    @classmethod
    def validate_unit(cls, v: Any) -> Any:
        """Строковая точность есть только у minute и более мелких единиц."""
        unit = _unit_or_auto(v)
        if unit is not None and unit in (
            TemporalUnit.YEAR,
            TemporalUnit.MONTH,
            TemporalUnit.WEEK,
            TemporalUnit.DAY,
            TemporalUnit.HOUR,
        ):
            raise ValueError(f"smallest_unit {unit.value} is not a valid string precision")
        return unit

    def seconds_precision(self) -> SecondsPrecision:
        """
        Вычисление точности сериализации.

        smallest_unit важнее fractional_second_digits; если не задано ни то,
        ни другое, точность "auto" (кратчайшая форма без потерь).
        """
        if self.smallest_unit is TemporalUnit.MINUTE:
            return SecondsPrecision("minute", TemporalUnit.MINUTE, 1)
        if self.smallest_unit is not None:
            digits = {
                TemporalUnit.SECOND: 0,
                TemporalUnit.MILLISECOND: 3,
                TemporalUnit.MICROSECOND: 6,
                TemporalUnit.NANOSECOND: 9,
            }[self.smallest_unit]
            return SecondsPrecision(digits, self.smallest_unit, 1)

        digits = self.fractional_second_digits
        if digits is None:
            return SecondsPrecision("auto", TemporalUnit.NANOSECOND, 1)
        if digits == 0:
            return SecondsPrecision(0, TemporalUnit.SECOND, 1)
        if digits <= 3:
            return SecondsPrecision(digits, TemporalUnit.MILLISECOND, 10 ** (3 - digits))
        if digits <= 6:
            return SecondsPrecision(digits, TemporalUnit.MICROSECOND, 10 ** (6 - digits))
        return SecondsPrecision(digits, TemporalUnit.NANOSECOND, 10 ** (9 - digits))


# =============================================================================
# НОРМАЛИЗАЦИЯ
# =============================================================================

T = TypeVar("T", bound=OptionBag)


def normalize_options(options: Any, model: type[T]) -> T:
    """
    Нормализация аргумента options в option bag.

    Args:
        options: None, mapping или экземпляр OptionBag
        model: Целевой тип option bag

    Returns:
        Провалидированный option bag

    Raises:
        ArgumentTypeError: Если options не None, не mapping и не OptionBag
        RangeValidationError: Если значение вне своего enum или диапазона
    """
    if options is None:
        return model()
    if isinstance(options, model):
        return options
    if isinstance(options, OptionBag):
        options = options.model_dump()
    elif not isinstance(options, Mapping):
        raise ArgumentTypeError(
            f"options must be a mapping, got {type(options).__name__}"
        )
    try:
        return model.model_validate(dict(options))
    except ValidationError as exc:
        raise RangeValidationError(f"invalid options: {exc}") from exc
