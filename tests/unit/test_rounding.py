"""
Тесты для хелперов округления и temporal-единиц

Проверяет:
1. Режимы округления на точных int и дробях
2. Валидацию increment по максимумам единиц
3. Имена единиц, порядок и фиксированные длины
"""

from fractions import Fraction

import pytest

from src.core.errors import RangeValidationError
from src.core.math.rounding import (
    negate_rounding_mode,
    round_number_to_increment,
    round_to_integer,
    validate_rounding_increment,
)
from src.core.options import RoundingMode
from src.core.units import (
    MAXIMUM_INCREMENTS,
    TemporalUnit,
    larger_of_two_units,
    to_unit,
    unit_nanoseconds,
    validate_unit_range,
)


class TestRoundToInteger:
    """Режимы округления"""

    @pytest.mark.parametrize(
        "mode,positive,negative",
        [
            (RoundingMode.NEAREST, 3, -3),
            (RoundingMode.CEIL, 3, -2),
            (RoundingMode.FLOOR, 2, -3),
            (RoundingMode.TRUNC, 2, -2),
        ],
    )
    def test_half(self, mode: RoundingMode, positive: int, negative: int) -> None:
        assert round_to_integer(Fraction(5, 2), mode) == positive
        assert round_to_integer(Fraction(-5, 2), mode) == negative

    def test_increment(self) -> None:
        assert round_number_to_increment(-25, 10, RoundingMode.NEAREST) == -30
        assert round_number_to_increment(24, 10, RoundingMode.NEAREST) == 20
        assert round_number_to_increment(21, 10, RoundingMode.CEIL) == 30

    def test_exact_for_large_values(self) -> None:
        value = 10**25 + 499_999_999
        assert round_number_to_increment(value, 10**9, RoundingMode.NEAREST) == 10**25

    def test_non_positive_increment(self) -> None:
        with pytest.raises(RangeValidationError):
            round_number_to_increment(5, 0, RoundingMode.NEAREST)

    def test_negate(self) -> None:
        assert negate_rounding_mode(RoundingMode.CEIL) is RoundingMode.FLOOR
        assert negate_rounding_mode(RoundingMode.FLOOR) is RoundingMode.CEIL
        assert negate_rounding_mode(RoundingMode.TRUNC) is RoundingMode.TRUNC


class TestIncrementValidation:
    """Increment должен делить максимум единицы"""

    def test_divisors_accepted(self) -> None:
        assert validate_rounding_increment(12, MAXIMUM_INCREMENTS[TemporalUnit.HOUR], inclusive=False) == 12
        assert validate_rounding_increment(1, MAXIMUM_INCREMENTS[TemporalUnit.DAY], inclusive=False) == 1

    def test_maximum_excluded(self) -> None:
        with pytest.raises(RangeValidationError):
            validate_rounding_increment(24, 24, inclusive=False)
        assert validate_rounding_increment(24, 24, inclusive=True) == 24

    def test_non_divisor(self) -> None:
        with pytest.raises(RangeValidationError):
            validate_rounding_increment(7, 60, inclusive=False)

    def test_unbounded(self) -> None:
        assert validate_rounding_increment(1000, None, inclusive=False) == 1000
        with pytest.raises(RangeValidationError):
            validate_rounding_increment(0, None, inclusive=False)


class TestUnits:
    """Temporal-единицы"""

    def test_plural_spelling(self) -> None:
        assert TemporalUnit("days") is TemporalUnit.DAY
        assert to_unit("nanoseconds") is TemporalUnit.NANOSECOND
        assert TemporalUnit.HOUR.plural == "hours"

    def test_unknown(self) -> None:
        with pytest.raises(RangeValidationError):
            to_unit("fortnight")

    def test_ordering(self) -> None:
        assert larger_of_two_units(TemporalUnit.DAY, TemporalUnit.HOUR) is TemporalUnit.DAY
        assert larger_of_two_units(TemporalUnit.SECOND, TemporalUnit.MONTH) is TemporalUnit.MONTH
        validate_unit_range(TemporalUnit.HOUR, TemporalUnit.SECOND)
        with pytest.raises(RangeValidationError):
            validate_unit_range(TemporalUnit.SECOND, TemporalUnit.HOUR)

    def test_date_units(self) -> None:
        assert TemporalUnit.WEEK.is_date_unit
        assert not TemporalUnit.HOUR.is_date_unit

    def test_fixed_lengths(self) -> None:
        assert unit_nanoseconds(TemporalUnit.HOUR) == 3_600_000_000_000
        with pytest.raises(RangeValidationError):
            unit_nanoseconds(TemporalUnit.MONTH)

    def test_maximum_increments(self) -> None:
        assert MAXIMUM_INCREMENTS[TemporalUnit.HOUR] == 24
        assert MAXIMUM_INCREMENTS[TemporalUnit.MINUTE] == 60
        assert MAXIMUM_INCREMENTS[TemporalUnit.NANOSECOND] == 1000
