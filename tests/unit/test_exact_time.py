"""
Тесты для примитивов exact time

Проверяет:
1. Границы поддерживаемого диапазона (±10^8 дней, включительно)
2. Деление с отбрасыванием к нулю
3. Civil-диапазон на сутки шире диапазона instant
"""

import pytest

from src.core.errors import RangeValidationError, TemporalError
from src.core.math.exact_time import (
    CIVIL_NANOSECONDS_MAX,
    EPOCH_NANOSECONDS_MAX,
    EPOCH_NANOSECONDS_MIN,
    NS_PER_DAY,
    is_valid_epoch_nanoseconds,
    sign,
    trunc_div,
    trunc_divmod,
    validate_civil_nanoseconds,
    validate_epoch_nanoseconds,
)


class TestSupportedRange:
    """Диапазон instant ±10^8 дней"""

    def test_boundaries_are_inclusive(self) -> None:
        assert EPOCH_NANOSECONDS_MAX == 8_640_000_000_000_000_000_000
        assert validate_epoch_nanoseconds(EPOCH_NANOSECONDS_MAX) == EPOCH_NANOSECONDS_MAX
        assert validate_epoch_nanoseconds(EPOCH_NANOSECONDS_MIN) == EPOCH_NANOSECONDS_MIN

    def test_one_past_the_boundary_fails(self) -> None:
        with pytest.raises(RangeValidationError):
            validate_epoch_nanoseconds(EPOCH_NANOSECONDS_MAX + 1)
        with pytest.raises(RangeValidationError):
            validate_epoch_nanoseconds(EPOCH_NANOSECONDS_MIN - 1)

    def test_is_valid(self) -> None:
        assert is_valid_epoch_nanoseconds(0)
        assert not is_valid_epoch_nanoseconds(EPOCH_NANOSECONDS_MAX + 1)

    def test_range_error_is_a_value_error(self) -> None:
        with pytest.raises(ValueError):
            validate_epoch_nanoseconds(EPOCH_NANOSECONDS_MAX * 2)
        with pytest.raises(TemporalError):
            validate_epoch_nanoseconds(EPOCH_NANOSECONDS_MAX * 2)

    def test_civil_range_is_one_day_wider(self) -> None:
        assert CIVIL_NANOSECONDS_MAX == EPOCH_NANOSECONDS_MAX + NS_PER_DAY
        assert validate_civil_nanoseconds(EPOCH_NANOSECONDS_MAX + NS_PER_DAY - 1)
        with pytest.raises(RangeValidationError):
            validate_civil_nanoseconds(EPOCH_NANOSECONDS_MAX + NS_PER_DAY)


class TestDivision:
    """Деление отбрасывает к нулю"""

    @pytest.mark.parametrize(
        "dividend,divisor,expected",
        [(7, 2, 3), (-7, 2, -3), (7, -2, -3), (-7, -2, 3), (0, 5, 0)],
    )
    def test_trunc_div(self, dividend: int, divisor: int, expected: int) -> None:
        assert trunc_div(dividend, divisor) == expected

    def test_trunc_divmod_remainder_keeps_dividend_sign(self) -> None:
        assert trunc_divmod(-7, 2) == (-3, -1)
        assert trunc_divmod(7, 2) == (3, 1)

    def test_big_values_stay_exact(self) -> None:
        big = 10**30 + 7
        assert trunc_div(big, 10**9) == 10**21
        assert trunc_div(-big, 10**9) == -(10**21)

    def test_sign(self) -> None:
        assert [sign(-5), sign(0), sign(12)] == [-1, 0, 1]
