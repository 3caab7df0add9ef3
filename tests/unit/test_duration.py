"""
Тесты для Duration

Проверяет:
1. Disambiguation конструктора: reject / constrain / balance
2. Date-поля никогда не балансируются
3. from_() для durations, строк и field bags
4. Доли секунды сворачиваются в одно дробное поле секунд
5. Пределы полей: ноль, бесконечность, непредставимые, большие целые
"""

import sys

import pytest

from src.core.domain.duration import (
    Duration,
    DurationFields,
    balance_time_nanoseconds,
)
from src.core.errors import ArgumentTypeError, RangeValidationError, ReceiverTypeError
from src.core.units import TemporalUnit

MAX_SAFE_INTEGER = 2**53 - 1

# Поля в порядке конструктора (weeks между months и days)
FIELD_UNITS = [
    "years",
    "months",
    "days",
    "hours",
    "minutes",
    "seconds",
    "milliseconds",
    "microseconds",
    "nanoseconds",
]


def _positional(unit: str, value: object) -> list:
    """Аргументы конструктора с `value` на позиции `unit`."""
    args: list = [0] * 10
    args[list(DurationFields._fields).index(unit)] = value
    return args


class TestDisambiguation:
    """Режимы disambiguation конструктора"""

    def test_negative_values_rejected(self) -> None:
        with pytest.raises(RangeValidationError):
            Duration(-1, -1, 0, -1, -1, -1, -1, -1, -1, -1, disambiguation="reject")

    def test_negative_values_invert_when_constrain(self) -> None:
        duration = Duration(-1, -1, 0, -1, -1, -1, -1, -1, -1, -1, disambiguation="constrain")
        assert str(duration) == "P1Y1M1DT1H1M1.001001001S"

    @pytest.mark.parametrize(
        "args,expected",
        [
            ((0, 0, 0, 0, 0, 0, 0, 0, 0, 1000), "PT0.000001S"),
            ((0, 0, 0, 0, 0, 0, 0, 0, 1000, 0), "PT0.001S"),
            ((0, 0, 0, 0, 0, 0, 0, 1000, 0, 0), "PT1S"),
            ((0, 0, 0, 0, 0, 0, 100, 0, 0, 0), "PT1M40S"),
            ((0, 0, 0, 0, 0, 100, 0, 0, 0, 0), "PT1H40M"),
        ],
    )
    def test_time_units_balance(self, args: tuple, expected: str) -> None:
        assert str(Duration(*args, disambiguation="balance")) == expected

    @pytest.mark.parametrize(
        "args,expected",
        [
            ((0, 12, 0, 0, 0, 0, 0, 0, 0, 0), "P12M"),
            ((0, 12, 0, 0, 0, 0, 3600, 0, 0, 0), "P12MT1H"),
            ((0, 0, 0, 31, 0, 0, 0, 0, 0, 0), "P31D"),
            ((0, 0, 0, 31, 0, 0, 3600, 0, 0, 0), "P31DT1H"),
            ((0, 0, 0, 0, 24, 0, 0, 0, 0, 0), "PT24H"),
            ((0, 0, 0, 0, 0, 0, 2 * 86400, 0, 0, 0), "PT48H"),
            ((0, 0, 0, 0, 24, 0, 3600, 0, 0, 0), "PT25H"),
        ],
    )
    def test_date_units_do_not_balance(self, args: tuple, expected: str) -> None:
        assert str(Duration(*args, disambiguation="balance")) == expected

    def test_bad_disambiguation(self) -> None:
        with pytest.raises(ArgumentTypeError):
            Duration(0, 0, 0, 0, 0, 0, 0, 0, 0, 0, disambiguation="xyz")

    def test_type_error_is_builtin(self) -> None:
        with pytest.raises(TypeError):
            Duration(disambiguation="xyz")


class TestFrom:
    """Duration.from_()"""

    def test_from_duration_copies(self) -> None:
        original = Duration(5)
        copy = Duration.from_(original)
        assert copy == original
        assert copy is not original

    def test_from_bag(self) -> None:
        assert str(Duration.from_({"milliseconds": 5})) == "PT0.005S"

    def test_from_bag_with_several_fields(self) -> None:
        assert Duration.from_({"hours": 1, "minutes": 30}).minutes == 30

    def test_from_string(self) -> None:
        assert str(Duration.from_("P1D")) == "P1D"
        assert str(Duration.from_("P1Y2M3W4DT5H6M7.008009010S")) == "P1Y2M3W4DT5H6M7.008009010S"

    def test_from_negative_string(self) -> None:
        duration = Duration.from_("-PT1H30M")
        assert duration.hours == -1
        assert duration.minutes == -30
        assert duration.sign == -1

    def test_from_fractional_hours(self) -> None:
        assert str(Duration.from_("PT1.5H")) == "PT1H30M"
        assert str(Duration.from_("-PT0.5M")) == "-PT30S"

    def test_empty_bag_rejected(self) -> None:
        with pytest.raises(RangeValidationError):
            Duration.from_({})

    def test_mixed_signs_rejected(self) -> None:
        with pytest.raises(RangeValidationError):
            Duration.from_({"hours": 1, "minutes": -1})

    def test_wrong_kind(self) -> None:
        with pytest.raises(ArgumentTypeError):
            Duration.from_(5)
        with pytest.raises(ArgumentTypeError):
            Duration.from_({"hours": "1"})

    def test_malformed_string(self) -> None:
        for text in ("P", "PT", "P1DT", "1D", "PT1.5H"):
            with pytest.raises(RangeValidationError):
                Duration.from_(text)


class TestToString:
    """Доли секунды сворачиваются в секунды"""

    @pytest.mark.parametrize(
        "bag,expected",
        [
            ({"milliseconds": 3500}, "PT3.500S"),
            ({"microseconds": 3500}, "PT0.003500S"),
            ({"nanoseconds": 3500}, "PT0.000003500S"),
            ({"seconds": 120, "milliseconds": 3500}, "PT123.500S"),
        ],
    )
    def test_sub_seconds_balance(self, bag: dict, expected: str) -> None:
        assert str(Duration.from_(bag)) == expected

    def test_all_sub_second_fields(self) -> None:
        duration = Duration(0, 0, 0, 0, 0, 0, 0, 1111, 1111, 1111, disambiguation="reject")
        assert str(duration) == "PT1.112112111S"

    def test_negative(self) -> None:
        assert Duration.from_({"days": -1, "hours": -12}).to_string() == "-P1DT12H"

    def test_json(self) -> None:
        assert Duration(1).to_json() == "P1Y"


class TestLimits:
    """Пределы значений полей"""

    def test_zero(self) -> None:
        assert str(Duration()) == "PT0S"
        for unit in FIELD_UNITS:
            assert str(Duration.from_({unit: 0})) == "PT0S"
        for text in ("P0Y", "P0M", "P0D", "PT0H", "PT0M", "PT0S"):
            assert str(Duration.from_(text)) == "PT0S"

    @pytest.mark.parametrize("unit", FIELD_UNITS)
    def test_infinity_rejected(self, unit: str) -> None:
        with pytest.raises(RangeValidationError):
            Duration(*_positional(unit, float("inf")))
        with pytest.raises(RangeValidationError):
            Duration.from_({unit: float("inf")})

    @pytest.mark.parametrize("unit", FIELD_UNITS)
    def test_unrepresentable_rejected(self, unit: str) -> None:
        with pytest.raises(RangeValidationError):
            Duration(*_positional(unit, 10**309))
        with pytest.raises(RangeValidationError):
            Duration.from_({unit: int(sys.float_info.max) * 10})

    @pytest.mark.parametrize("designator", ["P{}Y", "P{}M", "P{}D", "PT{}H", "PT{}M", "PT{}S"])
    def test_unrepresentable_strings_rejected(self, designator: str) -> None:
        with pytest.raises(RangeValidationError):
            Duration.from_(designator.format("9" * 309))

    @pytest.mark.parametrize(
        "unit,expected",
        list(
            zip(
                FIELD_UNITS,
                [
                    "P9007199254740991Y",
                    "P9007199254740991M",
                    "P9007199254740991D",
                    "PT9007199254740991H",
                    "PT9007199254740991M",
                    "PT9007199254740991S",
                    "PT9007199254740.991S",
                    "PT9007199254.740991S",
                    "PT9007199.254740991S",
                ],
            )
        ),
    )
    def test_max_safe_integer(self, unit: str, expected: str) -> None:
        assert str(Duration(*_positional(unit, MAX_SAFE_INTEGER))) == expected
        assert str(Duration.from_({unit: MAX_SAFE_INTEGER})) == expected
        assert str(Duration.from_(expected)) == expected

    @pytest.mark.parametrize(
        "unit,prefix,suffix,infix",
        [
            ("years", "P", "Y", ""),
            ("months", "P", "M", ""),
            ("days", "P", "D", ""),
            ("hours", "PT", "H", ""),
            ("minutes", "PT", "M", ""),
            ("seconds", "PT", "S", ""),
            ("milliseconds", "PT", "S", "."),
            ("microseconds", "PT", "S", "."),
            ("nanoseconds", "PT", "S", "."),
        ],
    )
    def test_larger_integers(self, unit: str, prefix: str, suffix: str, infix: str) -> None:
        def check(duration: Duration) -> None:
            text = duration.to_string()
            assert text.startswith(f"{prefix}1000000000")
            assert infix in text
            assert text.endswith(suffix)
            assert len(text) == len(prefix) + len(suffix) + len(infix) + 27

        check(Duration(*_positional(unit, 1e26)))
        check(Duration.from_({unit: 1e26}))
        if not infix:
            check(Duration.from_(f"{prefix}100000000000000000000000000{suffix}"))


class TestDerived:
    """Знак, отрицание и доступ к полям"""

    def test_sign_and_blank(self) -> None:
        assert Duration().blank
        assert Duration().sign == 0
        assert Duration(0, 0, 0, 1).sign == 1

    def test_negated_and_abs(self) -> None:
        duration = Duration.from_("-P1M")
        assert duration.negated() == Duration(0, 1)
        assert abs(duration) == Duration(0, 1)
        assert -Duration(0, 1) == duration

    def test_time_nanoseconds(self) -> None:
        assert Duration(0, 0, 0, 0, 1, 0, 0, 0, 0, 5).time_nanoseconds() == 3_600_000_000_005

    def test_fields(self) -> None:
        assert Duration(1, 2, 3, 4).fields == DurationFields(1, 2, 3, 4)

    def test_no_primitive_comparison(self) -> None:
        with pytest.raises(TypeError):
            Duration(1) < Duration(2)  # noqa: B015
        with pytest.raises(TypeError):
            Duration(1).value_of()

    def test_field_on_foreign_receiver(self) -> None:
        with pytest.raises(ReceiverTypeError):
            Duration.years.fget(None)
        with pytest.raises(ReceiverTypeError):
            Duration.to_string(object())


class TestBalanceTimeNanoseconds:
    """Точные наносекунды в поля"""

    def test_largest_hour(self) -> None:
        assert balance_time_nanoseconds(5_400_000_000_000, TemporalUnit.HOUR) == DurationFields(hours=1, minutes=30)

    def test_largest_day(self) -> None:
        fields = balance_time_nanoseconds(-(90_000 * 10**9), TemporalUnit.DAY)
        assert fields == DurationFields(days=-1, hours=-1)

    def test_largest_second(self) -> None:
        assert balance_time_nanoseconds(3_600_000_000_001, TemporalUnit.SECOND) == DurationFields(
            seconds=3600, nanoseconds=1
        )

    def test_calendar_unit_refused(self) -> None:
        with pytest.raises(RangeValidationError):
            balance_time_nanoseconds(1, TemporalUnit.MONTH)
