"""
Тесты для Calendars

Проверяет:
1. Доступ к полям ISO-8601
2. Эры Gregorian (ce / bce, алиасы ad / bc)
3. Разрешение полей при constrain / reject
4. Поиск в реестре и приведение аргументов
"""

import pytest

from src.calendars import (
    GREGORY,
    ISO8601,
    assert_same_calendar,
    compare_calendars,
    get_calendar,
    iso_date_of,
    to_calendar,
)
from src.core.domain.civil import PlainDate
from src.core.errors import ArgumentTypeError, RangeValidationError
from src.core.math.iso_calendar import IsoDate, IsoDateTime
from src.core.options import Overflow
from src.core.units import TemporalUnit
from src.timezones import get_time_zone


class TestIsoFields:
    """Доступ к полям ISO-8601"""

    def test_leap_day(self) -> None:
        date = IsoDate(2020, 2, 29)
        assert (ISO8601.year(date), ISO8601.month(date), ISO8601.day(date)) == (2020, 2, 29)
        assert ISO8601.days_in_month(date) == 29
        assert ISO8601.days_in_year(date) == 366
        assert ISO8601.in_leap_year(date)
        assert ISO8601.months_in_year(date) == 12
        assert ISO8601.days_in_week(date) == 7
        assert ISO8601.day_of_week(date) == 6
        assert ISO8601.day_of_year(date) == 60

    def test_no_eras(self) -> None:
        assert ISO8601.era(IsoDate(2020, 1, 1)) is None
        assert ISO8601.era_year(IsoDate(2020, 1, 1)) is None

    def test_accepts_date_times_and_values(self) -> None:
        assert ISO8601.year(IsoDateTime(1999, 12, 31, 23)) == 1999
        assert ISO8601.month(PlainDate(2001, 7, 4)) == 7

    def test_rejects_other_values(self) -> None:
        with pytest.raises(ArgumentTypeError):
            ISO8601.year(object())
        with pytest.raises(ArgumentTypeError):
            iso_date_of("2020-01-01")


class TestGregorianEras:
    """ce / bce"""

    @pytest.mark.parametrize(
        "iso_year,era,era_year",
        [(2020, "ce", 2020), (1, "ce", 1), (0, "bce", 1), (-1, "bce", 2)],
    )
    def test_era_fields(self, iso_year: int, era: str, era_year: int) -> None:
        date = IsoDate(iso_year, 6, 1)
        assert GREGORY.era(date) == era
        assert GREGORY.era_year(date) == era_year

    @pytest.mark.parametrize("era", ["bce", "bc", "BCE"])
    def test_resolve_before_common_era(self, era: str) -> None:
        date = GREGORY.date_from_fields({"era": era, "eraYear": 1, "month": 1, "day": 1})
        assert date.iso_date == IsoDate(0, 1, 1)
        assert date.calendar is GREGORY

    def test_year_wins_without_era(self) -> None:
        assert GREGORY.date_from_fields({"year": 5, "eraYear": 3, "month": 1, "day": 1}).iso_date == IsoDate(5, 1, 1)

    def test_unknown_era(self) -> None:
        with pytest.raises(RangeValidationError):
            GREGORY.date_from_fields({"era": "meiji", "era_year": 1, "month": 1, "day": 1})

    def test_era_without_year(self) -> None:
        with pytest.raises(ArgumentTypeError):
            GREGORY.date_from_fields({"era": "ce", "month": 1, "day": 1})

    def test_conflicting_year(self) -> None:
        with pytest.raises(RangeValidationError):
            GREGORY.date_from_fields({"year": 2020, "era": "ce", "era_year": 2019, "month": 1, "day": 1})

    def test_infinite_era_year(self) -> None:
        time_zone = get_time_zone("UTC")
        fields = {"era": "ce", "era_year": float("inf"), "month": 1, "day": 1, "calendar": "gregory"}
        with pytest.raises(RangeValidationError):
            time_zone.get_possible_instants_for(fields)

    def test_extra_fields(self) -> None:
        assert GREGORY.fields(["year", "month"]) == ["year", "month", "era", "era_year"]
        assert ISO8601.fields(["year", "month"]) == ["year", "month"]


class TestFieldResolution:
    """Overflow policies"""

    def test_constrain_day(self) -> None:
        date = ISO8601.date_from_fields({"year": 2021, "month": 2, "day": 31})
        assert date.iso_date == IsoDate(2021, 2, 28)

    def test_reject_day(self) -> None:
        with pytest.raises(RangeValidationError):
            ISO8601.date_from_fields({"year": 2021, "month": 2, "day": 31}, {"overflow": "reject"})

    def test_missing_field(self) -> None:
        with pytest.raises(ArgumentTypeError):
            ISO8601.date_from_fields({"year": 2021, "month": 2})

    def test_year_month(self) -> None:
        assert ISO8601.year_month_from_fields({"year": 2020, "month": 5}).iso_date == IsoDate(2020, 5, 1)

    def test_month_day_reference_year(self) -> None:
        assert ISO8601.month_day_from_fields({"month": 2, "day": 29}).iso_date == IsoDate(1972, 2, 29)

    def test_month_day_with_year_constrains(self) -> None:
        month_day = ISO8601.month_day_from_fields({"year": 2021, "month": 2, "day": 29})
        assert month_day.iso_date == IsoDate(1972, 2, 28)
        with pytest.raises(RangeValidationError):
            ISO8601.month_day_from_fields({"year": 2021, "month": 2, "day": 29}, {"overflow": "reject"})

    def test_date_arithmetic(self) -> None:
        assert GREGORY.date_add(IsoDate(2020, 1, 31), 0, 1, 0, 0, Overflow.CONSTRAIN) == IsoDate(2020, 2, 29)
        assert GREGORY.date_until(IsoDate(2020, 1, 1), IsoDate(2020, 3, 2), TemporalUnit.MONTH) == (0, 2, 0, 1)


class TestRegistry:
    """Поиск и приведение"""

    def test_default(self) -> None:
        assert to_calendar(None) is ISO8601

    def test_identifiers(self) -> None:
        assert get_calendar("GREGORY") is GREGORY
        assert to_calendar("iso8601") is ISO8601

    def test_annotated_strings(self) -> None:
        assert to_calendar("2020-01-01[u-ca=gregory]") is GREGORY
        assert to_calendar("2020-01-01") is ISO8601

    def test_from_value(self) -> None:
        assert to_calendar(PlainDate(2020, 1, 1, "gregory")) is GREGORY

    def test_unknown(self) -> None:
        with pytest.raises(RangeValidationError):
            to_calendar("japanese")

    def test_wrong_kind(self) -> None:
        with pytest.raises(ArgumentTypeError):
            to_calendar(5)

    def test_ordering(self) -> None:
        assert compare_calendars(GREGORY, ISO8601) == -1
        assert compare_calendars(ISO8601, ISO8601) == 0

    def test_same_calendar(self) -> None:
        assert_same_calendar(ISO8601, to_calendar("iso8601"))
        with pytest.raises(RangeValidationError):
            assert_same_calendar(ISO8601, GREGORY)

    def test_identity(self) -> None:
        assert str(GREGORY) == "gregory"
        assert GREGORY.to_json() == "gregory"
        assert hash(ISO8601) == hash(to_calendar("ISO8601"))
