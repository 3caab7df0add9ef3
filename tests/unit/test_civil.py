"""
Тесты для civil-значений: PlainDate, PlainTime, PlainDateTime, PlainYearMonth, PlainMonthDay

Проверяет:
1. Конструктор валидирует с reject; bags учитывают опцию overflow
2. from_() принимает значения, строки и bags
3. Канонические строки и календарные аннотации
4. Конверсии между civil-типами и в time zone
5. Проверку receiver у полей и методов
"""

import pytest

from src.calendars import GREGORY, ISO8601
from src.core.domain.civil import PlainDate, PlainDateTime, PlainMonthDay, PlainTime, PlainYearMonth
from src.core.errors import ArgumentTypeError, RangeValidationError, ReceiverTypeError
from src.core.math.iso_calendar import IsoDate, IsoDateTime, IsoTime


class TestPlainDate:
    """Календарные даты"""

    def test_fields(self) -> None:
        date = PlainDate(2020, 2, 29)
        assert (date.year, date.month, date.day) == (2020, 2, 29)
        assert date.day_of_week == 6
        assert date.in_leap_year
        assert date.era is None
        assert date.calendar is ISO8601

    def test_gregorian_fields(self) -> None:
        date = PlainDate(0, 6, 15, "gregory")
        assert (date.era, date.era_year, date.year) == ("bce", 1, 0)

    def test_invalid(self) -> None:
        with pytest.raises(RangeValidationError):
            PlainDate(2021, 2, 29)
        with pytest.raises(RangeValidationError):
            PlainDate(275760, 9, 14)
        with pytest.raises(RangeValidationError):
            PlainDate(2020, 1, 1, "hebrew")

    def test_limits(self) -> None:
        assert str(PlainDate(275760, 9, 13)) == "+275760-09-13"
        assert str(PlainDate(-271821, 4, 19)) == "-271821-04-19"

    def test_from_string(self) -> None:
        date = PlainDate.from_("2020-01-01T12:00[u-ca=gregory]")
        assert date.iso_date == IsoDate(2020, 1, 1)
        assert date.calendar is GREGORY

    def test_from_bag(self) -> None:
        assert PlainDate.from_({"year": 2021, "month": 2, "day": 31}).iso_date == IsoDate(2021, 2, 28)
        with pytest.raises(RangeValidationError):
            PlainDate.from_({"year": 2021, "month": 2, "day": 31}, {"overflow": "reject"})

    def test_from_other_values(self) -> None:
        assert PlainDate.from_(PlainDateTime(2020, 5, 6, 7)) == PlainDate(2020, 5, 6)
        with pytest.raises(ArgumentTypeError):
            PlainDate.from_(20200101)

    def test_to_string(self) -> None:
        assert PlainDate(2020, 1, 1).to_string() == "2020-01-01"
        assert PlainDate(2020, 1, 1).to_string({"calendarName": "always"}) == "2020-01-01[u-ca=iso8601]"
        assert PlainDate(2020, 1, 1, "gregory").to_json() == "2020-01-01[u-ca=gregory]"

    def test_compare_and_equals(self) -> None:
        assert PlainDate.compare("2020-01-02", PlainDate(2020, 1, 1)) == 1
        assert PlainDate(2020, 1, 1).equals("2020-01-01")
        assert not PlainDate(2020, 1, 1).equals(PlainDate(2020, 1, 1, "gregory"))

    def test_conversions(self) -> None:
        date = PlainDate(2020, 5, 17)
        assert date.to_plain_date_time("12:30").iso_date_time == IsoDateTime(2020, 5, 17, 12, 30)
        assert date.to_plain_date_time().iso_date_time == IsoDateTime(2020, 5, 17)
        assert str(date.to_plain_year_month()) == "2020-05"
        assert str(date.to_plain_month_day()) == "05-17"

    def test_iso_fields(self) -> None:
        assert PlainDate(2020, 5, 17).get_iso_fields() == {
            "calendar": ISO8601,
            "iso_day": 17,
            "iso_month": 5,
            "iso_year": 2020,
        }


class TestPlainTime:
    """Время суток"""

    def test_construction(self) -> None:
        assert PlainTime(12, 30).iso_time == IsoTime(12, 30)
        with pytest.raises(RangeValidationError):
            PlainTime(24)

    def test_from_bag_constrains(self) -> None:
        assert PlainTime.from_({"hour": 25, "minute": 75}).iso_time == IsoTime(23, 59)
        with pytest.raises(RangeValidationError):
            PlainTime.from_({"hour": 25}, {"overflow": "reject"})

    def test_from_string(self) -> None:
        assert PlainTime.from_("T01:02:03.5").millisecond == 500
        assert PlainTime.from_("2020-01-01T23:00").hour == 23

    def test_from_string_with_other_calendar(self) -> None:
        with pytest.raises(RangeValidationError):
            PlainTime.from_("12:00[u-ca=gregory]")

    def test_from_utc_designator(self) -> None:
        with pytest.raises(RangeValidationError):
            PlainTime.from_("2020-01-01T12:00Z")

    def test_to_string(self) -> None:
        assert str(PlainTime(1, 2, 3, 400)) == "01:02:03.4"
        assert PlainTime(1, 2, 3).to_string({"smallestUnit": "minute"}) == "01:02"

    def test_rounding_wraps(self) -> None:
        time = PlainTime(23, 59, 59, 999)
        assert time.to_string({"fractionalSecondDigits": 0, "roundingMode": "nearest"}) == "00:00:00"

    def test_compare(self) -> None:
        assert PlainTime.compare("12:00", PlainTime(11, 59)) == 1
        assert PlainTime(12).equals({"hour": 12})

    def test_to_plain_date_time(self) -> None:
        combined = PlainTime(6).to_plain_date_time(PlainDate(2020, 1, 1, "gregory"))
        assert combined.calendar is GREGORY
        assert combined.hour == 6


class TestPlainDateTime:
    """Дата и время без зоны"""

    def test_fields(self) -> None:
        dt = PlainDateTime(2020, 3, 8, 2, 30, calendar="gregory")
        assert (dt.year, dt.hour, dt.minute, dt.era) == (2020, 2, 30, "ce")

    def test_civil_range(self) -> None:
        assert PlainDateTime(-271821, 4, 19, 0, 0, 0, 0, 0, 1).year == -271821
        with pytest.raises(RangeValidationError):
            PlainDateTime(-271821, 4, 19)

    def test_from_string(self) -> None:
        dt = PlainDateTime.from_("2020-03-08T02:30:00.000000001")
        assert dt.nanosecond == 1
        with pytest.raises(RangeValidationError):
            PlainDateTime.from_("2020-03-08T02:30Z")

    def test_from_bag(self) -> None:
        dt = PlainDateTime.from_({"era": "bce", "eraYear": 1, "month": 1, "day": 1, "hour": 5, "calendar": "gregory"})
        assert dt.iso_date_time == IsoDateTime(0, 1, 1, 5)

    def test_from_date(self) -> None:
        assert PlainDateTime.from_(PlainDate(2020, 1, 1)).iso_date_time == IsoDateTime(2020, 1, 1)

    def test_from_zoned(self) -> None:
        zoned = PlainDateTime(2020, 1, 1, 12).to_zoned_date_time("Asia/Tokyo")
        assert PlainDateTime.from_(zoned) == PlainDateTime(2020, 1, 1, 12)

    def test_to_zoned_date_time_gap(self) -> None:
        dt = PlainDateTime(2020, 3, 8, 2, 30)
        assert str(dt.to_zoned_date_time("America/New_York")) == "2020-03-08T03:30:00-04:00[America/New_York]"
        earlier = dt.to_zoned_date_time("America/New_York", {"disambiguation": "earlier"})
        assert str(earlier) == "2020-03-08T01:30:00-05:00[America/New_York]"
        with pytest.raises(RangeValidationError):
            dt.to_zoned_date_time("America/New_York", {"disambiguation": "reject"})

    def test_to_string(self) -> None:
        dt = PlainDateTime(2020, 12, 31, 23, 59, 59, 999, calendar="gregory")
        assert str(dt) == "2020-12-31T23:59:59.999[u-ca=gregory]"
        rounded = dt.to_string({"smallestUnit": "second", "roundingMode": "ceil", "calendarName": "never"})
        assert rounded == "2021-01-01T00:00:00"

    def test_conversions(self) -> None:
        dt = PlainDateTime(2020, 5, 17, 8, 15)
        assert dt.to_plain_date() == PlainDate(2020, 5, 17)
        assert dt.to_plain_time() == PlainTime(8, 15)
        assert str(dt.to_plain_year_month()) == "2020-05"
        assert str(dt.to_plain_month_day()) == "05-17"
        assert dt.get_iso_fields()["iso_minute"] == 15

    def test_compare(self) -> None:
        assert PlainDateTime.compare("2020-01-01T00:00", "2020-01-01T00:00:00.000000001") == -1
        assert PlainDateTime(2020, 1, 1).equals("2020-01-01")

    def test_receiver_checks(self) -> None:
        with pytest.raises(ReceiverTypeError):
            PlainDateTime.era_year.fget(None)
        with pytest.raises(ReceiverTypeError):
            PlainDateTime.to_string(PlainDate(2020, 1, 1))


class TestPlainYearMonth:
    """Месяцы года"""

    def test_fields(self) -> None:
        year_month = PlainYearMonth(2020, 2)
        assert (year_month.year, year_month.month, year_month.days_in_month) == (2020, 2, 29)
        assert year_month.iso_date == IsoDate(2020, 2, 1)

    def test_from(self) -> None:
        assert PlainYearMonth.from_("2020-05").month == 5
        assert PlainYearMonth.from_({"year": 2020, "month": 13}).month == 12
        assert PlainYearMonth.from_(PlainDate(2020, 5, 17)) == PlainYearMonth(2020, 5)

    def test_to_string(self) -> None:
        assert str(PlainYearMonth(2020, 5)) == "2020-05"
        assert str(PlainYearMonth(2020, 5, "gregory")) == "2020-05-01[u-ca=gregory]"
        assert PlainYearMonth(2020, 5).to_string({"calendarName": "always"}) == "2020-05-01[u-ca=iso8601]"

    def test_to_plain_date(self) -> None:
        assert PlainYearMonth(2020, 2).to_plain_date({"day": 29}) == PlainDate(2020, 2, 29)
        with pytest.raises(RangeValidationError):
            PlainYearMonth(2021, 2).to_plain_date({"day": 29})
        with pytest.raises(ArgumentTypeError):
            PlainYearMonth(2021, 2).to_plain_date(29)

    def test_compare(self) -> None:
        assert PlainYearMonth.compare("2020-05", "2020-06") == -1
        assert PlainYearMonth(2020, 5).equals("2020-05")


class TestPlainMonthDay:
    """Повторяющиеся дни"""

    def test_leap_day(self) -> None:
        month_day = PlainMonthDay.from_("--02-29")
        assert (month_day.month, month_day.day) == (2, 29)
        assert month_day.iso_date == IsoDate(1972, 2, 29)

    def test_to_plain_date_constrains(self) -> None:
        month_day = PlainMonthDay(2, 29)
        assert month_day.to_plain_date({"year": 2021}) == PlainDate(2021, 2, 28)
        assert month_day.to_plain_date({"year": 2024}) == PlainDate(2024, 2, 29)

    def test_to_string(self) -> None:
        assert str(PlainMonthDay(12, 25)) == "12-25"
        assert str(PlainMonthDay(12, 25, "gregory")) == "1972-12-25[u-ca=gregory]"

    def test_from_bag(self) -> None:
        assert PlainMonthDay.from_({"month": 4, "day": 31}) == PlainMonthDay(4, 30)
        with pytest.raises(ArgumentTypeError):
            PlainMonthDay.from_({"month": 4})

    def test_receiver_checks(self) -> None:
        with pytest.raises(ReceiverTypeError):
            PlainMonthDay.to_json(object())
        with pytest.raises(ReceiverTypeError):
            PlainMonthDay.month.fget(PlainDate(2020, 1, 1))
