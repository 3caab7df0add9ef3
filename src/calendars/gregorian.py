"""
GregorianCalendar — ISO арифметика с эрами

Совпадает с ISO календарём, но год можно задать также через era ('ce' / 'bce',
на входе принимаются 'ad' / 'bc') и era year. Год 0 ISO календаря — это
1 BCE.
"""

from collections.abc import Iterable, Mapping
from typing import Any, Final, Optional

from src.calendars.base import iso_date_of
from src.calendars.iso8601 import ISO8601Calendar, require_field
from src.core.coercion import to_integer_field
from src.core.errors import ArgumentTypeError, RangeValidationError

#: Имя эры -> направление era year относительно ISO года
ERAS: Final[dict[str, int]] = {"ce": 1, "ad": 1, "bce": -1, "bc": -1}


class GregorianCalendar(ISO8601Calendar):
    """Календарь с идентификатором 'gregory'."""

    __slots__ = ()

    @property
    def id(self) -> str:
        return "gregory"

    def era(self, date: Any) -> Optional[str]:
        return "ce" if iso_date_of(date).year > 0 else "bce"

    def era_year(self, date: Any) -> Optional[int]:
        year = iso_date_of(date).year
        return year if year > 0 else 1 - year

    def fields(self, names: Iterable[str]) -> list[str]:
        result = list(names)
        if "year" in result:
            result.extend(("era", "era_year"))
        return result

    def resolve_year(self, fields: Mapping[str, Any]) -> int:
        """
        Разрешение ISO года из `year` или из `era` + `era_year`.

        Raises:
            ArgumentTypeError: Если задан только один из era / era_year и нет year
            RangeValidationError: Для неизвестной эры, бесконечного era year или
                era year, противоречащего `year`
        """
        era = fields.get("era")
        era_year = fields.get("era_year")
        if era is None and era_year is None:
            return require_field(fields, "year")
        if era is None or era_year is None:
            if fields.get("year") is not None:
                return require_field(fields, "year")
            raise ArgumentTypeError("era and era_year must be given together")

        era_year = to_integer_field(era_year, "era_year")
        direction = ERAS.get(str(era).lower())
        if direction is None:
            raise RangeValidationError(f"unknown era {era!r} for calendar {self.id}")
        year = era_year if direction > 0 else 1 - era_year

        if fields.get("year") is not None and require_field(fields, "year") != year:
            raise RangeValidationError(
                f"year {fields['year']} does not match era {era} year {era_year}"
            )
        return year
