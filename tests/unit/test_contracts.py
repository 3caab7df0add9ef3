"""
Тесты для JSON Schema контрактов field bags

Проверяет:
1. Поставляемые схемы валидны как Draft 2020-12
2. Валидные bags возвращаются со snake_case ключами
3. Неверный вид и отсутствие обязательных ключей -> ArgumentTypeError
4. Прочие нарушения (нет известного поля, неверный pattern) -> RangeValidationError
5. Ошибки загрузчика схем
"""

import json
from pathlib import Path

import pytest
from jsonschema import Draft202012Validator

from src.core.contracts import (
    ContractValidator,
    DurationLikeValidator,
    SchemaLoader,
    validate_date_time_fields,
    validate_duration_like,
    validate_zoned_date_time_like,
)
from src.core.errors import ArgumentTypeError, RangeValidationError

SCHEMA_NAMES = ["duration_like", "date_time_fields", "zoned_date_time_like"]


class TestSchemas:
    """Файлы схем"""

    @pytest.mark.parametrize("name", SCHEMA_NAMES)
    def test_schema_is_valid(self, name: str) -> None:
        schema = SchemaLoader().load_schema(name)
        Draft202012Validator.check_schema(schema)
        assert schema["$id"] == name

    def test_loader_caches(self) -> None:
        loader = SchemaLoader()
        assert loader.load_schema("duration_like") is loader.load_schema("duration_like")

    def test_missing_schema(self) -> None:
        with pytest.raises(FileNotFoundError):
            SchemaLoader().load_schema("no_such_schema")

    def test_missing_directory(self, tmp_path: Path) -> None:
        with pytest.raises(RuntimeError):
            SchemaLoader(tmp_path / "absent")

    def test_invalid_schema(self, tmp_path: Path) -> None:
        (tmp_path / "broken.json").write_text(json.dumps({"type": 5}), encoding="utf-8")
        with pytest.raises(ValueError):
            SchemaLoader(tmp_path).load_schema("broken")


class TestDurationLike:
    """Bags для Duration.from_"""

    def test_valid(self) -> None:
        assert validate_duration_like({"hours": 1, "minutes": -0.0}) == {"hours": 1, "minutes": -0.0}

    def test_no_unit(self) -> None:
        with pytest.raises(RangeValidationError):
            validate_duration_like({})
        with pytest.raises(RangeValidationError):
            validate_duration_like({"fortnights": 1})

    @pytest.mark.parametrize("value", ["1", None, True, [1]])
    def test_wrong_kind(self, value: object) -> None:
        with pytest.raises(ArgumentTypeError):
            validate_duration_like({"days": value})

    def test_not_a_mapping(self) -> None:
        with pytest.raises(ArgumentTypeError):
            validate_duration_like([("days", 1)])

    def test_validator_helpers(self) -> None:
        validator = DurationLikeValidator()
        assert validator.is_valid({"weeks": 2})
        assert not validator.is_valid({"weeks": "2"})
        assert [error.validator for error in validator.iter_errors({"weeks": "2"})] == ["type"]


class TestDateTimeFields:
    """Bags для with_() и civil from_()"""

    def test_camel_case_keys(self) -> None:
        assert validate_date_time_fields({"eraYear": 5, "era": "ce"}) == {"era_year": 5, "era": "ce"}

    def test_offset_pattern(self) -> None:
        assert validate_date_time_fields({"offset": "+05:30"})["offset"] == "+05:30"
        with pytest.raises(RangeValidationError):
            validate_date_time_fields({"offset": "05:30"})

    def test_empty_era(self) -> None:
        with pytest.raises(RangeValidationError):
            validate_date_time_fields({"era": ""})

    def test_wrong_kind(self) -> None:
        with pytest.raises(ArgumentTypeError):
            validate_date_time_fields({"month": "May"})

    def test_only_unknown_fields(self) -> None:
        with pytest.raises(RangeValidationError):
            validate_date_time_fields({"calendar": "gregory"})


class TestZonedDateTimeLike:
    """Bags для ZonedDateTime.from_"""

    def test_valid(self) -> None:
        bag = validate_zoned_date_time_like({"year": 2020, "month": 1, "day": 1, "timeZone": "UTC"})
        assert bag["time_zone"] == "UTC"

    def test_time_zone_required(self) -> None:
        with pytest.raises(ArgumentTypeError):
            validate_zoned_date_time_like({"year": 2020, "month": 1, "day": 1})

    def test_generic_validator(self) -> None:
        validator = ContractValidator("zoned_date_time_like")
        assert validator.schema_name == "zoned_date_time_like"
        assert not validator.is_valid({"year": 2020})
