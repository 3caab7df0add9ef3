"""
JSON Schema Contract Validators

Модуль для валидации field bags (mappings), передаваемых в конструкторы
from_() и with_(), согласно JSON Schema контрактам до интерпретации полей.

Схемы (src/core/contracts/schema/):
- duration_like.json: Duration.from_
- date_time_fields.json: with_() и civil-конструкторы from_()
- zoned_date_time_like.json: ZonedDateTime.from_

Нарушения схемы переводятся в таксономию ошибок библиотеки: неверный вид и
отсутствие обязательных ключей дают ArgumentTypeError, всё остальное (нет ни
одного известного свойства, кривой offset) даёт RangeValidationError.
"""

import json
import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Any, Dict, Final

import jsonschema
from jsonschema import Draft202012Validator, ValidationError
from jsonschema.exceptions import relevance

from src.core.coercion import to_field_bag
from src.core.errors import ArgumentTypeError, RangeValidationError

logger = logging.getLogger(__name__)

# Ключевые слова валидатора, чей провал означает "неверный вид аргумента"
_TYPE_KEYWORDS: Final[frozenset[str]] = frozenset({"type", "required"})


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Схемы лежат в каталоге `schema/` рядом с модулем и кэшируются после
    первой загрузки.
    """

    def __init__(self, schema_dir: Path | None = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'duration_like')

        Returns:
            Схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если файл не является валидной Draft 2020-12 схемой
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}") from e

        logger.debug("loaded contract schema %s", schema_name)
        self._schemas[schema_name] = schema
        return schema


# Глобальный экземпляр загрузчика
_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Валидатор field bags против одной JSON Schema.
    """

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Any) -> Dict[str, Any]:
        """
        Валидация field bag.

        Args:
            data: Mapping со snake_case или camelCase ключами

        Returns:
            Bag как dict со snake_case ключами

        Raises:
            ArgumentTypeError: Если data не mapping, у поля неверный вид или
                нет обязательного поля
            RangeValidationError: При любом другом нарушении контракта
        """
        fields = to_field_bag(data)
        errors = sorted(self.validator.iter_errors(fields), key=relevance, reverse=True)
        if not errors:
            return fields

        for error in errors:
            if error.validator in _TYPE_KEYWORDS:
                raise ArgumentTypeError(_describe(self.schema_name, error))
        raise RangeValidationError(_describe(self.schema_name, errors[0]))

    def is_valid(self, data: Any) -> bool:
        return self.validator.is_valid(to_field_bag(data))

    def iter_errors(self, data: Any) -> Iterator[ValidationError]:
        return self.validator.iter_errors(to_field_bag(data))


def _describe(schema_name: str, error: ValidationError) -> str:
    location = ".".join(str(part) for part in error.absolute_path) or "<bag>"
    return f"{schema_name}: {location}: {error.message}"


class DurationLikeValidator(ContractValidator):
    def __init__(self):
        super().__init__("duration_like")


class DateTimeFieldsValidator(ContractValidator):
    def __init__(self):
        super().__init__("date_time_fields")


class ZonedDateTimeLikeValidator(ContractValidator):
    def __init__(self):
        super().__init__("zoned_date_time_like")


_VALIDATORS: Dict[str, ContractValidator] = {}


def _validator(cls: type[ContractValidator]) -> ContractValidator:
    if cls.__name__ not in _VALIDATORS:
        _VALIDATORS[cls.__name__] = cls()
    return _VALIDATORS[cls.__name__]


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_duration_like(data: Any) -> Dict[str, Any]:
    """Валидация field bag для Duration; возвращает его со snake_case ключами."""
    return _validator(DurationLikeValidator).validate(data)


def validate_date_time_fields(data: Any) -> Dict[str, Any]:
    """Валидация частичного civil field bag; возвращает его со snake_case ключами."""
    return _validator(DateTimeFieldsValidator).validate(data)


def validate_zoned_date_time_like(data: Any) -> Dict[str, Any]:
    """Валидация field bag для ZonedDateTime; возвращает его со snake_case ключами."""
    return _validator(ZonedDateTimeLikeValidator).validate(data)
