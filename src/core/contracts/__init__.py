"""
Contract Validation Module

JSON Schema контракты для field bags, принимаемых конструкторами значений.
"""

from .validators import (
    ContractValidator,
    DateTimeFieldsValidator,
    DurationLikeValidator,
    SchemaLoader,
    ZonedDateTimeLikeValidator,
    validate_date_time_fields,
    validate_duration_like,
    validate_zoned_date_time_like,
)

__all__ = [
    # Классы
    "SchemaLoader",
    "ContractValidator",
    "DurationLikeValidator",
    "DateTimeFieldsValidator",
    "ZonedDateTimeLikeValidator",
    # Функции
    "validate_duration_like",
    "validate_date_time_fields",
    "validate_zoned_date_time_like",
]
