"""
Core math modules

Примитивы exact time, алгоритмы пролептического календаря ISO-8601 и точное
округление. Здесь реэкспортируется только листовой модуль exact time; модули
календаря и округления зависят от enum'ов единиц и options и импортируются
напрямую.
"""

# Exact time
from src.core.math.exact_time import (
    EPOCH_NANOSECONDS_MAX,
    EPOCH_NANOSECONDS_MIN,
    MAX_EPOCH_DAYS,
    NS_PER_DAY,
    NS_PER_HOUR,
    NS_PER_MICROSECOND,
    NS_PER_MILLISECOND,
    NS_PER_MINUTE,
    NS_PER_SECOND,
    is_valid_epoch_nanoseconds,
    sign,
    trunc_div,
    trunc_divmod,
    validate_epoch_nanoseconds,
)

__all__ = [
    # Константы
    "EPOCH_NANOSECONDS_MAX",
    "EPOCH_NANOSECONDS_MIN",
    "MAX_EPOCH_DAYS",
    "NS_PER_DAY",
    "NS_PER_HOUR",
    "NS_PER_MICROSECOND",
    "NS_PER_MILLISECOND",
    "NS_PER_MINUTE",
    "NS_PER_SECOND",
    # Функции
    "is_valid_epoch_nanoseconds",
    "sign",
    "trunc_div",
    "trunc_divmod",
    "validate_epoch_nanoseconds",
]
