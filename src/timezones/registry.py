"""
TimeZoneRegistry — поиск по идентификатору и приведение аргументов

Порядок разрешения идентификаторов:
1. offset строки ('+05:30', '-0800') -> FixedOffsetTimeZone
2. UTC алиасы (без учёта регистра) -> UTC singleton
3. IANA имена (сначала точный регистр, затем без учёта) -> ZoneInfoTimeZone
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError, available_timezones

from src.codec.parse import OFFSET_RE, parse_offset_string, parse_time_zone_string
from src.core.errors import ArgumentTypeError, RangeValidationError
from src.timezones.base import TimeZone
from src.timezones.fixed import UTC, FixedOffsetTimeZone
from src.timezones.iana import ZoneInfoTimeZone

logger = logging.getLogger(__name__)


# =============================================================================
# КОНФИГУРАЦИЯ
# =============================================================================


@dataclass(frozen=True)
class TimeZoneRegistryConfig:
    """Конфигурация реестра time zone"""

    # Идентификаторы, разрешаемые в UTC singleton
    utc_aliases: tuple[str, ...] = (
        "UTC",
        "Etc/UTC",
        "Etc/UCT",
        "UCT",
        "Etc/GMT",
        "GMT",
        "Etc/Universal",
        "Universal",
        "Etc/Zulu",
        "Zulu",
    )
    # Хранить загруженные IANA зоны всё время жизни реестра
    cache_zones: bool = True


# =============================================================================
# РЕЕСТР
# =============================================================================


class TimeZoneRegistry:
    """
    Разрешение идентификаторов time zone в TimeZone singleton'ы.
    """

    def __init__(self, config: TimeZoneRegistryConfig | None = None):
        self.config = config or TimeZoneRegistryConfig()
        self._utc_aliases = frozenset(alias.lower() for alias in self.config.utc_aliases)
        self._zones: dict[str, TimeZone] = {}
        self._canonical_keys: Optional[dict[str, str]] = None

    def get(self, identifier: str) -> TimeZone:
        """
        Поиск time zone.

        Raises:
            ArgumentTypeError: Если идентификатор не строка
            RangeValidationError: Если идентификатор не называет ни одной зоны
        """
        if not isinstance(identifier, str):
            raise ArgumentTypeError(f"time zone identifier must be a string, got {type(identifier).__name__}")
        text = identifier.strip()
        if OFFSET_RE.match(text):
            return FixedOffsetTimeZone(parse_offset_string(text))
        if text.lower() in self._utc_aliases:
            return UTC

        cached = self._zones.get(text.lower())
        if cached is not None:
            return cached
        zone = ZoneInfoTimeZone(self._load(text))
        if self.config.cache_zones:
            self._zones[text.lower()] = zone
        return zone

    def _load(self, identifier: str) -> ZoneInfo:
        try:
            zone = ZoneInfo(identifier)
        except (ZoneInfoNotFoundError, ValueError, OSError):
            canonical = self._canonical_key(identifier)
            if canonical is None:
                raise RangeValidationError(f"invalid time zone identifier {identifier!r}") from None
            zone = ZoneInfo(canonical)
        logger.debug("loaded time zone %s", zone.key)
        return zone

    def _canonical_key(self, identifier: str) -> Optional[str]:
        if self._canonical_keys is None:
            self._canonical_keys = {key.lower(): key for key in available_timezones()}
            logger.debug("indexed %d IANA time zone names", len(self._canonical_keys))
        return self._canonical_keys.get(identifier.lower())


# Глобальный экземпляр реестра
_REGISTRY = TimeZoneRegistry()


# =============================================================================
# ПРИВЕДЕНИЕ
# =============================================================================


def get_time_zone(identifier: str) -> TimeZone:
    """Поиск time zone в глобальном реестре."""
    return _REGISTRY.get(identifier)


def to_time_zone(value: Any) -> TimeZone:
    """
    Приведение аргумента time zone.

    Принимает TimeZone, идентификатор, date-time строку с зоной в скобках,
    `Z` или offset, либо любое значение с атрибутом `time_zone`.

    Raises:
        ArgumentTypeError: Для значения любого другого вида (включая None)
        RangeValidationError: Для неизвестного идентификатора
    """
    if isinstance(value, TimeZone):
        return value
    if isinstance(value, str):
        return _REGISTRY.get(parse_time_zone_string(value))
    nested = getattr(value, "time_zone", None)
    if isinstance(nested, TimeZone):
        return nested
    raise ArgumentTypeError(f"cannot convert {type(value).__name__} to a time zone")


def compare_time_zones(one: TimeZone, two: TimeZone) -> int:
    """Порядок time zones по идентификатору: -1, 0 или 1."""
    return (one.id > two.id) - (one.id < two.id)
