"""
Time zones — capability interface, фиксированные offset и IANA зоны.
"""

from src.timezones.base import TimeZone
from src.timezones.fixed import UTC, FixedOffsetTimeZone
from src.timezones.iana import ZoneInfoTimeZone
from src.timezones.registry import (
    TimeZoneRegistry,
    TimeZoneRegistryConfig,
    compare_time_zones,
    get_time_zone,
    to_time_zone,
)

__all__ = [
    "FixedOffsetTimeZone",
    "TimeZone",
    "TimeZoneRegistry",
    "TimeZoneRegistryConfig",
    "UTC",
    "ZoneInfoTimeZone",
    "compare_time_zones",
    "get_time_zone",
    "to_time_zone",
]
