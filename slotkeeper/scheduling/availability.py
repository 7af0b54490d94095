"""Availability config - weekly template the slot grid is built from."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import IntEnum
from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from slotkeeper.config import BUSINESS_HOURS_END, BUSINESS_HOURS_START, Settings, get_settings
from slotkeeper.exceptions import ConfigError


class Weekday(IntEnum):
    """Weekday enum, numbered like date.weekday()."""
    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6

    @property
    def label(self) -> str:
        return self.name.capitalize()


@dataclass(frozen=True)
class AvailabilityConfig:
    available_weekdays: frozenset[Weekday]
    business_start_hour: int
    business_end_hour: int
    slot_duration_minutes: int
    timezone: str = "UTC"

    def __post_init__(self) -> None:
        if not self.available_weekdays:
            raise ConfigError("At least one available weekday is required")
        if self.slot_duration_minutes <= 0:
            raise ConfigError(
                f"Slot duration must be positive, got {self.slot_duration_minutes}"
            )
        for hour in (self.business_start_hour, self.business_end_hour):
            if not 0 <= hour <= 23:
                raise ConfigError(f"Business hour {hour} is outside 0-23")
        if self.business_start_hour >= self.business_end_hour:
            raise ConfigError(
                f"Business hours start ({self.business_start_hour}) "
                f"must be before end ({self.business_end_hour})"
            )
        try:
            ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ConfigError(f"Unknown timezone '{self.timezone}'") from e

    @property
    def zone(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)

    @property
    def slot_duration(self) -> timedelta:
        return timedelta(minutes=self.slot_duration_minutes)

    @property
    def weekday_labels(self) -> list[str]:
        return [day.label for day in sorted(self.available_weekdays)]

    def localize(self, value: datetime) -> datetime:
        """Express an instant in the configured zone. Naive values are wall-clock there."""
        if value.tzinfo is None:
            return value.replace(tzinfo=self.zone)
        return value.astimezone(self.zone)


def parse_weekdays(raw: str) -> frozenset[Weekday]:
    """Parse 'Monday,Tuesday' (braces tolerated) into a weekday set."""
    days = set()
    for name in raw.strip().strip("{}").split(","):
        name = name.strip()
        if not name:
            continue
        try:
            days.add(Weekday[name.upper()])
        except KeyError:
            raise ConfigError(f"'{name}' is not a weekday name") from None
    return frozenset(days)


def load(settings: Settings) -> AvailabilityConfig:
    """Build the availability config from process settings."""
    return AvailabilityConfig(
        available_weekdays=parse_weekdays(settings.days_available),
        business_start_hour=BUSINESS_HOURS_START,
        business_end_hour=BUSINESS_HOURS_END,
        slot_duration_minutes=settings.appointment_duration_minutes,
        timezone=settings.timezone,
    )


@lru_cache
def get_availability() -> AvailabilityConfig:
    """Get the cached process-wide availability config."""
    return load(get_settings())
