"""Slot generator - enumerates candidate slots from the weekly template."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Iterator

from slotkeeper.scheduling.availability import AvailabilityConfig


@dataclass(frozen=True)
class Slot:
    start: datetime
    end: datetime


def slots_for_day(day: date, config: AvailabilityConfig) -> list[Slot]:
    """All slots of one calendar day, empty if the weekday is not available."""
    if day.weekday() not in config.available_weekdays:
        return []

    zone = config.zone
    duration = config.slot_duration
    cursor = datetime.combine(day, time(config.business_start_hour), tzinfo=zone)
    end_of_business = datetime.combine(day, time(config.business_end_hour), tzinfo=zone)

    slots = []
    while cursor < end_of_business:
        slots.append(Slot(start=cursor, end=cursor + duration))
        cursor += duration
    return slots


def generate_slots(start: datetime, end: datetime, config: AvailabilityConfig) -> Iterator[Slot]:
    """
    Yield every slot on each available day touched by [start, end], ascending.

    Days are enumerated in full: a range ending mid-day still yields that
    day's later slots. Filtering against the exact bounds is up to the caller.
    """
    start = config.localize(start)
    end = config.localize(end)
    if start > end:
        return

    day = start.date()
    last_day = end.date()
    while day <= last_day:
        yield from slots_for_day(day, config)
        day += timedelta(days=1)


def covered_window(start: datetime, end: datetime, config: AvailabilityConfig) -> tuple[datetime, datetime]:
    """The whole-day window generate_slots spans for [start, end]."""
    zone = config.zone
    first_day = config.localize(start).date()
    last_day = config.localize(end).date()
    return (
        datetime.combine(first_day, time.min, tzinfo=zone),
        datetime.combine(last_day, time.max, tzinfo=zone),
    )

