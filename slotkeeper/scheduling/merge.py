"""Slot merger - annotates generated slots with booking state."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Iterable

from slotkeeper.scheduling.availability import AvailabilityConfig
from slotkeeper.scheduling.booking_index import BookingIndex, slot_key
from slotkeeper.scheduling.slots import Slot

if TYPE_CHECKING:
    from slotkeeper.models.appointment import Appointment


class SlotStatus(str, Enum):
    AVAILABLE = "available"
    BOOKED = "booked"


@dataclass(frozen=True)
class AnnotatedSlot:
    start: datetime
    end: datetime
    status: SlotStatus
    appointment: Appointment | None = None


def merge_slots(
    slots: Iterable[Slot],
    index: BookingIndex,
    now: datetime,
    config: AvailabilityConfig,
) -> list[AnnotatedSlot]:
    """
    Combine generated slots with the booking index.

    Booked slots are always kept, past unbooked slots are dropped and future
    unbooked ones are available. Indexed appointments that match no generated
    slot (off the grid, or on a day no longer offered) are appended as booked
    entries so every booking in range is listed exactly once.
    """
    merged: list[AnnotatedSlot] = []
    matched: set[str] = set()

    for slot in slots:
        appointment = index.lookup(slot.start)
        if appointment is not None:
            matched.add(slot_key(slot.start, index.zone))
            merged.append(AnnotatedSlot(slot.start, slot.end, SlotStatus.BOOKED, appointment))
        elif slot.start > now:
            merged.append(AnnotatedSlot(slot.start, slot.end, SlotStatus.AVAILABLE))

    for key, appointment in index.items():
        if key in matched:
            continue
        start = appointment.appointment_date.astimezone(config.zone)
        merged.append(
            AnnotatedSlot(start, start + config.slot_duration, SlotStatus.BOOKED, appointment)
        )

    # sorted() is stable, so ties keep generation order
    return sorted(merged, key=lambda annotated: annotated.start)
