"""Scheduling core - availability template, slot grid and booking merge."""

from slotkeeper.scheduling.availability import AvailabilityConfig, Weekday, get_availability, load
from slotkeeper.scheduling.booking_index import BookingIndex, slot_key
from slotkeeper.scheduling.merge import AnnotatedSlot, SlotStatus, merge_slots
from slotkeeper.scheduling.slots import Slot, covered_window, generate_slots, slots_for_day

__all__ = [
    "AvailabilityConfig",
    "Weekday",
    "get_availability",
    "load",
    "BookingIndex",
    "slot_key",
    "AnnotatedSlot",
    "SlotStatus",
    "merge_slots",
    "Slot",
    "covered_window",
    "generate_slots",
    "slots_for_day",
]
