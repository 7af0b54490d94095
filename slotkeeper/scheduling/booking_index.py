"""Booking index - exact-instant lookup of booked appointments."""

from __future__ import annotations

from datetime import datetime, tzinfo
from typing import TYPE_CHECKING, Iterable, Iterator

import logfire

from slotkeeper.exceptions import BookingIndexIntegrityError
from slotkeeper.scheduling.availability import AvailabilityConfig

if TYPE_CHECKING:
    from slotkeeper.models.appointment import Appointment
    from slotkeeper.services.appointment_store import AppointmentStore


SLOT_KEY_FORMAT = "%Y-%m-%d %H:%M:%S"


def slot_key(instant: datetime, zone: tzinfo) -> str:
    """Second-precision key of an instant, in the configured zone."""
    return instant.astimezone(zone).strftime(SLOT_KEY_FORMAT)


class BookingIndex:
    """Maps slot keys to the non-canceled appointment occupying them."""

    def __init__(self, entries: dict[str, Appointment], zone: tzinfo):
        self._entries = entries
        self.zone = zone

    @classmethod
    def build(cls, appointments: Iterable[Appointment], config: AvailabilityConfig) -> BookingIndex:
        zone = config.zone
        entries: dict[str, Appointment] = {}
        for appointment in appointments:
            key = slot_key(appointment.appointment_date, zone)
            existing = entries.get(key)
            if existing is not None:
                logfire.error(
                    "booking_index_duplicate",
                    slot=key,
                    appointment_ids=[str(existing.id), str(appointment.id)],
                )
                raise BookingIndexIntegrityError(
                    f"Appointments {existing.id} and {appointment.id} both occupy {key}"
                )
            entries[key] = appointment
        return cls(entries, zone)

    @classmethod
    async def load(
        cls,
        store: AppointmentStore,
        start: datetime,
        end: datetime,
        config: AvailabilityConfig,
    ) -> BookingIndex:
        """One range read against the store, non-canceled rows only."""
        appointments = await store.list_in_range(start, end)
        return cls.build(appointments, config)

    def lookup(self, instant: datetime) -> Appointment | None:
        return self._entries.get(slot_key(instant, self.zone))

    def __contains__(self, instant: datetime) -> bool:
        return self.lookup(instant) is not None

    def __len__(self) -> int:
        return len(self._entries)

    def items(self) -> Iterator[tuple[str, Appointment]]:
        return iter(self._entries.items())
