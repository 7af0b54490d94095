"""Appointment service - Business logic for slot listing and booking."""

from datetime import datetime
from uuid import UUID

import logfire
from sqlalchemy.ext.asyncio import AsyncSession

from slotkeeper.exceptions import (
    DayNotAvailableError,
    InvalidStatusError,
    NotFoundError,
    OutsideBusinessHoursError,
    PastDateError,
    SlotConflictError,
)
from slotkeeper.models.appointment import Appointment, AppointmentStatus
from slotkeeper.scheduling.availability import AvailabilityConfig, Weekday
from slotkeeper.scheduling.booking_index import BookingIndex
from slotkeeper.scheduling.merge import AnnotatedSlot, merge_slots
from slotkeeper.scheduling.slots import covered_window, generate_slots
from slotkeeper.services.appointment_store import AppointmentStore


def parse_status(value: str | None, default: AppointmentStatus | None = None) -> AppointmentStatus | None:
    """Coerce a raw status string, raising InvalidStatusError for unknown values."""
    if value is None:
        return default
    try:
        return AppointmentStatus(value.strip().lower())
    except ValueError:
        allowed = ", ".join(status.value for status in AppointmentStatus)
        raise InvalidStatusError(f"Status must be one of: {allowed}") from None


def validate_slot_rules(appointment_date: datetime, config: AvailabilityConfig, now: datetime) -> datetime:
    """
    Check a requested slot start against the availability template.

    Rules run in order and the first failure is raised: the date must be
    strictly in the future, on an available weekday, and start inside
    business hours. Returns the date expressed in the configured timezone,
    truncated to the minute so one slot maps to exactly one stored instant.
    """
    local = config.localize(appointment_date).replace(second=0, microsecond=0)

    if local <= config.localize(now):
        raise PastDateError("Appointments must be scheduled for a future date")

    if local.weekday() not in config.available_weekdays:
        raise DayNotAvailableError(
            f"Appointments are only available on: {', '.join(config.weekday_labels)}"
        )

    if not config.business_start_hour <= local.hour < config.business_end_hour:
        raise OutsideBusinessHoursError(
            f"Appointments are only available between {config.business_start_hour}:00 "
            f"and {config.business_end_hour}:00"
        )

    return local


class AppointmentService:
    """Service class for appointment operations."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.store = AppointmentStore(db)

    async def get_slots(
        self,
        range_start: datetime,
        range_end: datetime,
        config: AvailabilityConfig,
        now: datetime,
    ) -> list[AnnotatedSlot]:
        """Available and booked slots for every day touched by the range."""
        if config.localize(range_start) > config.localize(range_end):
            return []

        slots = generate_slots(range_start, range_end, config)

        # Index the whole days the generator covers so boundary-day bookings show up
        window_start, window_end = covered_window(range_start, range_end, config)
        index = await BookingIndex.load(self.store, window_start, window_end, config)

        return merge_slots(slots, index, now, config)

    async def get_appointment_by_id(self, appointment_id: UUID) -> Appointment:
        """Get an appointment by ID."""
        appointment = await self.store.get(appointment_id)
        if appointment is None:
            raise NotFoundError("Appointment not found")
        return appointment

    async def list_appointments(self) -> list[Appointment]:
        """All appointments, newest slot first."""
        return await self.store.list_all()

    async def get_user_appointments(
        self, user_id: UUID, status: AppointmentStatus | None = None
    ) -> list[Appointment]:
        """Get all appointments for a user."""
        return await self.store.list_for_user(user_id, status.value if status else None)

    async def book(
        self,
        user_id: UUID,
        appointment_date: datetime,
        config: AvailabilityConfig,
        now: datetime,
        status: str | None = None,
    ) -> Appointment:
        """Validate a slot and reserve it in one insert. Conflicts and unknown users are decided by the store."""
        initial_status = parse_status(status, default=AppointmentStatus.SCHEDULED)
        slot_start = validate_slot_rules(appointment_date, config, now)

        appointment = Appointment(
            user_id=user_id,
            appointment_date=slot_start,
            status=initial_status.value,
        )
        try:
            appointment = await self.store.insert(appointment)
        except SlotConflictError:
            logfire.warn("slot_conflict", user_id=str(user_id), date=slot_start.isoformat())
            raise

        logfire.info(
            "appointment_booked",
            appointment_id=str(appointment.id),
            user_id=str(user_id),
            date=slot_start.isoformat(),
            weekday=Weekday(slot_start.weekday()).label,
        )
        return appointment

    async def update_appointment(
        self,
        appointment_id: UUID,
        config: AvailabilityConfig,
        now: datetime,
        appointment_date: datetime | None = None,
        status: str | None = None,
    ) -> Appointment:
        """Reschedule and/or change status. A new date re-runs the booking rules."""
        new_status = parse_status(status)
        slot_start = validate_slot_rules(appointment_date, config, now) if appointment_date else None

        appointment = await self.get_appointment_by_id(appointment_id)

        # Its own row is the one being moved, so it never conflicts with itself
        if slot_start is not None:
            appointment.appointment_date = slot_start
        if new_status is not None:
            appointment.status = new_status.value

        appointment = await self.store.save(appointment)
        logfire.info(
            "appointment_updated",
            appointment_id=str(appointment.id),
            date=appointment.appointment_date.isoformat(),
            status=appointment.status,
        )
        return appointment

    async def reschedule(
        self,
        appointment_id: UUID,
        new_date: datetime,
        config: AvailabilityConfig,
        now: datetime,
    ) -> Appointment:
        return await self.update_appointment(appointment_id, config, now, appointment_date=new_date)

    async def cancel_appointment(self, appointment_id: UUID) -> Appointment:
        """Cancel an appointment (soft delete by changing status). Idempotent."""
        appointment = await self.get_appointment_by_id(appointment_id)

        if appointment.status == AppointmentStatus.CANCELED.value:
            return appointment

        appointment.status = AppointmentStatus.CANCELED.value
        appointment = await self.store.save(appointment)
        logfire.info("appointment_canceled", appointment_id=str(appointment.id))
        return appointment

    async def delete_appointment(self, appointment_id: UUID) -> None:
        """Administrative hard delete."""
        appointment = await self.get_appointment_by_id(appointment_id)
        await self.store.delete(appointment)
        logfire.info("appointment_deleted", appointment_id=str(appointment_id))
