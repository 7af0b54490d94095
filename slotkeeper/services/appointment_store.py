"""Appointment store - persistence for appointment records."""

import asyncio
import logging
from datetime import datetime
from typing import Awaitable, TypeVar
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, InterfaceError, OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.ext.asyncio import AsyncSession

from slotkeeper.exceptions import NotFoundError, SlotConflictError, StoreUnavailableError
from slotkeeper.models.appointment import Appointment, AppointmentStatus

logger = logging.getLogger(__name__)

T = TypeVar("T")

ACTIVE_SLOT_INDEX = "uq_appointments_active_date"


def _is_slot_conflict(exc: IntegrityError) -> bool:
    # PostgreSQL names the index, SQLite names the column
    message = str(exc.orig)
    return ACTIVE_SLOT_INDEX in message or "appointments.appointment_date" in message


def _is_missing_user(exc: IntegrityError) -> bool:
    return "foreign key" in str(exc.orig).lower()


class AppointmentStore:
    """
    Store wrapper around one AsyncSession.

    Statement timeouts are enforced by the driver (see store_connect_args).
    Timeouts and connection failures surface as StoreUnavailableError and are
    never retried here. A write that would put two non-canceled appointments
    on one instant is rejected by the uq_appointments_active_date index and
    surfaces as SlotConflictError; a write naming an unknown user is rejected
    by the users foreign key and surfaces as NotFoundError.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _call(self, awaitable: Awaitable[T]) -> T:
        try:
            return await awaitable
        except (asyncio.TimeoutError, PoolTimeoutError) as e:
            logger.error("Appointment store timed out")
            raise StoreUnavailableError("Appointment store timed out, please retry") from e
        except (OperationalError, InterfaceError) as e:
            logger.error(f"Appointment store unavailable: {e}")
            raise StoreUnavailableError("Appointment store is unavailable, please retry") from e

    async def _flush(self) -> None:
        try:
            await self._call(self.db.flush())
        except IntegrityError as e:
            await self.db.rollback()
            if _is_slot_conflict(e):
                raise SlotConflictError(
                    "This time slot is already booked. Please choose another slot."
                ) from e
            if _is_missing_user(e):
                raise NotFoundError("User not found") from e
            raise

    async def get(self, appointment_id: UUID) -> Appointment | None:
        return await self._call(self.db.get(Appointment, appointment_id))

    async def list_in_range(
        self, start: datetime, end: datetime, include_canceled: bool = False
    ) -> list[Appointment]:
        """Appointments with appointment_date in [start, end], ascending."""
        query = select(Appointment).where(
            Appointment.appointment_date >= start,
            Appointment.appointment_date <= end,
        )
        if not include_canceled:
            query = query.where(Appointment.status != AppointmentStatus.CANCELED.value)

        query = query.order_by(Appointment.appointment_date, Appointment.created_at)
        result = await self._call(self.db.execute(query))
        return list(result.scalars().all())

    async def list_all(self) -> list[Appointment]:
        result = await self._call(
            self.db.execute(select(Appointment).order_by(Appointment.appointment_date.desc()))
        )
        return list(result.scalars().all())

    async def list_for_user(self, user_id: UUID, status: str | None = None) -> list[Appointment]:
        query = select(Appointment).where(Appointment.user_id == user_id)

        if status:
            query = query.where(Appointment.status == status)

        query = query.order_by(Appointment.appointment_date)
        result = await self._call(self.db.execute(query))
        return list(result.scalars().all())

    async def insert(self, appointment: Appointment) -> Appointment:
        """Insert atomically; the partial unique index decides slot conflicts."""
        self.db.add(appointment)
        await self._flush()
        await self._call(self.db.refresh(appointment))
        return appointment

    async def save(self, appointment: Appointment) -> Appointment:
        """Flush pending changes to an already-persisted appointment."""
        await self._flush()
        await self._call(self.db.refresh(appointment))
        return appointment

    async def delete(self, appointment: Appointment) -> None:
        await self._call(self.db.delete(appointment))
        await self._call(self.db.flush())
