"""Appointment routes - API endpoints for slot listing and booking."""

from datetime import datetime
from fastapi import APIRouter, HTTPException
from uuid import UUID

from slotkeeper.api.deps import Availability, CallerId, DBSession, Now
from slotkeeper.models.appointment import AppointmentStatus
from slotkeeper.schemas.appointment import (
    AppointmentCreate,
    AppointmentUpdate,
    AppointmentResponse,
    AnnotatedSlotResponse,
    CalendarSettings,
    DeleteResponse,
)
from slotkeeper.services.appointment_service import AppointmentService

router = APIRouter()


def get_service(db) -> AppointmentService:
    return AppointmentService(db)


@router.get("/slots", response_model=list[AnnotatedSlotResponse])
async def get_available_and_booked_slots(
    start: datetime,
    end: datetime,
    db: DBSession,
    config: Availability,
    now: Now,
):
    """Available and booked slots for every day touched by [start, end]."""
    service = get_service(db)
    slots = await service.get_slots(start, end, config, now)
    return [AnnotatedSlotResponse.model_validate(slot) for slot in slots]


@router.get("/calendar", response_model=CalendarSettings)
async def get_calendar_settings(config: Availability):
    """Availability template for calendar clients."""
    return CalendarSettings(
        days_available=config.weekday_labels,
        appointment_duration_minutes=config.slot_duration_minutes,
        business_hours_start=config.business_start_hour,
        business_hours_end=config.business_end_hour,
        timezone=config.timezone,
    )


@router.get("/", response_model=list[AppointmentResponse])
async def list_appointments(db: DBSession):
    """List all appointments, newest first."""
    service = get_service(db)
    return await service.list_appointments()


@router.post("/", response_model=AppointmentResponse, status_code=201)
async def create_appointment(
    appointment_data: AppointmentCreate,
    db: DBSession,
    config: Availability,
    now: Now,
    caller_id: CallerId,
):
    """Book a slot. user_id defaults to the calling user."""
    user_id = appointment_data.user_id or caller_id
    if user_id is None:
        raise HTTPException(status_code=401, detail="Not authenticated")

    service = get_service(db)
    return await service.book(
        user_id,
        appointment_data.appointment_date,
        config,
        now,
        status=appointment_data.status,
    )


@router.get("/user/{user_id}", response_model=list[AppointmentResponse])
async def get_user_appointments(
    user_id: UUID,
    db: DBSession,
    status: AppointmentStatus | None = None,
):
    """Get all appointments for a user."""
    service = get_service(db)
    return await service.get_user_appointments(user_id, status)


@router.get("/{appointment_id}", response_model=AppointmentResponse)
async def get_appointment(appointment_id: UUID, db: DBSession):
    """Get an appointment by ID."""
    service = get_service(db)
    return await service.get_appointment_by_id(appointment_id)


@router.patch("/{appointment_id}", response_model=AppointmentResponse)
async def update_appointment(
    appointment_id: UUID,
    appointment_data: AppointmentUpdate,
    db: DBSession,
    config: Availability,
    now: Now,
):
    """Update an appointment (reschedule and/or change status)."""
    service = get_service(db)
    return await service.update_appointment(
        appointment_id,
        config,
        now,
        appointment_date=appointment_data.appointment_date,
        status=appointment_data.status,
    )


@router.patch("/{appointment_id}/cancel", response_model=AppointmentResponse)
async def cancel_appointment(appointment_id: UUID, db: DBSession):
    """Cancel an appointment (soft delete by changing status)."""
    service = get_service(db)
    return await service.cancel_appointment(appointment_id)


@router.delete("/{appointment_id}", response_model=DeleteResponse)
async def delete_appointment(appointment_id: UUID, db: DBSession):
    """Remove an appointment permanently (administrative)."""
    service = get_service(db)
    await service.delete_appointment(appointment_id)
    return DeleteResponse()
