from pydantic import BaseModel, Field
from datetime import datetime
from uuid import UUID
from slotkeeper.scheduling.merge import SlotStatus


class AppointmentBase(BaseModel):
    """Base appointment schema."""
    appointment_date: datetime = Field(
        ..., description="Slot start (ISO 8601; naive values are read in the configured timezone)"
    )


class AppointmentCreate(AppointmentBase):
    """Schema for creating an appointment."""
    user_id: UUID | None = Field(None, description="User ID, defaults to the caller")
    status: str | None = Field(None, description="scheduled, completed or canceled")


class AppointmentUpdate(BaseModel):
    """Schema for updating an appointment."""
    appointment_date: datetime | None = None
    status: str | None = None


class AppointmentResponse(AppointmentBase):
    """Schema for appointment response."""
    id: UUID
    user_id: UUID
    status: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class SlotAppointment(BaseModel):
    """Appointment reference carried by a booked slot."""
    id: UUID
    user_id: UUID
    status: str

    class Config:
        from_attributes = True


class AnnotatedSlotResponse(BaseModel):
    """Schema for a slot in the calendar listing."""
    start: datetime
    end: datetime
    status: SlotStatus
    appointment: SlotAppointment | None = None

    class Config:
        from_attributes = True


class CalendarSettings(BaseModel):
    """Availability template exposed to calendar clients."""
    days_available: list[str]
    appointment_duration_minutes: int
    business_hours_start: int
    business_hours_end: int
    timezone: str


class DeleteResponse(BaseModel):
    success: bool = True
