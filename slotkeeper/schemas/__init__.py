from slotkeeper.schemas.user import UserCreate, UserResponse
from slotkeeper.schemas.appointment import (
    AppointmentCreate,
    AppointmentUpdate,
    AppointmentResponse,
    AnnotatedSlotResponse,
    CalendarSettings,
    DeleteResponse,
    SlotAppointment,
)

__all__ = [
    "UserCreate",
    "UserResponse",
    "AppointmentCreate",
    "AppointmentUpdate",
    "AppointmentResponse",
    "AnnotatedSlotResponse",
    "CalendarSettings",
    "DeleteResponse",
    "SlotAppointment",
]
