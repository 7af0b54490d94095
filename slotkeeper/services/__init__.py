"""Services package - Business logic layer."""

from slotkeeper.services.user_service import UserService
from slotkeeper.services.appointment_service import AppointmentService
from slotkeeper.services.appointment_store import AppointmentStore

__all__ = ["UserService", "AppointmentService", "AppointmentStore"]
