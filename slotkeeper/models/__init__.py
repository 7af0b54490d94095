from slotkeeper.models.user import User
from slotkeeper.models.appointment import Appointment, AppointmentStatus

__all__ = ["User", "Appointment", "AppointmentStatus"]
