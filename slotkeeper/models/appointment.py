import uuid
from datetime import datetime, timezone
from enum import Enum
from sqlalchemy import String, ForeignKey, Index, text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from slotkeeper.database import Base, UTCDateTime


class AppointmentStatus(str, Enum):
    """Appointment status enum."""
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELED = "canceled"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Appointment(Base):
    """Appointment model."""

    __tablename__ = "appointments"

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True,
        default=uuid.uuid4,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    # Slot start instant
    appointment_date: Mapped[datetime] = mapped_column(
        UTCDateTime,
        nullable=False,
    )
    status: Mapped[str] = mapped_column(
        String(20),
        default=AppointmentStatus.SCHEDULED.value,
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime,
        default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime,
        default=utcnow,
        onupdate=utcnow,
    )

    # Relationship
    user: Mapped["User"] = relationship("User", back_populates="appointments")

    # Prevent double-booking: one non-canceled appointment per slot instant
    __table_args__ = (
        Index(
            "uq_appointments_active_date",
            "appointment_date",
            unique=True,
            postgresql_where=text("status <> 'canceled'"),
            sqlite_where=text("status <> 'canceled'"),
        ),
        Index("ix_appointments_appointment_date", "appointment_date"),
    )

    @property
    def is_active(self) -> bool:
        return self.status != AppointmentStatus.CANCELED.value

    def __repr__(self) -> str:
        return f"<Appointment {self.appointment_date} {self.status}>"
