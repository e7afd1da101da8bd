from sqlalchemy import Column, String, Text, Date, DateTime, ForeignKey, Index, Uuid, text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.models.base import Base
import enum
import uuid


class BookingStatus(str, enum.Enum):
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    RESCHEDULED = "rescheduled"
    COMPLETED = "completed"


# Statuses that occupy a slot
ACTIVE_BOOKING_STATUSES = (
    BookingStatus.CONFIRMED.value,
    BookingStatus.RESCHEDULED.value,
    BookingStatus.COMPLETED.value,
)

_ACTIVE_STATUS_CLAUSE = text("status IN ('confirmed', 'rescheduled', 'completed')")


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    # Owner (anonymous bookings have no user)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=True, index=True)

    # Slot
    date = Column(Date, nullable=False, index=True)
    time = Column(String(5), nullable=False)  # slot start, HH:MM
    end_time = Column(String(5), nullable=True)

    # Customer info
    customer_name = Column(String, nullable=False)
    customer_email = Column(String, nullable=False)
    customer_phone = Column(String, nullable=True)

    service_type = Column(String, nullable=False, default="Consultation")
    notes = Column(Text, nullable=True)

    # Status tracking
    status = Column(String(20), nullable=False, default=BookingStatus.CONFIRMED.value)

    # Cancellation
    cancellation_reason = Column(Text, nullable=True)
    cancelled_at = Column(DateTime(timezone=True), nullable=True)
    cancelled_by = Column(Uuid(as_uuid=True), nullable=True)

    # Reschedule history
    original_date = Column(Date, nullable=True)
    original_time = Column(String(5), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="bookings", foreign_keys=[user_id])

    __table_args__ = (
        # At most one active booking per slot
        Index(
            "uq_bookings_active_slot",
            "date",
            "time",
            unique=True,
            postgresql_where=_ACTIVE_STATUS_CLAUSE,
            sqlite_where=_ACTIVE_STATUS_CLAUSE,
        ),
    )

    @property
    def is_active(self) -> bool:
        return self.status in ACTIVE_BOOKING_STATUSES

    def __repr__(self):
        return f"<Booking {self.id} {self.date} {self.time} ({self.status})>"
