# ============================================================================
# FILE: app/models/user.py
# Customer/admin profile keyed by the identity provider's user id
# ============================================================================
from sqlalchemy import Column, String, Boolean, DateTime, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid
from app.models.base import Base


class User(Base):
    """
    Profile row for a user authenticated by the hosted identity provider.
    The id is the provider's `sub` claim, so no passwords are stored here.
    """
    __tablename__ = "users"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    email = Column(String(255), unique=True, nullable=False, index=True)
    full_name = Column(String(255), nullable=True)

    # Studio staff who can edit the schedule and manage any booking
    is_admin = Column(Boolean, default=False, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    bookings = relationship("Booking", back_populates="user", foreign_keys="Booking.user_id")

    def __repr__(self):
        return f"<User {self.email} (admin={self.is_admin})>"
