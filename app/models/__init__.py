# app/models/__init__.py
from .base import Base
from .user import User
from .availability import WeeklyRule, DateException, DAY_NAMES
from .booking import Booking, BookingStatus, ACTIVE_BOOKING_STATUSES

__all__ = [
    "Base",
    "User",
    "WeeklyRule",
    "DateException",
    "DAY_NAMES",
    "Booking",
    "BookingStatus",
    "ACTIVE_BOOKING_STATUSES",
]
