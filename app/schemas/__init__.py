# app/schemas/__init__.py
from .booking import (
    BookingCreateRequest,
    BookingCancelRequest,
    BookingRescheduleRequest
)

from .availability import (
    SlotSchema,
    DayScheduleSchema,
    DateExceptionSchema,
    AvailabilitySettingsUpdate
)

__all__ = [
    "BookingCreateRequest",
    "BookingCancelRequest",
    "BookingRescheduleRequest",
    "SlotSchema",
    "DayScheduleSchema",
    "DateExceptionSchema",
    "AvailabilitySettingsUpdate",
]
