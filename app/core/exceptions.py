"""Domain errors raised by services and mapped to HTTP responses in app.main"""


class BookingAppError(Exception):
    """Base class for errors that carry a user-facing message"""

    status_code = 500
    default_detail = "Internal error"

    def __init__(self, detail: str = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class InvalidInput(BookingAppError):
    """Malformed date/time or payload, rejected before any query runs"""
    status_code = 400
    default_detail = "Invalid input"


class PermissionDenied(BookingAppError):
    status_code = 403
    default_detail = "You do not have permission to perform this action"


class NotFound(BookingAppError):
    status_code = 404
    default_detail = "Not found"


class InvalidBookingState(BookingAppError):
    status_code = 400
    default_detail = "Booking cannot be changed in its current state"


class SlotConflict(BookingAppError):
    """Another active booking holds the same date and time"""
    status_code = 409
    default_detail = "That time was just taken, please choose another"


class DataUnavailable(BookingAppError):
    """The database could not be reached or returned an error"""
    status_code = 503
    default_detail = "Unable to check availability, please try again"
