# backend/velofit/errors.py
"""
Domain errors of the booking engine.

Each error carries the HTTP status the API layer answers with.
"""


class BookingError(Exception):
    status_code = 400

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)

    default_message = "Booking error"


class StoreNotFound(BookingError):
    status_code = 404
    default_message = "Store not found"


class ServiceNotFound(BookingError):
    status_code = 404
    default_message = "Service not found"


class TechnicianNotFound(BookingError):
    status_code = 404
    default_message = "Technician not found"


class BookingNotFound(BookingError):
    status_code = 404
    default_message = "Booking not found"


class BlockNotFound(BookingError):
    status_code = 404
    default_message = "Availability block not found"


class InvalidInterval(BookingError):
    status_code = 400
    default_message = "End must be after start"


class BookingNotEditable(BookingError):
    status_code = 400
    default_message = "Booking can no longer be modified"


class InvalidStatus(BookingError):
    status_code = 400
    default_message = "Unknown booking status"


class SlotConflict(BookingError):
    """The requested slot is no longer available."""
    status_code = 409
    default_message = "This slot is no longer available"


class TransientStorageError(BookingError):
    """Database failure; the transaction was rolled back and may be retried."""
    status_code = 500
    default_message = "Storage temporarily unavailable"
