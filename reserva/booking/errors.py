"""Booking error taxonomy"""


class BookingError(Exception):
    """Base class for every booking core failure"""

    code = "booking_error"
    status_code = 400

    def __init__(self, message: str, **context):
        super().__init__(message)
        self.message = message
        self.context = context


class NotFound(BookingError):
    """Unknown business, resource or reservation"""

    code = "not_found"
    status_code = 404


class InvalidInterval(BookingError):
    """Interval start is not before its end, or lies in the past"""

    code = "invalid_interval"
    status_code = 400


class CapacityExceeded(BookingError):
    """More guests than the resource holds"""

    code = "capacity_exceeded"
    status_code = 400


class InvalidReservation(BookingError):
    """A reservation record violates a data-model invariant"""

    code = "invalid_reservation"
    status_code = 422


class SlotUnavailable(BookingError):
    """The requested interval overlaps a held interval"""

    code = "slot_unavailable"
    status_code = 409


class InvalidTransition(BookingError):
    """The lifecycle does not allow this status change"""

    code = "invalid_transition"
    status_code = 409


class Conflict(BookingError):
    """A concurrent status update won the compare-and-swap"""

    code = "conflict"
    status_code = 409
