"""Reservation booking core"""

from reserva.booking.availability import AvailabilityIndex
from reserva.booking.core import BookingCore, build_core
from reserva.booking.engine import BookingEngine
from reserva.booking.errors import (
    BookingError,
    CapacityExceeded,
    Conflict,
    InvalidInterval,
    InvalidReservation,
    InvalidTransition,
    NotFound,
    SlotUnavailable,
)
from reserva.booking.inventory import InventoryRegistry
from reserva.booking.lifecycle import LifecycleManager
from reserva.booking.store import ReservationStore
from reserva.booking.values import Interval, Money

__all__ = [
    "AvailabilityIndex",
    "BookingCore",
    "BookingEngine",
    "BookingError",
    "CapacityExceeded",
    "Conflict",
    "InvalidInterval",
    "InvalidReservation",
    "InvalidTransition",
    "InventoryRegistry",
    "Interval",
    "LifecycleManager",
    "Money",
    "NotFound",
    "ReservationStore",
    "SlotUnavailable",
    "build_core",
]
