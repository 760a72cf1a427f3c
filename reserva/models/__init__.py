"""Database models"""

from reserva.models.business import Business, BusinessKind, Resource, ResourceKind
from reserva.models.reservation import (
    HELD_STATUSES,
    Reservation,
    ReservationKind,
    ReservationStatus,
)

__all__ = [
    "Business",
    "BusinessKind",
    "Resource",
    "ResourceKind",
    "Reservation",
    "ReservationKind",
    "ReservationStatus",
    "HELD_STATUSES",
]
