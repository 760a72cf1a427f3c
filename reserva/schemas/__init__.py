"""Pydantic schemas for request/response validation"""

from reserva.schemas.business import (
    AvailabilityResponse,
    ResourceResponse,
)
from reserva.schemas.reservation import (
    HotelReservationCreate,
    MoneyIn,
    MoneyOut,
    ReservationListResponse,
    ReservationResponse,
    RestaurantReservationCreate,
)

__all__ = [
    "AvailabilityResponse",
    "ResourceResponse",
    "HotelReservationCreate",
    "MoneyIn",
    "MoneyOut",
    "ReservationListResponse",
    "ReservationResponse",
    "RestaurantReservationCreate",
]
