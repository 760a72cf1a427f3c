"""Reservation schemas"""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional, List
from uuid import UUID
from pydantic import BaseModel, Field

from reserva.config import settings
from reserva.models.reservation import ReservationKind, ReservationStatus


class MoneyIn(BaseModel):
    """Total amount as sent by the client"""
    amount: Decimal = Field(ge=0, decimal_places=2)
    currency: str = Field(default_factory=lambda: settings.default_currency, min_length=3, max_length=3)


class MoneyOut(BaseModel):
    """Total amount in responses"""
    amount: Decimal
    currency: str


class HotelReservationCreate(BaseModel):
    """Create hotel reservation request"""
    business_id: UUID
    room_id: UUID
    start_date: date  # check-in
    end_date: date  # check-out
    guests: int = Field(ge=1)
    total_amount: MoneyIn
    special_request: Optional[str] = Field(default=None, max_length=2000)


class RestaurantReservationCreate(BaseModel):
    """Create restaurant reservation request"""
    business_id: UUID
    table_id: UUID
    start_date: datetime
    end_date: datetime
    guests: int = Field(ge=1)
    total_amount: MoneyIn
    special_request: Optional[str] = Field(default=None, max_length=2000)


class ReservationResponse(BaseModel):
    """Reservation response"""
    id: UUID
    user_id: UUID
    business_id: UUID
    resource_id: UUID
    type: ReservationKind
    status: ReservationStatus
    start_date: datetime
    end_date: datetime
    guests: int
    total_amount: MoneyOut
    special_request: Optional[str]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, reservation) -> "ReservationResponse":
        return cls(
            id=reservation.id,
            user_id=reservation.user_id,
            business_id=reservation.business_id,
            resource_id=reservation.resource_id,
            type=reservation.kind,
            status=reservation.status,
            start_date=reservation.start_date,
            end_date=reservation.end_date,
            guests=reservation.guest_count,
            total_amount=MoneyOut(
                amount=(Decimal(reservation.total_amount_cents) / 100).quantize(Decimal("0.01")),
                currency=reservation.currency,
            ),
            special_request=reservation.special_request,
            created_at=reservation.created_at,
            updated_at=reservation.updated_at,
        )


class ReservationListResponse(BaseModel):
    """Reservation list"""
    items: List[ReservationResponse]
    total: int
