"""Reservation API endpoints"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends

from reserva.api.auth import Requester, get_requester, verify_reservation_owner
from reserva.api.deps import get_core
from reserva.booking.core import BookingCore
from reserva.booking.values import Money
from reserva.models.reservation import ReservationKind, ReservationStatus
from reserva.schemas.reservation import (
    HotelReservationCreate,
    RestaurantReservationCreate,
    ReservationResponse,
    ReservationListResponse,
)

router = APIRouter()


@router.post("/hotel", response_model=ReservationResponse, status_code=201)
async def create_hotel_reservation(
    reservation_data: HotelReservationCreate,
    requester: Requester = Depends(get_requester),
    core: BookingCore = Depends(get_core),
):
    """Book a hotel room for a date range"""
    reservation = await core.engine.create_hotel_reservation(
        business_id=reservation_data.business_id,
        room_id=reservation_data.room_id,
        requester_id=requester.user_id,
        start_date=reservation_data.start_date,
        end_date=reservation_data.end_date,
        guests=reservation_data.guests,
        total_amount=Money.from_decimal(
            reservation_data.total_amount.amount,
            reservation_data.total_amount.currency,
        ),
        note=reservation_data.special_request,
    )
    return ReservationResponse.from_model(reservation)


@router.post("/restaurant", response_model=ReservationResponse, status_code=201)
async def create_restaurant_reservation(
    reservation_data: RestaurantReservationCreate,
    requester: Requester = Depends(get_requester),
    core: BookingCore = Depends(get_core),
):
    """Book a restaurant table for a time slot"""
    reservation = await core.engine.create_restaurant_reservation(
        business_id=reservation_data.business_id,
        table_id=reservation_data.table_id,
        requester_id=requester.user_id,
        start=reservation_data.start_date,
        end=reservation_data.end_date,
        guests=reservation_data.guests,
        total_amount=Money.from_decimal(
            reservation_data.total_amount.amount,
            reservation_data.total_amount.currency,
        ),
        note=reservation_data.special_request,
    )
    return ReservationResponse.from_model(reservation)


@router.get("", response_model=ReservationListResponse)
async def list_my_reservations(
    status: Optional[ReservationStatus] = None,
    type: Optional[ReservationKind] = None,
    requester: Requester = Depends(get_requester),
    core: BookingCore = Depends(get_core),
):
    """List the requester's reservations"""
    reservations = await core.store.list_by_user(requester.user_id, status=status, kind=type)
    return ReservationListResponse(
        items=[ReservationResponse.from_model(r) for r in reservations],
        total=len(reservations),
    )


@router.get("/{reservation_id}", response_model=ReservationResponse)
async def get_reservation(
    reservation_id: UUID,
    requester: Requester = Depends(get_requester),
    core: BookingCore = Depends(get_core),
):
    """Get reservation details"""
    reservation = await core.store.get(reservation_id)
    verify_reservation_owner(reservation, requester)
    return ReservationResponse.from_model(reservation)


@router.put("/{reservation_id}/confirm", response_model=ReservationResponse)
async def confirm_reservation(
    reservation_id: UUID,
    requester: Requester = Depends(get_requester),
    core: BookingCore = Depends(get_core),
):
    """Confirm a pending reservation"""
    verify_reservation_owner(await core.store.get(reservation_id), requester)
    reservation = await core.lifecycle.confirm(reservation_id)
    return ReservationResponse.from_model(reservation)


@router.put("/{reservation_id}/cancel", response_model=ReservationResponse)
async def cancel_reservation(
    reservation_id: UUID,
    requester: Requester = Depends(get_requester),
    core: BookingCore = Depends(get_core),
):
    """Cancel a reservation and free its slot"""
    verify_reservation_owner(await core.store.get(reservation_id), requester)
    reservation = await core.lifecycle.cancel(reservation_id)
    return ReservationResponse.from_model(reservation)


@router.put("/{reservation_id}/complete", response_model=ReservationResponse)
async def complete_reservation(
    reservation_id: UUID,
    requester: Requester = Depends(get_requester),
    core: BookingCore = Depends(get_core),
):
    """Mark a confirmed reservation whose interval has elapsed as completed"""
    verify_reservation_owner(await core.store.get(reservation_id), requester)
    reservation = await core.lifecycle.complete(reservation_id)
    return ReservationResponse.from_model(reservation)
