"""Business-scoped reservation and availability endpoints"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends

from reserva.api.auth import Requester, get_requester, verify_business_owner
from reserva.api.deps import get_core
from reserva.booking.core import BookingCore
from reserva.booking.values import Interval
from reserva.models.business import ResourceKind
from reserva.models.reservation import ReservationStatus
from reserva.schemas.business import AvailabilityResponse, ResourceResponse
from reserva.schemas.reservation import ReservationListResponse, ReservationResponse

router = APIRouter()


@router.get("/{business_id}/reservations", response_model=ReservationListResponse)
async def list_business_reservations(
    business_id: UUID,
    status: Optional[ReservationStatus] = None,
    requester: Requester = Depends(get_requester),
    core: BookingCore = Depends(get_core),
):
    """List reservations made at a business; owner only"""
    business = await core.inventory.get_business(business_id)
    verify_business_owner(business, requester)
    reservations = await core.store.list_by_business(business_id, status=status)
    return ReservationListResponse(
        items=[ReservationResponse.from_model(r) for r in reservations],
        total=len(reservations),
    )


@router.get("/{business_id}/availability", response_model=AvailabilityResponse)
async def check_availability(
    business_id: UUID,
    start_date: datetime,
    end_date: datetime,
    kind: Optional[ResourceKind] = None,
    requester: Requester = Depends(get_requester),
    core: BookingCore = Depends(get_core),
):
    """Resources of a business free for the whole [start_date, end_date)"""
    interval = Interval.from_timestamps(start_date, end_date)
    resources = await core.engine.check_availability(business_id, interval, kind)
    return AvailabilityResponse(
        business_id=business_id,
        start_date=interval.start,
        end_date=interval.end,
        available=bool(resources),
        resources=[ResourceResponse.model_validate(r) for r in resources],
    )
