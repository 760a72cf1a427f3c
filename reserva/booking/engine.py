"""
Booking engine

Creates reservations in two phases: hold the interval in the availability
index, then persist a PENDING reservation whose id is the hold token. If the
second phase fails for any reason, task cancellation included, the hold is
released before the error propagates, unless the row was committed before
the failure surfaced. A held interval always has a reservation behind it
once `book` returns, and a committed reservation always keeps its hold.

Holds whose reservation was cancelled or completed by another process are
dropped when they get in the way of a booking or an availability query.
"""

import asyncio
from datetime import date, datetime
from typing import Callable, List, Optional
from uuid import UUID

import structlog

from reserva.booking.availability import AvailabilityIndex
from reserva.booking.errors import (
    CapacityExceeded,
    InvalidInterval,
    InvalidReservation,
    NotFound,
    SlotUnavailable,
)
from reserva.booking.inventory import InventoryRegistry
from reserva.booking.store import ReservationStore
from reserva.booking.values import Interval, Money
from reserva.models.business import Resource, ResourceKind
from reserva.models.reservation import HELD_STATUSES, Reservation, ReservationKind

logger = structlog.get_logger()


RESOURCE_KIND_FOR = {
    ReservationKind.HOTEL: ResourceKind.ROOM,
    ReservationKind.RESTAURANT: ResourceKind.TABLE,
}


class BookingEngine:
    """Validates booking requests and atomically allocates resources"""

    def __init__(
        self,
        inventory: InventoryRegistry,
        availability: AvailabilityIndex,
        store: ReservationStore,
        allow_past_bookings: bool = False,
        clock: Callable[[], datetime] = datetime.utcnow,
    ):
        self.inventory = inventory
        self.availability = availability
        self.store = store
        self.allow_past_bookings = allow_past_bookings
        self._clock = clock

    async def book(
        self,
        business_id: UUID,
        resource_id: UUID,
        requester_id: UUID,
        interval: Interval,
        guest_count: int,
        total_amount: Money,
        kind: ReservationKind,
        special_request: Optional[str] = None,
    ) -> Reservation:
        """Reserve `resource_id` for `interval` and persist a PENDING reservation"""
        resource = await self.inventory.get_resource(business_id, resource_id)
        if resource.kind != RESOURCE_KIND_FOR[kind]:
            raise NotFound(
                f"No {RESOURCE_KIND_FOR[kind].value.lower()} with this id",
                business_id=str(business_id),
                resource_id=str(resource_id),
            )

        self._check_request(resource, interval, guest_count)

        token = await self._reserve(resource.id, interval)

        record = Reservation(
            id=token,
            user_id=requester_id,
            business_id=business_id,
            resource_id=resource.id,
            kind=kind,
            start_date=interval.start,
            end_date=interval.end,
            guest_count=guest_count,
            total_amount_cents=total_amount.amount_cents,
            currency=total_amount.currency,
            special_request=special_request,
        )

        try:
            await self.store.create(record)
        except BaseException:
            # The commit may have landed before the error; a stored row keeps its hold
            if not await asyncio.shield(self._persisted(token)):
                await self.availability.release(resource.id, interval, token=token)
                logger.warning(
                    "Reservation persist failed, hold released",
                    resource_id=str(resource.id),
                    interval=str(interval),
                )
            raise

        logger.info(
            "Reservation created",
            reservation_id=str(record.id),
            business_id=str(business_id),
            resource_id=str(resource.id),
            user_id=str(requester_id),
            interval=str(interval),
            guests=guest_count,
        )
        return record

    def _check_request(self, resource: Resource, interval: Interval, guest_count: int) -> None:
        if guest_count < 1:
            raise InvalidReservation("At least one guest is required", guest_count=guest_count)

        if guest_count > resource.capacity:
            raise CapacityExceeded(
                f"Resource holds at most {resource.capacity} guests",
                capacity=resource.capacity,
                guest_count=guest_count,
            )

        if not self.allow_past_bookings and interval.start < self._clock():
            raise InvalidInterval("Start cannot be in the past", start=interval.start.isoformat())

    async def _reserve(self, resource_id: UUID, interval: Interval) -> UUID:
        while True:
            try:
                return await self.availability.reserve(resource_id, interval)
            except SlotUnavailable:
                if not await self._drop_finished_hold(resource_id, interval):
                    raise

    async def _is_free(self, resource_id: UUID, interval: Interval) -> bool:
        while not await self.availability.is_free(resource_id, interval):
            if not await self._drop_finished_hold(resource_id, interval):
                return False
        return True

    async def _drop_finished_hold(self, resource_id: UUID, interval: Interval) -> bool:
        """Release a blocking hold whose reservation is no longer PENDING or CONFIRMED"""
        blocking = self.availability.blocking(resource_id, interval)
        if blocking is None:
            return True
        held_interval, token = blocking

        try:
            reservation = await self.store.get(token)
        except NotFound:
            # A concurrent booking that has not committed yet
            return False
        if reservation.status in HELD_STATUSES:
            return False

        logger.info(
            "Dropping hold of finished reservation",
            reservation_id=str(token),
            resource_id=str(resource_id),
            status=reservation.status.value,
        )
        await self.availability.release(resource_id, held_interval, token=token)
        return True

    async def _persisted(self, token: UUID) -> bool:
        try:
            await self.store.get(token)
        except NotFound:
            return False
        except Exception:
            # Unknown outcome; an orphaned hold is preferred over a double booking
            logger.exception("Could not verify failed reservation persist", reservation_id=str(token))
            return True
        return True

    async def create_hotel_reservation(
        self,
        business_id: UUID,
        room_id: UUID,
        requester_id: UUID,
        start_date: date,
        end_date: date,
        guests: int,
        total_amount: Money,
        note: Optional[str] = None,
    ) -> Reservation:
        # Interval() rejects start >= end before anything is reserved
        interval = Interval.from_dates(start_date, end_date)
        return await self.book(
            business_id,
            room_id,
            requester_id,
            interval,
            guests,
            total_amount,
            ReservationKind.HOTEL,
            special_request=note,
        )

    async def create_restaurant_reservation(
        self,
        business_id: UUID,
        table_id: UUID,
        requester_id: UUID,
        start: datetime,
        end: datetime,
        guests: int,
        total_amount: Money,
        note: Optional[str] = None,
    ) -> Reservation:
        interval = Interval.from_timestamps(start, end)
        return await self.book(
            business_id,
            table_id,
            requester_id,
            interval,
            guests,
            total_amount,
            ReservationKind.RESTAURANT,
            special_request=note,
        )

    async def check_availability(
        self,
        business_id: UUID,
        interval: Interval,
        kind: Optional[ResourceKind] = None,
    ) -> List[Resource]:
        """Resources of the business that are free for the whole interval"""
        resources = await self.inventory.list_resources(business_id, kind)
        return [
            resource for resource in resources
            if await self._is_free(resource.id, interval)
        ]
