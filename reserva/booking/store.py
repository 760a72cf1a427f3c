"""
Reservation store

Durable mapping from reservation id to reservation record. Status changes go
through `update_status`, a compare-and-swap executed as a single conditional
UPDATE, so two racing transitions on one record can never both apply.
"""

from datetime import datetime
from typing import Iterable, List, Optional, Tuple
from uuid import UUID, uuid4

import structlog
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from reserva.booking.errors import Conflict, InvalidReservation, NotFound
from reserva.booking.values import Interval, Money
from reserva.models.reservation import (
    HELD_STATUSES,
    Reservation,
    ReservationKind,
    ReservationStatus,
)

logger = structlog.get_logger()


class ReservationStore:
    """SQLAlchemy-backed reservation records; one short session per operation"""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        supported_currencies: Optional[Iterable[str]] = None,
    ):
        self._session_factory = session_factory
        self._supported_currencies = (
            list(supported_currencies) if supported_currencies is not None else None
        )

    def _validate(self, record: Reservation) -> None:
        if record.status not in (None, ReservationStatus.PENDING):
            raise InvalidReservation("New reservations start as PENDING", status=str(record.status))
        if record.start_date is None or record.end_date is None:
            raise InvalidReservation("Reservation interval is required")
        if not record.start_date < record.end_date:
            raise InvalidReservation(
                "Start must be before end",
                start=record.start_date.isoformat(),
                end=record.end_date.isoformat(),
            )
        if record.guest_count is None or record.guest_count < 1:
            raise InvalidReservation("At least one guest is required", guest_count=record.guest_count)
        if record.user_id is None or record.business_id is None or record.resource_id is None:
            raise InvalidReservation("Reservation must reference a user, business and resource")
        Money(record.total_amount_cents or 0, record.currency or "").validate(self._supported_currencies)

    async def create(self, record: Reservation) -> UUID:
        """Persist a new PENDING reservation and return its id"""
        self._validate(record)

        now = datetime.utcnow()
        if record.id is None:
            record.id = uuid4()
        record.status = ReservationStatus.PENDING
        record.created_at = now
        record.updated_at = now

        async with self._session_factory() as db:
            db.add(record)
            await db.commit()

        return record.id

    async def get(self, reservation_id: UUID) -> Reservation:
        async with self._session_factory() as db:
            result = await db.execute(
                select(Reservation).where(Reservation.id == reservation_id)
            )
            reservation = result.scalar_one_or_none()

        if not reservation:
            raise NotFound("Reservation not found", reservation_id=str(reservation_id))
        return reservation

    async def update_status(
        self,
        reservation_id: UUID,
        expected: ReservationStatus,
        next_status: ReservationStatus,
    ) -> Reservation:
        """Set status to `next_status` only if it is currently `expected`"""
        async with self._session_factory() as db:
            result = await db.execute(
                update(Reservation)
                .where(
                    Reservation.id == reservation_id,
                    Reservation.status == expected,
                )
                .values(status=next_status, updated_at=datetime.utcnow())
                .returning(Reservation)
                .execution_options(synchronize_session=False)
            )
            swapped = result.scalar_one_or_none()
            await db.commit()

        # The row as this swap left it, not as a later transition may have
        if swapped is not None:
            return swapped

        current = await self.get(reservation_id)
        logger.info(
            "Status compare-and-swap lost",
            reservation_id=str(reservation_id),
            expected=expected.value,
            actual=current.status.value,
        )
        raise Conflict(
            "Reservation status changed concurrently",
            reservation_id=str(reservation_id),
            expected=expected.value,
            actual=current.status.value,
        )

    async def list_by_user(
        self,
        user_id: UUID,
        status: Optional[ReservationStatus] = None,
        kind: Optional[ReservationKind] = None,
    ) -> List[Reservation]:
        query = select(Reservation).where(Reservation.user_id == user_id)
        if status:
            query = query.where(Reservation.status == status)
        if kind:
            query = query.where(Reservation.kind == kind)
        return await self._all(query.order_by(Reservation.start_date.desc()))

    async def list_by_business(
        self,
        business_id: UUID,
        status: Optional[ReservationStatus] = None,
    ) -> List[Reservation]:
        query = select(Reservation).where(Reservation.business_id == business_id)
        if status:
            query = query.where(Reservation.status == status)
        return await self._all(query.order_by(Reservation.start_date.desc()))

    async def list_held(self) -> List[Tuple[UUID, Interval, UUID]]:
        """(resource_id, interval, reservation_id) of every PENDING or CONFIRMED reservation"""
        reservations = await self._all(
            select(Reservation).where(Reservation.status.in_(HELD_STATUSES))
        )
        return [
            (r.resource_id, Interval(r.start_date, r.end_date), r.id)
            for r in reservations
        ]

    async def list_due_for_completion(self, now: datetime) -> List[Reservation]:
        """Confirmed reservations whose interval has fully elapsed"""
        return await self._all(
            select(Reservation)
            .where(
                Reservation.status == ReservationStatus.CONFIRMED,
                Reservation.end_date <= now,
            )
            .order_by(Reservation.end_date)
        )

    async def _all(self, query) -> List[Reservation]:
        async with self._session_factory() as db:
            result = await db.execute(query)
            return list(result.scalars().all())
