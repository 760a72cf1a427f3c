"""
Reservation lifecycle

    PENDING   --confirm-->  CONFIRMED
    PENDING   --cancel-->   CANCELLED
    CONFIRMED --cancel-->   CANCELLED   (releases the interval)
    CONFIRMED --complete--> COMPLETED   (interval elapsed)

CANCELLED and COMPLETED are terminal. Every transition is a compare-and-swap
on the stored status; a lost swap is re-read once and either accepted (the
racer already produced the desired state), retried once from the new state,
or reported as an invalid transition.
"""

from datetime import datetime
from typing import Callable, Dict, FrozenSet, Tuple
from uuid import UUID

import structlog

from reserva.booking.availability import AvailabilityIndex
from reserva.booking.errors import Conflict, InvalidTransition
from reserva.booking.store import ReservationStore
from reserva.booking.values import Interval
from reserva.models.reservation import Reservation, ReservationStatus

logger = structlog.get_logger()


TRANSITIONS: Dict[ReservationStatus, FrozenSet[ReservationStatus]] = {
    ReservationStatus.PENDING: frozenset({ReservationStatus.CONFIRMED, ReservationStatus.CANCELLED}),
    ReservationStatus.CONFIRMED: frozenset({ReservationStatus.CANCELLED, ReservationStatus.COMPLETED}),
    ReservationStatus.CANCELLED: frozenset(),
    ReservationStatus.COMPLETED: frozenset(),
}


def can_transition(current: ReservationStatus, target: ReservationStatus) -> bool:
    return target in TRANSITIONS.get(current, frozenset())


class LifecycleManager:
    """Applies status transitions to stored reservations"""

    def __init__(
        self,
        store: ReservationStore,
        availability: AvailabilityIndex,
        clock: Callable[[], datetime] = datetime.utcnow,
    ):
        self.store = store
        self.availability = availability
        self._clock = clock

    async def confirm(self, reservation_id: UUID) -> Reservation:
        reservation = await self.store.get(reservation_id)
        if reservation.status == ReservationStatus.CONFIRMED:
            return reservation
        reservation, _ = await self._transition(reservation, ReservationStatus.CONFIRMED)
        return reservation

    async def cancel(self, reservation_id: UUID) -> Reservation:
        reservation = await self.store.get(reservation_id)
        reservation, applied = await self._transition(reservation, ReservationStatus.CANCELLED)
        if applied:
            await self._release(reservation)
        return reservation

    async def complete(self, reservation_id: UUID) -> Reservation:
        """Close a confirmed reservation once its interval has elapsed"""
        reservation = await self.store.get(reservation_id)
        if reservation.status == ReservationStatus.CONFIRMED and reservation.end_date > self._clock():
            raise InvalidTransition(
                "Reservation has not ended yet",
                reservation_id=str(reservation_id),
                end_date=reservation.end_date.isoformat(),
            )
        reservation, applied = await self._transition(reservation, ReservationStatus.COMPLETED)
        if applied:
            await self._release(reservation)
        return reservation

    async def _transition(
        self,
        reservation: Reservation,
        target: ReservationStatus,
    ) -> Tuple[Reservation, bool]:
        """CAS to `target`; the flag is False when a racer already applied it"""
        self._check_allowed(reservation, target)
        try:
            updated = await self.store.update_status(reservation.id, reservation.status, target)
        except Conflict:
            current = await self.store.get(reservation.id)
            if current.status == target:
                # The racer owns follow-ups such as releasing the interval
                logger.info(
                    "Transition already applied by a concurrent request",
                    reservation_id=str(reservation.id),
                    status=target.value,
                )
                return current, False
            self._check_allowed(current, target)
            try:
                updated = await self.store.update_status(current.id, current.status, target)
            except Conflict:
                raise InvalidTransition(
                    f"Cannot move reservation to {target.value}: status keeps changing",
                    reservation_id=str(reservation.id),
                )

        logger.info(
            "Reservation status changed",
            reservation_id=str(reservation.id),
            status=target.value,
        )
        return updated, True

    def _check_allowed(self, reservation: Reservation, target: ReservationStatus) -> None:
        if not can_transition(reservation.status, target):
            raise InvalidTransition(
                f"Cannot move a {reservation.status.value} reservation to {target.value}",
                reservation_id=str(reservation.id),
                status=reservation.status.value,
                target=target.value,
            )

    async def _release(self, reservation: Reservation) -> None:
        await self.availability.release(
            reservation.resource_id,
            Interval(reservation.start_date, reservation.end_date),
            token=reservation.id,
        )
