"""Assembly of the booking components"""

from datetime import datetime
from typing import Callable, Iterable, Optional

import structlog
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from reserva.booking.availability import AvailabilityIndex
from reserva.booking.engine import BookingEngine
from reserva.booking.inventory import InventoryRegistry
from reserva.booking.lifecycle import LifecycleManager
from reserva.booking.store import ReservationStore

logger = structlog.get_logger()


class BookingCore:
    """Registry, index, store, engine and lifecycle sharing one index"""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        supported_currencies: Optional[Iterable[str]] = None,
        allow_past_bookings: bool = False,
        clock: Callable[[], datetime] = datetime.utcnow,
    ):
        self.inventory = InventoryRegistry(session_factory)
        self.availability = AvailabilityIndex()
        self.store = ReservationStore(session_factory, supported_currencies)
        self.engine = BookingEngine(
            self.inventory,
            self.availability,
            self.store,
            allow_past_bookings=allow_past_bookings,
            clock=clock,
        )
        self.lifecycle = LifecycleManager(self.store, self.availability, clock=clock)

    async def start(self) -> "BookingCore":
        """Load held intervals from the store into the availability index"""
        holds = await self.store.list_held()
        self.availability.load(holds)
        return self


async def build_core(
    session_factory: async_sessionmaker[AsyncSession],
    **options,
) -> BookingCore:
    core = BookingCore(session_factory, **options)
    return await core.start()
