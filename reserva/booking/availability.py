"""
Availability index

Keeps, per resource, the ordered list of intervals currently held by PENDING
or CONFIRMED reservations. `reserve` is the single authority deciding whether
an interval may be granted: the check and the insert run under a per-resource
lock, so concurrent callers for one resource are serialized while different
resources never wait on each other.

Each held interval remembers the token it was granted with, which is the id
of the reservation persisted for it. A reservation finished by another
process (the completion sweep runs in a Celery worker) leaves its interval
here until the booking engine finds it blocking and drops it by token.
"""

import asyncio
import bisect
from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Tuple
from uuid import UUID, uuid4

import structlog

from reserva.booking.errors import SlotUnavailable
from reserva.booking.values import Interval

logger = structlog.get_logger()


class AvailabilityIndex:
    """In-memory held-interval sets guarded by per-resource asyncio locks"""

    def __init__(self):
        self._held: Dict[UUID, List[Interval]] = defaultdict(list)
        # Reservation id behind each held interval, keyed per resource
        self._tokens: Dict[UUID, Dict[Interval, UUID]] = defaultdict(dict)
        self._locks: Dict[UUID, asyncio.Lock] = defaultdict(asyncio.Lock)

    def load(self, holds: Iterable[Tuple[UUID, Interval, UUID]]) -> int:
        """Rebuild the index from persisted PENDING/CONFIRMED reservations"""
        self._held.clear()
        self._tokens.clear()
        count = 0
        for resource_id, interval, token in holds:
            bisect.insort(self._held[resource_id], interval)
            self._tokens[resource_id][interval] = token
            count += 1
        logger.info("Availability index loaded", held_intervals=count, resources=len(self._held))
        return count

    def held(self, resource_id: UUID) -> List[Interval]:
        """Snapshot of the intervals currently held on a resource"""
        return list(self._held.get(resource_id, ()))

    def blocking(self, resource_id: UUID, interval: Interval) -> Optional[Tuple[Interval, UUID]]:
        """A held interval overlapping `interval` and its token, if any"""
        found = self._conflict(self._held.get(resource_id, []), interval)
        if found is None:
            return None
        return found, self._tokens[resource_id][found]

    def _conflict(self, held: List[Interval], interval: Interval):
        # Held intervals never overlap each other, so sorted by start they are
        # also sorted by end; only the neighbours of the insertion point matter.
        position = bisect.bisect_left(held, interval)
        if position > 0 and held[position - 1].overlaps(interval):
            return held[position - 1]
        if position < len(held) and held[position].overlaps(interval):
            return held[position]
        return None

    async def is_free(self, resource_id: UUID, interval: Interval) -> bool:
        async with self._locks[resource_id]:
            return self._conflict(self._held.get(resource_id, []), interval) is None

    async def reserve(self, resource_id: UUID, interval: Interval) -> UUID:
        """Hold the interval and return a token, or raise SlotUnavailable"""
        async with self._locks[resource_id]:
            held = self._held[resource_id]
            blocking = self._conflict(held, interval)
            if blocking is not None:
                logger.info(
                    "Slot unavailable",
                    resource_id=str(resource_id),
                    requested=str(interval),
                    blocking=str(blocking),
                )
                raise SlotUnavailable(
                    "Resource is not available for the selected interval",
                    resource_id=str(resource_id),
                )
            token = uuid4()
            bisect.insort(held, interval)
            self._tokens[resource_id][interval] = token

        return token

    async def release(self, resource_id: UUID, interval: Interval, token: Optional[UUID] = None) -> bool:
        """
        Drop a held interval; releasing an interval not held is a no-op.

        With `token`, the interval is dropped only while that token still owns
        it, so a stale release never frees a newer hold of the same interval.
        """
        async with self._locks[resource_id]:
            held = self._held.get(resource_id)
            if not held:
                return False
            position = bisect.bisect_left(held, interval)
            if position < len(held) and held[position] == interval:
                tokens = self._tokens[resource_id]
                if token is not None and tokens.get(interval) != token:
                    return False
                del held[position]
                tokens.pop(interval, None)
                logger.info("Interval released", resource_id=str(resource_id), interval=str(interval))
                return True
        return False
