"""Background job tasks"""

from datetime import datetime
import asyncio
from typing import Dict, Optional

import structlog

from reserva.booking.errors import BookingError
from reserva.jobs.celery_app import celery_app

logger = structlog.get_logger()


def run_async(coro):
    """Helper to run async functions in sync context"""
    return asyncio.run(coro)


async def sweep_elapsed_reservations(core, now: Optional[datetime] = None) -> Dict[str, int]:
    """Complete every confirmed reservation whose interval has elapsed"""
    now = now or datetime.utcnow()
    due = await core.store.list_due_for_completion(now)

    completed = failed = 0
    for reservation in due:
        try:
            await core.lifecycle.complete(reservation.id)
            completed += 1
        except BookingError as e:
            # A racing cancel or complete already moved it; keep sweeping
            failed += 1
            logger.warning(
                "Failed to complete reservation",
                reservation_id=str(reservation.id),
                error=e.code,
                detail=e.message,
            )

    logger.info("Completion sweep finished", due=len(due), completed=completed, failed=failed)
    return {"due": len(due), "completed": completed, "failed": failed}


@celery_app.task(name="complete_elapsed_reservations")
def complete_elapsed_reservations():
    """Move elapsed CONFIRMED reservations to COMPLETED"""
    logger.info("Completing elapsed reservations")

    async def _sweep():
        from reserva.booking.core import build_core
        from reserva.config import settings
        from reserva.database import SessionLocal, engine

        try:
            core = await build_core(
                SessionLocal,
                supported_currencies=settings.supported_currencies_list,
                allow_past_bookings=settings.allow_past_bookings,
            )
            return await sweep_elapsed_reservations(core)
        finally:
            await engine.dispose()

    return run_async(_sweep())
