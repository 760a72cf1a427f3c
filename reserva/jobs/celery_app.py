"""Celery application for the reservation completion sweep"""

from celery import Celery
from reserva.config import settings

celery_app = Celery(
    "reserva",
    broker=settings.redis_url,
    backend=settings.redis_url,
    include=["reserva.jobs.tasks"],
)

celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    # A sweep must finish before the next one is due
    task_time_limit=int(settings.completion_sweep_seconds),
    worker_prefetch_multiplier=1,
    task_acks_late=True,

    beat_schedule={
        "complete-elapsed-reservations": {
            "task": "complete_elapsed_reservations",
            "schedule": settings.completion_sweep_seconds,
            # Drop sweeps queued while no worker was running
            "options": {"expires": settings.completion_sweep_seconds},
        },
    },
)
