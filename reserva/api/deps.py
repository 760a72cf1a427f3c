"""Shared FastAPI dependencies"""

from fastapi import Request

from reserva.booking.core import BookingCore


def get_core(request: Request) -> BookingCore:
    """Booking core built during application startup"""
    return request.app.state.core
