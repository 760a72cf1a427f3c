"""Reserva: room and table reservation booking service"""

__version__ = "1.0.0"
