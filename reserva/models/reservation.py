"""Reservation model"""

import enum
import uuid
from datetime import datetime
from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, Text, Enum, Index, CheckConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from reserva.database import Base


class ReservationStatus(str, enum.Enum):
    """Reservation lifecycle states"""
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"
    COMPLETED = "COMPLETED"


class ReservationKind(str, enum.Enum):
    """Hotel stay or restaurant booking"""
    HOTEL = "HOTEL"
    RESTAURANT = "RESTAURANT"


# Statuses whose interval blocks new bookings on the same resource
HELD_STATUSES = (ReservationStatus.PENDING, ReservationStatus.CONFIRMED)


class Reservation(Base):
    """Room and table reservations"""
    __tablename__ = "reservations"
    __table_args__ = (
        Index("ix_reservations_resource_status", "resource_id", "status"),
        CheckConstraint("start_date < end_date", name="ck_reservations_interval"),
        CheckConstraint("guest_count >= 1", name="ck_reservations_guest_count"),
        CheckConstraint("total_amount_cents >= 0", name="ck_reservations_amount"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(UUID(as_uuid=True), nullable=False, index=True)
    business_id = Column(UUID(as_uuid=True), ForeignKey("businesses.id"), nullable=False, index=True)
    resource_id = Column(UUID(as_uuid=True), ForeignKey("resources.id"), nullable=False)
    kind = Column(Enum(ReservationKind), nullable=False)

    # Half-open interval [start_date, end_date), naive UTC
    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=False)

    guest_count = Column(Integer, nullable=False)

    # Status
    status = Column(Enum(ReservationStatus), nullable=False, default=ReservationStatus.PENDING)

    # Stored total, minor currency units
    total_amount_cents = Column(Integer, nullable=False, default=0)
    currency = Column(String(3), nullable=False, default="USD")

    special_request = Column(Text)

    # Metadata
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    business = relationship("Business", back_populates="reservations")
    resource = relationship("Resource", back_populates="reservations")
