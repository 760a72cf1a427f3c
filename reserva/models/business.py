"""Business and bookable resource models"""

import enum
import uuid
from datetime import datetime
from sqlalchemy import Column, String, Integer, Boolean, DateTime, ForeignKey, Text, Enum, CheckConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from reserva.database import Base


class BusinessKind(str, enum.Enum):
    """Kind of business owning the inventory"""
    HOTEL = "HOTEL"
    RESTAURANT = "RESTAURANT"


class ResourceKind(str, enum.Enum):
    """Kind of bookable unit"""
    ROOM = "ROOM"
    TABLE = "TABLE"


class Business(Base):
    """Hotel or restaurant owning bookable resources"""
    __tablename__ = "businesses"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    kind = Column(Enum(BusinessKind), nullable=False)
    owner_id = Column(UUID(as_uuid=True), nullable=False, index=True)  # user managing the business
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    resources = relationship("Resource", back_populates="business")
    reservations = relationship("Reservation", back_populates="business")


class Resource(Base):
    """A hotel room or restaurant table"""
    __tablename__ = "resources"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    business_id = Column(UUID(as_uuid=True), ForeignKey("businesses.id"), nullable=False)
    kind = Column(Enum(ResourceKind), nullable=False)

    number = Column(String(20), nullable=False)  # "101", "T4"
    capacity = Column(Integer, nullable=False)  # max guests
    description = Column(Text)
    is_active = Column(Boolean, default=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    business = relationship("Business", back_populates="resources")
    reservations = relationship("Reservation", back_populates="resource")

    __table_args__ = (
        CheckConstraint("capacity >= 1", name="ck_resources_capacity_positive"),
    )
