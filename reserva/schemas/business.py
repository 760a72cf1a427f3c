"""Business inventory schemas"""

from datetime import datetime
from typing import Optional, List
from uuid import UUID
from pydantic import BaseModel

from reserva.models.business import ResourceKind


class ResourceResponse(BaseModel):
    """Bookable resource"""
    id: UUID
    business_id: UUID
    kind: ResourceKind
    number: str
    capacity: int
    description: Optional[str]

    class Config:
        from_attributes = True


class AvailabilityResponse(BaseModel):
    """Free resources of a business for an interval"""
    business_id: UUID
    start_date: datetime
    end_date: datetime
    available: bool
    resources: List[ResourceResponse] = []
