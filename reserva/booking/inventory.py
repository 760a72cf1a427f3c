"""Read-only lookups of businesses and their bookable resources"""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from reserva.booking.errors import NotFound
from reserva.models.business import Business, Resource, ResourceKind


class InventoryRegistry:
    """Resolves resource identities; creation and edits happen elsewhere"""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def get_business(self, business_id: UUID) -> Business:
        async with self._session_factory() as db:
            result = await db.execute(
                select(Business).where(
                    Business.id == business_id,
                    Business.is_active == True,
                )
            )
            business = result.scalar_one_or_none()

        if not business:
            raise NotFound("Business not found", business_id=str(business_id))
        return business

    async def get_resource(self, business_id: UUID, resource_id: UUID) -> Resource:
        """Return an active resource owned by the business, or raise NotFound"""
        async with self._session_factory() as db:
            result = await db.execute(
                select(Resource).where(
                    Resource.id == resource_id,
                    Resource.business_id == business_id,
                    Resource.is_active == True,
                )
            )
            resource = result.scalar_one_or_none()

        if not resource:
            raise NotFound(
                "Resource not found",
                business_id=str(business_id),
                resource_id=str(resource_id),
            )
        return resource

    async def list_resources(
        self,
        business_id: UUID,
        kind: Optional[ResourceKind] = None,
    ) -> List[Resource]:
        await self.get_business(business_id)

        query = select(Resource).where(
            Resource.business_id == business_id,
            Resource.is_active == True,
        )
        if kind:
            query = query.where(Resource.kind == kind)

        async with self._session_factory() as db:
            result = await db.execute(query.order_by(Resource.number))
            return list(result.scalars().all())
