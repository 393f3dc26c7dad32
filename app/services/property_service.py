from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import Property, Room


class PropertyService:
    @staticmethod
    async def get_all_properties(db: AsyncSession) -> List[Property]:
        result = await db.execute(select(Property).order_by(Property.id))
        return list(result.scalars().all())

    @staticmethod
    async def get_property_by_id(db: AsyncSession, property_id: int) -> Optional[Property]:
        result = await db.execute(select(Property).where(Property.id == property_id))
        return result.scalar_one_or_none()

    @staticmethod
    async def get_rooms(db: AsyncSession, property_id: int) -> List[Room]:
        result = await db.execute(
            select(Room)
            .where(Room.property_id == property_id)
            .order_by(Room.room_number, Room.id)
        )
        return list(result.scalars().all())
