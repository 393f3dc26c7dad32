from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.schemas.property import OccupancyOut, PropertyOut
from app.schemas.room import RoomOut
from app.services.availability_service import AvailabilityService
from app.services.property_service import PropertyService

router = APIRouter(prefix="/api/properties", tags=["properties"])


async def _get_property_or_404(db: AsyncSession, property_id: int):
    prop = await PropertyService.get_property_by_id(db, property_id)
    if not prop:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Property not found")
    return prop


@router.get("", response_model=list[PropertyOut])
async def list_properties(db: AsyncSession = Depends(get_db)):
    return await PropertyService.get_all_properties(db)


@router.get("/{property_id}/rooms", response_model=list[RoomOut])
async def list_rooms(property_id: int, db: AsyncSession = Depends(get_db)):
    await _get_property_or_404(db, property_id)
    return await PropertyService.get_rooms(db, property_id)


@router.get("/{property_id}/occupancy", response_model=OccupancyOut)
async def month_occupancy(
    property_id: int,
    year: int | None = Query(None, ge=1900, le=9999),
    month: int | None = Query(None, ge=1, le=12),
    db: AsyncSession = Depends(get_db),
):
    """Room-by-room occupancy for a month (current month by default)."""
    await _get_property_or_404(db, property_id)
    today = date.today()
    return await AvailabilityService.get_month_occupancy(
        db, property_id, year or today.year, month or today.month
    )
