from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.domain.errors import AvailabilityQueryError, InvalidDateRangeError
from app.schemas.room import AvailableRoomOut
from app.services.availability_service import AvailabilityService
from app.utils.validators import parse_day

router = APIRouter(prefix="/api/rooms", tags=["rooms"])


@router.get("/availability", response_model=list[AvailableRoomOut])
async def room_availability(
    property_id: int = Query(..., alias="propertyId"),
    check_in: str = Query(..., alias="checkIn"),
    check_out: str = Query(..., alias="checkOut"),
    db: AsyncSession = Depends(get_db),
):
    """
    Rooms of a property free for the whole stay [checkIn, checkOut).
    An empty list means nothing is available.
    """
    try:
        check_in_day = parse_day(check_in)
        check_out_day = parse_day(check_out)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="checkIn and checkOut must be ISO-8601 dates or timestamps",
        )

    try:
        return await AvailabilityService.get_available_rooms(
            db, property_id, check_in_day, check_out_day
        )
    except InvalidDateRangeError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    except AvailabilityQueryError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
