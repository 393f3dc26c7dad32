import logging
from datetime import date, timedelta

from sqlalchemy import and_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.calendar import get_month_dates, is_occupied_on, occupancy_rate
from app.domain.errors import AvailabilityQueryError, InvalidDateRangeError
from app.models import Booking, BookingStatus, Room
from app.utils.validators import validate_stay_dates

logger = logging.getLogger(__name__)

# Statuses shown as occupied on the occupancy calendar
OCCUPANCY_STATUSES = {BookingStatus.CONFIRMED, BookingStatus.CHECKED_IN}


def overlaps_stay(check_in: date, check_out: date):
    """
    Bookings holding at least one night of [check_in, check_out).

    Overlap condition: other.check_in < check_out AND check_in < other.check_out
    """
    return and_(
        Booking.status != BookingStatus.CANCELLED,
        Booking.check_in_date < check_out,
        Booking.check_out_date > check_in,
    )


class AvailabilityService:
    @staticmethod
    async def get_available_rooms(
        db: AsyncSession, property_id: int, check_in: date, check_out: date
    ) -> list[Room]:
        """
        Rooms of a property without an overlapping reservation,
        ordered by room number. An empty list is a valid answer.
        """
        is_valid, error = validate_stay_dates(check_in, check_out)
        if not is_valid:
            raise InvalidDateRangeError(error)

        busy_rooms = select(Booking.room_id).where(
            Booking.property_id == property_id,
            overlaps_stay(check_in, check_out),
        )
        query = (
            select(Room)
            .where(Room.property_id == property_id, Room.id.not_in(busy_rooms))
            .order_by(Room.room_number, Room.id)
        )

        try:
            result = await db.execute(query)
        except SQLAlchemyError as e:
            logger.error(f"Error getting available rooms: {e}", exc_info=True)
            raise AvailabilityQueryError("Failed to check room availability") from e

        rooms = list(result.scalars().all())
        logger.info(
            f"Availability for property {property_id} "
            f"{check_in.isoformat()} - {check_out.isoformat()}: {len(rooms)} room(s)"
        )
        return rooms

    @staticmethod
    async def is_room_available(
        db: AsyncSession,
        room_id: int,
        check_in: date,
        check_out: date,
        exclude_booking_id: int | None = None,
    ) -> bool:
        """True if no reservation overlaps [check_in, check_out) for the room."""
        query = select(Booking).where(
            Booking.room_id == room_id, overlaps_stay(check_in, check_out)
        )
        if exclude_booking_id:
            query = query.where(Booking.id != exclude_booking_id)

        # Only fetch first conflict, no need to load all
        result = await db.execute(query.limit(1))
        return result.scalars().first() is None

    @staticmethod
    async def get_month_occupancy(
        db: AsyncSession, property_id: int, year: int, month: int
    ) -> dict:
        """Per-day and per-room occupancy of a property for one month."""
        days = get_month_dates(year, month)
        month_start, month_end = days[0], days[-1] + timedelta(days=1)

        rooms_result = await db.execute(
            select(Room)
            .where(Room.property_id == property_id)
            .order_by(Room.room_number, Room.id)
        )
        rooms = list(rooms_result.scalars().all())

        bookings_result = await db.execute(
            select(Booking).where(
                Booking.property_id == property_id,
                Booking.status.in_(OCCUPANCY_STATUSES),
                Booking.check_in_date < month_end,
                Booking.check_out_date > month_start,
            )
        )
        by_room: dict[int, list[Booking]] = {}
        for booking in bookings_result.scalars().all():
            by_room.setdefault(booking.room_id, []).append(booking)

        room_rows = []
        occupied_count = {day: 0 for day in days}
        for room in rooms:
            stays = by_room.get(room.id, [])
            occupied = [day for day in days if is_occupied_on(stays, day)]
            for day in occupied:
                occupied_count[day] += 1
            room_rows.append(
                {
                    "room_id": room.id,
                    "room_number": room.room_number,
                    "room_type": room.room_type,
                    "occupied_dates": occupied,
                }
            )

        total = len(rooms)
        day_rows = [
            {
                "date": day,
                "available_rooms": total - occupied_count[day],
                "total_rooms": total,
                "occupancy_rate": occupancy_rate(occupied_count[day], total),
            }
            for day in days
        ]

        return {
            "property_id": property_id,
            "year": year,
            "month": month,
            "days": day_rows,
            "rooms": room_rows,
        }
