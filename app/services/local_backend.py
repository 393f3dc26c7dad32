from datetime import date
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.database import AsyncSessionLocal
from app.domain.selection import RoomOption
from app.models import Enquiry, Room
from app.schemas.enquiry import EnquiryCreate
from app.services.availability_service import AvailabilityService
from app.services.enquiry_service import EnquiryService


def room_option(room: Room) -> RoomOption:
    return RoomOption(
        id=room.id,
        room_number=room.room_number,
        room_type=room.room_type,
        price_per_night=Decimal(room.price_per_night),
    )


class LocalBackend:
    """Availability and enquiry contracts served straight from the database."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession] = AsyncSessionLocal):
        self.session_factory = session_factory

    async def available_rooms(
        self, property_id: int, check_in: date, check_out: date
    ) -> list[RoomOption]:
        async with self.session_factory() as session:
            rooms = await AvailabilityService.get_available_rooms(
                session, property_id, check_in, check_out
            )
            return [room_option(room) for room in rooms]

    async def submit_enquiry(self, payload: EnquiryCreate) -> Enquiry:
        async with self.session_factory() as session:
            return await EnquiryService.create_enquiry(session, payload)
