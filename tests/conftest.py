"""
Pytest configuration for enquiry desk tests
"""
import sys
from datetime import date
from decimal import Decimal
from pathlib import Path

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# Ensure app is importable
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.database import Base  # noqa: E402
from app.models import Booking, BookingStatus, Property, Room  # noqa: E402


@pytest.fixture
async def session_factory():
    """Fresh in-memory database per test"""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    await engine.dispose()


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def hotel(db):
    """
    Property 1 with rooms 5 (101), 6 (102), 7 (201) and a second property
    with room 8. Room 5 is reserved for [2024-05-10, 2024-05-15).
    """
    main = Property(id=1, name="Hillside Homestay", location="Munnar")
    other = Property(id=2, name="Lakeview Cottages", location="Nainital")
    db.add_all([main, other])
    db.add_all(
        [
            Room(id=5, property_id=1, room_number="101", room_type="deluxe", price_per_night=Decimal("2500")),
            Room(id=6, property_id=1, room_number="102", room_type="deluxe", price_per_night=Decimal("2500")),
            Room(id=7, property_id=1, room_number="201", room_type="suite", price_per_night=Decimal("4200")),
            Room(id=8, property_id=2, room_number="C1", room_type="cottage", price_per_night=Decimal("3200")),
        ]
    )
    db.add(
        Booking(
            property_id=1,
            room_id=5,
            guest_name="Asha Menon",
            guest_phone="+91 98470 12345",
            check_in_date=date(2024, 5, 10),
            check_out_date=date(2024, 5, 15),
            number_of_guests=2,
            status=BookingStatus.CONFIRMED,
        )
    )
    await db.commit()
    return main


@pytest.fixture
def sample_guest_data():
    """Guest form as typed in by staff"""
    return {
        "guest_name": "Test Guest",
        "guest_phone": "+91 98765 43210",
        "guest_email": "guest@example.com",
        "number_of_guests": 2,
        "price_quoted": "7500",
        "advance_amount": "2000",
        "special_requests": "Late check-in",
    }


@pytest.fixture
def sample_enquiry_payload():
    """Enquiry creation body as sent by the calendar page"""
    return {
        "propertyId": 1,
        "guestName": "Test Guest",
        "guestPhone": "9876543210",
        "guestEmail": "",
        "checkInDate": "2024-05-15T00:00:00.000Z",
        "checkOutDate": "2024-05-18T00:00:00.000Z",
        "roomId": 5,
        "numberOfGuests": 2,
        "priceQuoted": "7500",
        "advanceAmount": None,
        "specialRequests": None,
        "status": "new",
    }
