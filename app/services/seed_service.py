"""
Demo data for a fresh database (idempotent: does nothing once properties exist).
"""
import logging
from datetime import date, timedelta
from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import Booking, BookingStatus, Property, Room

logger = logging.getLogger(__name__)

DEMO_PROPERTIES = [
    {
        "name": "Hillside Homestay",
        "location": "Munnar",
        "rooms": [
            ("101", "deluxe", Decimal("2500")),
            ("102", "deluxe", Decimal("2500")),
            ("201", "suite", Decimal("4200")),
        ],
    },
    {
        "name": "Lakeview Cottages",
        "location": "Nainital",
        "rooms": [
            ("C1", "cottage", Decimal("3200")),
            ("C2", "cottage", Decimal("3200")),
        ],
    },
]


async def seed_demo_data(db: AsyncSession, today: date | None = None) -> bool:
    """Returns True if demo data was written."""
    existing = await db.scalar(select(func.count(Property.id)))
    if existing:
        return False

    today = today or date.today()
    first_rooms = []
    for spec in DEMO_PROPERTIES:
        prop = Property(name=spec["name"], location=spec["location"])
        prop.rooms = [
            Room(room_number=number, room_type=kind, price_per_night=price)
            for number, kind, price in spec["rooms"]
        ]
        db.add(prop)
        first_rooms.append(prop.rooms[0])
    await db.flush()

    # A few reservations so that availability is not trivially "everything"
    demo_bookings = [
        ("Asha Menon", "+91 98470 12345", 0, 1, 3, BookingStatus.CONFIRMED),
        ("Rahul Verma", "+91 99100 55555", 0, 5, 8, BookingStatus.PENDING),
        ("Neha Joshi", "+91 98111 22233", 1, 2, 4, BookingStatus.CHECKED_IN),
    ]
    for guest, phone, prop_index, start, end, status in demo_bookings:
        room = first_rooms[prop_index]
        db.add(
            Booking(
                property_id=room.property_id,
                room_id=room.id,
                guest_name=guest,
                guest_phone=phone,
                check_in_date=today + timedelta(days=start),
                check_out_date=today + timedelta(days=end),
                number_of_guests=2,
                total_price=room.price_per_night * (end - start),
                status=status,
            )
        )

    await db.commit()
    logger.info(f"Seeded {len(DEMO_PROPERTIES)} demo properties")
    return True
