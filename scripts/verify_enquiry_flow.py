"""Walks the enquiry calendar end to end against a throwaway in-memory database"""
import asyncio
import sys
from datetime import date, timedelta
from pathlib import Path

# Add the project root to the path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.database import Base
from app.domain.errors import MissingSelectionError
from app.services.enquiry_session import EnquirySession
from app.services.local_backend import LocalBackend
from app.services.seed_service import seed_demo_data


async def main():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    today = date.today()
    async with factory() as db:
        await seed_demo_data(db, today=today)

    session = EnquirySession(LocalBackend(factory), today=lambda: today)
    session.change_property(1)

    print(f"Click yesterday: {(await session.click_day(today - timedelta(days=1))).outcome.value}")
    print(f"Click check-in:  {(await session.click_day(today + timedelta(days=2))).outcome.value}")
    report = await session.click_day(today + timedelta(days=4))
    print(f"Click check-out: {report.outcome.value} / {report.availability.value}")
    for room in session.state.rooms:
        print(f"  Room {room.room_number} ({room.room_type}) {room.price_per_night}/night")

    try:
        await session.submit({"guest_name": "Test Guest", "guest_phone": "9876543210"})
    except MissingSelectionError as e:
        print(f"  [OK] refused: {e}")

    if not session.state.rooms:
        print("  [X] no rooms to pick")
    else:
        session.select_room(session.state.rooms[0].id)
        created = await session.submit(
            {"guest_name": "Test Guest", "guest_phone": "9876543210", "number_of_guests": 2}
        )
        print(f"  [OK] enquiry #{created.id}, state now {session.step.value}")

    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
