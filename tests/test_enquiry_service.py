"""
Enquiry persistence and status workflow
"""
from datetime import date
from decimal import Decimal

import pytest

from app.domain.errors import EnquiryCreationError, InvalidStatusTransitionError
from app.models import EnquiryStatus
from app.schemas.enquiry import EnquiryCreate
from app.services.enquiry_service import EnquiryService


def make_enquiry(**overrides) -> EnquiryCreate:
    data = {
        "property_id": 1,
        "room_id": 6,
        "guest_name": "Test Guest",
        "guest_phone": "9876543210",
        "check_in_date": date(2024, 5, 12),
        "check_out_date": date(2024, 5, 14),
        "number_of_guests": 2,
        "price_quoted": Decimal("5000"),
    }
    data.update(overrides)
    return EnquiryCreate(**data)


class TestCreateEnquiry:
    async def test_creates_new_enquiry(self, db, hotel):
        enquiry = await EnquiryService.create_enquiry(db, make_enquiry())

        assert enquiry.id is not None
        assert enquiry.status is EnquiryStatus.NEW
        assert enquiry.room_id == 6
        assert enquiry.check_in_date == date(2024, 5, 12)
        assert enquiry.price_quoted == Decimal("5000")
        assert enquiry.guest_email is None

    async def test_room_of_another_property_is_rejected(self, db, hotel):
        with pytest.raises(EnquiryCreationError):
            await EnquiryService.create_enquiry(db, make_enquiry(room_id=8))

    async def test_unknown_room_is_rejected(self, db, hotel):
        with pytest.raises(EnquiryCreationError):
            await EnquiryService.create_enquiry(db, make_enquiry(room_id=404))

    async def test_reserved_room_is_rejected(self, db, hotel):
        with pytest.raises(EnquiryCreationError):
            await EnquiryService.create_enquiry(db, make_enquiry(room_id=5))
        assert await EnquiryService.list_enquiries(db) == []

    async def test_enquiries_do_not_block_each_other(self, db, hotel):
        await EnquiryService.create_enquiry(db, make_enquiry())
        second = await EnquiryService.create_enquiry(db, make_enquiry(guest_name="Other Guest"))
        assert second.id is not None


class TestStatusWorkflow:
    def test_can_transition_valid_paths(self):
        assert EnquiryService.can_transition(EnquiryStatus.NEW, EnquiryStatus.MESSAGED)
        assert EnquiryService.can_transition(EnquiryStatus.MESSAGED, EnquiryStatus.PAYMENT_PENDING)
        assert EnquiryService.can_transition(EnquiryStatus.PAYMENT_PENDING, EnquiryStatus.PAID)
        assert EnquiryService.can_transition(EnquiryStatus.PAID, EnquiryStatus.CONFIRMED)
        assert EnquiryService.can_transition(EnquiryStatus.NEW, EnquiryStatus.CANCELLED)

    def test_can_transition_reject_invalid_paths(self):
        assert not EnquiryService.can_transition(EnquiryStatus.NEW, EnquiryStatus.PAID)
        assert not EnquiryService.can_transition(EnquiryStatus.CONFIRMED, EnquiryStatus.NEW)
        assert not EnquiryService.can_transition(EnquiryStatus.CANCELLED, EnquiryStatus.MESSAGED)

    async def test_update_status(self, db, hotel):
        enquiry = await EnquiryService.create_enquiry(db, make_enquiry())
        updated = await EnquiryService.update_status(db, enquiry.id, EnquiryStatus.MESSAGED)
        assert updated.status is EnquiryStatus.MESSAGED

    async def test_update_status_rejects_skipping_steps(self, db, hotel):
        enquiry = await EnquiryService.create_enquiry(db, make_enquiry())
        with pytest.raises(InvalidStatusTransitionError):
            await EnquiryService.update_status(db, enquiry.id, EnquiryStatus.CONFIRMED)

    async def test_update_missing_enquiry(self, db, hotel):
        assert await EnquiryService.update_status(db, 404, EnquiryStatus.MESSAGED) is None


class TestListing:
    async def test_filters_and_summary(self, db, hotel):
        first = await EnquiryService.create_enquiry(db, make_enquiry())
        await EnquiryService.create_enquiry(db, make_enquiry(guest_name="Second Guest"))
        await EnquiryService.create_enquiry(
            db,
            make_enquiry(property_id=2, room_id=8, guest_name="Cottage Guest"),
        )
        await EnquiryService.update_status(db, first.id, EnquiryStatus.MESSAGED)

        assert len(await EnquiryService.list_enquiries(db)) == 3
        assert len(await EnquiryService.list_enquiries(db, property_id=1)) == 2
        messaged = await EnquiryService.list_enquiries(db, status=EnquiryStatus.MESSAGED)
        assert [e.id for e in messaged] == [first.id]

        summary = await EnquiryService.status_summary(db, property_id=1)
        assert summary[EnquiryStatus.NEW] == 1
        assert summary[EnquiryStatus.MESSAGED] == 1
        assert summary[EnquiryStatus.PAID] == 0
        assert sum(summary.values()) == 2
