import logging
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.errors import EnquiryCreationError, InvalidStatusTransitionError
from app.models import Enquiry, EnquiryStatus, Room
from app.schemas.enquiry import EnquiryCreate
from app.services.availability_service import AvailabilityService

logger = logging.getLogger(__name__)


class EnquiryService:
    """Enquiry records and their follow-up workflow."""

    ALLOWED_TRANSITIONS = {
        EnquiryStatus.NEW: {
            EnquiryStatus.MESSAGED,
            EnquiryStatus.CANCELLED,
        },
        EnquiryStatus.MESSAGED: {
            EnquiryStatus.PAYMENT_PENDING,
            EnquiryStatus.CANCELLED,
        },
        EnquiryStatus.PAYMENT_PENDING: {
            EnquiryStatus.PAID,
            EnquiryStatus.CANCELLED,
        },
        EnquiryStatus.PAID: {
            EnquiryStatus.CONFIRMED,
            EnquiryStatus.CANCELLED,
        },
    }

    @staticmethod
    def can_transition(current: EnquiryStatus, new: EnquiryStatus) -> bool:
        return new in EnquiryService.ALLOWED_TRANSITIONS.get(current, set())

    @staticmethod
    async def create_enquiry(db: AsyncSession, data: EnquiryCreate) -> Enquiry:
        """
        Persist an enquiry for a room of the property.

        The room must belong to the property and still be free for the stay;
        otherwise EnquiryCreationError is raised and nothing is written.
        """
        room = await db.get(Room, data.room_id)
        if room is None or room.property_id != data.property_id:
            raise EnquiryCreationError(
                f"Room {data.room_id} does not belong to property {data.property_id}"
            )

        is_available = await AvailabilityService.is_room_available(
            db, data.room_id, data.check_in_date, data.check_out_date
        )
        if not is_available:
            logger.warning(
                f"Cannot create enquiry: room {data.room_id} is taken for "
                f"{data.check_in_date} - {data.check_out_date}"
            )
            raise EnquiryCreationError("Room is no longer available for the selected dates")

        now = datetime.now(timezone.utc)
        enquiry = Enquiry(**data.model_dump(), created_at=now, updated_at=now)
        db.add(enquiry)
        try:
            await db.commit()
        except IntegrityError as e:
            await db.rollback()
            logger.error(f"Error creating enquiry: {e}", exc_info=True)
            raise EnquiryCreationError("Enquiry violates a data constraint") from e

        await db.refresh(enquiry)
        logger.info(
            f"Enquiry #{enquiry.id} created: {enquiry.guest_name}, room {enquiry.room_id} "
            f"({enquiry.check_in_date} - {enquiry.check_out_date})"
        )
        return enquiry

    @staticmethod
    async def get_enquiry(db: AsyncSession, enquiry_id: int) -> Optional[Enquiry]:
        return await db.get(Enquiry, enquiry_id)

    @staticmethod
    async def list_enquiries(
        db: AsyncSession,
        property_id: Optional[int] = None,
        status: Optional[EnquiryStatus] = None,
    ) -> List[Enquiry]:
        query = select(Enquiry).order_by(Enquiry.created_at.desc(), Enquiry.id.desc())
        if property_id is not None:
            query = query.where(Enquiry.property_id == property_id)
        if status is not None:
            query = query.where(Enquiry.status == status)
        result = await db.execute(query)
        return list(result.scalars().all())

    @staticmethod
    async def update_status(
        db: AsyncSession, enquiry_id: int, new_status: EnquiryStatus
    ) -> Optional[Enquiry]:
        enquiry = await db.get(Enquiry, enquiry_id)
        if not enquiry:
            return None

        if not EnquiryService.can_transition(enquiry.status, new_status):
            raise InvalidStatusTransitionError(
                f"Cannot move enquiry from {enquiry.status.value} to {new_status.value}"
            )

        enquiry.status = new_status
        enquiry.updated_at = datetime.now(timezone.utc)
        await db.commit()
        await db.refresh(enquiry)
        logger.info(f"Enquiry #{enquiry_id} -> {new_status.value}")
        return enquiry

    @staticmethod
    async def status_summary(
        db: AsyncSession, property_id: Optional[int] = None
    ) -> dict[EnquiryStatus, int]:
        query = select(Enquiry.status, func.count(Enquiry.id)).group_by(Enquiry.status)
        if property_id is not None:
            query = query.where(Enquiry.property_id == property_id)
        result = await db.execute(query)

        counts = {status: 0 for status in EnquiryStatus}
        for status, count in result.all():
            counts[status] = count
        return counts
