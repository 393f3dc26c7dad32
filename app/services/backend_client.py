"""
REST client for the availability and enquiry endpoints of a remote backend
"""
import asyncio
import logging
from datetime import date, datetime, time
from decimal import Decimal
from typing import Optional

import requests

from app.core.config import settings
from app.domain.errors import AvailabilityQueryError, EnquiryCreationError
from app.domain.selection import RoomOption
from app.schemas.enquiry import EnquiryCreate

logger = logging.getLogger(__name__)


def _as_timestamp(day: date) -> str:
    return datetime.combine(day, time.min).isoformat()


def _error_detail(response: requests.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    detail = body.get("detail") if isinstance(body, dict) else None
    return str(detail) if detail else response.text or f"HTTP {response.status_code}"


class BackendClient:
    """Blocking HTTP calls, with async wrappers running them in a worker thread"""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = (base_url or settings.backend_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.backend_timeout_seconds
        self.session = session or requests.Session()

    def fetch_available_rooms(
        self, property_id: int, check_in: date, check_out: date
    ) -> list[RoomOption]:
        params = {
            "propertyId": property_id,
            "checkIn": _as_timestamp(check_in),
            "checkOut": _as_timestamp(check_out),
        }
        try:
            response = self.session.get(
                f"{self.base_url}/api/rooms/availability",
                params=params,
                timeout=self.timeout,
            )
            response.raise_for_status()
            rooms = response.json()
        except requests.exceptions.RequestException as e:
            logger.error(f"Failed to check room availability: {e}")
            raise AvailabilityQueryError("Failed to check room availability") from e

        try:
            return [
                RoomOption(
                    id=int(room["id"]),
                    room_number=str(room["roomNumber"]),
                    room_type=str(room["roomType"]),
                    price_per_night=Decimal(str(room["pricePerNight"])),
                )
                for room in rooms
            ]
        except (KeyError, TypeError, ValueError, ArithmeticError) as e:
            logger.error(f"Unexpected availability response: {rooms!r}")
            raise AvailabilityQueryError("Unexpected availability response") from e

    def create_enquiry(self, payload: EnquiryCreate) -> dict:
        try:
            response = self.session.post(
                f"{self.base_url}/api/enquiries",
                json=payload.model_dump(mode="json", by_alias=True),
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"Failed to create enquiry: {e}")
            raise EnquiryCreationError("Failed to create enquiry") from e

        if response.status_code >= 400:
            detail = _error_detail(response)
            logger.warning(f"Enquiry rejected ({response.status_code}): {detail}")
            raise EnquiryCreationError(detail)

        return response.json()

    async def available_rooms(
        self, property_id: int, check_in: date, check_out: date
    ) -> list[RoomOption]:
        return await asyncio.to_thread(
            self.fetch_available_rooms, property_id, check_in, check_out
        )

    async def submit_enquiry(self, payload: EnquiryCreate) -> dict:
        return await asyncio.to_thread(self.create_enquiry, payload)
