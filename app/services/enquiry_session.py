"""
Per-user enquiry calendar session.

Owns one `Selection` value and performs what its transitions ask for:
availability queries after a completed range, and the enquiry submission.
Each handler applies its transition in one step; the availability query and
the enquiry submission are the only awaits. Answers that arrive after the
range or property changed are recognised by their request token: stale rooms
are dropped, and a finished submission leaves the newer selection alone. Only
one submission runs at a time.
"""
import datetime
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Mapping, Optional, Protocol

from app.domain import selection as sel
from app.domain.calendar import CalendarDay, build_month_view
from app.domain.errors import (
    AvailabilityQueryError,
    MissingSelectionError,
    SubmissionInProgressError,
)
from app.domain.selection import ClickOutcome, RoomOption, Selection
from app.schemas.enquiry import EnquiryCreate, GuestDetails

logger = logging.getLogger(__name__)


class EnquiryBackend(Protocol):
    async def available_rooms(
        self, property_id: int, check_in: datetime.date, check_out: datetime.date
    ) -> list[RoomOption]: ...

    async def submit_enquiry(self, payload: EnquiryCreate) -> Any: ...


class AvailabilityOutcome(str, Enum):
    ROOMS_FOUND = "rooms_found"
    NO_ROOMS = "no_rooms"
    FAILED = "failed"
    STALE = "stale"


@dataclass(frozen=True)
class ClickReport:
    outcome: ClickOutcome
    availability: Optional[AvailabilityOutcome] = None
    message: Optional[str] = None


CLICK_MESSAGES = {
    ClickOutcome.INVALID_RANGE: "Check-out must be after check-in date",
    ClickOutcome.NO_PROPERTY: "Choose a property first",
}

AVAILABILITY_MESSAGES = {
    AvailabilityOutcome.NO_ROOMS: "No rooms are available for the selected dates.",
    AvailabilityOutcome.FAILED: "Failed to check room availability",
}


class EnquirySession:
    def __init__(
        self,
        backend: EnquiryBackend,
        today: Callable[[], datetime.date] = datetime.date.today,
        property_id: Optional[int] = None,
    ):
        self.backend = backend
        self._today = today
        self.state = Selection(property_id=property_id)

    @property
    def step(self) -> sel.SelectionStep:
        return self.state.step

    def change_property(self, property_id: Optional[int]) -> Selection:
        self.state = sel.change_property(self.state, property_id)
        logger.debug(f"Property changed to {property_id}")
        return self.state

    async def click_day(self, day: datetime.date | datetime.datetime) -> ClickReport:
        result = sel.click_day(self.state, day, self._today())
        self.state = result.selection
        logger.debug(f"Click {day}: {result.outcome.value} -> {self.state.step.value}")

        if not result.needs_availability:
            return ClickReport(result.outcome, message=CLICK_MESSAGES.get(result.outcome))

        availability = await self._load_rooms()
        return ClickReport(
            result.outcome,
            availability=availability,
            message=self._availability_message(availability),
        )

    async def retry_availability(self) -> Optional[AvailabilityOutcome]:
        """Query again after a failure; None unless a complete range is set."""
        if self.state.step is not sel.SelectionStep.RANGE_COMPLETE:
            return None
        self.state = sel.begin_retry(self.state)
        return await self._load_rooms()

    async def _load_rooms(self) -> AvailabilityOutcome:
        request = self.state
        token = request.request_token
        try:
            rooms = await self.backend.available_rooms(
                request.property_id, request.check_in, request.check_out
            )
        except AvailabilityQueryError as e:
            if not sel.is_current_request(self.state, token):
                logger.info(f"Ignoring failure of superseded availability request #{token}")
                return AvailabilityOutcome.STALE
            self.state = sel.apply_query_failure(self.state, token, str(e))
            logger.warning(f"Availability request #{token} failed: {e}")
            return AvailabilityOutcome.FAILED

        if not sel.is_current_request(self.state, token):
            logger.info(f"Discarding stale availability response #{token}")
            return AvailabilityOutcome.STALE

        self.state = sel.apply_rooms(self.state, token, rooms)
        logger.info(
            f"Property {request.property_id} {request.check_in} - {request.check_out}: "
            f"{len(self.state.rooms)} room(s) available"
        )
        if not self.state.rooms:
            return AvailabilityOutcome.NO_ROOMS
        return AvailabilityOutcome.ROOMS_FOUND

    def _availability_message(self, outcome: AvailabilityOutcome) -> Optional[str]:
        if outcome is AvailabilityOutcome.ROOMS_FOUND:
            return f"{len(self.state.rooms)} room(s) available for your selected dates."
        return AVAILABILITY_MESSAGES.get(outcome)

    def select_room(self, room_id: int) -> Selection:
        self.state = sel.select_room(self.state, room_id)
        return self.state

    def close_guest_form(self) -> Selection:
        self.state = sel.close_guest_form(self.state)
        return self.state

    def open_guest_form(self) -> Selection:
        self.state = sel.open_guest_form(self.state)
        return self.state

    async def submit(self, guest: GuestDetails | Mapping[str, Any]) -> Any:
        """
        Submit the enquiry for the chosen property, dates and room.

        Raises MissingSelectionError before any call if something is not
        chosen, SubmissionInProgressError while an earlier submit is pending,
        pydantic.ValidationError for bad guest fields, and lets
        EnquiryCreationError from the backend through with the selection kept.
        """
        if self.state.submitting:
            raise SubmissionInProgressError("Enquiry is already being submitted")

        missing = sel.missing_for_submission(self.state)
        if missing:
            raise MissingSelectionError(missing)

        if not isinstance(guest, GuestDetails):
            guest = GuestDetails.model_validate(guest)

        payload = EnquiryCreate(
            property_id=self.state.property_id,
            room_id=self.state.selected_room_id,
            check_in_date=self.state.check_in,
            check_out_date=self.state.check_out,
            **guest.model_dump(),
        )

        token = self.state.request_token
        self.state = sel.begin_submit(self.state)
        succeeded = False
        try:
            created = await self.backend.submit_enquiry(payload)
            succeeded = True
        finally:
            superseded = self.state.request_token != token
            self.state = sel.finish_submit(self.state, token, succeeded)

        logger.info(
            f"Enquiry submitted for room {payload.room_id} "
            f"({payload.check_in_date} - {payload.check_out_date})"
        )
        if superseded:
            logger.info("Selection changed while submitting; keeping the newer one")
        return created

    def month_view(self, year: int, month: int) -> list[list[Optional[CalendarDay]]]:
        return build_month_view(
            year,
            month,
            today=self._today(),
            check_in=self.state.check_in,
            check_out=self.state.check_out,
        )
