"""
Enquiry calendar selection.

Two successive day clicks produce a stay [check_in, check_out). A third
click restarts the range at the clicked day. Completing a range asks for
room availability; picking one of the returned rooms opens the guest form.

Everything here is pure: each transition takes the current `Selection`
and returns a new one. The owner (see `app.services.enquiry_session`)
keeps the value and performs the side effects the transitions call for.
"""
import datetime
from dataclasses import dataclass, replace
from decimal import Decimal
from enum import Enum
from typing import Iterable

from app.domain.calendar import as_day, nights
from app.domain.errors import InvalidDateRangeError, RoomNotInResultsError


class SelectionStep(str, Enum):
    NO_CHECK_IN = "no_check_in"
    AWAITING_CHECK_OUT = "awaiting_check_out"
    RANGE_COMPLETE = "range_complete"
    ROOM_CHOSEN = "room_chosen"
    GUEST_FORM_OPEN = "guest_form_open"


# Steps in which a complete range exists
RANGE_STEPS = {
    SelectionStep.RANGE_COMPLETE,
    SelectionStep.ROOM_CHOSEN,
    SelectionStep.GUEST_FORM_OPEN,
}


class ClickOutcome(str, Enum):
    IGNORED_PAST = "ignored_past"
    NO_PROPERTY = "no_property"
    CHECK_IN_SET = "check_in_set"
    INVALID_RANGE = "invalid_range"
    RANGE_COMPLETE = "range_complete"
    RESTARTED = "restarted"


@dataclass(frozen=True)
class DateRange:
    check_in: datetime.date | None = None
    check_out: datetime.date | None = None

    def __post_init__(self):
        if self.check_out is not None and self.check_in is None:
            raise InvalidDateRangeError("Check-out requires a check-in date")
        if (
            self.check_in is not None
            and self.check_out is not None
            and self.check_out <= self.check_in
        ):
            raise InvalidDateRangeError("Check-out must be after check-in date")

    @property
    def is_complete(self) -> bool:
        return self.check_in is not None and self.check_out is not None

    @property
    def nights(self) -> int:
        if not self.is_complete:
            return 0
        return nights(self.check_in, self.check_out)


@dataclass(frozen=True)
class RoomOption:
    id: int
    room_number: str
    room_type: str
    price_per_night: Decimal


@dataclass(frozen=True)
class Selection:
    property_id: int | None = None
    step: SelectionStep = SelectionStep.NO_CHECK_IN
    dates: DateRange = DateRange()
    rooms: tuple[RoomOption, ...] = ()
    selected_room_id: int | None = None
    loading: bool = False
    # Bumped whenever an in-flight availability answer becomes obsolete
    request_token: int = 0
    error: str | None = None
    # Set while an enquiry for this selection is being created
    submitting: bool = False

    @property
    def check_in(self) -> datetime.date | None:
        return self.dates.check_in

    @property
    def check_out(self) -> datetime.date | None:
        return self.dates.check_out

    @property
    def selected_room(self) -> RoomOption | None:
        for room in self.rooms:
            if room.id == self.selected_room_id:
                return room
        return None


@dataclass(frozen=True)
class ClickResult:
    selection: Selection
    outcome: ClickOutcome

    @property
    def needs_availability(self) -> bool:
        return self.outcome is ClickOutcome.RANGE_COMPLETE


def change_property(selection: Selection, property_id: int | None) -> Selection:
    """Any state -> NO_CHECK_IN for the new property."""
    return Selection(
        property_id=property_id,
        request_token=selection.request_token + 1,
        submitting=selection.submitting,
    )


def click_day(
    selection: Selection,
    day: datetime.date | datetime.datetime,
    today: datetime.date | datetime.datetime,
) -> ClickResult:
    day = as_day(day)
    today = as_day(today)

    if day < today:
        return ClickResult(selection, ClickOutcome.IGNORED_PAST)
    if selection.property_id is None:
        return ClickResult(selection, ClickOutcome.NO_PROPERTY)

    if selection.step is SelectionStep.NO_CHECK_IN:
        return ClickResult(
            replace(
                selection,
                step=SelectionStep.AWAITING_CHECK_OUT,
                dates=DateRange(check_in=day),
                rooms=(),
                selected_room_id=None,
                error=None,
            ),
            ClickOutcome.CHECK_IN_SET,
        )

    if selection.step is SelectionStep.AWAITING_CHECK_OUT:
        if day <= selection.check_in:
            return ClickResult(selection, ClickOutcome.INVALID_RANGE)
        return ClickResult(
            replace(
                selection,
                step=SelectionStep.RANGE_COMPLETE,
                dates=DateRange(check_in=selection.check_in, check_out=day),
                rooms=(),
                selected_room_id=None,
                loading=True,
                request_token=selection.request_token + 1,
                error=None,
            ),
            ClickOutcome.RANGE_COMPLETE,
        )

    # Third click: start over from the clicked day
    return ClickResult(
        replace(
            selection,
            step=SelectionStep.AWAITING_CHECK_OUT,
            dates=DateRange(check_in=day),
            rooms=(),
            selected_room_id=None,
            loading=False,
            request_token=selection.request_token + 1,
            error=None,
        ),
        ClickOutcome.RESTARTED,
    )


def is_current_request(selection: Selection, token: int) -> bool:
    return (
        selection.loading
        and selection.step is SelectionStep.RANGE_COMPLETE
        and token == selection.request_token
    )


def begin_retry(selection: Selection) -> Selection:
    """Re-issue the availability query for the current complete range."""
    if selection.step is not SelectionStep.RANGE_COMPLETE:
        return selection
    return replace(
        selection,
        rooms=(),
        loading=True,
        request_token=selection.request_token + 1,
        error=None,
    )


def apply_rooms(
    selection: Selection, token: int, rooms: Iterable[RoomOption]
) -> Selection:
    """Store an availability answer; stale answers leave the selection as is."""
    if not is_current_request(selection, token):
        return selection
    return replace(selection, rooms=tuple(rooms), loading=False, error=None)


def apply_query_failure(selection: Selection, token: int, message: str) -> Selection:
    if not is_current_request(selection, token):
        return selection
    return replace(selection, rooms=(), loading=False, error=message)


def select_room(selection: Selection, room_id: int) -> Selection:
    if selection.step not in RANGE_STEPS:
        raise RoomNotInResultsError("Select check-in and check-out dates first")
    if not any(room.id == room_id for room in selection.rooms):
        raise RoomNotInResultsError(f"Room {room_id} is not available for these dates")
    return replace(
        selection,
        step=SelectionStep.GUEST_FORM_OPEN,
        selected_room_id=room_id,
    )


def close_guest_form(selection: Selection) -> Selection:
    if selection.step is not SelectionStep.GUEST_FORM_OPEN:
        return selection
    return replace(selection, step=SelectionStep.ROOM_CHOSEN)


def open_guest_form(selection: Selection) -> Selection:
    if selection.step is not SelectionStep.ROOM_CHOSEN:
        return selection
    return replace(selection, step=SelectionStep.GUEST_FORM_OPEN)


def missing_for_submission(selection: Selection) -> list[str]:
    missing = []
    if selection.property_id is None:
        missing.append("property")
    if not selection.dates.is_complete:
        missing.append("dates")
    if selection.selected_room_id is None:
        missing.append("room")
    return missing


def reset_after_submit(selection: Selection) -> Selection:
    """Successful submission clears everything but the chosen property."""
    return Selection(
        property_id=selection.property_id,
        request_token=selection.request_token + 1,
    )


def begin_submit(selection: Selection) -> Selection:
    return replace(selection, submitting=True)


def finish_submit(selection: Selection, token: int, succeeded: bool) -> Selection:
    """
    Close a submission started when the selection carried `token`.

    A successful submission resets the selection only if nothing newer
    (a restarted range, another property) happened while it was pending.
    """
    if succeeded and selection.request_token == token:
        return reset_after_submit(selection)
    return replace(selection, submitting=False)
