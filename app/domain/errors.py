"""
Errors raised by the enquiry selector and its collaborators.

None of them is fatal: every one is recoverable by a further user action.
"""


class EnquiryDeskError(Exception):
    """Base class for enquiry desk errors."""


class InvalidDateRangeError(EnquiryDeskError):
    """Check-out is not strictly after check-in."""


class RoomNotInResultsError(EnquiryDeskError):
    """The chosen room is not in the current availability result."""


class MissingSelectionError(EnquiryDeskError):
    """Submission refused: property, dates and room must all be chosen."""

    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(
            "Please select property, dates, and room first "
            f"(missing: {', '.join(missing)})"
        )


class AvailabilityQueryError(EnquiryDeskError):
    """The availability query failed in transport or on the backend."""


class EnquiryCreationError(EnquiryDeskError):
    """The persistence side rejected the enquiry."""


class InvalidStatusTransitionError(EnquiryDeskError):
    """Enquiry status change not allowed by the workflow."""


class SubmissionInProgressError(EnquiryDeskError):
    """An enquiry for this session is already being submitted."""
