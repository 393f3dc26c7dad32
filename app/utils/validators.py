"""
Data validation helpers
"""

from datetime import date, datetime
from typing import Optional, Tuple


def validate_stay_dates(
    check_in: date, check_out: date, today: Optional[date] = None
) -> Tuple[bool, Optional[str]]:
    """
    Validate a stay's check-in and check-out dates.
    Returns (is_valid, error_message)
    """
    if today is not None and check_in < today:
        return False, "Check-in date cannot be in the past"

    if check_out <= check_in:
        return False, "Check-out must be after check-in date"

    return True, None


def parse_day(value: str) -> date:
    """
    Parse a calendar date from 'YYYY-MM-DD' or an ISO-8601 timestamp.
    Raises ValueError on anything else.
    """
    value = value.strip()
    if "T" in value:
        return datetime.fromisoformat(value).date()
    return date.fromisoformat(value)
