from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import EmailStr, Field, field_validator, model_validator

from app.models import EnquiryStatus
from app.schemas.room import CamelModel
from app.utils.phone import MIN_PHONE_DIGITS, has_min_digits


class GuestDetails(CamelModel):
    """Guest form fields, validated before anything is submitted."""

    guest_name: str = Field(..., min_length=2)
    guest_phone: str
    guest_email: Optional[EmailStr] = None
    number_of_guests: int = Field(1, ge=1)
    price_quoted: Optional[Decimal] = Field(None, ge=0)
    advance_amount: Optional[Decimal] = Field(None, ge=0)
    special_requests: Optional[str] = None

    @field_validator("guest_name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        value = value.strip()
        if len(value) < 2:
            raise ValueError("Name must be at least 2 characters")
        return value

    @field_validator("guest_phone")
    @classmethod
    def check_phone(cls, value: str) -> str:
        if not has_min_digits(value):
            raise ValueError(f"Phone number must be at least {MIN_PHONE_DIGITS} digits")
        return value.strip()

    @field_validator("guest_email", "special_requests", mode="before")
    @classmethod
    def blank_as_none(cls, value):
        # An empty form field means "not given"
        if isinstance(value, str) and not value.strip():
            return None
        return value


class EnquiryCreate(GuestDetails):
    property_id: int
    room_id: int
    check_in_date: date
    check_out_date: date
    status: EnquiryStatus = EnquiryStatus.NEW

    @field_validator("check_in_date", "check_out_date", mode="before")
    @classmethod
    def timestamp_as_date(cls, value):
        # Calendars send ISO-8601 timestamps; only the calendar date matters
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, str) and "T" in value:
            return datetime.fromisoformat(value).date()
        return value

    @model_validator(mode="after")
    def check_dates(self):
        if self.check_out_date <= self.check_in_date:
            raise ValueError("Check-out must be after check-in date")
        return self


class EnquiryOut(CamelModel):
    id: int
    property_id: int
    room_id: int
    guest_name: str
    guest_phone: str
    guest_email: Optional[str] = None
    check_in_date: date
    check_out_date: date
    number_of_guests: int
    price_quoted: Optional[Decimal] = None
    advance_amount: Optional[Decimal] = None
    special_requests: Optional[str] = None
    status: EnquiryStatus
    created_at: datetime
    updated_at: datetime


class EnquiryStatusUpdate(CamelModel):
    status: EnquiryStatus


class EnquirySummaryOut(CamelModel):
    total: int
    by_status: dict[EnquiryStatus, int]
