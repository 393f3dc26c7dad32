from datetime import date, datetime
from enum import Enum
from typing import Optional
from decimal import Decimal

from sqlalchemy import (
    String,
    Integer,
    Date,
    DateTime,
    ForeignKey,
    Numeric,
    Text,
    Enum as SQLEnum,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class BookingStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CHECKED_IN = "checked-in"
    CHECKED_OUT = "checked-out"
    CANCELLED = "cancelled"


class EnquiryStatus(str, Enum):
    NEW = "new"
    MESSAGED = "messaged"  # Booking details sent to the guest
    PAYMENT_PENDING = "payment_pending"  # Payment link sent
    PAID = "paid"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class Property(Base):
    __tablename__ = "properties"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(120), unique=True)
    location: Mapped[str] = mapped_column(String(200), default="")
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    rooms: Mapped[list["Room"]] = relationship(
        back_populates="property", order_by="Room.room_number"
    )


class Room(Base):
    __tablename__ = "rooms"

    id: Mapped[int] = mapped_column(primary_key=True)
    property_id: Mapped[int] = mapped_column(ForeignKey("properties.id"), index=True)
    property: Mapped["Property"] = relationship(back_populates="rooms")

    room_number: Mapped[str] = mapped_column(String(20))
    room_type: Mapped[str] = mapped_column(String(60), default="standard")
    price_per_night: Mapped[Decimal] = mapped_column(Numeric(10, 2), default=0)

    bookings: Mapped[list["Booking"]] = relationship(back_populates="room")


class Booking(Base):
    __tablename__ = "bookings"

    id: Mapped[int] = mapped_column(primary_key=True)

    property_id: Mapped[int] = mapped_column(ForeignKey("properties.id"), index=True)
    room_id: Mapped[int] = mapped_column(ForeignKey("rooms.id"), index=True)
    room: Mapped["Room"] = relationship(back_populates="bookings")

    # Guest
    guest_name: Mapped[str] = mapped_column(String)
    guest_phone: Mapped[str] = mapped_column(String)

    # Stay, half-open: the room is free again on check_out_date
    check_in_date: Mapped[date] = mapped_column(Date, index=True)
    check_out_date: Mapped[date] = mapped_column(Date, index=True)
    number_of_guests: Mapped[int] = mapped_column(Integer, default=1)
    total_price: Mapped[Decimal] = mapped_column(Numeric(10, 2), default=0)
    advance_amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), default=0)

    status: Mapped[BookingStatus] = mapped_column(
        SQLEnum(BookingStatus), default=BookingStatus.PENDING
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow
    )


class Enquiry(Base):
    __tablename__ = "enquiries"

    id: Mapped[int] = mapped_column(primary_key=True)

    property_id: Mapped[int] = mapped_column(ForeignKey("properties.id"), index=True)
    room_id: Mapped[int] = mapped_column(ForeignKey("rooms.id"), index=True)
    room: Mapped["Room"] = relationship()

    guest_name: Mapped[str] = mapped_column(String)
    guest_phone: Mapped[str] = mapped_column(String, index=True)
    guest_email: Mapped[Optional[str]] = mapped_column(String, nullable=True)

    check_in_date: Mapped[date] = mapped_column(Date)
    check_out_date: Mapped[date] = mapped_column(Date)
    number_of_guests: Mapped[int] = mapped_column(Integer, default=1)
    price_quoted: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(10, 2), nullable=True
    )
    advance_amount: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(10, 2), nullable=True
    )
    special_requests: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    status: Mapped[EnquiryStatus] = mapped_column(
        SQLEnum(EnquiryStatus), default=EnquiryStatus.NEW, index=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow
    )
