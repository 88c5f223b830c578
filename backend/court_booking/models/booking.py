"""
Booking model: one user holding one court for a time range on a given date.

Key design decisions:
- Date and times are stored separately (single implicit local time zone)
- total_price is derived from the court's hourly price at booking time and
  is never recomputed when the court's price changes later
- Composite index on (court_id, booking_date) serves the conflict check,
  which always filters on exactly those two columns
"""

import enum

from sqlalchemy import (
    CheckConstraint,
    Column,
    Date,
    Enum,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Time,
)

from court_booking.db.base import Base, TimestampMixin
from court_booking.services.intervals import TimeInterval


class BookingStatus(str, enum.Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CANCELED = "CANCELED"
    COMPLETED = "COMPLETED"

    @classmethod
    def active(cls) -> tuple["BookingStatus", ...]:
        """Statuses that still hold the court."""
        return (cls.PENDING, cls.CONFIRMED)


class Booking(Base, TimestampMixin):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    court_id = Column(Integer, ForeignKey("courts.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    booking_date = Column(Date, nullable=False)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)
    status = Column(
        Enum(BookingStatus, name="booking_status", native_enum=False, length=20),
        nullable=False,
        default=BookingStatus.PENDING,
    )
    total_price = Column(Numeric(10, 2), nullable=False)
    notes = Column(String(500), nullable=True)

    __table_args__ = (
        CheckConstraint("start_time < end_time", name="check_booking_time_order"),
        Index("ix_bookings_court_date", "court_id", "booking_date"),
        Index("ix_bookings_date", "booking_date"),
    )

    @property
    def interval(self) -> TimeInterval:
        return TimeInterval(self.start_time, self.end_time)

    @property
    def is_active(self) -> bool:
        return self.status in BookingStatus.active()

    def __repr__(self) -> str:
        return (
            f"<Booking(id={self.id}, court={self.court_id}, user={self.user_id}, "
            f"date={self.booking_date}, {self.interval}, status={self.status})>"
        )
