"""
Conflict detection for exclusive bookings.

A proposed interval conflicts when any ACTIVE booking (PENDING or CONFIRMED)
on the same court and date overlaps it. The check is a pure read; callers
that act on the answer must hold the court lock taken by the booking service.
"""

from datetime import date
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from court_booking.models.booking import Booking, BookingStatus
from court_booking.services.intervals import TimeInterval, overlaps


async def find_active_bookings(
    db: AsyncSession,
    court_id: int,
    booking_date: date,
    exclude_id: Optional[int] = None,
) -> list[Booking]:
    query = select(Booking).where(
        Booking.court_id == court_id,
        Booking.booking_date == booking_date,
        Booking.status.in_(BookingStatus.active()),
    )
    if exclude_id is not None:
        query = query.where(Booking.id != exclude_id)

    result = await db.execute(query.order_by(Booking.start_time))
    return list(result.scalars().all())


def find_overlapping(bookings: list[Booking], interval: TimeInterval) -> Optional[Booking]:
    return next((b for b in bookings if overlaps(b.interval, interval)), None)


async def has_conflict(
    db: AsyncSession,
    court_id: int,
    booking_date: date,
    interval: TimeInterval,
    exclude_id: Optional[int] = None,
) -> bool:
    bookings = await find_active_bookings(db, court_id, booking_date, exclude_id)
    return find_overlapping(bookings, interval) is not None
