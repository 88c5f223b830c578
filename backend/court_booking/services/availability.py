"""
Availability slots for a court on a given date.
"""

from datetime import date, time
from typing import Iterable, Iterator, NamedTuple

from sqlalchemy.ext.asyncio import AsyncSession

from court_booking.services.business_hours import BusinessHours
from court_booking.services.conflict_service import find_active_bookings
from court_booking.services.court_service import get_court
from court_booking.services.intervals import TimeInterval, overlaps


class TimeSlot(NamedTuple):
    start_time: time
    end_time: time
    available: bool


def generate_slots(hours: BusinessHours, booked: Iterable[TimeInterval]) -> Iterator[TimeSlot]:
    booked = list(booked)
    for slot in hours.iter_slots():
        taken = any(overlaps(slot, interval) for interval in booked)
        yield TimeSlot(slot.start, slot.end, not taken)


async def get_available_slots(
    db: AsyncSession,
    court_id: int,
    slot_date: date,
    hours: BusinessHours,
) -> list[TimeSlot]:
    await get_court(db, court_id)
    bookings = await find_active_bookings(db, court_id, slot_date)
    return list(generate_slots(hours, (b.interval for b in bookings)))
