"""
Exclusive scheduling: a court interval belongs to one booking at a time.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from court_booking.core.exceptions import InvalidTimeError
from court_booking.models.booking import Booking
from court_booking.schemas.booking import BookingCreate
from court_booking.services import booking_service
from court_booking.services.business_hours import BusinessHours
from court_booking.services.conflict_service import has_conflict
from court_booking.services.court_service import get_court
from court_booking.services.interfaces.scheduling import SchedulingCore


class ExclusiveScheduler(SchedulingCore):
    """
    Bookings with start/end times, PENDING on creation, priced per whole hour.

    Use when:
    - Each booking reserves the whole court
    - The club charges by the hour
    """

    def __init__(self, hours: BusinessHours):
        self.hours = hours

    async def create(self, db: AsyncSession, user_id: int, request: BookingCreate) -> Booking:
        return await booking_service.create_booking(db, user_id, request, self.hours)

    async def check(self, db: AsyncSession, request: BookingCreate) -> bool:
        """False when create would reject the times or find an overlap."""
        await get_court(db, request.court_id)
        try:
            interval = self.hours.validate(request.booking_date, request.start_time, request.end_time)
        except InvalidTimeError:
            return False
        return not await has_conflict(db, request.court_id, request.booking_date, interval)

    async def cancel(self, db: AsyncSession, record_id: int) -> Booking:
        return await booking_service.cancel_booking(db, record_id)
