"""
Shared-slot scheduling: several players join one reservation per timestamp.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from court_booking.models.reservation import Reservation
from court_booking.schemas.reservation import ReservationCreate
from court_booking.services import reservation_service
from court_booking.services.interfaces.scheduling import SchedulingCore


class SharedSlotScheduler(SchedulingCore):
    """
    Reservations matched on exact (court, start) with a participant cap.

    Use when:
    - Players sign up for fixed sessions rather than renting the court
    - Courts can be switched off for bookings at the court level
    """

    def __init__(self, capacity: int = 2):
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.capacity = capacity

    async def create(self, db: AsyncSession, user_id: int, request: ReservationCreate) -> Reservation:
        return await reservation_service.reserve_slot(
            db, user_id, request.court_id, request.starts_at, self.capacity
        )

    async def check(self, db: AsyncSession, request: ReservationCreate) -> bool:
        return await reservation_service.slot_has_room(
            db, request.court_id, request.starts_at, self.capacity
        )

    async def cancel(self, db: AsyncSession, record_id: int) -> Reservation:
        return await reservation_service.cancel_reservation(db, record_id)
