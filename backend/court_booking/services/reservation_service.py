"""
Shared-slot reservations.

A slot is an exact (court, starts_at) pair with an implicit fixed duration.
The first player creates a CONFIRMED reservation; later players join it
until it holds `capacity` distinct participants. There is no interval
arithmetic here: 10:00 and 10:30 are simply different slots.

Writes lock the court row (court_service.lock_court) so two players joining
the last free place cannot both succeed.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from court_booking.core.exceptions import (
    CapacityExceededError,
    CourtUnavailableError,
    NotFoundError,
    SchedulingConflictError,
)
from court_booking.core.logging import get_logger
from court_booking.core.metrics import record_reservation_attempt
from court_booking.models.reservation import Reservation, ReservationStatus
from court_booking.services.court_service import get_court, lock_court
from court_booking.services.user_service import get_user

logger = get_logger(__name__)


async def find_confirmed_reservation(
    db: AsyncSession,
    court_id: int,
    starts_at: datetime,
) -> Optional[Reservation]:
    result = await db.execute(
        select(Reservation)
        .where(
            Reservation.court_id == court_id,
            Reservation.starts_at == starts_at,
            Reservation.status == ReservationStatus.CONFIRMED,
        )
        .order_by(Reservation.id)
        .limit(1)
    )
    return result.scalar_one_or_none()


async def reserve_slot(
    db: AsyncSession,
    user_id: int,
    court_id: int,
    starts_at: datetime,
    capacity: int,
) -> Reservation:
    """
    Join the confirmed reservation for the slot, or open one.
    Raises NotFound, CourtUnavailable, CapacityExceeded, or SchedulingConflict
    when the user already plays in that slot.
    """
    court = await lock_court(db, court_id)
    user = await get_user(db, user_id)

    if not court.is_active:
        record_reservation_attempt("court_unavailable")
        raise CourtUnavailableError(f"Court {court.name} is not available for reservations")

    reservation = await find_confirmed_reservation(db, court_id, starts_at)

    if reservation is not None:
        if reservation.has_participant(user_id):
            record_reservation_attempt("duplicate")
            raise SchedulingConflictError(
                f"User {user_id} already has a place on court {court.name} at {starts_at:%Y-%m-%d %H:%M}"
            )
        if len(reservation.participants) >= capacity:
            record_reservation_attempt("full")
            logger.warning(
                "reservation_full",
                reservation_id=reservation.id,
                court_id=court_id,
                starts_at=starts_at.isoformat(),
                capacity=capacity,
            )
            raise CapacityExceededError(
                f"Court {court.name} at {starts_at:%Y-%m-%d %H:%M} is already full ({capacity} players)"
            )

        reservation.participants.append(user)
        reservation.touch()
        await db.flush()

        record_reservation_attempt("joined")
        logger.info(
            "reservation_joined",
            reservation_id=reservation.id,
            user_id=user_id,
            players=len(reservation.participants),
        )
        return reservation

    reservation = Reservation(
        court_id=court_id,
        starts_at=starts_at,
        status=ReservationStatus.CONFIRMED,
    )
    reservation.participants.append(user)
    db.add(reservation)
    await db.flush()

    record_reservation_attempt("created")
    logger.info(
        "reservation_created",
        reservation_id=reservation.id,
        court_id=court_id,
        user_id=user_id,
        starts_at=starts_at.isoformat(),
    )
    return reservation


async def slot_has_room(
    db: AsyncSession,
    court_id: int,
    starts_at: datetime,
    capacity: int,
) -> bool:
    court = await get_court(db, court_id)
    if not court.is_active:
        return False

    reservation = await find_confirmed_reservation(db, court_id, starts_at)
    return reservation is None or len(reservation.participants) < capacity


async def get_reservation(db: AsyncSession, reservation_id: int) -> Reservation:
    result = await db.execute(select(Reservation).where(Reservation.id == reservation_id))
    reservation = result.scalar_one_or_none()

    if not reservation:
        raise NotFoundError(f"Reservation {reservation_id} not found")
    return reservation


async def cancel_reservation(db: AsyncSession, reservation_id: int) -> Reservation:
    reservation = await get_reservation(db, reservation_id)
    reservation.status = ReservationStatus.CANCELED
    reservation.touch()
    await db.flush()

    logger.info("reservation_canceled", reservation_id=reservation.id)
    return reservation


async def list_reservations(db: AsyncSession) -> list[Reservation]:
    result = await db.execute(select(Reservation).order_by(Reservation.starts_at))
    return list(result.scalars().all())


async def list_court_reservations(db: AsyncSession, court_id: int) -> list[Reservation]:
    result = await db.execute(
        select(Reservation)
        .where(Reservation.court_id == court_id)
        .order_by(Reservation.starts_at)
    )
    return list(result.scalars().all())


async def list_user_reservations(db: AsyncSession, user_id: int) -> list[Reservation]:
    result = await db.execute(
        select(Reservation)
        .where(Reservation.participants.any(id=user_id))
        .order_by(Reservation.starts_at)
    )
    return list(result.scalars().all())
