"""
Booking lifecycle for exclusive court bookings.

CONCURRENCY STRATEGY: Court Row Lock
====================================

Problem:
  Two users request overlapping times on the same court simultaneously.
  Both read the existing bookings, both see no conflict, both insert.
  Result: Double booking.

Solution:
  Every create/update first takes `SELECT ... FOR UPDATE` on the court row
  (see court_service.lock_court), then runs the conflict check and writes,
  all inside the per-request transaction opened by `get_db`.

  1. Lock the court row (the second request blocks here)
  2. Load ACTIVE bookings for (court, date) and test for overlap
  3. Insert/update the booking, commit releases the lock

  A conflict is a property of the set of intervals on one court and date,
  so there is no single row to version. Writers are serialised per court
  only; other courts proceed in parallel.

  Reads (listings, availability) take no lock and may be stale by the time
  they reach the client.

Status changes are permissive: any status can be set from any
status, including reopening a CANCELED booking. COMPLETED is never set
automatically.
"""

from datetime import date
from decimal import Decimal
from typing import Optional, Union

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from court_booking.core.exceptions import InvalidTimeError, NotFoundError, SchedulingConflictError
from court_booking.core.logging import get_logger
from court_booking.core.metrics import record_booking_attempt, record_status_change
from court_booking.models.booking import Booking, BookingStatus
from court_booking.models.court import Court
from court_booking.schemas.booking import BookingCreate, BookingUpdate
from court_booking.services.business_hours import BusinessHours
from court_booking.services.conflict_service import find_active_bookings, find_overlapping
from court_booking.services.court_service import get_court, lock_court
from court_booking.services.intervals import TimeInterval, duration_hours
from court_booking.services.user_service import get_user

logger = get_logger(__name__)

CENTS = Decimal("0.01")


def calculate_total_price(hourly_price: Decimal, interval: TimeInterval) -> Decimal:
    return (Decimal(hourly_price) * duration_hours(interval)).quantize(CENTS)


def _validate_time(
    hours: BusinessHours,
    data: Union[BookingCreate, BookingUpdate],
    today: Optional[date],
) -> TimeInterval:
    try:
        return hours.validate(data.booking_date, data.start_time, data.end_time, today)
    except InvalidTimeError as exc:
        record_booking_attempt("invalid_time")
        logger.info("booking_rejected", reason=exc.detail, date=str(data.booking_date))
        raise


async def _ensure_no_conflict(
    db: AsyncSession,
    court: Court,
    booking_date: date,
    interval: TimeInterval,
    exclude_id: Optional[int] = None,
) -> None:
    existing = await find_active_bookings(db, court.id, booking_date, exclude_id)
    clash = find_overlapping(existing, interval)
    if clash is None:
        return

    record_booking_attempt("conflict")
    logger.warning(
        "booking_conflict",
        court_id=court.id,
        date=str(booking_date),
        requested=str(interval),
        existing_booking_id=clash.id,
        existing=str(clash.interval),
    )
    raise SchedulingConflictError(
        f"Court {court.name} is already booked on {booking_date} at {clash.interval}"
    )


async def create_booking(
    db: AsyncSession,
    user_id: int,
    booking_data: BookingCreate,
    hours: BusinessHours,
    today: Optional[date] = None,
) -> Booking:
    """
    Create a PENDING booking priced at hourly_price * whole hours.
    Raises NotFound, InvalidTime or SchedulingConflict.
    """
    court = await lock_court(db, booking_data.court_id)
    await get_user(db, user_id)

    interval = _validate_time(hours, booking_data, today)
    await _ensure_no_conflict(db, court, booking_data.booking_date, interval)

    booking = Booking(
        court_id=court.id,
        user_id=user_id,
        booking_date=booking_data.booking_date,
        start_time=interval.start,
        end_time=interval.end,
        total_price=calculate_total_price(court.hourly_price, interval),
        status=BookingStatus.PENDING,
        notes=booking_data.notes,
    )
    db.add(booking)
    await db.flush()
    await db.refresh(booking)

    record_booking_attempt("created")
    logger.info(
        "booking_created",
        booking_id=booking.id,
        court_id=court.id,
        user_id=user_id,
        date=str(booking.booking_date),
        interval=str(interval),
        total_price=str(booking.total_price),
    )
    return booking


async def update_booking(
    db: AsyncSession,
    booking_id: int,
    booking_data: BookingUpdate,
    hours: BusinessHours,
    today: Optional[date] = None,
) -> Booking:
    """
    Move a booking and/or change its notes.
    The conflict check ignores the booking itself, so re-saving the same
    range succeeds. Price is recomputed only when start or end changes.
    """
    booking = await get_booking(db, booking_id)
    court = await lock_court(db, booking.court_id)

    interval = _validate_time(hours, booking_data, today)
    await _ensure_no_conflict(db, court, booking_data.booking_date, interval, exclude_id=booking.id)

    if booking.interval != interval:
        booking.total_price = calculate_total_price(court.hourly_price, interval)

    booking.booking_date = booking_data.booking_date
    booking.start_time = interval.start
    booking.end_time = interval.end
    booking.notes = booking_data.notes
    booking.touch()

    await db.flush()
    await db.refresh(booking)

    logger.info(
        "booking_updated",
        booking_id=booking.id,
        date=str(booking.booking_date),
        interval=str(interval),
        total_price=str(booking.total_price),
    )
    return booking


async def update_booking_status(
    db: AsyncSession,
    booking_id: int,
    new_status: BookingStatus,
) -> Booking:
    booking = await get_booking(db, booking_id)
    previous = booking.status

    booking.status = new_status
    booking.touch()
    await db.flush()
    await db.refresh(booking)

    record_status_change(new_status.value)
    logger.info(
        "booking_status_changed",
        booking_id=booking.id,
        previous=previous.value,
        status=new_status.value,
    )
    return booking


async def cancel_booking(db: AsyncSession, booking_id: int) -> Booking:
    return await update_booking_status(db, booking_id, BookingStatus.CANCELED)


async def confirm_booking(db: AsyncSession, booking_id: int) -> Booking:
    return await update_booking_status(db, booking_id, BookingStatus.CONFIRMED)


async def delete_booking(db: AsyncSession, booking_id: int) -> Booking:
    booking = await get_booking(db, booking_id)
    await db.delete(booking)
    await db.flush()

    logger.info("booking_deleted", booking_id=booking_id, court_id=booking.court_id)
    return booking


async def get_booking(db: AsyncSession, booking_id: int) -> Booking:
    result = await db.execute(select(Booking).where(Booking.id == booking_id))
    booking = result.scalar_one_or_none()

    if not booking:
        raise NotFoundError(f"Booking {booking_id} not found")
    return booking


async def list_bookings(db: AsyncSession) -> list[Booking]:
    result = await db.execute(
        select(Booking).order_by(Booking.booking_date, Booking.start_time)
    )
    return list(result.scalars().all())


async def list_user_bookings(db: AsyncSession, user_id: int) -> list[Booking]:
    """All bookings of a user, most recent first."""
    await get_user(db, user_id)
    result = await db.execute(
        select(Booking)
        .where(Booking.user_id == user_id)
        .order_by(Booking.booking_date.desc(), Booking.start_time.desc())
    )
    return list(result.scalars().all())


async def list_future_user_bookings(
    db: AsyncSession,
    user_id: int,
    today: Optional[date] = None,
) -> list[Booking]:
    await get_user(db, user_id)
    result = await db.execute(
        select(Booking)
        .where(
            Booking.user_id == user_id,
            Booking.booking_date >= (today or date.today()),
        )
        .order_by(Booking.booking_date, Booking.start_time)
    )
    return list(result.scalars().all())


async def list_court_bookings(db: AsyncSession, court_id: int) -> list[Booking]:
    await get_court(db, court_id)
    result = await db.execute(
        select(Booking)
        .where(Booking.court_id == court_id)
        .order_by(Booking.booking_date, Booking.start_time)
    )
    return list(result.scalars().all())


async def list_bookings_by_date(db: AsyncSession, booking_date: date) -> list[Booking]:
    result = await db.execute(
        select(Booking)
        .where(Booking.booking_date == booking_date)
        .order_by(Booking.start_time, Booking.court_id)
    )
    return list(result.scalars().all())


async def list_today_bookings(db: AsyncSession, today: Optional[date] = None) -> list[Booking]:
    return await list_bookings_by_date(db, today or date.today())


async def list_bookings_by_status(db: AsyncSession, booking_status: BookingStatus) -> list[Booking]:
    result = await db.execute(
        select(Booking)
        .where(Booking.status == booking_status)
        .order_by(Booking.booking_date, Booking.start_time)
    )
    return list(result.scalars().all())


async def count_bookings_by_status(db: AsyncSession, booking_status: BookingStatus) -> int:
    result = await db.execute(
        select(func.count()).select_from(Booking).where(Booking.status == booking_status)
    )
    return result.scalar_one()
