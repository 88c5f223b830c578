"""
Booking endpoints for exclusive court scheduling.

Mutations commit explicitly before invalidating the availability cache so a
concurrent reader cannot re-cache the pre-commit grid.
"""

from datetime import date

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from court_booking.core.logging import get_logger
from court_booking.core.metrics import booking_latency
from court_booking.core.security import get_current_user_id, require_admin
from court_booking.db.session import get_db
from court_booking.models.booking import BookingStatus
from court_booking.schemas.booking import (
    AvailabilityCheckResponse,
    BookingCreate,
    BookingResponse,
    BookingStatusUpdate,
    BookingUpdate,
    NaiveTime,
    StatusCountResponse,
    TimeSlotResponse,
)
from court_booking.services import booking_service
from court_booking.services.availability import get_available_slots
from court_booking.services.business_hours import BusinessHours, get_business_hours
from court_booking.services.cache_service import (
    get_cached_availability,
    invalidate_availability,
    set_cached_availability,
)
from court_booking.services.interfaces.scheduling import SchedulingCore
from court_booking.services.strategy_factory import get_scheduler

logger = get_logger(__name__)
router = APIRouter(prefix="/bookings", tags=["Bookings"])


@router.post("/", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
async def create_booking(
    booking_data: BookingCreate,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
    scheduler: SchedulingCore = Depends(get_scheduler),
):
    """
    Book a court for the authenticated user.

    Returns 400 when the time is invalid or overlaps an active booking,
    404 when the court does not exist.
    """
    with booking_latency.time():
        booking = await scheduler.create(db, user_id, booking_data)
        await db.commit()
    await invalidate_availability(booking.court_id, booking.booking_date)
    return booking


@router.get("/", response_model=list[BookingResponse])
async def list_bookings(db: AsyncSession = Depends(get_db)):
    return await booking_service.list_bookings(db)


@router.get("/today", response_model=list[BookingResponse])
async def list_today_bookings(db: AsyncSession = Depends(get_db)):
    return await booking_service.list_today_bookings(db)


@router.get("/available-times", response_model=list[TimeSlotResponse])
async def list_available_times(
    court_id: int = Query(...),
    slot_date: date = Query(..., alias="date"),
    db: AsyncSession = Depends(get_db),
    hours: BusinessHours = Depends(get_business_hours),
):
    """
    Fixed-width slots between opening and closing, each flagged available
    unless it overlaps a PENDING or CONFIRMED booking. Cached briefly in Redis.
    """
    cached = await get_cached_availability(court_id, slot_date)
    if cached is not None:
        return cached

    slots = await get_available_slots(db, court_id, slot_date, hours)
    payload = [TimeSlotResponse(**s._asdict()).model_dump(mode="json") for s in slots]
    await set_cached_availability(court_id, slot_date, payload)
    return payload


@router.get("/check", response_model=AvailabilityCheckResponse)
async def check_interval(
    court_id: int = Query(...),
    booking_date: date = Query(...),
    start_time: NaiveTime = Query(...),
    end_time: NaiveTime = Query(...),
    db: AsyncSession = Depends(get_db),
    scheduler: SchedulingCore = Depends(get_scheduler),
):
    """Whether the interval is free right now. Not a reservation."""
    request = BookingCreate(
        court_id=court_id,
        booking_date=booking_date,
        start_time=start_time,
        end_time=end_time,
    )
    available = await scheduler.check(db, request)
    return AvailabilityCheckResponse(court_id=court_id, available=available)


@router.get("/count/status/{booking_status}", response_model=StatusCountResponse)
async def count_by_status(booking_status: BookingStatus, db: AsyncSession = Depends(get_db)):
    count = await booking_service.count_bookings_by_status(db, booking_status)
    return StatusCountResponse(status=booking_status, count=count)


@router.get("/user/{user_id}", response_model=list[BookingResponse])
async def list_user_bookings(user_id: int, db: AsyncSession = Depends(get_db)):
    return await booking_service.list_user_bookings(db, user_id)


@router.get("/user/{user_id}/future", response_model=list[BookingResponse])
async def list_future_user_bookings(user_id: int, db: AsyncSession = Depends(get_db)):
    return await booking_service.list_future_user_bookings(db, user_id)


@router.get("/court/{court_id}", response_model=list[BookingResponse])
async def list_court_bookings(court_id: int, db: AsyncSession = Depends(get_db)):
    return await booking_service.list_court_bookings(db, court_id)


@router.get("/date/{booking_date}", response_model=list[BookingResponse])
async def list_bookings_by_date(booking_date: date, db: AsyncSession = Depends(get_db)):
    return await booking_service.list_bookings_by_date(db, booking_date)


@router.get("/status/{booking_status}", response_model=list[BookingResponse])
async def list_bookings_by_status(booking_status: BookingStatus, db: AsyncSession = Depends(get_db)):
    return await booking_service.list_bookings_by_status(db, booking_status)


@router.get("/{booking_id}", response_model=BookingResponse)
async def get_booking(booking_id: int, db: AsyncSession = Depends(get_db)):
    return await booking_service.get_booking(db, booking_id)


@router.put("/{booking_id}", response_model=BookingResponse)
async def update_booking(
    booking_id: int,
    booking_data: BookingUpdate,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
    hours: BusinessHours = Depends(get_business_hours),
):
    previous_date = (await booking_service.get_booking(db, booking_id)).booking_date
    booking = await booking_service.update_booking(db, booking_id, booking_data, hours)
    await db.commit()
    await invalidate_availability(booking.court_id, previous_date, booking.booking_date)
    return booking


@router.patch("/{booking_id}/status", response_model=BookingResponse)
async def update_booking_status(
    booking_id: int,
    status_data: BookingStatusUpdate,
    admin_id: int = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Set any status. No transition rules are enforced."""
    booking = await booking_service.update_booking_status(db, booking_id, status_data.status)
    await db.commit()
    await invalidate_availability(booking.court_id, booking.booking_date)
    return booking


@router.patch("/{booking_id}/cancel", response_model=BookingResponse)
async def cancel_booking(
    booking_id: int,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
    scheduler: SchedulingCore = Depends(get_scheduler),
):
    booking = await scheduler.cancel(db, booking_id)
    await db.commit()
    await invalidate_availability(booking.court_id, booking.booking_date)
    return booking


@router.patch("/{booking_id}/confirm", response_model=BookingResponse)
async def confirm_booking(
    booking_id: int,
    admin_id: int = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    booking = await booking_service.confirm_booking(db, booking_id)
    await db.commit()
    await invalidate_availability(booking.court_id, booking.booking_date)
    return booking


@router.delete("/{booking_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_booking(
    booking_id: int,
    admin_id: int = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    booking = await booking_service.delete_booking(db, booking_id)
    await db.commit()
    await invalidate_availability(booking.court_id, booking.booking_date)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
