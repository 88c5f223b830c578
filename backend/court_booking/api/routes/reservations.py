"""
Shared-slot reservation endpoints, mounted when SCHEDULING_MODE=shared.
"""

from fastapi import APIRouter, Depends, Query, status
from pydantic import NaiveDatetime
from sqlalchemy.ext.asyncio import AsyncSession

from court_booking.core.security import get_current_user_id
from court_booking.db.session import get_db
from court_booking.schemas.reservation import ReservationCreate, ReservationResponse
from court_booking.services import reservation_service
from court_booking.services.interfaces.scheduling import SchedulingCore
from court_booking.services.strategy_factory import get_scheduler

router = APIRouter(prefix="/reservations", tags=["Reservations"])


@router.post("/", response_model=ReservationResponse, status_code=status.HTTP_201_CREATED)
async def reserve_slot(
    reservation_data: ReservationCreate,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
    scheduler: SchedulingCore = Depends(get_scheduler),
):
    """
    Join the slot's confirmed reservation, or open one if there is none.
    Returns 400 when the slot is full or the court is unavailable.
    """
    reservation = await scheduler.create(db, user_id, reservation_data)
    await db.commit()
    return reservation


@router.get("/", response_model=list[ReservationResponse])
async def list_reservations(db: AsyncSession = Depends(get_db)):
    return await reservation_service.list_reservations(db)


@router.get("/check")
async def check_slot(
    court_id: int = Query(...),
    starts_at: NaiveDatetime = Query(...),
    db: AsyncSession = Depends(get_db),
    scheduler: SchedulingCore = Depends(get_scheduler),
):
    request = ReservationCreate(court_id=court_id, starts_at=starts_at)
    return {"court_id": court_id, "available": await scheduler.check(db, request)}


@router.get("/court/{court_id}", response_model=list[ReservationResponse])
async def list_court_reservations(court_id: int, db: AsyncSession = Depends(get_db)):
    return await reservation_service.list_court_reservations(db, court_id)


@router.get("/user/{user_id}", response_model=list[ReservationResponse])
async def list_user_reservations(user_id: int, db: AsyncSession = Depends(get_db)):
    return await reservation_service.list_user_reservations(db, user_id)


@router.get("/{reservation_id}", response_model=ReservationResponse)
async def get_reservation(reservation_id: int, db: AsyncSession = Depends(get_db)):
    return await reservation_service.get_reservation(db, reservation_id)


@router.patch("/{reservation_id}/cancel", response_model=ReservationResponse)
async def cancel_reservation(
    reservation_id: int,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
    scheduler: SchedulingCore = Depends(get_scheduler),
):
    reservation = await scheduler.cancel(db, reservation_id)
    await db.commit()
    return reservation
