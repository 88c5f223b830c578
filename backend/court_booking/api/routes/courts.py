"""
Court endpoints. Reads are public; changes need the ADMIN role.
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from court_booking.core.security import require_admin
from court_booking.db.session import get_db
from court_booking.schemas.court import CourtCreate, CourtResponse, CourtStatusUpdate, CourtUpdate
from court_booking.services import court_service

router = APIRouter(prefix="/courts", tags=["Courts"])


@router.post("/", response_model=CourtResponse, status_code=status.HTTP_201_CREATED)
async def create_court(
    court_data: CourtCreate,
    admin_id: int = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return await court_service.create_court(db, court_data)


@router.get("/", response_model=list[CourtResponse])
async def list_courts(
    active_only: bool = Query(False),
    db: AsyncSession = Depends(get_db),
):
    return await court_service.list_courts(db, active_only)


@router.get("/{court_id}", response_model=CourtResponse)
async def get_court(court_id: int, db: AsyncSession = Depends(get_db)):
    return await court_service.get_court(db, court_id)


@router.put("/{court_id}", response_model=CourtResponse)
async def update_court(
    court_id: int,
    court_data: CourtUpdate,
    admin_id: int = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Price changes apply to new bookings only."""
    return await court_service.update_court(db, court_id, court_data)


@router.patch("/{court_id}/status", response_model=CourtResponse)
async def set_court_status(
    court_id: int,
    status_data: CourtStatusUpdate,
    admin_id: int = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return await court_service.set_court_active(db, court_id, status_data.is_active)
