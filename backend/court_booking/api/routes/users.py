"""
User lookup endpoints.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from court_booking.core.security import get_current_user_id
from court_booking.db.session import get_db
from court_booking.schemas.user import UserResponse
from court_booking.services import user_service

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("/", response_model=list[UserResponse])
async def list_users(
    active_only: bool = Query(False),
    db: AsyncSession = Depends(get_db),
):
    return await user_service.list_users(db, active_only)


@router.get("/me", response_model=UserResponse)
async def get_me(
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    return await user_service.get_user(db, user_id)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: int, db: AsyncSession = Depends(get_db)):
    return await user_service.get_user(db, user_id)
