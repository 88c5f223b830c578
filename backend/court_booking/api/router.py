"""
Central API router that aggregates all route modules.
The scheduling routes depend on the deployment's SCHEDULING_MODE.
"""

from fastapi import APIRouter

from court_booking.api.routes import auth, bookings, courts, reservations, users
from court_booking.core.config import get_settings
from court_booking.services.strategy_factory import EXCLUSIVE, SCHEDULING_MODES, SHARED


def build_api_router(mode: str) -> APIRouter:
    if mode not in SCHEDULING_MODES:
        raise ValueError(f"Unknown scheduling mode {mode!r}, expected one of {SCHEDULING_MODES}")

    router = APIRouter(prefix="/api/v1")
    router.include_router(auth.router)
    router.include_router(users.router)
    router.include_router(courts.router)

    if mode == EXCLUSIVE:
        router.include_router(bookings.router)
    elif mode == SHARED:
        router.include_router(reservations.router)
    return router


api_router = build_api_router(get_settings().SCHEDULING_MODE)
