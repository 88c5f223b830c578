"""
Court service handling CRUD operations.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from court_booking.core.exceptions import NotFoundError
from court_booking.core.logging import get_logger
from court_booking.models.court import Court
from court_booking.schemas.court import CourtCreate, CourtUpdate

logger = get_logger(__name__)


async def create_court(db: AsyncSession, court_data: CourtCreate) -> Court:
    court = Court(
        name=court_data.name,
        description=court_data.description,
        hourly_price=court_data.hourly_price,
    )
    db.add(court)
    await db.flush()
    await db.refresh(court)

    logger.info("court_created", court_id=court.id, name=court.name, price=str(court.hourly_price))
    return court


async def get_court(db: AsyncSession, court_id: int) -> Court:
    result = await db.execute(select(Court).where(Court.id == court_id))
    court = result.scalar_one_or_none()

    if not court:
        raise NotFoundError(f"Court {court_id} not found")
    return court


async def lock_court(db: AsyncSession, court_id: int) -> Court:
    """
    Load the court with a row lock held until the transaction ends.

    Every booking write on a court goes through here first, so two requests
    for the same court run their conflict check and insert one after the other.
    """
    result = await db.execute(
        select(Court).where(Court.id == court_id).with_for_update()
    )
    court = result.scalar_one_or_none()

    if not court:
        raise NotFoundError(f"Court {court_id} not found")
    return court


async def list_courts(db: AsyncSession, active_only: bool = False) -> list[Court]:
    query = select(Court)
    if active_only:
        query = query.where(Court.is_active.is_(True))

    result = await db.execute(query.order_by(Court.name.asc()))
    return list(result.scalars().all())


async def update_court(db: AsyncSession, court_id: int, court_data: CourtUpdate) -> Court:
    court = await get_court(db, court_id)

    # Existing bookings keep the price they were created with
    court.name = court_data.name
    court.description = court_data.description
    court.hourly_price = court_data.hourly_price
    court.touch()

    await db.flush()
    await db.refresh(court)
    logger.info("court_updated", court_id=court.id)
    return court


async def set_court_active(db: AsyncSession, court_id: int, is_active: bool) -> Court:
    court = await get_court(db, court_id)
    court.is_active = is_active
    court.touch()

    await db.flush()
    await db.refresh(court)
    logger.info("court_status_changed", court_id=court.id, is_active=is_active)
    return court
