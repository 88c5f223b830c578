"""
Pytest fixtures for test database, client, and authentication.

Each test gets its own in-memory SQLite database (aiosqlite), so tests are
isolated without a running PostgreSQL. Redis is disabled; the availability
cache degrades to a pass-through.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("REDIS_ENABLED", "false")
os.environ.setdefault("SCHEDULING_MODE", "exclusive")

from datetime import date, timedelta
from decimal import Decimal
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from court_booking.main import app
from court_booking.db.base import Base
from court_booking.db.session import get_db
from court_booking.core.security import create_access_token, hash_password
from court_booking.models.court import Court
from court_booking.models.user import User, UserRole
from court_booking.services.business_hours import BusinessHours

TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest_asyncio.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create tables on a fresh in-memory database and yield a session."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session

    await engine.dispose()


def make_client(application, db_session: AsyncSession) -> AsyncClient:
    """AsyncClient bound to `application` with get_db pinned to the test session."""

    async def override_get_db():
        try:
            yield db_session
            await db_session.commit()
        except Exception:
            await db_session.rollback()
            raise

    application.dependency_overrides[get_db] = override_get_db
    return AsyncClient(transport=ASGITransport(app=application), base_url="http://test")


@pytest_asyncio.fixture(scope="function")
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client that overrides the DB dependency with the test session."""
    async with make_client(app, db_session) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def hours() -> BusinessHours:
    return BusinessHours()


@pytest.fixture
def tomorrow() -> date:
    return date.today() + timedelta(days=1)


async def create_user(
    db_session: AsyncSession,
    email: str,
    name: str = "Test Player",
    role: UserRole = UserRole.CLIENT,
) -> User:
    user = User(
        name=name,
        email=email,
        hashed_password=hash_password("testpassword123"),
        role=role.value,
    )
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


def bearer(user: User) -> dict:
    token = create_access_token(data={"sub": str(user.id), "role": user.role})
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def test_user(db_session: AsyncSession) -> User:
    """A regular client account."""
    return await create_user(db_session, "test@example.com")


@pytest_asyncio.fixture
async def other_user(db_session: AsyncSession) -> User:
    return await create_user(db_session, "other@example.com", name="Other Player")


@pytest_asyncio.fixture
async def admin_user(db_session: AsyncSession) -> User:
    return await create_user(db_session, "admin@example.com", name="Club Admin", role=UserRole.ADMIN)


@pytest_asyncio.fixture
async def auth_headers(test_user: User) -> dict:
    """Authorization headers with Bearer token."""
    return bearer(test_user)


@pytest_asyncio.fixture
async def admin_headers(admin_user: User) -> dict:
    return bearer(admin_user)


@pytest_asyncio.fixture
async def test_court(db_session: AsyncSession) -> Court:
    """An active court at 50.00 per hour."""
    court = Court(name="Court 1", description="Clay", hourly_price=Decimal("50.00"))
    db_session.add(court)
    await db_session.commit()
    await db_session.refresh(court)
    return court
