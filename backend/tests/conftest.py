"""
Pytest fixtures for the test database, HTTP client and seeded flights.

Each test gets a fresh file-backed SQLite database (through aiosqlite) with
the schema created from the models. Set TEST_DATABASE_URL to point the suite
at PostgreSQL instead; tables are then created and dropped around each test.
"""

import os

os.environ.setdefault("REDIS_ENABLED", "false")

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, AsyncEngine, create_async_engine, async_sessionmaker

from flight_booking.main import app
from flight_booking.db.base import Base
from flight_booking.db.session import get_db
from flight_booking.models.flight import Flight


@pytest_asyncio.fixture(scope="function")
async def test_engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    url = os.environ.get("TEST_DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'reservations.db'}")
    engine = create_async_engine(url, echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(test_engine: AsyncEngine) -> async_sessionmaker:
    """Factory for independent sessions, one per simulated concurrent request."""
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture(scope="function")
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture(scope="function")
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client whose requests each get their own session on the test database."""

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


async def _add_flight(session_factory, flight_number: str, total_seats: int, available_seats: int) -> Flight:
    async with session_factory() as session:
        flight = Flight(
            flight_number=flight_number,
            total_seats=total_seats,
            available_seats=available_seats,
        )
        session.add(flight)
        await session.commit()
        return flight


@pytest.fixture
def available_seats(session_factory):
    """Read a flight's committed seat count through a fresh session."""

    async def read(flight_id: int) -> int:
        async with session_factory() as session:
            flight = await session.get(Flight, flight_id)
            return flight.available_seats

    return read


@pytest_asyncio.fixture
async def test_flight(session_factory) -> Flight:
    """A flight with 100 free seats."""
    return await _add_flight(session_factory, "SK101", total_seats=100, available_seats=100)


@pytest_asyncio.fixture
async def sold_out_flight(session_factory) -> Flight:
    """A flight with 50 seats, none left."""
    return await _add_flight(session_factory, "SK202", total_seats=50, available_seats=0)


@pytest_asyncio.fixture
async def last_seat_flight(session_factory) -> Flight:
    """A flight with a single seat left."""
    return await _add_flight(session_factory, "SK303", total_seats=10, available_seats=1)
