"""
Tests for the seat ledger's bounded increment/decrement.
"""

import asyncio

import pytest

from flight_booking.services import seat_ledger


@pytest.mark.asyncio
async def test_decrement_takes_one_seat(db_session, test_flight, available_seats):
    assert await seat_ledger.decrement(db_session, test_flight.id) is True
    await db_session.commit()

    assert await available_seats(test_flight.id) == 99


@pytest.mark.asyncio
async def test_decrement_sold_out_flight_changes_nothing(db_session, sold_out_flight, available_seats):
    assert await seat_ledger.decrement(db_session, sold_out_flight.id) is False
    await db_session.commit()

    assert await available_seats(sold_out_flight.id) == 0


@pytest.mark.asyncio
async def test_increment_never_exceeds_total(db_session, test_flight, available_seats):
    """A full flight refuses another seat."""
    assert await seat_ledger.increment(db_session, test_flight.id) is False
    await db_session.commit()

    assert await available_seats(test_flight.id) == 100


@pytest.mark.asyncio
async def test_increment_after_decrement(db_session, last_seat_flight, available_seats):
    assert await seat_ledger.decrement(db_session, last_seat_flight.id) is True
    assert await seat_ledger.increment(db_session, last_seat_flight.id) is True
    assert await seat_ledger.increment(db_session, last_seat_flight.id) is True
    await db_session.commit()

    assert await available_seats(last_seat_flight.id) == 2


@pytest.mark.asyncio
async def test_unknown_flight_is_refused(db_session):
    assert await seat_ledger.decrement(db_session, 99999) is False
    assert await seat_ledger.increment(db_session, 99999) is False


@pytest.mark.asyncio
async def test_ledger_changes_roll_back_with_the_transaction(db_session, test_flight, available_seats):
    assert await seat_ledger.decrement(db_session, test_flight.id) is True
    await db_session.rollback()

    assert await available_seats(test_flight.id) == 100


@pytest.mark.asyncio
async def test_concurrent_decrements_never_go_negative(session_factory, last_seat_flight, available_seats):
    async def take_seat() -> bool:
        async with session_factory() as session:
            taken = await seat_ledger.decrement(session, last_seat_flight.id)
            await session.commit()
            return taken

    results = await asyncio.gather(*(take_seat() for _ in range(5)))

    assert results.count(True) == 1
    assert await available_seats(last_seat_flight.id) == 0
