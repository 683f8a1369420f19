"""Shared fixtures: an in-memory SQLite session plus seeded users and campsites."""

from __future__ import annotations

from collections.abc import AsyncIterator

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from campsite_api.db.connection import create_engine
from campsite_api.db.models import Base, Campsite, User
from tests.campsite.support.ids import (
    ALICE_ID,
    BOB_ID,
    CAMP_LAKE_ID,
    CAMP_REDWOOD_ID,
    CAMP_RIDGE_ID,
)


@pytest_asyncio.fixture
async def session() -> AsyncIterator[AsyncSession]:
    """Provide an in-memory SQLite session for integration-style tests."""
    pytest.importorskip("aiosqlite")
    engine = create_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    async_session = async_sessionmaker(engine, expire_on_commit=False)
    async with async_session() as db_session:
        yield db_session
        if db_session.in_transaction():
            await db_session.rollback()
    await engine.dispose()


@pytest_asyncio.fixture
async def seeded_session(session: AsyncSession) -> AsyncSession:
    """Session with two users and three campsites already flushed."""
    session.add_all(
        [
            User(id=ALICE_ID, username="alice", first_name="Alice", last_name="Ng"),
            User(id=BOB_ID, username="bob", first_name="Bob", last_name="Ruiz"),
            Campsite(
                id=CAMP_REDWOOD_ID,
                name="Redwood Hollow Campground",
                description="Old-growth redwoods with creek-side tent pads.",
                image="images/redwood-hollow.jpg",
                elevation=1233,
                cost=55,
                featured=False,
            ),
            Campsite(
                id=CAMP_LAKE_ID,
                name="Crater Lake Campground",
                description="Lakeshore sites with a boat launch.",
                image="images/crater-lake.jpg",
                elevation=877,
                cost=65,
                featured=True,
            ),
            Campsite(
                id=CAMP_RIDGE_ID,
                name="Eagle Ridge Campground",
                description="Walk-in sites along the ridgeline trail.",
                image="images/eagle-ridge.jpg",
                elevation=2901,
                cost=25,
                featured=False,
            ),
        ]
    )
    await session.flush()
    return session
