"""Shared fixtures for unit and feature tests."""

from __future__ import annotations

import asyncio
import datetime as dt
import typing as typ

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool

from phenomena.board import ReportFields, ReportStore, init_board_storage

if typ.TYPE_CHECKING:
    from pathlib import Path


class MutableClock:
    """Test clock that stays put until advanced."""

    def __init__(self, now: dt.datetime) -> None:
        self.now = now

    def __call__(self) -> dt.datetime:
        return self.now

    def advance(self, delta: dt.timedelta) -> None:
        self.now += delta


@pytest.fixture
def engine(tmp_path: Path) -> typ.Iterator[AsyncEngine]:
    """Yield an engine bound to a fresh SQLite database with board tables.

    ``NullPool`` keeps no connection between checkouts, so the engine can be
    driven from pytest-asyncio tests, ``asyncio.run`` and Falcon's test
    client alike.
    """
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'phenomena_test.db'}",
        poolclass=NullPool,
    )
    asyncio.run(init_board_storage(engine))
    try:
        yield engine
    finally:
        asyncio.run(engine.dispose())


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Return a session factory bound to the test engine."""
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest.fixture
def clock() -> MutableClock:
    """Return a clock pinned to the current UTC time."""
    return MutableClock(dt.datetime.now(dt.UTC))


@pytest.fixture
def report_store(
    session_factory: async_sessionmaker[AsyncSession], clock: MutableClock
) -> ReportStore:
    """Return a ReportStore reading time from the test clock."""
    return ReportStore(session_factory, clock=clock)


@pytest.fixture
def leak_fields() -> ReportFields:
    """Return the fields of a typical incident report."""
    return ReportFields(
        title="Leak",
        location="5th Ave",
        description="Gas smell",
        password="p1",
    )
