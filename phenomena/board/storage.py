"""Persistence models for reports and their comments."""

from __future__ import annotations

import datetime as dt
import typing as typ

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.types import TypeDecorator

if typ.TYPE_CHECKING:
    from sqlalchemy.engine import Dialect
    from sqlalchemy.ext.asyncio import AsyncEngine

from phenomena.board.errors import TimezoneAwareRequiredError
from phenomena.common.time import discussion_deadline, utcnow


class Base(DeclarativeBase):
    """Base declarative class for board models."""


class UTCDateTime(TypeDecorator[dt.datetime]):
    """DateTime wrapper that round-trips UTC tzinfo even on SQLite."""

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(
        self, value: dt.datetime | None, dialect: Dialect
    ) -> dt.datetime | None:
        """Reject naive datetimes and bind aware ones as UTC."""
        if value is None:
            return None
        if value.tzinfo is None:
            raise TimezoneAwareRequiredError("bound timestamp")
        return value.astimezone(dt.UTC)

    def process_result_value(
        self, value: dt.datetime | None, dialect: Dialect
    ) -> dt.datetime | None:
        """Ensure result datetimes are UTC and timezone aware."""
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=dt.UTC)
        return value.astimezone(dt.UTC)


def _default_expiration() -> dt.datetime:
    return discussion_deadline(utcnow())


class Report(Base):
    """An anonymous incident submission and its discussion window.

    ``password`` is the only owner credential and must never leave the data
    access layer. ``is_open`` only moves from true to false, and
    ``expiration_date`` only moves forward.
    """

    __tablename__ = "reports"
    __table_args__ = (Index("ix_reports_is_open", "is_open"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(Text(), nullable=False)
    location: Mapped[str] = mapped_column(Text(), nullable=False)
    description: Mapped[str] = mapped_column(Text(), nullable=False)
    password: Mapped[str] = mapped_column(Text(), nullable=False)
    is_open: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    expiration_date: Mapped[dt.datetime] = mapped_column(
        UTCDateTime(), default=_default_expiration, nullable=False
    )


class Comment(Base):
    """A reply bound to exactly one report."""

    __tablename__ = "comments"
    __table_args__ = (Index("ix_comments_report_id", "report_id"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    report_id: Mapped[int] = mapped_column(ForeignKey("reports.id"), nullable=False)
    content: Mapped[str] = mapped_column(Text(), nullable=False)
    created_at: Mapped[dt.datetime] = mapped_column(
        UTCDateTime(), default=utcnow, nullable=False
    )


async def init_board_storage(engine: AsyncEngine) -> None:
    """Create all tables registered with Base if they are absent."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
