"""Store handle construction and its startup/shutdown lifecycle.

Building the engine performs no I/O; the connection is first exercised by
:func:`connect`, which the runtime calls once at process startup.

Usage
-----
>>> engine = create_engine(BoardConfig.from_env())
>>> session_factory = create_session_factory(engine)
>>> await connect(engine)
>>> store = ReportStore(session_factory)

"""

from __future__ import annotations

import typing as typ

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from phenomena.board.storage import init_board_storage
from phenomena.logging import get_logger, log_info

if typ.TYPE_CHECKING:
    from phenomena.config import BoardConfig

__all__ = ["connect", "create_engine", "create_session_factory", "dispose", "ping"]

logger = get_logger(__name__)


def _describe(engine: AsyncEngine) -> str:
    return engine.url.render_as_string(hide_password=True)


def create_engine(config: BoardConfig) -> AsyncEngine:
    """Return an async engine for the configured database URL."""
    return create_async_engine(config.database_url, echo=config.echo_sql)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Return the session factory shared by every store operation."""
    return async_sessionmaker(engine, expire_on_commit=False)


async def ping(engine: AsyncEngine) -> None:
    """Round-trip a trivial statement, raising on any connection failure."""
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))


async def connect(engine: AsyncEngine) -> None:
    """Verify connectivity and create missing board tables.

    Raises
    ------
    sqlalchemy.exc.SQLAlchemyError
        If the schema cannot be created or the database rejects a statement.
    OSError
        If the driver cannot reach the database server.

    """
    await ping(engine)
    await init_board_storage(engine)
    log_info(logger, "Connected to %s", _describe(engine))


async def dispose(engine: AsyncEngine) -> None:
    """Close pooled connections held by *engine*."""
    await engine.dispose()
    log_info(logger, "Disposed engine for %s", _describe(engine))
