"""Configuration for the Phenomena store connection.

Usage
-----
Create a configuration with defaults:

>>> config = BoardConfig()
>>> config.database_url
'postgresql+asyncpg://localhost:5432/phenomena-dev'

Or load from environment variables:

>>> import os
>>> os.environ["PHENOMENA_DATABASE_URL"] = "sqlite+aiosqlite:///./board.db"
>>> BoardConfig.from_env().database_url
'sqlite+aiosqlite:///./board.db'

"""

from __future__ import annotations

import dataclasses as dc
import os

DEFAULT_DATABASE_URL = "postgresql+asyncpg://localhost:5432/phenomena-dev"

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


@dc.dataclass(frozen=True, slots=True)
class BoardConfig:
    """Connection settings for the report store.

    Attributes
    ----------
    database_url
        SQLAlchemy async URL for the relational store.
    echo_sql
        Emit every SQL statement through SQLAlchemy's engine logger.

    """

    database_url: str = DEFAULT_DATABASE_URL
    echo_sql: bool = False

    @staticmethod
    def _parse_bool(env_var: str, *, default: bool) -> bool:
        """Read a boolean env var, falling back to a default when unset."""
        raw = os.environ.get(env_var, "").strip().lower()
        if not raw:
            return default
        if raw in _TRUE_VALUES:
            return True
        if raw in _FALSE_VALUES:
            return False
        msg = f"{env_var} must be a boolean flag, got: {raw!r}"
        raise ValueError(msg)

    @classmethod
    def from_env(cls) -> BoardConfig:
        """Create configuration from environment variables.

        Reads ``PHENOMENA_DATABASE_URL`` (then the conventional
        ``DATABASE_URL``) and ``PHENOMENA_SQL_ECHO``.

        Raises
        ------
        ValueError
            If ``PHENOMENA_SQL_ECHO`` is not a recognised boolean flag.

        """
        database_url = DEFAULT_DATABASE_URL
        for env_var in ("PHENOMENA_DATABASE_URL", "DATABASE_URL"):
            raw = os.environ.get(env_var, "").strip()
            if raw:
                database_url = raw
                break

        return cls(
            database_url=database_url,
            echo_sql=cls._parse_bool("PHENOMENA_SQL_ECHO", default=False),
        )
