"""Phenomena runtime entrypoint.

This module provides the ASGI application factory used by Granian. It reads
:class:`~phenomena.config.BoardConfig` from the environment, builds the
store handle (engine and session factory) once, and passes it explicitly to
the report store and the application. The engine is first exercised at ASGI
startup, never at import.

Configuration is driven by environment variables:

- ``PHENOMENA_HOST``: Bind address (default ``0.0.0.0``)
- ``PHENOMENA_PORT``: Listen port (default ``3030``)
- ``PHENOMENA_LOG_LEVEL``: Log level (default ``INFO``)
- ``PHENOMENA_DATABASE_URL`` / ``DATABASE_URL``: Database connection URL
- ``PHENOMENA_SQL_ECHO``: Log every SQL statement

Run the service directly with ``python -m phenomena.runtime``.
"""

from __future__ import annotations

import os
import typing as typ

from phenomena.logging import (
    configure_logging,
    get_logger,
    log_error,
    log_info,
    log_warning,
)

if typ.TYPE_CHECKING:
    import falcon.asgi

__all__ = ["create_app", "main"]

logger = get_logger(__name__)

# TCP port number range limits
_MIN_PORT = 1
_MAX_PORT = 65535
_DEFAULT_PORT = "3030"


def _parse_port(port_str: str) -> int:
    """Parse and validate a port number string.

    Raises
    ------
    SystemExit
        If port_str is not a valid integer in range 1-65535.

    """
    try:
        port = int(port_str)
        if not (_MIN_PORT <= port <= _MAX_PORT):
            msg = f"port {port} outside valid range {_MIN_PORT}-{_MAX_PORT}"
            raise ValueError(msg)  # noqa: TRY301 - unify conversion and range errors
    except ValueError as exc:
        log_error(
            logger,
            "Invalid PHENOMENA_PORT value: %r (must be %d-%d): %s",
            port_str,
            _MIN_PORT,
            _MAX_PORT,
            exc,
        )
        raise SystemExit(1) from exc
    return port


def create_app() -> falcon.asgi.App:
    """Create the Falcon ASGI application with the report board mounted.

    Returns
    -------
    falcon.asgi.App
        Application whose lifespan connects the store at startup.

    """
    from phenomena.api.app import AppDependencies
    from phenomena.api.app import create_app as _create_api_app
    from phenomena.board.database import create_engine, create_session_factory
    from phenomena.board.store import ReportStore
    from phenomena.config import BoardConfig

    config = BoardConfig.from_env()
    engine = create_engine(config)
    session_factory = create_session_factory(engine)

    deps = AppDependencies(report_store=ReportStore(session_factory), engine=engine)
    return _create_api_app(deps)


def main() -> None:
    """Start the Phenomena server using Granian.

    Reads ``PHENOMENA_HOST``, ``PHENOMENA_PORT``, and ``PHENOMENA_LOG_LEVEL``
    from the environment and starts the ASGI server.
    """
    from granian import Granian
    from granian.constants import Interfaces

    host = os.environ.get("PHENOMENA_HOST", "0.0.0.0")  # noqa: S104 - bind all interfaces for container
    port = _parse_port(os.environ.get("PHENOMENA_PORT", _DEFAULT_PORT))
    log_level_str = os.environ.get("PHENOMENA_LOG_LEVEL", "INFO")

    normalized_level, invalid_level = configure_logging(log_level_str)
    if invalid_level:
        log_warning(
            logger,
            "Invalid PHENOMENA_LOG_LEVEL %r, falling back to %s",
            log_level_str,
            normalized_level,
        )

    log_info(
        logger,
        "Starting Phenomena on %s:%d (log_level=%s)",
        host,
        port,
        normalized_level,
    )

    server = Granian(
        "phenomena.runtime:create_app",
        address=host,
        port=port,
        interface=Interfaces.ASGI,
        factory=True,
    )
    server.serve()


if __name__ == "__main__":
    main()
