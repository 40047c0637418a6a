"""Falcon ASGI middleware for request logging and store lifecycle.

``RequestLogger`` writes one line per request with method, path, status and
latency. ``StoreLifespan`` hooks the ASGI lifespan protocol so the store is
connected once when the server starts and disposed when it stops.

Usage
-----
Register both when creating the Falcon app::

    app = falcon.asgi.App(
        middleware=[StoreLifespan(engine), RequestLogger()],
    )

"""

from __future__ import annotations

import time
import typing as typ

from phenomena.board.database import connect, dispose
from phenomena.logging import get_logger, log_info

if typ.TYPE_CHECKING:
    from falcon.asgi import Request, Response
    from sqlalchemy.ext.asyncio import AsyncEngine

__all__ = ["RequestLogger", "StoreLifespan"]

logger = get_logger(__name__)


class RequestLogger:
    """Log each request once its response status is known."""

    async def process_request(self, req: Request, _resp: Response) -> None:
        """Record the request start time on ``req.context``."""
        req.context.started_at = time.perf_counter()

    async def process_response(
        self,
        req: Request,
        resp: Response,
        _resource: object,
        req_succeeded: bool,  # noqa: FBT001 - Falcon middleware signature requires positional bool
    ) -> None:
        """Log method, path, status and elapsed milliseconds."""
        started_at = getattr(req.context, "started_at", None)
        elapsed_ms = (
            (time.perf_counter() - started_at) * 1000 if started_at is not None else 0.0
        )
        log_info(
            logger,
            "%s %s %s %.1fms%s",
            req.method,
            req.path,
            str(resp.status).split(" ", 1)[0],
            elapsed_ms,
            "" if req_succeeded else " (request failed)",
        )


class StoreLifespan:
    """Connect the store at ASGI startup and dispose it at shutdown.

    Parameters
    ----------
    engine
        Engine backing the application's session factory.

    """

    def __init__(self, engine: AsyncEngine) -> None:
        """Remember the engine whose lifecycle this middleware owns."""
        self._engine = engine

    async def process_startup(
        self, _scope: dict[str, typ.Any], _event: dict[str, typ.Any]
    ) -> None:
        """Verify connectivity and create missing tables."""
        await connect(self._engine)

    async def process_shutdown(
        self, _scope: dict[str, typ.Any], _event: dict[str, typ.Any]
    ) -> None:
        """Release pooled connections."""
        await dispose(self._engine)
