"""Health probe resources for liveness and readiness checks.

``HealthResource`` never touches the store. ``ReadyResource`` runs an
optional probe, normally a ``SELECT 1`` against the store engine, and reports
503 when it fails.

Usage
-----
Register health endpoints on the Falcon app::

    app.add_route("/health", HealthResource())
    app.add_route("/ready", ReadyResource(probe=functools.partial(ping, engine)))

"""

from __future__ import annotations

import typing as typ
from http import HTTPStatus

from phenomena.board.errors import STORE_EXCEPTIONS
from phenomena.logging import get_logger, log_warning

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from falcon.asgi import Request, Response

__all__ = ["HealthResource", "ReadyResource"]

logger = get_logger(__name__)

type Probe = cabc.Callable[[], cabc.Awaitable[None]]


class HealthResource:
    """Liveness probe resource returning ``{"status": "ok"}``."""

    async def on_get(self, _req: Request, resp: Response) -> None:
        """Handle GET /health requests."""
        resp.media = {"status": "ok"}
        resp.status = HTTPStatus.OK


class ReadyResource:
    """Readiness probe resource returning ``{"status": "ready"}``.

    Parameters
    ----------
    probe
        Coroutine function that raises a SQLAlchemy or connection error
        when the store cannot serve queries. Without a probe the service is
        always ready.

    """

    def __init__(self, probe: Probe | None = None) -> None:
        """Store the optional readiness probe."""
        self._probe = probe

    async def on_get(self, _req: Request, resp: Response) -> None:
        """Handle GET /ready requests."""
        if self._probe is not None:
            try:
                await self._probe()
            except STORE_EXCEPTIONS as exc:
                log_warning(logger, "Readiness probe failed: %s", exc)
                resp.media = {"status": "unavailable"}
                resp.status = HTTPStatus.SERVICE_UNAVAILABLE
                return

        resp.media = {"status": "ready"}
        resp.status = HTTPStatus.OK
