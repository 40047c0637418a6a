"""Application factory for the Phenomena Falcon ASGI application.

This module provides ``create_app()`` which builds the Falcon ASGI
application with health endpoints and, when a report store is supplied, the
report board endpoints under ``/api``.

Usage
-----
Create a health-only app (no database)::

    app = create_app()

Create a full app with the board endpoints::

    from phenomena.api.app import AppDependencies, create_app

    deps = AppDependencies(report_store=ReportStore(session_factory), engine=engine)
    app = create_app(deps)

"""

from __future__ import annotations

import dataclasses as dc
import functools
import typing as typ

import falcon.asgi

from phenomena.api.errors import InvalidInputError, handle_invalid_input
from phenomena.api.health.resources import HealthResource, ReadyResource
from phenomena.api.middleware import RequestLogger, StoreLifespan
from phenomena.board.database import ping

if typ.TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncEngine

    from phenomena.board.store import ReportStore

__all__ = ["API_PREFIX", "AppDependencies", "create_app"]

API_PREFIX = "/api"


@dc.dataclass(frozen=True, slots=True)
class AppDependencies:
    """Dependencies for the Falcon ASGI application.

    Attributes
    ----------
    report_store
        Store serving the board endpoints. When ``None`` only health
        endpoints are registered.
    engine
        Engine behind the store. When provided, the app connects it at
        ASGI startup, disposes it at shutdown and probes it from ``/ready``.

    """

    report_store: ReportStore | None = None
    engine: AsyncEngine | None = None


def create_app(
    dependencies: AppDependencies | None = None,
) -> falcon.asgi.App:
    """Create and configure the Falcon ASGI application.

    Parameters
    ----------
    dependencies
        Optional application dependencies. When ``None``, only health
        endpoints are available.

    Returns
    -------
    falcon.asgi.App
        Configured Falcon ASGI application with CORS enabled for all
        origins.

    """
    deps = dependencies or AppDependencies()

    middleware: list[object] = []
    if deps.engine is not None:
        middleware.append(StoreLifespan(deps.engine))
    middleware.append(RequestLogger())

    app = falcon.asgi.App(middleware=middleware, cors_enable=True)

    app.add_route("/health", HealthResource())
    probe = functools.partial(ping, deps.engine) if deps.engine is not None else None
    app.add_route("/ready", ReadyResource(probe=probe))

    if deps.report_store is not None:
        from phenomena.api.reports.resources import (
            ReportCommentsResource,
            ReportResource,
            ReportsResource,
        )

        store = deps.report_store
        app.add_route(f"{API_PREFIX}/reports", ReportsResource(store))
        app.add_route(f"{API_PREFIX}/reports/{{report_id:int}}", ReportResource(store))
        app.add_route(
            f"{API_PREFIX}/reports/{{report_id:int}}/comments",
            ReportCommentsResource(store),
        )

    app.add_error_handler(InvalidInputError, handle_invalid_input)

    return app
