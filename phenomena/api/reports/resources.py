"""Report board API resources.

Routes
------
``GET /api/reports``
    Open reports with their comments, as ``{"reports": [...]}``.
``POST /api/reports``
    Create a report from ``{title, location, description, password}``.
``DELETE /api/reports/{report_id}``
    Close a report; the body carries ``{password}``.
``POST /api/reports/{report_id}/comments``
    Comment on a report from ``{content}``.

Bodies are decoded into msgspec structs, and store results are rendered
either as the camelCase view or through
:func:`~phenomena.api.errors.render_store_error`.
"""

from __future__ import annotations

import typing as typ

import falcon
import msgspec

from phenomena.api.errors import InvalidInputError, render_store_error
from phenomena.board.models import CloseRequest, CommentFields, ReportFields
from phenomena.board.result import Err, Ok

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from falcon.asgi import Request, Response

    from phenomena.board.result import StoreResult
    from phenomena.board.store import ReportStore

__all__ = ["ReportCommentsResource", "ReportResource", "ReportsResource"]


async def _decode_body[T](req: Request, struct_type: type[T]) -> T:
    """Decode the JSON request body into *struct_type*.

    Raises
    ------
    InvalidInputError
        If the body is empty or does not match the struct's fields.

    """
    media = await req.get_media(default_when_empty=None)
    if media is None:
        msg = "Request body is required"
        raise InvalidInputError(msg)
    try:
        return msgspec.convert(media, struct_type)
    except msgspec.ValidationError as exc:
        raise InvalidInputError(str(exc)) from exc


def _respond[T](
    resp: Response,
    result: StoreResult[T],
    render: cabc.Callable[[T], object] = msgspec.to_builtins,
) -> None:
    match result:
        case Ok(value=value):
            resp.media = render(value)
            resp.status = falcon.HTTP_200
        case Err(error=error):
            render_store_error(resp, error)


class _StoreResource:
    def __init__(self, report_store: ReportStore) -> None:
        """Configure the resource with the shared report store."""
        self._store = report_store


class ReportsResource(_StoreResource):
    """Collection resource for listing and creating reports."""

    async def on_get(self, _req: Request, resp: Response) -> None:
        """List open reports with comments and expiry flags."""
        result = await self._store.list_open_reports()
        _respond(
            resp, result, lambda reports: {"reports": msgspec.to_builtins(reports)}
        )

    async def on_post(self, req: Request, resp: Response) -> None:
        """Create a report; the response never includes the password."""
        fields = await _decode_body(req, ReportFields)
        _respond(resp, await self._store.create_report(fields))


class ReportResource(_StoreResource):
    """Item resource for closing a report."""

    async def on_delete(self, req: Request, resp: Response, *, report_id: int) -> None:
        """Close the report when the supplied password matches."""
        body = await _decode_body(req, CloseRequest)
        _respond(resp, await self._store.close_report(report_id, body.password))


class ReportCommentsResource(_StoreResource):
    """Sub-collection resource for commenting on a report."""

    async def on_post(self, req: Request, resp: Response, *, report_id: int) -> None:
        """Add a comment and renew the report's discussion window."""
        fields = await _decode_body(req, CommentFields)
        _respond(resp, await self._store.create_report_comment(report_id, fields))
