"""Request-layer exceptions and the mapping from store errors to HTTP.

Usage
-----
Register the validation handler on the Falcon app::

    app.add_error_handler(InvalidInputError, handle_invalid_input)

Render a failed store result from a resource::

    render_store_error(resp, error)

"""

from __future__ import annotations

import typing as typ

import falcon

from phenomena.board.errors import ErrorKind, StoreError

if typ.TYPE_CHECKING:
    from falcon.asgi import Request, Response

__all__ = [
    "STATUS_BY_KIND",
    "InvalidInputError",
    "handle_invalid_input",
    "render_store_error",
]

STATUS_BY_KIND: typ.Final[dict[ErrorKind, str]] = {
    ErrorKind.NOT_FOUND: falcon.HTTP_404,
    ErrorKind.UNAUTHORIZED: falcon.HTTP_401,
    ErrorKind.INVALID_STATE: falcon.HTTP_409,
    ErrorKind.CONCURRENCY_ANOMALY: falcon.HTTP_409,
    ErrorKind.STORE_FAILURE: falcon.HTTP_500,
}


class InvalidInputError(Exception):
    """Raised for request bodies that should map to HTTP 400.

    Attributes
    ----------
    reason
        Human-readable description of the validation failure.

    """

    def __init__(self, reason: str) -> None:
        """Initialize with a validation reason."""
        self.reason = reason
        super().__init__(reason)


async def handle_invalid_input(
    _req: Request,
    resp: Response,
    ex: InvalidInputError,
    _params: dict[str, typ.Any],
) -> None:
    """Map ``InvalidInputError`` to an HTTP 400 JSON response."""
    resp.status = falcon.HTTP_400
    resp.media = {"title": "Invalid input", "description": ex.reason}


def render_store_error(resp: Response, error: StoreError) -> None:
    """Populate *resp* with the status and body for a failed store result.

    The body carries the error kind as ``name`` and the store message as
    ``message``.
    """
    resp.status = STATUS_BY_KIND[error.kind]
    resp.media = {"name": error.kind.value, "message": error.message}
