"""Error kinds and messages returned by report store operations."""

from __future__ import annotations

import dataclasses as dc
import enum
import typing as typ

from sqlalchemy.exc import SQLAlchemyError

REPORT_NOT_FOUND = "Report does not exist with that id"
PASSWORD_INCORRECT = "Password incorrect for this report, please try again"
REPORT_ALREADY_CLOSED = "This report has already been closed"
REPORT_NOT_UPDATED = "Report not updated"

COMMENT_REPORT_NOT_FOUND = "That report does not exist, no comment has been made"
COMMENT_REPORT_CLOSED = "That report has been closed, no comment has been made"
COMMENT_REPORT_EXPIRED = (
    "The discussion time on this report has expired, no comment has been made"
)

# Driver connection errors, such as an asyncpg refusal at pool checkout, are
# raised unwrapped. ``TimeoutError`` is an ``OSError``.
STORE_EXCEPTIONS: typ.Final = (SQLAlchemyError, OSError)


class ErrorKind(enum.StrEnum):
    """Classification of failures surfaced by ``ReportStore``."""

    NOT_FOUND = "not_found"
    UNAUTHORIZED = "unauthorized"
    INVALID_STATE = "invalid_state"
    STORE_FAILURE = "store_failure"
    CONCURRENCY_ANOMALY = "concurrency_anomaly"


@dc.dataclass(frozen=True, slots=True)
class StoreError:
    """A single failed store operation.

    Attributes
    ----------
    kind
        Machine-readable failure class.
    message
        Human-readable explanation, safe to show to the client.

    """

    kind: ErrorKind
    message: str

    @classmethod
    def not_found(cls, message: str) -> StoreError:
        """Return an error for a report id with no matching row."""
        return cls(ErrorKind.NOT_FOUND, message)

    @classmethod
    def unauthorized(cls) -> StoreError:
        """Return an error for a password that does not match the report."""
        return cls(ErrorKind.UNAUTHORIZED, PASSWORD_INCORRECT)

    @classmethod
    def invalid_state(cls, message: str) -> StoreError:
        """Return an error for an operation the report's state forbids."""
        return cls(ErrorKind.INVALID_STATE, message)

    @classmethod
    def store_failure(cls, exc: BaseException) -> StoreError:
        """Return an error wrapping an exception raised by the store."""
        return cls(ErrorKind.STORE_FAILURE, str(exc) or type(exc).__name__)

    @classmethod
    def not_updated(cls) -> StoreError:
        """Return an error for a close that lost a concurrent update race."""
        return cls(ErrorKind.CONCURRENCY_ANOMALY, REPORT_NOT_UPDATED)


class TimezoneAwareRequiredError(ValueError):
    """Raised when a naive datetime is bound to a timestamp column."""

    def __init__(self, context: str) -> None:
        """Attach a consistent message for the failing context."""
        super().__init__(f"{context} must be timezone aware")
