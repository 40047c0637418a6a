"""Emit structured observability events for the report lifecycle.

Usage
-----
>>> event_logger = BoardEventLogger()
>>> event_logger.log_report_closed(report_id=7)

"""

from __future__ import annotations

import enum
import typing as typ

from phenomena.logging import get_logger, log_exception, log_info, log_warning

if typ.TYPE_CHECKING:
    import datetime as dt

    from phenomena.board.errors import StoreError

logger = get_logger(__name__)


class BoardEventType(enum.StrEnum):
    """Structured log event types for report store operations."""

    REPORT_CREATED = "board.report.created"
    REPORT_CLOSED = "board.report.closed"
    COMMENT_CREATED = "board.comment.created"
    REQUEST_REJECTED = "board.request.rejected"
    STORE_FAILED = "board.store.failed"


class BoardEventLogger:
    """Emit structured board events via femtologging."""

    def log_report_created(self, *, report_id: int) -> None:
        """Log a newly stored report."""
        log_info(logger, "[%s] report_id=%d", BoardEventType.REPORT_CREATED, report_id)

    def log_report_closed(self, *, report_id: int) -> None:
        """Log a report transitioning from open to closed."""
        log_info(logger, "[%s] report_id=%d", BoardEventType.REPORT_CLOSED, report_id)

    def log_comment_created(
        self,
        *,
        report_id: int,
        comment_id: int,
        expiration_date: dt.datetime,
    ) -> None:
        """Log an accepted comment and the renewed discussion deadline."""
        log_info(
            logger,
            "[%s] report_id=%d comment_id=%d expiration_date=%s",
            BoardEventType.COMMENT_CREATED,
            report_id,
            comment_id,
            expiration_date.isoformat(),
        )

    def log_request_rejected(
        self,
        *,
        operation: str,
        report_id: int,
        error: StoreError,
    ) -> None:
        """Log an operation refused by a lifecycle guard."""
        log_warning(
            logger,
            "[%s] operation=%s report_id=%d kind=%s message=%s",
            BoardEventType.REQUEST_REJECTED,
            operation,
            report_id,
            error.kind,
            error.message,
        )

    def log_store_failed(self, *, operation: str, exc: BaseException) -> None:
        """Log a store exception with its traceback."""
        log_exception(
            logger,
            f"[{BoardEventType.STORE_FAILED}] operation={operation} "
            f"error_type={type(exc).__name__}",
            exc,
        )
