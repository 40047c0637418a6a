"""Report lifecycle operations over the relational store.

A report is open until its owner closes it with the password given at
creation, and accepts comments only while it is open and its discussion
window has not elapsed. Each accepted comment resets the window to one day
from the moment of the comment.

Every public coroutine returns a :data:`~phenomena.board.result.StoreResult`.
Guard failures come back as ``Err`` with a distinct kind and message, in the
order the guards are evaluated. SQLAlchemy exceptions and driver
connection errors (``OSError``, which covers timeouts) are logged and returned
as ``STORE_FAILURE``; nothing is retried.
"""

from __future__ import annotations

import collections
import hmac
import typing as typ

from sqlalchemy import select, update

from phenomena.board.errors import (
    COMMENT_REPORT_CLOSED,
    COMMENT_REPORT_EXPIRED,
    COMMENT_REPORT_NOT_FOUND,
    REPORT_ALREADY_CLOSED,
    REPORT_NOT_FOUND,
    STORE_EXCEPTIONS,
    StoreError,
)
from phenomena.board.models import (
    CloseAcknowledgement,
    CommentView,
    OpenReport,
    ReportSummary,
    comment_view,
    open_report,
    report_summary,
)
from phenomena.board.observability import BoardEventLogger
from phenomena.board.result import Err, Ok, StoreResult
from phenomena.board.storage import Comment, Report
from phenomena.common.time import discussion_deadline, utcnow

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    import datetime as dt

    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    from phenomena.board.models import CommentFields, ReportFields

__all__ = ["ReportStore"]

type SessionFactory = async_sessionmaker[AsyncSession]
type Clock = cabc.Callable[[], dt.datetime]


def _passwords_match(stored: str, supplied: str) -> bool:
    return hmac.compare_digest(stored.encode("utf-8"), supplied.encode("utf-8"))


def _check_closable(report: Report | None, password: str) -> StoreError | None:
    if report is None:
        return StoreError.not_found(REPORT_NOT_FOUND)
    if not _passwords_match(report.password, password):
        return StoreError.unauthorized()
    if not report.is_open:
        return StoreError.invalid_state(REPORT_ALREADY_CLOSED)
    return None


def _check_commentable(report: Report | None, now: dt.datetime) -> StoreError | None:
    if report is None:
        return StoreError.not_found(COMMENT_REPORT_NOT_FOUND)
    if not report.is_open:
        return StoreError.invalid_state(COMMENT_REPORT_CLOSED)
    if report.expiration_date < now:
        return StoreError.invalid_state(COMMENT_REPORT_EXPIRED)
    return None


class ReportStore:
    """Data access for reports and comments.

    Parameters
    ----------
    session_factory
        Session factory bound to the store engine. Created once at startup
        and shared by every operation; each call opens its own session.
    clock
        Source of the current time used for expiry checks and renewals.
        The deadline of a newly created report comes from the column
        default, which reads the wall clock instead.
    event_logger
        Receiver for structured lifecycle events.

    """

    def __init__(
        self,
        session_factory: SessionFactory,
        *,
        clock: Clock = utcnow,
        event_logger: BoardEventLogger | None = None,
    ) -> None:
        """Store the session factory and collaborators."""
        self._session_factory = session_factory
        self._clock = clock
        self._events = event_logger or BoardEventLogger()

    async def list_open_reports(self) -> StoreResult[list[OpenReport]]:
        """Return every open report with its comments and expiry flag.

        Comments for all open reports are fetched in one batched lookup and
        attached in insertion order. The lookup is skipped when no report is
        open.
        """
        try:
            async with self._session_factory() as session:
                reports = (
                    await session.scalars(
                        select(Report).where(Report.is_open).order_by(Report.id)
                    )
                ).all()
                if not reports:
                    return Ok([])

                report_ids = [report.id for report in reports]
                comments = (
                    await session.scalars(
                        select(Comment)
                        .where(Comment.report_id.in_(report_ids))
                        .order_by(Comment.id)
                    )
                ).all()
        except STORE_EXCEPTIONS as exc:
            return self._failure("list_open_reports", exc)

        comments_by_report: dict[int, list[Comment]] = collections.defaultdict(list)
        for comment in comments:
            comments_by_report[comment.report_id].append(comment)

        now = self._clock()
        return Ok(
            [
                open_report(report, comments_by_report.get(report.id, ()), now=now)
                for report in reports
            ]
        )

    async def create_report(self, fields: ReportFields) -> StoreResult[ReportSummary]:
        """Insert a new open report and return it without its password."""
        try:
            async with self._session_factory() as session:
                report = Report(
                    title=fields.title,
                    location=fields.location,
                    description=fields.description,
                    password=fields.password,
                )
                session.add(report)
                await session.commit()
                await session.refresh(report)
                summary = report_summary(report)
        except STORE_EXCEPTIONS as exc:
            return self._failure("create_report", exc)

        self._events.log_report_created(report_id=summary.id)
        return Ok(summary)

    async def _get_report(
        self,
        report_id: int,
        *,
        session: AsyncSession | None = None,
        for_update: bool = False,
    ) -> Report | None:
        """Return the stored report row, password included, or ``None``.

        Only close and comment creation use this to make their decisions.
        When *session* is given the lookup joins its transaction; with
        *for_update* the row is locked on dialects that support it.
        """
        stmt = select(Report).where(Report.id == report_id)
        if for_update:
            stmt = stmt.with_for_update()
        if session is not None:
            return await session.scalar(stmt)
        async with self._session_factory() as own_session:
            return await own_session.scalar(stmt)

    async def close_report(
        self, report_id: int, password: str
    ) -> StoreResult[CloseAcknowledgement]:
        """Close an open report when *password* matches its owner token.

        The update only matches a row that is still open, so a concurrent
        close landing between the guard read and the write is reported as
        ``CONCURRENCY_ANOMALY`` instead of succeeding twice.
        """
        try:
            async with self._session_factory() as session, session.begin():
                report = await self._get_report(report_id, session=session)
                error = _check_closable(report, password)
                if error is not None:
                    return self._rejected("close_report", report_id, error)

                result = await session.execute(
                    update(Report)
                    .where(Report.id == report_id, Report.is_open)
                    .values(is_open=False)
                    .execution_options(synchronize_session=False)
                )
                if result.rowcount == 0:
                    return self._rejected(
                        "close_report", report_id, StoreError.not_updated()
                    )
        except STORE_EXCEPTIONS as exc:
            return self._failure("close_report", exc)

        self._events.log_report_closed(report_id=report_id)
        return Ok(CloseAcknowledgement())

    async def create_report_comment(
        self, report_id: int, fields: CommentFields
    ) -> StoreResult[CommentView]:
        """Add a comment to an open, unexpired report and renew its window.

        The guard read, the comment insert and the expiration update share
        one transaction, so either both writes land or neither does.
        """
        now = self._clock()
        try:
            async with self._session_factory() as session, session.begin():
                report = await self._get_report(
                    report_id, session=session, for_update=True
                )
                error = _check_commentable(report, now)
                if error is not None:
                    return self._rejected("create_report_comment", report_id, error)

                # A missing report always fails the guard above.
                report = typ.cast("Report", report)
                comment = Comment(
                    report_id=report_id, content=fields.content, created_at=now
                )
                session.add(comment)
                report.expiration_date = discussion_deadline(now)
                await session.flush()
                view = comment_view(comment)
        except STORE_EXCEPTIONS as exc:
            return self._failure("create_report_comment", exc)

        self._events.log_comment_created(
            report_id=report_id,
            comment_id=view.id,
            expiration_date=discussion_deadline(now),
        )
        return Ok(view)

    def _rejected(self, operation: str, report_id: int, error: StoreError) -> Err:
        self._events.log_request_rejected(
            operation=operation, report_id=report_id, error=error
        )
        return Err(error)

    def _failure(self, operation: str, exc: Exception) -> Err:
        self._events.log_store_failed(operation=operation, exc=exc)
        return Err(StoreError.store_failure(exc))
