"""Plain data returned by the report store and accepted from callers.

Views are msgspec structs with camelCase wire names, so
``msgspec.to_builtins`` yields the JSON shape clients see. None of them
carries a password.
"""

from __future__ import annotations

import datetime as dt
import typing as typ

import msgspec

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from phenomena.board.storage import Comment, Report


class ReportFields(msgspec.Struct, kw_only=True, frozen=True):
    """Fields required to create a report."""

    title: str
    location: str
    description: str
    password: str


class CommentFields(msgspec.Struct, kw_only=True, frozen=True):
    """Fields required to comment on a report."""

    content: str


class CloseRequest(msgspec.Struct, kw_only=True, frozen=True):
    """Credential supplied when closing a report."""

    password: str


class CommentView(msgspec.Struct, kw_only=True, frozen=True, rename="camel"):
    """A stored comment.

    Attributes
    ----------
    id
        Store-assigned identifier, increasing in insertion order.
    report_id
        Identifier of the report the comment belongs to.
    content
        Comment text.
    created_at
        When the comment was stored.

    """

    id: int
    report_id: int
    content: str
    created_at: dt.datetime


class ReportSummary(msgspec.Struct, kw_only=True, frozen=True, rename="camel"):
    """Stored report fields with the password removed."""

    id: int
    title: str
    location: str
    description: str
    is_open: bool
    expiration_date: dt.datetime


class OpenReport(ReportSummary, kw_only=True, frozen=True, rename="camel"):
    """An open report with its comments and read-time expiry flag.

    Attributes
    ----------
    comments
        Comments in insertion order; empty when none exist.
    is_expired
        Whether the discussion window had elapsed when the view was built.

    """

    comments: tuple[CommentView, ...] = ()
    is_expired: bool = False


class CloseAcknowledgement(msgspec.Struct, kw_only=True, frozen=True):
    """Confirmation that a report was closed."""

    message: str = "Report successfully closed!"


def comment_view(comment: Comment) -> CommentView:
    """Build the public view of a stored comment."""
    return CommentView(
        id=comment.id,
        report_id=comment.report_id,
        content=comment.content,
        created_at=comment.created_at,
    )


def report_summary(report: Report) -> ReportSummary:
    """Build the password-free view of a stored report."""
    return ReportSummary(
        id=report.id,
        title=report.title,
        location=report.location,
        description=report.description,
        is_open=report.is_open,
        expiration_date=report.expiration_date,
    )


def open_report(
    report: Report,
    comments: cabc.Sequence[Comment],
    *,
    now: dt.datetime,
) -> OpenReport:
    """Build the listing view of *report* as seen at *now*."""
    return OpenReport(
        id=report.id,
        title=report.title,
        location=report.location,
        description=report.description,
        is_open=report.is_open,
        expiration_date=report.expiration_date,
        comments=tuple(comment_view(comment) for comment in comments),
        is_expired=report.expiration_date < now,
    )
