"""Common time utilities."""

from __future__ import annotations

import datetime as dt

# Length of a report's discussion window, both at creation and after a comment.
DISCUSSION_WINDOW = dt.timedelta(days=1)


def utcnow() -> dt.datetime:
    """Return an aware UTC timestamp suitable for DB defaults."""
    return dt.datetime.now(dt.UTC)


def discussion_deadline(now: dt.datetime | None = None) -> dt.datetime:
    """Return the moment a discussion window opened at *now* closes."""
    return (now or utcnow()) + DISCUSSION_WINDOW
