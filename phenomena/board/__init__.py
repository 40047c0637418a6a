"""Report lifecycle: storage models, views, typed results and the store."""

from __future__ import annotations

from .errors import ErrorKind, StoreError, TimezoneAwareRequiredError
from .models import (
    CloseAcknowledgement,
    CloseRequest,
    CommentFields,
    CommentView,
    OpenReport,
    ReportFields,
    ReportSummary,
)
from .result import Err, Ok, StoreResult, unwrap
from .storage import Comment, Report, init_board_storage
from .store import ReportStore

__all__ = [
    "CloseAcknowledgement",
    "CloseRequest",
    "Comment",
    "CommentFields",
    "CommentView",
    "Err",
    "ErrorKind",
    "Ok",
    "OpenReport",
    "Report",
    "ReportFields",
    "ReportStore",
    "ReportSummary",
    "StoreError",
    "StoreResult",
    "TimezoneAwareRequiredError",
    "init_board_storage",
    "unwrap",
]
