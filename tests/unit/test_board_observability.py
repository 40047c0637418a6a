"""Unit tests for board lifecycle observability logging."""

from __future__ import annotations

import datetime as dt

import pytest

from phenomena.board import StoreError
from phenomena.board.observability import BoardEventLogger, BoardEventType
from tests.helpers.femtologging_capture import WARNING_LEVELS, capture_femto_logs

_LOGGER_NAME = "phenomena.board.observability"


class TestBoardEventLogger:
    """Tests for ``BoardEventLogger`` structured log events."""

    @pytest.fixture
    def logger_instance(self) -> BoardEventLogger:
        """Return a fresh board event logger."""
        return BoardEventLogger()

    def test_log_report_created_emits_info(
        self,
        logger_instance: BoardEventLogger,
    ) -> None:
        """Creation events are logged at INFO with the report id."""
        with capture_femto_logs(_LOGGER_NAME) as capture:
            logger_instance.log_report_created(report_id=7)
            capture.wait_for_count(1)
            record = capture.records[0]
            assert record.level == "INFO"
            assert BoardEventType.REPORT_CREATED in record.message
            assert "report_id=7" in record.message

    def test_log_comment_created_includes_deadline(
        self,
        logger_instance: BoardEventLogger,
    ) -> None:
        """Comment events carry the renewed expiration date."""
        deadline = dt.datetime(2024, 7, 2, 9, 30, tzinfo=dt.UTC)

        with capture_femto_logs(_LOGGER_NAME) as capture:
            logger_instance.log_comment_created(
                report_id=3, comment_id=11, expiration_date=deadline
            )
            capture.wait_for_count(1)
            record = capture.records[0]
            assert BoardEventType.COMMENT_CREATED in record.message
            assert "comment_id=11" in record.message
            assert "expiration_date=2024-07-02T09:30:00+00:00" in record.message

    def test_log_request_rejected_emits_warning(
        self,
        logger_instance: BoardEventLogger,
    ) -> None:
        """Guard failures are logged at WARNING with kind and message."""
        with capture_femto_logs(_LOGGER_NAME) as capture:
            logger_instance.log_request_rejected(
                operation="close_report",
                report_id=5,
                error=StoreError.unauthorized(),
            )
            capture.wait_for_count(1)
            record = capture.records[0]
            assert record.level in WARNING_LEVELS
            assert "operation=close_report" in record.message
            assert "kind=unauthorized" in record.message

    def test_log_store_failed_emits_error_with_exc_info(
        self,
        logger_instance: BoardEventLogger,
    ) -> None:
        """Store failures are logged at ERROR with the exception attached."""
        with capture_femto_logs(_LOGGER_NAME) as capture:
            logger_instance.log_store_failed(
                operation="list_open_reports", exc=RuntimeError("boom")
            )
            capture.wait_for_count(1)
            record = capture.records[0]
            assert record.level == "ERROR"
            assert BoardEventType.STORE_FAILED in record.message
            assert "error_type=RuntimeError" in record.message
            assert record.exc_info is not None
