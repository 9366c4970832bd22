"""Tests for the daily operational error log."""

from datetime import datetime

from delivery_admin.infrastructure.error_log import FileOperationalErrorLog
from delivery_admin.utils import now_in_app_timezone


def test_record_appends_to_the_daily_file(tmp_path):
    error_log = FileOperationalErrorLog(tmp_path / "logs")

    error_log.record("Error in sending push notifications: boom")
    error_log.record("Error in sending push notifications: again")

    path = error_log.path_for(now_in_app_timezone())
    content = path.read_text(encoding="utf-8")
    assert path.name.startswith("error-")
    assert "Message: Error in sending push notifications: boom" in content
    assert content.count("Error in ") == 4


def test_file_name_uses_the_calendar_date(tmp_path):
    error_log = FileOperationalErrorLog(tmp_path)

    assert error_log.path_for(datetime(2025, 4, 8, 23, 59)).name == "error-2025-04-08.log"


def test_write_failures_are_swallowed(tmp_path, caplog):
    blocker = tmp_path / "not-a-directory"
    blocker.write_text("occupied", encoding="utf-8")
    error_log = FileOperationalErrorLog(blocker)

    with caplog.at_level("WARNING"):
        error_log.record("Error in sending push notifications: boom")

    assert "Failed to write operational error log" in caplog.text
