"""Daily file log for failures that happen after a request was answered."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

from delivery_admin.utils import app_date_stamp, now_in_app_timezone

logger = logging.getLogger(__name__)


class FileOperationalErrorLog:
    """Append error records to ``<directory>/error-YYYY-MM-DD.log``.

    The date is taken in the application timezone. Failures to write are
    logged and swallowed.
    """

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)

    def path_for(self, moment: datetime) -> Path:
        return self.directory / f"error-{app_date_stamp(moment)}.log"

    def record(self, message: str) -> None:
        now = now_in_app_timezone()
        entry = f"\nError in {now.isoformat()}\nMessage: {message}\n"
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            with self.path_for(now).open("a", encoding="utf-8") as handle:
                handle.write(entry)
        except OSError as exc:
            logger.warning("Failed to write operational error log: %s", exc)


__all__ = ["FileOperationalErrorLog"]
