"""Timezone helpers. Every timestamp of the service lives in ``APP_TIMEZONE``."""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone, tzinfo
from functools import lru_cache
from typing import Final

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from delivery_admin.config import get_settings

DEFAULT_TIMEZONE: Final[str] = "Asia/Kolkata"
_UTC_OFFSET: Final[re.Pattern[str]] = re.compile(
    r"^(?:UTC|GMT)\s*(?P<sign>[+-])(?P<hours>\d{1,2})(?::?(?P<minutes>\d{2}))?$",
    re.IGNORECASE,
)


def parse_timezone(name: str | None) -> tzinfo:
    """Return the timezone called ``name``.

    Accepts IANA names (``Asia/Kolkata``) and fixed offsets written as
    ``UTC+05:30`` or ``GMT-3``. Anything else yields :data:`DEFAULT_TIMEZONE`.
    """

    name = (name or "").strip()
    if not name:
        return ZoneInfo(DEFAULT_TIMEZONE)

    match = _UTC_OFFSET.match(name)
    if match is not None:
        offset = timedelta(
            hours=int(match.group("hours")), minutes=int(match.group("minutes") or 0)
        )
        return timezone(-offset if match.group("sign") == "-" else offset)

    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return ZoneInfo(DEFAULT_TIMEZONE)


@lru_cache(maxsize=1)
def get_app_timezone() -> tzinfo:
    """Return the timezone configured through ``APP_TIMEZONE``."""

    return parse_timezone(get_settings().app_timezone)


def now_in_app_timezone() -> datetime:
    return datetime.now(tz=get_app_timezone())


def now_in_app_naive_datetime() -> datetime:
    """Current wall-clock time in the app timezone, as stored in ``DATETIME`` columns."""

    return now_in_app_timezone().replace(tzinfo=None)


def ensure_app_timezone(value: datetime | None) -> datetime | None:
    """Express ``value`` in the app timezone.

    Naive values are read back from the database and are taken to already be
    app-local wall-clock times.
    """

    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=get_app_timezone())
    return value.astimezone(get_app_timezone())


def ensure_app_naive_datetime(value: datetime | None) -> datetime | None:
    """Counterpart of :func:`ensure_app_timezone` used before writing a column."""

    localized = ensure_app_timezone(value)
    return localized.replace(tzinfo=None) if localized is not None else None


def app_date_stamp(moment: datetime | None = None) -> str:
    """Return ``YYYY-MM-DD`` for ``moment`` (default: now) in the app timezone."""

    localized = ensure_app_timezone(moment) or now_in_app_timezone()
    return localized.strftime("%Y-%m-%d")


def isoformat_or_none(value: datetime | None) -> str | None:
    return value.isoformat() if value else None
