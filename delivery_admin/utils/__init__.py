"""Shared helpers."""

from .datetime import (
    DEFAULT_TIMEZONE,
    app_date_stamp,
    ensure_app_naive_datetime,
    ensure_app_timezone,
    get_app_timezone,
    isoformat_or_none,
    now_in_app_naive_datetime,
    now_in_app_timezone,
    parse_timezone,
)

__all__ = [
    "DEFAULT_TIMEZONE",
    "app_date_stamp",
    "ensure_app_naive_datetime",
    "ensure_app_timezone",
    "get_app_timezone",
    "isoformat_or_none",
    "now_in_app_naive_datetime",
    "now_in_app_timezone",
    "parse_timezone",
]
