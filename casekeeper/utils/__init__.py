"""Utility helpers for casekeeper."""

from .logging import console, get_logger, setup_logging
from .time import (
    Clock,
    format_datetime,
    format_duration,
    format_timestamp,
    parse_optional_timestamp,
    parse_timestamp,
    resolve_now,
    to_utc,
    today_iso,
    utc_now,
)

__all__ = [
    # Logging
    "console",
    "get_logger",
    "setup_logging",
    # Time
    "Clock",
    "format_datetime",
    "format_duration",
    "format_timestamp",
    "parse_optional_timestamp",
    "parse_timestamp",
    "resolve_now",
    "to_utc",
    "today_iso",
    "utc_now",
]
