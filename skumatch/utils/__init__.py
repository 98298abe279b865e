"""Utility functions for time handling."""

from .timestamps import elapsed_seconds, ensure_utc, export_date_stamp, format_timestamp, utc_now

__all__ = [
    "utc_now",
    "ensure_utc",
    "format_timestamp",
    "export_date_stamp",
    "elapsed_seconds",
]
