"""Utility helpers for reusable functionality."""

from .datetime import (
    day_bounds,
    ensure_timezone,
    now_in_timezone,
    resolve_timezone,
    storage_now,
    to_storage_datetime,
)

__all__ = [
    "day_bounds",
    "ensure_timezone",
    "now_in_timezone",
    "resolve_timezone",
    "storage_now",
    "to_storage_datetime",
]
