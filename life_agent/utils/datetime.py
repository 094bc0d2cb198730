"""Helpers for working with timezone-aware datetimes.

Datetimes are stored as naive UTC values so rows do not depend on the
timezone of the process that wrote them. The application timezone only
matters for calendar questions such as "which tasks are due today"; callers
resolve it from their own :class:`~life_agent.config.Settings` with
:func:`resolve_timezone` and pass it in.
"""

from __future__ import annotations

import re
from datetime import datetime, time, timedelta, timezone, tzinfo
from functools import lru_cache
from typing import Final

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

_DEFAULT_TIMEZONE: Final[str] = "UTC"
_OFFSET_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^(?:UTC|GMT)(?P<sign>[+-])(?P<hours>\d{1,2})(?::?(?P<minutes>\d{2}))?$",
    re.IGNORECASE,
)


@lru_cache(maxsize=32)
def resolve_timezone(tz_name: str | None) -> tzinfo:
    """Resolve an ``APP_TIMEZONE`` value into a ``tzinfo``.

    Values such as ``UTC-05:00`` are accepted as fixed offsets; anything
    unresolvable falls back to UTC.
    """

    tz_name = (tz_name or "").strip() or _DEFAULT_TIMEZONE
    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError):
        match = _OFFSET_PATTERN.match(tz_name)
        if match:
            sign = -1 if match.group("sign") == "-" else 1
            hours = int(match.group("hours"))
            minutes = int(match.group("minutes") or 0)
            offset = timedelta(hours=hours, minutes=minutes)
            return timezone(sign * offset)
    return timezone.utc


def now_in_timezone(tz: tzinfo | None = None) -> datetime:
    """Return the current time localized to ``tz`` (UTC when omitted)."""

    return datetime.now(tz=tz or timezone.utc)


def storage_now() -> datetime:
    """Return the current time as a naive UTC value, used as column default."""

    return datetime.now(tz=timezone.utc).replace(tzinfo=None)


def ensure_timezone(
    value: datetime | None, tz: tzinfo | None = None
) -> datetime | None:
    """Express ``value`` in ``tz`` (UTC when omitted).

    Naive values are assumed to already be in ``tz``. Values read back from
    the database are naive UTC, so repositories call this without ``tz``.
    """

    if value is None:
        return None

    tz = tz or timezone.utc
    if value.tzinfo is None:
        return value.replace(tzinfo=tz)
    return value.astimezone(tz)


def to_storage_datetime(value: datetime | None) -> datetime | None:
    """Return ``value`` converted to UTC without ``tzinfo``.

    Columns are declared as plain ``DateTime`` so the same schema works on
    SQLite and PostgreSQL; the domain layer keeps working with aware values.
    Naive input is taken as UTC.
    """

    normalized = ensure_timezone(value)
    if normalized is None:
        return None
    return normalized.replace(tzinfo=None)


def day_bounds(
    value: datetime, tz: tzinfo | None = None
) -> tuple[datetime, datetime]:
    """Return the first and last instant of the ``tz`` day containing ``value``."""

    localized = ensure_timezone(value, tz)
    assert localized is not None
    start = datetime.combine(localized.date(), time.min, tzinfo=localized.tzinfo)
    end = datetime.combine(localized.date(), time.max, tzinfo=localized.tzinfo)
    return start, end
