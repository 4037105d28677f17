# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""DateTime utilities.

All timestamps are stored as PostgreSQL TIMESTAMPTZ and every Python
datetime handled by the service is timezone-aware UTC.

Usage:
    from src.utils.datetime import utc_now

    created_at = mapped_column(DateTime(timezone=True), default=utc_now)
"""

from datetime import date, datetime, time, timezone


def utc_now() -> datetime:
    """Get current UTC time as timezone-aware datetime."""
    return datetime.now(timezone.utc)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Attach UTC to naive datetimes and convert aware ones to UTC.

    Args:
        dt: Datetime to normalize, or None.

    Returns:
        UTC datetime or None.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def parse_iso_bound(value: str, end_of_day: bool = False) -> datetime:
    """Parse an ISO-8601 date or datetime used as a range bound.

    A bare date (``2024-05-01``) expands to the start of that day, or to
    its last microsecond when ``end_of_day`` is set, so that an upper
    bound covers the whole day.

    Args:
        value: ISO-8601 date or datetime string.
        end_of_day: Expand bare dates to 23:59:59.999999.

    Returns:
        Timezone-aware UTC datetime.

    Raises:
        ValueError: If the value is not a valid ISO date or datetime.
    """
    text = value.strip()
    if "T" not in text and " " not in text and len(text) <= 10:
        day = date.fromisoformat(text)
        bound = time.max if end_of_day else time.min
        return datetime.combine(day, bound, tzinfo=timezone.utc)

    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return ensure_utc(datetime.fromisoformat(text))
