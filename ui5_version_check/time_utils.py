"""
Shared datetime helpers.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Tuple


def ensure_utc(dt: datetime) -> datetime:
    """Return a timezone-aware UTC datetime."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def quarter_bounds(quarter: int, year: int) -> Tuple[datetime, datetime]:
    """Return the first and the last calendar day of a year quarter (UTC midnight)."""
    if quarter not in (1, 2, 3, 4):
        raise ValueError(f"Invalid quarter: {quarter}")
    month = (quarter - 1) * 3 + 1
    start = datetime(year, month, 1, tzinfo=timezone.utc)
    if month + 3 > 12:
        next_start = datetime(year + 1, 1, 1, tzinfo=timezone.utc)
    else:
        next_start = datetime(year, month + 3, 1, tzinfo=timezone.utc)
    return start, next_start - timedelta(days=1)
