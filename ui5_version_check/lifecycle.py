"""
End of cloud provisioning (EOCP) calculations based on year quarters.

The version overview encodes EOCP dates as ``Qn/YYYY``. A version is
deprovisioned after the last day of that quarter; the quarter itself is the
final quarter in which the version can still be used.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Callable, Dict

from .models import NOT_APPLICABLE, LifecycleFact
from .time_utils import ensure_utc, quarter_bounds, utc_now


logger = logging.getLogger(__name__)

QUARTER_PATTERN = re.compile(r"Q([1-4])/(\d{4})")


def undetermined_lifecycle(quarter_key: str) -> LifecycleFact:
    return LifecycleFact(
        quarter_key=quarter_key,
        determined=False,
        has_reached_eocp=False,
        is_in_final_quarter=False,
        days_remaining=NOT_APPLICABLE,
        quarter_start=None,
        quarter_end=None,
    )


def compute_lifecycle(quarter_key: str, now: datetime) -> LifecycleFact:
    """Derive the EOCP facts of a ``Qn/YYYY`` quarter for the given point in time.

    Args:
        quarter_key: EOCP quarter as found in the version overview (e.g. ``Q1/2026``)
        now: Reference point in time

    Returns:
        Lifecycle facts. Keys that are not a valid quarter (e.g. ``To Be Determined``)
        result in an undetermined fact instead of an error.
    """
    match = QUARTER_PATTERN.search(quarter_key or "")
    if not match:
        return undetermined_lifecycle(quarter_key)

    try:
        quarter_start, quarter_end = quarter_bounds(int(match.group(1)), int(match.group(2)))
    except (ValueError, OverflowError):
        logger.debug("Quarter %s is out of the supported date range", quarter_key)
        return undetermined_lifecycle(quarter_key)
    now = ensure_utc(now)

    if now < quarter_start or now > quarter_end:
        days_remaining = NOT_APPLICABLE
    else:
        days_remaining = abs(quarter_end - now) // timedelta(days=1)

    return LifecycleFact(
        quarter_key=quarter_key,
        determined=True,
        has_reached_eocp=now > quarter_end,
        is_in_final_quarter=quarter_start < now < quarter_end,
        days_remaining=days_remaining,
        quarter_start=quarter_start,
        quarter_end=quarter_end,
    )


@dataclass
class LifecycleCache:
    """Lifecycle facts keyed by EOCP quarter.

    Facts are computed once, on first lookup of a quarter, and reused for the
    lifetime of the cache even if the clock moves on afterwards.
    """

    clock: Callable[[], datetime] = utc_now
    facts: Dict[str, LifecycleFact] = field(default_factory=dict)

    def lookup(self, quarter_key: str) -> LifecycleFact:
        if quarter_key in self.facts:
            logger.debug("Cache hit: lifecycle %s", quarter_key)
            return self.facts[quarter_key]

        fact = compute_lifecycle(quarter_key, self.clock())
        self.facts[quarter_key] = fact
        return fact

    def clear(self) -> None:
        self.facts.clear()
