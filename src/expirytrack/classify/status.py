# SPDX-License-Identifier: MIT
"""
Expiry status classification.

Derives, for a single expiry instant and an evaluation instant:
- state: expired / expiring / valid
- days until expiry (negative once overdue), rounded up to whole days
- renewal progress over an assumed total lifetime
- the per-certificate countdown percentage

Nothing here is cached; callers recompute on every read.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Optional

from expirytrack.config.defaults import COLLECTION_WINDOW_DAYS
from expirytrack.core.exceptions import InvalidEvaluationInstant
from expirytrack.dates import align_tz

SECONDS_PER_DAY = 24 * 60 * 60


class ExpiryState(Enum):
    """Expiration state categories."""

    EXPIRED = "expired"
    EXPIRING_SOON = "expiring"
    VALID = "valid"


@dataclass(frozen=True)
class ExpiryStatus:
    """Derived expiry fields for one artifact at one instant."""

    state: ExpiryState
    days_until_expiry: int
    is_expired: bool
    window_days: int
    progress_percentage: Optional[float] = None

    @property
    def days_overdue(self) -> int:
        return abs(self.days_until_expiry) if self.is_expired else 0

    @property
    def days_remaining(self) -> int:
        return max(0, self.days_until_expiry)

    @property
    def label(self) -> str:
        if self.state is ExpiryState.EXPIRED:
            return "Expired"
        if self.state is ExpiryState.EXPIRING_SOON:
            return f"{self.days_until_expiry} days"
        return "Valid"

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "status": self.state.value,
            "label": self.label,
            "is_expired": self.is_expired,
            "days_until_expiry": self.days_until_expiry,
        }
        if self.is_expired:
            result["days_overdue"] = self.days_overdue
        else:
            result["days_remaining"] = self.days_remaining
        if self.progress_percentage is not None:
            result["progress_percentage"] = self.progress_percentage
        return result


def _as_datetime(value) -> Optional[datetime]:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    return None


def days_until(expiry: datetime, now: datetime) -> int:
    """Whole days from ``now`` to ``expiry``, rounding partial days up."""
    delta = align_tz(expiry, now) - now
    return math.ceil(delta.total_seconds() / SECONDS_PER_DAY)


def progress_percentage(days_until_expiry: int, total_days: int) -> float:
    """
    Share of an assumed lifetime of ``total_days`` already used up.

    0 with ``total_days`` or more remaining, 100 at or after expiry.
    """
    used = (total_days - days_until_expiry) / total_days * 100
    return max(0.0, min(100.0, used))


def countdown_percentage(days_until_expiry: int, window_days: int, is_expired: bool) -> float:
    """Remaining share of a countdown window: 100 while ``window_days`` or more remain."""
    if is_expired:
        return 0.0
    remaining = max(0, days_until_expiry)
    return max(0.0, min(100.0, remaining / window_days * 100))


def classify(
    expiry,
    now: Optional[datetime] = None,
    window_days: int = COLLECTION_WINDOW_DAYS,
    total_days: Optional[int] = None,
) -> ExpiryStatus:
    """
    Classify an expiry instant relative to ``now``.

    Args:
        expiry: Expiry instant (datetime or date)
        now: Evaluation instant; wall clock if omitted
        window_days: Days before expiry that count as "expiring soon"
        total_days: Assumed total lifetime; enables progress_percentage

    Returns:
        ExpiryStatus

    Raises:
        InvalidEvaluationInstant: If ``now`` or ``expiry`` is not a date/datetime
    """
    if now is None:
        now = datetime.now()
    now_dt = _as_datetime(now)
    if now_dt is None:
        raise InvalidEvaluationInstant(now, "now")
    expiry_dt = _as_datetime(expiry)
    if expiry_dt is None:
        raise InvalidEvaluationInstant(expiry, "expiry")
    expiry_dt = align_tz(expiry_dt, now_dt)

    days = days_until(expiry_dt, now_dt)
    is_expired = now_dt > expiry_dt

    if is_expired:
        state = ExpiryState.EXPIRED
    elif days <= window_days:
        state = ExpiryState.EXPIRING_SOON
    else:
        state = ExpiryState.VALID

    progress = progress_percentage(days, total_days) if total_days else None

    return ExpiryStatus(
        state=state,
        days_until_expiry=days,
        is_expired=is_expired,
        window_days=window_days,
        progress_percentage=progress,
    )
