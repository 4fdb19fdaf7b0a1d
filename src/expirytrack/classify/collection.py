# SPDX-License-Identifier: MIT
"""
Operations over collections of expiring artifacts: status counts, filtering
and urgency ordering.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, List, Optional, TypeVar

from expirytrack.config.defaults import COLLECTION_WINDOW_DAYS
from expirytrack.dates import align_tz
from .status import ExpiryState, classify

T = TypeVar("T")

# Naive and aware expiries are both compared on this zone
_UTC_REFERENCE = datetime(1970, 1, 1, tzinfo=timezone.utc)


@dataclass(frozen=True)
class ExpiryStats:
    """Status counts for a collection."""

    total: int = 0
    valid: int = 0
    expiring: int = 0
    expired: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def summarize(
    expiries: Iterable[datetime],
    now: Optional[datetime] = None,
    window_days: int = COLLECTION_WINDOW_DAYS,
) -> ExpiryStats:
    """Count expiry instants per state."""
    now = now or datetime.now()
    counts = {state: 0 for state in ExpiryState}
    total = 0
    for expiry in expiries:
        counts[classify(expiry, now, window_days).state] += 1
        total += 1

    return ExpiryStats(
        total=total,
        valid=counts[ExpiryState.VALID],
        expiring=counts[ExpiryState.EXPIRING_SOON],
        expired=counts[ExpiryState.EXPIRED],
    )


def filter_by_state(
    items: Iterable[T],
    state: ExpiryState,
    key: Callable[[T], datetime],
    now: Optional[datetime] = None,
    window_days: int = COLLECTION_WINDOW_DAYS,
) -> List[T]:
    """Keep the items whose expiry (``key(item)``) classifies as ``state``."""
    now = now or datetime.now()
    return [item for item in items if classify(key(item), now, window_days).state is state]


def sort_by_urgency(items: Iterable[T], key: Callable[[T], datetime]) -> List[T]:
    """Order items by expiry, overdue first, then soonest to expire."""
    return sorted(items, key=lambda item: align_tz(key(item), _UTC_REFERENCE))
