# SPDX-License-Identifier: MIT
"""
Expiry status classification.

Classifies any expiry instant into:
- expired: the instant has passed
- expiring: within the classification window
- valid: further out than the window
"""

from .status import (
    ExpiryState,
    ExpiryStatus,
    classify,
    countdown_percentage,
    days_until,
    progress_percentage,
)
from .collection import ExpiryStats, filter_by_state, sort_by_urgency, summarize

__all__ = [
    "ExpiryState",
    "ExpiryStatus",
    "classify",
    "countdown_percentage",
    "days_until",
    "progress_percentage",
    "ExpiryStats",
    "filter_by_state",
    "sort_by_urgency",
    "summarize",
]
