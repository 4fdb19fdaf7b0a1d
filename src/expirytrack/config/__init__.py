# SPDX-License-Identifier: MIT
"""
Runtime configuration for expirytrack.

Thresholds live in ``defaults``; ``loader`` lets a deployment override them
from a ``.expirytrack.yml`` file.
"""

from .defaults import (
    COLLECTION_WINDOW_DAYS,
    COUNTDOWN_WINDOW_DAYS,
    PLAUSIBILITY_YEARS,
    SUBSCRIPTION_LIFETIME_DAYS,
)
from .loader import load_config, get_default_config, create_default_config_template

__all__ = [
    "COLLECTION_WINDOW_DAYS",
    "COUNTDOWN_WINDOW_DAYS",
    "PLAUSIBILITY_YEARS",
    "SUBSCRIPTION_LIFETIME_DAYS",
    "load_config",
    "get_default_config",
    "create_default_config_template",
]
