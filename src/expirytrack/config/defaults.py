# SPDX-License-Identifier: MIT
"""
Default thresholds.

Every other module reads these names; nothing else hardcodes the numbers.
"""

# Collection-level "expiring soon" bucket (stats, subscription badges).
COLLECTION_WINDOW_DAYS = 30

# Per-certificate countdown bar.
COUNTDOWN_WINDOW_DAYS = 15

# Extracted dates further than this from "now" are discarded.
PLAUSIBILITY_YEARS = 5

# Assumed subscription term used for the renewal progress bar.
SUBSCRIPTION_LIFETIME_DAYS = 365

# Stored record dates like 03/04/2025 are read as day/month/year.
DAY_FIRST = True
