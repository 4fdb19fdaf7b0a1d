# SPDX-License-Identifier: MIT
"""
Date normalization.

Turns the date strings found on scanned documents and stored records into
``datetime`` instants without ever raising.
"""

from .normalize import parse_date, to_datetime, format_expiry_date, align_tz

__all__ = ["parse_date", "to_datetime", "format_expiry_date", "align_tz"]
