# SPDX-License-Identifier: MIT
"""Stored artifact records and their read-path enrichment."""

from .models import Certificate, Subscription
from .enrich import enrich_certificate, enrich_subscription, load_records

__all__ = [
    "Certificate",
    "Subscription",
    "enrich_certificate",
    "enrich_subscription",
    "load_records",
]
