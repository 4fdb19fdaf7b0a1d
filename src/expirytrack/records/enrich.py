# SPDX-License-Identifier: MIT
"""
Read-path enrichment for stored records.

The storage layer calls these on every read so the derived fields are never
stale; nothing computed here is written back.
"""
from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

from expirytrack.classify import classify, countdown_percentage
from expirytrack.config.loader import get_default_config
from expirytrack.core.exceptions import ExpiryTrackError
from .models import Certificate, Subscription


def enrich_certificate(
    cert: Certificate, now: Optional[datetime] = None, config: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """Certificate fields plus status, day counts and the countdown bar value."""
    config = config or get_default_config()
    now = now or datetime.now()

    status = classify(cert.expiry_date, now, config["collection_window_days"])
    countdown_window = config["countdown_window_days"]
    countdown = classify(cert.expiry_date, now, countdown_window)

    return {
        **cert.model_dump(mode="json"),
        **status.to_dict(),
        "countdown_status": countdown.state.value,
        "countdown_percentage": countdown_percentage(
            countdown.days_until_expiry, countdown_window, countdown.is_expired
        ),
    }


def enrich_subscription(
    sub: Subscription, now: Optional[datetime] = None, config: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """Subscription fields plus status, day counts and renewal progress."""
    config = config or get_default_config()
    now = now or datetime.now()

    status = classify(
        sub.end_date,
        now,
        config["collection_window_days"],
        total_days=config["subscription_lifetime_days"],
    )
    return {**sub.model_dump(mode="json"), **status.to_dict()}


def load_records(
    path: str, day_first: bool = True
) -> Tuple[List[Certificate], List[Subscription]]:
    """
    Load certificates and subscriptions from a JSON or YAML file.

    The file holds a mapping with optional ``certificates`` and
    ``subscriptions`` lists.

    Raises:
        ExpiryTrackError: If the file is missing or not shaped as expected
        pydantic.ValidationError: If a record is invalid
    """
    records_path = Path(path)
    if not records_path.exists():
        raise ExpiryTrackError(f"Records file not found: {path}")

    with open(records_path, "r", encoding="utf-8") as f:
        if records_path.suffix.lower() == ".json":
            data = json.load(f)
        else:
            data = yaml.safe_load(f)

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ExpiryTrackError("Records file must contain a mapping")

    context = {"day_first": day_first}
    certificates = [
        Certificate.model_validate(item, context=context) for item in data.get("certificates") or []
    ]
    subscriptions = [
        Subscription.model_validate(item, context=context) for item in data.get("subscriptions") or []
    ]
    return certificates, subscriptions
