# SPDX-License-Identifier: MIT
"""
Persisted artifact records.

Date fields accept datetimes, ISO-8601 strings or any layout understood by
``expirytrack.dates.parse_date``. Pass ``context={"day_first": False}`` to
``model_validate`` to read numeric dates month-first.
"""
from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ValidationInfo, field_validator

from expirytrack.config.defaults import DAY_FIRST
from expirytrack.dates import to_datetime


def _coerce_date(value, info: ValidationInfo):
    if value is None or isinstance(value, datetime):
        return value
    day_first = (info.context or {}).get("day_first", DAY_FIRST)
    parsed = to_datetime(value, day_first=day_first)
    if parsed is None:
        raise ValueError(f"unrecognized date: {value!r}")
    return parsed


class Certificate(BaseModel):
    id: str
    name: str
    issuer: Optional[str] = None
    expiry_date: datetime
    uploaded_at: Optional[datetime] = None
    file_name: Optional[str] = None
    file_size: Optional[int] = None
    ocr_text: Optional[str] = None

    @field_validator("expiry_date", "uploaded_at", mode="before")
    @classmethod
    def parse_dates(cls, value, info: ValidationInfo):
        return _coerce_date(value, info)


class Subscription(BaseModel):
    id: str
    title: str
    email: str
    card_title: str
    end_date: datetime
    amount: Decimal
    created_at: Optional[datetime] = None

    @field_validator("end_date", "created_at", mode="before")
    @classmethod
    def parse_dates(cls, value, info: ValidationInfo):
        return _coerce_date(value, info)
