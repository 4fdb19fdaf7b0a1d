# SPDX-License-Identifier: MIT
"""
Multi-layout date parser.

Layouts are tried in a fixed order and the first layout whose regex matches
decides the outcome: an impossible date such as 31/02/2024 is rejected rather
than handed to a later, looser layout.

Layouts:
1. D/M/YYYY or D-M-YYYY, zero-padded or not (M/D/YYYY when ``day_first``
   is False)
2. YYYY-M-D or YYYY/M/D, which also covers bare ISO dates
3. YYYY-MM-DD HH:MM:SS
4. Month D, YYYY / Month D YYYY
5. dateparser, restricted to absolute dates with day, month and year
"""
from __future__ import annotations

import re
from datetime import date, datetime, timezone
from typing import Callable, Optional, Tuple, Union

import dateparser

MONTHS = {
    "january": 1,
    "february": 2,
    "march": 3,
    "april": 4,
    "may": 5,
    "june": 6,
    "july": 7,
    "august": 8,
    "september": 9,
    "october": 10,
    "november": 11,
    "december": 12,
}

NUMERIC_DMY_RE = re.compile(r"^(\d{1,2})[/\-](\d{1,2})[/\-](\d{4})$")
YEAR_FIRST_RE = re.compile(r"^(\d{4})[/\-](\d{1,2})[/\-](\d{1,2})$")
DATE_TIME_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2}) (\d{2}):(\d{2}):(\d{2})$")
NAMED_MONTH_RE = re.compile(r"^([a-z]+)\.?\s+(\d{1,2}),?\s+(\d{4})$", re.IGNORECASE)

DATEPARSER_SETTINGS = {
    "PARSERS": ["custom-formats", "absolute-time"],
    "REQUIRE_PARTS": ["day", "month", "year"],
    "RETURN_AS_TIMEZONE_AWARE": False,
}


def _month_token_to_int(tok: str) -> Optional[int]:
    tok = tok.strip().lower()
    if tok in MONTHS:
        return MONTHS[tok]
    if len(tok) >= 3:
        for name, num in MONTHS.items():
            if name.startswith(tok):
                return num
    return None


def _build(year: int, month: int, day: int, *rest: int) -> Optional[datetime]:
    # datetime() rejects out-of-range components instead of rolling over
    try:
        return datetime(year, month, day, *rest)
    except ValueError:
        return None


def _from_numeric(m: re.Match, day_first: bool) -> Optional[datetime]:
    first, second, year = (int(g) for g in m.groups())
    if day_first:
        return _build(year, second, first)
    return _build(year, first, second)


def _from_year_first(m: re.Match, day_first: bool) -> Optional[datetime]:
    year, month, day = (int(g) for g in m.groups())
    return _build(year, month, day)


def _from_date_time(m: re.Match, day_first: bool) -> Optional[datetime]:
    return _build(*(int(g) for g in m.groups()))


def _from_named_month(m: re.Match, day_first: bool) -> Optional[datetime]:
    month = _month_token_to_int(m.group(1))
    if month is None:
        return None
    return _build(int(m.group(3)), month, int(m.group(2)))


Layout = Tuple[str, "re.Pattern[str]", Callable[[re.Match, bool], Optional[datetime]]]

LAYOUTS: Tuple[Layout, ...] = (
    ("numeric", NUMERIC_DMY_RE, _from_numeric),
    ("year_first", YEAR_FIRST_RE, _from_year_first),
    ("date_time", DATE_TIME_RE, _from_date_time),
    ("named_month", NAMED_MONTH_RE, _from_named_month),
)


def _fallback_parse(value: str, day_first: bool) -> Optional[datetime]:
    settings = dict(DATEPARSER_SETTINGS, DATE_ORDER="DMY" if day_first else "MDY")
    try:
        parsed = dateparser.parse(value, settings=settings)
    except (ValueError, OverflowError):
        return None
    if parsed is None:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def parse_date(value: str, *, day_first: bool = True) -> Optional[datetime]:
    """Parse ``value`` into a naive ``datetime``.

    Returns None when no layout matches or the matched layout describes a day
    that does not exist. Never raises.
    """
    if not isinstance(value, str):
        return None
    text = value.strip()
    if not text:
        return None

    for _name, regex, build in LAYOUTS:
        m = regex.match(text)
        if m:
            return build(m, day_first)

    return _fallback_parse(text, day_first)


def to_datetime(value: Union[datetime, date, str, None], *, day_first: bool = True) -> Optional[datetime]:
    """Coerce a stored date value into a ``datetime``; None if that is impossible."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, str):
        # persisted ISO-8601 instants first, then the human layouts
        try:
            return datetime.fromisoformat(value.strip())
        except ValueError:
            return parse_date(value, day_first=day_first)
    return None


def format_expiry_date(value: datetime) -> str:
    """Render a date the way it is shown to people, e.g. 'December 31, 2026'."""
    month = list(MONTHS)[value.month - 1].capitalize()
    return f"{month} {value.day}, {value.year}"


def align_tz(value: datetime, reference: datetime) -> datetime:
    """Give ``value`` the same tz-awareness as ``reference`` so the two compare.

    Naive values are taken to be in the reference's zone; aware values compared
    against a naive reference are converted to naive UTC.
    """
    if reference.tzinfo is not None and value.tzinfo is None:
        return value.replace(tzinfo=reference.tzinfo)
    if reference.tzinfo is None and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value
