# SPDX-License-Identifier: MIT
"""
Expiry-date pattern table.

Patterns are ordered from most to least specific; the extractor walks them in
this order and the first one yielding a plausible date wins.

Groups:
- labelled: "Expiry Date:", "Expires on", "Valid until" ... followed by a date
- valid_through: "valid until/through/thru" without any "expir*" word
- loose: "expir*" anywhere before a date-shaped token
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

LABEL = r"(?:expir[ey]|valid|expires?)(?:\s+(?:date|on|until|through|thru))?\s*:?\s*"
VALID_THROUGH = r"(?:valid\s+(?:until|through|thru))\s*:?\s*"
LOOSE = r"expir[ey].*?"

NAMED_MONTH_DATE = r"([a-z]+ \d{1,2},?\s+\d{4})"
SLASHED_DATE = r"(\d{1,2}[/\-]\d{1,2}[/\-]\d{4})"
ISO_DATE = r"(\d{4}[/\-]\d{1,2}[/\-]\d{1,2})"


@dataclass(frozen=True)
class ExpiryPattern:
    """One compiled extraction rule plus the hints used to score it."""

    name: str
    group: str
    regex: "re.Pattern[str]"
    label_colon: bool  # an optional colon may follow the label

    @property
    def source(self) -> str:
        return self.regex.pattern


def compile_patterns(rules: List[Dict[str, Any]]) -> Tuple[ExpiryPattern, ...]:
    """Build an immutable pattern table from rule dicts.

    rules: List[dict] with keys:
      - name: str
      - group: str
      - pattern: str (compiled case-insensitive)
      - label_colon: bool (default False)
    """
    compiled = []
    for r in rules:
        pat = r.get("pattern")
        if pat is None:
            continue
        compiled.append(
            ExpiryPattern(
                name=r.get("name", "unnamed-rule"),
                group=r.get("group", "loose"),
                regex=re.compile(pat, re.IGNORECASE),
                label_colon=bool(r.get("label_colon", False)),
            )
        )
    return tuple(compiled)


DEFAULT_RULES = [
    {"name": "labelled_named_month", "group": "labelled", "pattern": LABEL + NAMED_MONTH_DATE, "label_colon": True},
    {"name": "labelled_slashed", "group": "labelled", "pattern": LABEL + SLASHED_DATE, "label_colon": True},
    {"name": "labelled_iso", "group": "labelled", "pattern": LABEL + ISO_DATE, "label_colon": True},
    {"name": "valid_through_named_month", "group": "valid_through", "pattern": VALID_THROUGH + NAMED_MONTH_DATE, "label_colon": True},
    {"name": "valid_through_slashed", "group": "valid_through", "pattern": VALID_THROUGH + SLASHED_DATE, "label_colon": True},
    {"name": "valid_through_iso", "group": "valid_through", "pattern": VALID_THROUGH + ISO_DATE, "label_colon": True},
    {"name": "loose_named_month", "group": "loose", "pattern": LOOSE + NAMED_MONTH_DATE},
    {"name": "loose_slashed", "group": "loose", "pattern": LOOSE + SLASHED_DATE},
    {"name": "loose_iso", "group": "loose", "pattern": LOOSE + ISO_DATE},
]

DEFAULT_PATTERNS = compile_patterns(DEFAULT_RULES)
