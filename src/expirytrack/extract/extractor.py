# SPDX-License-Identifier: MIT
"""
Expiry-date extraction from scanned text.

The text is whitespace-collapsed, then every pattern of the table is tried in
order. A pattern's first match is normalized and checked against the
plausibility window; failures move on to the next pattern, never to a later
occurrence of the same pattern.
"""
from __future__ import annotations

import logging
import re
from datetime import datetime, timedelta
from typing import Iterator, Optional, Sequence, Tuple

from expirytrack.config.defaults import PLAUSIBILITY_YEARS
from expirytrack.dates import align_tz, parse_date
from .patterns import DEFAULT_PATTERNS, ExpiryPattern
from .types import DateCandidate, ExtractionResult

logger = logging.getLogger(__name__)

BASE_CONFIDENCE = 0.5
MAX_CONFIDENCE = 0.95

# Bonuses keyed on the pattern's regex source
SOURCE_BONUSES = {
    "expir": 0.3,
    "valid": 0.2,
}
LABEL_COLON_BONUS = 0.1

# Bonuses keyed on the literal matched text (lower-cased)
PHRASE_BONUSES = {
    "expiry date": 0.2,
    "valid until": 0.2,
    "expires": 0.15,
}

_WHITESPACE_RE = re.compile(r"\s+")


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text).strip()


def score_confidence(pattern: ExpiryPattern, matched_text: str) -> float:
    """
    Heuristic confidence for a date accepted from ``pattern``.

    Starts at 0.5; each bonus whose condition holds is added independently
    and the total is capped at 0.95.
    """
    confidence = BASE_CONFIDENCE

    source = pattern.source
    for needle, bonus in SOURCE_BONUSES.items():
        if needle in source:
            confidence += bonus
    if pattern.label_colon:
        confidence += LABEL_COLON_BONUS

    matched_lower = matched_text.lower()
    for phrase, bonus in PHRASE_BONUSES.items():
        if phrase in matched_lower:
            confidence += bonus

    return min(confidence, MAX_CONFIDENCE)


def is_plausible(value: datetime, now: datetime, years: int = PLAUSIBILITY_YEARS) -> bool:
    """True when ``value`` lies within ``years`` of ``now`` (inclusive)."""
    span = timedelta(days=years * 365)
    value = align_tz(value, now)
    return now - span <= value <= now + span


def _iter_matches(
    text: str, patterns: Sequence[ExpiryPattern]
) -> Iterator[Tuple[ExpiryPattern, DateCandidate]]:
    clean_text = collapse_whitespace(text or "")
    for pattern in patterns:
        m = pattern.regex.search(clean_text)
        if not m:
            continue
        yield pattern, DateCandidate(
            text=m.group(1),
            pattern=pattern.name,
            group=pattern.group,
            matched=m.group(0),
        )


def iter_candidates(
    text: str, patterns: Sequence[ExpiryPattern] = DEFAULT_PATTERNS
) -> Iterator[DateCandidate]:
    """Yield each pattern's first match over the collapsed text, in pattern order."""
    for _pattern, candidate in _iter_matches(text, patterns):
        yield candidate


def extract_expiry_date(
    text: str,
    *,
    now: Optional[datetime] = None,
    patterns: Sequence[ExpiryPattern] = DEFAULT_PATTERNS,
    plausibility_years: int = PLAUSIBILITY_YEARS,
) -> ExtractionResult:
    """
    Find the most likely expiry date in ``text``.

    Args:
        text: Raw (OCR) text
        now: Reference instant for the plausibility window; wall clock if omitted
        patterns: Ordered pattern table
        plausibility_years: Half-width of the plausibility window in years

    Returns:
        ExtractionResult; ``ExtractionResult.absent()`` when nothing qualifies
    """
    now = now or datetime.now()

    for pattern, candidate in _iter_matches(text, patterns):
        parsed = parse_date(candidate.text, day_first=False)
        if parsed is None:
            logger.debug("Pattern %s: could not normalize %r", candidate.pattern, candidate.text)
            continue
        if not is_plausible(parsed, now, plausibility_years):
            logger.debug("Pattern %s: %s outside plausibility window", candidate.pattern, parsed.date())
            continue

        confidence = score_confidence(pattern, candidate.matched)
        logger.debug("Pattern %s accepted %s (confidence %.2f)", candidate.pattern, parsed.date(), confidence)
        return ExtractionResult(date=parsed, confidence=confidence, candidate=candidate)

    return ExtractionResult.absent()
