# SPDX-License-Identifier: MIT
"""
Expiry-date extraction from unstructured text.

Given OCR output, returns the single best expiry date and a heuristic
confidence in [0, 0.95].
"""

from .extractor import extract_expiry_date, iter_candidates, score_confidence
from .patterns import DEFAULT_PATTERNS, ExpiryPattern, compile_patterns
from .types import DateCandidate, ExtractionResult

__all__ = [
    "extract_expiry_date",
    "iter_candidates",
    "score_confidence",
    "DEFAULT_PATTERNS",
    "ExpiryPattern",
    "compile_patterns",
    "DateCandidate",
    "ExtractionResult",
]
