"""Data structures produced by expiry-date extraction."""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Dict, Any


@dataclass(frozen=True)
class DateCandidate:
    """A date substring captured by one extraction pattern."""

    text: str  # the captured date, e.g. "12/31/2026"
    pattern: str  # name of the pattern that matched (e.g. 'labelled_slashed')
    group: str  # semantic group: 'labelled', 'valid_through' or 'loose'
    matched: str  # full matched span, label included

    def to_dict(self) -> Dict[str, Any]:
        return {
            "text": self.text,
            "pattern": self.pattern,
            "group": self.group,
            "matched": self.matched,
        }


@dataclass(frozen=True)
class ExtractionResult:
    """Best expiry date found in a piece of text.

    ``confidence`` is 0.0 exactly when ``date`` is None.
    """

    date: Optional[datetime]
    confidence: float
    candidate: Optional[DateCandidate] = None

    @classmethod
    def absent(cls) -> "ExtractionResult":
        return cls(date=None, confidence=0.0)

    @property
    def found(self) -> bool:
        return self.date is not None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the shape handed back to the ingestion layer."""
        result = {
            "date": self.date.isoformat() if self.date else None,
            "confidence": self.confidence,
        }

        if self.candidate:
            result["pattern"] = self.candidate.pattern
            result["matched"] = self.candidate.matched

        return result
