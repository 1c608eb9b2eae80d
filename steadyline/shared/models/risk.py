"""Risk confidence and analysis result domain models.

This file defines the core enum and data structures returned by the
risk classifier and consumed by the chat pipeline.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class Confidence(Enum):
    """Severity ceiling reached by matched, non-excluded patterns.

    Ordered: LOW < MEDIUM < HIGH. It is a ceiling, not a count.
    """
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        return _CONFIDENCE_RANK[self]

    def __lt__(self, other):
        if not isinstance(other, Confidence):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if not isinstance(other, Confidence):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        if not isinstance(other, Confidence):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        if not isinstance(other, Confidence):
            return NotImplemented
        return self.rank >= other.rank


_CONFIDENCE_RANK = {
    Confidence.LOW: 0,
    Confidence.MEDIUM: 1,
    Confidence.HIGH: 2,
}


@dataclass(frozen=True)
class AnalysisResult:
    """Outcome of classifying a single user message.

    Immutable - results cannot be modified after creation.
    ``matched_patterns`` holds rule identifiers in tier evaluation order.
    """
    is_potential_crisis: bool
    confidence: Confidence = Confidence.LOW
    matched_patterns: Tuple[str, ...] = ()

    def __post_init__(self):
        expected = self.confidence >= Confidence.MEDIUM
        if self.is_potential_crisis != expected:
            raise ValueError(
                f"is_potential_crisis={self.is_potential_crisis} is inconsistent "
                f"with confidence={self.confidence.value}"
            )

    @classmethod
    def no_signal(cls) -> "AnalysisResult":
        """Result for text with no evidence found (not 'confirmed safe')."""
        return cls(is_potential_crisis=False)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the wire representation used by the chat client."""
        return {
            "isPotentialCrisis": self.is_potential_crisis,
            "confidence": self.confidence.value,
            "matchedPatterns": list(self.matched_patterns),
        }


@dataclass(frozen=True)
class CrisisResource:
    """A regional crisis-support contact shown when a message is flagged."""
    name: str
    description: str
    phone: Optional[str] = None
    text: Optional[str] = None
    url: Optional[str] = None

    def to_dict(self) -> Dict[str, str]:
        """Convert to dictionary, omitting contact channels that are absent."""
        result = {"name": self.name}
        for key in ("phone", "text", "url"):
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        result["description"] = self.description
        return result
