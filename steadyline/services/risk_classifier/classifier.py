"""Risk Classifier - deterministic, rule-based crisis triage.

Given one user-authored message, decides whether it plausibly expresses
self-harm or suicidal intent and at what confidence, so the chat pipeline
can interrupt normal flow and surface crisis resources.

Evaluation order (ordering and short-circuiting are the whole design):
1. Normalize: lower-case and trim, nothing else
2. Exclusions: any match returns the no-signal result immediately
3. High: every rule tested, each match recorded, confidence HIGH
4. Medium: only if no High rule matched, each match recorded, MEDIUM
5. Low: only if nothing matched so far, matches recorded, confidence
   stays LOW
6. is_potential_crisis is True iff confidence is MEDIUM or HIGH

analyze() is a total, pure function: no I/O, no logging, no shared mutable
state. Absence of a signal means "no evidence found", never "confirmed safe".
"""
import logging
from typing import List, Optional

from steadyline.shared.models import AnalysisResult, Confidence
from .config import ClassifierConfig
from .patterns import DEFAULT_RULE_TIERS, RuleTiers

logger = logging.getLogger(__name__)


class RiskClassifier:
    """Tiered pattern classifier over a single message.

    Holds only read-only rule tiers, so one instance can be shared by any
    number of concurrent callers.
    """

    def __init__(
        self,
        tiers: RuleTiers = DEFAULT_RULE_TIERS,
        config: Optional[ClassifierConfig] = None,
    ):
        """Initialize classifier.

        Args:
            tiers: Compiled rule tiers (defaults to the built-in tables)
            config: Deployment configuration
        """
        self.tiers = tiers
        self.config = config or ClassifierConfig()

        logger.info(
            "RISK_CLASSIFIER_INITIALIZED",
            extra={
                "pattern_version": self.config.pattern_version,
                **tiers.counts(),
            }
        )

    def analyze(self, message: str) -> AnalysisResult:
        """Classify a single message.

        Args:
            message: Raw user message text

        Returns:
            AnalysisResult with crisis flag, confidence and matched rule ids
        """
        if not isinstance(message, str):
            return AnalysisResult.no_signal()

        normalized = message.lower().strip()

        for rule in self.tiers.exclusions:
            if rule.matches(normalized):
                return AnalysisResult.no_signal()

        matched: List[str] = []
        confidence = Confidence.LOW

        for rule in self.tiers.high:
            if rule.matches(normalized):
                matched.append(rule.rule_id)
                confidence = Confidence.HIGH

        if confidence != Confidence.HIGH:
            for rule in self.tiers.medium:
                if rule.matches(normalized):
                    matched.append(rule.rule_id)
                    confidence = Confidence.MEDIUM

        # Low tier is only consulted when nothing above it matched, and never
        # raises confidence
        if not matched:
            for rule in self.tiers.low:
                if rule.matches(normalized):
                    matched.append(rule.rule_id)

        return AnalysisResult(
            is_potential_crisis=confidence in (Confidence.MEDIUM, Confidence.HIGH),
            confidence=confidence,
            matched_patterns=tuple(matched),
        )


# Shared default instance, built once at import
_classifier = RiskClassifier()


def get_classifier() -> RiskClassifier:
    """Get the shared default RiskClassifier instance."""
    return _classifier


def analyze_crisis_risk(message: str) -> AnalysisResult:
    """Classify a message with the default rule tables.

    Args:
        message: Raw user message text

    Returns:
        AnalysisResult for the message
    """
    return get_classifier().analyze(message)
