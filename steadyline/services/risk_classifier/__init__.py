"""Risk Classifier: deterministic crisis triage for user messages.

Every inbound user message is classified here BEFORE an assistant reply is
generated. A flagged result interrupts normal conversation and surfaces the
static crisis check-in and resource directory.

Components:
- patterns.py: Exclusion/High/Medium/Low rule tables, compiled once
- classifier.py: RiskClassifier with the tiered evaluation
- resources.py: Static crisis resource directory and check-in UI
- config.py: Deployment configuration
- handler.py: Flask HTTP endpoints (/health, /ready, /analyze, /resources)
- cli.py: Command-line classifier

Usage:
    # As HTTP service
    POST /analyze {"message": "...", "user_id": "...", "session_id": "..."}

    # Direct import
    from steadyline.services.risk_classifier import analyze_crisis_risk
    result = analyze_crisis_risk(text)
"""

from .classifier import RiskClassifier, analyze_crisis_risk, get_classifier
from .config import ClassifierConfig
from .patterns import (
    DEFAULT_RULE_TIERS,
    PatternConfigError,
    PatternRule,
    RuleTiers,
    compile_rule_tiers,
)
from .resources import CRISIS_RESOURCES, get_crisis_ui, get_resource

__all__ = [
    "RiskClassifier",
    "analyze_crisis_risk",
    "get_classifier",
    "ClassifierConfig",
    "DEFAULT_RULE_TIERS",
    "PatternConfigError",
    "PatternRule",
    "RuleTiers",
    "compile_rule_tiers",
    "CRISIS_RESOURCES",
    "get_crisis_ui",
    "get_resource",
]
