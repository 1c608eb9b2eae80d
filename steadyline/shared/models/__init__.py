"""Shared domain models for Steadyline platform."""
from .risk import (
    AnalysisResult,
    Confidence,
    CrisisResource,
)

__all__ = [
    "AnalysisResult",
    "Confidence",
    "CrisisResource",
]
