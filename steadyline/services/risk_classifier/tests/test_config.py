"""Tests for ClassifierConfig."""
from steadyline.services.risk_classifier.config import ClassifierConfig, DEFAULT_PATTERN_VERSION


def test_defaults(monkeypatch):
    monkeypatch.delenv("PATTERN_VERSION", raising=False)
    monkeypatch.delenv("DEFAULT_CRISIS_REGION", raising=False)

    config = ClassifierConfig.from_env()

    assert config.pattern_version == DEFAULT_PATTERN_VERSION
    assert config.default_region == "US"


def test_from_env(monkeypatch):
    monkeypatch.setenv("PATTERN_VERSION", "2026.10.01")
    monkeypatch.setenv("DEFAULT_CRISIS_REGION", "UK")

    config = ClassifierConfig.from_env()

    assert config == ClassifierConfig(pattern_version="2026.10.01", default_region="UK")
