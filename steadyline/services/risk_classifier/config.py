"""Risk Classifier configuration."""
import os
from dataclasses import dataclass

DEFAULT_PATTERN_VERSION = "2026.01.14"
DEFAULT_CRISIS_REGION = "US"


@dataclass(frozen=True)
class ClassifierConfig:
    """Configuration for classifier deployment.

    Nothing here changes how a message is classified; the rule tables
    are fixed in code.
    """

    # Version tracking for audit trail, bump on every rule table change
    pattern_version: str = DEFAULT_PATTERN_VERSION

    # Region whose crisis line is listed first in the crisis UI
    default_region: str = DEFAULT_CRISIS_REGION

    @classmethod
    def from_env(cls) -> "ClassifierConfig":
        """Build configuration from environment variables."""
        return cls(
            pattern_version=os.getenv("PATTERN_VERSION", DEFAULT_PATTERN_VERSION),
            default_region=os.getenv("DEFAULT_CRISIS_REGION", DEFAULT_CRISIS_REGION),
        )
