"""Pattern rule tables for the Risk Classifier.

Four tiers, evaluated in strict order by the classifier:
- Exclusions: idiomatic/casual phrasing ("killing it", "deadline") that
  forces a non-crisis result when present
- High: explicit self-harm or suicidal intent
- Medium: passive ideation and imminent-plan language
- Low: hopelessness markers, reported but never flagged on their own

The tables are compiled once at import time and are never mutated. A rule's
identifier is its own pattern source, which is what callers see in
``matched_patterns``.
"""
import logging
import re
from dataclasses import dataclass
from typing import Iterable, Sequence, Tuple

logger = logging.getLogger(__name__)

# Word boundaries stay ASCII-only; input is lower-cased before matching
PATTERN_FLAGS = re.IGNORECASE | re.ASCII

# re.ASCII narrows \s, so every \s is widened to the full Unicode whitespace
# set the chat client's engine uses (no-break space, em space, ideographic
# space, BOM)
UNICODE_WHITESPACE = r"\s\u00a0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000\ufeff"


# Explicit intent, plans, and self-harm
HIGH_RISK_PATTERNS: Tuple[str, ...] = (
    r"\b(want|going|plan|decided|ready)\s+(to\s+)?(kill|end)\s+(myself|my\s+life)\b",
    r"\b(i('m|\s+am)\s+going\s+to\s+)?(suicide|kill\s+myself)\b",
    r"\bend\s+(it\s+all|my\s+life|everything)\b",
    r"\b(can't|cannot)\s+(go\s+on|take\s+it\s+anymore|live\s+like\s+this)\b",
    r"\bdon't\s+want\s+to\s+(live|be\s+alive|exist)\s*(anymore)?\b",
    r"\bhurt\s+(myself|my\s+body)\b",
    r"\bself[\s-]?harm\b",
    r"\bcut(ting)?\s+(myself|my\s+(wrist|arm|body))\b",
)

# Passive ideation, burden statements, and imminent-plan phrasing
MEDIUM_RISK_PATTERNS: Tuple[str, ...] = (
    r"\bwish\s+i\s+(was|were)\s+(dead|gone|not\s+here)\b",
    r"\beveryone\s+would\s+be\s+better\s+off\s+without\s+me\b",
    r"\bno\s+point\s+(in\s+)?(living|going\s+on|trying)\b",
    r"\bfeeling\s+(suicidal|like\s+ending\s+it)\b",
    r"\bi('m|\s+am)\s+in\s+danger\b",
    r"\bthinking\s+(about|of)\s+(ending|hurting)\b",
    r"\bi('m|\s+am)\s+going\s+to\s+do\s+it\b",
    r"\bgonna\s+do\s+it\s+(tonight|today|now|soon)\b",
    r"\bmade\s+(up\s+)?my\s+(mind|decision)\b",
    r"\bthis\s+is\s+(it|the\s+end|goodbye)\b",
)

# Hopelessness markers
LOW_RISK_PATTERNS: Tuple[str, ...] = (
    r"\bdon't\s+see\s+(a\s+)?(way\s+out|hope)\b",
    r"\bfeeling\s+(hopeless|worthless|like\s+a\s+burden)\b",
    r"\bno\s+one\s+(cares|would\s+miss\s+me)\b",
)

# Figurative uses of "kill", "dead", "die"
EXCLUSION_PATTERNS: Tuple[str, ...] = (
    r"\bkilling\s+it\b",
    r"\bkill(ing|ed)?\s+(time|the\s+vibe|the\s+mood)\b",
    r"\bdying\s+(to|of)\s+(see|know|try|laughter|curiosity)\b",
    r"\bdead(line|beat|pan|lock)\b",
    r"\bi('m)?\s+dead\s+(serious|tired|wrong)\b",
    r"\bto\s+die\s+for\b",
    r"\bliterally\s+dying\b",
    r"\bso\s+bored\s+i\s+could\s+die\b",
    r"\bkill(ed|ing)?\s+(the\s+)?(game|test|exam|interview)\b",
)

# Innermost group holding an unbounded quantifier that is itself repeated
# without bound, e.g. (a+)+ or (\s*x)*
_NESTED_UNBOUNDED = re.compile(
    r"\((?:[^()\\]|\\.)*?(?:[*+]|\{\d*,\})(?:[^()\\]|\\.)*\)(?:[*+]|\{\d*,\})"
)


class PatternConfigError(ValueError):
    """Raised at startup when a rule table cannot be safely compiled."""


def widen_whitespace(source: str) -> str:
    """Rewrite each \\s in a pattern source to UNICODE_WHITESPACE.

    Inside a character class the members are spliced in directly, so
    [\\s-] stays a single class. Other escapes pass through untouched.
    """
    out = []
    in_class = False
    i = 0
    while i < len(source):
        char = source[i]
        if char == "\\" and i + 1 < len(source):
            escape = source[i:i + 2]
            if escape == r"\s":
                out.append(UNICODE_WHITESPACE if in_class else f"[{UNICODE_WHITESPACE}]")
            else:
                out.append(escape)
            i += 2
            continue
        if char == "[" and not in_class:
            in_class = True
        elif char == "]" and in_class:
            in_class = False
        out.append(char)
        i += 1
    return "".join(out)


@dataclass(frozen=True)
class PatternRule:
    """Immutable text matcher identified by its own pattern source."""
    rule_id: str
    regex: re.Pattern

    @classmethod
    def compile(cls, source: str) -> "PatternRule":
        """Compile a pattern source into a rule.

        Raises:
            PatternConfigError: If the source is empty, invalid, or prone
                to catastrophic backtracking
        """
        if not source:
            raise PatternConfigError("Pattern source must be non-empty")
        if _NESTED_UNBOUNDED.search(source):
            raise PatternConfigError(
                f"Pattern has a nested unbounded quantifier: {source!r}"
            )
        try:
            regex = re.compile(widen_whitespace(source), PATTERN_FLAGS)
        except re.error as e:
            raise PatternConfigError(f"Invalid pattern {source!r}: {e}") from e
        return cls(rule_id=source, regex=regex)

    def matches(self, text: str) -> bool:
        return self.regex.search(text) is not None


@dataclass(frozen=True)
class RuleTiers:
    """The four disjoint, ordered rule sets used by the classifier."""
    exclusions: Tuple[PatternRule, ...]
    high: Tuple[PatternRule, ...]
    medium: Tuple[PatternRule, ...]
    low: Tuple[PatternRule, ...]

    def counts(self) -> dict:
        return {
            "exclusion_pattern_count": len(self.exclusions),
            "high_pattern_count": len(self.high),
            "medium_pattern_count": len(self.medium),
            "low_pattern_count": len(self.low),
        }


def _compile_tier(sources: Iterable[str]) -> Tuple[PatternRule, ...]:
    return tuple(PatternRule.compile(source) for source in sources)


def compile_rule_tiers(
    exclusions: Sequence[str] = EXCLUSION_PATTERNS,
    high: Sequence[str] = HIGH_RISK_PATTERNS,
    medium: Sequence[str] = MEDIUM_RISK_PATTERNS,
    low: Sequence[str] = LOW_RISK_PATTERNS,
) -> RuleTiers:
    """Compile pattern sources into immutable rule tiers.

    Args:
        exclusions: Exclusion tier pattern sources
        high: High tier pattern sources
        medium: Medium tier pattern sources
        low: Low tier pattern sources

    Returns:
        RuleTiers with every pattern compiled

    Raises:
        PatternConfigError: If any pattern is invalid or a source appears
            more than once across tiers
    """
    seen = set()
    for source in (*exclusions, *high, *medium, *low):
        if source in seen:
            raise PatternConfigError(f"Duplicate pattern across tiers: {source!r}")
        seen.add(source)

    tiers = RuleTiers(
        exclusions=_compile_tier(exclusions),
        high=_compile_tier(high),
        medium=_compile_tier(medium),
        low=_compile_tier(low),
    )
    logger.debug("RISK_RULE_TIERS_COMPILED", extra=tiers.counts())
    return tiers


DEFAULT_RULE_TIERS: RuleTiers = compile_rule_tiers()
