"""Reply safety filtering."""

from .rules import ContentRule, RuleAction, BLOCKED_RULES, DISCLAIMER_RULES, DEFAULT_RULES
from .sanitizer import sanitize, truncate, REFUSAL, DISCLAIMER, TRUNCATION_MARKER

__all__ = [
    "ContentRule", "RuleAction", "BLOCKED_RULES", "DISCLAIMER_RULES", "DEFAULT_RULES",
    "sanitize", "truncate", "REFUSAL", "DISCLAIMER", "TRUNCATION_MARKER",
]
