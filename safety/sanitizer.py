"""Post-processing of generated text before it reaches the user."""

from typing import Iterable

from safety.rules import ContentRule, DEFAULT_RULES, RuleAction, first_match

MAX_LENGTH = 1000
TRUNCATION_MARKER = "... [response truncated]"

REFUSAL = (
    "I'm sorry, I can't provide information on this topic. "
    "Please consult a healthcare professional for assistance."
)
DISCLAIMER = (
    "\n\n*Note: This information is for educational purposes only and not medical advice. "
    "Consult a healthcare professional for medical concerns.*"
)


def truncate(text: str, max_length: int = MAX_LENGTH) -> str:
    """Bound ``text`` to ``max_length`` characters.

    Over-long text is cut and, when the cut leaves a sentence end past the
    midpoint, shortened further to that sentence end. Otherwise the
    truncation marker is appended.
    """
    if len(text) <= max_length:
        return text

    head = text[:max_length]
    last_period = head.rfind(".")
    if last_period > len(head) / 2:
        return head[:last_period + 1]
    return head + TRUNCATION_MARKER


def sanitize(text: str, rules: Iterable[ContentRule] = DEFAULT_RULES) -> str:
    """Apply length bounding, content blocking and the medical disclaimer.

    Args:
        text: Raw generated text
        rules: Content rules to check, defaults to the built-in set

    Returns:
        The refusal string if a blocking rule matches, otherwise the
        bounded text with the disclaimer appended when a disclaimer rule
        matches
    """
    rules = tuple(rules)
    bounded = truncate(text)

    if first_match(rules, bounded, RuleAction.BLOCK):
        return REFUSAL

    if first_match(rules, bounded, RuleAction.DISCLAIM):
        return bounded + DISCLAIMER

    return bounded
