"""Content rules applied to generated replies.

Each rule pairs a case-insensitive pattern with the action taken when the
pattern matches. Rules are plain data so a deployment can swap the set and
each rule can be exercised on its own.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Pattern


class RuleAction(str, Enum):
    """What the sanitizer does when a rule matches."""
    BLOCK = "block"
    DISCLAIM = "disclaim"


@dataclass(frozen=True)
class ContentRule:
    """A named pattern and its action."""
    name: str
    pattern: Pattern[str]
    action: RuleAction

    def matches(self, text: str) -> bool:
        return self.pattern.search(text) is not None


def blocked(name: str, regex: str) -> ContentRule:
    """Blocking rule for a case-insensitive regular expression."""
    return ContentRule(name, re.compile(regex, re.IGNORECASE), RuleAction.BLOCK)


def keyword(word: str) -> ContentRule:
    """Disclaimer rule matching ``word`` anywhere, including inside longer words."""
    return ContentRule(word, re.compile(re.escape(word), re.IGNORECASE), RuleAction.DISCLAIM)


BLOCKED_RULES: tuple[ContentRule, ...] = (
    blocked("take_life", r"take (?:your|my) life"),
    blocked("kill_self", r"kill (?:yourself|myself)"),
    blocked("self_harm", r"suicide|self-harm"),
    blocked("illegal_drugs", r"illegal (?:drugs|substances)"),
)

HIGH_RISK_KEYWORDS: tuple[str, ...] = (
    "diagnos", "treat", "cure", "medication",
    "dose", "prescription", "cancer", "heart attack",
    "emergency", "pregnant", "surgery", "disease",
)

DISCLAIMER_RULES: tuple[ContentRule, ...] = tuple(keyword(word) for word in HIGH_RISK_KEYWORDS)

DEFAULT_RULES: tuple[ContentRule, ...] = BLOCKED_RULES + DISCLAIMER_RULES


def first_match(rules: Iterable[ContentRule], text: str, action: RuleAction) -> Optional[ContentRule]:
    """Return the first rule with ``action`` that matches ``text``, or None."""
    for rule in rules:
        if rule.action is action and rule.matches(text):
            return rule
    return None
