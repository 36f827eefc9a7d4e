"""Comment content classifier.

Two pattern families are applied in a fixed precedence:

1. Restricted rules (hard block). A match rejects the comment outright.
2. Moderated rules (soft flag). A match keeps the comment but withholds its
   body until an admin clears it or the viewer reveals it.

Anything else is clean. Classification is pure: the same text and rule set
always produce the same verdict.
"""

from __future__ import annotations

import logging
from typing import Optional

from inkwell.moderation.models import ModerationRule, Verdict, VerdictReason
from inkwell.moderation.rules import RuleSet, default_rules

logger = logging.getLogger(__name__)


class ContentClassifier:
    """Stateless classifier bound to one rule set."""

    def __init__(self, rules: Optional[RuleSet] = None) -> None:
        self.rules = rules or default_rules()
        self._restricted = self.rules.restricted
        self._moderated = self.rules.moderated

    def classify(self, content: str) -> Verdict:
        """Classify comment text and return its verdict."""
        if not isinstance(content, str):
            raise TypeError(f"content must be a string, got {type(content).__name__}")

        rule = _first_match(self._restricted, content)
        if rule is not None:
            logger.debug("Content hit restricted rule %s", rule.label)
            return Verdict(
                allowed=False,
                reason=VerdictReason.RESTRICTED_CONTENT,
                rule_label=rule.label,
            )

        rule = _first_match(self._moderated, content)
        if rule is not None:
            logger.debug("Content hit moderated rule %s", rule.label)
            return Verdict(
                allowed=True,
                reason=VerdictReason.MODERATED_LANGUAGE,
                should_blur=True,
                rule_label=rule.label,
            )

        return Verdict.clean()

    def is_restricted(self, content: str) -> bool:
        return not self.classify(content).allowed

    def is_moderated(self, content: str) -> bool:
        return self.classify(content).should_blur


def _first_match(rules: tuple[ModerationRule, ...], text: str) -> Optional[ModerationRule]:
    for rule in rules:
        if rule.matches(text):
            return rule
    return None


def classify_comment(content: str, rules: Optional[RuleSet] = None) -> Verdict:
    """Classify ``content`` with ``rules`` (the packaged defaults if omitted)."""
    return ContentClassifier(rules).classify(content)
