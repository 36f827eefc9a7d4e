"""Comment moderation: rule table, classifier, display names and admin actions.

Typical use::

    from inkwell.moderation import classify_comment

    verdict = classify_comment("Great post, thanks!")
    assert verdict.allowed and not verdict.should_blur
"""

from inkwell.moderation.classifier import ContentClassifier, classify_comment
from inkwell.moderation.models import ModerationRule, RuleTier, Verdict, VerdictReason
from inkwell.moderation.rules import RuleSet, default_rules, load_rules
from inkwell.moderation.usernames import is_username_restricted

__all__ = [
    "ContentClassifier",
    "ModerationRule",
    "RuleSet",
    "RuleTier",
    "Verdict",
    "VerdictReason",
    "classify_comment",
    "default_rules",
    "is_username_restricted",
    "load_rules",
]
