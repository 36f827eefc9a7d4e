"""Data models for the comment moderation system."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum


class VerdictReason(Enum):
    """Why a piece of content received its verdict."""

    NONE = "none"
    RESTRICTED_CONTENT = "restricted_content"
    USERNAME_RESTRICTED = "username_restricted"
    MODERATED_LANGUAGE = "moderated_language"


class RuleTier(Enum):
    """Which pattern family a rule belongs to."""

    RESTRICTED = "restricted"  # Hard block: never persisted
    MODERATED = "moderated"  # Soft flag: persisted with the body withheld


@dataclass(frozen=True)
class ModerationRule:
    """A single entry of the deny-pattern table."""

    label: str
    pattern: str
    tier: RuleTier
    description: str = ""
    compiled: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "compiled", re.compile(self.pattern, re.IGNORECASE | re.DOTALL)
        )

    @property
    def hard_block(self) -> bool:
        return self.tier is RuleTier.RESTRICTED

    def matches(self, text: str) -> bool:
        return self.compiled.search(text) is not None


@dataclass(frozen=True)
class Verdict:
    """Result of classifying a comment or display name."""

    allowed: bool
    reason: VerdictReason = VerdictReason.NONE
    should_blur: bool = False
    rule_label: str = ""  # Matching rule, for logs and audits only

    @classmethod
    def clean(cls) -> "Verdict":
        return cls(allowed=True)

    @property
    def stored_reason(self) -> str | None:
        """Value for a comment's ``moderated_reason`` field, if any."""
        return self.reason.value if self.reason is not VerdictReason.NONE else None
