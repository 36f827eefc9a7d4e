"""Error types raised by Inkwell.

The engine itself only produces ``ValidationError`` and
``RestrictedContentError``. The remaining types belong to the collaborator
layers (rule loading, the blog service and its store).
"""

from __future__ import annotations


class InkwellError(Exception):
    """Base class for all Inkwell errors."""


class ValidationError(InkwellError):
    """Input is missing or malformed. The author can fix it and resubmit."""


class RestrictedContentError(InkwellError):
    """Content is not permitted and must not be persisted.

    The message is intentionally generic; ``reason`` carries the verdict
    reason for callers that need to branch on it.
    """

    GENERIC_MESSAGE = "Your comment contains restricted content. Please revise."

    def __init__(self, message: str = "", reason: str = "restricted_content") -> None:
        super().__init__(message or self.GENERIC_MESSAGE)
        self.reason = reason


class RuleConfigError(InkwellError):
    """A moderation rule file failed validation."""

    def __init__(self, issues: list[str]) -> None:
        self.issues = list(issues)
        summary = "; ".join(self.issues[:3])
        if len(self.issues) > 3:
            summary += f" (+{len(self.issues) - 3} more)"
        super().__init__(f"Invalid moderation rules: {summary}")


class NotAuthorizedError(InkwellError):
    """The viewer is not allowed to perform the requested action."""


class NotFoundError(InkwellError):
    """A requested post or comment does not exist."""
