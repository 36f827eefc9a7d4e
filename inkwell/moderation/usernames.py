"""Display-name restriction checks."""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from inkwell.config import DEFAULT_ANONYMOUS_LABEL
from inkwell.errors import RestrictedContentError, ValidationError
from inkwell.moderation.models import Verdict, VerdictReason
from inkwell.moderation.rules import default_rules

logger = logging.getLogger(__name__)

USERNAME_RESTRICTED_MESSAGE = "This username is not allowed"


def is_username_restricted(name: str, reserved: Optional[Iterable[str]] = None) -> bool:
    """Return True if ``name`` impersonates a reserved term.

    The check runs both ways: the name may contain a reserved term
    ("superadmin123") or be a fragment of one ("ad"). Empty and
    whitespace-only names are not restricted; they count as missing.
    """
    candidate = name.strip().lower()
    if not candidate:
        return False
    terms = default_rules().reserved_names if reserved is None else reserved
    for term in terms:
        term = term.strip().lower()
        if not term:
            continue
        if term in candidate or candidate in term:
            return True
    return False


def check_display_name(name: str, reserved: Optional[Iterable[str]] = None) -> Verdict:
    """Verdict form of ``is_username_restricted``."""
    if is_username_restricted(name, reserved):
        return Verdict(allowed=False, reason=VerdictReason.USERNAME_RESTRICTED)
    return Verdict.clean()


def resolve_display_name(
    name: Optional[str],
    *,
    required: bool = False,
    anonymous_label: str = DEFAULT_ANONYMOUS_LABEL,
    reserved: Optional[Iterable[str]] = None,
) -> str:
    """Return the name to store with a comment.

    Missing names fall back to ``anonymous_label`` unless ``required``, in
    which case they are a ``ValidationError``. Restricted names raise
    ``RestrictedContentError``. The two must stay distinct for the author.
    """
    trimmed = (name or "").strip()
    if not trimmed:
        if required:
            raise ValidationError("Please enter a display name")
        return anonymous_label
    if is_username_restricted(trimmed, reserved):
        logger.info("Rejected restricted display name")
        raise RestrictedContentError(
            USERNAME_RESTRICTED_MESSAGE, reason=VerdictReason.USERNAME_RESTRICTED.value
        )
    return trimmed
