"""Turn a visitor's comment form into a comment ready to store."""

from __future__ import annotations

import logging
import uuid
from typing import Iterable, Optional

from inkwell.config import DEFAULT_ANONYMOUS_LABEL
from inkwell.errors import RestrictedContentError, ValidationError
from inkwell.models.comment import Comment
from inkwell.models.timestamps import utc_now
from inkwell.moderation.classifier import ContentClassifier
from inkwell.moderation.usernames import resolve_display_name
from inkwell.session import ViewerSession

logger = logging.getLogger(__name__)


def prepare_comment(
    content: str,
    *,
    post_id: str,
    viewer: ViewerSession,
    display_name: Optional[str] = None,
    classifier: Optional[ContentClassifier] = None,
    anonymous_label: str = DEFAULT_ANONYMOUS_LABEL,
    reserved: Optional[Iterable[str]] = None,
) -> Comment:
    """Validate and classify a new comment.

    Raises ``ValidationError`` for a blank body and ``RestrictedContentError``
    for a hard-blocked body or a restricted display name. Soft-flagged text
    comes back with ``moderated=True``; persisting it is the caller's job.

    Display names are checked against ``reserved``, defaulting to the
    reserved names of the classifier's rule set.
    """
    if not isinstance(content, str):
        raise TypeError(f"content must be a string, got {type(content).__name__}")
    if not content.strip():
        raise ValidationError("Please enter a comment")

    name = display_name if display_name is not None else viewer.display_name
    classifier = classifier or ContentClassifier()
    if reserved is None:
        reserved = classifier.rules.reserved_names
    author = resolve_display_name(name, anonymous_label=anonymous_label, reserved=reserved)

    verdict = classifier.classify(content)
    if not verdict.allowed:
        logger.info("Rejected comment on post %s (rule %s)", post_id, verdict.rule_label)
        raise RestrictedContentError(reason=verdict.reason.value)

    return Comment(
        id=uuid.uuid4().hex,
        post_id=post_id,
        content=content.strip(),
        author_name=author,
        user_id=viewer.user_id,
        is_admin=viewer.is_admin,
        moderated=verdict.should_blur,
        moderated_reason=verdict.stored_reason if verdict.should_blur else None,
        created_at=utc_now(),
    )
