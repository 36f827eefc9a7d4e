"""Admin moderation actions and the review queue.

Admin decisions override the automatic classifier and stay in force until
another admin action changes them. Actions return updated copies; nothing
is mutated in place. Checking that the viewer is an admin is the caller's
responsibility.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Optional

from inkwell.errors import ValidationError
from inkwell.models.comment import Comment, CommentState
from inkwell.models.timestamps import utc_now
from inkwell.moderation.classifier import ContentClassifier

REVIEW_VIEWS = ("all", "pending", "moderated", "reported")


def approve_comment(comment: Comment, reply: Optional[str] = None) -> Comment:
    """Clear moderation and any open report, optionally attaching a reply."""
    now = utc_now()
    updated = replace(
        comment,
        moderated=False,
        moderated_reason=None,
        reported=False,
        admin_reviewed=True,
        updated_at=now,
    )
    if reply is not None and reply.strip():
        updated = replace(updated, reply=reply.strip(), replied_at=now)
    return updated


def moderate_comment(comment: Comment, reason: str) -> Comment:
    """Hide a comment with an admin-supplied reason."""
    if not reason or not reason.strip():
        raise ValidationError("Please enter a moderation reason")
    return replace(
        comment,
        moderated=True,
        moderated_reason=reason.strip(),
        admin_reviewed=True,
        updated_at=utc_now(),
    )


def reply_to_comment(comment: Comment, reply: str) -> Comment:
    """Set or replace the admin reply. An empty reply removes it."""
    text = (reply or "").strip()
    return replace(
        comment,
        reply=text or None,
        replied_at=utc_now() if text else None,
        updated_at=utc_now(),
    )


def report_comment(comment: Comment) -> Comment:
    """Flag a comment for admin review. The moderation state is unchanged."""
    if comment.reported:
        return comment
    return replace(comment, reported=True, updated_at=utc_now())


def reclassify(comment: Comment, classifier: Optional[ContentClassifier] = None) -> Comment:
    """Re-run the classifier, e.g. after a rule change.

    Admin-reviewed comments are returned untouched. Content that now hits a
    restricted rule is moderated rather than deleted, since it is already
    stored.
    """
    if comment.admin_reviewed:
        return comment
    verdict = (classifier or ContentClassifier()).classify(comment.content)
    flagged = verdict.should_blur or not verdict.allowed
    reason = verdict.stored_reason if flagged else None
    if comment.moderated == flagged and comment.moderated_reason == reason:
        return comment
    return replace(comment, moderated=flagged, moderated_reason=reason, updated_at=utc_now())


def review_queue(comments: Iterable[Comment], view: str = "all") -> list[Comment]:
    """Comments for the admin review screen, newest first.

    ``pending`` holds auto-moderated comments nobody has reviewed yet;
    ``moderated`` holds every moderated comment; ``reported`` holds visitor
    reports.
    """
    if view not in REVIEW_VIEWS:
        raise ValidationError(f"Unknown review view '{view}'. Must be one of: {REVIEW_VIEWS}")

    if view == "pending":
        selected = [c for c in comments if c.state is CommentState.AUTO_MODERATED]
    elif view == "moderated":
        selected = [c for c in comments if c.moderated]
    elif view == "reported":
        selected = [c for c in comments if c.reported]
    else:
        selected = list(comments)

    return sorted(selected, key=_created_key, reverse=True)


def _created_key(comment: Comment) -> float:
    return comment.created_at.timestamp() if comment.created_at else 0.0
