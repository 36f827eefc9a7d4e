"""Comment view models for the rendering layer.

A moderated comment's body is left out of the view entirely until the
viewer reveals it (or the viewer is an admin). Hiding it with CSS alone
would still ship the text to the page.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional

from inkwell.models.comment import Comment
from inkwell.session import ViewerSession

MODERATED_NOTICE = "Content moderated for respectful communication"


@dataclass(frozen=True)
class CommentView:
    """What the renderer may show for one comment."""

    id: str
    author_name: str
    is_admin: bool
    body: Optional[str]  # None while withheld
    withheld: bool
    notice: str
    reply: Optional[str]
    created_at: Optional[datetime]
    can_delete: bool
    can_reveal: bool
    moderated_reason: Optional[str] = None  # Only filled in for admin viewers
    reported: bool = False


def render_comment(comment: Comment, session: ViewerSession) -> CommentView:
    withheld = (
        comment.moderated
        and not session.is_admin
        and not session.has_revealed(comment.id)
    )
    can_delete = session.is_admin or (
        bool(session.user_id) and session.user_id == comment.user_id
    )
    return CommentView(
        id=comment.id,
        author_name=comment.author_name,
        is_admin=comment.is_admin,
        body=None if withheld else comment.content,
        withheld=withheld,
        notice=MODERATED_NOTICE if comment.moderated else "",
        reply=comment.reply,
        created_at=comment.created_at,
        can_delete=can_delete,
        can_reveal=withheld,
        moderated_reason=comment.moderated_reason if session.is_admin else None,
        reported=comment.reported if session.is_admin else False,
    )


def render_comments(comments: Iterable[Comment], session: ViewerSession) -> list[CommentView]:
    return [render_comment(c, session) for c in comments]
