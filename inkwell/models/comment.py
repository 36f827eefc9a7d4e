"""Comment document model and its moderation state."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from inkwell.models.timestamps import to_iso, to_utc


class CommentState(Enum):
    """Canonical moderation state of a stored comment.

    ``reported`` is tracked separately on the comment and does not change
    the state.
    """

    CLEAN = "clean"
    AUTO_MODERATED = "auto_moderated"  # Flagged by the classifier, not yet reviewed
    ADMIN_MODERATED = "admin_moderated"  # Hidden by an explicit admin decision


@dataclass
class Comment:
    """A visitor or admin comment on a post."""

    id: str
    post_id: str
    content: str
    author_name: str = ""
    user_id: str = ""
    is_admin: bool = False
    moderated: bool = False
    moderated_reason: Optional[str] = None
    reported: bool = False
    reply: Optional[str] = None
    replied_at: Optional[datetime] = None
    admin_reviewed: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def state(self) -> CommentState:
        if not self.moderated:
            return CommentState.CLEAN
        if self.admin_reviewed:
            return CommentState.ADMIN_MODERATED
        return CommentState.AUTO_MODERATED

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Comment":
        return cls(
            id=str(data.get("id", "")),
            post_id=str(data.get("postId", data.get("post_id", ""))),
            content=data.get("content") or "",
            author_name=data.get("authorName", data.get("author_name")) or "",
            user_id=data.get("userId", data.get("user_id")) or "",
            is_admin=bool(data.get("isAdmin", data.get("is_admin", False))),
            moderated=bool(data.get("moderated", False)),
            moderated_reason=data.get("moderatedReason", data.get("moderated_reason")),
            reported=bool(data.get("reported", False)),
            reply=data.get("reply"),
            replied_at=to_utc(data.get("repliedAt", data.get("replied_at"))),
            admin_reviewed=bool(data.get("adminReviewed", data.get("admin_reviewed", False))),
            created_at=to_utc(data.get("createdAt", data.get("created_at"))),
            updated_at=to_utc(data.get("updatedAt", data.get("updated_at"))),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "postId": self.post_id,
            "content": self.content,
            "authorName": self.author_name,
            "userId": self.user_id,
            "isAdmin": self.is_admin,
            "moderated": self.moderated,
            "moderatedReason": self.moderated_reason,
            "reported": self.reported,
            "reply": self.reply,
            "repliedAt": to_iso(self.replied_at),
            "adminReviewed": self.admin_reviewed,
            "createdAt": to_iso(self.created_at),
            "updatedAt": to_iso(self.updated_at),
        }
