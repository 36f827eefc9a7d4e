"""Dashboard numbers for the admin console."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from inkwell.models.comment import Comment, CommentState
from inkwell.models.post import Post


@dataclass
class DashboardStats:
    total_posts: int = 0
    published_posts: int = 0
    draft_posts: int = 0
    total_comments: int = 0
    moderated_comments: int = 0
    pending_comments: int = 0
    reported_comments: int = 0


def dashboard_stats(posts: Iterable[Post], comments: Iterable[Comment]) -> DashboardStats:
    posts = list(posts)
    comments = list(comments)
    published = sum(1 for p in posts if p.published)
    return DashboardStats(
        total_posts=len(posts),
        published_posts=published,
        draft_posts=len(posts) - published,
        total_comments=len(comments),
        moderated_comments=sum(1 for c in comments if c.moderated),
        pending_comments=sum(1 for c in comments if c.state is CommentState.AUTO_MODERATED),
        reported_comments=sum(1 for c in comments if c.reported),
    )


def top_posts(posts: Iterable[Post], limit: int = 5) -> list[Post]:
    """Published posts with the most likes. Ties keep input order."""
    ranked = sorted((p for p in posts if p.published), key=lambda p: p.likes, reverse=True)
    return ranked[:limit]
