"""Blog service: the single place UI adapters call into.

Wires the classification engine to a document store. Public operations
(listing, viewing, liking, commenting) are open to any viewer; admin
operations check ``ViewerSession.is_admin`` and record an audit event.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from typing import Optional

from inkwell.admin.audit_log import AuditLogger
from inkwell.admin.stats import DashboardStats, dashboard_stats, top_posts
from inkwell.config import Settings
from inkwell.counters import CounterUpdate
from inkwell.errors import NotAuthorizedError, NotFoundError, ValidationError
from inkwell.models.comment import Comment
from inkwell.models.post import Post
from inkwell.models.timestamps import utc_now
from inkwell.moderation import actions
from inkwell.moderation.classifier import ContentClassifier
from inkwell.moderation.rules import RuleSet, load_rules
from inkwell.moderation.submission import prepare_comment
from inkwell.posts.filters import PostFilter, collect_categories, collect_years, filter_posts
from inkwell.posts.pagination import Page, paginate
from inkwell.rendering import CommentView, render_comments
from inkwell.session import PostFeed, ViewerSession
from inkwell.store.base import DocumentStore

logger = logging.getLogger(__name__)


class BlogService:
    """Public and admin blog operations over a DocumentStore."""

    def __init__(
        self,
        store: DocumentStore,
        *,
        rules: Optional[RuleSet] = None,
        settings: Optional[Settings] = None,
        audit: Optional[AuditLogger] = None,
    ) -> None:
        self.store = store
        self.settings = settings or Settings.from_env()
        self.rules = rules or load_rules(self.settings.rules_file or None)
        self.classifier = ContentClassifier(self.rules)
        self.audit = audit

    # -- posts ---------------------------------------------------------------

    def load_posts(self, feed: PostFeed, load_more: bool = False) -> Optional[list[Post]]:
        """Fetch the next page of published posts into ``feed``.

        Returns the filtered posts, or ``None`` if a newer load superseded
        this one.
        """
        if load_more and feed.exhausted:
            return feed.visible()
        seq = feed.begin()
        page = self.fetch_page(
            cursor=feed.cursor if load_more else None,
            limit=self.settings.load_more_size if load_more else feed.state.page_size,
        )
        return feed.apply(seq, page, load_more=load_more)

    def fetch_page(self, cursor: Optional[str] = None, limit: Optional[int] = None) -> Page[Post]:
        return self.store.list_posts(
            published=True, cursor=cursor, limit=limit or self.settings.page_size
        )

    def search_posts(
        self,
        post_filter: PostFilter,
        cursor: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> Page[Post]:
        """Filter every published post, then page through the matches."""
        matched = filter_posts(self.store.list_posts(published=True).items, post_filter)
        return paginate(matched, cursor=cursor, limit=limit or self.settings.page_size)

    def facets(self) -> tuple[list[str], list[int]]:
        """Categories and years available across published posts."""
        published = self.store.list_posts(published=True).items
        return collect_categories(published), collect_years(published)

    def open_post(self, post_id: str, viewer: Optional[ViewerSession] = None) -> Post:
        """Return a post for reading and count the view."""
        post = self._require_post(post_id)
        if not post.published and not (viewer and viewer.is_admin):
            raise NotFoundError(f"Post not found: {post_id}")
        views = self.store.increment(CounterUpdate(post_id, "views", 1))
        return replace(post, views=views)

    def toggle_like(self, viewer: ViewerSession, post_id: str) -> tuple[bool, int]:
        """Like or unlike a post. Returns ``(liked, server like count)``."""
        if not viewer.signed_in:
            raise NotAuthorizedError("Sign in to like posts")
        self._require_post(post_id)
        if self.store.remove_like(post_id, viewer.user_id):
            return False, self.store.increment(CounterUpdate(post_id, "likes", -1))
        self.store.add_like(post_id, viewer.user_id)
        return True, self.store.increment(CounterUpdate(post_id, "likes", 1))

    # -- comments ------------------------------------------------------------

    def submit_comment(
        self,
        viewer: ViewerSession,
        post_id: str,
        content: str,
        display_name: Optional[str] = None,
    ) -> Comment:
        if not viewer.signed_in:
            raise NotAuthorizedError("Sign in to comment")
        self._require_post(post_id)
        comment = prepare_comment(
            content,
            post_id=post_id,
            viewer=viewer,
            display_name=display_name,
            classifier=self.classifier,
            anonymous_label=self.settings.anonymous_label,
            reserved=self.rules.reserved_names,
        )
        self.store.save_comment(comment)
        self.store.increment(CounterUpdate(post_id, "comment_count", 1))
        if comment.moderated:
            logger.info("Comment %s on post %s stored as moderated", comment.id, post_id)
        return comment

    def list_comments(self, post_id: str, viewer: ViewerSession) -> list[CommentView]:
        return render_comments(self.store.list_comments(post_id), viewer)

    def delete_comment(self, viewer: ViewerSession, comment_id: str) -> None:
        comment = self._require_comment(comment_id)
        is_owner = viewer.signed_in and viewer.user_id == comment.user_id
        if not (is_owner or viewer.is_admin):
            raise NotAuthorizedError("You can only delete your own comments")
        self.store.delete_comment(comment_id)
        # Orphaned comments (post already gone) have no counter to adjust.
        if self.store.get_post(comment.post_id) is not None:
            self.store.increment(CounterUpdate(comment.post_id, "comment_count", -1))
        if viewer.is_admin and not is_owner:
            self._audit(viewer, "comment_deleted", "comment", comment_id, {"post_id": comment.post_id})

    def report_comment(self, viewer: ViewerSession, comment_id: str) -> Comment:
        if not viewer.signed_in:
            raise NotAuthorizedError("Sign in to report comments")
        comment = actions.report_comment(self._require_comment(comment_id))
        return self.store.save_comment(comment)

    # -- admin ---------------------------------------------------------------

    def approve_comment(
        self, viewer: ViewerSession, comment_id: str, reply: Optional[str] = None
    ) -> Comment:
        self._require_admin(viewer)
        comment = actions.approve_comment(self._require_comment(comment_id), reply=reply)
        self.store.save_comment(comment)
        self._audit(viewer, "comment_approved", "comment", comment_id, {"replied": bool(reply)})
        return comment

    def moderate_comment(self, viewer: ViewerSession, comment_id: str, reason: str) -> Comment:
        self._require_admin(viewer)
        comment = actions.moderate_comment(self._require_comment(comment_id), reason)
        self.store.save_comment(comment)
        self._audit(viewer, "comment_moderated", "comment", comment_id, {"reason": comment.moderated_reason})
        return comment

    def reply_to_comment(self, viewer: ViewerSession, comment_id: str, reply: str) -> Comment:
        self._require_admin(viewer)
        comment = actions.reply_to_comment(self._require_comment(comment_id), reply)
        self.store.save_comment(comment)
        self._audit(viewer, "comment_replied", "comment", comment_id)
        return comment

    def review_queue(self, viewer: ViewerSession, view: str = "all") -> list[Comment]:
        self._require_admin(viewer)
        return actions.review_queue(self.store.list_comments(), view)

    def save_post(self, viewer: ViewerSession, post: Post) -> Post:
        self._require_admin(viewer)
        if not post.title.strip():
            raise ValidationError("Please enter a title")
        now = utc_now()
        post = replace(
            post,
            id=post.id or uuid.uuid4().hex,
            created_at=post.created_at or now,
            updated_at=now,
        )
        existing = self.store.get_post(post.id)
        if existing is not None:
            # Counters belong to the store; an edit must not overwrite them.
            post = replace(
                post,
                likes=existing.likes,
                views=existing.views,
                comment_count=existing.comment_count,
                created_at=existing.created_at or post.created_at,
            )
        self.store.save_post(post)
        self._audit(viewer, "post_saved", "post", post.id, {"published": post.published})
        return post

    def set_published(self, viewer: ViewerSession, post_id: str, published: bool) -> Post:
        self._require_admin(viewer)
        post = replace(self._require_post(post_id), published=published, updated_at=utc_now())
        self.store.save_post(post)
        self._audit(viewer, "post_published" if published else "post_unpublished", "post", post_id)
        return post

    def delete_post(self, viewer: ViewerSession, post_id: str) -> None:
        self._require_admin(viewer)
        if not self.store.delete_post(post_id):
            raise NotFoundError(f"Post not found: {post_id}")
        self._audit(viewer, "post_deleted", "post", post_id)

    def dashboard(self, viewer: ViewerSession) -> tuple[DashboardStats, list[Post]]:
        self._require_admin(viewer)
        posts = self.store.list_posts().items
        return dashboard_stats(posts, self.store.list_comments()), top_posts(posts)

    # -- helpers -------------------------------------------------------------

    def _require_admin(self, viewer: ViewerSession) -> None:
        if not viewer.is_admin:
            raise NotAuthorizedError("Admin access required")

    def _require_post(self, post_id: str) -> Post:
        post = self.store.get_post(post_id)
        if post is None:
            raise NotFoundError(f"Post not found: {post_id}")
        return post

    def _require_comment(self, comment_id: str) -> Comment:
        comment = self.store.get_comment(comment_id)
        if comment is None:
            raise NotFoundError(f"Comment not found: {comment_id}")
        return comment

    def _audit(
        self,
        viewer: ViewerSession,
        action: str,
        resource_type: str,
        resource_id: str,
        details: Optional[dict] = None,
    ) -> None:
        logger.info("Admin %s: %s %s", action, resource_type, resource_id)
        if self.audit is not None:
            self.audit.log_event(
                actor=viewer.user_id or "admin",
                action=action,
                resource_type=resource_type,
                resource_id=resource_id,
                details=details,
            )
