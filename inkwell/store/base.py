"""Document store interface.

The engine never talks to storage. This is the contract the blog service
expects from whichever backend holds posts, comments and likes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from inkwell.counters import CounterUpdate
from inkwell.models.comment import Comment
from inkwell.models.post import Post
from inkwell.posts.pagination import Page


class DocumentStore(ABC):
    """Posts, comments and per-user likes."""

    # -- posts ---------------------------------------------------------------

    @abstractmethod
    def list_posts(
        self,
        *,
        published: Optional[bool] = None,
        cursor: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> Page[Post]:
        """Posts newest first, optionally filtered on ``published``."""

    @abstractmethod
    def get_post(self, post_id: str) -> Optional[Post]: ...

    @abstractmethod
    def save_post(self, post: Post) -> Post: ...

    @abstractmethod
    def delete_post(self, post_id: str) -> bool: ...

    @abstractmethod
    def increment(self, update: CounterUpdate) -> int:
        """Apply a counter delta atomically and return the new value (>= 0)."""

    # -- comments ------------------------------------------------------------

    @abstractmethod
    def list_comments(self, post_id: Optional[str] = None) -> list[Comment]:
        """Comments newest first; all posts when ``post_id`` is None."""

    @abstractmethod
    def get_comment(self, comment_id: str) -> Optional[Comment]: ...

    @abstractmethod
    def save_comment(self, comment: Comment) -> Comment: ...

    @abstractmethod
    def delete_comment(self, comment_id: str) -> bool: ...

    # -- likes ---------------------------------------------------------------

    @abstractmethod
    def has_like(self, post_id: str, user_id: str) -> bool: ...

    @abstractmethod
    def add_like(self, post_id: str, user_id: str) -> bool:
        """Record a like. Returns False if it already existed."""

    @abstractmethod
    def remove_like(self, post_id: str, user_id: str) -> bool:
        """Remove a like. Returns False if there was none."""
