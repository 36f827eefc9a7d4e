"""Local file-based document store.

A simple, file-system-backed store for development, the CLI and tests.
Everything lives in one JSON file inside a directory. Counter increments
run under a lock so concurrent likes cannot lose updates.
"""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Any, Optional

from inkwell.counters import CounterUpdate
from inkwell.models.comment import Comment
from inkwell.models.post import Post
from inkwell.posts.pagination import Page, paginate
from inkwell.store.base import DocumentStore

logger = logging.getLogger(__name__)

# CounterUpdate names -> stored document keys
_COUNTER_KEYS = {"likes": "likes", "views": "views", "comment_count": "commentCount"}


class LocalStore(DocumentStore):
    """JSON-file store rooted at ``data_dir``."""

    DATA_FILE = "store.json"

    def __init__(self, data_dir: str | Path):
        self.data_dir = Path(data_dir)
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.data_path = self.data_dir / self.DATA_FILE
        self._lock = threading.RLock()
        self._data: dict[str, Any] = self._load()

    # -- posts ---------------------------------------------------------------

    def list_posts(
        self,
        *,
        published: Optional[bool] = None,
        cursor: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> Page[Post]:
        with self._lock:
            posts = [Post.from_dict(d) for d in self._data["posts"].values()]
        if published is not None:
            posts = [p for p in posts if p.published == published]
        posts.sort(key=_post_sort_key, reverse=True)
        if limit is None:
            return Page(items=posts)
        return paginate(posts, cursor=cursor, limit=limit)

    def get_post(self, post_id: str) -> Optional[Post]:
        with self._lock:
            data = self._data["posts"].get(post_id)
        return Post.from_dict(data) if data else None

    def save_post(self, post: Post) -> Post:
        with self._lock:
            self._data["posts"][post.id] = post.to_dict()
            self._save()
        return post

    def delete_post(self, post_id: str) -> bool:
        with self._lock:
            if self._data["posts"].pop(post_id, None) is None:
                return False
            self._data["comments"] = {
                cid: c for cid, c in self._data["comments"].items() if c.get("postId") != post_id
            }
            self._data["likes"].pop(post_id, None)
            self._save()
        return True

    def increment(self, update: CounterUpdate) -> int:
        key = _COUNTER_KEYS[update.counter]
        with self._lock:
            doc = self._data["posts"].get(update.doc_id)
            if doc is None:
                raise KeyError(update.doc_id)
            value = max(0, int(doc.get(key) or 0) + update.delta)
            doc[key] = value
            self._save()
        return value

    # -- comments ------------------------------------------------------------

    def list_comments(self, post_id: Optional[str] = None) -> list[Comment]:
        with self._lock:
            comments = [Comment.from_dict(d) for d in self._data["comments"].values()]
        if post_id is not None:
            comments = [c for c in comments if c.post_id == post_id]
        comments.sort(
            key=lambda c: c.created_at.timestamp() if c.created_at else 0.0,
            reverse=True,
        )
        return comments

    def get_comment(self, comment_id: str) -> Optional[Comment]:
        with self._lock:
            data = self._data["comments"].get(comment_id)
        return Comment.from_dict(data) if data else None

    def save_comment(self, comment: Comment) -> Comment:
        with self._lock:
            self._data["comments"][comment.id] = comment.to_dict()
            self._save()
        return comment

    def delete_comment(self, comment_id: str) -> bool:
        with self._lock:
            if self._data["comments"].pop(comment_id, None) is None:
                return False
            self._save()
        return True

    # -- likes ---------------------------------------------------------------

    def has_like(self, post_id: str, user_id: str) -> bool:
        with self._lock:
            return user_id in self._data["likes"].get(post_id, [])

    def add_like(self, post_id: str, user_id: str) -> bool:
        with self._lock:
            users = self._data["likes"].setdefault(post_id, [])
            if user_id in users:
                return False
            users.append(user_id)
            self._save()
        return True

    def remove_like(self, post_id: str, user_id: str) -> bool:
        with self._lock:
            users = self._data["likes"].get(post_id, [])
            if user_id not in users:
                return False
            users.remove(user_id)
            self._save()
        return True

    # -- import --------------------------------------------------------------

    def import_documents(self, posts: list[dict], comments: list[dict] | None = None) -> int:
        """Bulk-load raw post (and comment) documents. Returns posts loaded."""
        with self._lock:
            for doc in posts:
                post = Post.from_dict(doc)
                self._data["posts"][post.id] = post.to_dict()
            for doc in comments or []:
                comment = Comment.from_dict(doc)
                self._data["comments"][comment.id] = comment.to_dict()
            self._save()
        return len(posts)

    # -- persistence ---------------------------------------------------------

    def _load(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.data_path.exists():
            with open(self.data_path, encoding="utf-8") as f:
                data = json.load(f)
        for key in ("posts", "comments", "likes"):
            data.setdefault(key, {})
        return data

    def _save(self) -> None:
        tmp = self.data_path.with_suffix(".tmp")
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(self._data, f, indent=2)
        tmp.replace(self.data_path)


def _post_sort_key(post: Post) -> tuple[float, str]:
    return (post.created_at.timestamp() if post.created_at else 0.0, post.id)
