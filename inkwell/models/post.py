"""Post document model."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional, Union

from inkwell.models.timestamps import to_iso, to_utc


@dataclass
class Post:
    """A blog post as stored in the document store.

    ``category`` is free text and may hold several comma-separated tags, or
    a list of tags. Use ``categories`` for the split, trimmed form.
    """

    id: str
    title: str = ""
    excerpt: str = ""
    content: str = ""
    category: Union[str, list[str]] = ""
    image_url: str = ""
    published: bool = False
    likes: int = 0
    views: int = 0
    comment_count: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def categories(self) -> list[str]:
        raw = self.category
        if not raw:
            return []
        parts = raw.split(",") if isinstance(raw, str) else raw
        return [p.strip() for p in parts if isinstance(p, str) and p.strip()]

    @property
    def category_text(self) -> str:
        """The category field as searchable text."""
        if isinstance(self.category, str):
            return self.category
        return ", ".join(c for c in self.category if isinstance(c, str))

    @property
    def year(self) -> Optional[int]:
        """Calendar year of ``created_at`` in UTC."""
        created = to_utc(self.created_at)
        return created.year if created is not None else None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Post":
        """Build a Post from a stored document (camelCase or snake_case keys)."""
        known = {
            "id", "title", "excerpt", "content", "category", "categories",
            "imageUrl", "image_url", "published", "likes", "views",
            "commentCount", "comment_count", "createdAt", "created_at",
            "updatedAt", "updated_at",
        }
        category = data.get("category")
        if category is None:
            category = data.get("categories", "")
        return cls(
            id=str(data.get("id", "")),
            title=_text(data.get("title")),
            excerpt=_text(data.get("excerpt")),
            content=_text(data.get("content")),
            category=category if isinstance(category, (str, list)) else "",
            image_url=_text(data.get("imageUrl", data.get("image_url"))),
            published=bool(data.get("published", False)),
            likes=_count(data.get("likes")),
            views=_count(data.get("views")),
            comment_count=_count(data.get("commentCount", data.get("comment_count"))),
            created_at=to_utc(data.get("createdAt", data.get("created_at"))),
            updated_at=to_utc(data.get("updatedAt", data.get("updated_at"))),
            extra={k: v for k, v in data.items() if k not in known},
        )

    def to_dict(self) -> dict[str, Any]:
        data = dict(self.extra)
        data.update(
            {
                "id": self.id,
                "title": self.title,
                "excerpt": self.excerpt,
                "content": self.content,
                "category": self.category,
                "imageUrl": self.image_url,
                "published": self.published,
                "likes": self.likes,
                "views": self.views,
                "commentCount": self.comment_count,
                "createdAt": to_iso(self.created_at),
                "updatedAt": to_iso(self.updated_at),
            }
        )
        return data


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _count(value: Any) -> int:
    try:
        return max(0, int(value or 0))
    except (TypeError, ValueError):
        return 0
