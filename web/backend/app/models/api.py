"""Pydantic models for API request/response serialization.

These models mirror the Inkwell dataclasses and provide proper JSON
serialization for the FastAPI endpoints.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Post models
# ---------------------------------------------------------------------------


class PostResponse(BaseModel):
    """Mirrors inkwell.models.post.Post."""

    id: str
    title: str = ""
    excerpt: str = ""
    content: str = ""
    category: Union[str, list[str]] = ""
    categories: list[str] = Field(default_factory=list)
    image_url: str = ""
    published: bool = False
    likes: int = 0
    views: int = 0
    comment_count: int = 0
    created_at: Optional[datetime] = None


class PostListResponse(BaseModel):
    """A filtered page of posts plus the facets for the filter controls."""

    posts: list[PostResponse] = Field(default_factory=list)
    next_cursor: Optional[str] = None
    categories: list[str] = Field(default_factory=list)
    years: list[int] = Field(default_factory=list)


class PostRequest(BaseModel):
    """Create or edit a post (admin)."""

    id: str = ""
    title: str
    excerpt: str = ""
    content: str = ""
    category: Union[str, list[str]] = ""
    image_url: str = ""
    published: bool = False


class PublishRequest(BaseModel):
    published: bool


class LikeResponse(BaseModel):
    liked: bool
    likes: int


# ---------------------------------------------------------------------------
# Comment models
# ---------------------------------------------------------------------------


class CommentRequest(BaseModel):
    content: str
    display_name: Optional[str] = None


class CommentViewResponse(BaseModel):
    """Mirrors inkwell.rendering.CommentView. ``body`` is null while withheld."""

    id: str
    author_name: str
    is_admin: bool = False
    body: Optional[str] = None
    withheld: bool = False
    notice: str = ""
    reply: Optional[str] = None
    created_at: Optional[datetime] = None
    can_delete: bool = False
    can_reveal: bool = False
    moderated_reason: Optional[str] = None
    reported: bool = False


class CommentResponse(BaseModel):
    """Mirrors inkwell.models.comment.Comment (admin screens only)."""

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
    state: str = "clean"
    created_at: Optional[datetime] = None


class SubmittedCommentResponse(BaseModel):
    id: str
    moderated: bool
    moderated_reason: Optional[str] = None


class ApproveRequest(BaseModel):
    reply: Optional[str] = None


class ModerateRequest(BaseModel):
    reason: str


# ---------------------------------------------------------------------------
# Moderation models
# ---------------------------------------------------------------------------


class ClassifyRequest(BaseModel):
    content: str


class VerdictResponse(BaseModel):
    """Mirrors inkwell.moderation.models.Verdict (without the rule label)."""

    allowed: bool
    reason: str
    should_blur: bool


class UsernameRequest(BaseModel):
    name: str


class UsernameResponse(BaseModel):
    name: str
    empty: bool
    restricted: bool


class DashboardResponse(BaseModel):
    total_posts: int = 0
    published_posts: int = 0
    draft_posts: int = 0
    total_comments: int = 0
    moderated_comments: int = 0
    pending_comments: int = 0
    reported_comments: int = 0
    top_posts: list[PostResponse] = Field(default_factory=list)
