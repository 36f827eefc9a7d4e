"""Dataclass -> response model conversion shared by the routers."""

from __future__ import annotations

from inkwell.models.comment import Comment
from inkwell.models.post import Post
from inkwell.rendering import CommentView
from web.backend.app.models.api import CommentResponse, CommentViewResponse, PostResponse


def post_to_response(post: Post) -> PostResponse:
    return PostResponse(
        id=post.id,
        title=post.title,
        excerpt=post.excerpt,
        content=post.content,
        category=post.category,
        categories=post.categories,
        image_url=post.image_url,
        published=post.published,
        likes=post.likes,
        views=post.views,
        comment_count=post.comment_count,
        created_at=post.created_at,
    )


def view_to_response(view: CommentView) -> CommentViewResponse:
    return CommentViewResponse(
        id=view.id,
        author_name=view.author_name,
        is_admin=view.is_admin,
        body=view.body,
        withheld=view.withheld,
        notice=view.notice,
        reply=view.reply,
        created_at=view.created_at,
        can_delete=view.can_delete,
        can_reveal=view.can_reveal,
        moderated_reason=view.moderated_reason,
        reported=view.reported,
    )


def comment_to_response(comment: Comment) -> CommentResponse:
    return CommentResponse(
        id=comment.id,
        post_id=comment.post_id,
        content=comment.content,
        author_name=comment.author_name,
        user_id=comment.user_id,
        is_admin=comment.is_admin,
        moderated=comment.moderated,
        moderated_reason=comment.moderated_reason,
        reported=comment.reported,
        reply=comment.reply,
        state=comment.state.value,
        created_at=comment.created_at,
    )
