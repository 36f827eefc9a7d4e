"""Document models for posts and comments."""

from inkwell.models.comment import Comment, CommentState
from inkwell.models.post import Post

__all__ = ["Comment", "CommentState", "Post"]
