"""Comments router -- list, submit, delete and report comments on a post."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from inkwell.blog import BlogService
from inkwell.errors import InkwellError
from inkwell.session import ViewerSession
from web.backend.app.middleware.auth import get_service, get_viewer, http_error
from web.backend.app.models.api import (
    CommentRequest,
    CommentViewResponse,
    SubmittedCommentResponse,
)
from web.backend.app.routers._convert import view_to_response

router = APIRouter(prefix="/api", tags=["comments"])


@router.get(
    "/posts/{post_id}/comments",
    response_model=list[CommentViewResponse],
    summary="List comments on a post",
)
async def list_comments(
    post_id: str,
    reveal: list[str] = Query([], description="Moderated comment ids the viewer chose to reveal"),
    service: BlogService = Depends(get_service),
    viewer: ViewerSession = Depends(get_viewer),
):
    """Moderated bodies are omitted unless revealed or the viewer is the admin."""
    for comment_id in reveal:
        viewer = viewer.reveal(comment_id)
    return [view_to_response(v) for v in service.list_comments(post_id, viewer)]


@router.post(
    "/posts/{post_id}/comments",
    response_model=SubmittedCommentResponse,
    status_code=201,
    summary="Submit a comment",
)
async def submit_comment(
    post_id: str,
    request: CommentRequest,
    service: BlogService = Depends(get_service),
    viewer: ViewerSession = Depends(get_viewer),
):
    """Classify and store a comment.

    ``400`` asks the author to fix the input; ``422`` means the content is
    not permitted and was not stored.
    """
    try:
        comment = service.submit_comment(viewer, post_id, request.content, request.display_name)
    except InkwellError as exc:
        raise http_error(exc) from exc
    return SubmittedCommentResponse(
        id=comment.id,
        moderated=comment.moderated,
        moderated_reason=comment.moderated_reason,
    )


@router.delete("/comments/{comment_id}", summary="Delete a comment")
async def delete_comment(
    comment_id: str,
    service: BlogService = Depends(get_service),
    viewer: ViewerSession = Depends(get_viewer),
):
    """Owners may delete their own comments; the admin may delete any."""
    try:
        service.delete_comment(viewer, comment_id)
    except InkwellError as exc:
        raise http_error(exc) from exc
    return {"deleted": comment_id}


@router.post("/comments/{comment_id}/report", summary="Report a comment")
async def report_comment(
    comment_id: str,
    service: BlogService = Depends(get_service),
    viewer: ViewerSession = Depends(get_viewer),
):
    try:
        comment = service.report_comment(viewer, comment_id)
    except InkwellError as exc:
        raise http_error(exc) from exc
    return {"id": comment.id, "reported": comment.reported}
