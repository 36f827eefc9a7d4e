"""Moderation router -- verdict previews for the comment and name forms,
plus the admin review queue and actions.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from inkwell.blog import BlogService
from inkwell.errors import InkwellError
from inkwell.moderation.usernames import is_username_restricted
from inkwell.session import ViewerSession
from web.backend.app.middleware.auth import get_service, http_error, require_admin
from web.backend.app.models.api import (
    ApproveRequest,
    ClassifyRequest,
    CommentResponse,
    DashboardResponse,
    ModerateRequest,
    UsernameRequest,
    UsernameResponse,
    VerdictResponse,
)
from web.backend.app.routers._convert import comment_to_response, post_to_response

router = APIRouter(prefix="/api", tags=["moderation"])


# ---------------------------------------------------------------------------
# Public checks
# ---------------------------------------------------------------------------


@router.post(
    "/moderation/classify",
    response_model=VerdictResponse,
    summary="Classify comment text",
)
async def classify(request: ClassifyRequest, service: BlogService = Depends(get_service)):
    """Preview the verdict for a draft comment. The matching rule is not disclosed."""
    verdict = service.classifier.classify(request.content)
    return VerdictResponse(
        allowed=verdict.allowed,
        reason=verdict.reason.value,
        should_blur=verdict.should_blur,
    )


@router.post(
    "/moderation/username",
    response_model=UsernameResponse,
    summary="Check a display name",
)
async def check_username(request: UsernameRequest, service: BlogService = Depends(get_service)):
    return UsernameResponse(
        name=request.name.strip(),
        empty=not request.name.strip(),
        restricted=is_username_restricted(request.name, service.rules.reserved_names),
    )


# ---------------------------------------------------------------------------
# Admin
# ---------------------------------------------------------------------------


@router.get(
    "/admin/comments",
    response_model=list[CommentResponse],
    summary="Comment review queue",
)
async def review_queue(
    view: str = Query("all", description="all | pending | moderated | reported"),
    service: BlogService = Depends(get_service),
    viewer: ViewerSession = Depends(require_admin),
):
    try:
        comments = service.review_queue(viewer, view)
    except InkwellError as exc:
        raise http_error(exc) from exc
    return [comment_to_response(c) for c in comments]


@router.post(
    "/admin/comments/{comment_id}/approve",
    response_model=CommentResponse,
    summary="Approve a comment",
)
async def approve(
    comment_id: str,
    request: ApproveRequest,
    service: BlogService = Depends(get_service),
    viewer: ViewerSession = Depends(require_admin),
):
    try:
        comment = service.approve_comment(viewer, comment_id, reply=request.reply)
    except InkwellError as exc:
        raise http_error(exc) from exc
    return comment_to_response(comment)


@router.post(
    "/admin/comments/{comment_id}/moderate",
    response_model=CommentResponse,
    summary="Moderate a comment",
)
async def moderate(
    comment_id: str,
    request: ModerateRequest,
    service: BlogService = Depends(get_service),
    viewer: ViewerSession = Depends(require_admin),
):
    try:
        comment = service.moderate_comment(viewer, comment_id, request.reason)
    except InkwellError as exc:
        raise http_error(exc) from exc
    return comment_to_response(comment)


@router.get(
    "/admin/stats",
    response_model=DashboardResponse,
    summary="Dashboard statistics",
)
async def stats(
    service: BlogService = Depends(get_service),
    viewer: ViewerSession = Depends(require_admin),
):
    summary, ranked = service.dashboard(viewer)
    return DashboardResponse(
        total_posts=summary.total_posts,
        published_posts=summary.published_posts,
        draft_posts=summary.draft_posts,
        total_comments=summary.total_comments,
        moderated_comments=summary.moderated_comments,
        pending_comments=summary.pending_comments,
        reported_comments=summary.reported_comments,
        top_posts=[post_to_response(p) for p in ranked],
    )
