"""Posts router -- public listing, reading and likes; admin authoring."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from inkwell.blog import BlogService
from inkwell.errors import InkwellError
from inkwell.models.post import Post
from inkwell.posts.filters import PostFilter
from inkwell.session import ViewerSession
from web.backend.app.middleware.auth import get_service, get_viewer, http_error, require_admin
from web.backend.app.models.api import (
    LikeResponse,
    PostListResponse,
    PostRequest,
    PostResponse,
    PublishRequest,
)
from web.backend.app.routers._convert import post_to_response

router = APIRouter(prefix="/api/posts", tags=["posts"])


@router.get(
    "",
    response_model=PostListResponse,
    summary="List published posts",
)
async def list_posts(
    category: Optional[str] = Query(None, description="Category tag"),
    year: Optional[str] = Query(None, description="Calendar year (UTC)"),
    search: str = Query("", description="Free-text search"),
    cursor: Optional[str] = Query(None, description="Id of the last post already shown"),
    limit: Optional[int] = Query(None, ge=1, le=100),
    service: BlogService = Depends(get_service),
):
    """Filter published posts, newest first, one cursor page at a time."""
    page = service.search_posts(
        PostFilter(category=category, year=year, search_term=search),
        cursor=cursor,
        limit=limit,
    )
    categories, years = service.facets()
    return PostListResponse(
        posts=[post_to_response(p) for p in page.items],
        next_cursor=page.next_cursor,
        categories=categories,
        years=years,
    )


@router.get(
    "/{post_id}",
    response_model=PostResponse,
    summary="Read a post",
)
async def read_post(
    post_id: str,
    service: BlogService = Depends(get_service),
    viewer: ViewerSession = Depends(get_viewer),
):
    """Return a post and count the view."""
    try:
        return post_to_response(service.open_post(post_id, viewer))
    except InkwellError as exc:
        raise http_error(exc) from exc


@router.post(
    "/{post_id}/like",
    response_model=LikeResponse,
    summary="Toggle like",
)
async def toggle_like(
    post_id: str,
    service: BlogService = Depends(get_service),
    viewer: ViewerSession = Depends(get_viewer),
):
    """Like or unlike a post; the returned count is the server value."""
    try:
        liked, likes = service.toggle_like(viewer, post_id)
    except InkwellError as exc:
        raise http_error(exc) from exc
    return LikeResponse(liked=liked, likes=likes)


@router.put(
    "",
    response_model=PostResponse,
    summary="Create or update a post",
)
async def save_post(
    request: PostRequest,
    service: BlogService = Depends(get_service),
    viewer: ViewerSession = Depends(require_admin),
):
    post = Post(
        id=request.id,
        title=request.title,
        excerpt=request.excerpt,
        content=request.content,
        category=request.category,
        image_url=request.image_url,
        published=request.published,
    )
    try:
        return post_to_response(service.save_post(viewer, post))
    except InkwellError as exc:
        raise http_error(exc) from exc


@router.post(
    "/{post_id}/publish",
    response_model=PostResponse,
    summary="Publish or unpublish a post",
)
async def set_published(
    post_id: str,
    request: PublishRequest,
    service: BlogService = Depends(get_service),
    viewer: ViewerSession = Depends(require_admin),
):
    try:
        return post_to_response(service.set_published(viewer, post_id, request.published))
    except InkwellError as exc:
        raise http_error(exc) from exc


@router.delete("/{post_id}", summary="Delete a post")
async def delete_post(
    post_id: str,
    service: BlogService = Depends(get_service),
    viewer: ViewerSession = Depends(require_admin),
):
    try:
        service.delete_post(viewer, post_id)
    except InkwellError as exc:
        raise http_error(exc) from exc
    return {"deleted": post_id}
