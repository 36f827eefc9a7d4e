"""Viewer middleware -- FastAPI dependencies for the current viewer and service.

Identity comes from the auth collaborator in front of this API:

1. ``X-User-Id: <uid>`` -- signed-in visitor (anonymous sign-in included)
2. ``X-Admin-Token: <token>`` -- matches ``INKWELL_ADMIN_TOKEN`` for the admin
"""

from __future__ import annotations

import hmac
from typing import Optional

from fastapi import Depends, Header, HTTPException, status

from inkwell.admin.audit_log import AuditLogger
from inkwell.blog import BlogService
from inkwell.config import Settings
from inkwell.errors import (
    InkwellError,
    NotAuthorizedError,
    NotFoundError,
    RestrictedContentError,
    ValidationError,
)
from inkwell.session import ViewerSession
from inkwell.store.local_store import LocalStore

# Shared service instance
_service: Optional[BlogService] = None


def get_settings() -> Settings:
    return Settings.from_env()


def get_service() -> BlogService:
    """Return the singleton BlogService backed by the local store."""
    global _service
    if _service is None:
        settings = get_settings()
        _service = BlogService(
            LocalStore(settings.data_dir),
            settings=settings,
            audit=AuditLogger(settings.data_dir / "audit_logs"),
        )
    return _service


async def get_viewer(
    x_user_id: Optional[str] = Header(None, alias="X-User-Id"),
    x_display_name: Optional[str] = Header(None, alias="X-Display-Name"),
    x_admin_token: Optional[str] = Header(None, alias="X-Admin-Token"),
    service: BlogService = Depends(get_service),
) -> ViewerSession:
    """FastAPI dependency describing who is calling. Never raises."""
    expected = service.settings.admin_token
    is_admin = bool(
        expected and x_admin_token and hmac.compare_digest(x_admin_token, expected)
    )
    return ViewerSession(
        user_id=x_user_id or ("admin" if is_admin else ""),
        is_admin=is_admin,
        display_name=x_display_name or "",
    )


async def require_admin(viewer: ViewerSession = Depends(get_viewer)) -> ViewerSession:
    """Same as ``get_viewer`` but raises ``403`` for non-admin callers."""
    if not viewer.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required.")
    return viewer


def http_error(exc: InkwellError) -> HTTPException:
    """Map an Inkwell error to the HTTP status the UI expects.

    ``400`` means fix and resubmit; ``422`` means not permitted.
    """
    if isinstance(exc, ValidationError):
        return HTTPException(status_code=400, detail={"kind": "validation", "message": str(exc)})
    if isinstance(exc, RestrictedContentError):
        return HTTPException(
            status_code=422,
            detail={"kind": "restricted", "reason": exc.reason, "message": str(exc)},
        )
    if isinstance(exc, NotAuthorizedError):
        return HTTPException(status_code=403, detail=str(exc))
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=404, detail=str(exc))
    return HTTPException(status_code=500, detail=str(exc))
