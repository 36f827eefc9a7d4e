"""FastAPI application for the Inkwell blog.

Thin HTTP adapter over ``inkwell.blog.BlogService`` for the public blog and
the admin console:
- Post listing with category / year / search filters and cursor pagination
- Likes and view counts
- Comment submission, listing (with moderated bodies withheld) and reports
- Admin review queue, approve / moderate actions and dashboard stats
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the Inkwell package is importable by adding the project root to sys.path.
_project_root = str(Path(__file__).resolve().parents[3])
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from inkwell import __version__
from web.backend.app.routers import comments, moderation, posts

app = FastAPI(
    title="Inkwell API",
    description=(
        "REST API for the Inkwell blog. Provides endpoints for post listing, "
        "likes, comments and comment moderation."
    ),
    version=__version__,
)

# ---------------------------------------------------------------------------
# CORS middleware (allow all origins for development)
# ---------------------------------------------------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------------------------------------------------------------------
# Include routers
# ---------------------------------------------------------------------------
app.include_router(posts.router)
app.include_router(comments.router)
app.include_router(moderation.router)


@app.get("/", tags=["meta"])
async def root():
    """Return basic API information."""
    return {
        "name": "Inkwell API",
        "version": __version__,
        "docs": "/docs",
        "openapi": "/openapi.json",
    }


@app.get("/health", tags=["meta"])
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
