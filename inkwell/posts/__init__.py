"""Post listing: filtering, search, facets and cursor pagination."""

from inkwell.posts.filters import PostFilter, filter_posts, public_posts
from inkwell.posts.pagination import Page, merge_pages, paginate

__all__ = ["Page", "PostFilter", "filter_posts", "merge_pages", "paginate", "public_posts"]
