"""Post filtering and search.

Filters compose with logical AND and never reorder their input: callers hand
in posts already sorted newest first and get a subsequence back.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Union

from inkwell.models.post import Post


@dataclass(frozen=True)
class PostFilter:
    """Active filters. Unset (None or empty) fields match everything."""

    category: Optional[str] = None
    year: Optional[Union[str, int]] = None
    search_term: str = ""

    @property
    def is_empty(self) -> bool:
        return not (self.category or self.year or self.search_term.strip())


def matches_category(post: Post, category: Optional[str]) -> bool:
    if not category:
        return True
    return category.strip() in post.categories


def matches_year(post: Post, year: Optional[Union[str, int]]) -> bool:
    if not year:
        return True
    return post.year is not None and str(post.year) == str(year).strip()


def matches_search(post: Post, term: str) -> bool:
    """Case-insensitive substring match over title, excerpt, content and category.

    Only ``str.lower`` is applied; accents, other Unicode and punctuation
    must match literally.
    """
    if not term or not term.strip():
        return True
    needle = term.lower()
    return any(
        needle in (field or "").lower()
        for field in (post.title, post.excerpt, post.content, post.category_text)
    )


def filter_posts(posts: Iterable[Post], post_filter: Optional[PostFilter] = None) -> list[Post]:
    """Return the posts matching every active filter, in input order."""
    f = post_filter or PostFilter()
    return [
        p
        for p in posts
        if matches_category(p, f.category)
        and matches_year(p, f.year)
        and matches_search(p, f.search_term)
    ]


def public_posts(posts: Iterable[Post]) -> list[Post]:
    """Only published posts are eligible for public listing."""
    return [p for p in posts if p.published]


def collect_categories(posts: Iterable[Post]) -> list[str]:
    """All distinct category tokens, sorted."""
    found: set[str] = set()
    for post in posts:
        found.update(post.categories)
    return sorted(found)


def collect_years(posts: Iterable[Post]) -> list[int]:
    """All distinct post years, newest first."""
    return sorted({p.year for p in posts if p.year is not None}, reverse=True)
