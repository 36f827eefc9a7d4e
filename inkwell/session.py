"""Per-viewer session state.

Viewer identity, filter selection and the pagination cursor are explicit,
immutable values passed to the engine rather than module globals. Two tabs
(or two tests) can evaluate filters independently.
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass, field, replace
from typing import Optional

from inkwell.config import DEFAULT_PAGE_SIZE
from inkwell.models.post import Post
from inkwell.posts.filters import PostFilter, filter_posts
from inkwell.posts.pagination import Page, merge_pages

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ViewerSession:
    """Who is looking, as reported by the auth collaborator."""

    user_id: str = ""
    is_admin: bool = False
    display_name: str = ""
    revealed: frozenset[str] = frozenset()

    @property
    def signed_in(self) -> bool:
        return bool(self.user_id)

    def reveal(self, comment_id: str) -> "ViewerSession":
        """Opt in to seeing one moderated comment. Never persisted."""
        return replace(self, revealed=self.revealed | {comment_id})

    def has_revealed(self, comment_id: str) -> bool:
        return comment_id in self.revealed


@dataclass(frozen=True)
class FilterState:
    """Transient filter/search selection for one viewer."""

    category: Optional[str] = None
    year: Optional[str] = None
    search_term: str = ""
    cursor: Optional[str] = None
    page_size: int = DEFAULT_PAGE_SIZE

    def with_category(self, category: Optional[str]) -> "FilterState":
        return replace(self, category=category or None, cursor=None)

    def with_year(self, year: Optional[str | int]) -> "FilterState":
        return replace(self, year=str(year) if year else None, cursor=None)

    def with_search(self, term: str) -> "FilterState":
        return replace(self, search_term=term, cursor=None)

    def cleared(self) -> "FilterState":
        return FilterState(page_size=self.page_size)

    def to_filter(self) -> PostFilter:
        return PostFilter(category=self.category, year=self.year, search_term=self.search_term)


class RequestSequencer:
    """Hands out increasing request numbers and recognises the latest one.

    A response is applied only if its number is still the latest issued, so
    a slow earlier load cannot overwrite a newer one.
    """

    def __init__(self) -> None:
        self._counter = itertools.count(1)
        self._latest = 0

    @property
    def latest(self) -> int:
        return self._latest

    def issue(self) -> int:
        self._latest = next(self._counter)
        return self._latest

    def is_current(self, seq: int) -> bool:
        return seq == self._latest


@dataclass
class PostFeed:
    """Posts loaded so far for one viewer, plus the filtered view of them."""

    state: FilterState = field(default_factory=FilterState)
    posts: list[Post] = field(default_factory=list)
    cursor: Optional[str] = None
    exhausted: bool = False
    sequencer: RequestSequencer = field(default_factory=RequestSequencer)

    def begin(self) -> int:
        """Register a new outgoing load and return its sequence number."""
        return self.sequencer.issue()

    def apply(self, seq: int, page: Page[Post], load_more: bool = False) -> Optional[list[Post]]:
        """Apply a loaded page and return the filtered posts.

        Returns ``None`` and leaves the feed untouched when ``seq`` is stale.
        """
        if not self.sequencer.is_current(seq):
            logger.debug("Discarding stale feed response %d (latest %d)", seq, self.sequencer.latest)
            return None
        if load_more:
            self.posts = merge_pages(self.posts, page.items)
        else:
            self.posts = merge_pages([], page.items)
        self.cursor = page.next_cursor
        self.exhausted = page.next_cursor is None
        return self.visible()

    def visible(self) -> list[Post]:
        return filter_posts(self.posts, self.state.to_filter())

    def update_filter(self, state: FilterState) -> list[Post]:
        """Switch filters locally over the already-loaded posts."""
        self.state = state
        return self.visible()
