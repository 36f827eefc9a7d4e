"""Cursor-based pagination.

A cursor is the id of the last item on the previous page; the next page
starts right after it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, Optional, Protocol, Sequence, TypeVar


class _HasId(Protocol):
    id: str


T = TypeVar("T", bound=_HasId)


@dataclass
class Page(Generic[T]):
    """One page of results."""

    items: list[T] = field(default_factory=list)
    next_cursor: Optional[str] = None  # None when there is nothing after this page

    @property
    def has_more(self) -> bool:
        return self.next_cursor is not None


def paginate(items: Sequence[T], cursor: Optional[str] = None, limit: int = 12) -> Page[T]:
    """Slice ``items`` into the page that starts after ``cursor``.

    An unknown cursor yields an empty page rather than restarting from the
    top, so a deleted anchor never duplicates results.
    """
    if limit <= 0:
        raise ValueError("limit must be positive")

    start = 0
    if cursor is not None:
        for i, item in enumerate(items):
            if item.id == cursor:
                start = i + 1
                break
        else:
            return Page()

    chunk = list(items[start:start + limit])
    more = start + limit < len(items)
    return Page(items=chunk, next_cursor=chunk[-1].id if chunk and more else None)


def merge_pages(existing: Sequence[T], incoming: Sequence[T]) -> list[T]:
    """Append ``incoming`` to ``existing``, skipping ids already present."""
    seen = {item.id for item in existing}
    merged = list(existing)
    for item in incoming:
        if item.id not in seen:
            seen.add(item.id)
            merged.append(item)
    return merged
