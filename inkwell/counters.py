"""Like, view and comment counters.

Counts are owned by the document store and changed only through its atomic
increment. The client keeps a pending delta for instant feedback and drops
it as soon as a fresh server value arrives.
"""

from __future__ import annotations

from dataclasses import dataclass, field

COUNTER_FIELDS = ("likes", "views", "comment_count")


@dataclass(frozen=True)
class CounterUpdate:
    """An increment to send to the store, never an absolute value."""

    doc_id: str
    counter: str
    delta: int

    def __post_init__(self) -> None:
        if self.counter not in COUNTER_FIELDS:
            raise ValueError(f"Unknown counter '{self.counter}'. Must be one of: {COUNTER_FIELDS}")


@dataclass
class OptimisticCounter:
    """Server-confirmed value plus not-yet-confirmed local changes."""

    server_value: int = 0
    pending: int = 0

    @property
    def displayed(self) -> int:
        return max(0, self.server_value + self.pending)

    def apply(self, delta: int) -> int:
        self.pending += delta
        return self.displayed

    def reconcile(self, server_value: int) -> int:
        self.server_value = max(0, server_value)
        self.pending = 0
        return self.displayed


@dataclass
class LikeState:
    """Whether the viewer likes a post, with its optimistic like count."""

    liked: bool = False
    counter: OptimisticCounter = field(default_factory=OptimisticCounter)

    def toggle(self, post_id: str) -> CounterUpdate:
        delta = -1 if self.liked else 1
        self.liked = not self.liked
        self.counter.apply(delta)
        return CounterUpdate(post_id, "likes", delta)
