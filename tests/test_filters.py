"""Tests for post filtering, search and facets."""

from datetime import datetime, timezone

from inkwell.models.post import Post
from inkwell.posts.filters import (
    PostFilter,
    collect_categories,
    collect_years,
    filter_posts,
    public_posts,
)


def _post(id: str, **fields) -> Post:
    return Post.from_dict({"id": id, "published": True, **fields})


def _sample() -> list[Post]:
    return [
        _post("p1", title="Firebase Tips", category="Tech,Tutorial", createdAt=2023),
        _post("p2", title="My Trip", category="Travel", createdAt=2024),
        _post("p3", title="Café culture", excerpt="Crème brûlée!", category=" Food , Travel ", createdAt=2024),
        _post("p4", title="Draft notes", category="Tech", createdAt=2022, published=False),
    ]


def test_year_scenario():
    posts = _sample()[:2]
    result = filter_posts(posts, PostFilter(year="2023"))
    assert [p.id for p in result] == ["p1"]


def test_year_accepts_int():
    assert [p.id for p in filter_posts(_sample(), PostFilter(year=2024))] == ["p2", "p3"]


def test_year_uses_utc():
    late = Post(id="x", created_at=datetime(2023, 12, 31, 23, 30, tzinfo=timezone.utc))
    assert filter_posts([late], PostFilter(year="2023")) == [late]
    assert filter_posts([late], PostFilter(year="2024")) == []


def test_post_without_created_at_fails_year_filter_only():
    undated = Post(id="u", title="Undated")
    assert filter_posts([undated], PostFilter(year="2023")) == []
    assert filter_posts([undated], PostFilter(search_term="undated")) == [undated]


def test_category_matches_trimmed_tokens():
    result = filter_posts(_sample(), PostFilter(category="Travel"))
    assert [p.id for p in result] == ["p2", "p3"]


def test_category_is_case_sensitive():
    assert filter_posts(_sample(), PostFilter(category="tech")) == []


def test_category_does_not_match_partial_token():
    assert filter_posts(_sample(), PostFilter(category="Tut")) == []


def test_category_list_field():
    post = _post("l", category=["News", " Tech "])
    assert filter_posts([post], PostFilter(category="Tech")) == [post]


def test_search_is_case_insensitive_across_fields():
    posts = _sample()
    assert [p.id for p in filter_posts(posts, PostFilter(search_term="FIREBASE"))] == ["p1"]
    assert [p.id for p in filter_posts(posts, PostFilter(search_term="tutorial"))] == ["p1"]
    assert [p.id for p in filter_posts(posts, PostFilter(search_term="brûlée"))] == ["p3"]


def test_search_unicode_is_literal():
    posts = _sample()
    # No accent folding: "cafe" does not find "Café".
    assert filter_posts(posts, PostFilter(search_term="cafe")) == []
    assert [p.id for p in filter_posts(posts, PostFilter(search_term="CAFÉ"))] == ["p3"]


def test_search_punctuation_is_literal():
    posts = _sample()
    assert [p.id for p in filter_posts(posts, PostFilter(search_term="brûlée!"))] == ["p3"]
    assert filter_posts(posts, PostFilter(search_term="brûlée?")) == []


def test_search_tolerates_missing_fields():
    bare = Post.from_dict({"id": "bare"})
    assert filter_posts([bare], PostFilter(search_term="anything")) == []
    assert filter_posts([bare], PostFilter(category="Tech")) == []


def test_whitespace_search_is_inactive():
    posts = _sample()
    assert filter_posts(posts, PostFilter(search_term="   ")) == posts


def test_filters_compose_with_and():
    result = filter_posts(_sample(), PostFilter(category="Travel", year="2024", search_term="café"))
    assert [p.id for p in result] == ["p3"]


def test_empty_filter_is_identity():
    posts = _sample()
    assert filter_posts(posts, PostFilter()) == posts
    assert filter_posts(posts) == posts
    assert PostFilter().is_empty


def test_empty_input():
    assert filter_posts([], PostFilter(category="Tech")) == []


def test_result_is_ordered_subset_and_idempotent():
    posts = _sample()
    f = PostFilter(search_term="t")
    once = filter_posts(posts, f)
    assert all(p in posts for p in once)
    positions = [posts.index(p) for p in once]
    assert positions == sorted(positions)
    assert filter_posts(once, f) == once


def test_filter_does_not_resort():
    posts = list(reversed(_sample()))
    assert filter_posts(posts, PostFilter(category="Tech")) == [posts[0], posts[3]]


def test_public_posts():
    assert [p.id for p in public_posts(_sample())] == ["p1", "p2", "p3"]


def test_facets():
    posts = _sample()
    assert collect_categories(posts) == ["Food", "Tech", "Travel", "Tutorial"]
    assert collect_years(posts) == [2024, 2023, 2022]
