"""Tests for the JSON-file document store."""

import tempfile
import threading
from datetime import datetime, timezone

import pytest

from inkwell.counters import CounterUpdate
from inkwell.models.comment import Comment
from inkwell.models.post import Post
from inkwell.store.local_store import LocalStore


def _post(id: str, year: int, published: bool = True, **fields) -> Post:
    return Post(
        id=id,
        title=f"Post {id}",
        published=published,
        created_at=datetime(year, 6, 1, tzinfo=timezone.utc),
        **fields,
    )


def test_save_and_get_post():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = LocalStore(tmpdir)
        store.save_post(_post("p1", 2023, category="Tech"))
        loaded = store.get_post("p1")
        assert loaded.title == "Post p1"
        assert loaded.categories == ["Tech"]
        assert store.get_post("missing") is None


def test_persists_across_instances():
    with tempfile.TemporaryDirectory() as tmpdir:
        LocalStore(tmpdir).save_post(_post("p1", 2023))
        assert LocalStore(tmpdir).get_post("p1") is not None


def test_list_posts_newest_first_and_published_filter():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = LocalStore(tmpdir)
        store.save_post(_post("old", 2021))
        store.save_post(_post("new", 2024))
        store.save_post(_post("draft", 2025, published=False))

        assert [p.id for p in store.list_posts().items] == ["draft", "new", "old"]
        assert [p.id for p in store.list_posts(published=True).items] == ["new", "old"]
        assert [p.id for p in store.list_posts(published=False).items] == ["draft"]


def test_list_posts_paginates():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = LocalStore(tmpdir)
        for year in range(2018, 2023):
            store.save_post(_post(f"p{year}", year))
        first = store.list_posts(limit=2)
        assert [p.id for p in first.items] == ["p2022", "p2021"]
        second = store.list_posts(cursor=first.next_cursor, limit=2)
        assert [p.id for p in second.items] == ["p2020", "p2019"]


def test_increment_clamps_at_zero():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = LocalStore(tmpdir)
        store.save_post(_post("p1", 2023, likes=1))
        assert store.increment(CounterUpdate("p1", "likes", -1)) == 0
        assert store.increment(CounterUpdate("p1", "likes", -1)) == 0
        assert store.increment(CounterUpdate("p1", "comment_count", 2)) == 2
        assert store.get_post("p1").comment_count == 2


def test_increment_missing_post():
    with tempfile.TemporaryDirectory() as tmpdir:
        with pytest.raises(KeyError):
            LocalStore(tmpdir).increment(CounterUpdate("nope", "views", 1))


def test_concurrent_increments_are_not_lost():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = LocalStore(tmpdir)
        store.save_post(_post("p1", 2023))

        def like_many():
            for _ in range(20):
                store.increment(CounterUpdate("p1", "likes", 1))

        threads = [threading.Thread(target=like_many) for _ in range(5)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert store.get_post("p1").likes == 100


def test_comments_crud():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = LocalStore(tmpdir)
        early = Comment(id="c1", post_id="p1", content="a",
                        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc))
        late = Comment(id="c2", post_id="p1", content="b",
                       created_at=datetime(2024, 1, 2, tzinfo=timezone.utc))
        other = Comment(id="c3", post_id="p2", content="c")
        for c in (early, late, other):
            store.save_comment(c)

        assert [c.id for c in store.list_comments("p1")] == ["c2", "c1"]
        assert len(store.list_comments()) == 3
        assert store.get_comment("c3").post_id == "p2"
        assert store.delete_comment("c3")
        assert not store.delete_comment("c3")


def test_likes():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = LocalStore(tmpdir)
        assert store.add_like("p1", "u1")
        assert not store.add_like("p1", "u1")
        assert store.has_like("p1", "u1")
        assert store.remove_like("p1", "u1")
        assert not store.remove_like("p1", "u1")
        assert not store.has_like("p1", "u1")


def test_delete_post_cascades():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = LocalStore(tmpdir)
        store.save_post(_post("p1", 2023))
        store.save_comment(Comment(id="c1", post_id="p1", content="x"))
        store.save_comment(Comment(id="c2", post_id="p2", content="y"))
        store.add_like("p1", "u1")

        assert store.delete_post("p1")
        assert not store.delete_post("p1")
        assert [c.id for c in store.list_comments()] == ["c2"]
        assert not store.has_like("p1", "u1")


def test_import_documents():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = LocalStore(tmpdir)
        count = store.import_documents(
            [{"id": "p1", "title": "Imported", "published": True, "createdAt": 2022}],
            comments=[{"id": "c1", "postId": "p1", "content": "hi"}],
        )
        assert count == 1
        assert store.get_post("p1").year == 2022
        assert store.get_comment("c1").content == "hi"
