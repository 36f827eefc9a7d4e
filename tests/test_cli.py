"""Tests for the inkwell command line."""

import json
import os
import tempfile
from datetime import datetime, timezone

import yaml
from click.testing import CliRunner

from inkwell.cli import main
from inkwell.models.comment import Comment
from inkwell.store.local_store import LocalStore


def _posts_file(directory: str) -> str:
    path = os.path.join(directory, "posts.json")
    with open(path, "w") as f:
        json.dump(
            [
                {"id": "p1", "title": "Firebase Tips", "category": "Tech", "published": True,
                 "createdAt": "2023-04-01T00:00:00Z", "likes": 5},
                {"id": "p2", "title": "Trip", "category": "Travel", "published": True,
                 "createdAt": "2024-04-01T00:00:00Z"},
                {"id": "p3", "title": "Draft", "category": "Tech", "published": False},
            ],
            f,
        )
    return path


def test_version():
    result = CliRunner().invoke(main, ["--version"])
    assert result.exit_code == 0
    assert "0.1.0" in result.output


def test_classify_clean():
    result = CliRunner().invoke(main, ["classify", "Great post, thanks!"])
    assert result.exit_code == 0
    assert "CLEAN" in result.output


def test_classify_moderated():
    result = CliRunner().invoke(main, ["classify", "you are so stupid"])
    assert result.exit_code == 0
    assert "MODERATED" in result.output
    assert "moderated_language" in result.output


def test_classify_blocked():
    result = CliRunner().invoke(main, ["classify", "Check bit.ly/x"])
    assert result.exit_code == 1
    assert "BLOCKED" in result.output
    assert "url-shortener" in result.output


def test_classify_bad_rule_file():
    result = CliRunner().invoke(main, ["classify", "hi", "--rules", "/nonexistent.yaml"])
    assert result.exit_code == 2


def test_check_name():
    runner = CliRunner()
    assert runner.invoke(main, ["check-name", "Admin"]).exit_code == 1
    ok = runner.invoke(main, ["check-name", "randomUser42"])
    assert ok.exit_code == 0
    assert "OK" in ok.output
    assert "EMPTY" in runner.invoke(main, ["check-name", "  "]).output


def test_rules_list():
    result = CliRunner().invoke(main, ["rules", "list"])
    assert result.exit_code == 0
    assert "Reserved names" in result.output


def test_rules_validate():
    with tempfile.TemporaryDirectory() as tmpdir:
        good = os.path.join(tmpdir, "good.yaml")
        bad = os.path.join(tmpdir, "bad.yaml")
        with open(good, "w") as f:
            yaml.dump({"rules": [{"label": "x", "pattern": "x", "tier": "moderated"}]}, f)
        with open(bad, "w") as f:
            yaml.dump({"rules": [{"label": "x", "pattern": "(", "tier": "moderated"}]}, f)

        runner = CliRunner()
        result = runner.invoke(main, ["rules", "validate", good])
        assert result.exit_code == 0
        assert "Valid!" in result.output

        result = runner.invoke(main, ["rules", "validate", bad])
        assert result.exit_code == 1
        assert "invalid pattern" in result.output


def test_posts_filter():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = _posts_file(tmpdir)
        runner = CliRunner()

        result = runner.invoke(main, ["posts", "filter", path, "-c", "Tech"])
        assert result.exit_code == 0
        assert "p1" in result.output
        assert "p3" not in result.output

        result = runner.invoke(main, ["posts", "filter", path, "-c", "Tech", "--all"])
        assert "p3" in result.output

        result = runner.invoke(main, ["posts", "filter", path, "-y", "2020"])
        assert "No posts match" in result.output


def test_import_stats_and_queue():
    with tempfile.TemporaryDirectory() as tmpdir:
        data_dir = os.path.join(tmpdir, "data")
        runner = CliRunner()

        result = runner.invoke(main, ["posts", "import", _posts_file(tmpdir), "-d", data_dir])
        assert result.exit_code == 0
        assert "Imported 3 posts" in result.output

        result = runner.invoke(main, ["queue", "-d", data_dir])
        assert "No pending comments" in result.output

        LocalStore(data_dir).save_comment(
            Comment(id="c1", post_id="p1", content="you are so stupid", author_name="Jane",
                    moderated=True, moderated_reason="moderated_language",
                    created_at=datetime(2024, 1, 1, tzinfo=timezone.utc))
        )
        result = runner.invoke(main, ["queue", "-d", data_dir])
        assert result.exit_code == 0
        assert "Jane" in result.output

        result = runner.invoke(main, ["stats", "-d", data_dir])
        assert result.exit_code == 0
        assert "Posts: 3 (2 published, 1 drafts)" in result.output
        assert "1 pending" in result.output


def test_check_name_with_custom_rules():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = os.path.join(tmpdir, "rules.yaml")
        with open(path, "w") as f:
            yaml.dump(
                {"rules": [{"label": "x", "pattern": "x", "tier": "moderated"}], "reserved_names": ["editor"]},
                f,
            )
        runner = CliRunner()
        assert runner.invoke(main, ["check-name", "Chief Editor", "--rules", path]).exit_code == 1
        assert runner.invoke(main, ["check-name", "Admin", "--rules", path]).exit_code == 0
        assert runner.invoke(main, ["check-name", "Chief Editor"], env={"INKWELL_RULES_FILE": path}).exit_code == 1
        assert runner.invoke(main, ["check-name", "x", "--rules", "/nonexistent.yaml"]).exit_code == 2


def test_unknown_log_level():
    runner = CliRunner()
    result = runner.invoke(main, ["classify", "hello"], env={"INKWELL_LOG_LEVEL": "verbose"})
    assert result.exit_code == 0
    assert runner.invoke(main, ["--log-level", "verbose", "classify", "hello"]).exit_code == 2
