"""Tests for preparing a new comment from the comment form."""

import pytest

from inkwell.errors import RestrictedContentError, ValidationError
from inkwell.models.comment import CommentState
from inkwell.moderation.classifier import ContentClassifier
from inkwell.moderation.rules import build_rule_set
from inkwell.moderation.submission import prepare_comment
from inkwell.session import ViewerSession

VISITOR = ViewerSession(user_id="u1", display_name="Jane")


def test_clean_comment():
    comment = prepare_comment("  Great post, thanks!  ", post_id="p1", viewer=VISITOR)
    assert comment.content == "Great post, thanks!"
    assert comment.post_id == "p1"
    assert comment.user_id == "u1"
    assert comment.author_name == "Jane"
    assert not comment.moderated
    assert comment.moderated_reason is None
    assert comment.state is CommentState.CLEAN
    assert comment.created_at is not None
    assert comment.id


def test_moderated_comment_is_kept_but_flagged():
    comment = prepare_comment("you are so stupid", post_id="p1", viewer=VISITOR)
    assert comment.moderated
    assert comment.moderated_reason == "moderated_language"
    assert comment.state is CommentState.AUTO_MODERATED


def test_restricted_comment_raises_generic_error():
    with pytest.raises(RestrictedContentError) as exc_info:
        prepare_comment("Check bit.ly/x", post_id="p1", viewer=VISITOR)
    assert exc_info.value.reason == "restricted_content"
    assert str(exc_info.value) == RestrictedContentError.GENERIC_MESSAGE
    # The matching rule is never disclosed to the author.
    assert "url" not in str(exc_info.value)


def test_blank_comment_is_validation_error():
    with pytest.raises(ValidationError):
        prepare_comment("   \n", post_id="p1", viewer=VISITOR)


def test_non_string_content():
    with pytest.raises(TypeError):
        prepare_comment(None, post_id="p1", viewer=VISITOR)


def test_display_name_override_and_anonymous():
    comment = prepare_comment("hi", post_id="p1", viewer=VISITOR, display_name="Bob")
    assert comment.author_name == "Bob"

    anon = ViewerSession(user_id="u2")
    comment = prepare_comment("hi", post_id="p1", viewer=anon, anonymous_label="Guest")
    assert comment.author_name == "Guest"


def test_restricted_display_name():
    with pytest.raises(RestrictedContentError) as exc_info:
        prepare_comment("hi", post_id="p1", viewer=VISITOR, display_name="Moderator Max")
    assert exc_info.value.reason == "username_restricted"


def test_admin_comment_is_marked():
    admin = ViewerSession(user_id="a1", is_admin=True, display_name="Editor")
    assert prepare_comment("Thanks all", post_id="p1", viewer=admin).is_admin


def test_ids_are_unique():
    a = prepare_comment("one", post_id="p1", viewer=VISITOR)
    b = prepare_comment("one", post_id="p1", viewer=VISITOR)
    assert a.id != b.id


def test_display_name_checked_against_classifier_rules():
    rules = build_rule_set(
        {"rules": [{"label": "x", "pattern": "xyzzy", "tier": "moderated"}], "reserved_names": ["editor"]}
    )
    classifier = ContentClassifier(rules)
    with pytest.raises(RestrictedContentError):
        prepare_comment("hi", post_id="p1", viewer=VISITOR, display_name="editor", classifier=classifier)
    assert prepare_comment(
        "hi", post_id="p1", viewer=VISITOR, display_name="Admin", classifier=classifier
    ).author_name == "Admin"


def test_explicit_reserved_list():
    with pytest.raises(RestrictedContentError):
        prepare_comment("hi", post_id="p1", viewer=VISITOR, display_name="Chef", reserved=["chef"])
