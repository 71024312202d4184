"""Tests for skillshare.talks — records, payload validation, the store."""

import pytest

from skillshare.errors import ValidationError
from skillshare.talks import Comment, Talk, TalkStore


class TestTalkFromPayload:
    def test_valid(self) -> None:
        talk = Talk.from_payload("foo", {"presenter": "A", "summary": "B"})
        assert talk == Talk(title="foo", presenter="A", summary="B")
        assert talk.comments == ()

    def test_extra_fields_dropped(self) -> None:
        talk = Talk.from_payload("foo", {"presenter": "A", "summary": "B", "comments": [1]})
        assert talk.comments == ()

    @pytest.mark.parametrize(
        "payload",
        [
            None,
            [],
            "text",
            {"presenter": "A"},
            {"summary": "B"},
            {"presenter": 1, "summary": "B"},
            {"presenter": "A", "summary": None},
        ],
    )
    def test_invalid(self, payload) -> None:
        with pytest.raises(ValidationError, match="Bad talk data"):
            Talk.from_payload("foo", payload)


class TestCommentFromPayload:
    def test_valid(self) -> None:
        assert Comment.from_payload({"author": "x", "message": "y"}) == Comment("x", "y")

    def test_missing_message(self) -> None:
        with pytest.raises(ValidationError, match="Bad comment data"):
            Comment.from_payload({"author": "x"})

    def test_not_an_object(self) -> None:
        with pytest.raises(ValidationError):
            Comment.from_payload(["x", "y"])


class TestTalkRecord:
    def test_with_comment_is_a_copy(self) -> None:
        talk = Talk("t", "p", "s")
        commented = talk.with_comment(Comment("a", "m"))
        assert talk.comments == ()
        assert commented.comments == (Comment("a", "m"),)

    def test_to_dict(self) -> None:
        talk = Talk("t", "p", "s").with_comment(Comment("a", "m"))
        assert talk.to_dict() == {
            "title": "t",
            "presenter": "p",
            "summary": "s",
            "comments": [{"author": "a", "message": "m"}],
        }


class TestTalkStore:
    def test_put_and_get(self) -> None:
        store = TalkStore()
        store.put(Talk("t", "p", "s"))
        assert store.get("t") == Talk("t", "p", "s")
        assert "t" in store
        assert len(store) == 1

    def test_put_replaces_and_resets_comments(self) -> None:
        store = TalkStore()
        store.put(Talk("t", "p", "s"))
        store.add_comment("t", Comment("a", "m"))
        store.put(Talk("t", "p2", "s2"))
        assert store.get("t") == Talk("t", "p2", "s2")

    def test_delete_reports_change(self) -> None:
        store = TalkStore({"t": Talk("t", "p", "s")})
        assert store.delete("t") is True
        assert store.delete("t") is False
        assert store.get("t") is None

    def test_add_comment_preserves_order(self) -> None:
        store = TalkStore({"t": Talk("t", "p", "s")})
        assert store.add_comment("t", Comment("a", "1"))
        assert store.add_comment("t", Comment("b", "2"))
        assert [c.message for c in store.get("t").comments] == ["1", "2"]

    def test_add_comment_missing_talk(self) -> None:
        store = TalkStore()
        assert store.add_comment("nope", Comment("a", "m")) is False
        assert len(store) == 0

    def test_to_list_in_insertion_order(self) -> None:
        store = TalkStore()
        store.put(Talk("b", "p", "s"))
        store.put(Talk("a", "p", "s"))
        assert [t["title"] for t in store.to_list()] == ["b", "a"]
        assert [t.title for t in store] == ["b", "a"]
