"""Talk records and the in-memory store that holds them.

Talks and comments are frozen dataclasses. The store is the only thing
that changes: a PUT swaps in a new ``Talk``, a comment swaps in a copy
with one more entry in ``comments``.
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, replace
from typing import Any

from skillshare.errors import ValidationError


@dataclass(frozen=True, slots=True)
class Comment:
    """A single comment on a talk. Never edited or removed once stored."""

    author: str
    message: str

    @classmethod
    def from_payload(cls, payload: Any) -> "Comment":
        """Build a comment from a decoded JSON body.

        Raises ``ValidationError`` unless *payload* is an object whose
        ``author`` and ``message`` are strings.
        """
        if (
            not isinstance(payload, Mapping)
            or not isinstance(payload.get("author"), str)
            or not isinstance(payload.get("message"), str)
        ):
            raise ValidationError("Bad comment data")
        return cls(author=payload["author"], message=payload["message"])

    def to_dict(self) -> dict[str, str]:
        return {"author": self.author, "message": self.message}


@dataclass(frozen=True, slots=True)
class Talk:
    """A proposed talk, keyed by its title."""

    title: str
    presenter: str
    summary: str
    comments: tuple[Comment, ...] = ()

    @classmethod
    def from_payload(cls, title: str, payload: Any) -> "Talk":
        """Build a fresh talk (no comments) from a decoded JSON body.

        Raises ``ValidationError`` unless *payload* is an object whose
        ``presenter`` and ``summary`` are strings.
        """
        if (
            not isinstance(payload, Mapping)
            or not isinstance(payload.get("presenter"), str)
            or not isinstance(payload.get("summary"), str)
        ):
            raise ValidationError("Bad talk data")
        return cls(title=title, presenter=payload["presenter"], summary=payload["summary"])

    def with_comment(self, comment: Comment) -> "Talk":
        """Return a copy with *comment* appended."""
        return replace(self, comments=(*self.comments, comment))

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "presenter": self.presenter,
            "summary": self.summary,
            "comments": [comment.to_dict() for comment in self.comments],
        }


class TalkStore:
    """Mapping from title to talk.

    Mutating methods report whether anything changed so callers know
    when to bump the version.
    """

    __slots__ = ("_talks",)

    def __init__(self, talks: Mapping[str, Talk] | None = None) -> None:
        self._talks: dict[str, Talk] = dict(talks or {})

    def __contains__(self, title: object) -> bool:
        return title in self._talks

    def __iter__(self) -> Iterator[Talk]:
        return iter(self._talks.values())

    def __len__(self) -> int:
        return len(self._talks)

    def get(self, title: str) -> Talk | None:
        return self._talks.get(title)

    def put(self, talk: Talk) -> None:
        """Create or replace the talk stored under ``talk.title``."""
        self._talks[talk.title] = talk

    def delete(self, title: str) -> bool:
        """Remove a talk. Returns False when there was nothing to remove."""
        return self._talks.pop(title, None) is not None

    def add_comment(self, title: str, comment: Comment) -> bool:
        """Append a comment. Returns False when the talk does not exist."""
        talk = self._talks.get(title)
        if talk is None:
            return False
        self._talks[title] = talk.with_comment(comment)
        return True

    def to_list(self) -> list[dict[str, Any]]:
        """All talks as plain dicts, in store order."""
        return [talk.to_dict() for talk in self._talks.values()]
