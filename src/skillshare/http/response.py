"""Immutable HTTP response.

Handlers and the broker build responses by chaining ``with_header`` /
``with_headers``; each call returns a new object, so one prepared
response can be handed to many waiters.
"""

from __future__ import annotations

import json as json_module
from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any

TEXT = "text/plain; charset=utf-8"
JSON = "application/json"
HTML = "text/html; charset=utf-8"


@dataclass(frozen=True, slots=True)
class Response:
    """Status, body, content type and any extra headers.

    ``Content-Type`` and ``Content-Length`` are written by the sender and
    do not belong in ``headers``.
    """

    body: str | bytes = ""
    status: int = 200
    content_type: str = TEXT
    headers: tuple[tuple[str, str], ...] = ()

    @classmethod
    def from_json(cls, data: Any, status: int = 200) -> Response:
        return cls(body=json_module.dumps(data), status=status, content_type=JSON)

    def with_header(self, name: str, value: str) -> Response:
        return replace(self, headers=(*self.headers, (name, value)))

    def with_headers(self, headers: Mapping[str, str]) -> Response:
        return replace(self, headers=(*self.headers, *headers.items()))

    def header(self, name: str) -> str | None:
        """First extra header called *name*, ignoring case."""
        wanted = name.lower()
        return next((value for key, value in self.headers if key.lower() == wanted), None)

    @property
    def body_bytes(self) -> bytes:
        return self.body.encode("utf-8") if isinstance(self.body, str) else self.body

    @property
    def text(self) -> str:
        return self.body.decode("utf-8") if isinstance(self.body, bytes) else self.body

    @property
    def json(self) -> Any:
        return json_module.loads(self.body_bytes)
