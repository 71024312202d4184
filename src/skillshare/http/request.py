"""Immutable HTTP request built from an ASGI scope."""

from __future__ import annotations

import json as json_module
from dataclasses import dataclass, field, replace
from typing import Any
from urllib.parse import quote

from skillshare._internal.asgi import Receive
from skillshare.http.conditional import parse_etag, parse_wait
from skillshare.http.headers import Headers


@dataclass(frozen=True, slots=True)
class Request:
    """Method, paths and headers, fixed when the request arrives.

    ``raw_path`` keeps the percent-encoding the client sent (without the
    query string); routing matches against it. The body is pulled from
    the ASGI channel on the first ``body()`` call and remembered.
    """

    method: str
    path: str
    raw_path: str
    headers: Headers
    path_params: dict[str, str] = field(default_factory=dict)
    _receive: Receive | None = field(default=None, repr=False, compare=False)
    _cache: dict[str, bytes] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_asgi(cls, scope: dict[str, Any], receive: Receive) -> Request:
        raw = scope.get("raw_path")
        raw_path = raw.decode("latin-1") if raw else quote(scope["path"])
        return cls(
            method=scope["method"].upper(),
            path=scope["path"],
            # some servers leave the query string on raw_path
            raw_path=raw_path.partition("?")[0],
            headers=Headers(scope.get("headers", ())),
            _receive=receive,
        )

    @property
    def etag(self) -> str | None:
        """Version tag echoed back in ``If-None-Match``."""
        return parse_etag(self.headers.get("if-none-match"))

    @property
    def wait(self) -> int | None:
        """Seconds the client will wait for a change (``Prefer: wait=N``)."""
        return parse_wait(self.headers.get("prefer"))

    def with_path_params(self, path_params: dict[str, str]) -> Request:
        """Copy carrying a route's captures; shares the body cache."""
        return replace(self, path_params=path_params)

    async def body(self) -> bytes:
        if "body" not in self._cache:
            chunks: list[bytes] = []
            more = self._receive is not None
            while more:
                message = await self._receive()
                chunks.append(message.get("body", b""))
                more = message.get("more_body", False)
            self._cache["body"] = b"".join(chunks)
        return self._cache["body"]

    async def json(self) -> Any:
        """Decode the body as JSON; ``json.JSONDecodeError`` when malformed."""
        return json_module.loads(await self.body())
