"""Async client for a skillshare server.

Wraps ``httpx.AsyncClient``. ``poll()`` is the long-polling loop a
browser client runs: it remembers the last ETag, asks the server to wait,
and yields the talk list each time it changes.
"""

import logging
from collections.abc import AsyncIterator
from typing import Any
from urllib.parse import quote

import httpx

logger = logging.getLogger("skillshare.client")


class TalkClient:
    """Client for the talk API.

    Usage::

        async with TalkClient("http://localhost:8000") as client:
            await client.put_talk("Unituning", presenter="Jamal", summary="Modifying your cycle")
            async for talks in client.poll(wait=90):
                render(talks)

    Pass *transport* to talk to an in-process app
    (``httpx.ASGITransport(app=app)``).
    """

    __slots__ = ("_http", "etag")

    def __init__(
        self,
        base_url: str,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float | None = None,
    ) -> None:
        # Long polls hold the connection open, so no read timeout by default.
        self._http = httpx.AsyncClient(base_url=base_url, transport=transport, timeout=timeout)
        self.etag: str | None = None

    async def __aenter__(self) -> "TalkClient":
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    # -- Talks --

    async def list_talks(self) -> list[dict[str, Any]]:
        """Fetch the current talk list and remember its ETag."""
        response = await self._http.get("/talks")
        response.raise_for_status()
        self.etag = response.headers.get("etag")
        return response.json()

    async def get_talk(self, title: str) -> dict[str, Any]:
        response = await self._http.get(_talk_url(title))
        response.raise_for_status()
        return response.json()

    async def put_talk(self, title: str, *, presenter: str, summary: str) -> None:
        response = await self._http.put(
            _talk_url(title),
            json={"presenter": presenter, "summary": summary},
        )
        response.raise_for_status()

    async def delete_talk(self, title: str) -> None:
        response = await self._http.delete(_talk_url(title))
        response.raise_for_status()

    async def add_comment(self, title: str, *, author: str, message: str) -> None:
        response = await self._http.post(
            _talk_url(title) + "/comments",
            json={"author": author, "message": message},
        )
        response.raise_for_status()

    # -- Long polling --

    async def poll(self, wait: int = 90) -> AsyncIterator[list[dict[str, Any]]]:
        """Yield the talk list now and after every change on the server.

        The first request carries no tag, so it always returns the list.
        Later requests send the last tag with ``Prefer: wait=<wait>`` and
        simply repeat on ``304``.
        """
        while True:
            headers = {}
            if self.etag is not None:
                headers = {"If-None-Match": self.etag, "Prefer": f"wait={wait}"}
            response = await self._http.get("/talks", headers=headers)
            if response.status_code == 304:
                logger.debug("poll: no change at %s", self.etag)
                continue
            response.raise_for_status()
            self.etag = response.headers.get("etag")
            yield response.json()


def _talk_url(title: str) -> str:
    return "/talks/" + quote(title, safe="")
