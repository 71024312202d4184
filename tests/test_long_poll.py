"""Long-poll behaviour of ``GET /talks`` end to end through the ASGI app."""

import asyncio
import time

import pytest

from skillshare.state import ServerState
from skillshare.testing import TestClient

TALK = {"presenter": "A", "summary": "B"}


def _poll_headers(tag: str, wait: int | None = None) -> dict[str, str]:
    headers = {"If-None-Match": f'"{tag}"'}
    if wait is not None:
        headers["Prefer"] = f"wait={wait}"
    return headers


class TestImmediateResponses:
    async def test_stale_tag_gets_full_list(self, app) -> None:
        async with TestClient(app) as client:
            await client.put("/talks/foo", json=TALK)
            response = await client.get("/talks", headers=_poll_headers("0", wait=5))
            assert response.status == 200
            assert response.header("etag") == '"1"'
            assert response.json[0]["title"] == "foo"

    async def test_garbage_tag_gets_full_list(self, app) -> None:
        async with TestClient(app) as client:
            response = await client.get("/talks", headers={"If-None-Match": "nonsense"})
            assert response.status == 200

    async def test_first_listed_tag_is_compared(self, app) -> None:
        async with TestClient(app) as client:
            response = await client.get("/talks", headers={"If-None-Match": '"0", "7"'})
            assert response.status == 304

    async def test_current_tag_without_wait_is_304(self, app) -> None:
        async with TestClient(app) as client:
            start = time.monotonic()
            response = await client.get("/talks", headers=_poll_headers("0"))
            elapsed = time.monotonic() - start

            assert response.status == 304
            assert response.body == b""
            assert elapsed < 0.5


@pytest.mark.slow
class TestBoundedWait:
    async def test_no_change_times_out_with_304(self, app, state: ServerState) -> None:
        async with TestClient(app) as client:
            start = time.monotonic()
            response = await client.get("/talks", headers=_poll_headers("0", wait=1))
            elapsed = time.monotonic() - start

            assert response.status == 304
            assert response.body == b""
            assert 0.9 <= elapsed < 2.0
        assert state.broker.waiting == frozenset()

    async def test_change_resolves_early(self, app, parked) -> None:
        async with TestClient(app) as client:
            start = time.monotonic()
            poll = asyncio.create_task(
                client.get("/talks", headers=_poll_headers("0", wait=1))
            )
            await parked(1)
            await asyncio.sleep(0.2)
            await client.put("/talks/foo", json=TALK)

            response = await poll
            elapsed = time.monotonic() - start

            assert response.status == 200
            assert response.header("etag") == '"1"'
            assert response.json == [
                {"title": "foo", "presenter": "A", "summary": "B", "comments": []}
            ]
            assert elapsed < 0.8


class TestHugeWait:
    async def test_oversized_wait_parks_instead_of_failing(self, app, parked) -> None:
        async with TestClient(app) as client:
            poll = asyncio.create_task(
                client.get("/talks", headers=_poll_headers("0", wait=int("9" * 400)))
            )
            await parked(1)

            await client.put("/talks/foo", json=TALK)
            response = await asyncio.wait_for(poll, 2)
            assert response.status == 200
            assert response.header("etag") == '"1"'


class TestFanOut:
    async def test_all_waiters_get_identical_response(
        self, app, state: ServerState, parked
    ) -> None:
        async with TestClient(app) as client:
            polls = [
                asyncio.create_task(client.get("/talks", headers=_poll_headers("0", wait=10)))
                for _ in range(3)
            ]
            await parked(3)

            await client.put("/talks/foo", json=TALK)
            responses = await asyncio.wait_for(asyncio.gather(*polls), 2)

            assert {r.status for r in responses} == {200}
            assert {r.header("etag") for r in responses} == {'"1"'}
            assert len({r.body for r in responses}) == 1
        assert state.broker.waiting == frozenset()

    async def test_no_op_mutation_does_not_wake_waiters(
        self, app, state: ServerState, parked
    ) -> None:
        async with TestClient(app) as client:
            poll = asyncio.create_task(
                client.get("/talks", headers=_poll_headers("0", wait=10))
            )
            await parked(1)

            await client.delete("/talks/missing")
            await asyncio.sleep(0.05)
            assert not poll.done()

            await client.put("/talks/foo", json=TALK)
            response = await asyncio.wait_for(poll, 2)
            assert response.header("etag") == '"1"'

    async def test_comment_wakes_waiters(self, app, parked) -> None:
        async with TestClient(app) as client:
            await client.put("/talks/foo", json=TALK)
            poll = asyncio.create_task(
                client.get("/talks", headers=_poll_headers("1", wait=10))
            )
            await parked(1)

            await client.post("/talks/foo/comments", json={"author": "a", "message": "m"})
            response = await asyncio.wait_for(poll, 2)
            assert response.header("etag") == '"2"'
            assert response.json[0]["comments"] == [{"author": "a", "message": "m"}]


class TestShutdown:
    async def test_shutdown_releases_parked_clients(self, app, state: ServerState, parked) -> None:
        client = TestClient(app)
        await client.__aenter__()
        poll = asyncio.create_task(client.get("/talks", headers=_poll_headers("0", wait=30)))
        await parked(1)

        await client.__aexit__(None, None, None)
        response = await asyncio.wait_for(poll, 2)

        assert response.status == 304
        assert state.broker.waiting == frozenset()
