"""Shared fixtures: a fresh talk app per test, with static files disabled."""

import asyncio
from collections.abc import Awaitable, Callable

import pytest

from skillshare.app import App, create_app
from skillshare.config import AppConfig
from skillshare.state import ServerState


@pytest.fixture
def app() -> App:
    """A new app with its own empty state."""
    return create_app(AppConfig(static_dir=None))


@pytest.fixture
def state(app: App) -> ServerState:
    """The ServerState injected into ``app``'s handlers."""
    return app._providers[ServerState]()


@pytest.fixture
def parked(state: ServerState) -> Callable[[int], Awaitable[None]]:
    """Await until the given number of long-poll requests are parked."""

    async def wait(count: int) -> None:
        for _ in range(200):
            if len(state.broker.waiting) >= count:
                return
            await asyncio.sleep(0.005)
        msg = f"expected {count} parked waiter(s), have {len(state.broker.waiting)}"
        raise AssertionError(msg)

    return wait
