"""Serve an App over HTTP with uvicorn.

Pending long-poll waiters live in this process's event loop, so the
server always runs a single worker.
"""

from __future__ import annotations

import logging
import socket
from typing import TYPE_CHECKING

import uvicorn

if TYPE_CHECKING:
    from skillshare.app import App

logger = logging.getLogger("skillshare.server")


class TalkServer(uvicorn.Server):
    """uvicorn server that runs the app's shutdown hooks before draining.

    uvicorn waits for in-flight requests to finish before it sends the
    lifespan shutdown event, and a parked long poll only finishes when
    its wait runs out. Running the hooks first answers those requests
    with ``304`` straight away; the later lifespan event is then a no-op.
    """

    def __init__(self, config: uvicorn.Config, app: App) -> None:
        super().__init__(config)
        self.talk_app = app

    async def shutdown(self, sockets: list[socket.socket] | None = None) -> None:
        logger.info("releasing parked long polls")
        await self.talk_app.shutdown()
        await super().shutdown(sockets=sockets)


def run_server(app: App, host: str, port: int, *, log_level: str = "info") -> None:
    """Start uvicorn with the live App object and block until it exits."""
    config = uvicorn.Config(
        app,
        host=host,
        port=port,
        workers=1,
        log_level=log_level.lower(),
        lifespan="on",
    )
    logger.info("serving talks on http://%s:%d", host, port)
    TalkServer(config, app).run()
