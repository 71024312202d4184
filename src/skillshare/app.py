"""The skillshare application object.

An ``App`` collects routes, providers and lifecycle hooks while it is
being set up. The first request (or lifespan event) compiles everything
into a fixed route table; from then on the app only serves.
"""

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from skillshare._internal.asgi import Receive, Scope, Send
from skillshare._internal.invoke import invoke
from skillshare._internal.types import Handler, Provider
from skillshare.config import AppConfig
from skillshare.routing.route import Route
from skillshare.routing.router import Router
from skillshare.server.handler import handle_request
from skillshare.server.static import StaticFiles

logger = logging.getLogger("skillshare.app")

Hook = Callable[[], Any]


@dataclass(frozen=True, slots=True)
class _Registration:
    path: str
    handler: Handler
    methods: tuple[str, ...]
    name: str | None


class App:
    """A talk-sharing ASGI application.

    Routes are tried in the order they were registered, so when two
    templates overlap the one registered first answers.
    """

    __slots__ = (
        "_compile_lock",
        "_registrations",
        "_providers",
        "_router",
        "_running",
        "_shutdown_hooks",
        "_startup_hooks",
        "_static",
        "config",
    )

    def __init__(self, config: AppConfig | None = None) -> None:
        self.config: AppConfig = config or AppConfig()
        self._registrations: list[_Registration] = []
        self._providers: dict[type, Provider] = {}
        self._startup_hooks: list[Hook] = []
        self._shutdown_hooks: list[Hook] = []
        self._compile_lock = threading.Lock()
        self._router: Router | None = None
        self._static: StaticFiles | None = None
        self._running = False

    # -- Setup --

    def route(
        self,
        path: str,
        *,
        methods: list[str] | None = None,
        name: str | None = None,
    ) -> Callable[[Handler], Handler]:
        """Decorator registering *handler* for *path* (``{name}`` captures one segment).

        *methods* defaults to ``["GET"]``.
        """

        def register(handler: Handler) -> Handler:
            self._require_setup()
            verbs = tuple(m.upper() for m in methods or ["GET"])
            self._registrations.append(_Registration(path, handler, verbs, name))
            return handler

        return register

    def provide(self, annotation: type, factory: Provider) -> None:
        """Inject ``factory()`` into handler parameters annotated with *annotation*.

        ::

            app.provide(ServerState, lambda: state)

            async def get_talk(state: ServerState, title: str): ...
        """
        self._require_setup()
        self._providers[annotation] = factory

    def on_startup(self, hook: Hook) -> Hook:
        """Run *hook* (sync or async) when the server starts."""
        self._require_setup()
        self._startup_hooks.append(hook)
        return hook

    def on_shutdown(self, hook: Hook) -> Hook:
        """Run *hook* (sync or async) when the server stops."""
        self._require_setup()
        self._shutdown_hooks.append(hook)
        return hook

    @property
    def routes(self) -> list[Route]:
        """The route table in match order. Reading it compiles the app."""
        return self._compiled_router().routes

    # -- Lifecycle --

    async def startup(self) -> None:
        self._compiled_router()
        for hook in self._startup_hooks:
            await invoke(hook)
        self._running = True

    async def shutdown(self) -> None:
        """Run the shutdown hooks, once per startup.

        The server calls this before it waits for open connections to
        finish, and the lifespan protocol calls it again afterwards; the
        second call does nothing.
        """
        if not self._running:
            return
        self._running = False
        for hook in self._shutdown_hooks:
            await invoke(hook)

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Serve the app with uvicorn until interrupted."""
        from skillshare.server.dev import run_server

        self._compiled_router()
        run_server(
            self,
            host or self.config.host,
            port or self.config.port,
            log_level=self.config.log_level,
        )

    # -- ASGI --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "lifespan":
            await self._lifespan(receive, send)
        elif scope["type"] == "http":
            await handle_request(
                scope,
                receive,
                send,
                router=self._compiled_router(),
                providers=self._providers,
                static=self._static,
            )

    async def _lifespan(self, receive: Receive, send: Send) -> None:
        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                try:
                    await self.startup()
                except Exception as exc:
                    logger.exception("startup failed")
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                await self.shutdown()
                await send({"type": "lifespan.shutdown.complete"})
                return

    # -- Internal --

    def _compiled_router(self) -> Router:
        """Build the route table on first use; later calls return it."""
        router = self._router
        if router is not None:
            return router
        with self._compile_lock:
            if self._router is None:
                self._router = self._compile()
            return self._router

    def _compile(self) -> Router:
        router = Router()
        for reg in self._registrations:
            router.add(Route(reg.path, reg.handler, frozenset(reg.methods), reg.name))
        router.compile()
        if self.config.static_dir is not None:
            self._static = StaticFiles(self.config.static_dir)
        logger.debug("compiled %d route(s)", len(self._registrations))
        return router

    def _require_setup(self) -> None:
        if self._router is not None:
            msg = (
                "Cannot modify the app after it has started serving requests. "
                "Register routes, providers and hooks before calling app.run()."
            )
            raise RuntimeError(msg)


def create_app(config: AppConfig | None = None) -> App:
    """Build the talk-sharing app with its own, empty server state."""
    from skillshare.routes import register_routes
    from skillshare.state import ServerState

    app = App(config)
    state = ServerState(max_wait=app.config.max_wait)
    app.provide(ServerState, lambda: state)
    register_routes(app)
    app.on_shutdown(state.broker.release_all)
    return app
