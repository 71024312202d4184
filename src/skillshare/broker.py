"""Long-poll broker — versioned talk list with deferred responses.

Clients send back the version tag they last saw. A stale tag gets the
current list straight away; an up-to-date tag either gets ``304`` or,
with ``Prefer: wait=N``, parks the request until the next change or
until N seconds pass.

Event-loop safety:
    - Every transition (register, expire, fan-out) is a plain synchronous
      method, so it runs as one uninterrupted step on the event loop.
    - A waiter leaves the pending set *before* it is resolved. The timer
      and the fan-out both check membership first, so whichever runs
      second finds nothing to do.
"""

import asyncio
import logging
from dataclasses import dataclass, field

from skillshare.http.conditional import format_etag
from skillshare.http.response import Response
from skillshare.talks import TalkStore

logger = logging.getLogger("skillshare.broker")

NOT_MODIFIED = Response(status=304)


@dataclass(eq=False, slots=True)
class Waiter:
    """A parked long-poll request.

    Compared by identity so two waiters never collide in the pending set.
    """

    future: asyncio.Future[Response]
    timer: asyncio.TimerHandle | None = field(default=None, repr=False)

    def resolve(self, response: Response) -> None:
        if self.timer is not None:
            self.timer.cancel()
        if not self.future.done():
            self.future.set_result(response)


class LongPollBroker:
    """Owns the version counter and the set of pending waiters.

    Usage in a handler::

        if request.etag != str(broker.version):
            return broker.talk_response()
        if request.wait is None:
            return NOT_MODIFIED
        return await broker.wait_for_changes(request.wait)

    Mutating handlers call :meth:`updated` after every effective change.
    """

    __slots__ = ("_max_wait", "_talks", "_version", "_waiting")

    def __init__(self, talks: TalkStore, *, max_wait: int | None = None) -> None:
        self._talks = talks
        self._version = 0
        self._waiting: set[Waiter] = set()
        self._max_wait = max_wait

    @property
    def version(self) -> int:
        return self._version

    @property
    def waiting(self) -> frozenset[Waiter]:
        """Snapshot of the waiters currently parked."""
        return frozenset(self._waiting)

    def is_current(self, tag: str | None) -> bool:
        """Whether *tag* names the current version."""
        return tag is not None and tag == str(self._version)

    def talk_response(self) -> Response:
        """The full talk list, tagged with the current version."""
        return Response.from_json(self._talks.to_list()).with_headers(
            {
                "ETag": format_etag(self._version),
                "Cache-Control": "no-store",
            }
        )

    async def wait_for_changes(self, seconds: int) -> Response:
        """Park until the next :meth:`updated` call or until *seconds* pass.

        Resolves with the fresh talk list on change, or ``304`` on timeout.
        If the awaiting task is cancelled the waiter is dropped.
        """
        if self._max_wait is not None:
            seconds = min(seconds, self._max_wait)

        loop = asyncio.get_running_loop()
        waiter = Waiter(future=loop.create_future())
        waiter.timer = loop.call_later(seconds, self._expire, waiter)
        self._waiting.add(waiter)
        logger.debug("waiter parked for %ss at version %d (%d pending)",
                     seconds, self._version, len(self._waiting))

        try:
            return await waiter.future
        except asyncio.CancelledError:
            self._waiting.discard(waiter)
            if waiter.timer is not None:
                waiter.timer.cancel()
            raise

    def _expire(self, waiter: Waiter) -> None:
        """Timer callback: answer ``304`` if nobody got there first."""
        if waiter not in self._waiting:
            return
        self._waiting.discard(waiter)
        waiter.resolve(NOT_MODIFIED)

    def updated(self) -> None:
        """Record one effective change and wake every parked waiter.

        The version is bumped and the response built once; the pending set
        is swapped for an empty one before any waiter is resolved.
        """
        self._version += 1
        waiting, self._waiting = self._waiting, set()
        if not waiting:
            return
        response = self.talk_response()
        logger.debug("version %d: notifying %d waiter(s)", self._version, len(waiting))
        for waiter in waiting:
            waiter.resolve(response)

    def release_all(self) -> None:
        """Answer every parked waiter with ``304``. Used at shutdown."""
        waiting, self._waiting = self._waiting, set()
        for waiter in waiting:
            waiter.resolve(NOT_MODIFIED)
