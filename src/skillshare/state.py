"""Per-server state: the talk store plus the broker that versions it."""

from dataclasses import dataclass, field

from skillshare.broker import LongPollBroker
from skillshare.talks import TalkStore


@dataclass(slots=True)
class ServerState:
    """Everything one server instance owns.

    Handlers receive it by injection (see ``App.provide``); nothing is kept
    at module level, so independent apps never share talks or waiters.
    """

    talks: TalkStore = field(default_factory=TalkStore)
    max_wait: int | None = None
    broker: LongPollBroker = field(init=False)

    def __post_init__(self) -> None:
        self.broker = LongPollBroker(self.talks, max_wait=self.max_wait)

    @property
    def version(self) -> int:
        return self.broker.version
