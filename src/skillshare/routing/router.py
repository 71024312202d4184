"""Ordered route table.

Templates are literal segments plus ``{name}`` captures, each capture
standing for exactly one path segment. The table is scanned in
registration order against the raw, still percent-encoded request path,
so ``%2F`` inside a title never splits a segment.
"""

import re
from dataclasses import dataclass
from urllib.parse import unquote

from skillshare.errors import ConfigurationError
from skillshare.routing.route import Route, RouteMatch

_CAPTURE_RE = re.compile(r"^\{([A-Za-z_][A-Za-z0-9_]*)\}$")


def compile_path(template: str) -> re.Pattern[str]:
    """Turn ``"/talks/{title}/comments"`` into an anchored pattern.

    Raises ``ConfigurationError`` for malformed captures or a name used twice.
    """
    names: set[str] = set()
    pieces: list[str] = []
    for segment in template.strip("/").split("/"):
        if not segment:
            continue
        if not any(ch in segment for ch in "{}<>"):
            pieces.append(re.escape(segment))
            continue
        capture = _CAPTURE_RE.match(segment)
        if capture is None:
            msg = f"Bad capture {segment!r} in route {template!r}; write it as {{name}}."
            raise ConfigurationError(msg)
        name = capture.group(1)
        if name in names:
            msg = f"Capture {name!r} appears twice in route {template!r}."
            raise ConfigurationError(msg)
        names.add(name)
        pieces.append(f"(?P<{name}>[^/]+)")
    return re.compile("^/" + "/".join(pieces) + "$")


@dataclass(frozen=True, slots=True)
class _Entry:
    route: Route
    pattern: re.Pattern[str]


class Router:
    """Routes in the order they were added.

    Usage::

        router = Router()
        router.add(Route("/talks", list_talks, frozenset({"GET"})))
        router.add(Route("/talks/{title}", get_talk, frozenset({"GET"})))
        router.compile()
        found = router.match("GET", "/talks/Unituning")
    """

    __slots__ = ("_entries", "_sealed")

    def __init__(self) -> None:
        self._entries: list[_Entry] = []
        self._sealed = False

    def add(self, route: Route) -> None:
        if self._sealed:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)
        self._entries.append(_Entry(route, compile_path(route.path)))

    def compile(self) -> None:
        """Seal the table."""
        self._sealed = True

    @property
    def routes(self) -> list[Route]:
        return [entry.route for entry in self._entries]

    def match(self, method: str, raw_path: str) -> RouteMatch | None:
        """Return the first entry accepting *method* whose template fits, or None."""
        for entry in self._entries:
            if method not in entry.route.methods:
                continue
            found = entry.pattern.match(raw_path)
            if found is not None:
                captures = {key: unquote(value) for key, value in found.groupdict().items()}
                return RouteMatch(entry.route, captures)
        return None
