"""Parsing for the two request headers that drive long polling.

``If-None-Match`` carries the version tag the client last saw and
``Prefer: wait=N`` asks the server to hold the request for up to N seconds.
"""

import re

# longest hold honoured, about 24 days
MAX_WAIT = 2**31 // 1000

_TAG_RE = re.compile(r'"([^"]*)"')
_WAIT_RE = re.compile(r"\bwait=(\d+)")


def parse_etag(value: str | None) -> str | None:
    """Return the first quoted tag of an ``If-None-Match`` value.

    ``'"3"'`` -> ``"3"``; ``'"3", "7"'`` -> ``"3"``. Unquoted or missing
    values yield ``None``.
    """
    if not value:
        return None
    match = _TAG_RE.search(value)
    return match.group(1) if match else None


def parse_wait(value: str | None) -> int | None:
    """Return the whole seconds requested by a ``Prefer`` header, at most ``MAX_WAIT``.

    ``"wait=90"`` -> ``90``; other preferences in the same header are ignored.
    """
    if not value:
        return None
    match = _WAIT_RE.search(value)
    if match is None:
        return None
    digits = match.group(1).lstrip("0") or "0"
    if len(digits) > len(str(MAX_WAIT)):
        return MAX_WAIT
    return min(int(digits), MAX_WAIT)


def format_etag(version: int) -> str:
    """Render a version number as a quoted entity tag."""
    return f'"{version}"'
