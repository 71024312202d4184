"""Turn what a route handler returned into a Response."""

from typing import Any

from skillshare.errors import ConfigurationError
from skillshare.http.response import Response


def negotiate(value: Any) -> Response:
    """A ``Response`` is sent as is; a ``dict`` or ``list`` becomes JSON."""
    match value:
        case Response():
            return value
        case dict() | list():
            return Response.from_json(value)
        case _:
            msg = (
                f"Route handler returned {type(value).__name__}; return a Response, "
                "a dict or a list."
            )
            raise ConfigurationError(msg)
