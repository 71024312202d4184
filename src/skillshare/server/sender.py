"""Write a Response to the ASGI ``send`` channel."""

from skillshare._internal.asgi import Send
from skillshare.http.response import Response

_BODYLESS = frozenset({204, 304})


def body_allowed(status: int) -> bool:
    """False for 1xx, 204 and 304, which never carry a body."""
    return status >= 200 and status not in _BODYLESS


async def send_response(response: Response, send: Send, *, head: bool = False) -> None:
    """Send the start and body messages for *response*.

    ``Content-Length`` is always computed here. For ``HEAD`` it still
    describes the body that a ``GET`` would have carried.
    """
    headers = [(b"content-type", response.content_type.encode("latin-1"))]
    headers += [
        (name.lower().encode("latin-1"), value.encode("latin-1"))
        for name, value in response.headers
        if name.lower() != "content-length"
    ]
    body = b""
    if body_allowed(response.status):
        body = response.body_bytes
        headers.append((b"content-length", str(len(body)).encode("latin-1")))

    await send({"type": "http.response.start", "status": response.status, "headers": headers})
    await send({"type": "http.response.body", "body": b"" if head else body})
