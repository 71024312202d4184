"""HTTP routes for talks and comments.

Every handler gets the server's ``ServerState`` injected by annotation.
Handlers raise ``NotFound``/``ValidationError`` for client errors; the
gateway turns those into 404/400 responses.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from skillshare.broker import NOT_MODIFIED
from skillshare.errors import NotFound
from skillshare.http.request import Request
from skillshare.http.response import Response
from skillshare.state import ServerState
from skillshare.talks import Comment, Talk

if TYPE_CHECKING:
    from skillshare.app import App

NO_CONTENT = Response(status=204)


async def list_talks(state: ServerState, request: Request) -> Response:
    """All talks, or ``304``/a parked wait when the client is up to date."""
    broker = state.broker
    if not broker.is_current(request.etag):
        return broker.talk_response()
    wait = request.wait
    if wait is None:
        return NOT_MODIFIED
    return await broker.wait_for_changes(wait)


async def get_talk(state: ServerState, title: str) -> dict:
    talk = state.talks.get(title)
    if talk is None:
        raise NotFound(f"No talk '{title}' found")
    return talk.to_dict()


async def delete_talk(state: ServerState, title: str) -> Response:
    if state.talks.delete(title):
        state.broker.updated()
    return NO_CONTENT


async def put_talk(state: ServerState, title: str, request: Request) -> Response:
    talk = Talk.from_payload(title, await request.json())
    state.talks.put(talk)
    state.broker.updated()
    return NO_CONTENT


async def add_comment(state: ServerState, title: str, request: Request) -> Response:
    """Append a comment; the payload is validated before the talk is looked up."""
    comment = Comment.from_payload(await request.json())
    if not state.talks.add_comment(title, comment):
        raise NotFound(f"No talk '{title}' found")
    state.broker.updated()
    return NO_CONTENT


def register_routes(app: App) -> None:
    """Attach the talk routes to *app* in match order."""
    app.route("/talks", name="list_talks")(list_talks)
    app.route("/talks/{title}", name="get_talk")(get_talk)
    app.route("/talks/{title}", methods=["DELETE"], name="delete_talk")(delete_talk)
    app.route("/talks/{title}", methods=["PUT"], name="put_talk")(put_talk)
    app.route("/talks/{title}/comments", methods=["POST"], name="add_comment")(add_comment)
