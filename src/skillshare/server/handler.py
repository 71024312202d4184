"""ASGI request handling.

The one place raw HTTP scopes turn into a ``Request`` and a ``Response``
turns back into ASGI messages. Every request produces exactly one
response: a route's answer, a static file, or the not-found page.
"""

import inspect
from collections.abc import Callable
from typing import Any

from skillshare._internal.asgi import Receive, Scope, Send
from skillshare._internal.invoke import invoke
from skillshare.errors import HTTPError
from skillshare.http.request import Request
from skillshare.http.response import HTML, Response
from skillshare.routing.route import RouteMatch
from skillshare.routing.router import Router
from skillshare.server.errors import handle_http_error, handle_internal_error
from skillshare.server.negotiation import negotiate
from skillshare.server.sender import send_response
from skillshare.server.static import StaticFiles

NOT_FOUND_PAGE = "<h1>Not found</h1>"

Providers = dict[type, Callable[[], Any]]


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    router: Router,
    providers: Providers | None = None,
    static: StaticFiles | None = None,
) -> None:
    """Answer one HTTP request: route, then static file, then 404 page."""
    request = Request.from_asgi(scope, receive)

    response = await resolve(request, router, providers)
    if response is None and static is not None:
        response = await static(request)
    if response is None:
        response = Response(NOT_FOUND_PAGE, status=404, content_type=HTML)

    await send_response(response, send, head=request.method == "HEAD")


async def resolve(
    request: Request,
    router: Router,
    providers: Providers | None = None,
) -> Response | None:
    """Run the first matching route, or return None when nothing matches.

    Handler failures stay inside: ``HTTPError`` keeps its status and
    anything else is reported as a 500.
    """
    found = router.match(request.method, request.raw_path)
    if found is None:
        return None
    try:
        return await _call_route(found, request, providers or {})
    except HTTPError as exc:
        return handle_http_error(exc, request)
    except Exception as exc:
        return handle_internal_error(exc, request)


async def _call_route(found: RouteMatch, request: Request, providers: Providers) -> Response:
    request = request.with_path_params(found.path_params)
    handler = found.route.handler
    result = await invoke(handler, **_arguments_for(handler, request, providers))
    return negotiate(result)


def _arguments_for(
    handler: Callable[..., Any],
    request: Request,
    providers: Providers,
) -> dict[str, Any]:
    """Fill each handler parameter from one of three places.

    A parameter named ``request`` or annotated ``Request`` gets the request;
    one named like a capture gets the decoded capture string; one whose
    annotation was registered with ``App.provide`` gets the provider's value.
    Anything else is left to its default.
    """
    arguments: dict[str, Any] = {}
    for name, param in inspect.signature(handler, eval_str=True).parameters.items():
        if name == "request" or param.annotation is Request:
            arguments[name] = request
        elif name in request.path_params:
            arguments[name] = request.path_params[name]
        elif param.annotation in providers:
            arguments[name] = providers[param.annotation]()
    return arguments
