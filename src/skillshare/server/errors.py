"""Handler failures as responses.

Client errors are expected traffic and only logged at debug level;
anything else is a bug, logged with its traceback and reported as 500.
"""

import logging

from skillshare.errors import HTTPError
from skillshare.http.request import Request
from skillshare.http.response import Response

logger = logging.getLogger("skillshare.server")


def handle_http_error(exc: HTTPError, request: Request) -> Response:
    logger.debug("%d %s %s: %s", exc.status, request.method, request.path, exc.detail)
    return Response(exc.detail or f"Error {exc.status}", status=exc.status)


def handle_internal_error(exc: Exception, request: Request) -> Response:
    logger.exception("500 %s %s", request.method, request.path)
    return Response(describe_error(exc), status=500)


def describe_error(exc: BaseException) -> str:
    """``"ValueError: bad thing"``, or just the type name when there is no message."""
    message = str(exc)
    name = type(exc).__name__
    return f"{name}: {message}" if message else name
