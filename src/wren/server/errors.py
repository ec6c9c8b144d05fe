"""Error translation for wren requests.

The only place exceptions become responses. ``HTTPException`` keeps its
status and message; anything else is logged with its traceback and
answered with a generic 500 so internals never leak to the client.
"""

import logging

from wren.errors import HTTPException
from wren.http.request import Request
from wren.http.response import Response

logger = logging.getLogger("wren.server")

INTERNAL_ERROR_MESSAGE = "Internal Server Error"


def error_body(message: str) -> dict[str, str]:
    """The JSON shape of every error response."""
    return {"error": message}


def handle_http_error(
    exc: HTTPException,
    request: Request,
    headers: dict[str, str] | None = None,
) -> Response:
    """Map an HTTPException to its response.

    *headers* are the response headers the context had collected before
    the failure (CORS, for instance); the exception's own headers follow
    them so they win on conflict.
    """
    logger.debug("%d %s %s: %s", exc.status, request.method, request.path, exc.message)

    resp = Response.json(error_body(exc.message), status=exc.status)
    if headers:
        resp = resp.with_headers(headers)
    for name, value in exc.headers:
        resp = resp.with_header(name, value)
    return resp


def handle_internal_error(
    exc: Exception,
    request: Request,
    headers: dict[str, str] | None = None,
) -> Response:
    """Handle unexpected exceptions as 500 errors.

    Must be called from inside the ``except`` block so the traceback is
    logged.
    """
    logger.exception("500 %s %s", request.method, request.path)

    resp = Response.json(error_body(INTERNAL_ERROR_MESSAGE), status=500)
    if headers:
        resp = resp.with_headers(headers)
    return resp
