"""ASGI handler — translates ASGI scope/messages to wren types.

The only component that touches raw ASGI for HTTP requests. Converts the
scope to a ``Request``, finds the route, builds the ``Context``, runs the
middleware chain around the route handler, and sends the outcome back
through ASGI ``send()``.
"""

import math
import re
from collections.abc import Mapping
from typing import Any

import anyio

from wren._internal.asgi import Receive, Scope, Send
from wren._internal.invoke import invoke
from wren.config import AppConfig
from wren.context import Binder, Context
from wren.descriptors import encode
from wren.errors import ClientInputError, HTTPException, RequestTimeout
from wren.http.request import Request
from wren.http.response import Response
from wren.middleware.protocol import Handler
from wren.middleware.registry import MiddlewareRegistry, compose
from wren.routing.registry import RouteRegistry
from wren.routing.route import ParamSpec, Route
from wren.server.errors import handle_http_error, handle_internal_error
from wren.server.sender import send_response

DOCUMENT_UNAVAILABLE = "Swagger spec not available"

_BOOLEANS = {"true": True, "1": True, "false": False, "0": False}
_INTEGER_RE = re.compile(r"[+-]?[0-9]+")
_NUMBER_RE = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    registry: RouteRegistry,
    middleware: MiddlewareRegistry,
    config: AppConfig,
    document: dict[str, Any] | None = None,
    binder: Binder | None = None,
) -> None:
    """Process a single HTTP request through the full pipeline."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope, receive)

    # Document endpoint sits in front of routing, matched by path alone
    if config.swagger and request.path == config.swagger_path:
        await send_response(document_response(document), send)
        return

    match = registry.match(request.method, request.path)
    if match is None:
        await send_response(Response(status=404), send)
        return

    ctx = Context(
        method=request.method,
        path=request.path,
        params=dict(match.path_params),
        query=request.query.to_dict(),
        headers=request.headers.to_dict(),
        request=request,
        send=send,
        binder=binder,
        route=match.route,
    )
    chain = middleware.apply(compose(match.route.middlewares, terminal(match.route)))

    try:
        await _run(chain, ctx, config.request_timeout)
        response = success_response(ctx)
    except HTTPException as exc:
        response = handle_http_error(exc, request, ctx.response_headers)
    except Exception as exc:
        response = handle_internal_error(exc, request, ctx.response_headers)

    await send_response(response, send)


async def _run(chain: Handler, ctx: Context, timeout: float | None) -> None:
    if timeout is None:
        await chain(ctx)
        return
    # Only awaits are interruptible: a sync handler still runs to completion
    with anyio.move_on_after(timeout) as cancel_scope:
        await chain(ctx)
    if cancel_scope.cancelled_caught:
        raise RequestTimeout


def terminal(route: Route) -> Handler:
    """Adapt the route handler to the ``Handler`` shape middlewares wrap.

    Runs the declared parameter checks, then calls the handler (sync or
    async). A handler may return its payload instead of calling
    ``ctx.json``; it is sent with the context's current status.
    """
    handler = route.handler
    specs = route.options.params

    async def call_handler(ctx: Context) -> None:
        if specs:
            check_params(specs, ctx)
        result = await invoke(handler, ctx)
        if result is not None and ctx.body is None:
            ctx.body = result

    return call_handler


def success_response(ctx: Context) -> Response:
    """Build the response for a chain that returned without raising.

    A body set on the context is sent as JSON with the context status.
    Without one, the context status is sent with an empty body (200 if
    the handler never changed it).
    """
    if ctx.body is not None:
        response = Response.json(encode(ctx.body), status=ctx.status_code)
    else:
        response = Response(status=ctx.status_code)
    if ctx.response_headers:
        response = response.with_headers(ctx.response_headers)
    return response


def document_response(document: dict[str, Any] | None) -> Response:
    """Serve the generated document, or a 500 when there is none."""
    if document is None:
        response = Response(
            body=DOCUMENT_UNAVAILABLE.encode("utf-8"),
            status=500,
            content_type="text/plain; charset=utf-8",
        )
    else:
        response = Response.json(document)
    return response.with_header("Access-Control-Allow-Origin", "*")


def check_params(specs: Mapping[str, ParamSpec], ctx: Context) -> None:
    """Check declared parameters against the request.

    Each name is looked up in the path params first, then the query
    string. Raises ``ClientInputError`` for a missing required value, a
    value that does not parse as its declared type, or one outside its
    bounds. Bounds apply to ``integer`` and ``number`` parameters.
    """
    for name, spec in specs.items():
        raw = ctx.params.get(name)
        if raw is None:
            raw = ctx.query.get(name, "")
        if raw == "":
            if spec.required:
                raise ClientInputError(f"missing parameter: {name}", parameter=name)
            continue

        if spec.type == "boolean":
            if raw.lower() not in _BOOLEANS:
                raise ClientInputError(f"parameter {name} must be a boolean", parameter=name)
            continue

        if spec.type not in ("integer", "number"):
            continue

        number = _parse_number(name, spec.type, raw)
        if spec.minimum is not None and number < spec.minimum:
            raise ClientInputError(
                f"parameter {name} must be >= {spec.minimum}", parameter=name
            )
        if spec.maximum is not None and number > spec.maximum:
            raise ClientInputError(
                f"parameter {name} must be <= {spec.maximum}", parameter=name
            )


def _parse_number(name: str, kind: str, raw: str) -> float:
    # int() and float() also take "1_0", padding and non-ASCII digits
    pattern = _INTEGER_RE if kind == "integer" else _NUMBER_RE
    number: float | None = None
    if pattern.fullmatch(raw):
        try:
            number = int(raw) if kind == "integer" else float(raw)
        except ValueError:  # past int's digit limit
            number = None
    if number is None or (kind == "number" and not math.isfinite(number)):
        article = "an" if kind == "integer" else "a"
        raise ClientInputError(f"parameter {name} must be {article} {kind}", parameter=name)
    return number
