"""Route option helpers.

Each helper returns a partial ``RouteOptions``; registration merges them
left to right with ``merge_options``::

    @app.post(
        "/users",
        body(CreateUser),
        response(User, status=201),
        summary("Create user"),
        tags("users"),
    )
    async def create_user(ctx): ...

Types are described once here, at registration, not per request.
"""

from collections.abc import Mapping
from typing import Any

from wren.descriptors import PRIMITIVE_KINDS, describe, primitive_kind
from wren.errors import ConfigurationError
from wren.middleware.protocol import Middleware
from wren.routing.route import ParamSpec, RouteOptions


def body(tp: Any) -> RouteOptions:
    """Declare the request body type (documented, and the usual ``bind_json`` target)."""
    return RouteOptions(body=describe(tp))


def response(tp: Any, status: int = 200) -> RouteOptions:
    """Declare the success response type and the status it is documented under."""
    return RouteOptions(response=describe(tp), response_status=status)


def summary(text: str) -> RouteOptions:
    return RouteOptions(summary=text)


def tags(*names: str) -> RouteOptions:
    return RouteOptions(tags=tuple(names))


def params(spec: Mapping[str, Any]) -> RouteOptions:
    """Declare parameter types, checked on every request.

    Values may be a Python type (``int``), a document type name
    (``"integer"``), or a ``ParamSpec`` for bounds and optional query
    parameters::

        params({"id": int, "page": ParamSpec("integer", required=False, minimum=1)})
    """
    return RouteOptions(params={name: _param_spec(value) for name, value in spec.items()})


def middleware(*middlewares: Middleware) -> RouteOptions:
    """Route-level middlewares, outermost first."""
    return RouteOptions(middlewares=tuple(middlewares))


def _param_spec(value: Any) -> ParamSpec:
    if isinstance(value, ParamSpec):
        return value
    if isinstance(value, str):
        if value not in PRIMITIVE_KINDS:
            msg = f"Unknown parameter type {value!r}; expected one of {sorted(PRIMITIVE_KINDS)}"
            raise ConfigurationError(msg)
        return ParamSpec(type=value)
    return ParamSpec(type=primitive_kind(value))
