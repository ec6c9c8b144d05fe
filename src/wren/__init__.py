"""Wren — a small ASGI framework for typed JSON APIs.

Routes carry their request and response types; the same types drive
body binding, validation, and the generated OpenAPI document.

Basic usage::

    from dataclasses import dataclass

    from wren import App, AppConfig, Context, body, field, response, summary

    @dataclass
    class CreateUser:
        name: str = field(validate="required,min=2")
        email: str = field(validate="required,email")

    app = App(AppConfig(title="Users API", swagger=True))

    @app.post("/users", body(CreateUser), response(CreateUser, status=201), summary("Create user"))
    async def create_user(ctx: Context) -> None:
        user = await ctx.bind_json(CreateUser)
        ctx.json(201, user)

    app.run()

Serving with ``app.run()`` needs the server extra (``pip install wren[server]``).
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "AuthorizationError",
    "ClientInputError",
    "ConfigurationError",
    "Context",
    "Forbidden",
    "HTTPException",
    "Handler",
    "Middleware",
    "NotFound",
    "ParamSpec",
    "RateLimitError",
    "RateLimiter",
    "Request",
    "RequestTimeout",
    "Response",
    "RouteGroup",
    "RouteOptions",
    "ValidationFailed",
    "WrenError",
    "api_key",
    "bearer_token",
    "body",
    "cors",
    "field",
    "params",
    "rate_limit",
    "response",
    "summary",
    "tags",
]

_ERRORS = (
    "AuthorizationError",
    "ClientInputError",
    "ConfigurationError",
    "Forbidden",
    "HTTPException",
    "NotFound",
    "RateLimitError",
    "RequestTimeout",
    "ValidationFailed",
    "WrenError",
)

_OPTIONS = ("body", "params", "response", "summary", "tags")

_MIDDLEWARE = ("Handler", "Middleware", "RateLimiter", "api_key", "bearer_token", "cors", "rate_limit")


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import wren`` fast while providing a clean top-level API.
    """
    if name in ("App", "RouteGroup"):
        from wren import app as _app

        return getattr(_app, name)

    if name == "AppConfig":
        from wren.config import AppConfig

        return AppConfig

    if name == "Context":
        from wren.context import Context

        return Context

    if name == "Request":
        from wren.http.request import Request

        return Request

    if name == "Response":
        from wren.http.response import Response

        return Response

    if name in ("ParamSpec", "RouteOptions"):
        from wren.routing import route as _route

        return getattr(_route, name)

    if name == "field":
        from wren.descriptors import field

        return field

    if name in _OPTIONS:
        from wren import options as _options

        return getattr(_options, name)

    if name in _MIDDLEWARE:
        from wren import middleware as _mw

        return getattr(_mw, name)

    if name in _ERRORS:
        from wren import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
