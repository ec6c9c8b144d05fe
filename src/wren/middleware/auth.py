"""Credential-checking middleware.

Both middlewares reject before the handler runs by raising
``AuthorizationError`` (401)::

    app.use(bearer_token("s3cr3t"))
    admin = app.group("/admin", api_key("sk_live_..."))
"""

import hmac

from wren.context import Context
from wren.errors import AuthorizationError
from wren.middleware.protocol import Handler, Middleware

AUTHENTICATED_USER_HEADER = "x-authenticated-user"


def _same(given: str, expected: str) -> bool:
    return hmac.compare_digest(given.encode("utf-8"), expected.encode("utf-8"))


def bearer_token(expected_token: str) -> Middleware:
    """Require ``Authorization: Bearer <expected_token>``.

    On success the request header ``x-authenticated-user`` is set so
    handlers further down can tell the request was authenticated.
    """

    def middleware(next: Handler) -> Handler:
        async def handler(ctx: Context) -> None:
            auth = ctx.header("Authorization")
            if not auth:
                raise AuthorizationError("Missing Authorization header")
            if not auth.startswith("Bearer "):
                raise AuthorizationError("Invalid Authorization header format")

            token = auth.removeprefix("Bearer ")
            if not token:
                raise AuthorizationError("Missing token")
            if not _same(token, expected_token):
                raise AuthorizationError("Invalid token")

            ctx.headers[AUTHENTICATED_USER_HEADER] = "user"
            await next(ctx)

        return handler

    return middleware


def api_key(expected_key: str, *, header: str = "X-API-Key") -> Middleware:
    """Require the API key in *header*."""

    def middleware(next: Handler) -> Handler:
        async def handler(ctx: Context) -> None:
            key = ctx.header(header)
            if not key:
                raise AuthorizationError(f"Missing {header} header")
            if not _same(key, expected_key):
                raise AuthorizationError("Invalid API key")
            await next(ctx)

        return handler

    return middleware
