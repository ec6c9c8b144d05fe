"""Per-request context.

One ``Context`` is created by the dispatcher for every matched request,
threaded through the middleware chain into the handler, and discarded
once the response is written. It is never shared between requests.

Handlers read inputs from it and record their outcome on it::

    async def create_user(ctx: Context) -> None:
        payload = await ctx.bind_json(CreateUser)
        user = await store.create(payload)
        ctx.json(201, user)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, TypeVar

from wren.errors import HTTPException

if TYPE_CHECKING:
    from wren._internal.asgi import Send
    from wren.http.request import Request
    from wren.routing.route import Route

T = TypeVar("T")


class Binder(Protocol):
    """Decodes and validates an inbound payload into a typed value."""

    async def bind_json(self, ctx: Context, target: Any) -> Any: ...


class Context:
    """Mutable per-request state.

    ``headers`` holds the request headers with lower-cased keys. Middleware
    may add or overwrite entries for handlers further down the chain.
    ``response_headers`` is what goes out with the response.
    """

    __slots__ = (
        "binder",
        "body",
        "headers",
        "method",
        "params",
        "path",
        "query",
        "request",
        "response_headers",
        "route",
        "send",
        "state",
        "status_code",
    )

    def __init__(
        self,
        *,
        method: str = "GET",
        path: str = "/",
        params: dict[str, str] | None = None,
        query: dict[str, str] | None = None,
        headers: dict[str, str] | None = None,
        request: Request | None = None,
        send: Send | None = None,
        binder: Binder | None = None,
        route: Route | None = None,
    ) -> None:
        self.method = method
        self.path = path
        self.params: dict[str, str] = params or {}
        self.query: dict[str, str] = query or {}
        self.headers: dict[str, str] = {k.lower(): v for k, v in (headers or {}).items()}
        self.response_headers: dict[str, str] = {}
        self.status_code = 200
        self.body: Any = None
        self.request = request
        self.send = send
        self.binder = binder
        self.route = route
        self.state: dict[str, Any] = {}

    # -- Inputs --

    def param(self, name: str) -> str:
        """Path parameter *name*, or ``""``."""
        return self.params.get(name, "")

    def query_param(self, name: str) -> str:
        """Query parameter *name*, or ``""``."""
        return self.query.get(name, "")

    def header(self, name: str) -> str:
        """Request header *name* (case-insensitive), or ``""``."""
        return self.headers.get(name.lower(), "")

    async def bind_json(self, target: type[T]) -> T:
        """Decode the JSON body into *target* and validate it.

        Raises ``HTTPException`` 400 for unreadable or malformed bodies and
        422 for constraint violations.
        """
        if self.binder is None:
            raise HTTPException(500, "binder not available")
        return await self.binder.bind_json(self, target)

    # -- Outcome --

    def set_header(self, name: str, value: str) -> None:
        """Set a response header."""
        self.response_headers[name] = value

    def status(self, code: int) -> Context:
        """Set the response status. Chainable."""
        self.status_code = code
        return self

    def json(self, status: int, data: Any) -> None:
        """Respond with *data* encoded as JSON."""
        self.status_code = status
        self.body = data

    def __repr__(self) -> str:
        return f"<Context {self.method} {self.path} status={self.status_code}>"
