"""Middleware protocol and Handler type alias.

A handler is any async callable taking the request ``Context``::

    async def handler(ctx: Context) -> None: ...

A middleware transforms the next handler into a new handler::

    def mw(next: Handler) -> Handler: ...

No base class required. The framework checks the shape, not the lineage.
Failure is signalled by raising; returning normally means success.
"""

from collections.abc import Awaitable, Callable
from typing import Protocol, TypeAlias

from wren.context import Context

# The next handler in the middleware chain
Handler: TypeAlias = Callable[[Context], Awaitable[None]]


class Middleware(Protocol):
    """Protocol for wren middleware.

    Accepts both functions and callable objects::

        # Function middleware
        def timing(next: Handler) -> Handler:
            async def handler(ctx: Context) -> None:
                start = time.monotonic()
                await next(ctx)
                ctx.set_header("X-Time", f"{time.monotonic() - start:.3f}")

            return handler

        # Class middleware
        class RequireJSON:
            def __call__(self, next: Handler) -> Handler:
                ...
    """

    def __call__(self, next: Handler) -> Handler: ...
