"""Call route handlers that may be plain functions or coroutines.

Route handlers are written as either ``def handler(ctx)`` or
``async def handler(ctx)``. Middleware always sees an async handler;
the terminal adapter in the dispatcher goes through ``invoke`` so the
sync/async check lives in one place.
"""

import inspect
from typing import Any


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call *handler* and await its result when it is awaitable."""
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
