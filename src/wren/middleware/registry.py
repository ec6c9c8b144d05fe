"""Middleware composition.

``compose`` folds an ordered list of middlewares around a handler so the
first middleware ends up outermost: it runs first on the way in and last
on the way out. Composition is pure; it builds a new handler and changes
nothing else.

Per request the dispatcher builds::

    global_registry.apply(compose(route.middlewares, handler))

which gives: global middlewares in registration order, then the route's
middlewares (group ones first) in declaration order, then the handler.
"""

from collections.abc import Iterable

from wren.middleware.protocol import Handler, Middleware


def compose(middlewares: Iterable[Middleware], handler: Handler) -> Handler:
    """Return ``mw1(mw2(...mwN(handler)))`` for ``middlewares = [mw1, ..., mwN]``."""
    result = handler
    for mw in reversed(tuple(middlewares)):
        result = mw(result)
    return result


class MiddlewareRegistry:
    """Ordered list of global middlewares.

    Usage::

        registry = MiddlewareRegistry()
        registry.use(request_logger)
        registry.use(bearer_token("s3cr3t"))
        wrapped = registry.apply(handler)  # request_logger is outermost
    """

    __slots__ = ("_middlewares",)

    def __init__(self) -> None:
        self._middlewares: list[Middleware] = []

    def use(self, middleware: Middleware) -> None:
        """Append a middleware; it nests inside every earlier one."""
        self._middlewares.append(middleware)

    def apply(self, handler: Handler) -> Handler:
        """Wrap *handler* in every registered middleware."""
        return compose(self._middlewares, handler)

    @property
    def middlewares(self) -> tuple[Middleware, ...]:
        """Snapshot in registration order."""
        return tuple(self._middlewares)

    def __len__(self) -> int:
        return len(self._middlewares)
