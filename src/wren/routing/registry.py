"""Route registry — the ordered route table.

Lookup is a linear scan in registration order and the first route whose
method and path both match wins. Registration order is significant: it
decides which of two overlapping routes a request reaches, and it is the
order routes appear in the generated document.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING, Any

from wren.errors import ClientInputError
from wren.routing.params import compile_template
from wren.routing.route import Route, RouteMatch, RouteOptions

if TYPE_CHECKING:
    from wren.middleware.protocol import Middleware

logger = logging.getLogger("wren.routing")


class RouteRegistry:
    """Ordered collection of routes.

    Usage::

        registry = RouteRegistry()
        registry.register("GET", "/users/{id}", get_user)
        match = registry.match("GET", "/users/42")
        match.path_params  # {"id": "42"}
    """

    __slots__ = ("_keys", "_routes")

    def __init__(self) -> None:
        self._routes: list[Route] = []
        self._keys: set[tuple[str, str]] = set()

    def register(
        self,
        method: str,
        path: str,
        handler: Callable[..., Any] | None,
        options: RouteOptions | None = None,
        *,
        middlewares: tuple[Middleware, ...] | None = None,
    ) -> Route:
        """Append a route and return it.

        *middlewares* overrides the chain taken from ``options.middlewares``
        (groups use it to put their own middlewares in front).

        Raises ``ClientInputError`` when *path* is empty or *handler* is
        missing. Duplicate ``(method, path)`` pairs are accepted; the later
        one is unreachable and a warning is logged.
        """
        if not path:
            raise ClientInputError("path is required")
        if handler is None or not callable(handler):
            raise ClientInputError("handler is required")

        opts = options or RouteOptions()
        route = Route(
            method=method.upper(),
            path=path,
            handler=handler,
            options=opts,
            middlewares=opts.middlewares if middlewares is None else middlewares,
            pattern=compile_template(path),
        )

        if route.key in self._keys:
            logger.warning(
                "Duplicate route %s %s: the first registration keeps handling requests",
                route.method,
                route.path,
            )
        self._keys.add(route.key)
        self._routes.append(route)
        return route

    def match(self, method: str, path: str) -> RouteMatch | None:
        """Return the first route matching *method* and *path*, with its params."""
        for route in self._routes:
            if route.method != method:
                continue
            params = route.match_path(path)
            if params is not None:
                return RouteMatch(route=route, path_params=params)
        return None

    def find(self, method: str, path: str) -> Route | None:
        """Return the first route matching *method* and *path*, or ``None``."""
        match = self.match(method, path)
        return match.route if match is not None else None

    @property
    def routes(self) -> tuple[Route, ...]:
        """Snapshot of all routes in registration order."""
        return tuple(self._routes)

    def __iter__(self) -> Iterator[Route]:
        return iter(tuple(self._routes))

    def __len__(self) -> int:
        return len(self._routes)
