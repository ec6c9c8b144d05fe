"""Route, RouteOptions, and RouteMatch frozen dataclasses."""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, fields
from typing import TYPE_CHECKING, Any

from wren.descriptors import TypeDescriptor

if TYPE_CHECKING:
    from wren.middleware.protocol import Middleware


@dataclass(frozen=True, slots=True)
class ParamSpec:
    """Declared type and bounds of one path or query parameter.

    ``type`` uses document vocabulary: ``"string"``, ``"integer"``,
    ``"number"``, or ``"boolean"``.
    """

    type: str = "string"
    required: bool = True
    minimum: int | None = None
    maximum: int | None = None


@dataclass(frozen=True, slots=True)
class RouteOptions:
    """Metadata attached to a route at registration.

    Built by merging the partial options passed to ``app.get(...)`` and
    friends; see ``merge_options``.
    """

    body: TypeDescriptor | None = None
    response: TypeDescriptor | None = None
    response_status: int | None = None
    summary: str = ""
    tags: tuple[str, ...] = ()
    params: Mapping[str, ParamSpec] = field(default_factory=dict)
    middlewares: tuple[Middleware, ...] = ()


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, (str, tuple, list, Mapping)):
        return len(value) == 0
    return False


def merge_options(*options: RouteOptions) -> RouteOptions:
    """Merge partial options left to right.

    Each field is decided on its own: the last non-empty value wins, and
    an empty value (``None``, ``""``, ``()``, ``{}``) never overwrites one
    set earlier. Middlewares are replaced, not concatenated::

        merge_options(summary("A"), tags("x"), summary("B"))
        # RouteOptions(summary="B", tags=("x",))
    """
    merged: dict[str, Any] = {}
    for opt in options:
        for f in fields(RouteOptions):
            value = getattr(opt, f.name)
            if not _is_empty(value):
                merged[f.name] = value
    return RouteOptions(**merged)


@dataclass(frozen=True, slots=True)
class Route:
    """A registered route. Immutable once created.

    ``middlewares`` is the full route-level chain (group middlewares
    first, then the route's own), already in outer-to-inner order.
    ``pattern`` is ``None`` for static paths, which match by equality.
    """

    method: str
    path: str
    handler: Callable[..., Any]
    options: RouteOptions = field(default_factory=RouteOptions)
    middlewares: tuple[Middleware, ...] = ()
    pattern: re.Pattern[str] | None = None

    @property
    def key(self) -> tuple[str, str]:
        """Route identity: ``(method, path)``."""
        return (self.method, self.path)

    def match_path(self, path: str) -> dict[str, str] | None:
        """Return captured parameters if *path* matches, else ``None``."""
        if self.pattern is None:
            return {} if path == self.path else None
        m = self.pattern.fullmatch(path)
        if m is None:
            return None
        return m.groupdict()


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route lookup."""

    route: Route
    path_params: dict[str, str]
