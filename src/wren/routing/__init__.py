"""Routing — an ordered route table with first-match-wins lookup.

Routes are registered during setup and read-only once the app freezes.
"""

from wren.routing.registry import RouteRegistry
from wren.routing.route import ParamSpec, Route, RouteMatch, RouteOptions, merge_options

__all__ = [
    "ParamSpec",
    "Route",
    "RouteMatch",
    "RouteOptions",
    "RouteRegistry",
    "merge_options",
]
