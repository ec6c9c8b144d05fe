"""Middleware — Protocol-based, no inheritance required.

A middleware is any callable matching:
    def mw(next: Handler) -> Handler

Built-in middleware:
    api_key -- X-API-Key header check
    bearer_token -- Authorization: Bearer check
    cors -- CORS headers and preflight short-circuit
    rate_limit -- Sliding-window limit per client (see RateLimiter)
"""

from wren.middleware.auth import api_key, bearer_token
from wren.middleware.builtin import CORSConfig, cors
from wren.middleware.protocol import Handler, Middleware
from wren.middleware.rate_limit import RateLimiter, client_key, rate_limit
from wren.middleware.registry import MiddlewareRegistry, compose

__all__ = [
    "CORSConfig",
    "Handler",
    "Middleware",
    "MiddlewareRegistry",
    "RateLimiter",
    "api_key",
    "bearer_token",
    "client_key",
    "compose",
    "cors",
    "rate_limit",
]
