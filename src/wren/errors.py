"""Wren exception hierarchy.

Shared across the registry, App, dispatcher, binder, and middleware so
every module raises and catches the same types.

Handlers and middleware signal failure by raising. The dispatcher is the
only place exceptions are turned into responses: ``HTTPException`` keeps
its status and message, anything else becomes a generic 500.
"""

from dataclasses import dataclass, field
from typing import Any


class WrenError(Exception):
    """Base for all wren-specific errors."""


class ConfigurationError(WrenError):
    """Raised when the app is set up incorrectly.

    Bad path templates, unknown converters, unknown validation rules, or
    registering routes after the app has started serving.
    """


@dataclass(eq=False)
class HTTPException(WrenError):
    """An error that maps directly to an HTTP status code.

    ``message`` is what the client sees in ``{"error": message}``.
    ``details`` is free-form context for logs and error hooks; it is
    never serialized into the response.

    Not frozen: the interpreter and ``contextlib`` set ``__traceback__``
    and notes on exceptions in flight.
    """

    status: int
    message: str = ""
    details: dict[str, Any] = field(default_factory=dict)
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.message:
            return f"{self.status}: {self.message}"
        return str(self.status)


class ClientInputError(HTTPException):
    """400 — missing route pieces at registration, or an undecodable body."""

    def __init__(self, message: str = "Bad Request", **details: Any) -> None:
        super().__init__(status=400, message=message, details=details)


class ValidationFailed(HTTPException):  # noqa: N818 — reads as a status
    """422 — the payload decoded but broke its declared constraints."""

    def __init__(self, message: str, **details: Any) -> None:
        super().__init__(status=422, message=message, details=details)


class AuthorizationError(HTTPException):
    """401 — missing or invalid credentials."""

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(status=401, message=message)


class Forbidden(HTTPException):  # noqa: N818 — conventional name in web frameworks
    """403 — credentials are valid but not sufficient."""

    def __init__(self, message: str = "Forbidden") -> None:
        super().__init__(status=403, message=message)


class NotFound(HTTPException):  # noqa: N818 — conventional name in web frameworks
    """404 — raised by handlers for missing resources.

    Unmatched routes never raise this; the dispatcher answers them with
    a bare 404 directly.
    """

    def __init__(self, message: str = "Not Found") -> None:
        super().__init__(status=404, message=message)


class RateLimitError(HTTPException):
    """429 — the client exceeded its request budget."""

    def __init__(self, message: str = "Too many requests", retry_after: int | None = None) -> None:
        headers = (("Retry-After", str(retry_after)),) if retry_after else ()
        super().__init__(status=429, message=message, headers=headers)


class RequestTimeout(HTTPException):
    """504 — the handler chain ran past ``AppConfig.request_timeout``."""

    def __init__(self, message: str = "Request timed out") -> None:
        super().__init__(status=504, message=message)
