"""Outbound HTTP response.

The dispatcher turns the finished context (or a translated error) into
one of these; the sender writes it to ASGI. The test client hands the
same type back to tests.
"""

import json as json_module
from dataclasses import dataclass, replace
from typing import Any

JSON_CONTENT_TYPE = "application/json"


@dataclass(frozen=True, slots=True)
class Response:
    """An HTTP response built through immutable transformations."""

    body: bytes = b""
    status: int = 200
    content_type: str | None = None
    headers: tuple[tuple[str, str], ...] = ()

    @classmethod
    def json(cls, data: Any, status: int = 200) -> "Response":
        """A response carrying *data* encoded as JSON."""
        payload = json_module.dumps(data, separators=(",", ":")).encode("utf-8")
        return cls(body=payload, status=status, content_type=JSON_CONTENT_TYPE)

    def with_status(self, status: int) -> "Response":
        """Return a new Response with a different status code."""
        return replace(self, status=status)

    def with_header(self, name: str, value: str) -> "Response":
        """Return a new Response with an additional header."""
        return replace(self, headers=(*self.headers, (name, value)))

    def with_headers(self, headers: dict[str, str]) -> "Response":
        """Return a new Response with additional headers."""
        return replace(self, headers=(*self.headers, *headers.items()))

    def header(self, name: str, default: str | None = None) -> str | None:
        """Case-insensitive lookup of the last header named *name*."""
        name_lower = name.lower()
        found = default
        for key, value in self.headers:
            if key.lower() == name_lower:
                found = value
        return found

    @property
    def text(self) -> str:
        """Body as string."""
        return self.body.decode("utf-8")

    def json_body(self) -> Any:
        """Parse the body as JSON."""
        return json_module.loads(self.body)
