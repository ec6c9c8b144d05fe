"""JSON request binding.

``JSONBinder`` is what ``ctx.bind_json(T)`` delegates to: read the body,
decode it into ``T``, validate it. Each stage fails with its own status:

- body unreadable (client gone, or over ``max_content_length``) → 400
- body not JSON (including nesting too deep to parse), or JSON of the
  wrong shape → 400 ``invalid JSON``
- decoded value breaks its ``validate`` tags → 422
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from wren.descriptors import DecodeError, TypeDescriptor, decode, describe
from wren.errors import ClientInputError, ValidationFailed
from wren.http.request import BodyTooLarge, ClientDisconnect
from wren.validation import validate_value

if TYPE_CHECKING:
    from wren.context import Context


class JSONBinder:
    """Decode-then-validate binder for JSON bodies."""

    __slots__ = ("max_content_length",)

    def __init__(self, max_content_length: int | None = None) -> None:
        self.max_content_length = max_content_length

    async def bind_json(self, ctx: Context, target: Any) -> Any:
        descriptor = target if isinstance(target, TypeDescriptor) else describe(target)

        raw = await self._read(ctx)
        data = None
        if raw.strip():
            try:
                data = json.loads(raw)
            except (json.JSONDecodeError, UnicodeDecodeError, RecursionError) as exc:
                raise ClientInputError("invalid JSON", reason=str(exc)) from exc

        if data is None and descriptor.kind == "object":
            # Nothing to decode (empty body or null): fields take their
            # defaults or zero values and validation decides
            data = {}
        try:
            value = decode(descriptor, data)
        except (DecodeError, RecursionError) as exc:
            raise ClientInputError("invalid JSON", reason=str(exc)) from exc

        result = validate_value(value, descriptor)
        if not result:
            raise ValidationFailed(result.message, fields=result.errors)
        return value

    async def _read(self, ctx: Context) -> bytes:
        if ctx.request is None:
            raise ClientInputError("failed to read request body")
        try:
            return await ctx.request.body(limit=self.max_content_length)
        except (BodyTooLarge, ClientDisconnect) as exc:
            raise ClientInputError("failed to read request body") from exc
