"""OpenAPI-style document generation from registered routes.

Reads each route's ``body``/``response`` type descriptors and emits one
path item per route, keyed ``"<method> <path>"``::

    {
        "openapi": "3.0.0",
        "info": {"title": "Users API", "version": "1.0.0"},
        "paths": {
            "post /users": {
                "summary": "Create user",
                "tags": ["users"],
                "requestBody": {...},
                "responses": {"201": {...}},
            },
        },
    }

This is a best-effort static mapping. Nested records, and sequences that
appear as record fields, fall back to ``{"type": "string"}``; enums and
unions are not modeled.
"""

import logging
from collections.abc import Iterable
from typing import Any

from wren.descriptors import PRIMITIVE_KINDS, TypeDescriptor
from wren.routing.route import ParamSpec, Route

logger = logging.getLogger("wren.openapi")

OPENAPI_VERSION = "3.0.0"
JSON_MEDIA_TYPE = "application/json"


class OpenAPIGenerator:
    """Builds the document for a fixed list of routes.

    Usage::

        generator = OpenAPIGenerator(registry.routes)
        document = generator.generate("Users API", "1.0.0")
    """

    __slots__ = ("_routes",)

    def __init__(self, routes: Iterable[Route]) -> None:
        self._routes = tuple(routes)

    def generate(self, title: str, version: str) -> dict[str, Any]:
        """Create the document.

        Routes keep registration order. When two routes share a
        ``(method, path)``, the first one is documented, matching the one
        the dispatcher actually reaches.
        """
        paths: dict[str, Any] = {}
        for route in self._routes:
            key = path_key(route)
            if key in paths:
                logger.debug("Skipping duplicate route %s in document", key)
                continue
            paths[key] = path_item(route)

        return {
            "openapi": OPENAPI_VERSION,
            "info": {"title": title, "version": version},
            "paths": paths,
        }


def generate(routes: Iterable[Route], title: str, version: str) -> dict[str, Any]:
    """Shortcut for ``OpenAPIGenerator(routes).generate(title, version)``."""
    return OpenAPIGenerator(routes).generate(title, version)


def path_key(route: Route) -> str:
    """Document key for *route*: lower-cased method, a space, the path."""
    return f"{route.method.lower()} {route.path}"


def path_item(route: Route) -> dict[str, Any]:
    """The document entry for one route."""
    opts = route.options
    item: dict[str, Any] = {
        "summary": opts.summary,
        "tags": list(opts.tags),
    }

    if opts.params:
        item["parameters"] = [
            _parameter(name, spec, route) for name, spec in opts.params.items()
        ]

    if opts.body is not None:
        item["requestBody"] = {
            "required": True,
            "content": {JSON_MEDIA_TYPE: {"schema": schema_for(opts.body)}},
        }

    if opts.response is not None:
        status = str(opts.response_status or 200)
        item["responses"] = {
            status: {
                "description": "Success",
                "content": {JSON_MEDIA_TYPE: {"schema": schema_for(opts.response)}},
            },
        }

    return item


def _parameter(name: str, spec: ParamSpec, route: Route) -> dict[str, Any]:
    in_path = route.pattern is not None and name in route.pattern.groupindex
    schema: dict[str, Any] = {"type": spec.type}
    if spec.minimum is not None:
        schema["minimum"] = spec.minimum
    if spec.maximum is not None:
        schema["maximum"] = spec.maximum
    return {
        "name": name,
        "in": "path" if in_path else "query",
        # Path parameters are always required in OpenAPI
        "required": True if in_path else spec.required,
        "schema": schema,
    }


def schema_for(descriptor: TypeDescriptor) -> dict[str, Any]:
    """Infer a JSON schema fragment from a type descriptor.

    - record → ``{"type": "object", "properties": ..., "required": [...]}``
      (``required`` only when some field's validate tag says so)
    - sequence → ``{"type": "array", "items": <element schema>}``
    - anything else → ``{"type": <primitive>}``
    """
    if descriptor.kind == "object":
        properties: dict[str, Any] = {}
        required: list[str] = []
        for fd in descriptor.fields:
            properties[fd.name] = {"type": _primitive(fd.kind)}
            if fd.required:
                required.append(fd.name)
        schema: dict[str, Any] = {"type": "object", "properties": properties}
        if required:
            schema["required"] = required
        return schema

    if descriptor.kind == "array" and descriptor.items is not None:
        return {"type": "array", "items": schema_for(descriptor.items)}

    return {"type": _primitive(descriptor.kind)}


def _primitive(kind: str) -> str:
    """Map a descriptor kind to a document type; unknown kinds read as string."""
    return kind if kind in PRIMITIVE_KINDS else "string"
