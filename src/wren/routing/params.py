"""Path templates and parameter conversion.

A route path is either static (``/users``), matched by plain string
equality, or a template with ``{name}`` / ``{name:converter}`` segments
(``/users/{id:int}``), compiled to an anchored regex. Neither form
normalizes the path: no trailing-slash folding, no case folding.
"""

import re
from dataclasses import dataclass

from wren.errors import ConfigurationError

# Regex for each supported converter
CONVERTERS: dict[str, str] = {
    "str": r"[^/]+",
    "int": r"\d+",
    "float": r"\d+(?:\.\d+)?",
    "path": r".+",
}

_PARAM_RE = re.compile(r"\{([^{}/]*)\}")
_FLASK_STYLE_RE = re.compile(r"<[^<>/]+>")


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a route path.

    Static:  ``users``     (is_param=False)
    Param:   ``{id}``      (is_param=True, param_name="id")
    Typed:   ``{id:int}``  (is_param=True, param_name="id", param_type="int")
    """

    value: str
    is_param: bool = False
    param_name: str | None = None
    param_type: str = "str"


def parse_path(path: str) -> list[PathSegment]:
    """Parse a route path string into segments.

    Raises ``ConfigurationError`` for ``<param>`` placeholders, empty
    parameter names, unknown converters, and ``path`` converters that are
    not the last segment.
    """
    if _FLASK_STYLE_RE.search(path):
        msg = (
            f"Route path {path!r} uses <param> placeholders; "
            "wren expects {param} (for example /users/{id})."
        )
        raise ConfigurationError(msg)

    parts = path.strip("/").split("/") if path.strip("/") else []
    segments: list[PathSegment] = []
    for index, part in enumerate(parts):
        match = _PARAM_RE.fullmatch(part)
        if match is None:
            segments.append(PathSegment(value=part))
            continue
        inner = match.group(1)
        param_name, _, param_type = inner.partition(":")
        param_type = param_type or "str"
        if not param_name.isidentifier():
            msg = f"Invalid parameter name {param_name!r} in route path {path!r}"
            raise ConfigurationError(msg)
        if param_type not in CONVERTERS:
            msg = f"Unknown converter {param_type!r} in route path {path!r}"
            raise ConfigurationError(msg)
        if param_type == "path" and index != len(parts) - 1:
            msg = f"The path converter must be the last segment in {path!r}"
            raise ConfigurationError(msg)
        segments.append(
            PathSegment(value=part, is_param=True, param_name=param_name, param_type=param_type)
        )
    return segments


def compile_template(path: str) -> re.Pattern[str] | None:
    """Compile a templated path to an anchored regex; ``None`` for static paths."""
    segments = parse_path(path)
    if not any(seg.is_param for seg in segments):
        return None

    pattern = "/" + "/".join(
        f"(?P<{seg.param_name}>{CONVERTERS[seg.param_type]})"
        if seg.is_param
        else re.escape(seg.value)
        for seg in segments
    )
    if path.endswith("/") and len(path) > 1:
        pattern += "/"
    return re.compile(pattern)

