"""Type descriptors — closed, introspectable views of payload types.

A route's ``body`` and ``response`` types are plain dataclasses (or
``list[...]`` of them, or primitives). ``describe()`` turns one into a
``TypeDescriptor`` once, at registration time, so the binder and the
schema generator read the same field list instead of re-inspecting
types per request.

Field metadata is declared with ``wren.field``::

    @dataclass
    class CreateUser:
        name: str = field(validate="required,min=2")
        email: str = field(json="email_address", validate="required,email")
        note: str = field(json="-", default="")   # never on the wire

Fields without ``wren.field`` use their attribute name on the wire and
carry no validation rules.
"""

import dataclasses
import functools
import types
import typing
from dataclasses import dataclass
from typing import Any, Union, get_args, get_origin

from wren.errors import ConfigurationError

JSON_KEY = "json"
VALIDATE_KEY = "validate"
SKIP = "-"

# Python type → primitive kind
_KIND_MAP: dict[type, str] = {
    str: "string",
    int: "integer",
    float: "number",
    bool: "boolean",
}

_BUILTIN_NAMES: dict[str, type] = {t.__name__: t for t in _KIND_MAP}

_ZERO: dict[str, Any] = {
    "string": "",
    "integer": 0,
    "number": 0.0,
    "boolean": False,
}

_SEQUENCE_ORIGINS = (list, tuple, set, frozenset)

PRIMITIVE_KINDS = frozenset(_KIND_MAP.values())


class DecodeError(ValueError):
    """Parsed JSON does not fit the declared type."""


def primitive_kind(tp: Any) -> str:
    """Primitive kind of a Python type; anything unknown reads as ``"string"``."""
    return _KIND_MAP.get(tp, "string")


def field(
    *,
    json: str | None = None,
    validate: str = "",
    default: Any = dataclasses.MISSING,
    default_factory: Any = dataclasses.MISSING,
) -> Any:
    """Declare a dataclass field with a wire name and validation rules.

    ``json="-"`` keeps the field off the wire entirely.
    """
    metadata = {JSON_KEY: json, VALIDATE_KEY: validate}
    if default_factory is not dataclasses.MISSING:
        return dataclasses.field(default_factory=default_factory, metadata=metadata)
    return dataclasses.field(default=default, metadata=metadata)


@dataclass(frozen=True, slots=True)
class FieldDescriptor:
    """One addressable field of an object type."""

    attr: str
    name: str
    kind: str
    required: bool
    rules: str
    type: "TypeDescriptor"
    has_default: bool


@dataclass(frozen=True, slots=True)
class TypeDescriptor:
    """Kind tag plus the structure needed to decode, validate, and document.

    ``kind`` is ``"object"``, ``"array"``, or a primitive kind
    (``"string"``, ``"integer"``, ``"number"``, ``"boolean"``).
    """

    kind: str
    py_type: Any
    fields: tuple[FieldDescriptor, ...] = ()
    items: "TypeDescriptor | None" = None

    @property
    def name(self) -> str:
        return getattr(self.py_type, "__name__", str(self.py_type))


def describe(tp: Any) -> TypeDescriptor:
    """Build (and cache) the descriptor for *tp*.

    Accepts a type or an instance of one; ``CreateUser()`` and
    ``CreateUser`` describe the same thing.
    """
    if not isinstance(tp, type) and dataclasses.is_dataclass(tp):
        tp = type(tp)
    return _describe_cached(tp)


@functools.cache
def _describe_cached(tp: Any) -> TypeDescriptor:
    return _describe(tp, frozenset())


def _describe(tp: Any, seen: frozenset[Any]) -> TypeDescriptor:
    if isinstance(tp, str):
        # Unresolvable string annotation: only builtin names are known.
        tp = _BUILTIN_NAMES.get(tp, tp)

    tp = _unwrap_optional(tp)

    if dataclasses.is_dataclass(tp) and isinstance(tp, type):
        if tp in seen:
            # Self-referencing record: stop at the first repeat.
            return TypeDescriptor(kind="object", py_type=tp)
        return TypeDescriptor(
            kind="object",
            py_type=tp,
            fields=_describe_fields(tp, seen | {tp}),
        )

    origin = get_origin(tp)
    if origin in _SEQUENCE_ORIGINS or tp in _SEQUENCE_ORIGINS:
        args = [a for a in get_args(tp) if a is not Ellipsis]
        item = _describe(args[0], seen) if args else TypeDescriptor("string", str)
        return TypeDescriptor(kind="array", py_type=tp, items=item)

    return TypeDescriptor(kind=primitive_kind(tp), py_type=tp)


def _describe_fields(cls: type, seen: frozenset[Any]) -> tuple[FieldDescriptor, ...]:
    try:
        hints = typing.get_type_hints(cls)
    except NameError:
        hints = {}

    result: list[FieldDescriptor] = []
    for f in dataclasses.fields(cls):
        if f.name.startswith("_"):
            continue
        name = (f.metadata.get(JSON_KEY) or f.name).split(",")[0].strip()
        if not name or name == SKIP:
            continue
        rules = f.metadata.get(VALIDATE_KEY) or ""
        _check_rules(cls, f.name, rules)
        annotation = hints.get(f.name, f.type)
        nested = _describe(annotation, seen)
        result.append(
            FieldDescriptor(
                attr=f.name,
                name=name,
                kind=nested.kind,
                required="required" in rules,
                rules=rules,
                type=nested,
                has_default=(
                    f.default is not dataclasses.MISSING
                    or f.default_factory is not dataclasses.MISSING
                ),
            )
        )
    return tuple(result)


def _check_rules(cls: type, attr: str, rules: str) -> None:
    if not rules:
        return
    # validation imports this module; resolve it at call time
    from wren.validation import compile_rules

    try:
        compile_rules(rules)
    except ValueError as exc:
        msg = f"{cls.__name__}.{attr}: {exc}"
        raise ConfigurationError(msg) from exc


def _unwrap_optional(annotation: Any) -> Any:
    """``X | None`` → ``X``; multi-type unions fall back to ``str``."""
    origin = get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        non_none = [a for a in get_args(annotation) if a is not type(None)]
        if len(non_none) == 1:
            return non_none[0]
        return str
    return annotation


# -- Decoding --


def decode(descriptor: TypeDescriptor, data: Any, *, path: str = "") -> Any:
    """Build a value of the described type from parsed JSON.

    Raises ``DecodeError`` when *data* does not fit. Missing object fields
    take their dataclass default, or the zero value of their kind so the
    validator can report them.
    """
    where = path or descriptor.name
    kind = descriptor.kind

    if data is None:
        # JSON null leaves the zero value, as an absent field would
        return zero_value(descriptor)

    if kind == "object":
        if not isinstance(data, dict):
            raise DecodeError(f"{where}: expected object")
        kwargs: dict[str, Any] = {}
        for fd in descriptor.fields:
            child = f"{path}.{fd.name}" if path else fd.name
            if fd.name in data:
                kwargs[fd.attr] = decode(fd.type, data[fd.name], path=child)
            elif not fd.has_default:
                kwargs[fd.attr] = zero_value(fd.type)
        return _construct(descriptor.py_type, kwargs)

    if kind == "array":
        if not isinstance(data, list):
            raise DecodeError(f"{where}: expected array")
        if descriptor.items is None:
            msg = f"Array descriptor for {descriptor.name} has no item type"
            raise ConfigurationError(msg)
        items = [decode(descriptor.items, item, path=f"{where}[{i}]") for i, item in enumerate(data)]
        origin = get_origin(descriptor.py_type) or descriptor.py_type
        if origin in (tuple, set, frozenset):
            return origin(items)
        return items

    return _decode_primitive(kind, descriptor.py_type, data, where)


def _decode_primitive(kind: str, py_type: Any, data: Any, where: str) -> Any:
    if kind == "boolean":
        if not isinstance(data, bool):
            raise DecodeError(f"{where}: expected boolean")
        return data
    if kind == "integer":
        if isinstance(data, bool) or not isinstance(data, int):
            raise DecodeError(f"{where}: expected integer")
        return data
    if kind == "number":
        if isinstance(data, bool) or not isinstance(data, (int, float)):
            raise DecodeError(f"{where}: expected number")
        return float(data)
    if py_type is str and not isinstance(data, str):
        raise DecodeError(f"{where}: expected string")
    # Anything else (dicts, Any, unknown types) passes through unchanged.
    return data


def _construct(cls: type, kwargs: dict[str, Any]) -> Any:
    # init=False fields cannot be passed to the constructor.
    init_names = {f.name for f in dataclasses.fields(cls) if f.init}
    instance = cls(**{k: v for k, v in kwargs.items() if k in init_names})
    for key, value in kwargs.items():
        if key not in init_names:
            object.__setattr__(instance, key, value)
    return instance


def zero_value(descriptor: TypeDescriptor) -> Any:
    """The value a missing field decodes to."""
    if descriptor.kind == "array":
        return []
    if descriptor.kind == "object":
        return None
    if descriptor.py_type not in _KIND_MAP and descriptor.kind == "string":
        return None
    return _ZERO[descriptor.kind]


# -- Encoding --


def encode(value: Any) -> Any:
    """Turn dataclasses (by wire name), sequences, and dicts into JSON-ready data."""
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        descriptor = describe(type(value))
        return {fd.name: encode(getattr(value, fd.attr)) for fd in descriptor.fields}
    if isinstance(value, dict):
        return {str(k): encode(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [encode(v) for v in value]
    return value
