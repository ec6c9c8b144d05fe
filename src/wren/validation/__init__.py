"""Structural validation of decoded payloads.

Walks a value alongside its ``TypeDescriptor`` and applies each field's
``validate`` tag. The binder calls this after decoding; failures become
a 422 response.

Usage::

    from wren.descriptors import describe
    from wren.validation import validate_value

    result = validate_value(user, describe(CreateUser))
    if not result:
        # result.errors == {"name": ["This field is required"]}
        ...
"""

import functools
from typing import Any

from wren.descriptors import TypeDescriptor
from wren.validation.result import ValidationResult
from wren.validation.rules import (
    Rule,
    email,
    exact_len,
    max_size,
    min_size,
    one_of,
    parse_rules,
    required,
    url,
)

__all__ = [
    "Rule",
    "ValidationResult",
    "compile_rules",
    "email",
    "exact_len",
    "max_size",
    "min_size",
    "one_of",
    "parse_rules",
    "required",
    "url",
    "validate_value",
]


@functools.cache
def compile_rules(tag: str) -> tuple[Rule, ...]:
    """Parsed rules for *tag*, cached per distinct tag string."""
    return tuple(parse_rules(tag))


def validate_value(value: Any, descriptor: TypeDescriptor) -> ValidationResult:
    """Validate *value* against the field tags of *descriptor*.

    Nested records report dotted names (``address.zip``); list items
    report indexed names (``items[2].sku``).
    """
    errors: dict[str, list[str]] = {}
    _walk(value, descriptor, "", errors)
    return ValidationResult(errors=errors)


def _walk(
    value: Any,
    descriptor: TypeDescriptor,
    prefix: str,
    errors: dict[str, list[str]],
) -> None:
    if value is None:
        return

    if descriptor.kind == "array" and descriptor.items is not None:
        for i, item in enumerate(value):
            _walk(item, descriptor.items, f"{prefix}[{i}]", errors)
        return

    if descriptor.kind != "object":
        return

    for fd in descriptor.fields:
        name = f"{prefix}.{fd.name}" if prefix else fd.name
        field_value = getattr(value, fd.attr, None)

        if "omitempty" in fd.rules and required(field_value) is not None:
            continue

        field_errors: list[str] = []
        for rule in compile_rules(fd.rules):
            error = rule(field_value)
            if error is not None:
                field_errors.append(error)
                # No point checking length of a missing value
                if rule is required:
                    break
        if field_errors:
            errors[name] = field_errors
            continue

        _walk(field_value, fd.type, name, errors)
