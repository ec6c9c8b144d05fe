"""Built-in validation rules and the tag parser that selects them.

Each rule is a callable with the signature::

    def rule(value: Any) -> str | None:
        '''Return error message, or None if valid.'''

Parameterized rules are factory functions that return a rule. A field's
``validate`` tag names them, comma separated::

    field(validate="required,min=2,max=50")
    field(validate="oneof=admin editor viewer")
"""

import re
from collections.abc import Callable, Sized
from typing import Any, TypeAlias

# Type alias for a rule function
Rule: TypeAlias = Callable[[Any], str | None]


# ---------------------------------------------------------------------------
# Presence
# ---------------------------------------------------------------------------


def required(value: Any) -> str | None:
    """Value must be present and not the zero value of its type."""
    if value is None or value is False:
        return "This field is required"
    if isinstance(value, str) and not value.strip():
        return "This field is required"
    if isinstance(value, (int, float)) and value == 0:
        return "This field is required"
    if isinstance(value, Sized) and len(value) == 0:
        return "This field is required"
    return None


# ---------------------------------------------------------------------------
# Size
# ---------------------------------------------------------------------------


def _measure(value: Any) -> float | None:
    """Length for strings and sequences, the value itself for numbers."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, Sized):
        return len(value)
    return None


def _unit(value: Any) -> str:
    if isinstance(value, str):
        return " characters"
    if isinstance(value, (int, float)):
        return ""
    return " items"


def min_size(n: float) -> Rule:
    """Length (or numeric value) must be at least *n*."""

    def check(value: Any) -> str | None:
        size = _measure(value)
        if size is not None and size < n:
            return f"Must be at least {_fmt(n)}{_unit(value)}"
        return None

    return check


def max_size(n: float) -> Rule:
    """Length (or numeric value) must be at most *n*."""

    def check(value: Any) -> str | None:
        size = _measure(value)
        if size is not None and size > n:
            return f"Must be at most {_fmt(n)}{_unit(value)}"
        return None

    return check


def exact_len(n: int) -> Rule:
    """Length must be exactly *n*."""

    def check(value: Any) -> str | None:
        if isinstance(value, Sized) and len(value) != n:
            return f"Must be exactly {n}{_unit(value)}"
        return None

    return check


# ---------------------------------------------------------------------------
# Format
# ---------------------------------------------------------------------------

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_URL_RE = re.compile(r"^https?://[^\s/$.?#].[^\s]*$", re.IGNORECASE)


def email(value: Any) -> str | None:
    """Must look like an email address (basic check)."""
    if value and not _EMAIL_RE.match(str(value)):
        return "Must be a valid email address"
    return None


def url(value: Any) -> str | None:
    """Must look like an HTTP(S) URL."""
    if value and not _URL_RE.match(str(value)):
        return "Must be a valid URL"
    return None


def one_of(*choices: str) -> Rule:
    """Value must be one of the given choices."""
    allowed = frozenset(choices)

    def check(value: Any) -> str | None:
        if value in (None, ""):
            return None
        if str(value) not in allowed:
            return f"Must be one of: {', '.join(choices)}"
        return None

    return check


# ---------------------------------------------------------------------------
# Tag parsing
# ---------------------------------------------------------------------------


def _fmt(n: float) -> str:
    return str(int(n)) if float(n).is_integer() else str(n)


def _number(raw: str, rule: str) -> float:
    try:
        return float(raw)
    except ValueError:
        msg = f"Validation rule {rule!r} needs a number, got {raw!r}"
        raise ValueError(msg) from None


def parse_rules(tag: str) -> list[Rule]:
    """Translate a ``validate`` tag into rule functions.

    Unknown rule names raise ``ValueError``. ``describe()`` compiles every
    field's tag, so a typo fails when the route is declared.
    """
    rules: list[Rule] = []
    for part in tag.split(","):
        part = part.strip()
        if not part:
            continue
        name, _, arg = part.partition("=")
        if name == "required":
            rules.append(required)
        elif name == "min":
            rules.append(min_size(_number(arg, part)))
        elif name == "max":
            rules.append(max_size(_number(arg, part)))
        elif name == "len":
            rules.append(exact_len(int(_number(arg, part))))
        elif name == "email":
            rules.append(email)
        elif name == "url":
            rules.append(url)
        elif name == "oneof":
            rules.append(one_of(*arg.split()))
        elif name == "omitempty":
            continue
        else:
            msg = f"Unknown validation rule {name!r} in tag {tag!r}"
            raise ValueError(msg)
    return rules
