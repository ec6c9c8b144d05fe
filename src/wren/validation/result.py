"""Validation result — immutable container for field errors."""

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """The outcome of validating a decoded payload against its field tags.

    The result is falsy when invalid, so you can write::

        result = validate_value(user, describe(CreateUser))
        if not result:
            raise ValidationFailed(result.message)

    ``errors`` maps dotted field names to lists of messages::

        {"name": ["This field is required"],
         "address.zip": ["Must be at most 10 characters"]}
    """

    errors: dict[str, list[str]] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        """True if validation passed with no errors."""
        return not self.errors

    @property
    def message(self) -> str:
        """One line per field, joined — the text a 422 response carries."""
        return "; ".join(
            f"{name}: {error}" for name, errors in self.errors.items() for error in errors
        )

    def __bool__(self) -> bool:
        """Falsy when invalid — enables ``if not result:`` pattern."""
        return self.is_valid
