"""Tests for wren.validation — rules, tag parsing, and structural validation."""

from dataclasses import dataclass, field as dc_field

import pytest

from wren.descriptors import describe, field
from wren.validation import (
    ValidationResult,
    email,
    exact_len,
    max_size,
    min_size,
    one_of,
    parse_rules,
    required,
    url,
    validate_value,
)


@dataclass
class Address:
    zip: str = field(validate="required,len=5")


@dataclass
class Item:
    sku: str = field(validate="required")
    qty: int = field(validate="min=1", default=1)


@dataclass
class Order:
    email: str = field(validate="required,email")
    role: str = field(validate="oneof=admin editor viewer", default="viewer")
    address: Address | None = None
    items: list[Item] = dc_field(default_factory=list)
    website: str = field(validate="omitempty,url", default="")


class TestRequired:
    @pytest.mark.parametrize("value", [None, "", "   ", 0, 0.0, False, [], {}])
    def test_missing(self, value: object) -> None:
        assert required(value) == "This field is required"

    @pytest.mark.parametrize("value", ["x", 1, -1, 0.5, True, [0], {"a": 1}])
    def test_present(self, value: object) -> None:
        assert required(value) is None


class TestSizeRules:
    def test_min_string(self) -> None:
        assert min_size(2)("a") == "Must be at least 2 characters"
        assert min_size(2)("ab") is None

    def test_max_list(self) -> None:
        assert max_size(1)([1, 2]) == "Must be at most 1 items"

    def test_min_number(self) -> None:
        assert min_size(18)(17) == "Must be at least 18"
        assert min_size(18)(18) is None

    def test_exact_len(self) -> None:
        assert exact_len(3)("ab") == "Must be exactly 3 characters"
        assert exact_len(3)("abc") is None

    def test_bool_not_measured(self) -> None:
        assert min_size(5)(True) is None


class TestFormatRules:
    def test_email(self) -> None:
        assert email("a@b.co") is None
        assert email("nope") == "Must be a valid email address"
        assert email("") is None

    def test_url(self) -> None:
        assert url("https://example.com/x") is None
        assert url("example") == "Must be a valid URL"

    def test_one_of(self) -> None:
        rule = one_of("a", "b")
        assert rule("a") is None
        assert rule("c") == "Must be one of: a, b"
        assert rule("") is None


class TestParseRules:
    def test_empty(self) -> None:
        assert parse_rules("") == []

    def test_builds_rules(self) -> None:
        rules = parse_rules("required, min=2,max=5")
        assert rules[0] is required
        assert len(rules) == 3
        assert rules[1]("a") == "Must be at least 2 characters"
        assert rules[2]("abcdef") == "Must be at most 5 characters"

    def test_omitempty_is_a_flag(self) -> None:
        assert parse_rules("omitempty,email") == [email]

    def test_unknown_rule(self) -> None:
        with pytest.raises(ValueError, match="Unknown validation rule 'bogus'"):
            parse_rules("required,bogus")

    def test_bad_number(self) -> None:
        with pytest.raises(ValueError, match="needs a number"):
            parse_rules("min=abc")


class TestValidationResult:
    def test_valid(self) -> None:
        result = ValidationResult()
        assert result
        assert result.is_valid
        assert result.message == ""

    def test_invalid_message(self) -> None:
        result = ValidationResult(
            errors={"name": ["This field is required"], "age": ["Must be at least 18"]}
        )
        assert not result
        assert result.message == "name: This field is required; age: Must be at least 18"


class TestValidateValue:
    def test_valid(self) -> None:
        order = Order(email="a@b.co", items=[Item(sku="X1")])
        assert validate_value(order, describe(Order))

    def test_required_stops_other_rules(self) -> None:
        result = validate_value(Order(email=""), describe(Order))
        assert result.errors == {"email": ["This field is required"]}

    def test_collects_multiple_fields(self) -> None:
        result = validate_value(Order(email="bad", role="owner"), describe(Order))
        assert result.errors == {
            "email": ["Must be a valid email address"],
            "role": ["Must be one of: admin, editor, viewer"],
        }

    def test_nested_dotted_names(self) -> None:
        order = Order(email="a@b.co", address=Address(zip="123"))
        result = validate_value(order, describe(Order))
        assert result.errors == {"address.zip": ["Must be exactly 5 characters"]}

    def test_list_items_indexed(self) -> None:
        order = Order(email="a@b.co", items=[Item(sku="A"), Item(sku="", qty=0)])
        result = validate_value(order, describe(Order))
        assert result.errors == {
            "items[1].sku": ["This field is required"],
            "items[1].qty": ["Must be at least 1"],
        }

    def test_omitempty_skips_empty(self) -> None:
        order = Order(email="a@b.co", website="")
        assert validate_value(order, describe(Order))

    def test_omitempty_checks_present(self) -> None:
        order = Order(email="a@b.co", website="not a url")
        result = validate_value(order, describe(Order))
        assert result.errors == {"website": ["Must be a valid URL"]}

    def test_none_nested_is_skipped(self) -> None:
        assert validate_value(Order(email="a@b.co", address=None), describe(Order))
