"""Tests for wren.options — partial RouteOptions helpers."""

from dataclasses import dataclass

import pytest

from wren.descriptors import describe, field
from wren.errors import ConfigurationError
from wren.options import body, middleware, params, response, summary, tags
from wren.routing.route import ParamSpec, RouteOptions


@dataclass
class Payload:
    text: str = ""


def _mw(next):
    return next


class TestHelpers:
    def test_body(self) -> None:
        assert body(Payload) == RouteOptions(body=describe(Payload))

    def test_body_accepts_instance(self) -> None:
        assert body(Payload()).body is describe(Payload)

    def test_response_default_status(self) -> None:
        opts = response(Payload)
        assert opts.response == describe(Payload)
        assert opts.response_status == 200

    def test_response_status(self) -> None:
        assert response(Payload, status=201).response_status == 201

    def test_summary(self) -> None:
        assert summary("Create user") == RouteOptions(summary="Create user")

    def test_tags(self) -> None:
        assert tags("users", "admin").tags == ("users", "admin")

    def test_middleware(self) -> None:
        assert middleware(_mw).middlewares == (_mw,)

    def test_body_with_bad_tag_fails_at_declaration(self) -> None:
        @dataclass
        class Draft:
            title: str = field(validate="requred", default="")

        with pytest.raises(ConfigurationError, match="Draft.title"):
            body(Draft)


class TestParams:
    def test_python_types(self) -> None:
        opts = params({"id": int, "ratio": float, "flag": bool, "slug": str})
        assert opts.params == {
            "id": ParamSpec("integer"),
            "ratio": ParamSpec("number"),
            "flag": ParamSpec("boolean"),
            "slug": ParamSpec("string"),
        }

    def test_type_names(self) -> None:
        assert params({"id": "integer"}).params == {"id": ParamSpec("integer")}

    def test_required_by_default(self) -> None:
        assert params({"id": int}).params["id"].required is True

    def test_param_spec_passthrough(self) -> None:
        spec = ParamSpec("integer", required=False, maximum=100)
        assert params({"limit": spec}).params["limit"] is spec

    def test_unknown_type_name(self) -> None:
        with pytest.raises(ConfigurationError, match="Unknown parameter type"):
            params({"id": "int"})
