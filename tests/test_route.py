"""Tests for wren.routing.route — RouteOptions merging and Route matching."""

from dataclasses import dataclass

from wren.descriptors import describe
from wren.options import body, middleware, response, summary, tags
from wren.routing.params import compile_template
from wren.routing.route import ParamSpec, Route, RouteOptions, merge_options


@dataclass
class User:
    name: str = ""


def _handler(ctx) -> None:
    return None


def _mw(next):
    return next


class TestMergeOptions:
    def test_empty(self) -> None:
        assert merge_options() == RouteOptions()

    def test_last_non_empty_summary_wins(self) -> None:
        merged = merge_options(summary("A"), tags("x"), summary("B"))
        assert merged.summary == "B"
        assert merged.tags == ("x",)

    def test_empty_never_overwrites(self) -> None:
        merged = merge_options(summary("A"), RouteOptions(summary=""), tags())
        assert merged.summary == "A"

    def test_fields_merge_independently(self) -> None:
        merged = merge_options(body(User), response(User, status=201), summary("Create"))
        assert merged.body == describe(User)
        assert merged.response == describe(User)
        assert merged.response_status == 201
        assert merged.summary == "Create"

    def test_later_tags_replace_earlier(self) -> None:
        merged = merge_options(tags("a", "b"), tags("c"))
        assert merged.tags == ("c",)

    def test_middlewares_replaced_not_concatenated(self) -> None:
        def other(next):
            return next

        merged = merge_options(middleware(_mw), middleware(other))
        assert merged.middlewares == (other,)

    def test_params_kept(self) -> None:
        merged = merge_options(RouteOptions(params={"id": ParamSpec("integer")}), summary("x"))
        assert merged.params == {"id": ParamSpec("integer")}


class TestRoute:
    def test_key(self) -> None:
        route = Route(method="GET", path="/users", handler=_handler)
        assert route.key == ("GET", "/users")

    def test_static_matches_by_equality(self) -> None:
        route = Route(method="GET", path="/users", handler=_handler)
        assert route.match_path("/users") == {}
        assert route.match_path("/users/") is None
        assert route.match_path("/Users") is None

    def test_template_captures(self) -> None:
        route = Route(
            method="GET",
            path="/users/{id}",
            handler=_handler,
            pattern=compile_template("/users/{id}"),
        )
        assert route.match_path("/users/7") == {"id": "7"}
        assert route.match_path("/users") is None

    def test_default_options(self) -> None:
        route = Route(method="GET", path="/", handler=_handler)
        assert route.options == RouteOptions()
        assert route.middlewares == ()
