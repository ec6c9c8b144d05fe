"""Tests for wren.routing.params — path templates."""

import pytest

from wren.errors import ConfigurationError
from wren.routing.params import compile_template, parse_path


class TestParsePath:
    def test_static(self) -> None:
        segments = parse_path("/users")
        assert len(segments) == 1
        assert segments[0].value == "users"
        assert segments[0].is_param is False

    def test_param(self) -> None:
        segments = parse_path("/users/{id}")
        assert segments[1].is_param is True
        assert segments[1].param_name == "id"
        assert segments[1].param_type == "str"

    def test_typed_param(self) -> None:
        segments = parse_path("/users/{id:int}")
        assert segments[1].param_type == "int"

    def test_root(self) -> None:
        assert parse_path("/") == []

    def test_rejects_flask_style_param(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            parse_path("/share/<slug>")
        assert "<param>" in str(exc_info.value)
        assert "{param}" in str(exc_info.value)

    def test_rejects_unknown_converter(self) -> None:
        with pytest.raises(ConfigurationError, match="Unknown converter"):
            parse_path("/users/{id:uuid}")

    def test_rejects_empty_name(self) -> None:
        with pytest.raises(ConfigurationError, match="Invalid parameter name"):
            parse_path("/users/{}")

    def test_path_converter_must_be_last(self) -> None:
        with pytest.raises(ConfigurationError, match="last segment"):
            parse_path("/files/{rest:path}/meta")


class TestCompileTemplate:
    def test_static_path_has_no_pattern(self) -> None:
        assert compile_template("/users") is None

    def test_captures_named_groups(self) -> None:
        pattern = compile_template("/users/{id}/posts/{post}")
        assert pattern is not None
        match = pattern.fullmatch("/users/42/posts/hello")
        assert match is not None
        assert match.groupdict() == {"id": "42", "post": "hello"}

    def test_str_does_not_cross_slashes(self) -> None:
        pattern = compile_template("/users/{id}")
        assert pattern is not None
        assert pattern.fullmatch("/users/1/2") is None

    def test_int_converter(self) -> None:
        pattern = compile_template("/users/{id:int}")
        assert pattern is not None
        assert pattern.fullmatch("/users/42") is not None
        assert pattern.fullmatch("/users/abc") is None

    def test_path_converter_takes_rest(self) -> None:
        pattern = compile_template("/files/{rest:path}")
        assert pattern is not None
        match = pattern.fullmatch("/files/a/b/c.txt")
        assert match is not None
        assert match.group("rest") == "a/b/c.txt"

    def test_trailing_slash_preserved(self) -> None:
        pattern = compile_template("/users/{id}/")
        assert pattern is not None
        assert pattern.fullmatch("/users/1/") is not None
        assert pattern.fullmatch("/users/1") is None

    def test_literal_segments_escaped(self) -> None:
        pattern = compile_template("/v1.0/{name}")
        assert pattern is not None
        assert pattern.fullmatch("/v1x0/a") is None
        assert pattern.fullmatch("/v1.0/a") is not None
