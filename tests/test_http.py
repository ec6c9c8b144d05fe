"""Tests for wren.http — headers, query params, request body, response."""

import pytest

from wren.http.headers import Headers
from wren.http.query import QueryParams
from wren.http.request import BodyTooLarge, ClientDisconnect, Request
from wren.http.response import Response


class TestHeaders:
    def test_case_insensitive(self) -> None:
        headers = Headers(((b"content-type", b"application/json"),))
        assert headers["Content-Type"] == "application/json"
        assert "CONTENT-TYPE" in headers

    def test_last_value_wins(self) -> None:
        headers = Headers(((b"x-a", b"1"), (b"X-A", b"2")))
        assert headers["x-a"] == "2"
        assert headers.get_list("x-a") == ["1", "2"]
        assert headers.to_dict() == {"x-a": "2"}

    def test_missing(self) -> None:
        headers = Headers()
        assert headers.get("x") is None
        with pytest.raises(KeyError):
            headers["x"]


class TestQueryParams:
    def test_last_value_wins(self) -> None:
        query = QueryParams(b"page=1&page=2&q=wren")
        assert query["page"] == "2"
        assert query.get_list("page") == ["1", "2"]
        assert query.to_dict() == {"page": "2", "q": "wren"}

    def test_blank_values_kept(self) -> None:
        assert QueryParams(b"flag=").to_dict() == {"flag": ""}

    def test_percent_decoding(self) -> None:
        assert QueryParams(b"name=J%C3%BCrgen")["name"] == "Jürgen"


def _request(*messages: dict) -> Request:
    queue = list(messages)

    async def receive() -> dict:
        return queue.pop(0)

    scope = {"type": "http", "method": "POST", "path": "/", "headers": [], "query_string": b""}
    return Request.from_asgi(scope, receive)


class TestRequestBody:
    async def test_reads_once_and_caches(self) -> None:
        request = _request({"type": "http.request", "body": b"abc", "more_body": False})
        assert await request.body() == b"abc"
        assert await request.body() == b"abc"

    async def test_joins_chunks(self) -> None:
        request = _request(
            {"type": "http.request", "body": b"ab", "more_body": True},
            {"type": "http.request", "body": b"cd", "more_body": False},
        )
        assert await request.body() == b"abcd"

    async def test_limit(self) -> None:
        request = _request({"type": "http.request", "body": b"abcdef", "more_body": False})
        with pytest.raises(BodyTooLarge):
            await request.body(limit=3)

    async def test_disconnect(self) -> None:
        request = _request({"type": "http.disconnect"})
        with pytest.raises(ClientDisconnect):
            await request.body()

    def test_from_asgi(self) -> None:
        async def receive() -> dict:
            return {}

        scope = {
            "type": "http",
            "method": "GET",
            "path": "/users",
            "headers": [(b"content-type", b"application/json")],
            "query_string": b"a=1",
            "client": ("10.0.0.1", 5000),
        }
        request = Request.from_asgi(scope, receive)
        assert request.method == "GET"
        assert request.path == "/users"
        assert request.content_type == "application/json"
        assert request.query["a"] == "1"
        assert request.client == ("10.0.0.1", 5000)


class TestResponse:
    def test_json_compact(self) -> None:
        response = Response.json({"a": [1, 2]}, status=201)
        assert response.body == b'{"a":[1,2]}'
        assert response.status == 201
        assert response.content_type == "application/json"
        assert response.json_body() == {"a": [1, 2]}

    def test_immutable_transformations(self) -> None:
        base = Response()
        changed = base.with_status(404).with_header("X-A", "1").with_headers({"X-B": "2"})
        assert base.status == 200
        assert base.headers == ()
        assert changed.status == 404
        assert changed.headers == (("X-A", "1"), ("X-B", "2"))

    def test_header_lookup(self) -> None:
        response = Response(headers=(("X-A", "1"), ("x-a", "2")))
        assert response.header("X-A") == "2"
        assert response.header("missing", "d") == "d"

    def test_text(self) -> None:
        assert Response(body="héllo".encode()).text == "héllo"
