"""Tests for wren.server.sender response emission rules."""

from wren.http.response import Response
from wren.server.sender import send_response


async def _capture(response: Response) -> list[dict]:
    messages: list[dict] = []

    async def send(message: dict) -> None:
        messages.append(message)

    await send_response(response, send)
    return messages


class TestSendResponse:
    async def test_json_response(self) -> None:
        messages = await _capture(Response.json({"id": 1}, status=201))

        assert messages[0]["type"] == "http.response.start"
        assert messages[0]["status"] == 201
        headers = dict(messages[0]["headers"])
        assert headers[b"content-type"] == b"application/json"
        assert headers[b"content-length"] == b"8"

        assert messages[1]["type"] == "http.response.body"
        assert messages[1]["body"] == b'{"id":1}'

    async def test_bare_response_has_no_content_type(self) -> None:
        messages = await _capture(Response(status=404))
        headers = dict(messages[0]["headers"])
        assert b"content-type" not in headers
        assert headers[b"content-length"] == b"0"
        assert messages[1]["body"] == b""

    async def test_header_names_lowercased(self) -> None:
        messages = await _capture(Response().with_header("X-Request-Id", "abc"))
        assert (b"x-request-id", b"abc") in messages[0]["headers"]


class TestSendResponseNoBodyStatuses:
    async def test_204_drops_body_and_sets_zero_content_length(self) -> None:
        # Even if a handler attaches a body, 204 carries none
        messages = await _capture(Response(body=b"unexpected").with_status(204))
        headers = dict(messages[0]["headers"])
        assert headers[b"content-length"] == b"0"
        assert messages[1]["body"] == b""

    async def test_304_drops_body(self) -> None:
        messages = await _capture(Response(body=b"unexpected", status=304))
        assert messages[1]["body"] == b""

    async def test_200_preserves_body(self) -> None:
        messages = await _capture(Response(body=b"ok"))
        headers = dict(messages[0]["headers"])
        assert headers[b"content-length"] == b"2"
        assert messages[1]["body"] == b"ok"
