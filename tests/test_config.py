"""Tests for wren.config — AppConfig defaults and immutability."""

import dataclasses

import pytest

from wren.config import AppConfig


class TestAppConfig:
    def test_defaults(self) -> None:
        config = AppConfig()
        assert config.title == "Wren API"
        assert config.version == "1.0.0"
        assert config.swagger is False
        assert config.swagger_path == "/swagger.json"
        assert config.host == "127.0.0.1"
        assert config.port == 3000
        assert config.request_timeout is None
        assert config.max_content_length == 16 * 1024 * 1024

    def test_override(self) -> None:
        config = AppConfig(title="Users API", swagger=True, port=8080)
        assert config.title == "Users API"
        assert config.swagger is True
        assert config.port == 8080

    def test_frozen(self) -> None:
        config = AppConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.port = 9000  # type: ignore[misc]

    def test_replace(self) -> None:
        config = dataclasses.replace(AppConfig(), debug=True)
        assert config.debug is True
