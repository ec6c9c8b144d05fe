"""Application configuration.

AppConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(title="Users API", swagger=True, port=8080)
    """

    # Document
    title: str = "Wren API"
    version: str = "1.0.0"
    swagger: bool = False
    swagger_path: str = "/swagger.json"

    # Server
    host: str = "127.0.0.1"
    port: int = 3000
    debug: bool = False
    workers: int = 1
    log_level: str = "info"

    # Request handling
    request_timeout: float | None = None  # None = handlers may run indefinitely
    max_content_length: int = 16 * 1024 * 1024  # 16 MB
