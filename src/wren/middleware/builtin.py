"""Built-in middleware: CORS.

Adds the CORS response headers to every request it wraps and answers
``OPTIONS`` preflight requests with 204 without calling the handler.
"""

from dataclasses import dataclass

from wren.context import Context
from wren.middleware.protocol import Handler, Middleware


@dataclass(frozen=True, slots=True)
class CORSConfig:
    """CORS middleware configuration.

    Defaults match a permissive API server; override what you need::

        cors(CORSConfig(allow_origin="https://example.com"))
    """

    allow_origin: str = "*"
    allow_methods: tuple[str, ...] = ("GET", "POST", "PUT", "DELETE", "OPTIONS")
    allow_headers: tuple[str, ...] = ("Content-Type", "Authorization", "X-API-Key")
    allow_credentials: bool = True


def cors(config: CORSConfig | str | None = None) -> Middleware:
    """CORS middleware. A plain string is shorthand for ``allow_origin``.

    Usage::

        app.use(cors("*"))
        app.use(cors(CORSConfig(allow_origin="https://example.com")))
    """
    if isinstance(config, str):
        config = CORSConfig(allow_origin=config)
    cfg = config or CORSConfig()
    headers = {
        "Access-Control-Allow-Origin": cfg.allow_origin,
        "Access-Control-Allow-Methods": ", ".join(cfg.allow_methods),
        "Access-Control-Allow-Headers": ", ".join(cfg.allow_headers),
    }
    if cfg.allow_credentials:
        headers["Access-Control-Allow-Credentials"] = "true"

    def middleware(next: Handler) -> Handler:
        async def handler(ctx: Context) -> None:
            for name, value in headers.items():
                ctx.set_header(name, value)

            # Preflight
            if ctx.method == "OPTIONS":
                ctx.status(204)
                return

            await next(ctx)

        return handler

    return middleware
