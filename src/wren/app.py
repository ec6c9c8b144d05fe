"""Wren application class.

Mutable during setup (route registration, middleware, lifecycle hooks).
Frozen at runtime when app.run() or __call__() is first invoked.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Any, TypeAlias

from wren._internal.asgi import Receive, Scope, Send
from wren._internal.invoke import invoke
from wren.config import AppConfig
from wren.errors import ConfigurationError
from wren.middleware.protocol import Middleware
from wren.middleware.registry import MiddlewareRegistry
from wren.openapi import OpenAPIGenerator
from wren.routing.registry import RouteRegistry
from wren.routing.route import Route, RouteOptions, merge_options
from wren.server.binding import JSONBinder
from wren.server.handler import handle_request

logger = logging.getLogger("wren.server")

RouteHandler: TypeAlias = Callable[..., Any]


class _Routes:
    """Route declaration methods shared by ``App`` and ``RouteGroup``.

    Subclasses provide ``_add``, which receives the method, the path as
    written by the caller, the handler and the partial options.
    """

    __slots__ = ()

    def _add(
        self,
        method: str,
        path: str,
        handler: RouteHandler | None,
        options: tuple[RouteOptions, ...],
    ) -> Route:
        raise NotImplementedError

    def add_route(
        self,
        method: str,
        path: str,
        handler: RouteHandler | None,
        *options: RouteOptions,
    ) -> Route:
        """Register *handler* for ``method path`` and return the route."""
        return self._add(method, path, handler, options)

    def route(
        self,
        path: str,
        *options: RouteOptions,
        methods: list[str] | None = None,
    ) -> Callable[[RouteHandler], RouteHandler]:
        """Register a handler for *path* under each of *methods* (default GET).

        Usage::

            @app.route("/users/{id}", summary("Get user"), methods=["GET", "HEAD"])
            async def get_user(ctx: Context) -> None:
                ...
        """

        def decorator(func: RouteHandler) -> RouteHandler:
            for method in methods or ["GET"]:
                self._add(method, path, func, options)
            return func

        return decorator

    def get(self, path: str, *options: RouteOptions) -> Callable[[RouteHandler], RouteHandler]:
        return self.route(path, *options, methods=["GET"])

    def post(self, path: str, *options: RouteOptions) -> Callable[[RouteHandler], RouteHandler]:
        return self.route(path, *options, methods=["POST"])

    def put(self, path: str, *options: RouteOptions) -> Callable[[RouteHandler], RouteHandler]:
        return self.route(path, *options, methods=["PUT"])

    def patch(self, path: str, *options: RouteOptions) -> Callable[[RouteHandler], RouteHandler]:
        return self.route(path, *options, methods=["PATCH"])

    def delete(self, path: str, *options: RouteOptions) -> Callable[[RouteHandler], RouteHandler]:
        return self.route(path, *options, methods=["DELETE"])


class RouteGroup(_Routes):
    """Routes sharing a path prefix and a set of middlewares.

    Usage::

        api = app.group("/api", bearer_token(TOKEN))

        @api.get("/users")
        async def list_users(ctx): ...   # GET /api/users, bearer_token first

    A nested group concatenates prefixes but carries only its own
    middlewares, not the parent's.
    """

    __slots__ = ("_app", "middlewares", "prefix")

    def __init__(self, app: App, prefix: str, middlewares: tuple[Middleware, ...] = ()) -> None:
        self._app = app
        self.prefix = prefix
        self.middlewares = middlewares

    def _add(
        self,
        method: str,
        path: str,
        handler: RouteHandler | None,
        options: tuple[RouteOptions, ...],
    ) -> Route:
        return self._app._register(
            method, self.prefix + path, handler, options, group_middlewares=self.middlewares
        )

    def group(self, prefix: str, *middlewares: Middleware) -> RouteGroup:
        """Create a sub-group under this group's prefix."""
        return RouteGroup(self._app, self.prefix + prefix, middlewares)

    def __repr__(self) -> str:
        return f"<RouteGroup {self.prefix!r} middlewares={len(self.middlewares)}>"


class App(_Routes):
    """The wren application.

    Mutable during setup (routes, middleware, hooks).
    Frozen at runtime when ``app.run()`` or ``__call__()`` is first invoked.

    Thread safety:
        The setup phase is single-threaded (decorators at import time).
        The freeze transition uses a Lock + double-check to ensure exactly
        one thread builds the runtime state, even when several ASGI
        workers call ``__call__()`` concurrently on first request.
    """

    __slots__ = (
        "_binder",
        "_document",
        "_freeze_lock",
        "_frozen",
        "_middleware",
        "_routes",
        "_shutdown_hooks",
        "_startup_hooks",
        "config",
    )

    def __init__(self, config: AppConfig | None = None) -> None:
        self.config: AppConfig = config or AppConfig()
        self._routes = RouteRegistry()
        self._middleware = MiddlewareRegistry()
        self._startup_hooks: list[Callable[..., Any]] = []
        self._shutdown_hooks: list[Callable[..., Any]] = []
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()

        # Runtime state, set during _freeze()
        self._document: dict[str, Any] | None = None
        self._binder: JSONBinder | None = None

    # -- Route registration --

    def _add(
        self,
        method: str,
        path: str,
        handler: RouteHandler | None,
        options: tuple[RouteOptions, ...],
    ) -> Route:
        return self._register(method, path, handler, options)

    def _register(
        self,
        method: str,
        path: str,
        handler: RouteHandler | None,
        options: tuple[RouteOptions, ...],
        *,
        group_middlewares: tuple[Middleware, ...] = (),
    ) -> Route:
        self._check_not_frozen()
        opts = merge_options(*options)
        return self._routes.register(
            method,
            path,
            handler,
            opts,
            middlewares=(*group_middlewares, *opts.middlewares),
        )

    def group(self, prefix: str, *middlewares: Middleware) -> RouteGroup:
        """Create a route group under *prefix* with its own middlewares."""
        self._check_not_frozen()
        return RouteGroup(self, prefix, middlewares)

    # -- Middleware --

    def use(self, middleware: Middleware) -> Middleware:
        """Add a global middleware. Earlier ones wrap later ones.

        Returns the middleware so ``@app.use`` works as a decorator.
        """
        self._check_not_frozen()
        self._middleware.use(middleware)
        return middleware

    # -- Lifecycle hooks --

    def on_startup(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register a startup hook (sync or async).

        Hooks run in registration order during ASGI lifespan startup,
        before the server accepts connections.

        Usage::

            @app.on_startup
            async def setup():
                app_state.pool = await create_pool()
        """
        self._check_not_frozen()
        self._startup_hooks.append(func)
        return func

    def on_shutdown(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register a shutdown hook (sync or async).

        Hooks run in registration order during ASGI lifespan shutdown,
        after the server stops accepting connections.
        """
        self._check_not_frozen()
        self._shutdown_hooks.append(func)
        return func

    # -- Introspection --

    @property
    def route_registry(self) -> RouteRegistry:
        return self._routes

    @property
    def middleware_registry(self) -> MiddlewareRegistry:
        return self._middleware

    def openapi(self) -> dict[str, Any]:
        """Return the generated document, freezing the app first."""
        self._ensure_frozen()
        if self._document is None:
            self._document = self._generate_document()
        return self._document

    # -- Running --

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Start the server.

        Freezes the app (routes, middleware, document) and serves it
        with pounce. Requires the ``server`` extra.

        Args:
            host: Override bind host.
            port: Override bind port.
        """
        self._ensure_frozen()

        from wren.server.runner import run_server

        run_server(
            self,
            host or self.config.host,
            port or self.config.port,
            workers=self.config.workers,
            reload=self.config.debug,
            log_level=self.config.log_level,
        )

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point.

        Handles lifespan scopes directly, then delegates HTTP scopes to
        the request handler pipeline.
        """
        if scope["type"] == "lifespan":
            await self._handle_lifespan(scope, receive, send)
            return

        self._ensure_frozen()

        await handle_request(
            scope,
            receive,
            send,
            registry=self._routes,
            middleware=self._middleware,
            config=self.config,
            document=self._document,
            binder=self._binder,
        )

    async def _handle_lifespan(
        self,
        scope: Scope,
        receive: Receive,
        send: Send,
    ) -> None:
        """Run the ASGI lifespan protocol.

        Freezes the app at startup (before first HTTP request), then
        runs registered startup/shutdown hooks and signals completion
        back to the server.
        """
        self._ensure_frozen()

        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    await self.startup()
                except Exception as exc:
                    logger.exception("Startup hook failed")
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                await self.shutdown()
                await send({"type": "lifespan.shutdown.complete"})
                return

    async def startup(self) -> None:
        """Freeze the app and run the startup hooks in order."""
        self._ensure_frozen()
        for hook in self._startup_hooks:
            await invoke(hook)

    async def shutdown(self) -> None:
        """Run the shutdown hooks in order."""
        for hook in self._shutdown_hooks:
            await invoke(hook)

    # -- Internal --

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking.

        Several ASGI worker threads could call __call__() concurrently on
        first request. This pattern ensures exactly one thread builds the
        runtime state.
        """
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Build the runtime state.

        MUST only be called while holding _freeze_lock.
        """
        self._binder = JSONBinder(self.config.max_content_length)
        if self.config.swagger:
            self._document = self._generate_document()
        self._frozen = True
        logger.debug(
            "App frozen: %d routes, %d global middlewares",
            len(self._routes),
            len(self._middleware),
        )

    def _generate_document(self) -> dict[str, Any]:
        generator = OpenAPIGenerator(self._routes.routes)
        return generator.generate(self.config.title, self.config.version)

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the app after it has started serving requests. "
                "Register routes, middleware, and hooks before calling app.run()."
            )
            raise ConfigurationError(msg)
