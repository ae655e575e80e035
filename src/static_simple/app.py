"""Host application.

Mutable during setup (routes, middleware, error handlers, hooks).
Frozen at runtime when ``app.run()`` or ``__call__()`` is first invoked.
Freezing is also when the static middleware is built from the app's
config and installed in front of everything else.
"""

import inspect
import os
import threading
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, TypeAlias

from static_simple._internal.asgi import Receive, Scope, Send
from static_simple.config import AppConfig, StaticConfig
from static_simple.errors import ConfigurationError
from static_simple.http.request import Request
from static_simple.http.response import Response
from static_simple.middleware.protocol import Middleware, Next
from static_simple.middleware.static import StaticSimple
from static_simple.routing import Route, Router
from static_simple.server.handler import build_pipeline, handle_request

Handler: TypeAlias = Callable[..., Any]
ErrorHandler: TypeAlias = Callable[..., Any]


@dataclass(slots=True)
class _PendingRoute:
    """A route waiting to be compiled."""

    path: str
    handler: Handler
    methods: list[str] | None
    name: str | None


class App:
    """An ASGI application fronted by static file serving.

    Usage::

        app = App(AppConfig(root="root"), static={"dirs": ["static"]})

        @app.route("/")
        def index():
            return "Hello"

    Args:
        config: Host configuration. ``config.root`` is the default
            static include path and ``config.debug`` turns on static
            debug logging.
        static: ``True`` (defaults), a ``StaticConfig``, a mapping of
            static options, or ``False`` to serve no static files.

    Thread safety:
        Setup is single-threaded (decorators at import time). The freeze
        transition uses a Lock + double-check so exactly one thread
        compiles the app even if workers call ``__call__()`` concurrently
        on the first request.
    """

    __slots__ = (
        "_error_handlers",
        "_freeze_lock",
        "_frozen",
        "_middleware_list",
        "_pending_routes",
        "_pipeline",
        "_shutdown_hooks",
        "_startup_hooks",
        "_static",
        "_static_option",
        "config",
    )

    def __init__(
        self,
        config: AppConfig | None = None,
        *,
        static: StaticConfig | Mapping[str, Any] | bool = True,
    ) -> None:
        self.config: AppConfig = config or AppConfig()
        self._static_option = static
        self._pending_routes: list[_PendingRoute] = []
        self._middleware_list: list[Middleware] = []
        self._error_handlers: dict[int | type, ErrorHandler] = {}
        self._startup_hooks: list[Callable[..., Any]] = []
        self._shutdown_hooks: list[Callable[..., Any]] = []
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()

        # Compiled state, set during _freeze()
        self._pipeline: Next | None = None
        self._static: StaticSimple | None = None

    # -- Route registration --

    def route(
        self,
        path: str,
        *,
        methods: list[str] | None = None,
        name: str | None = None,
    ) -> Callable[[Handler], Handler]:
        """Register a handler for an exact path."""

        def decorator(func: Handler) -> Handler:
            self._check_not_frozen()
            self._pending_routes.append(_PendingRoute(path, func, methods, name))
            return func

        return decorator

    def error(
        self,
        code_or_exception: int | type[Exception],
    ) -> Callable[[ErrorHandler], ErrorHandler]:
        """Register an error handler via decorator."""

        def decorator(func: ErrorHandler) -> ErrorHandler:
            self._check_not_frozen()
            self._error_handlers[code_or_exception] = func
            return func

        return decorator

    # -- Middleware --

    def add_middleware(self, middleware: Middleware) -> None:
        """Add a middleware to the pipeline (inside the static middleware)."""
        self._check_not_frozen()
        self._middleware_list.append(middleware)

    # -- Lifecycle hooks --

    def on_startup(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register a sync or async callable to run at ASGI lifespan startup."""
        self._check_not_frozen()
        self._startup_hooks.append(func)
        return func

    def on_shutdown(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register a sync or async callable to run at ASGI lifespan shutdown."""
        self._check_not_frozen()
        self._shutdown_hooks.append(func)
        return func

    # -- Static files --

    @property
    def static(self) -> StaticSimple | None:
        """The installed static middleware (``None`` if disabled)."""
        self._ensure_frozen()
        return self._static

    async def serve_static_file(
        self,
        full_path: str | os.PathLike[str],
        request: Request | None = None,
    ) -> Response:
        """Serve one explicit file from a route handler.

        Uses the static ``mime_types`` and ``expires`` settings; a missing
        file gets the fixed 404::

            @app.route("/me/avatar.png")
            async def avatar(request):
                return await app.serve_static_file(avatar_path_for(request), request)
        """
        static = self.static or StaticSimple()
        return await static.serve_static_file(full_path, request)

    # -- Server --

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Freeze the app and start the development server."""
        self._ensure_frozen()

        from static_simple.server.dev import run_dev_server

        run_dev_server(
            self,
            host or self.config.host,
            port or self.config.port,
            reload=self.config.reload,
            reload_include=self.config.reload_include,
            reload_dirs=self.config.reload_dirs,
        )

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        self._ensure_frozen()
        assert self._pipeline is not None

        await handle_request(
            scope,
            receive,
            send,
            pipeline=self._pipeline,
            error_handlers=self._error_handlers,
            debug=self.config.debug,
        )

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Run the ASGI lifespan protocol.

        Freezes the app at startup so configuration errors surface before
        the first request.
        """
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    self._ensure_frozen()
                    await self.startup()
                except Exception as exc:
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                await self.shutdown()
                await send({"type": "lifespan.shutdown.complete"})
                return

    async def startup(self) -> None:
        """Run startup hooks (lifespan startup, or the test client)."""
        for hook in self._startup_hooks:
            result = hook()
            if inspect.isawaitable(result):
                await result

    async def shutdown(self) -> None:
        """Run shutdown hooks (lifespan shutdown, or the test client)."""
        for hook in self._shutdown_hooks:
            result = hook()
            if inspect.isawaitable(result):
                await result

    # -- Internal --

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Compile the app into its frozen runtime state.

        MUST only be called while holding _freeze_lock.
        """
        router = Router()
        for pending in self._pending_routes:
            methods = frozenset(m.upper() for m in (pending.methods or ["GET"]))
            router.add(Route(pending.path, pending.handler, methods, pending.name))
        router.compile()

        self._static = self._build_static()
        middleware: list[Callable[..., Any]] = list(self._middleware_list)
        if self._static is not None:
            middleware.insert(0, self._static)

        self._pipeline = build_pipeline(router, tuple(middleware))
        self._frozen = True

    def _build_static(self) -> StaticSimple | None:
        option = self._static_option
        match option:
            case False:
                return None
            case True:
                config = StaticConfig.from_mapping({}, root=self.config.root, debug=self.config.debug)
            case StaticConfig():
                config = option
            case Mapping():
                config = StaticConfig.from_mapping(
                    option, root=self.config.root, debug=self.config.debug
                )
            case _:
                msg = f"static must be a bool, StaticConfig or mapping, got {option!r}"
                raise ConfigurationError(msg)
        return StaticSimple(config)

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the app after it has started serving requests. "
                "Register routes, middleware, and hooks before calling app.run()."
            )
            raise RuntimeError(msg)
