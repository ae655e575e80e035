"""static_simple: static file serving in front of an ASGI application.

Files under the include path are served directly; everything else is
handed to the application behind it.

Basic usage::

    from static_simple import App, AppConfig

    app = App(AppConfig(root="root"), static={"dirs": ["static", "qr/^images/"]})

    @app.route("/")
    def index():
        return "Hello, World!"

    app.run()

As middleware in a hand-built pipeline::

    from static_simple import StaticConfig, StaticSimple

    static = StaticSimple(StaticConfig(include_path=("/srv/overlay", "/srv/root")))
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "ConfigurationError",
    "DirPatternError",
    "HTTPError",
    "MethodNotAllowed",
    "Middleware",
    "Next",
    "NotFound",
    "Request",
    "Response",
    "RootProviderError",
    "StaticConfig",
    "StaticSimple",
    "StaticSimpleError",
    "serve_static_file",
]

_ERRORS = frozenset(
    {
        "ConfigurationError",
        "DirPatternError",
        "HTTPError",
        "MethodNotAllowed",
        "NotFound",
        "RootProviderError",
        "StaticSimpleError",
    }
)


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import static_simple`` fast while providing a clean top-level API.
    """
    if name == "App":
        from static_simple.app import App

        return App

    if name in ("AppConfig", "StaticConfig"):
        from static_simple import config

        return getattr(config, name)

    if name in ("Request", "Response"):
        from static_simple import http

        return getattr(http, name)

    if name in ("Middleware", "Next", "StaticSimple"):
        from static_simple import middleware

        return getattr(middleware, name)

    if name == "serve_static_file":
        from static_simple.resolution.files import serve_static_file

        return serve_static_file

    if name in _ERRORS:
        from static_simple import errors

        return getattr(errors, name)

    msg = f"module 'static_simple' has no attribute {name!r}"
    raise AttributeError(msg)
