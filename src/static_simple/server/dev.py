"""Development server.

Starts a pounce ASGI server with the live App object. pounce is an
optional dependency (``pip install static-simple[server]``); any other
ASGI server can run the app directly.
"""


def run_dev_server(
    app: object,
    host: str,
    port: int,
    *,
    reload: bool = False,
    reload_include: tuple[str, ...] = (),
    reload_dirs: tuple[str, ...] = (),
) -> None:
    """Start a single-worker pounce server for *app*.

    Args:
        app: ASGI callable (an ``App`` instance).
        host: Bind host address.
        port: Bind port number.
        reload: Restart on file changes.
        reload_include: Extra file extensions to watch when reloading.
        reload_dirs: Extra directories to watch alongside cwd.
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    config = ServerConfig(
        host=host,
        port=port,
        workers=1,
        reload=reload,
        reload_include=reload_include,
        reload_dirs=reload_dirs,
    )
    Server(config, app).run()
