"""Static file serving middleware.

Serves files found under an ordered include path and hands everything
else to the next handler. What happens to a request::

    ignored extension / ignored dir / outside dirs  -> next handler
    file found under some root                      -> that file
    nothing found, dirs empty                       -> next handler
    nothing found, dirs configured                  -> fixed 404
    broken qr// entry, failing provider, any crash  -> fixed 500

The 404 and 500 bodies are fixed literals (``not found``,
``internal server error``), independent of the app's error handlers.
"""

import logging
import os

from static_simple.config import StaticConfig
from static_simple.errors import HTTPError
from static_simple.http.request import Request
from static_simple.http.response import Response
from static_simple.middleware.protocol import Next
from static_simple.resolution.files import build_content_type_resolver, serve_static_file
from static_simple.resolution.resolver import resolve
from static_simple.resolution.responses import INTERNAL_ERROR, NOT_FOUND
from static_simple.resolution.results import Deferred, InternalError, NotFound, Served

_log = logging.getLogger("static_simple")
_access_log = logging.getLogger("static_simple.access")


class StaticSimple:
    """Middleware that serves static files from an ordered include path.

    Usage::

        app.add_middleware(StaticSimple(StaticConfig(
            dirs=("static", "qr/^(images|css)/"),
            include_path=("/srv/overlay", customer_roots, "/srv/myapp/root"),
        )))

    ``App`` installs one automatically from its own config; add one by
    hand only when building the pipeline yourself.

    Args:
        config: Shared, read-only static configuration.
        logger: Where debug decisions and 500 tracebacks go. Defaults to
            the ``static_simple`` logger.
    """

    __slots__ = ("_content_type", "_logger", "config")

    def __init__(
        self,
        config: StaticConfig | None = None,
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        self.config = config or StaticConfig()
        self._logger = logger or _log
        self._content_type = build_content_type_resolver(self.config.mime_types)

    async def __call__(self, request: Request, next: Next) -> Response:
        """Serve a static file, answer 404/500, or fall through."""
        try:
            resolution = await resolve(
                request,
                self.config,
                content_type=self._content_type,
                debug=self._debug,
            )

            match resolution:
                case Served(response=response):
                    if self.config.logging:
                        _access_log.info(
                            "%s %s %d", request.method, request.path, response.status
                        )
                    return response
                case NotFound():
                    self._debug(f"404: file not found: {request.path}")
                    return NOT_FOUND
                case InternalError(error=error):
                    self._logger.error(
                        "Static::Simple: %s %s: %s",
                        request.method,
                        request.path,
                        error,
                        exc_info=error,
                    )
                    return INTERNAL_ERROR
                case Deferred():
                    pass

            return await next(request)

        except HTTPError:
            # The app's own 404/405/... travel to its error handlers.
            raise
        except Exception:
            self._logger.exception("Static::Simple: %s %s", request.method, request.path)
            return INTERNAL_ERROR

    async def serve_static_file(
        self,
        full_path: str | os.PathLike[str],
        request: Request | None = None,
    ) -> Response:
        """Serve one explicit file with this middleware's MIME and expiry settings.

        A missing file gets the fixed 404.
        """
        return await serve_static_file(
            full_path,
            request,
            mime_types=self.config.mime_types,
            expires=self.config.expires,
        )

    def _debug(self, message: str) -> None:
        if self.config.debug:
            self._logger.debug("Static::Simple: %s", message)
