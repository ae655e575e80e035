"""static-simple exception hierarchy.

Shared across the resolver, the middleware and the host pipeline so every
module raises and catches the same types.
"""

from dataclasses import dataclass


class StaticSimpleError(Exception):
    """Base for all static-simple errors."""


class ConfigurationError(StaticSimpleError):
    """Raised when static or app configuration is invalid.

    Most of these surface at setup, when ``StaticConfig`` coerces its
    fields.
    """


class DirPatternError(ConfigurationError):
    """A ``qr/.../`` allow-list entry failed to compile.

    Textual patterns are compiled lazily, so this one surfaces during a
    request and is answered with the fixed 500 response.
    """

    def __init__(self, source: str, reason: str) -> None:
        super().__init__(f"Error compiling static dir regex {source!r}: {reason}")
        self.source = source
        self.reason = reason


class RootProviderError(StaticSimpleError):
    """A dynamic include-path provider raised or returned garbage."""


@dataclass(frozen=True, slots=True)
class HTTPError(StaticSimpleError):
    """An error that maps directly to an HTTP status code.

    Raised by the host router or by handlers. The ASGI handler catches
    these and dispatches to the matching ``@app.error()`` handler.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404: no route matched the request path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class MethodNotAllowed(HTTPError):  # noqa: N818
    """405: route exists but not for this HTTP method."""

    def __init__(self, allowed: frozenset[str], detail: str = "") -> None:
        allow_value = ", ".join(sorted(allowed))
        default_detail = f"Method not allowed. Allowed methods: {allow_value}"
        super().__init__(
            status=405,
            detail=detail or default_detail,
            headers=(("Allow", allow_value),),
        )
