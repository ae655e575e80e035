"""Immutable HTTP request.

Frozen metadata only. The same object is handed to route handlers and
to dynamic include-path providers, so providers can pick roots from
headers, cookies or the query string.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from static_simple._internal.asgi import Scope
from static_simple.http.cookies import parse_cookies
from static_simple.http.headers import Headers
from static_simple.http.query import QueryParams


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    Metadata (method, path, headers, etc.) is frozen at creation. The
    body is never read: static serving and root providers work from the
    request line and headers alone.
    """

    method: str
    path: str
    headers: Headers = field(default_factory=Headers)
    query: QueryParams = field(default_factory=QueryParams)
    http_version: str = "1.1"
    server: tuple[str, int] | None = None
    client: tuple[str, int] | None = None
    cookies: Mapping[str, str] = field(default_factory=dict)
    root_path: str = ""

    @property
    def is_head(self) -> bool:
        """True for ``HEAD`` requests (headers only, no body)."""
        return self.method == "HEAD"

    @classmethod
    def from_asgi(cls, scope: Scope) -> Request:
        """Create a Request from an ASGI scope."""
        headers = Headers(tuple(scope.get("headers", ())))
        server = scope.get("server")
        client = scope.get("client")
        return cls(
            method=scope["method"],
            path=scope["path"],
            headers=headers,
            query=QueryParams(scope.get("query_string", b"")),
            http_version=scope.get("http_version", "1.1"),
            server=tuple(server) if server else None,
            client=tuple(client) if client else None,
            cookies=parse_cookies(headers.get("cookie", "")),
            root_path=scope.get("root_path", ""),
        )
