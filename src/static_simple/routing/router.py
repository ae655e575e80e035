"""Exact-path route table.

Routes are registered during setup and compiled into an immutable
lookup when the app freezes. Paths match literally; anything richer is
the application's business, not the static layer's.
"""

from types import MappingProxyType

from static_simple.errors import MethodNotAllowed, NotFound
from static_simple.routing.route import Route


class Router:
    """Maps ``(method, path)`` to a Route.

    Mutable until ``compile()``; lookups after that are lock-free reads.
    """

    __slots__ = ("_compiled", "_routes")

    def __init__(self) -> None:
        self._routes: dict[str, dict[str, Route]] = {}
        self._compiled: MappingProxyType[str, dict[str, Route]] | None = None

    def add(self, route: Route) -> None:
        if self._compiled is not None:
            msg = "Cannot add routes to a compiled router."
            raise RuntimeError(msg)
        by_method = self._routes.setdefault(route.path, {})
        for method in route.methods:
            by_method[method] = route
        # HEAD is served by GET handlers unless registered explicitly
        if "GET" in route.methods:
            by_method.setdefault("HEAD", route)

    def compile(self) -> None:
        self._compiled = MappingProxyType(self._routes)

    def match(self, method: str, path: str) -> Route:
        """Return the route for *method* and *path*.

        Raises:
            NotFound: No route has this path.
            MethodNotAllowed: The path exists for other methods only.
        """
        routes = self._compiled if self._compiled is not None else self._routes
        by_method = routes.get(path)
        if by_method is None:
            raise NotFound(f"No route for {path}")
        route = by_method.get(method)
        if route is None:
            raise MethodNotAllowed(frozenset(by_method))
        return route
