"""Middleware: Protocol-based, no inheritance required.

A middleware is any callable matching:
    async def mw(request: Request, next: Next) -> Response

Built-in middleware:
    StaticSimple -- Serve static files from an ordered include path
"""

from static_simple.middleware.protocol import Middleware, Next
from static_simple.middleware.static import StaticSimple

__all__ = ["Middleware", "Next", "StaticSimple"]
