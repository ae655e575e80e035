"""Routing: exact-path route table.

Public API:
    Route  -- Frozen route definition
    Router -- Maps (method, path) to a Route
"""

from static_simple.routing.route import Route
from static_simple.routing.router import Router

__all__ = ["Route", "Router"]
