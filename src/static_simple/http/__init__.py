"""HTTP primitives: immutable request, headers, query and response types."""

from static_simple.http.headers import Headers
from static_simple.http.query import QueryParams
from static_simple.http.request import Request
from static_simple.http.response import Response

__all__ = ["Headers", "QueryParams", "Request", "Response"]
