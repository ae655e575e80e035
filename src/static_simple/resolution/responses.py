"""Fixed response literals.

Clients and existing tests depend on these byte for byte, so they are
built once and shared (``Response`` is immutable).
"""

from static_simple.http.response import Response


def _fixed(status: int, content_type: str, body: str) -> Response:
    return Response(
        body=body,
        status=status,
        content_type=content_type,
        headers=(("Content-Length", str(len(body.encode("utf-8")))),),
    )


# Middleware answers. The 404 is text/html for backwards compatibility.
NOT_FOUND = _fixed(404, "text/html", "not found")
INTERNAL_ERROR = _fixed(500, "text/plain", "internal server error")

# File server answers.
FILE_BAD_REQUEST = _fixed(400, "text/plain", "Bad Request")
FILE_FORBIDDEN = _fixed(403, "text/plain", "forbidden")
FILE_NOT_FOUND = _fixed(404, "text/plain", "not found")
