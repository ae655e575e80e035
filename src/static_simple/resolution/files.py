"""File serving and content-type resolution.

``serve_file`` answers for one root the way a classic PSGI file app
does: 400 for NUL bytes, 403 for ``..`` segments and unreadable files,
404 when nothing is there, otherwise 200 with the file body. The
resolver only cares whether the status is 404.
"""

import email.utils
import mimetypes
import os
import re
import stat
import time
from collections.abc import Callable, Mapping
from typing import TypeAlias

import anyio

from static_simple.http.request import Request
from static_simple.http.response import Response
from static_simple.resolution.responses import (
    FILE_BAD_REQUEST,
    FILE_FORBIDDEN,
    FILE_NOT_FOUND,
    NOT_FOUND,
)

ContentTypeResolver: TypeAlias = Callable[[str], str]

DEFAULT_CONTENT_TYPE = "text/plain"

_EXTENSION = re.compile(r".*\.(\S+)$", re.DOTALL)
_SEPARATORS = re.compile(r"[\\/]")
_PARENT_SEGMENT = re.compile(r"\.{2,}")


def build_content_type_resolver(mime_types: Mapping[str, str] | None = None) -> ContentTypeResolver:
    """Return a ``full_path -> MIME type`` function.

    Lookup order: *mime_types* keyed by the final extension (exactly as
    written, so ``JPG`` and ``jpg`` are different keys), then the
    ``mimetypes`` database, then ``text/plain``.
    """
    overrides = dict(mime_types or {})

    def content_type(full_path: str) -> str:
        if overrides:
            match = _EXTENSION.match(full_path)
            if match is not None:
                override = overrides.get(match.group(1))
                if override:
                    return override
        guessed, _ = mimetypes.guess_type(full_path, strict=False)
        return guessed or DEFAULT_CONTENT_TYPE

    return content_type


def http_date(timestamp: float) -> str:
    """Format *timestamp* as an RFC 7231 HTTP date."""
    return email.utils.formatdate(timestamp, usegmt=True)


async def serve_file(
    root: str,
    path: str,
    content_type: ContentTypeResolver,
    *,
    method: str = "GET",
    expires: int | None = None,
    encoding: str = "utf-8",
) -> Response:
    """Serve *path* (the request path) from under *root*."""
    if "\0" in path:
        return FILE_BAD_REQUEST

    segments = _SEPARATORS.split(path)
    if segments and segments[0] == "":
        segments = segments[1:]
    if any(_PARENT_SEGMENT.fullmatch(segment) for segment in segments):
        return FILE_FORBIDDEN

    full_path = os.path.join(root, *segments)
    return await serve_path(
        full_path,
        content_type,
        method=method,
        expires=expires,
        encoding=encoding,
    )


async def serve_path(
    full_path: str,
    content_type: ContentTypeResolver,
    *,
    method: str = "GET",
    expires: int | None = None,
    encoding: str = "utf-8",
) -> Response:
    """Serve exactly *full_path*, with no traversal checks."""
    file = anyio.Path(full_path)
    try:
        info = await file.stat()
    except (OSError, ValueError):
        return FILE_NOT_FOUND
    if not stat.S_ISREG(info.st_mode):
        return FILE_NOT_FOUND
    try:
        body = await file.read_bytes()
    except OSError:
        return FILE_FORBIDDEN

    mime = content_type(full_path)
    if mime.startswith("text/") and "charset=" not in mime:
        mime = f"{mime}; charset={encoding}"

    response = Response(body=body, content_type=mime).with_headers(
        {
            "Content-Length": str(len(body)),
            "Last-Modified": http_date(info.st_mtime),
        }
    )
    if expires is not None:
        response = response.with_header("Expires", http_date(time.time() + expires))
    if method == "HEAD":
        response = response.without_body()
    return response


async def serve_static_file(
    full_path: str | os.PathLike[str],
    request: Request | None = None,
    *,
    mime_types: Mapping[str, str] | None = None,
    expires: int | None = None,
) -> Response:
    """Serve one explicit file, e.g. from a route handler.

    Useful for files generated on demand or stored outside the include
    path::

        @app.route("/me/thumbnail.png")
        async def thumbnail(request):
            return await serve_static_file(current_user(request).thumb_path, request)

    A missing file gets the same fixed 404 the middleware uses.
    """
    path = os.fspath(full_path)
    if not await anyio.Path(path).is_file():
        return NOT_FOUND
    return await serve_path(
        path,
        build_content_type_resolver(mime_types),
        method=request.method if request is not None else "GET",
        expires=expires,
    )
