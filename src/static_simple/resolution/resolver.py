"""Request-to-file resolution.

``resolve()`` runs the eligibility checks and then walks the include
path. It returns a ``Resolution`` for every outcome, including broken
``qr//`` entries and failing providers, so the caller converts results
to responses in one place.

Search order for ``include_path = [overlay, provider, app_root]`` where
``provider`` returns ``[tenant_a, tenant_b]``::

    overlay + path, tenant_a + path, tenant_b + path, app_root + path

The first root holding a regular file whose response is not a 404
wins. Any other status, including 403, ends the search.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Awaitable, Callable, Iterable
from os import PathLike
from typing import TYPE_CHECKING, TypeAlias

import anyio

from static_simple._internal.invoke import invoke_blocking
from static_simple.errors import ConfigurationError, DirPatternError, RootProviderError
from static_simple.resolution.files import (
    ContentTypeResolver,
    build_content_type_resolver,
    serve_file,
)
from static_simple.resolution.matching import DebugLog, check_static_path, silent
from static_simple.resolution.results import (
    Deferred,
    InternalError,
    NotFound,
    Resolution,
    Served,
)
from static_simple.resolution.specs import DynamicRoot, LiteralRoot, RootSpec, as_root

if TYPE_CHECKING:
    from static_simple.config import StaticConfig
    from static_simple.http.request import Request
    from static_simple.http.response import Response

FileServer: TypeAlias = Callable[..., Awaitable["Response"]]


async def expand_provider(root: DynamicRoot, request: Request) -> list[RootSpec]:
    """Call a dynamic root provider and coerce what it returns.

    Raises:
        RootProviderError: The provider raised, or did not return a list
            of paths and providers.
    """
    try:
        produced = await invoke_blocking(root.provider, request)
    except Exception as exc:
        msg = f"include_path provider {root.name} failed: {exc}"
        raise RootProviderError(msg) from exc

    if isinstance(produced, (str, bytes, PathLike)) or not isinstance(produced, Iterable):
        msg = f"include_path provider {root.name} must return a list of roots, got {produced!r}"
        raise RootProviderError(msg)

    try:
        return [as_root(entry) for entry in produced]
    except ConfigurationError as exc:
        msg = f"include_path provider {root.name} returned a bad root: {exc}"
        raise RootProviderError(msg) from exc


async def resolve_roots(
    request: Request,
    config: StaticConfig,
    *,
    content_type: ContentTypeResolver,
    serve: FileServer = serve_file,
    debug: DebugLog = silent,
) -> Resolution:
    """Walk ``config.include_path`` for the request path."""
    path = request.path
    pending: deque[RootSpec] = deque(config.include_path)

    while pending:
        match pending.popleft():
            case DynamicRoot() as root:
                try:
                    produced = await expand_provider(root, request)
                except RootProviderError as exc:
                    return InternalError(exc)
                pending.extendleft(reversed(produced))

            case LiteralRoot(path=base):
                if not await anyio.Path(f"{base}{path}").is_file():
                    continue
                response = await serve(
                    base,
                    path,
                    content_type,
                    method=request.method,
                    expires=config.expires,
                )
                if response.status != 404:
                    return Served(response)

    if not config.dirs:
        debug("Forwarding to the application (or other middleware).")
        return Deferred()
    return NotFound()


async def resolve(
    request: Request,
    config: StaticConfig,
    *,
    content_type: ContentTypeResolver | None = None,
    serve: FileServer = serve_file,
    debug: DebugLog = silent,
) -> Resolution:
    """Resolve *request* against *config*.

    Pure with respect to *config*: nothing here mutates it, and repeated
    calls against an unchanged filesystem give equal results.
    """
    try:
        eligible = check_static_path(request.path, config, debug)
    except DirPatternError as exc:
        return InternalError(exc)
    if not eligible:
        return Deferred(excluded=True)

    return await resolve_roots(
        request,
        config,
        content_type=content_type or build_content_type_resolver(config.mime_types),
        serve=serve,
        debug=debug,
    )
