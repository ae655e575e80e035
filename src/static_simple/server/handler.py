"""ASGI handler: translates ASGI scope/messages to Request/Response.

The only component that touches raw ASGI directly. Builds the Request,
runs it through the middleware chain down to route dispatch, and sends
the Response back through ASGI ``send()``.
"""

import inspect
from collections.abc import Callable
from typing import Any

from static_simple._internal.asgi import Receive, Scope, Send
from static_simple._internal.invoke import invoke
from static_simple.errors import HTTPError
from static_simple.http.request import Request
from static_simple.http.response import Response
from static_simple.middleware.protocol import Next
from static_simple.routing import Router
from static_simple.server.errors import handle_http_error, handle_internal_error
from static_simple.server.negotiation import negotiate
from static_simple.server.sender import send_response


def build_pipeline(router: Router, middleware: tuple[Callable[..., Any], ...]) -> Next:
    """Wrap *middleware* (outermost first) around route dispatch."""

    async def dispatch(req: Request) -> Response:
        route = router.match(req.method, req.path)
        result = await invoke(route.handler, **_handler_kwargs(route.handler, req))
        return negotiate(result)

    handler: Next = dispatch
    for mw in reversed(middleware):

        async def make_next(req: Request, _mw: Any = mw, _next: Next = handler) -> Response:
            return await _mw(req, _next)

        handler = make_next
    return handler


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    pipeline: Next,
    error_handlers: dict[int | type, Callable[..., Any]],
    debug: bool,
) -> None:
    """Process a single HTTP request through the full pipeline."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope)

    try:
        response = await pipeline(request)
    except HTTPError as exc:
        response = await handle_http_error(exc, request, error_handlers, debug)
    except Exception as exc:
        response = await handle_internal_error(exc, request, error_handlers, debug)

    await send_response(response, send, head=request.is_head)


def _handler_kwargs(handler: Callable[..., Any], request: Request) -> dict[str, Any]:
    """Pass the request to handlers that ask for it (by name or annotation)."""
    kwargs: dict[str, Any] = {}
    for name, param in inspect.signature(handler, eval_str=True).parameters.items():
        if name == "request" or param.annotation is Request:
            kwargs[name] = request
    return kwargs
