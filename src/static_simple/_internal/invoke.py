"""Call user callables that may be sync or async.

Route handlers, error handlers and lifecycle hooks can all be plain
``def`` or ``async def``. Dynamic include-path providers are the
exception: a sync provider may block on I/O, so the resolver runs it
through ``invoke_blocking`` on a worker thread instead.
"""

import functools
import inspect
from typing import Any

import anyio.to_thread


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call a handler and await the result if it's awaitable."""
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result


async def invoke_blocking(func: Any, *args: Any, **kwargs: Any) -> Any:
    """Await *func* if it's a coroutine function, else run it on a worker thread."""
    if inspect.iscoroutinefunction(func) or inspect.iscoroutinefunction(
        getattr(func, "__call__", None)
    ):
        return await func(*args, **kwargs)
    result = await anyio.to_thread.run_sync(functools.partial(func, *args, **kwargs))
    if inspect.isawaitable(result):
        result = await result
    return result
