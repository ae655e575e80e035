"""Tests for sync/async callable invocation."""

import threading

from static_simple._internal.invoke import invoke, invoke_blocking


class TestInvoke:
    async def test_sync(self) -> None:
        assert await invoke(lambda x: x + 1, 1) == 2

    async def test_async(self) -> None:
        async def handler(x):
            return x * 2

        assert await invoke(handler, 4) == 8


class TestInvokeBlocking:
    async def test_sync_runs_on_worker_thread(self) -> None:
        main = threading.get_ident()
        ident = await invoke_blocking(threading.get_ident)
        assert ident != main

    async def test_coroutine_function_awaited_in_loop(self) -> None:
        main = threading.get_ident()

        async def provider():
            return threading.get_ident()

        assert await invoke_blocking(provider) == main

    async def test_async_callable_object(self) -> None:
        class Provider:
            async def __call__(self, request):
                return [request]

        assert await invoke_blocking(Provider(), "/root") == ["/root"]
