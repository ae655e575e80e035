"""Tests for the exact-path router."""

import pytest

from static_simple.errors import MethodNotAllowed, NotFound
from static_simple.routing import Route, Router
from static_simple.routing.router import Router as RouterImpl


def _handler():
    return "ok"


class TestRouter:
    def test_match(self) -> None:
        router = Router()
        route = Route("/users", _handler, frozenset({"GET"}))
        router.add(route)
        router.compile()
        assert router.match("GET", "/users") is route

    def test_head_follows_get(self) -> None:
        router = Router()
        route = Route("/", _handler, frozenset({"GET"}))
        router.add(route)
        assert router.match("HEAD", "/") is route

    def test_explicit_head_not_overridden(self) -> None:
        router = Router()
        head = Route("/", _handler, frozenset({"HEAD"}))
        router.add(head)
        router.add(Route("/", _handler, frozenset({"GET"})))
        assert router.match("HEAD", "/") is head

    def test_not_found(self) -> None:
        router = Router()
        router.compile()
        with pytest.raises(NotFound):
            router.match("GET", "/missing")

    def test_method_not_allowed(self) -> None:
        router = Router()
        router.add(Route("/form", _handler, frozenset({"POST"})))
        with pytest.raises(MethodNotAllowed) as exc_info:
            router.match("GET", "/form")
        assert exc_info.value.headers == (("Allow", "POST"),)

    def test_exact_paths_only(self) -> None:
        router = Router()
        router.add(Route("/static", _handler, frozenset({"GET"})))
        with pytest.raises(NotFound):
            router.match("GET", "/static/site.css")

    def test_compiled_router_rejects_additions(self) -> None:
        router = Router()
        router.compile()
        with pytest.raises(RuntimeError):
            router.add(Route("/", _handler, frozenset({"GET"})))

    def test_package_exports(self) -> None:
        assert Router is RouterImpl
