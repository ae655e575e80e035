"""Tests for the error hierarchy and host error handling."""

import pytest

from static_simple.errors import (
    ConfigurationError,
    DirPatternError,
    HTTPError,
    MethodNotAllowed,
    NotFound,
    RootProviderError,
    StaticSimpleError,
)
from static_simple.http.request import Request
from static_simple.server.errors import handle_http_error, handle_internal_error


class TestHierarchy:
    @pytest.mark.parametrize(
        "exc_type", [ConfigurationError, DirPatternError, RootProviderError, HTTPError]
    )
    def test_base_class(self, exc_type) -> None:
        assert issubclass(exc_type, StaticSimpleError)

    def test_dir_pattern_error(self) -> None:
        exc = DirPatternError("qr/[/", "unterminated set")
        assert exc.source == "qr/[/"
        assert "Error compiling static dir regex 'qr/[/'" in str(exc)
        assert isinstance(exc, ConfigurationError)

    def test_http_error_str(self) -> None:
        assert str(NotFound()) == "404: Not Found"
        assert str(HTTPError(status=418)) == "418"

    def test_method_not_allowed_allow_header(self) -> None:
        exc = MethodNotAllowed(frozenset({"POST", "GET"}))
        assert exc.status == 405
        assert exc.headers == (("Allow", "GET, POST"),)


class TestHandlers:
    async def test_default_http_error(self) -> None:
        request = Request(method="GET", path="/x")
        response = await handle_http_error(NotFound(), request, {}, debug=False)
        assert response.status == 404
        assert response.text == "Not Found"

    async def test_handler_by_exception_type(self) -> None:
        request = Request(method="GET", path="/x")
        handlers = {NotFound: lambda request, exc: f"missing {request.path}"}
        response = await handle_http_error(NotFound(), request, handlers, debug=False)
        assert response.status == 404
        assert response.text == "missing /x"

    async def test_internal_error_hides_detail(self) -> None:
        request = Request(method="GET", path="/x")
        response = await handle_internal_error(ValueError("secret"), request, {}, debug=False)
        assert response.status == 500
        assert "secret" not in response.text

    async def test_internal_error_debug_detail(self) -> None:
        request = Request(method="GET", path="/x")
        response = await handle_internal_error(ValueError("secret"), request, {}, debug=True)
        assert "ValueError: secret" in response.text
