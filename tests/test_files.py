"""Tests for single-root file serving and content types."""

import email.utils
import os
import time

import anyio
import pytest

from static_simple.resolution.files import (
    build_content_type_resolver,
    http_date,
    serve_file,
    serve_static_file,
)
from static_simple.resolution.responses import NOT_FOUND


@pytest.fixture
def root(tmp_path):
    (tmp_path / "site.css").write_text("body { color: red; }")
    (tmp_path / "data.bin").write_bytes(b"\x00\x01\x02\x03")
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "app.js").write_text("console.log('hi');")
    return tmp_path


@pytest.fixture
def content_type():
    return build_content_type_resolver()


class TestContentTypeResolver:
    def test_guesses_from_extension(self) -> None:
        resolve = build_content_type_resolver()
        assert resolve("/x/site.css") == "text/css"
        assert resolve("/x/logo.png") == "image/png"

    def test_unknown_extension_falls_back(self) -> None:
        resolve = build_content_type_resolver()
        assert resolve("/x/file.nosuchext") == "text/plain"
        assert resolve("/x/README") == "text/plain"

    def test_override_wins(self) -> None:
        resolve = build_content_type_resolver({"css": "text/x-custom"})
        assert resolve("/x/site.css") == "text/x-custom"

    def test_override_uses_final_extension(self) -> None:
        resolve = build_content_type_resolver({"gz": "application/x-gzip"})
        assert resolve("/x/bundle.tar.gz") == "application/x-gzip"

    def test_override_is_case_sensitive(self) -> None:
        resolve = build_content_type_resolver({"JPG": "image/x-upper"})
        assert resolve("/x/photo.JPG") == "image/x-upper"
        assert resolve("/x/photo.jpg") == "image/jpeg"


class TestServeFile:
    async def test_serves_file(self, root, content_type) -> None:
        response = await serve_file(str(root), "/site.css", content_type)
        assert response.status == 200
        assert response.text == "body { color: red; }"
        assert response.content_type == "text/css; charset=utf-8"
        assert response.header("Content-Length") == "20"

    async def test_last_modified(self, root, content_type) -> None:
        mtime = os.stat(root / "site.css").st_mtime
        response = await serve_file(str(root), "/site.css", content_type)
        assert response.header("Last-Modified") == http_date(mtime)

    async def test_binary_has_no_charset(self, root, content_type) -> None:
        response = await serve_file(str(root), "/data.bin", content_type)
        assert response.status == 200
        assert response.body_bytes == b"\x00\x01\x02\x03"
        assert "charset" not in response.content_type

    async def test_nested_path(self, root, content_type) -> None:
        response = await serve_file(str(root), "/sub/app.js", content_type)
        assert response.status == 200
        assert "console.log" in response.text

    async def test_missing_file(self, root, content_type) -> None:
        response = await serve_file(str(root), "/nope.css", content_type)
        assert response.status == 404

    async def test_directory_is_not_found(self, root, content_type) -> None:
        response = await serve_file(str(root), "/sub", content_type)
        assert response.status == 404

    async def test_parent_segment_is_forbidden(self, root, content_type) -> None:
        response = await serve_file(str(root / "sub"), "/../site.css", content_type)
        assert response.status == 403

    async def test_nul_is_bad_request(self, root, content_type) -> None:
        response = await serve_file(str(root), "/site.css\0", content_type)
        assert response.status == 400

    async def test_head_keeps_length(self, root, content_type) -> None:
        response = await serve_file(str(root), "/site.css", content_type, method="HEAD")
        assert response.status == 200
        assert response.body_bytes == b""
        assert response.header("Content-Length") == "20"

    async def test_expires(self, root, content_type) -> None:
        before = time.time()
        response = await serve_file(str(root), "/site.css", content_type, expires=3600)
        expires = email.utils.parsedate_to_datetime(response.header("Expires")).timestamp()
        assert before + 3600 - 1 <= expires <= time.time() + 3600 + 1

    async def test_no_expires_by_default(self, root, content_type) -> None:
        response = await serve_file(str(root), "/site.css", content_type)
        assert response.header("Expires") is None


class TestServeStaticFile:
    async def test_serves_explicit_path(self, root) -> None:
        response = await serve_static_file(root / "site.css")
        assert response.status == 200
        assert response.text == "body { color: red; }"

    async def test_missing_file_gets_fixed_404(self, root) -> None:
        response = await serve_static_file(root / "missing.css")
        assert response is NOT_FOUND
        assert response.content_type == "text/html"
        assert response.text == "not found"

    async def test_mime_override(self, root) -> None:
        response = await serve_static_file(root / "data.bin", mime_types={"bin": "x/y"})
        assert response.content_type == "x/y"


class TestUnreadableFile:
    async def test_read_failure_is_forbidden(self, root, content_type, monkeypatch) -> None:
        async def deny(self):
            raise PermissionError("denied")

        monkeypatch.setattr(anyio.Path, "read_bytes", deny)

        response = await serve_file(str(root), "/site.css", content_type)

        assert response.status == 403
        assert response.text == "forbidden"
