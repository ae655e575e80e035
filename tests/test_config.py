"""Tests for AppConfig and StaticConfig."""

import dataclasses
import re
from pathlib import Path

import pytest

from static_simple.config import DEFAULT_IGNORE_EXTENSIONS, AppConfig, StaticConfig
from static_simple.errors import ConfigurationError
from static_simple.resolution.specs import (
    DynamicRoot,
    LiteralDir,
    LiteralRoot,
    PatternDir,
    RegexLiteralDir,
)


class TestAppConfig:
    def test_defaults(self) -> None:
        config = AppConfig()
        assert config.host == "127.0.0.1"
        assert config.port == 8000
        assert config.debug is False
        assert config.root == "root"

    def test_frozen(self) -> None:
        config = AppConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.debug = True  # type: ignore[misc]


class TestStaticConfigDefaults:
    def test_defaults(self) -> None:
        config = StaticConfig()
        assert config.dirs == ()
        assert config.include_path == ()
        assert config.ignore_extensions == DEFAULT_IGNORE_EXTENSIONS
        assert config.ignore_dirs == ()
        assert dict(config.mime_types) == {}
        assert config.debug is False
        assert config.logging is False
        assert config.expires is None

    def test_default_ignored_extensions(self) -> None:
        assert DEFAULT_IGNORE_EXTENSIONS == ("tmpl", "tt", "tt2", "html", "xhtml")

    def test_frozen(self) -> None:
        config = StaticConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.dirs = ()  # type: ignore[misc]


class TestStaticConfigCoercion:
    def test_dirs(self) -> None:
        pattern = re.compile("^img")
        config = StaticConfig(dirs=["static", pattern, "qr/^css/"])
        assert config.dirs == (
            LiteralDir("static"),
            PatternDir(pattern),
            RegexLiteralDir("qr/^css/"),
        )

    def test_include_path(self, tmp_path) -> None:
        def provider(request):
            return []

        config = StaticConfig(include_path=[tmp_path, "/srv", provider])
        assert config.include_path == (
            LiteralRoot(str(tmp_path)),
            LiteralRoot("/srv"),
            DynamicRoot(provider),
        )

    def test_mime_types_are_read_only(self) -> None:
        source = {"css": "text/x-css"}
        config = StaticConfig(mime_types=source)
        source["js"] = "text/x-js"
        assert "js" not in config.mime_types
        with pytest.raises(TypeError):
            config.mime_types["js"] = "x"  # type: ignore[index]

    def test_single_string_dirs_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="dirs must be a list"):
            StaticConfig(dirs="static")  # type: ignore[arg-type]

    def test_non_string_extension_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            StaticConfig(ignore_extensions=["html", 3])  # type: ignore[list-item]

    @pytest.mark.parametrize("expires", [-1, "3600", True, 1.5])
    def test_bad_expires(self, expires) -> None:
        with pytest.raises(ConfigurationError, match="expires"):
            StaticConfig(expires=expires)

    def test_mime_types_must_be_mapping(self) -> None:
        with pytest.raises(ConfigurationError, match="mime_types"):
            StaticConfig(mime_types=["css"])  # type: ignore[arg-type]


class TestFromMapping:
    def test_include_path_defaults_to_root(self) -> None:
        config = StaticConfig.from_mapping({}, root="/srv/app/root")
        assert config.include_path == (LiteralRoot("/srv/app/root"),)

    def test_pathlib_root(self) -> None:
        config = StaticConfig.from_mapping({}, root=Path("/srv/app/root"))
        assert config.include_path == (LiteralRoot("/srv/app/root"),)

    def test_explicit_include_path_wins(self) -> None:
        config = StaticConfig.from_mapping({"include_path": ["/a", "/b"]}, root="/srv")
        assert config.include_path == (LiteralRoot("/a"), LiteralRoot("/b"))

    def test_none_counts_as_missing(self) -> None:
        config = StaticConfig.from_mapping(
            {"include_path": None, "ignore_extensions": None}, root="/srv"
        )
        assert config.include_path == (LiteralRoot("/srv"),)
        assert config.ignore_extensions == DEFAULT_IGNORE_EXTENSIONS

    def test_app_debug_enables_static_debug(self) -> None:
        assert StaticConfig.from_mapping({}, debug=True).debug is True
        assert StaticConfig.from_mapping({"debug": True}).debug is True
        assert StaticConfig.from_mapping({"debug": False}).debug is False

    def test_unknown_key(self) -> None:
        with pytest.raises(ConfigurationError, match="Unknown static option"):
            StaticConfig.from_mapping({"dir": ["static"]})


class TestFromSettings:
    def test_either_namespace(self) -> None:
        a = StaticConfig.from_settings({"static": {"dirs": ["static"]}})
        b = StaticConfig.from_settings({"static_simple": {"dirs": ["static"]}})
        assert a.dirs == b.dirs == (LiteralDir("static"),)

    def test_static_wins_on_conflict(self) -> None:
        config = StaticConfig.from_settings(
            {
                "static_simple": {"dirs": ["old"], "expires": 60},
                "static": {"dirs": ["new"]},
            }
        )
        assert config.dirs == (LiteralDir("new"),)
        assert config.expires == 60

    def test_mime_types_merged_per_key(self) -> None:
        config = StaticConfig.from_settings(
            {
                "static_simple": {"mime_types": {"css": "a/css", "js": "a/js"}},
                "static": {"mime_types": {"css": "b/css"}},
            }
        )
        assert dict(config.mime_types) == {"css": "b/css", "js": "a/js"}

    def test_empty_settings(self) -> None:
        config = StaticConfig.from_settings({}, root="/srv")
        assert config.include_path == (LiteralRoot("/srv"),)

    def test_section_must_be_mapping(self) -> None:
        with pytest.raises(ConfigurationError, match="settings"):
            StaticConfig.from_settings({"static": ["dirs"]})
