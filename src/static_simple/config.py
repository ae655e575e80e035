"""Application and static-serving configuration.

Both configs are frozen dataclasses: immutable after creation,
IDE-autocompletable, no string-key lookups at request time.
``StaticConfig`` coerces its raw values into tagged specifiers in
``__post_init__``, so a bad entry fails at setup rather than on the
first request (``qr//`` patterns excepted, they compile lazily).
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, fields
from pathlib import Path
from types import MappingProxyType
from typing import Any

from static_simple.errors import ConfigurationError
from static_simple.resolution.specs import DirSpec, RootSpec, as_dir, as_root

# Template sources are never served as files unless configured otherwise.
DEFAULT_IGNORE_EXTENSIONS: tuple[str, ...] = ("tmpl", "tt", "tt2", "html", "xhtml")

# Settings namespaces merged by ``StaticConfig.from_settings``; later wins.
SETTINGS_KEYS: tuple[str, ...] = ("static_simple", "static")


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Host application configuration. Immutable after creation.

    ``root`` is the application's document root; it is the default
    (and often only) entry of the static include path::

        config = AppConfig(root="/srv/myapp/root", debug=True)
    """

    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False

    root: str | Path = "root"

    # Reload (development server only)
    reload: bool = False
    reload_include: tuple[str, ...] = ()
    reload_dirs: tuple[str, ...] = ()


def _string_tuple(name: str, value: Any) -> tuple[str, ...]:
    if isinstance(value, str) or not isinstance(value, Iterable):
        msg = f"{name} must be a list of strings, got {value!r}"
        raise ConfigurationError(msg)
    items = tuple(value)
    for item in items:
        if not isinstance(item, str):
            msg = f"{name} entries must be strings, got {item!r}"
            raise ConfigurationError(msg)
    return items


def _spec_tuple(name: str, value: Any, coerce: Any) -> tuple[Any, ...]:
    if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
        msg = f"{name} must be a list, got {value!r}"
        raise ConfigurationError(msg)
    return tuple(coerce(item) for item in value)


@dataclass(frozen=True, slots=True)
class StaticConfig:
    """Static file serving configuration.

    Built once at setup and shared read-only by every request::

        StaticConfig(
            dirs=("static", re.compile(r"^(images|css)"), "qr/^fonts/i"),
            include_path=("/srv/overlay", customer_roots, "/srv/myapp/root"),
            ignore_extensions=("html", "tt"),
            mime_types={"svgz": "image/svg+xml"},
            expires=3600,
        )

    Fields:
        dirs: Allow-list. When non-empty, only matching paths are served
            and a miss is a 404 instead of falling through.
        include_path: Roots searched in order. Callables are dynamic
            providers receiving the request.
        ignore_extensions: Extensions (case-insensitive) always handed to
            the application.
        ignore_dirs: Top-level directories always handed to the application.
        mime_types: Extension to MIME type overrides.
        debug: Log every exclusion and 404 decision.
        logging: Log every served file on ``static_simple.access``.
        expires: Seconds to add to the ``Expires`` header of served files.
    """

    dirs: tuple[DirSpec, ...] = ()
    include_path: tuple[RootSpec, ...] = ()
    ignore_extensions: tuple[str, ...] = DEFAULT_IGNORE_EXTENSIONS
    ignore_dirs: tuple[str, ...] = ()
    mime_types: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    debug: bool = False
    logging: bool = False
    expires: int | None = None

    def __post_init__(self) -> None:
        # frozen: coerce through object.__setattr__
        set_ = object.__setattr__
        set_(self, "dirs", _spec_tuple("dirs", self.dirs, as_dir))
        set_(self, "include_path", _spec_tuple("include_path", self.include_path, as_root))
        set_(self, "ignore_extensions", _string_tuple("ignore_extensions", self.ignore_extensions))
        set_(self, "ignore_dirs", _string_tuple("ignore_dirs", self.ignore_dirs))

        if not isinstance(self.mime_types, Mapping):
            msg = f"mime_types must be a mapping, got {self.mime_types!r}"
            raise ConfigurationError(msg)
        set_(self, "mime_types", MappingProxyType(dict(self.mime_types)))

        if self.expires is not None and (
            isinstance(self.expires, bool) or not isinstance(self.expires, int) or self.expires < 0
        ):
            msg = f"expires must be a non-negative number of seconds, got {self.expires!r}"
            raise ConfigurationError(msg)

    @classmethod
    def from_mapping(
        cls,
        options: Mapping[str, Any],
        *,
        root: str | Path | None = None,
        debug: bool = False,
    ) -> StaticConfig:
        """Build a config from plain options, applying app-level defaults.

        ``include_path`` defaults to ``[root]`` and ``debug`` is switched
        on whenever the application runs in debug mode. Keys that are
        present but ``None`` count as missing.

        Raises:
            ConfigurationError: Unknown option names or bad values.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(options) - known)
        if unknown:
            msg = f"Unknown static option(s): {', '.join(unknown)}"
            raise ConfigurationError(msg)

        values = {key: value for key, value in options.items() if value is not None}
        if "include_path" not in values:
            values["include_path"] = (root,) if root is not None else ()
        values["debug"] = bool(values.get("debug")) or debug
        return cls(**values)

    @classmethod
    def from_settings(
        cls,
        settings: Mapping[str, Any],
        *,
        root: str | Path | None = None,
        debug: bool = False,
    ) -> StaticConfig:
        """Build a config from application settings.

        Options may live under ``static_simple`` or ``static`` (or both);
        the two are merged, ``static`` winning on conflicts, with
        ``mime_types`` merged key by key::

            StaticConfig.from_settings(
                {"static": {"dirs": ["static"]}, "static_simple": {"debug": True}},
                root=app_config.root,
            )
        """
        merged: dict[str, Any] = {}
        for key in SETTINGS_KEYS:
            section = settings.get(key) or {}
            if not isinstance(section, Mapping):
                msg = f"settings[{key!r}] must be a mapping, got {section!r}"
                raise ConfigurationError(msg)
            for name, value in section.items():
                previous = merged.get(name)
                if isinstance(previous, Mapping) and isinstance(value, Mapping):
                    merged[name] = {**previous, **value}
                else:
                    merged[name] = value
        return cls.from_mapping(merged, root=root, debug=debug)
