"""Root and allow-list specifiers.

Configuration values arrive as plain strings, paths, compiled patterns
and callables. They are coerced once, at setup, into small tagged
variants so the resolver can dispatch with ``match`` instead of
inspecting raw values on every request.

Roots::

    LiteralRoot("/srv/app/root")      # searched as root + request path
    DynamicRoot(customer_roots)       # called per request for more roots

Allow-list entries::

    LiteralDir("static")              # matches "static/..."
    PatternDir(re.compile(r"^img"))   # re.search against the path
    RegexLiteralDir("qr/^(css|js)/i") # textual pattern, compiled lazily
"""

import functools
import os
import re
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, TypeAlias

from static_simple.errors import ConfigurationError, DirPatternError

if TYPE_CHECKING:
    from static_simple.http.request import Request


# A provider receives the current request and returns more roots:
# literal paths, or further providers. Sync or async.
RootProvider: TypeAlias = Callable[["Request"], Iterable[Any] | Awaitable[Iterable[Any]]]


@dataclass(frozen=True, slots=True)
class LiteralRoot:
    """A directory searched for ``path + request path``."""

    path: str


@dataclass(frozen=True, slots=True)
class DynamicRoot:
    """A provider that computes roots at request time."""

    provider: RootProvider

    @property
    def name(self) -> str:
        return getattr(self.provider, "__qualname__", None) or repr(self.provider)


RootSpec: TypeAlias = LiteralRoot | DynamicRoot


@dataclass(frozen=True, slots=True)
class LiteralDir:
    """A top-level directory name, matched as ``name/`` at the path start."""

    name: str

    def matches(self, path: str) -> bool:
        return path.startswith(self.name.removesuffix("/") + "/")


@dataclass(frozen=True, slots=True)
class PatternDir:
    """A precompiled pattern, searched anywhere in the path."""

    pattern: re.Pattern[str]

    def matches(self, path: str) -> bool:
        return self.pattern.search(path) is not None


@dataclass(frozen=True, slots=True)
class RegexLiteralDir:
    """A textual ``qr/<pattern>/<flags>`` entry.

    Compiled on first use. A bad pattern raises ``DirPatternError`` at
    request time, not at setup.
    """

    source: str

    def matches(self, path: str) -> bool:
        return compile_regex_literal(self.source).search(path) is not None


DirSpec: TypeAlias = LiteralDir | PatternDir | RegexLiteralDir

REGEX_LITERAL_PREFIX = "qr/"

_FLAGS: dict[str, re.RegexFlag] = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    "x": re.VERBOSE,
}


@functools.lru_cache(maxsize=128)
def compile_regex_literal(source: str) -> re.Pattern[str]:
    """Compile a ``qr/<pattern>/<flags>`` string.

    Successful compilations are cached; failures are not, so a broken
    entry fails every request that reaches it.

    Raises:
        DirPatternError: Missing delimiter, unknown flag or invalid regex.
    """
    body = source.removeprefix(REGEX_LITERAL_PREFIX)
    end = body.rfind("/")
    if end < 0:
        raise DirPatternError(source, "missing closing '/'")

    pattern, flag_chars = body[:end], body[end + 1 :]
    flags = re.RegexFlag(0)
    for char in flag_chars:
        if char not in _FLAGS:
            raise DirPatternError(source, f"unknown flag {char!r}")
        flags |= _FLAGS[char]

    try:
        return re.compile(pattern, flags)
    except re.error as exc:
        raise DirPatternError(source, str(exc)) from exc


def as_root(value: Any) -> RootSpec:
    """Coerce a configured ``include_path`` entry into a ``RootSpec``."""
    match value:
        case LiteralRoot() | DynamicRoot():
            return value
        case str() | os.PathLike():
            path = os.fspath(value)
            if not path:
                msg = "include_path entries must not be empty"
                raise ConfigurationError(msg)
            return LiteralRoot(path)
        case _ if callable(value):
            return DynamicRoot(value)
        case _:
            msg = (
                f"include_path entries must be paths or callables, "
                f"got {type(value).__name__}: {value!r}"
            )
            raise ConfigurationError(msg)


def as_dir(value: Any) -> DirSpec:
    """Coerce a configured ``dirs`` entry into a ``DirSpec``."""
    match value:
        case LiteralDir() | PatternDir() | RegexLiteralDir():
            return value
        case re.Pattern():
            return PatternDir(value)
        case str() if value.startswith(REGEX_LITERAL_PREFIX):
            return RegexLiteralDir(value)
        case str():
            return LiteralDir(value)
        case _:
            msg = f"dirs entries must be strings or compiled patterns, got {value!r}"
            raise ConfigurationError(msg)
