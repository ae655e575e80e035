"""Path eligibility: ignore rules and the ``dirs`` allow-list.

Both checks are string-only; neither touches the filesystem.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, TypeAlias

from static_simple.resolution.specs import DirSpec

if TYPE_CHECKING:
    from static_simple.config import StaticConfig

DebugLog: TypeAlias = Callable[[str], None]


def silent(message: str) -> None:
    return None


def ignored_extension(path: str, extensions: Iterable[str]) -> str | None:
    """Return the configured extension *path* ends with, if any."""
    lowered = path.lower()
    for ext in extensions:
        if lowered.endswith("." + ext.lower()):
            return ext
    return None


def ignored_dir(path: str, dirs: Iterable[str]) -> str | None:
    """Return the ignored directory *path* lives under, if any.

    Entries may be written with or without a trailing separator.
    """
    for entry in dirs:
        name = entry[:-1] if entry.endswith(("/", "\\")) else entry
        prefix = "/" + name
        if path.startswith((prefix + "/", prefix + "\\")):
            return name
    return None


def path_matches_dirs(path: str, dirs: Iterable[DirSpec]) -> bool:
    """True if any allow-list entry matches *path*.

    The leading ``/`` is removed first, so entries are written relative
    to the root (``"static"``, ``qr/^images/``).

    Raises:
        DirPatternError: A ``qr/.../`` entry does not compile.
    """
    relative = path.removeprefix("/")
    return any(spec.matches(relative) for spec in dirs)


def check_static_path(
    path: str,
    config: StaticConfig,
    debug: DebugLog = silent,
) -> bool:
    """Decide whether *path* may be served statically at all.

    Order: ignored extensions, ignored directories, then the allow-list.
    An empty allow-list lets everything through; whether a file actually
    exists is the resolver's business.
    """
    ext = ignored_extension(path, config.ignore_extensions)
    if ext is not None:
        debug(f"Ignoring extension `{ext}`")
        return False

    directory = ignored_dir(path, config.ignore_dirs)
    if directory is not None:
        debug(f"Ignoring directory `{directory}`")
        return False

    if not config.dirs:
        return True

    return path_matches_dirs(path, config.dirs)
