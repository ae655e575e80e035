"""Request-to-file resolution: eligibility, root search and file serving."""

from static_simple.resolution.files import (
    build_content_type_resolver,
    serve_file,
    serve_static_file,
)
from static_simple.resolution.matching import check_static_path, path_matches_dirs
from static_simple.resolution.resolver import resolve, resolve_roots
from static_simple.resolution.results import (
    Deferred,
    InternalError,
    NotFound,
    Resolution,
    Served,
)
from static_simple.resolution.specs import (
    DirSpec,
    DynamicRoot,
    LiteralDir,
    LiteralRoot,
    PatternDir,
    RegexLiteralDir,
    RootSpec,
)

__all__ = [
    "Deferred",
    "DirSpec",
    "DynamicRoot",
    "InternalError",
    "LiteralDir",
    "LiteralRoot",
    "NotFound",
    "PatternDir",
    "RegexLiteralDir",
    "Resolution",
    "RootSpec",
    "Served",
    "build_content_type_resolver",
    "check_static_path",
    "path_matches_dirs",
    "resolve",
    "resolve_roots",
    "serve_file",
    "serve_static_file",
]
