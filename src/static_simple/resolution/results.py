"""Resolution outcomes.

``resolve()`` never raises for configuration or provider faults; it
returns one of these and the middleware turns it into a response.
"""

from dataclasses import dataclass
from typing import TypeAlias

from static_simple.http.response import Response


@dataclass(frozen=True, slots=True)
class Served:
    """A root produced a response (any status other than 404)."""

    response: Response


@dataclass(frozen=True, slots=True)
class NotFound:
    """No root had the file and an allow-list is configured."""


@dataclass(frozen=True, slots=True)
class InternalError:
    """Resolution aborted: bad ``qr//`` pattern or failing provider."""

    error: Exception


@dataclass(frozen=True, slots=True)
class Deferred:
    """Hand the request to the fallback handler.

    ``excluded`` is true when an ignore rule or the allow-list rejected
    the path before any filesystem lookup.
    """

    excluded: bool = False


Resolution: TypeAlias = Served | NotFound | InternalError | Deferred
