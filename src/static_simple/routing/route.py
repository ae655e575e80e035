"""Frozen route definition."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Route:
    """A frozen route definition."""

    path: str
    handler: Callable[..., Any]
    methods: frozenset[str]
    name: str | None = None
