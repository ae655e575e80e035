"""Testing utilities for static_simple applications."""

from static_simple.testing.client import TestClient

__all__ = ["TestClient"]
