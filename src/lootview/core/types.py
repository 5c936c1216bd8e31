"""Shared type aliases for the core and service layers."""
from typing import Literal, Protocol

FailurePolicy = Literal["strict", "best_effort"]


class JsonFetcher(Protocol):
    """Anything that can fetch a locator and return parsed JSON."""

    def fetch_json(self, locator: str) -> object:
        ...


__all__ = ["FailurePolicy", "JsonFetcher"]
