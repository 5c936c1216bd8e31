"""Service-layer exceptions."""
from __future__ import annotations

from lootview.data.errors import LootDataError


class ResolutionError(LootDataError):
    """Raised when a loot reference cannot be turned into a display name."""

    def __init__(self, message: str, *, path: str) -> None:
        super().__init__(message)
        self.path = path

