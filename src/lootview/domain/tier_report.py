"""Runtime results of resolving one dungeon tier."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from lootview.domain.defs import LootTable


@dataclass(frozen=True, slots=True)
class EntryFailure:
    """A file or entry that could not be fetched, decoded or resolved."""

    source: str
    error: Exception

    def describe(self) -> str:
        return f"{self.source}: {type(self.error).__name__}: {self.error}"


@dataclass(frozen=True, slots=True)
class TierTable:
    name: str
    locator: str
    table: LootTable
    asset_path: str | None = None


@dataclass(slots=True)
class TierReport:
    """Decoded tables of one tier, in directory listing order."""

    tier: str
    tables: List[TierTable] = field(default_factory=list)
    failures: List[EntryFailure] = field(default_factory=list)

    def names(self) -> list[str]:
        return [entry.name for entry in self.tables]

    def get(self, name: str) -> LootTable:
        for entry in self.tables:
            if entry.name == name:
                return entry.table
        raise KeyError(name)

    @property
    def ok(self) -> bool:
        return not self.failures
