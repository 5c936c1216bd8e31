"""Domain definition exports."""

from .loot_def import (
    ItemQuantityRef,
    ItemRef,
    LootEntry,
    LootReference,
    LootTable,
    LootTableRef,
    NothingRef,
)

__all__ = [
    "ItemQuantityRef",
    "ItemRef",
    "LootEntry",
    "LootReference",
    "LootTable",
    "LootTableRef",
    "NothingRef",
]
