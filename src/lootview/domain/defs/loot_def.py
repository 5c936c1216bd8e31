"""Loot table definition structures."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Tuple, Union


@dataclass(frozen=True, slots=True)
class ItemRef:
    """A concrete asset path resolving to exactly one reward."""

    path: str


@dataclass(frozen=True, slots=True)
class ItemQuantityRef:
    """A concrete asset path with an inclusive quantity range."""

    path: str
    min_qty: int
    max_qty: int

    def __post_init__(self) -> None:
        if self.min_qty < 0 or self.max_qty < 0:
            raise ValueError(f"Quantity range for {self.path} must be non-negative.")
        if self.min_qty > self.max_qty:
            raise ValueError(
                f"Quantity range for {self.path} is inverted: {self.min_qty} > {self.max_qty}."
            )


@dataclass(frozen=True, slots=True)
class LootTableRef:
    """A pointer to another loot table."""

    path: str


@dataclass(frozen=True, slots=True)
class NothingRef:
    """No reward."""


LootReference = Union[ItemRef, ItemQuantityRef, LootTableRef, NothingRef]


@dataclass(frozen=True, slots=True)
class LootEntry:
    weight: float
    reference: LootReference

    def __post_init__(self) -> None:
        if not math.isfinite(self.weight) or self.weight < 0:
            raise ValueError(f"Loot weight must be a finite non-negative number, got {self.weight}.")


@dataclass(frozen=True, slots=True)
class LootTable:
    """Ordered weighted entries; never empty."""

    entries: Tuple[LootEntry, ...]

    def __post_init__(self) -> None:
        if not self.entries:
            raise ValueError("A loot table needs at least one entry.")

    @classmethod
    def default(cls) -> "LootTable":
        return cls((LootEntry(0.0, NothingRef()),))

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[float, LootReference]]) -> "LootTable":
        return cls(tuple(LootEntry(float(weight), reference) for weight, reference in pairs))

    @property
    def total_weight(self) -> float:
        return math.fsum(entry.weight for entry in self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)
