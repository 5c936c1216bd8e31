"""Resolution of loot references into display names."""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Tuple

from lootview.core.types import JsonFetcher
from lootview.data.envelope import decode_envelope_text
from lootview.data.errors import LootDataError, NameNotFoundError
from lootview.data.locators import asset_locator
from lootview.data.loot_decoder import parse_loot_text
from lootview.domain.defs import (
    ItemQuantityRef,
    ItemRef,
    LootReference,
    LootTable,
    LootTableRef,
    NothingRef,
)

from .errors import ResolutionError

logger = logging.getLogger(__name__)

NOTHING_LABEL = "Nothing"
NESTED_TABLE_LABEL = "This is a loot table collection.."
CYCLE_LABEL = "Loot table cycle (already expanded above)"
_QUOTED = re.compile(r'".*?"')


@dataclass(frozen=True, slots=True)
class ResolvedReference:
    """Display label of a reference, plus the nested table when one was expanded."""

    label: str
    nested: LootTable | None = None
    nested_path: str | None = None


def extract_display_name(text: str) -> str:
    """Return the first double-quoted substring of ``text`` without its quotes."""
    match = _QUOTED.search(text)
    if match is None:
        raise NameNotFoundError("No quoted display name in description file.")
    return match.group(0).strip('"')


def display_text(reference: LootReference, name: str) -> str:
    """Prefix the quantity range for ItemQuantity references."""
    if isinstance(reference, ItemQuantityRef):
        return f"{reference.min_qty}-{reference.max_qty} {name}"
    return name


class NameResolver:
    """Turns loot references into human readable names.

    Nested ``LootTable`` references are expanded up to ``max_depth`` levels;
    past that bound, or when a path repeats inside the current chain, a fixed
    label is returned instead. ``max_depth=0`` never expands.
    """

    def __init__(self, fetcher: JsonFetcher, *, asset_root: str, max_depth: int = 0) -> None:
        if max_depth < 0:
            raise ValueError("max_depth must be >= 0.")
        self._fetcher = fetcher
        self._asset_root = asset_root
        self._max_depth = max_depth

    @property
    def max_depth(self) -> int:
        return self._max_depth

    def resolve_name(self, reference: LootReference) -> str:
        """Return the display name of one reference without expanding nested tables."""
        match reference:
            case ItemRef(path=path) | ItemQuantityRef(path=path):
                return self._fetch_item_name(path)
            case LootTableRef():
                return NESTED_TABLE_LABEL
            case NothingRef():
                return NOTHING_LABEL
        raise TypeError(f"Unsupported loot reference {reference!r}")

    def resolve(
        self,
        reference: LootReference,
        chain: Tuple[str, ...] = (),
        depth: int = 0,
    ) -> ResolvedReference:
        """Resolve a reference, expanding nested tables within the depth bound.

        ``chain`` holds the table paths already open above this entry and
        ``depth`` is the number of nested tables expanded so far.
        """
        match reference:
            case ItemRef() | ItemQuantityRef():
                return ResolvedReference(display_text(reference, self.resolve_name(reference)))
            case LootTableRef(path=path):
                if depth >= self._max_depth:
                    return ResolvedReference(NESTED_TABLE_LABEL)
                if path in chain:
                    logger.info("Loot table cycle at %s", " -> ".join((*chain, path)))
                    return ResolvedReference(CYCLE_LABEL)
                return ResolvedReference(f"Loot table {path}", self._fetch_nested_table(path), path)
            case NothingRef():
                return ResolvedReference(NOTHING_LABEL)
        raise TypeError(f"Unsupported loot reference {reference!r}")

    def _fetch_item_name(self, path: str) -> str:
        locator = asset_locator(self._asset_root, path)
        try:
            return extract_display_name(self._fetch_text(locator))
        except LootDataError as exc:
            raise ResolutionError(f"Could not resolve name of {path}: {exc}", path=path) from exc

    def _fetch_nested_table(self, path: str) -> LootTable:
        locator = asset_locator(self._asset_root, path)
        try:
            return parse_loot_text(self._fetch_text(locator))
        except LootDataError as exc:
            raise ResolutionError(f"Could not expand loot table {path}: {exc}", path=path) from exc

    def _fetch_text(self, locator: str) -> str:
        return decode_envelope_text(self._fetcher.fetch_json(locator))
