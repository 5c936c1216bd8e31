"""Collects every loot table listed under one tier directory."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List

from lootview.core.types import JsonFetcher
from lootview.data.errors import LootDataError, ProtocolError
from lootview.data.locators import asset_path_from_listing
from lootview.data.loot_decoder import decode_loot_table
from lootview.domain.tier_report import EntryFailure, TierReport, TierTable

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ListingEntry:
    name: str
    url: str
    path: str | None = None


def parse_listing(raw: object, locator: str) -> List[ListingEntry]:
    """Validate a directory listing payload."""
    if not isinstance(raw, list):
        raise ProtocolError(f"Directory listing at {locator} must be a JSON array.")
    entries: List[ListingEntry] = []
    for index, item in enumerate(raw):
        context = f"listing[{index}]"
        if not isinstance(item, dict):
            raise ProtocolError(f"{context} must be an object.")
        name = item.get("name")
        url = item.get("url")
        if not isinstance(name, str) or not isinstance(url, str):
            raise ProtocolError(f"{context} needs string 'name' and 'url' fields.")
        path = item.get("path")
        entries.append(ListingEntry(name=name, url=url, path=path if isinstance(path, str) else None))
    return entries


class TierAggregator:
    """Fetches a tier listing and decodes each listed file, in listing order."""

    def __init__(self, fetcher: JsonFetcher, *, strict: bool = False) -> None:
        self._fetcher = fetcher
        self._strict = strict

    def list_tier(self, tier_locator: str) -> List[ListingEntry]:
        return parse_listing(self._fetcher.fetch_json(tier_locator), tier_locator)

    def aggregate(self, tier_locator: str, tier: str | None = None) -> TierReport:
        """Build the TierReport of ``tier_locator``.

        Listing failures always propagate. A file that fails to fetch or
        decode aborts the whole tier in strict mode; otherwise it is recorded
        on the report and the remaining files are still decoded.
        """
        report = TierReport(tier=tier or tier_locator)
        listing = self.list_tier(tier_locator)
        logger.info("Found %d loot table(s) in %s", len(listing), report.tier)

        for entry in listing:
            logger.debug("Decoding %s", entry.name)
            try:
                table = decode_loot_table(self._fetcher.fetch_json(entry.url))
            except LootDataError as exc:
                if self._strict:
                    raise
                logger.warning("Skipping %s: %s", entry.name, exc)
                report.failures.append(EntryFailure(entry.name, exc))
                continue
            asset_path = asset_path_from_listing(entry.path) if entry.path else None
            report.tables.append(TierTable(entry.name, entry.url, table, asset_path))
        return report
