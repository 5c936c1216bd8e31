"""Data layer: remote fetching and loot table decoding."""

from .errors import (
    DecodeError,
    EncodingError,
    LootDataError,
    NameNotFoundError,
    NetworkError,
    ProtocolError,
)
from .fetcher import RemoteFetcher
from .locators import asset_locator, asset_path_from_listing, tier_locator
from .loot_decoder import decode_loot_table, encode_loot_table, parse_loot_text

__all__ = [
    "DecodeError",
    "EncodingError",
    "LootDataError",
    "NameNotFoundError",
    "NetworkError",
    "ProtocolError",
    "RemoteFetcher",
    "asset_locator",
    "asset_path_from_listing",
    "decode_loot_table",
    "encode_loot_table",
    "parse_loot_text",
    "tier_locator",
]
