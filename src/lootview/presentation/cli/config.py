"""CLI configuration: asset repository location and the tier menu."""
from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from lootview.data.fetcher import DEFAULT_TIMEOUT
from lootview.data.locators import tier_locator

logger = logging.getLogger(__name__)

DEFAULT_ASSET_ROOT = "https://api.github.com/repos/EvanMeek/veloren-wecw-assets/contents/"
_DUNGEON_DIR = "common/loot_tables/dungeon"
_CONFIG_ENV = "LOOTVIEW_CONFIG"


@dataclass(frozen=True, slots=True)
class TierConfig:
    id: str
    label: str
    path: str


@dataclass(slots=True)
class AppConfig:
    asset_root: str = DEFAULT_ASSET_ROOT
    tiers: List[TierConfig] = field(default_factory=lambda: list(default_tiers()))
    timeout: float = DEFAULT_TIMEOUT
    max_depth: int = 0
    strict: bool = False

    def find_tier(self, tier_id: str) -> TierConfig:
        for tier in self.tiers:
            if tier.id == tier_id:
                return tier
        raise KeyError(tier_id)


def default_tiers() -> tuple[TierConfig, ...]:
    tiers = [TierConfig(f"tier-{index}", f"T{index + 1}", f"{_DUNGEON_DIR}/tier-{index}") for index in range(6)]
    tiers.append(TierConfig("wildboss", "WildBoss", f"{_DUNGEON_DIR}/wildboss"))
    return tuple(tiers)


def build_tier_locator(config: AppConfig, tier: TierConfig) -> str:
    """Return the directory listing locator of ``tier``."""
    return tier_locator(config.asset_root, tier.path)


def get_user_data_dir() -> Path:
    """Return the per-user data directory."""
    if os.name == "nt":
        base = os.environ.get("APPDATA")
        if base:
            return Path(base) / "lootview"
        return Path.home() / "lootview"
    return Path.home() / ".config" / "lootview"


def get_default_config_path() -> Path:
    """Return the config path, honouring LOOTVIEW_CONFIG."""
    override = os.environ.get(_CONFIG_ENV)
    if override:
        return Path(override)
    return get_user_data_dir() / "config.json"


def _parse_tiers(raw: object) -> List[TierConfig] | None:
    if not isinstance(raw, list) or not raw:
        return None
    tiers: List[TierConfig] = []
    for entry in raw:
        if not isinstance(entry, dict):
            return None
        tier_id, path = entry.get("id"), entry.get("path")
        if not isinstance(tier_id, str) or not isinstance(path, str):
            return None
        label = entry.get("label")
        tiers.append(TierConfig(tier_id, label if isinstance(label, str) else tier_id, path))
    return tiers


def _from_mapping(raw: dict) -> AppConfig:
    config = AppConfig()
    asset_root = raw.get("asset_root")
    if isinstance(asset_root, str) and asset_root:
        config.asset_root = asset_root
    tiers = _parse_tiers(raw.get("tiers"))
    if tiers is not None:
        config.tiers = tiers
    elif "tiers" in raw:
        logger.warning("Ignoring malformed 'tiers' in config; using the default dungeon tiers")
    timeout = raw.get("timeout")
    if isinstance(timeout, (int, float)) and not isinstance(timeout, bool) and timeout > 0:
        config.timeout = float(timeout)
    max_depth = raw.get("max_depth")
    if isinstance(max_depth, int) and not isinstance(max_depth, bool) and max_depth >= 0:
        config.max_depth = max_depth
    strict = raw.get("strict")
    if isinstance(strict, bool):
        config.strict = strict
    return config


def load_config(path: Path | None = None) -> AppConfig:
    """Load config from disk or return defaults."""
    config_path = path or get_default_config_path()
    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return AppConfig()
    except (OSError, ValueError) as exc:
        logger.warning("Could not read config %s: %s", config_path, exc)
        return AppConfig()
    if not isinstance(raw, dict):
        logger.warning("Config %s must hold a JSON object; using defaults", config_path)
        return AppConfig()
    return _from_mapping(raw)


def save_config(config: AppConfig, path: Path | None = None) -> None:
    """Persist config to disk."""
    config_path = path or get_default_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    payload = {
        "asset_root": config.asset_root,
        "tiers": [{"id": tier.id, "label": tier.label, "path": tier.path} for tier in config.tiers],
        "timeout": config.timeout,
        "max_depth": config.max_depth,
        "strict": config.strict,
    }
    config_path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
