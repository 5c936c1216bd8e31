"""Helpers for building remote locators from asset paths."""
from __future__ import annotations

ASSET_EXTENSION = ".ron"


def _with_trailing_slash(root: str) -> str:
    return root if root.endswith("/") else f"{root}/"


def asset_locator(asset_root: str, asset_path: str, extension: str = ASSET_EXTENSION) -> str:
    """Return the content locator of a dotted asset path such as ``common.items.food.apple``."""
    relative = asset_path.replace(".", "/")
    return f"{_with_trailing_slash(asset_root)}{relative}{extension}"


def tier_locator(asset_root: str, tier_dir: str) -> str:
    """Return the directory listing locator of a tier directory."""
    return f"{_with_trailing_slash(asset_root)}{tier_dir.strip('/')}"


def asset_path_from_listing(path: str, extension: str = ASSET_EXTENSION) -> str:
    """Convert a listing path like ``a/b/c.ron`` back into the dotted asset path ``a.b.c``."""
    if path.endswith(extension):
        path = path[: -len(extension)]
    return path.strip("/").replace("/", ".")
