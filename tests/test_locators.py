from lootview.data.locators import asset_locator, asset_path_from_listing, tier_locator


def test_asset_locator_replaces_dots_with_slashes() -> None:
    assert asset_locator("https://h/contents/", "x.y.z") == "https://h/contents/x/y/z.ron"


def test_asset_locator_adds_missing_slash() -> None:
    assert asset_locator("https://h/contents", "a.b", extension=".txt") == "https://h/contents/a/b.txt"


def test_tier_locator_joins_directory() -> None:
    assert tier_locator("https://h/contents/", "/common/loot_tables/dungeon/tier-0/") == (
        "https://h/contents/common/loot_tables/dungeon/tier-0"
    )


def test_asset_path_from_listing() -> None:
    assert asset_path_from_listing("common/loot_tables/dungeon/tier-0/boss.ron") == (
        "common.loot_tables.dungeon.tier-0.boss"
    )
