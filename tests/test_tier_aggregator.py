import pytest

from lootview.data.errors import EncodingError, NetworkError, ProtocolError
from lootview.domain.defs import ItemRef
from lootview.services.tier_aggregator import TierAggregator, parse_listing
from tests.helpers.fake_remote import FakeFetcher, make_envelope

TIER = "https://example.test/contents/common/loot_tables/dungeon/tier-0"


def _fetcher_with(listing: list, files: dict) -> FakeFetcher:
    fetcher = FakeFetcher({TIER: listing})
    for locator, text in files.items():
        fetcher.responses[locator] = make_envelope(text) if isinstance(text, str) else text
    return fetcher


def test_aggregate_preserves_listing_order() -> None:
    fetcher = _fetcher_with(
        [
            {"name": "b.ron", "url": "U2", "path": "common/loot_tables/dungeon/tier-0/b.ron"},
            {"name": "a.ron", "url": "U1"},
        ],
        {"U1": '[(1.0, Item("x.y.z"))]', "U2": "[(2.0, Nothing)]"},
    )
    report = TierAggregator(fetcher).aggregate(TIER, "tier-0")

    assert report.tier == "tier-0"
    assert report.names() == ["b.ron", "a.ron"]
    assert report.get("a.ron").entries[0].reference == ItemRef("x.y.z")
    assert report.tables[0].asset_path == "common.loot_tables.dungeon.tier-0.b"
    assert report.tables[1].asset_path is None
    assert report.ok


def test_best_effort_keeps_siblings_of_malformed_file() -> None:
    fetcher = _fetcher_with(
        [{"name": "bad", "url": "U1"}, {"name": "good", "url": "U2"}],
        {"U1": {"content": "%%% not base64 %%%"}, "U2": "[(1.0, Nothing)]"},
    )
    report = TierAggregator(fetcher).aggregate(TIER)

    assert report.names() == ["good"]
    assert [failure.source for failure in report.failures] == ["bad"]
    assert isinstance(report.failures[0].error, EncodingError)


def test_best_effort_collects_every_failure() -> None:
    fetcher = _fetcher_with(
        [{"name": "bad", "url": "U1"}, {"name": "missing", "url": "U404"}],
        {"U1": '[(1.0, Unknown("x"))]'},
    )
    report = TierAggregator(fetcher).aggregate(TIER)

    assert report.tables == []
    assert [failure.source for failure in report.failures] == ["bad", "missing"]
    assert isinstance(report.failures[1].error, NetworkError)


def test_strict_mode_aborts_on_first_failure() -> None:
    fetcher = _fetcher_with(
        [{"name": "bad", "url": "U1"}, {"name": "good", "url": "U2"}],
        {"U1": {"content": "%%% not base64 %%%"}, "U2": "[(1.0, Nothing)]"},
    )
    with pytest.raises(EncodingError):
        TierAggregator(fetcher, strict=True).aggregate(TIER)
    assert "U2" not in fetcher.requested


def test_listing_failure_is_fatal() -> None:
    with pytest.raises(NetworkError):
        TierAggregator(FakeFetcher()).aggregate(TIER)


def test_listing_must_be_array_of_named_entries() -> None:
    with pytest.raises(ProtocolError):
        parse_listing({"message": "Not Found"}, TIER)
    with pytest.raises(ProtocolError):
        parse_listing([{"name": "a"}], TIER)
    with pytest.raises(ProtocolError):
        parse_listing(["a"], TIER)
