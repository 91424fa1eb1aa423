from __future__ import annotations

import pytest

from lp_exposure.amm import BasicPoolModel
from lp_exposure.domain import Pair, Pool, PoolType
from lp_exposure.errors import InvalidPoolState, SnapshotError, UnsupportedPoolType
from lp_exposure.processors import build_pool_index, tracked_share_denoms


def test_reserves_read_from_reserve_account(pool_index):
    """Each pool model should capture its reserve balance and share supply."""
    assert pool_index.model_by_reserve_address["res1"] == BasicPoolModel(
        quote_reserve=1_000_000, base_reserve=500_000, share_supply=1_000
    )
    assert pool_index.model_by_reserve_address["res2"] == BasicPoolModel(300, 900, 7)


def test_lookup_tables_cover_all_pools_and_pairs(pool_index):
    assert set(pool_index.pool_by_share_denom) == {"pool1", "pool2", "pool3", "pool4"}
    assert set(pool_index.pair_by_id) == {1, 2, 3}


def test_pair_may_back_multiple_pools(pool_index):
    """Basic and ranged pools on the same pair resolve to the same pair."""
    _, basic_pair, _ = pool_index.underlying("pool2")
    _, ranged_pair, _ = pool_index.underlying("pool4")

    assert basic_pair is ranged_pair


def test_missing_reserve_account_is_empty_pool(pool_index):
    """A reserve account absent from balances yields zero reserves."""
    assert pool_index.model_by_reserve_address["res4"] == BasicPoolModel(0, 0, 0)


def test_underlying_resolves_pool_pair_and_model(pool_index):
    pool, pair, model = pool_index.underlying("pool1")

    assert pool.reserve_address == "res1"
    assert pair.denoms == ("uust", "ucre")
    assert model.share_supply == 1_000


def test_underlying_unknown_denom_raises(pool_index):
    with pytest.raises(KeyError):
        pool_index.underlying("pool99")


def test_unknown_pair_raises():
    pools = [Pool(id=1, pair_id=9, reserve_address="res", pool_coin_denom="pool1")]

    with pytest.raises(SnapshotError, match="unknown pair 9"):
        build_pool_index(pools, [], {}, lambda denom: 0)


def test_reserves_without_supply_raise():
    pools = [Pool(id=1, pair_id=1, reserve_address="res", pool_coin_denom="pool1")]
    pairs = [Pair(id=1, quote_coin_denom="uust", base_coin_denom="ucre")]
    balances = {"res": {"uust": 10}}

    with pytest.raises(InvalidPoolState):
        build_pool_index(pools, pairs, balances, lambda denom: 0)


def test_tracked_denoms_derived_from_target_pairs(pool_index):
    """Only basic pools pairing a target asset should be tracked."""
    assert tracked_share_denoms(pool_index, ["uust", "uluna"]) == ["pool1", "pool2"]
    assert tracked_share_denoms(pool_index, ["uluna"]) == ["pool2"]
    assert tracked_share_denoms(pool_index, ["uatom"]) == ["pool3"]


def test_explicit_tracked_denoms_kept_as_given(pool_index):
    assert tracked_share_denoms(pool_index, ["uust"], ["pool2", "pool3"]) == [
        "pool2",
        "pool3",
    ]


def test_explicit_unknown_denom_raises(pool_index):
    with pytest.raises(SnapshotError, match="pool42"):
        tracked_share_denoms(pool_index, ["uust"], ["pool42"])


def test_explicit_ranged_pool_raises(pool_index):
    assert pool_index.pool_by_share_denom["pool4"].pool_type is PoolType.RANGED

    with pytest.raises(UnsupportedPoolType):
        tracked_share_denoms(pool_index, ["uust"], ["pool4"])
