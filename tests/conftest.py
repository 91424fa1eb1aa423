"""Shared test fixtures.

The sample snapshot reconciles by hand:

- pool1 (uust/ucre, 1000 shares over 1_000_000uust/500_000ucre) converts at
  exactly 1000uust per share, so its holders never lose a unit.
- pool2 (uust/uluna, 7 shares over 300uust/900uluna) truncates, leaving one
  unit of each asset unaccounted.
- pool3 (ucre/uatom) is untracked and pool4 is a ranged pool on pair 2.
"""

from __future__ import annotations

import json
import os
from pathlib import Path

import pytest

from lp_exposure.processors import (
    ExposureConfig,
    build_pool_index,
    build_reserve_account_set,
)
from lp_exposure.snapshot import parse_app_state

TARGETS = {"LUNA": "uluna", "UST": "uust"}
STAKING_RESERVES = {"pool1": "stake_pool1", "uluna": "stake_luna"}


def _coins(**amounts: int) -> list[dict[str, str]]:
    return [{"denom": denom, "amount": str(amount)} for denom, amount in amounts.items()]


def _balance(address: str, **amounts: int) -> dict[str, object]:
    return {"address": address, "coins": _coins(**amounts)}


@pytest.fixture
def app_state() -> dict:
    return {
        "bank": {
            "balances": [
                _balance("alice", uust=500, pool1=100),
                _balance("bob", uluna=1000, pool2=3),
                _balance("carol", pool1=650),
                _balance("dave", ucre=1),
                _balance("erin", pool1=50),
                _balance("frank", pool2=4),
                _balance("res1", uust=1_000_000, ucre=500_000),
                _balance("res2", uust=300, uluna=900),
                _balance("res3", ucre=10, uatom=10),
                _balance("dust", ucre=3),
                _balance("stake_pool1", pool1=200),
                _balance("stake_luna", uluna=20),
            ],
            "supply": _coins(
                pool1=1000,
                pool2=7,
                pool3=10,
                uatom=10,
                ucre=500_014,
                uluna=1920,
                uust=1_000_800,
            ),
        },
        "liquidity": {
            "params": {
                "batch_size": 1,
                "dust_collector_address": "dust",
                "withdraw_fee_rate": "0.003000000000000000",
            },
            "pairs": [
                {"id": "1", "base_coin_denom": "ucre", "quote_coin_denom": "uust"},
                {"id": "2", "base_coin_denom": "uluna", "quote_coin_denom": "uust"},
                {"id": "3", "base_coin_denom": "uatom", "quote_coin_denom": "ucre"},
            ],
            "pools": [
                {"type": "POOL_TYPE_BASIC", "id": "1", "pair_id": "1", "reserve_address": "res1", "pool_coin_denom": "pool1"},
                {"type": "POOL_TYPE_BASIC", "id": "2", "pair_id": "2", "reserve_address": "res2", "pool_coin_denom": "pool2"},
                {"type": "POOL_TYPE_BASIC", "id": "3", "pair_id": "3", "reserve_address": "res3", "pool_coin_denom": "pool3"},
                {"type": "POOL_TYPE_RANGED", "id": "4", "pair_id": "2", "reserve_address": "res4", "pool_coin_denom": "pool4"},
            ],
        },
        "farming": {
            "staking_records": [
                {"staking_coin_denom": "pool1", "farmer": "carol", "staking": {"amount": "150", "starting_epoch": "1"}},
                {"staking_coin_denom": "uluna", "farmer": "grace", "staking": {"amount": "20", "starting_epoch": "1"}},
            ],
            "queued_staking_records": [
                {"staking_coin_denom": "pool1", "farmer": "dave", "end_time": "2022-05-10T00:00:00Z", "queued_staking": {"amount": "50"}},
            ],
        },
    }


@pytest.fixture
def targets() -> dict[str, str]:
    return dict(TARGETS)


@pytest.fixture
def staking_reserves() -> dict[str, str]:
    return dict(STAKING_RESERVES)


@pytest.fixture
def snapshot(app_state):
    return parse_app_state(app_state)


@pytest.fixture
def pool_index(snapshot):
    return build_pool_index(
        snapshot.pools, snapshot.pairs, snapshot.balances, snapshot.supply_of
    )


@pytest.fixture
def reserve_accounts(snapshot):
    return build_reserve_account_set(
        snapshot.pools, "dust", STAKING_RESERVES.values()
    )


@pytest.fixture
def exposure_config() -> ExposureConfig:
    return ExposureConfig(
        target_denoms=dict(TARGETS),
        tracked_share_denoms=frozenset({"pool1", "pool2"}),
    )


@pytest.fixture
def genesis_file(tmp_path: Path, app_state) -> Path:
    path = tmp_path / "genesis.json"
    path.write_text(json.dumps({"chain_id": "test-1", "app_state": app_state}))
    return path


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch):
    """Keep settings from picking up a developer's config or environment."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    for key in list(os.environ):
        if key.startswith("LP_EXPOSURE_"):
            monkeypatch.delenv(key)

