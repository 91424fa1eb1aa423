"""Load an exported genesis file into a :class:`Snapshot`.

Only the bank, liquidity and farming module sections are read. Amounts are
encoded as decimal strings in the export and are converted to ints.
"""

from __future__ import annotations

import json
import logging
from decimal import Decimal
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..domain import LiquidityParams, Pair, Pool, PoolType, Snapshot, StakeRecord
from ..errors import SnapshotError

logger = logging.getLogger(__name__)


class _Model(BaseModel):
    model_config = ConfigDict(extra="ignore")


class CoinModel(_Model):
    denom: str
    amount: int


class BalanceModel(_Model):
    address: str
    coins: list[CoinModel] = Field(default_factory=list)


class BankGenesis(_Model):
    balances: list[BalanceModel] = Field(default_factory=list)
    supply: list[CoinModel] = Field(default_factory=list)


class PairModel(_Model):
    id: int
    base_coin_denom: str
    quote_coin_denom: str


class PoolModel(_Model):
    id: int
    pair_id: int
    reserve_address: str
    pool_coin_denom: str
    type: str = "POOL_TYPE_BASIC"


class LiquidityParamsModel(_Model):
    dust_collector_address: str
    withdraw_fee_rate: Decimal = Decimal(0)


class LiquidityGenesis(_Model):
    params: LiquidityParamsModel
    pairs: list[PairModel] = Field(default_factory=list)
    pools: list[PoolModel] = Field(default_factory=list)


class AmountModel(_Model):
    amount: int


class StakingRecordModel(_Model):
    staking_coin_denom: str
    farmer: str
    staking: AmountModel


class QueuedStakingRecordModel(_Model):
    staking_coin_denom: str
    farmer: str
    queued_staking: AmountModel


class FarmingGenesis(_Model):
    staking_records: list[StakingRecordModel] = Field(default_factory=list)
    queued_staking_records: list[QueuedStakingRecordModel] = Field(
        default_factory=list
    )


def _pool_type(raw: str) -> PoolType:
    if raw.upper().endswith("RANGED"):
        return PoolType.RANGED
    return PoolType.BASIC


def _merge_balances(balances: list[BalanceModel]) -> dict[str, dict[str, int]]:
    merged: dict[str, dict[str, int]] = {}
    for balance in balances:
        coins = merged.setdefault(balance.address, {})
        for coin in balance.coins:
            coins[coin.denom] = coins.get(coin.denom, 0) + coin.amount
    return merged


def parse_app_state(app_state: dict[str, Any]) -> Snapshot:
    """Convert the ``app_state`` object of a genesis export into a snapshot.

    Raises:
        SnapshotError: If a required module section is missing or invalid.
    """
    for module in ("bank", "liquidity"):
        if module not in app_state:
            raise SnapshotError(f"genesis app_state has no '{module}' section")

    try:
        bank = BankGenesis.model_validate(app_state["bank"])
        liquidity = LiquidityGenesis.model_validate(app_state["liquidity"])
        farming = FarmingGenesis.model_validate(app_state.get("farming") or {})
    except ValidationError as e:
        raise SnapshotError(f"invalid genesis state: {e}") from e

    supply: dict[str, int] = {}
    for coin in bank.supply:
        supply[coin.denom] = supply.get(coin.denom, 0) + coin.amount

    snapshot = Snapshot(
        balances=_merge_balances(bank.balances),
        supply=supply,
        pairs=[
            Pair(
                id=p.id,
                quote_coin_denom=p.quote_coin_denom,
                base_coin_denom=p.base_coin_denom,
            )
            for p in liquidity.pairs
        ],
        pools=[
            Pool(
                id=p.id,
                pair_id=p.pair_id,
                reserve_address=p.reserve_address,
                pool_coin_denom=p.pool_coin_denom,
                pool_type=_pool_type(p.type),
            )
            for p in liquidity.pools
        ],
        params=LiquidityParams(
            dust_collector_address=liquidity.params.dust_collector_address,
            withdraw_fee_rate=liquidity.params.withdraw_fee_rate,
        ),
        staking_records=[
            StakeRecord(r.farmer, r.staking_coin_denom, r.staking.amount)
            for r in farming.staking_records
        ],
        queued_staking_records=[
            StakeRecord(r.farmer, r.staking_coin_denom, r.queued_staking.amount)
            for r in farming.queued_staking_records
        ],
    )

    logger.debug(
        "Parsed snapshot: %d accounts, %d pairs, %d pools, %d stakes, %d queued stakes",
        len(snapshot.balances),
        len(snapshot.pairs),
        len(snapshot.pools),
        len(snapshot.staking_records),
        len(snapshot.queued_staking_records),
    )
    return snapshot


def load_snapshot(path: Path) -> Snapshot:
    """Read a genesis export from ``path``.

    Accepts either a full genesis document (with ``app_state``) or a bare
    app state object.
    """
    if not path.exists():
        raise SnapshotError(f"Snapshot file not found: {path}")

    logger.info("Reading snapshot from %s", path)
    with path.open("rb") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise SnapshotError(f"Snapshot {path} is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise SnapshotError(f"Snapshot {path} must contain a JSON object")

    app_state = data.get("app_state", data)
    if not isinstance(app_state, dict):
        raise SnapshotError(f"Snapshot {path} has a malformed app_state")
    return parse_app_state(app_state)
