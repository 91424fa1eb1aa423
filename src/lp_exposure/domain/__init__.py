"""Domain models for a parsed chain snapshot."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum


class PoolType(str, Enum):
    BASIC = "basic"
    RANGED = "ranged"


@dataclass(frozen=True)
class Pair:
    """A trading pair between a quote and a base denomination."""

    id: int
    quote_coin_denom: str
    base_coin_denom: str

    @property
    def denoms(self) -> tuple[str, str]:
        return self.quote_coin_denom, self.base_coin_denom


@dataclass(frozen=True)
class Pool:
    """A liquidity pool backed by one pair and custodied by a reserve account."""

    id: int
    pair_id: int
    reserve_address: str
    pool_coin_denom: str
    pool_type: PoolType = PoolType.BASIC


@dataclass(frozen=True)
class StakeRecord:
    """An active or queued stake of ``amount`` of ``denom`` by ``farmer``."""

    farmer: str
    denom: str
    amount: int


@dataclass(frozen=True)
class LiquidityParams:
    """Protocol parameters of the liquidity module."""

    dust_collector_address: str
    withdraw_fee_rate: Decimal = Decimal(0)


@dataclass(frozen=True)
class Snapshot:
    """Immutable chain state consumed by a single exposure pass."""

    balances: dict[str, dict[str, int]]  # address -> denom -> amount
    supply: dict[str, int]  # denom -> amount
    pairs: list[Pair]
    pools: list[Pool]
    params: LiquidityParams
    staking_records: list[StakeRecord] = field(default_factory=list)
    queued_staking_records: list[StakeRecord] = field(default_factory=list)

    def supply_of(self, denom: str) -> int:
        return self.supply.get(denom, 0)


__all__ = [
    "LiquidityParams",
    "Pair",
    "Pool",
    "PoolType",
    "Snapshot",
    "StakeRecord",
]
