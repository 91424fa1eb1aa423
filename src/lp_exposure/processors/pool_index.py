from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass

from ..amm import BasicPoolModel, new_pool
from ..domain import Pair, Pool, PoolType
from ..errors import SnapshotError, UnsupportedPoolType
from ..logger import TRACE

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PoolIndex:
    """Read-only lookup tables built once per snapshot."""

    pool_by_share_denom: dict[str, Pool]
    pair_by_id: dict[int, Pair]
    model_by_reserve_address: dict[str, BasicPoolModel]

    def underlying(self, share_denom: str) -> tuple[Pool, Pair, BasicPoolModel]:
        """Resolve a pool-share denomination to its pool, pair and reserve model."""
        pool = self.pool_by_share_denom.get(share_denom)
        if pool is None:
            raise KeyError(f"No pool issues share denom {share_denom}")
        return (
            pool,
            self.pair_by_id[pool.pair_id],
            self.model_by_reserve_address[pool.reserve_address],
        )


def build_pool_index(
    pools: Iterable[Pool],
    pairs: Iterable[Pair],
    balances: Mapping[str, Mapping[str, int]],
    supply_of: Callable[[str], int],
) -> PoolIndex:
    """Capture every pool's reserves and share supply at snapshot time.

    A reserve account missing from ``balances`` is read as holding nothing,
    so its pool converts every share into zero.

    Raises:
        SnapshotError: If a pool references an unknown pair.
        InvalidPoolState: If a pool holds reserves but has no shares issued.
    """
    pair_by_id = {pair.id: pair for pair in pairs}
    pool_by_share_denom: dict[str, Pool] = {}
    model_by_reserve_address: dict[str, BasicPoolModel] = {}

    for pool in pools:
        pair = pair_by_id.get(pool.pair_id)
        if pair is None:
            raise SnapshotError(
                f"Pool {pool.id} references unknown pair {pool.pair_id}"
            )
        pool_by_share_denom[pool.pool_coin_denom] = pool

        spendable = balances.get(pool.reserve_address, {})
        if not spendable:
            logger.debug(
                "Reserve account %s of pool %d holds no balance",
                pool.reserve_address,
                pool.id,
            )
        model = new_pool(
            spendable.get(pair.quote_coin_denom, 0),
            spendable.get(pair.base_coin_denom, 0),
            supply_of(pool.pool_coin_denom),
        )
        model_by_reserve_address[pool.reserve_address] = model
        logger.log(
            TRACE,
            "Pool %d (%s): quote=%d%s base=%d%s supply=%d",
            pool.id,
            pool.pool_coin_denom,
            model.quote_reserve,
            pair.quote_coin_denom,
            model.base_reserve,
            pair.base_coin_denom,
            model.share_supply,
        )

    logger.info(
        "Indexed %d pools across %d pairs",
        len(pool_by_share_denom),
        len(pair_by_id),
    )
    return PoolIndex(
        pool_by_share_denom=pool_by_share_denom,
        pair_by_id=pair_by_id,
        model_by_reserve_address=model_by_reserve_address,
    )


def tracked_share_denoms(
    index: PoolIndex,
    target_denoms: Iterable[str],
    explicit: Iterable[str] | None = None,
) -> list[str]:
    """Return the pool-share denominations whose holders carry target exposure.

    With ``explicit`` given, each entry must name a known basic pool. Without
    it, every basic pool whose pair contains a target denomination is tracked.

    Raises:
        SnapshotError: If an explicit denomination has no pool.
        UnsupportedPoolType: If an explicit denomination belongs to a ranged pool.
    """
    if explicit is not None:
        tracked = []
        for denom in explicit:
            pool = index.pool_by_share_denom.get(denom)
            if pool is None:
                raise SnapshotError(f"Tracked pool denom {denom} has no pool")
            if pool.pool_type is not PoolType.BASIC:
                raise UnsupportedPoolType(
                    f"Pool {pool.id} ({denom}) is a {pool.pool_type.value} pool"
                )
            tracked.append(denom)
        return tracked

    targets = set(target_denoms)
    tracked = []
    for denom, pool in index.pool_by_share_denom.items():
        if pool.pool_type is not PoolType.BASIC:
            logger.debug("Skipping %s pool %d", pool.pool_type.value, pool.id)
            continue
        pair = index.pair_by_id[pool.pair_id]
        if targets.intersection(pair.denoms):
            tracked.append(denom)
    return sorted(tracked)
