"""Snapshot loading and pool indexing."""

from __future__ import annotations

from ..processors import (
    ExposureConfig,
    build_pool_index,
    build_reserve_account_set,
    staking_reserve_addresses_of,
    tracked_share_denoms,
)
from ..snapshot import load_snapshot
from .context import PipelineContext


def load_state(ctx: PipelineContext) -> None:
    """Load the snapshot named by the settings into the context."""
    ctx.snapshot = load_snapshot(ctx.state.settings.snapshot_path_required)


def index_pools(ctx: PipelineContext) -> None:
    """Build the pool index, the reserve account set and the exposure config.

    Args:
        ctx: Pipeline context with a loaded snapshot

    Sets pool_index, reserve_accounts and exposure_config in the context.
    """
    s = ctx.state.settings
    log = ctx.state.logger
    snapshot = ctx.snapshot_required

    index = build_pool_index(
        snapshot.pools, snapshot.pairs, snapshot.balances, snapshot.supply_of
    )
    tracked = tracked_share_denoms(
        index, s.target_denoms.values(), s.pool_coin_denoms
    )
    log.info("Tracking %d pool share denoms: %s", len(tracked), ", ".join(tracked))

    tracked_denoms = set(tracked) | set(s.target_denoms.values())
    staked = {
        record.denom
        for record in (*snapshot.staking_records, *snapshot.queued_staking_records)
        if record.denom in tracked_denoms
    }
    staking_reserves = staking_reserve_addresses_of(
        staked, s.staking_reserve_addresses
    )

    ctx.pool_index = index
    ctx.reserve_accounts = build_reserve_account_set(
        snapshot.pools,
        snapshot.params.dust_collector_address,
        {*staking_reserves, *s.staking_reserve_addresses.values()},
        s.extra_reserve_addresses,
    )
    log.debug("Excluding %d reserve accounts", len(ctx.reserve_accounts))

    fee_rate = s.fee_rate(snapshot.params.withdraw_fee_rate)
    log.info("Converting pool shares with fee rate %s (%s)", fee_rate, s.fee_policy.value)
    ctx.exposure_config = ExposureConfig(
        target_denoms=dict(s.target_denoms),
        tracked_share_denoms=frozenset(tracked),
        fee_rate=fee_rate,
    )
