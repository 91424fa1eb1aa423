"""Exposure aggregation and supply reconciliation."""

from __future__ import annotations

from ..processors import aggregate_exposures, reconcile
from .context import PipelineContext


def compute_exposures(ctx: PipelineContext) -> None:
    """Aggregate per-account exposure and reconcile it against total supply."""
    snapshot = ctx.snapshot_required
    config = ctx.exposure_config_required

    ctx.exposures = aggregate_exposures(
        snapshot,
        ctx.pool_index_required,
        ctx.reserve_accounts_required,
        config,
    )
    ctx.reconciliation = reconcile(
        ctx.exposures.accounts,
        snapshot.supply_of,
        config.target_denoms,
        conversions=ctx.exposures.conversions,
        fee_withheld=ctx.exposures.fee_withheld,
    )
