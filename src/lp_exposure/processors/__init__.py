from __future__ import annotations

from .exposure_aggregator import (
    AccountExposure,
    ContributionSource,
    ExposureAggregator,
    ExposureConfig,
    ExposureResult,
    aggregate_exposures,
)
from .pool_index import PoolIndex, build_pool_index, tracked_share_denoms
from .reconciliation import AssetReconciliation, ReconciliationResult, reconcile
from .reserve_accounts import build_reserve_account_set, staking_reserve_addresses_of

__all__ = [
    "AccountExposure",
    "AssetReconciliation",
    "ContributionSource",
    "ExposureAggregator",
    "ExposureConfig",
    "ExposureResult",
    "PoolIndex",
    "ReconciliationResult",
    "aggregate_exposures",
    "build_pool_index",
    "build_reserve_account_set",
    "reconcile",
    "staking_reserve_addresses_of",
    "tracked_share_denoms",
]
